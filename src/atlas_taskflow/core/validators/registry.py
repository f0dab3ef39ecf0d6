# src/atlas_taskflow/core/validators/registry.py
"""
Registry de validadores do Atlas TaskFlow.

Um validador verifica o valor já convertido de um atributo. O contrato
de uma entrada é:

    validator(value, options: ValidatorOptions) -> Check

Um retorno `None` ou `True` é interpretado como aprovado; `False` como
reprovado com a mensagem genérica `faults.invalid`.

As opções declaradas no atributo (`numeric={"min": 18, "message": ...}`)
são normalizadas em `ValidatorOptions`:
    - message   → mensagem customizada (formatada com os valores da regra)
    - if_       → condição de aplicação (`if` também é aceito)
    - unless    → condição de supressão
    - allow_nil → suprime a validação quando o valor é None
    - extra     → demais chaves, específicas de cada validador

Invariantes:
    - Tag desconhecida → UnknownValidatorError
    - Valores inválidos nunca levantam exceção: retornam Check.failed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from atlas_taskflow.core.checks import Check
from atlas_taskflow.core.conditions import Condition
from atlas_taskflow.core.exceptions import AttributeDefinitionError, UnknownValidatorError
from atlas_taskflow.core.locale import translate
from atlas_taskflow.core.registry import NamedRegistry


@dataclass(frozen=True)
class ValidatorOptions:
    message: Optional[str] = None
    if_: Condition = None
    unless: Condition = None
    allow_nil: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, raw: Any) -> "ValidatorOptions":
        """
        Normaliza a declaração bruta de um validador.

        `True` ativa o validador sem opções. Um dicionário é separado em
        campos conhecidos e `extra`. Qualquer outro valor é erro de
        declaração.
        """
        if raw is True:
            return cls()
        if not isinstance(raw, Mapping):
            raise AttributeDefinitionError(
                "Validator options must be True or a dict",
                details={"received": type(raw).__name__},
            )

        options = dict(raw)
        if_ = options.pop("if_", None)
        if "if" in options:
            if_ = options.pop("if")
        return cls(
            message=options.pop("message", None),
            if_=if_,
            unless=options.pop("unless", None),
            allow_nil=bool(options.pop("allow_nil", False)),
            extra=options,
        )

    def message_for(self, *keys: str, **interpolations: Any) -> Optional[str]:
        """
        Mensagem customizada para a regra violada, se houver.

        Procura `<chave>_message` em `extra` (na ordem dada) e, por fim,
        `message`. A mensagem é formatada com `interpolations`.
        """
        for key in keys:
            custom = self.extra.get(f"{key}_message")
            if custom is not None:
                return custom.format(**interpolations)
        if self.message is not None:
            return self.message.format(**interpolations)
        return None


class ValidatorRegistry(NamedRegistry):
    unknown_error = UnknownValidatorError
    kind = "validator"

    def validate(
        self,
        tag: str,
        task: Any,
        value: Any,
        options: Optional[ValidatorOptions] = None,
    ) -> Check:
        outcome = self._call(tag, task, value, options or ValidatorOptions())
        if isinstance(outcome, Check):
            return outcome
        if outcome is None or outcome is True:
            return Check.passed(value)
        return Check.failed((options and options.message) or translate("taskflow.faults.invalid"))

# src/atlas_taskflow/core/coercions/registry.py
"""
Registry de coerções de tipo do Atlas TaskFlow.

Uma coerção converte o valor bruto de um atributo no tipo declarado
(`types="integer"`). O contrato de uma entrada é:

    coercion(value, options: CoercionOptions) -> Check

Entradas podem ser callables ou nomes de métodos da Task (invocados com
os mesmos argumentos). Por conveniência, um retorno que não seja `Check`
é interpretado como valor convertido com sucesso.

Invariantes:
    - Tag desconhecida → UnknownCoercionError
    - Falhas de conversão nunca levantam exceção: retornam Check.failed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from atlas_taskflow.core.checks import Check
from atlas_taskflow.core.exceptions import UnknownCoercionError
from atlas_taskflow.core.registry import NamedRegistry


@dataclass(frozen=True)
class CoercionOptions:
    """Opções tipadas repassadas a uma coerção."""

    format: Optional[str] = None
    precision: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, options: Optional[Mapping[str, Any]] = None) -> "CoercionOptions":
        options = dict(options or {})
        format_ = options.pop("format", None)
        return cls(
            format=format_ if isinstance(format_, str) else None,
            precision=options.pop("precision", None),
            extra=options,
        )


class CoercionRegistry(NamedRegistry):
    unknown_error = UnknownCoercionError
    kind = "coercion"

    def coerce(
        self,
        tag: str,
        task: Any,
        value: Any,
        options: Optional[CoercionOptions] = None,
    ) -> Check:
        outcome = self._call(tag, task, value, options or CoercionOptions())
        return outcome if isinstance(outcome, Check) else Check.passed(outcome)

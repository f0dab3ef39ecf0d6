# src/atlas_taskflow/core/attributes/value.py
"""
Pipeline de resolução de valores de atributos.

Para cada par (Attribute, Task), `AttributeValue.generate()` executa:

    1. short-circuit    → valor já armazenado é devolvido sem reprocessar
    2. source           → obtém o objeto de origem (context, método,
                          callable, literal ou valor do pai)
    3. required         → confere se a chave é alcançável na origem
    4. derivação        → lê o valor conforme o formato da origem
                          (mapping, callable, objeto, None) e aplica default
    5. transform        → função ou método do valor
    6. coerção          → tenta cada tipo declarado, em ordem
    7. armazenamento    → `task.attributes[method_name]`

`validate()` é chamado pelo Executor depois que toda a árvore foi gerada.

Erros nunca são levantados: cada falha registra uma mensagem em
`task.errors` (chaveada pelo `method_name`) e interrompe o pipeline
daquele atributo. Um atributo com erro não é regenerado nem validado.

Limites explícitos:
    - Não decide o fail da Task (responsabilidade do Executor)
    - Definições inválidas (tag desconhecida) levantam exceção tipada
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Tuple

from atlas_taskflow.core.coercions import CoercionOptions
from atlas_taskflow.core.conditions import evaluate, invoke, resolve
from atlas_taskflow.core.locale import translate
from atlas_taskflow.core.validators import ValidatorOptions

from .definition import Attribute, SourceKind

_ABORT = object()


class ValueShape(str, Enum):
    """Formato do objeto de origem, decidido no momento da derivação."""
    MAPPING = "mapping"
    CALLABLE = "callable"
    OBJECT = "object"
    NONE = "none"

    @classmethod
    def of(cls, source_value: Any) -> "ValueShape":
        if source_value is None:
            return cls.NONE
        if isinstance(source_value, Mapping):
            return cls.MAPPING
        if callable(source_value):
            return cls.CALLABLE
        return cls.OBJECT


class AttributeValue:
    def __init__(self, attribute: Attribute, task: Any) -> None:
        self.attribute = attribute
        self.task = task

    @property
    def method_name(self) -> str:
        return self.attribute.method_name

    @property
    def value(self) -> Any:
        return self.task.attributes.get(self.method_name)

    @property
    def is_generated(self) -> bool:
        return self.method_name in self.task.attributes

    def _error(self, message: str) -> Any:
        self.task.errors.add(self.method_name, message)
        return _ABORT

    # ------------------------------------------------------------------
    # generate
    # ------------------------------------------------------------------

    def generate(self) -> Any:
        store = self.task.attributes
        if self.method_name in store:
            return store[self.method_name]
        if self.task.errors.has(self.method_name):
            return None

        source_value = self._source_value()
        if source_value is _ABORT:
            return None

        derived = self._derive(source_value)
        if derived is _ABORT:
            return None

        transformed = self._transform(derived)
        coerced = self._coerce(transformed)
        if coerced is _ABORT:
            return None

        store[self.method_name] = coerced
        return coerced

    def _source_value(self) -> Any:
        attribute = self.attribute
        kind = attribute.source_kind

        if kind is SourceKind.PARENT:
            source_value = self.task.attribute_value(attribute.parent).generate()
            if self.task.errors.has(attribute.parent.method_name):
                return _ABORT
        elif kind is SourceKind.METHOD:
            if not hasattr(self.task, attribute.source):
                return self._error(translate("taskflow.attributes.undefined", method=attribute.source))
            source_value = invoke(self.task, attribute.source)
        elif kind is SourceKind.CALLABLE:
            source_value = attribute.source(self.task)
        else:
            source_value = attribute.source

        if attribute.is_enforced(self.task.attributes) and not self._reachable(source_value):
            return self._error(translate("taskflow.attributes.required", method=attribute.source_name))

        return source_value

    def _reachable(self, source_value: Any) -> bool:
        name = self.attribute.name
        shape = ValueShape.of(source_value)
        if shape is ValueShape.MAPPING:
            return name in source_value
        if shape is ValueShape.CALLABLE:
            return True
        if shape is ValueShape.OBJECT:
            return hasattr(source_value, name)
        return False

    def _derive(self, source_value: Any) -> Any:
        name = self.attribute.name
        shape = ValueShape.of(source_value)

        if shape is ValueShape.MAPPING:
            derived = source_value.get(name)
        elif shape is ValueShape.CALLABLE:
            derived = source_value(self.task, name)
        elif shape is ValueShape.OBJECT:
            if not hasattr(source_value, name):
                return self._error(translate("taskflow.attributes.undefined", method=name))
            derived = getattr(source_value, name)
            if callable(derived):
                derived = derived()
        else:
            derived = None

        if derived is None:
            derived = self._default()
        return derived

    def _default(self) -> Any:
        if "default" not in self.attribute.options:
            return None
        return resolve(self.task, self.attribute.options["default"])

    def _transform(self, value: Any) -> Any:
        transform = self.attribute.options.get("transform")
        if transform is None:
            return value
        if isinstance(transform, str):
            # Valores sem o método (ex.: None) seguem inalterados.
            method = getattr(value, transform, None)
            return method() if callable(method) else value
        return transform(value)

    def _coerce(self, value: Any) -> Any:
        types = self.attribute.types
        if not types:
            return value

        registry = self.task.coercion_registry()
        options = CoercionOptions.build(self.attribute.options)

        first_failure = None
        for tag in types:
            check = registry.coerce(tag, self.task, value, options)
            if check.ok:
                return check.value
            if first_failure is None:
                first_failure = check

        if len(types) == 1:
            return self._error(first_failure.message)

        labels = ", ".join(translate(f"taskflow.types.{tag}") for tag in types)
        return self._error(translate("taskflow.coercions.into_any", types=labels))

    # ------------------------------------------------------------------
    # validate
    # ------------------------------------------------------------------

    def validate(self) -> Tuple[str, ...]:
        """
        Aplica os validadores declarados ao valor armazenado.

        Retorna as mensagens registradas nesta chamada (vazia quando o
        atributo passou ou já possuía erro).
        """
        if self.task.errors.has(self.method_name):
            return ()
        # Descendentes de um ancestral ausente não são validados.
        stored = self.task.attributes
        if any(stored.get(ancestor.method_name) is None for ancestor in self.attribute.ancestors()):
            return ()

        registry = self.task.validator_registry()
        value = self.value
        messages = []

        for tag, raw in self.attribute.validator_options(registry.keys()):
            options = ValidatorOptions.build(raw)
            if options.allow_nil and value is None:
                continue
            if not evaluate(self.task, if_=options.if_, unless=options.unless):
                continue

            check = registry.validate(tag, self.task, value, options)
            if not check.ok:
                self.task.errors.add(self.method_name, check.message)
                messages.append(check.message)

        return tuple(messages)

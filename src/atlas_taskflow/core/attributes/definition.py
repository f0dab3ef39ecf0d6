# src/atlas_taskflow/core/attributes/definition.py
"""
Declaração de atributos de entrada de uma Task.

Um `Attribute` descreve, no nível da classe, como um valor de entrada é
obtido, convertido e validado. Atributos são declarados como atributos
de classe e funcionam como descritores somente leitura:

    class CreateUser(Task):
        email = required(types="string", format={"with": r"@"})
        age = optional(types="integer", numeric={"min": 18}, default=18)
        address = optional(types="hash", children=[required("city")])

        def work(self):
            self.context.user = {"email": self.email, "city": self.city}

Opções reconhecidas:
    - source     → origem do valor: "context" (default), nome de método,
                   callable recebendo a Task, ou valor literal
    - types      → tag ou lista ordenada de tags de coerção
    - default    → nome de método, callable(task) ou literal
    - transform  → nome de método do valor ou callable(valor)
    - as_ / prefix / suffix → nome do accessor na Task
    - demais chaves registradas como validadores (`numeric`, `length`...)
      e opções de coerção (`format`, `precision`)

Decisões arquiteturais:
    - O nome vem de `__set_name__` quando não é informado
    - Filhos são sempre obtidos a partir do valor resolvido do pai
    - Definições são imutáveis após a criação da classe e compartilhadas
      por todas as instâncias (e subclasses)

Limites explícitos:
    - Não resolve valores (ver `value.AttributeValue`)
    - Não conhece registries (validação de tags ocorre na execução)
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Union

from atlas_taskflow.core.exceptions import AttributeDefinitionError

DEFAULT_SOURCE = "context"

# Chaves de opções que não são validadores nem coerção.
RESERVED_OPTIONS = frozenset({"default", "transform", "as_", "prefix", "suffix", "description"})


class SourceKind(str, Enum):
    """Forma da origem do valor, decidida uma única vez na declaração."""
    PARENT = "parent"
    METHOD = "method"
    CALLABLE = "callable"
    LITERAL = "literal"


class Attribute:
    def __init__(
        self,
        name: Optional[str] = None,
        *,
        source: Any = DEFAULT_SOURCE,
        types: Union[None, str, Sequence[str]] = None,
        required: bool = False,
        children: Iterable["Attribute"] = (),
        **options: Any,
    ) -> None:
        if name is not None and (not isinstance(name, str) or not name.isidentifier()):
            raise AttributeDefinitionError(
                "Attribute name must be a valid identifier",
                details={"name": name},
            )

        self.name: Optional[str] = name
        self.parent: Optional[Attribute] = None
        self.source = source
        self.types: Tuple[str, ...] = (types,) if isinstance(types, str) else tuple(types or ())
        self.required = bool(required)
        self.options: Mapping[str, Any] = MappingProxyType(dict(options))
        self.children: Tuple[Attribute, ...] = tuple(children)

        for child in self.children:
            if not isinstance(child, Attribute):
                raise AttributeDefinitionError(
                    "Attribute children must be Attribute instances",
                    details={"received": type(child).__name__},
                )
            if child.name is None:
                raise AttributeDefinitionError("Child attributes must be declared with a name")
            if child.parent is not None:
                raise AttributeDefinitionError(
                    "Child attribute already belongs to another parent",
                    details={"name": child.name},
                )
            child.parent = self

    # ------------------------------------------------------------------
    # Descritor
    # ------------------------------------------------------------------

    def __set_name__(self, owner: type, name: str) -> None:
        if self.name is None:
            self.name = name

    def __get__(self, task: Any, owner: Optional[type] = None) -> Any:
        if task is None:
            return self
        return task.attribute_value(self).generate()

    def __set__(self, task: Any, value: Any) -> None:
        raise AttributeError(f"Attribute '{self.method_name}' is read-only")

    # ------------------------------------------------------------------
    # Derivados
    # ------------------------------------------------------------------

    @property
    def source_kind(self) -> SourceKind:
        if self.parent is not None:
            return SourceKind.PARENT
        if isinstance(self.source, str):
            return SourceKind.METHOD
        if callable(self.source):
            return SourceKind.CALLABLE
        return SourceKind.LITERAL

    @property
    def source_name(self) -> str:
        if self.parent is not None:
            return self.parent.method_name
        return self.source if isinstance(self.source, str) else "value"

    @property
    def method_name(self) -> str:
        if self.name is None:
            raise AttributeDefinitionError("Attribute has no name; declare it on a Task class")

        as_ = self.options.get("as_")
        if as_:
            return str(as_)

        prefix = self.options.get("prefix")
        suffix = self.options.get("suffix")
        prefix = f"{self.source_name}_" if prefix is True else (prefix or "")
        suffix = f"_{self.source_name}" if suffix is True else (suffix or "")
        return f"{prefix}{self.name}{suffix}"

    @property
    def description(self) -> Optional[str]:
        return self.options.get("description")

    def ancestors(self) -> Iterator["Attribute"]:
        """Pai, avô... até a raiz da árvore."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def is_enforced(self, stored: Mapping[str, Any] = MappingProxyType({})) -> bool:
        """
        Required contextual.

        Um atributo required só é exigido quando nenhum ancestral optional
        está ausente. `stored` são os valores já gerados da Task, indexados
        por `method_name`.
        """
        if not self.required:
            return False
        return all(
            ancestor.required or stored.get(ancestor.method_name) is not None
            for ancestor in self.ancestors()
        )

    def validator_options(self, known: Iterable[str]) -> Iterator[Tuple[str, Any]]:
        """Pares (tag, opções brutas) das chaves que são validadores conhecidos."""
        known = set(known)
        for key, value in self.options.items():
            if key not in known or key in RESERVED_OPTIONS or value is None or value is False:
                continue
            # `format` em string é opção de coerção (datas), não validador.
            if key == "format" and isinstance(value, str):
                continue
            yield key, value

    def walk(self) -> Iterator["Attribute"]:
        """Percorre o atributo e seus descendentes (pré-ordem)."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_h(self) -> dict:
        return {
            "name": self.name,
            "method_name": self.method_name,
            "source": self.source_name,
            "types": list(self.types),
            "required": self.required,
            "options": {k: v for k, v in self.options.items() if not callable(v)},
            "children": [child.to_h() for child in self.children],
        }

    def __repr__(self) -> str:
        return f"Attribute(name={self.name!r}, required={self.required}, types={list(self.types)!r})"


def attribute(name: Optional[str] = None, **options: Any) -> Attribute:
    return Attribute(name, **options)


def required(name: Optional[str] = None, **options: Any) -> Attribute:
    return Attribute(name, required=True, **options)


def optional(name: Optional[str] = None, **options: Any) -> Attribute:
    return Attribute(name, required=False, **options)

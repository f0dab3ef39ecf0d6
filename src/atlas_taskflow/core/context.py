# src/atlas_taskflow/core/context.py
"""
Contexto de dados compartilhado entre Tasks.

O `Context` é o meio canônico de troca de dados entre uma Task, suas
sub-Tasks e os passos de um Workflow. Ele é passado por referência:
toda Task aninhada enxerga (e pode alterar) o mesmo objeto.

Princípios fundamentais:
    - Chaves são sempre normalizadas para `str` (Enums usam `.value`)
    - Chaves ausentes são lidas como `None`, nunca levantam KeyError
    - Acesso por atributo (`ctx.user_id`) e por índice (`ctx["user_id"]`)
      são equivalentes

Limites explícitos:
    - Não é thread-safe (mutação concorrente não é suportada)
    - Não valida valores (responsabilidade dos atributos da Task)

Este módulo existe para garantir um ponto único, previsível e
rastreável de comunicação entre Tasks.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from enum import Enum
from typing import Any, Dict, Iterator, Optional


def normalize_key(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    if isinstance(key, str):
        return key
    return str(key)


class Context(MutableMapping):
    __slots__ = ("_table",)

    def __init__(self, data: Optional[Mapping] = None, **values: Any) -> None:
        object.__setattr__(self, "_table", {})
        if data is not None:
            if not isinstance(data, Mapping):
                raise TypeError(f"Context data must be a mapping, got: {type(data).__name__}")
            self.update(data)
        self.update(values)

    @classmethod
    def build(cls, value: Any = None) -> "Context":
        """
        Constrói (ou reaproveita) um Context.

        - Context → a mesma instância
        - objeto com `.context` (Task, Result) → o Context desse objeto
        - Mapping / None → novo Context
        """
        if isinstance(value, Context):
            return value
        nested = getattr(value, "context", None)
        if isinstance(nested, Context):
            return nested
        return cls(value)

    # MutableMapping ----------------------------------------------------

    def __getitem__(self, key: Any) -> Any:
        return self._table.get(normalize_key(key))

    def __setitem__(self, key: Any, value: Any) -> None:
        self._table[normalize_key(key)] = value

    def __delitem__(self, key: Any) -> None:
        del self._table[normalize_key(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, key: object) -> bool:
        return normalize_key(key) in self._table

    def get(self, key: Any, default: Any = None) -> Any:
        return self._table.get(normalize_key(key), default)

    def setdefault(self, key: Any, default: Any = None) -> Any:
        return self._table.setdefault(normalize_key(key), default)

    def pop(self, key: Any, *default: Any) -> Any:
        return self._table.pop(normalize_key(key), *default)

    # Acesso por atributo ------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return self._table.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self._table[name] = value

    def __delattr__(self, name: str) -> None:
        self._table.pop(name, None)

    # Utilitários --------------------------------------------------------

    def fetch(self, key: Any, *default: Any) -> Any:
        """Como `dict[key]`, mas com KeyError explícito quando não há default."""
        normalized = normalize_key(key)
        if normalized in self._table:
            return self._table[normalized]
        if default:
            return default[0]
        raise KeyError(normalized)

    def to_h(self) -> Dict[str, Any]:
        return dict(self._table)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Context):
            return self._table == other._table
        if isinstance(other, Mapping):
            return self._table == {normalize_key(k): v for k, v in other.items()}
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Context({self._table!r})"

# src/atlas_taskflow/core/registry.py
"""
Base comum dos registries nomeados do Atlas TaskFlow.

Coerções e validadores seguem o mesmo contrato estrutural:
    - entradas indexadas por nome (str)
    - cada entrada é um callable ou o nome de um método da Task
    - a ordem de registro é preservada
    - uma cópia independente pode ser derivada para cada classe de Task

Decisões arquiteturais:
    - Registries globais vivem no `Configuration`
    - Classes de Task registram entradas locais, sobrepostas às globais
      via `ChainMap` (a entrada local vence, a global nunca é mutada)
    - Nome desconhecido é erro de programação e levanta a exceção
      tipada da subclasse

Limites explícitos:
    - Não interpreta o retorno das entradas (responsabilidade da subclasse)
    - Não traduz mensagens
"""

from __future__ import annotations

from collections import ChainMap
from typing import Any, Callable, ClassVar, Iterator, List, Mapping, MutableMapping, Optional, Type, Union

from .exceptions import TaskflowException

Entry = Union[str, Callable[..., Any]]


class NamedRegistry:
    unknown_error: ClassVar[Type[TaskflowException]] = TaskflowException
    kind: ClassVar[str] = "entry"

    def __init__(self, entries: Optional[MutableMapping[str, Entry]] = None) -> None:
        self._entries: MutableMapping[str, Entry] = entries if entries is not None else {}

    def register(self, name: str, entry: Entry) -> "NamedRegistry":
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"{self.kind} name must be a non-empty string")
        if not (isinstance(entry, str) or callable(entry)):
            raise TypeError(f"{self.kind} must be a callable or a method name")
        self._entries[name] = entry
        return self

    def deregister(self, name: str) -> "NamedRegistry":
        self._entries.pop(name, None)
        return self

    def get(self, name: str) -> Entry:
        try:
            return self._entries[name]
        except KeyError:
            raise self.unknown_error(
                f"Unknown {self.kind}: {name}",
                details={"name": name, "known": self.keys()},
            ) from None

    def entries(self) -> Mapping[str, Entry]:
        return self._entries

    def keys(self) -> List[str]:
        return list(self._entries.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def copy(self) -> "NamedRegistry":
        return type(self)(dict(self._entries))

    def layered(self, local: Mapping[str, Entry]) -> "NamedRegistry":
        """Retorna uma visão com as entradas `local` sobrepostas às atuais."""
        if not local:
            return self
        return type(self)(ChainMap(dict(local), self._entries))

    def _call(self, name: str, task: Any, *args: Any) -> Any:
        entry = self.get(name)
        if isinstance(entry, str):
            return getattr(task, entry)(*args)
        return entry(*args)

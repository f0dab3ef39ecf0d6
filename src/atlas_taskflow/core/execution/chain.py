# src/atlas_taskflow/core/execution/chain.py
"""
Chain: registro ordenado dos Results de uma execução.

Toda Task, ao ser instanciada, anexa seu Result à Chain corrente. Tasks
aninhadas (sub-Tasks chamadas dentro de `work()` e passos de Workflows)
compartilham a mesma Chain da Task mais externa.

Decisões arquiteturais:
    - A Chain corrente vive em um `ContextVar` (isolada por thread)
    - Uma Chain explícita pode ser passada a `execute(chain=...)`
    - A Task que ativa a Chain é responsável por desativá-la ao terminar

Invariantes:
    - A Chain é append-only
    - O N-ésimo Result anexado possui índice N-1, gravado em `result.index`
    - `state`, `status`, `outcome` e `runtime` da Chain são os do
      primeiro Result (a Task mais externa)
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator, List, Optional

from atlas_taskflow.core import identifier

_current: ContextVar[Optional["Chain"]] = ContextVar("atlas_taskflow_chain", default=None)


class Chain:
    def __init__(self, id: Optional[str] = None) -> None:
        self.id: str = id or identifier.generate()
        self.results: List[Any] = []

    # ------------------------------------------------------------------
    # Chain corrente
    # ------------------------------------------------------------------

    @classmethod
    def current(cls) -> Optional["Chain"]:
        return _current.get()

    @classmethod
    def activate(cls, chain: "Chain") -> Token:
        return _current.set(chain)

    @classmethod
    def deactivate(cls, token: Token) -> None:
        _current.reset(token)

    @classmethod
    def clear(cls) -> None:
        _current.set(None)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def append(self, result: Any) -> int:
        result.index = len(self.results)
        self.results.append(result)
        return result.index

    def index(self, result: Any) -> Optional[int]:
        position = getattr(result, "index", None)
        if position is None or position >= len(self.results) or self.results[position] is not result:
            return None
        return position

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self.results))

    def __getitem__(self, position: int) -> Any:
        return self.results[position]

    @property
    def first(self) -> Any:
        return self.results[0] if self.results else None

    @property
    def last(self) -> Any:
        return self.results[-1] if self.results else None

    @property
    def state(self) -> Any:
        return self.first.state if self.first else None

    @property
    def status(self) -> Any:
        return self.first.status if self.first else None

    @property
    def outcome(self) -> Any:
        return self.first.outcome if self.first else None

    @property
    def runtime(self) -> Optional[float]:
        return self.first.runtime if self.first else None

    def to_h(self) -> Dict[str, Any]:
        return {"id": self.id, "results": [result.to_h() for result in self.results]}

    def __repr__(self) -> str:
        return f"Chain(id={self.id!r}, results={len(self.results)})"

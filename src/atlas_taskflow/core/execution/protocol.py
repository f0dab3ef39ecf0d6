# src/atlas_taskflow/core/execution/protocol.py
"""
Contrato canônico de um executável do Atlas TaskFlow.

Qualquer classe que exponha `execute` e `execute_strict` pode ser
composta em um Workflow. Task e Workflow satisfazem o protocolo; a
conformidade é verificada por duck typing (`@runtime_checkable`), sem
impor herança.

Invariantes:
    - `execute` nunca levanta halts de negócio e sempre retorna um Result
    - Ambos aceitam o Context compartilhado como primeiro argumento
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Executable(Protocol):
    def execute(self, context: Any = None, *, chain: Optional[Any] = None, **values: Any) -> Any:
        """Executa e retorna o Result, sem levantar halts."""
        ...

    def execute_strict(self, context: Any = None, *, chain: Optional[Any] = None, **values: Any) -> Any:
        """Executa e levanta Fault quando o status está nos breakpoints."""
        ...

# src/atlas_taskflow/core/execution/types.py
"""
Tipos canônicos de execução do Atlas TaskFlow.

Este módulo define os enums que padronizam os dois eixos da máquina de
estados de um Result:

    - State  → ciclo de vida da execução (initialized, executing,
               complete, interrupted)
    - Status → desfecho de negócio (success, skipped, failed)

Os valores são strings para facilitar:
    - serialização em JSON e logs
    - comparação direta (`result.status == "failed"`)
    - configuração declarativa de breakpoints em YAML

Invariantes:
    - Enums possuem valores textuais canônicos e estáveis
    - Nenhuma lógica de transição vive neste módulo (ver `result.py`)
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Tuple, Union


class State(str, Enum):
    """
    Estados do ciclo de vida de uma execução.

    Transições permitidas:
        - INITIALIZED → EXECUTING
        - EXECUTING → COMPLETE | INTERRUPTED

    COMPLETE e INTERRUPTED são terminais.
    """
    INITIALIZED = "initialized"
    EXECUTING = "executing"
    COMPLETE = "complete"
    INTERRUPTED = "interrupted"

    def __str__(self) -> str:
        return self.value


class Status(str, Enum):
    """
    Desfecho de negócio de uma execução.

    SUCCESS é o status inicial. Transições permitidas (uma única vez):
        - SUCCESS → SKIPPED
        - SUCCESS → FAILED
    """
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


DEFAULT_BREAKPOINTS: Tuple[Status, ...] = (Status.FAILED,)

BreakpointsLike = Union[None, str, Status, Iterable[Union[str, Status]]]


def normalize_breakpoints(value: BreakpointsLike) -> Optional[Tuple[Status, ...]]:
    """
    Normaliza uma declaração de breakpoints para uma tupla de Status.

    `None` significa "não declarado" e é preservado, para que o chamador
    possa cair no próximo nível de configuração. Uma coleção vazia é uma
    declaração explícita de "nenhum breakpoint".

    Raises:
        ValueError: Se algum valor não corresponder a um Status.
    """
    if value is None:
        return None
    if isinstance(value, (str, Status)):
        value = [value]

    normalized = []
    for item in value:
        status = Status(item)
        if status not in normalized:
            normalized.append(status)
    return tuple(normalized)

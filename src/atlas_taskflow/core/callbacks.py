# src/atlas_taskflow/core/callbacks.py
"""
Registry de callbacks de ciclo de vida das Tasks.

Callbacks são ganchos disparados pelo Executor em pontos fixos da
execução. Cada callback é um nome de método da Task ou um callable que
recebe a Task, opcionalmente condicionado por `if_` / `unless`.

Tipos suportados (ordem de disparo):
    - before_validation
    - before_execution
    - on_complete | on_interrupted        (conforme o state final)
    - on_executed
    - on_success | on_skipped | on_failed (conforme o status final)
    - on_good | on_bad                    (success/skipped vs. failed)

Decisões arquiteturais:
    - Callbacks globais (Configuration) disparam antes dos da classe
    - Subclasses herdam uma cópia do registry da classe pai
    - Exceções levantadas por callbacks não são engolidas

Limites explícitos:
    - Não altera o Result diretamente (callbacks podem chamar skip/fail
      apenas durante `before_*`, quando o corpo ainda não rodou)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .conditions import Condition, Reference, evaluate, invoke
from .exceptions import UnknownCallbackError

CALLBACK_TYPES: Tuple[str, ...] = (
    "before_validation",
    "before_execution",
    "on_complete",
    "on_interrupted",
    "on_executed",
    "on_success",
    "on_skipped",
    "on_failed",
    "on_good",
    "on_bad",
)


@dataclass(frozen=True)
class Callback:
    reference: Reference
    if_: Condition = None
    unless: Condition = None


class CallbackRegistry:
    def __init__(self, entries: Optional[Dict[str, List[Callback]]] = None) -> None:
        self._entries: Dict[str, List[Callback]] = entries if entries is not None else {}

    @staticmethod
    def _check_type(type_: str) -> None:
        if type_ not in CALLBACK_TYPES:
            raise UnknownCallbackError(
                f"Unknown callback type: {type_}",
                details={"type": type_, "known": list(CALLBACK_TYPES)},
            )

    def register(
        self,
        type_: str,
        *references: Reference,
        if_: Condition = None,
        unless: Condition = None,
    ) -> "CallbackRegistry":
        self._check_type(type_)
        bucket = self._entries.setdefault(type_, [])
        for reference in references:
            bucket.append(Callback(reference=reference, if_=if_, unless=unless))
        return self

    def deregister(self, type_: str, reference: Optional[Reference] = None) -> "CallbackRegistry":
        self._check_type(type_)
        if reference is None:
            self._entries.pop(type_, None)
        else:
            self._entries[type_] = [cb for cb in self._entries.get(type_, []) if cb.reference != reference]
        return self

    def get(self, type_: str) -> List[Callback]:
        self._check_type(type_)
        return list(self._entries.get(type_, []))

    def copy(self) -> "CallbackRegistry":
        return CallbackRegistry({k: list(v) for k, v in self._entries.items()})

    def invoke(self, type_: str, task: Any) -> None:
        for callback in self.get(type_):
            if evaluate(task, if_=callback.if_, unless=callback.unless):
                invoke(task, callback.reference)

# src/atlas_taskflow/core/execution/result.py
"""
Result: desfecho observável da execução de uma Task.

Um Result combina dois eixos independentes:
    - state  → ciclo de vida (initialized → executing → complete | interrupted)
    - status → desfecho de negócio (success → skipped | failed)

Transições permitidas:
    - state:  INITIALIZED → EXECUTING → COMPLETE | INTERRUPTED
    - status: SUCCESS → SKIPPED | FAILED (uma única vez, terminal)

Ligações de falha (apenas quando failed):
    - caused_failure → Result que originou a falha (self no originador)
    - threw_failure  → Result cuja falha este adotou (self no originador)

Invariantes:
    - Depois de `freeze()` (fim da execução) o Result é imutável
    - Transições ilegais levantam InvalidTransitionError e não alteram o Result
    - Repetir a mesma transição é no-op
    - Após a execução: success ⇔ complete; skipped/failed ⇒ interrupted
    - `throw` nunca sobrescreve chaves de metadata da falha original

Limites explícitos:
    - Não executa a Task (ver `executor.Executor`)
    - Não registra logs
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from atlas_taskflow.core.exceptions import InvalidTransitionError
from atlas_taskflow.core.locale import translate

from .fault import Fault
from .types import State, Status


class Result:
    def __init__(self, task: Any) -> None:
        self._frozen = False
        self.task = task
        self.index: Optional[int] = None
        self.state: State = State.INITIALIZED
        self.status: Status = Status.SUCCESS
        self.metadata: Mapping[str, Any] = {}
        self.cause: Optional[BaseException] = None
        self.caused_failure: Optional["Result"] = None
        self.threw_failure: Optional["Result"] = None
        self.runtime: Optional[float] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise self._illegal(f"cannot set {name} on a frozen result")
        super().__setattr__(name, value)

    def freeze(self) -> None:
        """Torna o Result imutável; chamado pelo Executor ao final da execução."""
        if self._frozen:
            return
        self.metadata = MappingProxyType(dict(self.metadata))
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Delegações
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def context(self) -> Any:
        return self.task.context

    @property
    def chain(self) -> Any:
        return self.task.chain

    @property
    def reason(self) -> Optional[str]:
        return self.metadata.get("reason")

    # ------------------------------------------------------------------
    # Predicados
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self.state == State.INITIALIZED

    @property
    def is_executing(self) -> bool:
        return self.state == State.EXECUTING

    @property
    def is_complete(self) -> bool:
        return self.state == State.COMPLETE

    @property
    def is_interrupted(self) -> bool:
        return self.state == State.INTERRUPTED

    @property
    def is_executed(self) -> bool:
        return self.is_complete or self.is_interrupted

    @property
    def is_success(self) -> bool:
        return self.status == Status.SUCCESS

    @property
    def is_skipped(self) -> bool:
        return self.status == Status.SKIPPED

    @property
    def is_failed(self) -> bool:
        return self.status == Status.FAILED

    @property
    def is_good(self) -> bool:
        return not self.is_failed

    @property
    def is_bad(self) -> bool:
        return not self.is_success

    @property
    def is_caused_failure(self) -> bool:
        return self.is_failed and self.caused_failure is self

    @property
    def is_threw_failure(self) -> bool:
        return self.is_failed and self.threw_failure is self

    @property
    def is_thrown_failure(self) -> bool:
        return self.is_failed and not self.is_caused_failure

    @property
    def outcome(self) -> str:
        if self.is_initialized or self.is_thrown_failure:
            return self.state.value
        return self.status.value

    def handle(self, outcome: str, callback: Callable[["Result"], Any]) -> "Result":
        """
        Invoca `callback(self)` quando o predicado `is_<outcome>` é verdadeiro.

        Aceita qualquer state, status, `executed`, `good` ou `bad`.
        Retorna o próprio Result para encadear chamadas.
        """
        predicate = getattr(self, f"is_{outcome}", None)
        if not isinstance(predicate, bool):
            raise ValueError(f"Unknown outcome: {outcome}")
        if predicate:
            callback(self)
        return self

    # ------------------------------------------------------------------
    # Transições de state
    # ------------------------------------------------------------------

    def _illegal(self, message: str, **details: Any) -> InvalidTransitionError:
        return InvalidTransitionError(
            message,
            details={"task": self.task.__class__.__name__, "state": self.state.value,
                     "status": self.status.value, **details},
        )

    def mark_executing(self) -> None:
        if self.is_executing:
            return
        if not self.is_initialized:
            raise self._illegal(f"can only transition to {State.EXECUTING} from {State.INITIALIZED}")
        self.state = State.EXECUTING

    def mark_complete(self) -> None:
        if self.is_complete:
            return
        if not self.is_executing:
            raise self._illegal(f"can only transition to {State.COMPLETE} from {State.EXECUTING}")
        if not self.is_success:
            raise self._illegal(f"cannot transition to {State.COMPLETE} with status {self.status}")
        self.state = State.COMPLETE

    def mark_interrupted(self) -> None:
        if self.is_interrupted:
            return
        if not self.is_executing:
            raise self._illegal(f"can only transition to {State.INTERRUPTED} from {State.EXECUTING}")
        self.state = State.INTERRUPTED

    def mark_executed(self) -> None:
        if self.is_success:
            self.mark_complete()
        else:
            self.mark_interrupted()

    # ------------------------------------------------------------------
    # Transições de status
    # ------------------------------------------------------------------

    def _halt(self, status: Status, reason: Optional[str], cause: Optional[BaseException],
              metadata: Dict[str, Any]) -> bool:
        if self.status == status:
            return False
        if not self.is_success:
            raise self._illegal(f"can only transition to {status} from {Status.SUCCESS}")
        if self.is_executed:
            raise self._illegal(f"cannot transition to {status} after execution")

        self.status = status
        # Chaves anotadas antes do halt (ex.: correlation_id) são mantidas.
        self.metadata = {
            **self.metadata,
            "reason": reason or translate("taskflow.faults.unspecified"),
            **metadata,
        }
        if cause is not None:
            self.cause = cause
        return True

    def skip(self, reason: Optional[str] = None, *, halt: bool = True,
             cause: Optional[BaseException] = None, **metadata: Any) -> None:
        if self._halt(Status.SKIPPED, reason, cause, metadata) and halt:
            raise Fault.build(self)

    def fail(self, reason: Optional[str] = None, *, halt: bool = True,
             cause: Optional[BaseException] = None, **metadata: Any) -> None:
        if not self._halt(Status.FAILED, reason, cause, metadata):
            return
        self.caused_failure = self
        self.threw_failure = self
        if halt:
            raise Fault.build(self)

    def throw(self, other: "Result", *, halt: bool = True, **metadata: Any) -> None:
        """
        Adota o desfecho não-success de outro Result.

        Metadata local é mesclada sem sobrescrever as chaves da falha
        original. Um Result success é ignorado (no-op).
        """
        if not isinstance(other, Result):
            raise TypeError("must be a Result")
        if other.is_success:
            return

        merged = {**metadata, **other.metadata}
        reason = merged.pop("reason", None)
        if not self._halt(other.status, reason, other.cause, merged):
            return

        if other.is_failed:
            self.caused_failure = other.caused_failure or other
            self.threw_failure = other
        if halt:
            raise Fault.build(self)

    # ------------------------------------------------------------------
    # Serialização
    # ------------------------------------------------------------------

    def _summary(self) -> Dict[str, Any]:
        task = self.task
        return {
            "index": self.index,
            "chain_id": self.chain.id,
            "type": "Workflow" if getattr(task, "workflow_class", None) else "Task",
            "class": task.__class__.__name__,
            "id": self.id,
            "tags": list(getattr(task, "tags", ()) or ()),
            "state": self.state.value,
            "status": self.status.value,
            "outcome": self.outcome,
            "metadata": dict(self.metadata),
            "runtime": self.runtime,
        }

    def to_h(self) -> Dict[str, Any]:
        data = self._summary()
        if self.is_failed:
            data["caused_failure"] = self.caused_failure._summary() if self.caused_failure else None
            data["threw_failure"] = self.threw_failure._summary() if self.threw_failure else None
        return data

    def __repr__(self) -> str:
        return (
            f"Result(task={self.task.__class__.__name__}, state={self.state.value}, "
            f"status={self.status.value})"
        )

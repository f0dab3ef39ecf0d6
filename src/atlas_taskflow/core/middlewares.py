# src/atlas_taskflow/core/middlewares.py
"""
Middlewares de execução de Tasks.

Um middleware envolve a execução de uma Task (validação + `work()` +
callbacks) e tem o contrato:

    middleware(task, call_next) -> Result

`call_next()` (sem argumentos) executa o próximo middleware ou, no fim
da pilha, o núcleo do Executor. O primeiro middleware registrado é o
mais externo.

Middlewares embutidos:
    - Correlate → propaga um correlation id por todas as Tasks aninhadas
      e o grava em `result.metadata["correlation_id"]`
    - Timeout   → falha a Task quando a execução excede um limite em
      segundos (SIGALRM; apenas na thread principal em POSIX)

Limites explícitos:
    - Retries não são oferecidos
    - O log do Result ocorre depois de todos os middlewares
"""

from __future__ import annotations

import signal
import threading
import time
from contextvars import ContextVar
from typing import Any, Callable, List, Optional, Union

from . import identifier
from .conditions import resolve
from .exceptions import TaskflowException
from .locale import translate

Middleware = Callable[[Any, Callable[[], Any]], Any]

_correlation_id: ContextVar[Optional[str]] = ContextVar("atlas_taskflow_correlation_id", default=None)


def current_correlation_id() -> Optional[str]:
    return _correlation_id.get()


class Correlate:
    """
    Atribui um correlation id à execução.

    Precedência do id:
        1. `id` explícito (string ou callable recebendo a Task)
        2. correlation id ambiente (Task externa em andamento)
        3. novo identificador
    """

    def __init__(self, id: Union[None, str, Callable[[Any], str]] = None) -> None:
        self.id = id

    def _resolve(self, task: Any) -> str:
        if callable(self.id):
            return str(self.id(task))
        if self.id is not None:
            return self.id
        return current_correlation_id() or identifier.generate()

    def __call__(self, task: Any, call_next: Callable[[], Any]) -> Any:
        correlation_id = self._resolve(task)
        # Anotado antes da execução; um halt com correlation_id próprio prevalece.
        task.result.metadata.setdefault("correlation_id", correlation_id)
        token = _correlation_id.set(correlation_id)
        try:
            return call_next()
        finally:
            _correlation_id.reset(token)


class Timeout:
    """
    Limita o tempo de execução de uma Task.

    `seconds` aceita número, nome de método ou callable recebendo a Task
    (default: 3). Ao expirar, o Result ainda em execução falha com o
    motivo traduzido `taskflow.faults.timeout` e metadata `limit`; o
    `work()` é interrompido no ponto em que estiver.

    Timers aninhados são suportados: o timer anterior é restaurado com o
    tempo restante ao final.
    """

    DEFAULT_LIMIT = 3

    def __init__(self, seconds: Union[None, float, str, Callable[[Any], float]] = None) -> None:
        self.seconds = seconds

    def _limit(self, task: Any) -> float:
        if self.seconds is None:
            return float(self.DEFAULT_LIMIT)
        return float(resolve(task, self.seconds))

    def __call__(self, task: Any, call_next: Callable[[], Any]) -> Any:
        if not hasattr(signal, "setitimer") or threading.current_thread() is not threading.main_thread():
            raise TaskflowException(
                "Timeout middleware requires the main thread on a POSIX platform",
                details={"task": task.__class__.__name__},
            )

        limit = self._limit(task)
        result = task.result

        def expire(signum: int, frame: Any) -> None:
            if result.is_executing and result.is_success:
                result.fail(translate("taskflow.faults.timeout", limit=limit), limit=limit)

        previous_handler = signal.signal(signal.SIGALRM, expire)
        previous_delay, _ = signal.setitimer(signal.ITIMER_REAL, limit)
        started = time.monotonic()
        try:
            return call_next()
        finally:
            signal.setitimer(signal.ITIMER_REAL, 0)
            signal.signal(signal.SIGALRM, previous_handler or signal.SIG_DFL)
            if previous_delay:
                remaining = previous_delay - (time.monotonic() - started)
                signal.setitimer(signal.ITIMER_REAL, max(remaining, 0.001))


class MiddlewareRegistry:
    def __init__(self, entries: Optional[List[Middleware]] = None) -> None:
        self._entries: List[Middleware] = list(entries or [])

    def register(self, middleware: Middleware) -> "MiddlewareRegistry":
        if not callable(middleware):
            raise TypeError("middleware must be callable")
        self._entries.append(middleware)
        return self

    def deregister(self, middleware: Middleware) -> "MiddlewareRegistry":
        self._entries = [m for m in self._entries if m is not middleware]
        return self

    def __iter__(self):
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def copy(self) -> "MiddlewareRegistry":
        return MiddlewareRegistry(self._entries)

    def call(self, task: Any, core: Callable[[], Any], *, outer: Optional["MiddlewareRegistry"] = None) -> Any:
        """Executa `core` envolvido pelos middlewares (`outer` primeiro)."""
        stack = list(outer or []) + self._entries

        def dispatch(index: int) -> Any:
            if index == len(stack):
                return core()
            return stack[index](task, lambda: dispatch(index + 1))

        return dispatch(0)

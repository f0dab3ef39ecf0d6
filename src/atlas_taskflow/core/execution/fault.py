# src/atlas_taskflow/core/execution/fault.py
"""
Faults: halts de negócio em forma de exceção.

Chamar `skip()` / `fail()` / `throw()` dentro de `work()` interrompe o
corpo imediatamente levantando um `Fault`. O Executor captura o Fault
na fronteira da Task, de modo que `execute()` nunca o propaga.

`execute_strict()` levanta o Fault correspondente após a execução
quando o status final está nos breakpoints da Task:
    - SkipFault → status skipped
    - FailFault → status failed

Um Fault levantado por uma sub-Task (via `execute_strict`) e não tratado
dentro de `work()` é adotado pela Task externa com a semântica de `throw`.

Matchers para cláusulas `except`:

    try:
        Checkout.execute_strict(order_id=1)
    except FailFault.for_(ChargeCard, ReserveStock) as fault:
        ...
    except Fault.matches(lambda fault: fault.context.retryable):
        ...

`except` compara classes reais; por isso o matcher devolve a classe do
Fault em tratamento (`sys.exc_info()`) quando o predicado é satisfeito,
e uma subclasse nunca levantada caso contrário. Fora de uma cláusula
`except` nada é casado.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, Dict, Type

from atlas_taskflow.core.locale import translate

from .types import Status


class Fault(Exception):
    def __init__(self, result: Any) -> None:
        self.result = result
        super().__init__(result.metadata.get("reason") or translate("taskflow.faults.unspecified"))

    @property
    def task(self) -> Any:
        return self.result.task

    @property
    def context(self) -> Any:
        return self.result.context

    @property
    def chain(self) -> Any:
        return self.result.chain

    @staticmethod
    def build(result: Any) -> "Fault":
        if result.status == Status.SKIPPED:
            return SkipFault(result)
        if result.status == Status.FAILED:
            return FailFault(result)
        raise ValueError(f"Cannot build a fault for status: {result.status}")

    @classmethod
    def matches(cls, predicate: Callable[["Fault"], bool]) -> Type["Fault"]:
        current = sys.exc_info()[1]
        if isinstance(current, cls) and predicate(current):
            return type(current)
        return _unmatched(cls)

    @classmethod
    def for_(cls, *task_classes: type) -> Type["Fault"]:
        """Casa Faults cuja Task (ou Workflow) é instância de uma das classes informadas."""

        def is_for(fault: Fault) -> bool:
            workflow_class = getattr(fault.task, "workflow_class", None)
            if workflow_class is not None and issubclass(workflow_class, task_classes):
                return True
            return isinstance(fault.task, task_classes)

        return cls.matches(is_for)


class SkipFault(Fault):
    """Result interrompido com status skipped."""


class FailFault(Fault):
    """Result interrompido com status failed."""


_UNMATCHED: Dict[type, Type[Fault]] = {}


def _unmatched(cls: Type[Fault]) -> Type[Fault]:
    if cls not in _UNMATCHED:
        _UNMATCHED[cls] = type(f"Unmatched{cls.__name__}", (cls,), {})
    return _UNMATCHED[cls]

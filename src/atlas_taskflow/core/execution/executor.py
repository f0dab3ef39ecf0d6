# src/atlas_taskflow/core/execution/executor.py
"""
Executor canônico de Tasks do Atlas TaskFlow.

Ordem de execução (para cada Task):
    1. ativa a Chain da Task (quando ainda não é a corrente)
    2. middlewares globais e da classe envolvem os passos 3–10
    3. result → executing
    4. callbacks `before_validation`
    5. gera todos os atributos (árvore completa)
    6. valida todos os atributos
    7. com erros: fail automático (sem chamar `work()`)
    8. callbacks `before_execution` e `work()`
    9. result → complete | interrupted (+ runtime)
   10. callbacks de state/status
   11. log INFO com `result.to_h()`
   12. congela o Result (`freeze`)
   13. desativa a Chain se foi esta Task que a ativou
   14. (strict) levanta Fault conforme breakpoints; a exceção original
       só é relançada pela Task que a originou

Tratamento de erros:
    - Fault da própria Task → halt já registrado no Result
    - Fault de outra Task (execute_strict aninhado) → adotado via `throw`
    - Fault de uma Task externa ainda em execução → adotado e relançado
      após a finalização desta Task
    - Erros de definição (TaskflowException) → propagam
    - Qualquer outra exceção → fail com reason "[Classe] mensagem",
      metadata `error` (ErrorPayload) e `result.cause`
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from atlas_taskflow.core.config.settings import get_configuration
from atlas_taskflow.core.errors import attribute_validation_error, task_execution_error
from atlas_taskflow.core.exceptions import TaskflowException
from atlas_taskflow.core.traceability.logger import get_logger

from .chain import Chain
from .fault import Fault
from .result import Result


class Executor:
    def __init__(self, task: Any, *, strict: bool = False) -> None:
        self.task = task
        self.strict = strict
        self.interrupt: Optional[Fault] = None

    @classmethod
    def execute(cls, task: Any, *, strict: bool = False) -> Result:
        return cls(task, strict=strict).run()

    def run(self) -> Result:
        task = self.task
        config = get_configuration()

        token = None
        if Chain.current() is not task.chain:
            token = Chain.activate(task.chain)

        try:
            result = type(task).middlewares.call(task, self._core, outer=config.middlewares)
            self._log(result)
            task.result.freeze()
        finally:
            if token is not None:
                Chain.deactivate(token)

        if self.interrupt is not None:
            raise self.interrupt
        if self.strict:
            self._raise_for_breakpoints(result)
        return result

    # ------------------------------------------------------------------
    # Núcleo
    # ------------------------------------------------------------------

    def _core(self) -> Result:
        task = self.task
        result = task.result
        started = time.monotonic()

        try:
            result.mark_executing()
            self._callbacks("before_validation")
            self._resolve_attributes()
            if result.is_success:
                self._callbacks("before_execution")
                task.work()
        except Fault as fault:
            if fault.result is not result:
                result.throw(fault.result, halt=False)
                # Halt de uma Task externa ainda em execução (ex.: Timeout) continua subindo.
                if fault.result.is_executing:
                    self.interrupt = fault
        except TaskflowException:
            raise
        except Exception as exc:
            result.fail(
                f"[{exc.__class__.__name__}] {exc}",
                halt=False,
                cause=exc,
                error=task_execution_error(task=task.__class__.__name__, exc=exc).to_dict(),
            )

        result.mark_executed()
        result.runtime = time.monotonic() - started
        self._post_callbacks(result)
        return result

    def _resolve_attributes(self) -> None:
        task = self.task
        task.resolve_attributes()
        if task.errors.is_empty():
            return

        messages = task.errors.to_h()
        task.result.fail(
            task.errors.full_message,
            halt=False,
            errors={"full_message": task.errors.full_message, "messages": messages},
            error=attribute_validation_error(task=task.__class__.__name__, messages=messages).to_dict(),
        )

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def _callbacks(self, type_: str) -> None:
        get_configuration().callbacks.invoke(type_, self.task)
        type(self.task).callbacks.invoke(type_, self.task)

    def _post_callbacks(self, result: Result) -> None:
        self._callbacks(f"on_{result.state.value}")
        self._callbacks("on_executed")
        self._callbacks(f"on_{result.status.value}")
        if result.is_good:
            self._callbacks("on_good")
        if result.is_bad:
            self._callbacks("on_bad")

    # ------------------------------------------------------------------
    # Log e breakpoints
    # ------------------------------------------------------------------

    def _log(self, result: Result) -> None:
        logger = get_logger()
        if logger.isEnabledFor(logging.INFO):
            logger.info(result.to_h())

    def _raise_for_breakpoints(self, result: Result) -> None:
        breakpoints = type(self.task).effective_breakpoints()
        if result.status not in breakpoints:
            return

        cause = result.cause
        # Falhas adotadas via `throw` levantam FailFault, não a exceção da sub-Task.
        if result.is_caused_failure and cause is not None and not isinstance(cause, Fault):
            raise cause
        raise Fault.build(result)

"""
Atlas TaskFlow: Canonical Error Structures (v1)

Este módulo define o payload canônico de erro anexado aos metadados de
um Result quando a execução de uma Task é interrompida por falha de
atributos ou por exceção inesperada no `work()`.

Erros são:

- explícitos
- serializáveis
- rastreáveis

Nenhum stack trace é embutido no payload: a exceção original fica
disponível em `result.cause`.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do Atlas TaskFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao desenvolvedor (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

TASK_EXECUTION_ERROR = "TASK_EXECUTION_ERROR"
ATTRIBUTE_VALIDATION_ERROR = "ATTRIBUTE_VALIDATION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def task_execution_error(
    *,
    task: str,
    exc: BaseException,
    hint: str = "Inspect result.cause for the original exception. No fallback is applied automatically.",
) -> ErrorPayload:
    return ErrorPayload(
        type=TASK_EXECUTION_ERROR,
        message=str(exc) or exc.__class__.__name__,
        details={
            "task": task,
            "exception_class": exc.__class__.__name__,
            "exception_module": exc.__class__.__module__,
        },
        hint=hint,
    )


def attribute_validation_error(
    *,
    task: str,
    messages: Dict[str, List[str]],
    hint: str = "Fix the input values or relax the attribute declaration.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ATTRIBUTE_VALIDATION_ERROR,
        message="Invalid attributes",
        details={
            "task": task,
            "attributes": sorted(messages),
        },
        hint=hint,
    )

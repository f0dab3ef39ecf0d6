"""
Atlas TaskFlow: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Atlas TaskFlow.

Objetivo:
- Sinalizar erros de programação (definição de Tasks, registries, transições)
- Separar erros de definição de halts de negócio (skip/fail)
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Erros de atributo (required, coerção, validação) NÃO são exceções:
  são acumulados em `Errors` e convertidos em `fail` antes do `work()`.
- Faults (SkipFault/FailFault) vivem em `core.execution.fault`, pois
  carregam referências ao Result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class TaskflowException(Exception):
    """Base class para exceções internas do Atlas TaskFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Definição de Tasks
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class AttributeDefinitionError(TaskflowException):
    """Declaração de atributo inválida ou conflitante na classe da Task."""


@dataclass(eq=False)
class UndefinedWorkError(TaskflowException):
    """A Task não implementa `work()`."""


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UnknownCoercionError(TaskflowException):
    """Tipo de coerção não registrado."""


@dataclass(eq=False)
class UnknownValidatorError(TaskflowException):
    """Validador não registrado."""


@dataclass(eq=False)
class UnknownCallbackError(TaskflowException):
    """Tipo de callback desconhecido."""


# ---------------------------------------------------------------------------
# Máquina de estados
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class InvalidTransitionError(TaskflowException):
    """Transição de state/status proibida em um Result."""

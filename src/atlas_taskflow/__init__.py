# src/atlas_taskflow/__init__.py
"""
Atlas TaskFlow: framework de composição de lógica de negócio.

Este pacote raiz define o namespace público do Atlas TaskFlow: Tasks com
atributos tipados e validados, um Result com máquina de estados
state × status, e Workflows que compõem Tasks sobre um Context
compartilhado.

Arquitetura em alto nível:
    - core.attributes   → declaração e pipeline de valores de atributos
    - core.execution    → Result, Chain, Executor, Task e Workflow
    - core.config       → Configuration global e loader YAML/JSON
    - core.traceability → serialização e logging de Results

Limites explícitos:
    - Não executa Tasks automaticamente
    - Não contém lógica de negócio
"""

from .core.attributes import Attribute, Errors, attribute, optional, required
from .core.checks import Check
from .core.config import Configuration, configure, configure_from_files, get_configuration, reset_configuration
from .core.context import Context
from .core.exceptions import (
    AttributeDefinitionError,
    InvalidTransitionError,
    TaskflowException,
    UndefinedWorkError,
    UnknownCallbackError,
    UnknownCoercionError,
    UnknownValidatorError,
)
from .core.execution.chain import Chain
from .core.execution.fault import FailFault, Fault, SkipFault
from .core.execution.protocol import Executable
from .core.execution.result import Result
from .core.execution.task import Task
from .core.execution.types import State, Status
from .core.execution.workflow import Workflow
from .core.middlewares import Correlate, Timeout
from .core.traceability import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "Attribute",
    "AttributeDefinitionError",
    "Chain",
    "Check",
    "Configuration",
    "Context",
    "Correlate",
    "Errors",
    "Executable",
    "FailFault",
    "Fault",
    "InvalidTransitionError",
    "Result",
    "SkipFault",
    "State",
    "Status",
    "Task",
    "TaskflowException",
    "Timeout",
    "UndefinedWorkError",
    "UnknownCallbackError",
    "UnknownCoercionError",
    "UnknownValidatorError",
    "Workflow",
    "attribute",
    "configure",
    "configure_from_files",
    "configure_logging",
    "get_configuration",
    "get_logger",
    "optional",
    "required",
    "reset_configuration",
]

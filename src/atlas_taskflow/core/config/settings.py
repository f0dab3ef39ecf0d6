# src/atlas_taskflow/core/config/settings.py
"""
Configuração global (runtime) do Atlas TaskFlow.

O `Configuration` concentra os defaults consultados por todas as Tasks:
    - breakpoints de `execute_strict` e de Workflows
    - locale / tradutor das mensagens
    - parâmetros de logging
    - registries globais (coerções, validadores, callbacks, middlewares)

Política de resolução:
    1. Declaração na classe (Task / Workflow / grupo)
    2. Configuration global
    3. Defaults canônicos deste módulo

A configuração pode ser aplicada em código (`configure(**changes)`) ou a
partir de arquivos YAML/JSON (`configure_from_files`), reaproveitando o
loader e o deep-merge da camada de config. Nos arquivos, apenas a seção
`taskflow:` é lida.

Invariantes:
    - Chaves desconhecidas nunca são ignoradas (UnknownConfigKeyError)
    - Breakpoints são sempre armazenados como tupla de Status
    - `reset_configuration()` restaura exatamente os defaults

Limites explícitos:
    - Não anexa handlers de log (ver `traceability.logger.configure_logging`)
    - Registries não podem ser definidos via arquivo (apenas em código)
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Optional, Tuple

from atlas_taskflow.core.callbacks import CallbackRegistry
from atlas_taskflow.core.coercions import CoercionRegistry, default_coercions
from atlas_taskflow.core.execution.types import DEFAULT_BREAKPOINTS, Status, normalize_breakpoints
from atlas_taskflow.core.middlewares import MiddlewareRegistry
from atlas_taskflow.core.validators import ValidatorRegistry, default_validators

from .errors import InvalidConfigRootTypeError, UnknownConfigKeyError
from .loader import PathLike, load_config

LOG_FORMATS = ("json", "key_value", "line")
FILE_KEYS = (
    "task_breakpoints",
    "workflow_breakpoints",
    "locale",
    "logger_name",
    "log_level",
    "log_format",
)
SECTION = "taskflow"


@dataclass
class Configuration:
    task_breakpoints: Tuple[Status, ...] = DEFAULT_BREAKPOINTS
    workflow_breakpoints: Tuple[Status, ...] = DEFAULT_BREAKPOINTS
    locale: str = "en"
    translator: Optional[Callable[..., str]] = None
    logger_name: str = "atlas_taskflow"
    log_level: str = "INFO"
    log_format: str = "json"
    coercions: CoercionRegistry = field(default_factory=default_coercions)
    validators: ValidatorRegistry = field(default_factory=default_validators)
    callbacks: CallbackRegistry = field(default_factory=CallbackRegistry)
    middlewares: MiddlewareRegistry = field(default_factory=MiddlewareRegistry)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot serializável dos campos escalares."""
        return {
            "task_breakpoints": [str(s) for s in self.task_breakpoints],
            "workflow_breakpoints": [str(s) for s in self.workflow_breakpoints],
            "locale": self.locale,
            "logger_name": self.logger_name,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


_configuration = Configuration()


def get_configuration() -> Configuration:
    return _configuration


def reset_configuration() -> Configuration:
    global _configuration
    _configuration = Configuration()
    return _configuration


def _normalize(key: str, value: Any) -> Any:
    if key in ("task_breakpoints", "workflow_breakpoints"):
        normalized = normalize_breakpoints(value)
        return () if normalized is None else normalized
    if key == "log_format" and value not in LOG_FORMATS:
        raise ValueError(f"log_format must be one of {LOG_FORMATS}, got: {value!r}")
    if key == "log_level":
        return str(value).upper()
    return value


def configure(**changes: Any) -> Configuration:
    """
    Aplica alterações sobre a configuração global.

    Raises:
        UnknownConfigKeyError: Se alguma chave não for um campo do Configuration.
        ValueError: Se um breakpoint ou formato de log for inválido.
    """
    known = {f.name for f in fields(Configuration)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise UnknownConfigKeyError(f"Unknown configuration keys: {', '.join(unknown)}")

    normalized = {key: _normalize(key, value) for key, value in changes.items()}
    for key, value in normalized.items():
        setattr(_configuration, key, value)
    return _configuration


def configure_from_files(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Configuration:
    """
    Carrega defaults (+ overrides locais) e aplica a seção `taskflow`.

    Raises:
        DefaultsNotFoundError, UnsupportedConfigFormatError,
        InvalidConfigRootTypeError, ConfigTypeConflictError,
        UnknownConfigKeyError
    """
    data = load_config(defaults_path=defaults_path, local_path=local_path)
    section = data.get(SECTION, {})
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise InvalidConfigRootTypeError(
            f"Config section '{SECTION}' must be a dict, got: {type(section).__name__}"
        )

    unknown = sorted(set(section) - set(FILE_KEYS))
    if unknown:
        raise UnknownConfigKeyError(f"Unknown configuration keys in '{SECTION}': {', '.join(unknown)}")

    return configure(**section)

# src/atlas_taskflow/core/config/__init__.py

"""
Camada de configuração do Atlas TaskFlow.

Este pacote reúne:
    - loader  → leitura de arquivos YAML/JSON (defaults + overrides locais)
    - merge   → deep-merge determinístico
    - settings → Configuration global consultado pelas Tasks

A configuração no Atlas TaskFlow é:
    - declarativa
    - determinística
    - explícita (chaves desconhecidas são erro)

Limites explícitos:
    - Não executa Tasks
    - Não contém lógica de negócio
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnknownConfigKeyError,
    UnsupportedConfigFormatError,
)
from .loader import load_config, load_file
from .merge import deep_merge
from .settings import (
    Configuration,
    configure,
    configure_from_files,
    get_configuration,
    reset_configuration,
)

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "Configuration",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnknownConfigKeyError",
    "UnsupportedConfigFormatError",
    "configure",
    "configure_from_files",
    "deep_merge",
    "get_configuration",
    "load_config",
    "load_file",
    "reset_configuration",
]

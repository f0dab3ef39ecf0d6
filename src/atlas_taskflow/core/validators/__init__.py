# src/atlas_taskflow/core/validators/__init__.py
from .builtin import BUILTIN_VALIDATORS, is_present
from .registry import ValidatorOptions, ValidatorRegistry


def default_validators() -> ValidatorRegistry:
    """Registry novo contendo apenas os validadores embutidos."""
    return ValidatorRegistry(dict(BUILTIN_VALIDATORS))


__all__ = [
    "BUILTIN_VALIDATORS",
    "ValidatorOptions",
    "ValidatorRegistry",
    "default_validators",
    "is_present",
]

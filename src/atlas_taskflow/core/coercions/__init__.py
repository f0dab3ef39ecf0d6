# src/atlas_taskflow/core/coercions/__init__.py
from .builtin import BUILTIN_COERCIONS, coercion_failure
from .registry import CoercionOptions, CoercionRegistry


def default_coercions() -> CoercionRegistry:
    """Registry novo contendo apenas as coerções embutidas."""
    return CoercionRegistry(dict(BUILTIN_COERCIONS))


__all__ = [
    "BUILTIN_COERCIONS",
    "CoercionOptions",
    "CoercionRegistry",
    "coercion_failure",
    "default_coercions",
]

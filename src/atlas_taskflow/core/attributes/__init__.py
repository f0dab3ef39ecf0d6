# src/atlas_taskflow/core/attributes/__init__.py
from .definition import Attribute, SourceKind, attribute, optional, required
from .errors import Errors
from .value import AttributeValue, ValueShape

__all__ = [
    "Attribute",
    "AttributeValue",
    "Errors",
    "SourceKind",
    "ValueShape",
    "attribute",
    "optional",
    "required",
]

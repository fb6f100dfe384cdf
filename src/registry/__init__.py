"""
Component Registry
Type catalog, property schemas and export templates.
"""

from .types import (
    WILDCARD,
    ComponentDefinition,
    Conditional,
    PropGroup,
    PropKind,
    PropertySchema,
    SelectOption,
    Severity,
    Target,
)
from .registry import ComponentRegistry, default_registry
from .validation import (
    PropertyIssue,
    apply_defaults,
    has_errors,
    is_visible,
    validate_property,
    validate_props,
    visible_properties,
)

__all__ = [
    "WILDCARD",
    "ComponentDefinition",
    "Conditional",
    "PropGroup",
    "PropKind",
    "PropertySchema",
    "SelectOption",
    "Severity",
    "Target",
    "ComponentRegistry",
    "default_registry",
    "PropertyIssue",
    "apply_defaults",
    "has_errors",
    "is_visible",
    "validate_property",
    "validate_props",
    "visible_properties",
]

"""Property validation against a component's schema.

Issues are advisory: every property is checked and nothing here blocks an
edit. The property editor surfaces them next to the offending field.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping

from .types import ComponentDefinition, PropKind, PropertySchema, Severity


@dataclass(frozen=True)
class PropertyIssue:
    """One validation finding for one property."""

    property: str
    message: str
    severity: Severity = Severity.ERROR


def _is_missing(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_kind(name: str, schema: PropertySchema, value: Any) -> PropertyIssue | None:
    """Type check a present value against its schema kind."""
    match schema.kind:
        case PropKind.STRING | PropKind.COLOR | PropKind.IMAGE:
            ok = isinstance(value, str)
        case PropKind.NUMBER:
            ok = _is_number(value)
        case PropKind.BOOLEAN:
            ok = isinstance(value, bool)
        case PropKind.SELECT:
            ok = not schema.options or any(o.value == value for o in schema.options)
            if not ok:
                return PropertyIssue(name, f"{schema.label} is not one of the allowed options",
                                     Severity.WARNING)
        case PropKind.ARRAY:
            ok = isinstance(value, (list, tuple))
        case PropKind.OBJECT:
            ok = isinstance(value, dict)
    if not ok:
        return PropertyIssue(name, f"{schema.label} must be a {schema.kind.value}")
    return None


def validate_property(name: str, schema: PropertySchema, value: Any) -> list[PropertyIssue]:
    """
    Validate one property value.

    Args:
        name: Property name
        schema: Its schema entry
        value: Current value (None when undefined)

    Returns:
        Issues found (empty when valid)
    """
    if _is_missing(value):
        if schema.required:
            return [PropertyIssue(name, f"{schema.label} is required")]
        return []

    issues: list[PropertyIssue] = []

    kind_issue = _check_kind(name, schema, value)
    if kind_issue is not None:
        return [kind_issue]

    if schema.pattern and isinstance(value, str) and not re.search(schema.pattern, value):
        issues.append(PropertyIssue(name, f"{schema.label} format is invalid"))

    if _is_number(value):
        if schema.min is not None and value < schema.min:
            issues.append(PropertyIssue(name, f"{schema.label} must be at least {schema.min:g}"))
        if schema.max is not None and value > schema.max:
            issues.append(PropertyIssue(name, f"{schema.label} must be at most {schema.max:g}"))

    return issues


def validate_props(definition: ComponentDefinition, props: Mapping[str, Any]) -> list[PropertyIssue]:
    """Validate every schema property plus report undeclared ones."""
    issues: list[PropertyIssue] = []
    for name, schema in definition.prop_schema.items():
        issues.extend(validate_property(name, schema, props.get(name)))

    for name in props:
        if name not in definition.prop_schema:
            issues.append(PropertyIssue(name, f"{name} is not a declared property", Severity.INFO))

    return issues


def is_visible(schema: PropertySchema, props: Mapping[str, Any]) -> bool:
    """Evaluate a property's conditional visibility rule."""
    if schema.conditional is None:
        return True
    return props.get(schema.conditional.field) == schema.conditional.value


def visible_properties(definition: ComponentDefinition, props: Mapping[str, Any]) -> dict[str, PropertySchema]:
    """Schema entries the property editor should show for the current values."""
    return {
        name: schema
        for name, schema in definition.prop_schema.items()
        if is_visible(schema, props)
    }


def apply_defaults(definition: ComponentDefinition, props: Mapping[str, Any]) -> dict[str, Any]:
    """Fill declared defaults underneath explicit values."""
    return {**definition.default_props(), **props}


def has_errors(issues: list[PropertyIssue]) -> bool:
    return any(issue.severity == Severity.ERROR for issue in issues)

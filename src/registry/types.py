"""
Component Type Definitions
Schema records describing element types, their editable properties and
their per-target export templates.
"""

from typing import Any
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


WILDCARD = "*"


class Target(str, Enum):
    """Code generation targets."""
    REACT = "react"
    VUE = "vue"
    ANGULAR = "angular"
    HTML = "html"


class PropKind(str, Enum):
    """Abstract value kind of a property."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    COLOR = "color"
    IMAGE = "image"
    SELECT = "select"
    ARRAY = "array"
    OBJECT = "object"


class PropGroup(str, Enum):
    """Property editor grouping."""
    CONTENT = "content"
    APPEARANCE = "appearance"
    LAYOUT = "layout"
    BEHAVIOR = "behavior"


class Severity(str, Enum):
    """Validation issue severity."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class SelectOption(BaseModel):
    """One enumerated choice of a select property."""
    model_config = ConfigDict(frozen=True)

    label: str
    value: Any


class Conditional(BaseModel):
    """Show a property only while another property has a given value."""
    model_config = ConfigDict(frozen=True)

    field: str
    value: Any


class PropertySchema(BaseModel):
    """Editable property definition."""
    model_config = ConfigDict(frozen=True)

    kind: PropKind
    label: str
    description: str = ""
    default: Any = None
    required: bool = False
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    options: tuple[SelectOption, ...] = ()
    group: PropGroup = PropGroup.CONTENT
    conditional: Conditional | None = None


class ComponentDefinition(BaseModel):
    """Immutable catalog entry for one element type."""
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., min_length=1, description="Unique type id")
    name: str
    category: str = "general"
    description: str = ""
    role: str = Field(default="generic", description="Accessibility role used in generated tests")
    prop_schema: dict[str, PropertySchema] = Field(default_factory=dict)
    export_templates: dict[Target, str] = Field(default_factory=dict)
    container: bool = Field(default=False, description="May own child elements")
    accepts: tuple[str, ...] = Field(default=(WILDCARD,), description="Child types allowed")
    max_children: int | None = Field(default=None, gt=0)

    def default_props(self) -> dict[str, Any]:
        """Defaults declared by the property schema."""
        return {
            name: schema.default
            for name, schema in self.prop_schema.items()
            if schema.default is not None
        }

    def template(self, target: Target | str) -> str | None:
        """Export template for a target, if declared."""
        return self.export_templates.get(Target(target))

    def accepts_child(self, element_type: str) -> bool:
        """Whether an element of `element_type` may be nested inside."""
        return self.container and (WILDCARD in self.accepts or element_type in self.accepts)

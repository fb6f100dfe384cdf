"""
Component Registry
Lookup table from element type to its component definition.
"""

from typing import Any, Iterable

from pydantic import ValidationError as PydanticValidationError

from core import get_logger, ValidationError
from core.json import extract_json, JSONParseError, validate_json_size, validate_json_depth
from core.validate import MAX_REGISTRY_SIZE

from .types import ComponentDefinition, Target

logger = get_logger(__name__)


class ComponentRegistry:
    """
    Catalog of component definitions keyed by type.
    Read by the document store (defaults, validation), the placement rules
    (container/accept lists) and the emitters (templates).
    """

    def __init__(self, definitions: Iterable[ComponentDefinition] = ()):
        self._definitions: dict[str, ComponentDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: ComponentDefinition, replace: bool = False) -> bool:
        """
        Register a component definition.

        Args:
            definition: Definition to add
            replace: Overwrite an existing definition of the same type

        Returns:
            True if the definition was stored
        """
        if definition.type in self._definitions and not replace:
            logger.warning("duplicate_component", type=definition.type)
            return False

        self._definitions[definition.type] = definition
        logger.debug(
            "component_registered",
            type=definition.type,
            props=len(definition.prop_schema),
            targets=len(definition.export_templates),
        )
        return True

    def unregister(self, component_type: str) -> None:
        """Remove a definition"""
        if self._definitions.pop(component_type, None) is not None:
            logger.debug("component_unregistered", type=component_type)

    def get(self, component_type: str) -> ComponentDefinition | None:
        """Get definition by type"""
        return self._definitions.get(component_type)

    def has(self, component_type: str) -> bool:
        return component_type in self._definitions

    def template_for(self, component_type: str, target: Target | str) -> str | None:
        """Export template of a type for a target, None when either is missing."""
        definition = self.get(component_type)
        return definition.template(target) if definition else None

    def list_all(self, category: str | None = None) -> list[ComponentDefinition]:
        """
        List registered definitions in registration order.

        Args:
            category: Optional category filter
        """
        definitions = list(self._definitions.values())
        if category:
            definitions = [d for d in definitions if d.category == category]
        return definitions

    def categories(self) -> list[str]:
        """Distinct categories in registration order"""
        return list(dict.fromkeys(d.category for d in self._definitions.values()))

    def load_json(self, text: str, replace: bool = False) -> int:
        """
        Load definitions from a JSON document of the form
        ``{"components": [ {definition}, ... ]}``.

        Returns:
            Number of definitions registered

        Raises:
            ValidationError: If the JSON or a definition is malformed
        """
        try:
            validate_json_size(text, MAX_REGISTRY_SIZE, "Registry")
            data = extract_json(text, repair=False)
            validate_json_depth(data)
        except JSONParseError as e:
            logger.error("registry_parse_failed", error=str(e))
            raise ValidationError(f"Invalid registry JSON: {e}") from e

        entries = data.get("components")
        if not isinstance(entries, list):
            raise ValidationError("Registry JSON missing 'components' list")

        loaded = 0
        for index, entry in enumerate(entries):
            try:
                definition = ComponentDefinition.model_validate(entry)
            except PydanticValidationError as e:
                logger.error("invalid_component", index=index, error=str(e))
                raise ValidationError(f"components[{index}] is invalid: {e}") from e
            if self.register(definition, replace=replace):
                loaded += 1

        logger.info("registry_loaded", count=loaded)
        return loaded

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics"""
        by_category: dict[str, int] = {}
        for definition in self._definitions.values():
            by_category[definition.category] = by_category.get(definition.category, 0) + 1

        return {
            "total_components": len(self._definitions),
            "containers": sum(1 for d in self._definitions.values() if d.container),
            "categories": by_category,
        }

    def __contains__(self, component_type: str) -> bool:
        return component_type in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


def default_registry() -> ComponentRegistry:
    """Registry pre-loaded with the built-in catalog."""
    from .catalog import BUILTIN_COMPONENTS

    return ComponentRegistry(BUILTIN_COMPONENTS)

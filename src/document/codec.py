"""Document codec - JSON to element drafts and back."""

from typing import Any, Iterable

from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure

from core import get_logger, ValidationError, validate_document
from core.json import extract_json, safe_json_dumps, JSONParseError
from core.validate import MAX_DOCUMENT_SIZE, MAX_TREE_DEPTH

from .models import Constraints, Element, ElementDraft, Position, Snapshot, Styling

logger = get_logger(__name__)

FORMAT_VERSION = 1


class DocumentParser:
    """Parses document JSON into element drafts ready for ``DocumentStore.load``."""

    def __init__(self, max_size: int = MAX_DOCUMENT_SIZE, max_depth: int = MAX_TREE_DEPTH):
        self.max_size = max_size
        self.max_depth = max_depth

    def parse(self, content: str) -> list[ElementDraft]:
        """
        Parse a document JSON string.

        Args:
            content: ``{"elements": [...]}`` JSON (markdown fences tolerated)

        Returns:
            Root drafts with nested children

        Raises:
            ValidationError: If the document is malformed
        """
        try:
            doc = extract_json(content, repair=False)
        except JSONParseError as e:
            logger.error("json_parse_failed", error=str(e))
            raise ValidationError(f"Invalid JSON: {e}") from e

        result = validate_document(doc, content, self.max_size, self.max_depth)
        if isinstance(result, Failure):
            message = result.failure().message
            logger.error("invalid_document", error=message)
            raise ValidationError(message)

        return self._expand_elements(doc["elements"], depth=0)

    def _expand_elements(self, elements: list[Any], depth: int) -> list[ElementDraft]:
        if elements and depth > self.max_depth:
            raise ValidationError(f"Element nesting exceeds {self.max_depth} levels")

        drafts = []
        for element in elements:
            draft = self._expand_element(element, depth)
            if draft is not None:
                drafts.append(draft)
        return drafts

    def _expand_element(self, element: Any, depth: int) -> ElementDraft | None:
        """
        Expand a single element.

        Supports:
        - Plain strings: "Hello" -> text element with that content
        - Explicit objects: {type, name, props, position, constraints, styling, children}
        - Compact objects: {"button#Save": {"text": "Save", "@at": [40, 40]}}
          where ``@`` keys carry layout (``@at``, ``@size``, ``@class``,
          ``@style``, ``@locked``) and everything else is a prop
        """
        if isinstance(element, str):
            return ElementDraft(type="text", props={"content": element})

        if not isinstance(element, dict):
            logger.warning("skipped_element", kind=type(element).__name__)
            return None

        if "type" in element:
            return self._expand_explicit(element, depth)

        if len(element) != 1:
            raise ValidationError("Compact element must have exactly one 'type#name' key")

        key, body = next(iter(element.items()))
        element_type, _, name = key.partition("#")
        body = body if isinstance(body, dict) else {}

        explicit: dict[str, Any] = {"type": element_type, "props": {}}
        if name:
            explicit["name"] = name
        for k, v in body.items():
            if k == "children":
                explicit["children"] = v
            elif k.startswith("@"):
                explicit[k] = v
            else:
                explicit["props"][k] = v
        return self._expand_explicit(explicit, depth)

    def _expand_explicit(self, element: dict[str, Any], depth: int) -> ElementDraft:
        position = element.get("position") or {}
        if "@at" in element:
            at = _directive_values(element, "@at", (2, 3), "[x, y] or [x, y, z]") + [0]
            position = {"x": at[0], "y": at[1], "z": at[2]}

        constraints = _section(element, "constraints")
        if "@size" in element:
            width, height = _directive_values(element, "@size", (2,), "[width, height]")
            constraints.update(width=width, height=height)
        if "@locked" in element:
            constraints["locked"] = bool(element["@locked"])

        styling = _section(element, "styling")
        if "@class" in element:
            styling["class_name"] = element["@class"]
        if "@style" in element:
            styling["style"] = element["@style"]

        children = element.get("children") or []
        if not isinstance(children, list):
            raise ValidationError(f"children of {element.get('type')!r} must be a list")

        try:
            return ElementDraft(
                type=element["type"],
                name=element.get("name"),
                props=element.get("props") or {},
                position=Position.model_validate(position),
                constraints=Constraints.model_validate(constraints),
                styling=Styling.model_validate(styling),
                author=element.get("author"),
                children=self._expand_elements(children, depth + 1),
            )
        except PydanticValidationError as e:
            logger.error("invalid_element", type=element.get("type"), error=str(e))
            raise ValidationError(f"Invalid element {element.get('type')!r}: {e}") from e


def _section(element: dict[str, Any], key: str) -> dict[str, Any]:
    value = element.get(key) or {}
    if not isinstance(value, dict):
        raise ValidationError(f"{key} of {element.get('type')!r} must be an object")
    return dict(value)


def _directive_values(element: dict[str, Any], directive: str, lengths: tuple[int, ...],
                      expected: str) -> list[Any]:
    value = element[directive]
    if not isinstance(value, (list, tuple)) or len(value) not in lengths:
        raise ValidationError(f"{directive} of {element.get('type')!r} must be {expected}, got {value!r}")
    return list(value)


def parse_document(content: str) -> list[ElementDraft]:
    """Convenience wrapper around ``DocumentParser().parse``."""
    return DocumentParser().parse(content)


def _element_to_dict(element: Element) -> dict[str, Any]:
    return {
        "id": element.id,
        "type": element.type,
        "name": element.name,
        "props": element.props,
        "position": element.position.model_dump(),
        "constraints": element.constraints.model_dump(exclude_defaults=True),
        "styling": element.styling.model_dump(exclude_defaults=True),
        "author": element.metadata.author,
        "children": [_element_to_dict(child) for child in element.children],
    }


def dump_document(source: Snapshot | Iterable[Element]) -> str:
    """
    Serialize a document to explicit-format JSON.

    Output is deterministic (sorted keys, no timestamps), so equal trees
    serialize to equal strings.
    """
    elements = source.tree() if isinstance(source, Snapshot) else list(source)
    return safe_json_dumps(
        {"version": FORMAT_VERSION, "elements": [_element_to_dict(e) for e in elements]},
        indent=2,
        sort_keys=True,
    )

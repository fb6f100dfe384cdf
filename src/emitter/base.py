"""
Emitter base
Shared contract for per-target code generators: definition lookup,
template rendering, child slots and file descriptors.
"""

from abc import ABC, abstractmethod
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from markupsafe import escape
from pydantic import BaseModel, ConfigDict

from core import get_logger, hash_string
from document.models import Element
from registry import ComponentDefinition, ComponentRegistry, PropKind, Target

from .names import NameAllocator, camel_to_kebab
from .templating import TemplateRenderer, stringify

logger = get_logger(__name__)

CHILDREN_SLOT = "children"
CLASS_SLOT = "className"


class FileKind(str, Enum):
    """Role of a generated file in the deliverable."""
    COMPONENT = "component"
    STYLE = "style"
    TEST = "test"
    STORY = "story"
    CONFIG = "config"
    DOCUMENTATION = "documentation"


class SourceLanguage(str, Enum):
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    HTML = "html"
    CSS = "css"
    JSON = "json"
    MARKDOWN = "markdown"


class StylingChoice(str, Enum):
    """Styling approach of the generated project."""
    TAILWIND = "tailwind"
    CSS_MODULES = "css-modules"
    STYLED_COMPONENTS = "styled-components"
    EMOTION = "emotion"
    VANILLA_CSS = "vanilla-css"


class FileDescriptor(BaseModel):
    """One generated file."""
    model_config = ConfigDict(frozen=True)

    path: str
    name: str
    content: str
    file_kind: FileKind
    source_language: SourceLanguage
    element_id: str | None = None
    placeholder: bool = False

    @property
    def checksum(self) -> str:
        return hash_string(self.content, truncate=16)

    @property
    def line_count(self) -> int:
        return len(self.content.splitlines())


@dataclass(frozen=True)
class EmitOptions:
    """Per-run switches shared by every emitter."""

    typed: bool = True
    styling: StylingChoice = StylingChoice.TAILWIND


@dataclass
class ElementFailure:
    """An element left out of a page because rendering it raised."""

    element: Element
    error: Exception


@dataclass
class EmitResult:
    """A generated file (None when skipped) plus non-fatal warnings."""

    file: FileDescriptor | None
    warnings: list[str] = field(default_factory=list)
    failures: list[ElementFailure] = field(default_factory=list)


# Set while a page is rendered; inline children that raise are recorded
# here instead of failing the whole page.
_page_failures: ContextVar[list[ElementFailure] | None] = ContextVar("page_failures", default=None)


def drop_blank_lines(text: str) -> str:
    return "\n".join(line for line in text.split("\n") if line.strip())


def indent(text: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line if line.strip() else line for line in text.split("\n"))


def css_rules(style: Mapping[str, Any]) -> str:
    """``{"fontSize": "12px"}`` -> ``font-size: 12px;`` lines (sorted)."""
    return "\n".join(
        f"  {camel_to_kebab(prop)}: {stringify(value)};" for prop, value in sorted(style.items())
    )


class Emitter(ABC):
    """
    Translates elements into source files for one target.

    Emission is pure over the element tree: the same tree and options always
    yield byte-identical content.
    """

    target: Target
    type_map: Mapping[PropKind, str] | None = None
    unknown_marker: str = "<!-- unknown component: {type} -->"

    def __init__(self, registry: ComponentRegistry, options: EmitOptions | None = None):
        self.registry = registry
        self.options = options or EmitOptions()
        self.templates = TemplateRenderer(registry)

    # ------------------------------------------------------------------
    # Public contract
    # ------------------------------------------------------------------

    def emit_element(self, element: Element, names: NameAllocator | None = None) -> EmitResult:
        """
        Generate the component file for one element.

        Unknown types produce a marked placeholder file and a warning.
        """
        names = names or NameAllocator.from_elements([element])
        definition = self.definition_for(element)
        name = names.name_for(element)

        if definition is None:
            warning = f"Unknown component type '{element.type}' (element {element.id})"
            logger.warning("unknown_component", type=element.type, id=element.id,
                           target=self.target.value)
            return EmitResult(self.make_file(name, self.render_placeholder(element, name),
                                             element, placeholder=True), [warning])

        content = self.render_component(element, definition, names)
        return EmitResult(self.make_file(name, content, element))

    def emit_tree(self, element: Element, names: NameAllocator | None = None) -> list[EmitResult]:
        """Emit an element and every descendant (parent before children)."""
        names = names or NameAllocator.from_elements([element])
        return [self.emit_element(node, names) for node in element.walk()]

    @abstractmethod
    def emit_page(self, roots: list[Element], names: NameAllocator | None = None) -> EmitResult:
        """Emit every tree inline into a single page file."""

    # ------------------------------------------------------------------
    # Hooks for targets
    # ------------------------------------------------------------------

    @abstractmethod
    def render_component(self, element: Element, definition: ComponentDefinition,
                         names: NameAllocator) -> str:
        """Full file content for a known element."""

    @abstractmethod
    def render_placeholder(self, element: Element, name: str) -> str:
        """Clearly marked stand-in content for an unknown element."""

    @abstractmethod
    def child_reference(self, child: Element, names: NameAllocator) -> str:
        """How a parent refers to a separately emitted child."""

    @abstractmethod
    def file_name(self, name: str) -> str:
        ...

    @property
    @abstractmethod
    def language(self) -> SourceLanguage:
        ...

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def definition_for(self, element: Element) -> ComponentDefinition | None:
        definition = self.registry.get(element.type)
        if definition is None or definition.template(self.target) is None:
            return None
        return definition

    def map_type(self, kind: PropKind) -> str:
        """Declared type for a schema kind (typed targets only)."""
        if self.type_map is None:
            raise TypeError(f"{self.target.value} output is untyped")
        return self.type_map[kind]

    def class_names(self, element: Element) -> str:
        classes = [element.styling.class_name] if element.styling.class_name else []
        if self.options.styling == StylingChoice.TAILWIND and element.constraints.responsive:
            classes.extend(["w-full", "h-auto"])
        return " ".join(classes)

    def unknown_warnings(self, roots: list[Element]) -> list[str]:
        """Warnings for every element in the trees without a usable definition."""
        return [
            f"Unknown component type '{node.type}' (element {node.id})"
            for root in roots
            for node in root.walk()
            if self.definition_for(node) is None
        ]

    def known_children(self, element: Element) -> list[Element]:
        return [child for child in element.children if self.definition_for(child) is not None]

    def unknown_markup(self, element: Element) -> str:
        component_type = element.type
        if self.templates.escapes(self.target):
            component_type = str(escape(component_type))
        return self.unknown_marker.format(type=component_type)

    def render_markup(self, element: Element, names: NameAllocator, inline: bool = False) -> str:
        """
        Render an element's catalog template.

        Args:
            inline: Expand children in place instead of referencing them
        """
        if self.definition_for(element) is None:
            return self.unknown_markup(element)

        values = dict(element.props)
        values[CLASS_SLOT] = self.class_names(element)
        values[CHILDREN_SLOT] = self.templates.safe(self.render_children(element, names, inline))
        rendered = self.templates.render_component(element.type, self.target, values)
        return drop_blank_lines(rendered).strip()

    def render_children(self, element: Element, names: NameAllocator, inline: bool) -> str:
        failures = _page_failures.get()
        parts = []
        for child in element.children:
            if self.definition_for(child) is None:
                parts.append(self.unknown_markup(child))
            elif inline and failures is not None:
                markup = self._guarded(child, names, failures)
                if markup is not None:
                    parts.append(markup)
            elif inline:
                parts.append(self.render_markup(child, names, inline=True))
            else:
                parts.append(self.child_reference(child, names))
        return "\n".join(parts)

    def _guarded(self, element: Element, names: NameAllocator,
                 failures: list[ElementFailure]) -> str | None:
        try:
            return self.render_markup(element, names, inline=True)
        except Exception as e:
            logger.error("page_element_failed", id=element.id, type=element.type,
                         target=self.target.value, error=str(e))
            failures.append(ElementFailure(element, e))
            return None

    def page_markup(self, roots: list[Element],
                    names: NameAllocator) -> tuple[list[tuple[Element, str]], list[ElementFailure]]:
        """
        Inline markup for each root that rendered.

        An element that raises is left out of the page (with its subtree)
        and reported as a failure; its siblings still render.
        """
        failures: list[ElementFailure] = []
        token = _page_failures.set(failures)
        try:
            rendered = []
            for root in roots:
                markup = self._guarded(root, names, failures)
                if markup is not None:
                    rendered.append((root, markup))
            return rendered, failures
        finally:
            _page_failures.reset(token)

    def make_file(self, name: str, content: str, element: Element | None = None,
                  placeholder: bool = False, kind: FileKind = FileKind.COMPONENT) -> FileDescriptor:
        file_name = self.file_name(name)
        return FileDescriptor(
            path=f"components/{file_name}",
            name=file_name,
            content=content.rstrip() + "\n",
            file_kind=kind,
            source_language=self.language,
            element_id=element.id if element else None,
            placeholder=placeholder,
        )

"""React (JSX/TSX) emitter."""

from document.models import Element
from registry import ComponentDefinition, PropKind, Target

from .base import Emitter, EmitResult, SourceLanguage, StylingChoice, indent
from .names import NameAllocator

TS_TYPES: dict[PropKind, str] = {
    PropKind.STRING: "string",
    PropKind.NUMBER: "number",
    PropKind.BOOLEAN: "boolean",
    PropKind.COLOR: "string",
    PropKind.IMAGE: "string",
    PropKind.SELECT: "string",
    PropKind.ARRAY: "any[]",
    PropKind.OBJECT: "Record<string, any>",
}


class ReactEmitter(Emitter):
    """One function component per element, children imported by name."""

    target = Target.REACT
    type_map = TS_TYPES
    unknown_marker = "{{/* unknown component: {type} */}}"

    @property
    def language(self) -> SourceLanguage:
        return SourceLanguage.TYPESCRIPT if self.options.typed else SourceLanguage.JAVASCRIPT

    def file_name(self, name: str) -> str:
        return f"{name}{'.tsx' if self.options.typed else '.jsx'}"

    def child_reference(self, child: Element, names: NameAllocator) -> str:
        return f"<{names.name_for(child)} />"

    def imports(self, element: Element, names: NameAllocator) -> list[str]:
        lines = ["import React from 'react'"]
        if self.options.styling == StylingChoice.STYLED_COMPONENTS:
            lines.append("import styled from 'styled-components'")
        elif self.options.styling == StylingChoice.EMOTION:
            lines.append("import { css } from '@emotion/react'")

        seen: set[str] = set()
        for child in self.known_children(element):
            child_name = names.name_for(child)
            if child_name not in seen:
                seen.add(child_name)
                lines.append(f"import {child_name} from './{child_name}'")
        return lines

    def props_interface(self, name: str, definition: ComponentDefinition) -> str:
        fields = [
            f"  {key}{'' if schema.required else '?'}: {self.map_type(schema.kind)}"
            for key, schema in definition.prop_schema.items()
        ]
        fields.extend(["  children?: React.ReactNode", "  className?: string"])
        return f"interface {name}Props {{\n" + "\n".join(fields) + "\n}"

    def component(self, name: str, body: str, typed_props: bool) -> str:
        signature = f": React.FC<{name}Props>" if typed_props else ""
        return (
            f"export const {name}{signature} = (props) => {{\n"
            f"  return (\n"
            f"{indent(body, 4)}\n"
            f"  )\n"
            f"}}\n"
            f"\n"
            f"export default {name}"
        )

    def render_component(self, element: Element, definition: ComponentDefinition,
                         names: NameAllocator) -> str:
        name = names.name_for(element)
        sections = ["\n".join(self.imports(element, names))]
        if self.options.typed:
            sections.append(self.props_interface(name, definition))
        sections.append(self.component(name, self.render_markup(element, names), self.options.typed))
        return "\n\n".join(sections)

    def render_placeholder(self, element: Element, name: str) -> str:
        body = (
            f"<div data-unknown-component=\"{element.type}\">\n"
            f"  {{/* unknown component: {element.type} */}}\n"
            f"</div>"
        )
        return "import React from 'react'\n\n" + self.component(name, body, False)

    def emit_page(self, roots: list[Element], names: NameAllocator | None = None) -> EmitResult:
        names = names or NameAllocator.from_elements(roots)
        rendered, failures = self.page_markup(roots, names)
        body = "\n".join(markup for _, markup in rendered)
        content = (
            "import React from 'react'\n\n"
            + self.component("App", f"<>\n{indent(body, 2)}\n</>", False)
        )
        return EmitResult(self.make_file("App", content), self.unknown_warnings(roots), failures)

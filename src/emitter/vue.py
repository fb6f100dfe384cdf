"""Vue single-file component emitter."""

from core import safe_json_dumps
from document.models import Element
from registry import ComponentDefinition, PropKind, Target

from .base import Emitter, EmitResult, SourceLanguage, StylingChoice, css_rules, indent
from .templating import stringify
from .names import NameAllocator, to_kebab_case

VUE_TYPES: dict[PropKind, str] = {
    PropKind.STRING: "String",
    PropKind.NUMBER: "Number",
    PropKind.BOOLEAN: "Boolean",
    PropKind.COLOR: "String",
    PropKind.IMAGE: "String",
    PropKind.SELECT: "String",
    PropKind.ARRAY: "Array",
    PropKind.OBJECT: "Object",
}


class VueEmitter(Emitter):
    """``<template>`` / ``<script>`` / ``<style>`` per element."""

    target = Target.VUE
    type_map = VUE_TYPES

    @property
    def language(self) -> SourceLanguage:
        return SourceLanguage.TYPESCRIPT if self.options.typed else SourceLanguage.JAVASCRIPT

    def file_name(self, name: str) -> str:
        return f"{name}.vue"

    def child_reference(self, child: Element, names: NameAllocator) -> str:
        return f"<{names.name_for(child)} />"

    def props_definition(self, definition: ComponentDefinition) -> str:
        if not self.options.typed:
            keys = ", ".join(f"'{key}'" for key in definition.prop_schema)
            return f"  props: [{keys}],"

        entries = []
        for key, schema in definition.prop_schema.items():
            default = safe_json_dumps(schema.default, sort_keys=True)
            if schema.kind in (PropKind.ARRAY, PropKind.OBJECT):
                fallback = "[]" if schema.kind == PropKind.ARRAY else "{}"
                default = f"() => ({default if schema.default is not None else fallback})"
            entries.append(
                f"    {key}: {{\n"
                f"      type: {self.map_type(schema.kind)},\n"
                f"      required: {stringify(schema.required)},\n"
                f"      default: {default}\n"
                f"    }}"
            )
        return "  props: {\n" + ",\n".join(entries) + "\n  },"

    def script(self, name: str, definition: ComponentDefinition | None,
               children: list[str]) -> str:
        lines = ["import { defineComponent } from 'vue'"]
        lines.extend(f"import {child} from './{child}.vue'" for child in children)
        body = [f"  name: '{name}',"]
        if children:
            body.append(f"  components: {{ {', '.join(children)} }},")
        if definition is not None and definition.prop_schema:
            body.append(self.props_definition(definition))
        return (
            "\n".join(lines)
            + "\n\nexport default defineComponent({\n"
            + "\n".join(body)
            + "\n})"
        )

    def style(self, element: Element, name: str) -> str:
        if self.options.styling == StylingChoice.TAILWIND or not element.styling.style:
            return ""
        scope = " module" if self.options.styling == StylingChoice.CSS_MODULES else " scoped"
        return f"<style{scope}>\n.{to_kebab_case(name)} {{\n{css_rules(element.styling.style)}\n}}\n</style>"

    def sfc(self, template: str, script: str, style: str = "") -> str:
        lang = ' lang="ts"' if self.options.typed else ""
        parts = [
            f"<template>\n{indent(template, 2)}\n</template>",
            f"<script{lang}>\n{script}\n</script>",
        ]
        if style:
            parts.append(style)
        return "\n\n".join(parts)

    def render_component(self, element: Element, definition: ComponentDefinition,
                         names: NameAllocator) -> str:
        name = names.name_for(element)
        children = list(dict.fromkeys(names.name_for(c) for c in self.known_children(element)))
        return self.sfc(
            self.render_markup(element, names),
            self.script(name, definition, children),
            self.style(element, name),
        )

    def render_placeholder(self, element: Element, name: str) -> str:
        template = (
            f"<div data-unknown-component=\"{element.type}\">\n"
            f"  <!-- unknown component: {element.type} -->\n"
            f"</div>"
        )
        return self.sfc(template, self.script(name, None, []))

    def emit_page(self, roots: list[Element], names: NameAllocator | None = None) -> EmitResult:
        names = names or NameAllocator.from_elements(roots)
        rendered, failures = self.page_markup(roots, names)
        body = "\n".join(markup for _, markup in rendered)
        content = self.sfc(f"<div id=\"app\">\n{indent(body, 2)}\n</div>", self.script("App", None, []))
        return EmitResult(self.make_file("App", content), self.unknown_warnings(roots), failures)

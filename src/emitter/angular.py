"""Angular standalone component emitter."""

from core import safe_json_dumps
from document.models import Element
from registry import ComponentDefinition, Target

from .base import Emitter, EmitResult, SourceLanguage, StylingChoice, css_rules, indent
from .names import NameAllocator, to_kebab_case
from .react import TS_TYPES


class AngularEmitter(Emitter):
    """One ``@Component`` class per element with an inline template."""

    target = Target.ANGULAR
    type_map = TS_TYPES

    @property
    def language(self) -> SourceLanguage:
        return SourceLanguage.TYPESCRIPT if self.options.typed else SourceLanguage.JAVASCRIPT

    def file_name(self, name: str) -> str:
        return f"{name}.component.{'ts' if self.options.typed else 'js'}"

    def selector(self, name: str) -> str:
        return f"app-{to_kebab_case(name)}"

    def child_reference(self, child: Element, names: NameAllocator) -> str:
        tag = self.selector(names.name_for(child))
        return f"<{tag}></{tag}>"

    def inputs(self, element: Element, definition: ComponentDefinition) -> list[str]:
        lines = []
        for key, schema in definition.prop_schema.items():
            value = element.props.get(key, schema.default)
            annotation = f": {self.map_type(schema.kind)}" if self.options.typed else ""
            lines.append(f"  @Input() {key}{annotation} = {safe_json_dumps(value, sort_keys=True)}")
        return lines

    def decorator(self, name: str, template: str, child_classes: list[str], style: str) -> str:
        fields = [
            f"  selector: '{self.selector(name)}',",
            "  standalone: true,",
        ]
        if child_classes:
            fields.append(f"  imports: [{', '.join(child_classes)}],")
        fields.append(f"  template: `\n{indent(template, 4)}\n  `,")
        if style:
            fields.append(f"  styles: [`\n{indent(style, 4)}\n  `],")
        return "@Component({\n" + "\n".join(fields) + "\n})"

    def style(self, element: Element, name: str) -> str:
        if self.options.styling == StylingChoice.TAILWIND or not element.styling.style:
            return ""
        return f":host {{\n{css_rules(element.styling.style)}\n}}"

    def component_file(self, name: str, template: str, inputs: list[str],
                       children: list[str] = (), style: str = "") -> str:
        core_imports = "Component, Input" if inputs else "Component"
        lines = [f"import {{ {core_imports} }} from '@angular/core'"]
        lines.extend(
            f"import {{ {child}Component }} from './{child}.component'" for child in children
        )
        body = "\n".join(inputs)
        return (
            "\n".join(lines)
            + "\n\n"
            + self.decorator(name, template, [f"{c}Component" for c in children], style)
            + f"\nexport class {name}Component {{"
            + (f"\n{body}\n" if body else "")
            + "}"
        )

    def render_component(self, element: Element, definition: ComponentDefinition,
                         names: NameAllocator) -> str:
        name = names.name_for(element)
        children = list(dict.fromkeys(names.name_for(c) for c in self.known_children(element)))
        return self.component_file(
            name,
            self.render_markup(element, names),
            self.inputs(element, definition),
            children,
            self.style(element, name),
        )

    def render_placeholder(self, element: Element, name: str) -> str:
        template = (
            f"<div data-unknown-component=\"{element.type}\">\n"
            f"  <!-- unknown component: {element.type} -->\n"
            f"</div>"
        )
        return self.component_file(name, template, [])

    def emit_page(self, roots: list[Element], names: NameAllocator | None = None) -> EmitResult:
        names = names or NameAllocator.from_elements(roots)
        rendered, failures = self.page_markup(roots, names)
        body = "\n".join(markup for _, markup in rendered)
        content = self.component_file("App", f"<main>\n{indent(body, 2)}\n</main>", [])
        return EmitResult(self.make_file("App", content), self.unknown_warnings(roots), failures)

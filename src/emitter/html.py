"""Plain HTML emitter. Untyped; children are always expanded inline."""

from document.models import Element
from registry import ComponentDefinition, Target

from .base import Emitter, EmitResult, SourceLanguage, StylingChoice, css_rules
from .names import NameAllocator
from .templating import stringify


class HtmlEmitter(Emitter):
    """
    Standalone HTML documents with absolutely positioned elements.

    Page shells live in ``emitter/templates/html`` and are autoescaped, so
    prop text, names and types never reach the document as raw markup.
    """

    target = Target.HTML

    @property
    def language(self) -> SourceLanguage:
        return SourceLanguage.HTML

    def file_name(self, name: str) -> str:
        return f"{name}.html"

    def child_reference(self, child: Element, names: NameAllocator) -> str:
        return self.render_markup(child, names, inline=True)

    def box_style(self, element: Element) -> str:
        rules = [
            "position: absolute",
            f"left: {stringify(element.position.x)}px",
            f"top: {stringify(element.position.y)}px",
        ]
        if element.position.z:
            rules.append(f"z-index: {element.position.z}")
        for key, value in (("width", element.constraints.width), ("height", element.constraints.height)):
            if value is not None:
                rules.append(f"{key}: {stringify(value)}{'px' if isinstance(value, (int, float)) else ''}")
        return "; ".join(rules) + ";"

    def positioned(self, element: Element, markup: str) -> str:
        """Wrap markup in a box placed at the element's canvas coordinates."""
        return self.templates.render(
            "html/element.html",
            element_id=element.id,
            style=self.box_style(element),
            markup=self.templates.safe(markup),
        )

    def document(self, title: str, body: str, inline_css: str = "") -> str:
        # Closing tags inside CSS values would end the <style> element early.
        css = self.templates.safe(inline_css.replace("</", "<\\/"))
        return self.templates.render(
            "html/document.html",
            title=title,
            tailwind=self.options.styling == StylingChoice.TAILWIND,
            inline_css=css,
            body=self.templates.safe(body),
        )

    def element_css(self, element: Element) -> str:
        if not element.styling.style:
            return ""
        return f"[data-element-id=\"{element.id}\"] > * {{\n{css_rules(element.styling.style)}\n}}"

    def render_component(self, element: Element, definition: ComponentDefinition,
                         names: NameAllocator) -> str:
        markup = self.positioned(element, self.render_markup(element, names))
        return self.document(element.name, markup, self.element_css(element))

    def render_placeholder(self, element: Element, name: str) -> str:
        placeholder = self.templates.render("html/placeholder.html", type=element.type)
        return self.document(element.name, self.positioned(element, placeholder))

    def emit_page(self, roots: list[Element], names: NameAllocator | None = None) -> EmitResult:
        names = names or NameAllocator.from_elements(roots)
        rendered, failures = self.page_markup(roots, names)
        body = "\n".join(self.positioned(root, markup) for root, markup in rendered)
        css = "\n\n".join(filter(None, (self.element_css(root) for root, _ in rendered)))
        content = self.document("Page", body, css)
        return EmitResult(self.make_file("index", content), self.unknown_warnings(roots), failures)

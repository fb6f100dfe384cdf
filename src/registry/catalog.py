"""
Built-in Component Catalog
Definitions for the stock palette. Templates use ``{{ prop }}`` placeholders;
``{{ children | indent(2) }}`` marks the child slot and ``{{ className }}`` receives the
element's resolved class list.
"""

from typing import Any

from .types import (
    ComponentDefinition,
    Conditional,
    PropGroup,
    PropKind,
    PropertySchema,
    SelectOption,
    Target,
)


def _prop(kind: PropKind, label: str, default: Any = None, **kwargs: Any) -> PropertySchema:
    return PropertySchema(kind=kind, label=label, default=default, **kwargs)


def _options(*values: Any) -> tuple[SelectOption, ...]:
    return tuple(SelectOption(label=str(v).title(), value=v) for v in values)


CONTAINER = ComponentDefinition(
    type="container",
    name="Container",
    category="layout",
    description="Centered content wrapper with max width",
    role="region",
    container=True,
    prop_schema={
        "maxWidth": _prop(PropKind.STRING, "Max Width", "1200px", group=PropGroup.LAYOUT,
                          pattern=r"^\d+(px|rem|%|vw)$"),
        "padding": _prop(PropKind.STRING, "Padding", "1rem", group=PropGroup.LAYOUT),
    },
    export_templates={
        Target.REACT: (
            "<div className=\"container mx-auto {{ className }}\" "
            "style={ { maxWidth: '{{ maxWidth }}', padding: '{{ padding }}' } }>\n"
            "  {{ children | indent(2) }}\n"
            "</div>"
        ),
        Target.VUE: (
            "<div class=\"container mx-auto {{ className }}\" "
            ":style=\"{ maxWidth: '{{ maxWidth }}', padding: '{{ padding }}' }\">\n"
            "  {{ children | indent(2) }}\n"
            "</div>"
        ),
        Target.ANGULAR: (
            "<div class=\"container mx-auto {{ className }}\" "
            "[ngStyle]=\"{ maxWidth: '{{ maxWidth }}', padding: '{{ padding }}' }\">\n"
            "  {{ children | indent(2) }}\n"
            "</div>"
        ),
        Target.HTML: (
            "<div class=\"container mx-auto {{ className }}\" "
            "style=\"max-width: {{ maxWidth }}; padding: {{ padding }};\">\n"
            "  {{ children | indent(2) }}\n"
            "</div>"
        ),
    },
)

SECTION = ComponentDefinition(
    type="section",
    name="Section",
    category="layout",
    role="region",
    container=True,
    prop_schema={
        "background": _prop(PropKind.COLOR, "Background", "#ffffff", group=PropGroup.APPEARANCE,
                            pattern=r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"),
        "padding": _prop(PropKind.STRING, "Padding", "2rem", group=PropGroup.LAYOUT),
    },
    export_templates={
        Target.REACT: (
            "<section className=\"{{ className }}\" "
            "style={ { background: '{{ background }}', padding: '{{ padding }}' } }>\n"
            "  {{ children | indent(2) }}\n"
            "</section>"
        ),
        Target.VUE: (
            "<section class=\"{{ className }}\" "
            ":style=\"{ background: '{{ background }}', padding: '{{ padding }}' }\">\n"
            "  {{ children | indent(2) }}\n"
            "</section>"
        ),
        Target.ANGULAR: (
            "<section class=\"{{ className }}\" "
            "[ngStyle]=\"{ background: '{{ background }}', padding: '{{ padding }}' }\">\n"
            "  {{ children | indent(2) }}\n"
            "</section>"
        ),
        Target.HTML: (
            "<section class=\"{{ className }}\" "
            "style=\"background: {{ background }}; padding: {{ padding }};\">\n"
            "  {{ children | indent(2) }}\n"
            "</section>"
        ),
    },
)

GRID = ComponentDefinition(
    type="grid",
    name="Grid",
    category="layout",
    role="region",
    container=True,
    prop_schema={
        "columns": _prop(PropKind.NUMBER, "Columns", 3, min=1, max=12, group=PropGroup.LAYOUT),
        "gap": _prop(PropKind.STRING, "Gap", "1rem", group=PropGroup.LAYOUT),
    },
    export_templates={
        Target.REACT: (
            "<div className=\"grid {{ className }}\" "
            "style={ { gridTemplateColumns: 'repeat({{ columns }}, minmax(0, 1fr))', gap: '{{ gap }}' } }>\n"
            "  {{ children | indent(2) }}\n"
            "</div>"
        ),
        Target.VUE: (
            "<div class=\"grid {{ className }}\" "
            ":style=\"{ gridTemplateColumns: 'repeat({{ columns }}, minmax(0, 1fr))', gap: '{{ gap }}' }\">\n"
            "  {{ children | indent(2) }}\n"
            "</div>"
        ),
        Target.ANGULAR: (
            "<div class=\"grid {{ className }}\" "
            "[ngStyle]=\"{ gridTemplateColumns: 'repeat({{ columns }}, minmax(0, 1fr))', gap: '{{ gap }}' }\">\n"
            "  {{ children | indent(2) }}\n"
            "</div>"
        ),
        Target.HTML: (
            "<div class=\"grid {{ className }}\" "
            "style=\"display: grid; grid-template-columns: repeat({{ columns }}, minmax(0, 1fr)); gap: {{ gap }};\">\n"
            "  {{ children | indent(2) }}\n"
            "</div>"
        ),
    },
)

CARD = ComponentDefinition(
    type="card",
    name="Card",
    category="layout",
    role="article",
    container=True,
    max_children=8,
    prop_schema={
        "title": _prop(PropKind.STRING, "Title", "Card title"),
        "elevation": _prop(PropKind.SELECT, "Elevation", "md", group=PropGroup.APPEARANCE,
                           options=_options("none", "sm", "md", "lg")),
        "showFooter": _prop(PropKind.BOOLEAN, "Show Footer", False, group=PropGroup.BEHAVIOR),
        "footerText": _prop(PropKind.STRING, "Footer Text", "",
                            conditional=Conditional(field="showFooter", value=True)),
    },
    export_templates={
        Target.REACT: (
            "<article className=\"card shadow-{{ elevation }} {{ className }}\">\n"
            "  <h3>{{ title }}</h3>\n"
            "  {{ children | indent(2) }}\n"
            "  <footer>{{ footerText }}</footer>\n"
            "</article>"
        ),
        Target.VUE: (
            "<article class=\"card shadow-{{ elevation }} {{ className }}\">\n"
            "  <h3>{{ title }}</h3>\n"
            "  {{ children | indent(2) }}\n"
            "  <footer v-if=\"{{ showFooter }}\">{{ footerText }}</footer>\n"
            "</article>"
        ),
        Target.ANGULAR: (
            "<article class=\"card shadow-{{ elevation }} {{ className }}\">\n"
            "  <h3>{{ title }}</h3>\n"
            "  {{ children | indent(2) }}\n"
            "  <footer *ngIf=\"{{ showFooter }}\">{{ footerText }}</footer>\n"
            "</article>"
        ),
        Target.HTML: (
            "<article class=\"card shadow-{{ elevation }} {{ className }}\">\n"
            "  <h3>{{ title }}</h3>\n"
            "  {{ children | indent(2) }}\n"
            "  <footer>{{ footerText }}</footer>\n"
            "</article>"
        ),
    },
)

HEADING = ComponentDefinition(
    type="heading",
    name="Heading",
    category="typography",
    role="heading",
    prop_schema={
        "text": _prop(PropKind.STRING, "Text", "Heading", required=True),
        "level": _prop(PropKind.SELECT, "Level", 2, options=_options(1, 2, 3, 4, 5, 6)),
        "color": _prop(PropKind.COLOR, "Color", "#111827", group=PropGroup.APPEARANCE,
                       pattern=r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"),
        "align": _prop(PropKind.SELECT, "Alignment", "left", group=PropGroup.APPEARANCE,
                       options=_options("left", "center", "right")),
    },
    export_templates={
        Target.REACT: "<h{{ level }} className=\"{{ className }}\" style={ { color: '{{ color }}', textAlign: '{{ align }}' } }>{{ text }}</h{{ level }}>",
        Target.VUE: "<h{{ level }} class=\"{{ className }}\" :style=\"{ color: '{{ color }}', textAlign: '{{ align }}' }\">{{ text }}</h{{ level }}>",
        Target.ANGULAR: "<h{{ level }} class=\"{{ className }}\" [ngStyle]=\"{ color: '{{ color }}', textAlign: '{{ align }}' }\">{{ text }}</h{{ level }}>",
        Target.HTML: "<h{{ level }} class=\"{{ className }}\" style=\"color: {{ color }}; text-align: {{ align }};\">{{ text }}</h{{ level }}>",
    },
)

TEXT = ComponentDefinition(
    type="text",
    name="Text",
    category="typography",
    role="paragraph",
    prop_schema={
        "content": _prop(PropKind.STRING, "Content", "Lorem ipsum dolor sit amet.", required=True),
        "color": _prop(PropKind.COLOR, "Color", "#374151", group=PropGroup.APPEARANCE),
        "size": _prop(PropKind.NUMBER, "Font Size", 16, min=8, max=96, group=PropGroup.APPEARANCE),
    },
    export_templates={
        Target.REACT: "<p className=\"{{ className }}\" style={ { color: '{{ color }}', fontSize: '{{ size }}px' } }>{{ content }}</p>",
        Target.VUE: "<p class=\"{{ className }}\" :style=\"{ color: '{{ color }}', fontSize: '{{ size }}px' }\">{{ content }}</p>",
        Target.ANGULAR: "<p class=\"{{ className }}\" [ngStyle]=\"{ color: '{{ color }}', fontSize: '{{ size }}px' }\">{{ content }}</p>",
        Target.HTML: "<p class=\"{{ className }}\" style=\"color: {{ color }}; font-size: {{ size }}px;\">{{ content }}</p>",
    },
)

BUTTON = ComponentDefinition(
    type="button",
    name="Button",
    category="interactive",
    role="button",
    prop_schema={
        "text": _prop(PropKind.STRING, "Text", "Button", required=True),
        "variant": _prop(PropKind.SELECT, "Variant", "primary", group=PropGroup.APPEARANCE,
                         options=_options("primary", "secondary", "outline", "link")),
        "size": _prop(PropKind.SELECT, "Size", "md", group=PropGroup.APPEARANCE,
                      options=_options("sm", "md", "lg")),
        "disabled": _prop(PropKind.BOOLEAN, "Disabled", False, group=PropGroup.BEHAVIOR),
        "href": _prop(PropKind.STRING, "Link", "", group=PropGroup.BEHAVIOR,
                      conditional=Conditional(field="variant", value="link")),
    },
    export_templates={
        Target.REACT: (
            "<button\n"
            "  className=\"btn btn-{{ variant }} btn-{{ size }} {{ className }}\"\n"
            "  disabled={{ disabled | jsx }}\n"
            "  type=\"button\"\n"
            ">\n"
            "  {{ text }}\n"
            "</button>"
        ),
        Target.VUE: (
            "<button class=\"btn btn-{{ variant }} btn-{{ size }} {{ className }}\" "
            ":disabled=\"{{ disabled }}\" type=\"button\">\n"
            "  {{ text }}\n"
            "</button>"
        ),
        Target.ANGULAR: (
            "<button class=\"btn btn-{{ variant }} btn-{{ size }} {{ className }}\" "
            "[disabled]=\"{{ disabled }}\" type=\"button\">\n"
            "  {{ text }}\n"
            "</button>"
        ),
        Target.HTML: (
            "<button class=\"btn btn-{{ variant }} btn-{{ size }} {{ className }}\" type=\"button\">\n"
            "  {{ text }}\n"
            "</button>"
        ),
    },
)

LINK = ComponentDefinition(
    type="link",
    name="Link",
    category="interactive",
    role="link",
    prop_schema={
        "text": _prop(PropKind.STRING, "Text", "Link", required=True),
        "href": _prop(PropKind.STRING, "URL", "#", required=True,
                      pattern=r"^(https?://|/|#|mailto:)"),
        "target": _prop(PropKind.SELECT, "Open In", "_self", group=PropGroup.BEHAVIOR,
                        options=_options("_self", "_blank")),
    },
    export_templates={
        Target.REACT: "<a className=\"{{ className }}\" href=\"{{ href }}\" target=\"{{ target }}\">{{ text }}</a>",
        Target.VUE: "<a class=\"{{ className }}\" href=\"{{ href }}\" target=\"{{ target }}\">{{ text }}</a>",
        Target.ANGULAR: "<a class=\"{{ className }}\" href=\"{{ href }}\" target=\"{{ target }}\">{{ text }}</a>",
        Target.HTML: "<a class=\"{{ className }}\" href=\"{{ href }}\" target=\"{{ target }}\">{{ text }}</a>",
    },
)

IMAGE = ComponentDefinition(
    type="image",
    name="Image",
    category="media",
    role="img",
    prop_schema={
        "src": _prop(PropKind.IMAGE, "Source", "https://placehold.co/600x400", required=True),
        "alt": _prop(PropKind.STRING, "Alt Text", "Image", required=True),
        "width": _prop(PropKind.STRING, "Width", "100%", group=PropGroup.LAYOUT),
        "height": _prop(PropKind.STRING, "Height", "auto", group=PropGroup.LAYOUT),
        "objectFit": _prop(PropKind.SELECT, "Object Fit", "cover", group=PropGroup.APPEARANCE,
                           options=_options("cover", "contain", "fill", "none")),
    },
    export_templates={
        Target.REACT: "<img src=\"{{ src }}\" alt=\"{{ alt }}\" className=\"{{ className }}\" style={ { width: '{{ width }}', height: '{{ height }}', objectFit: '{{ objectFit }}' } } />",
        Target.VUE: "<img src=\"{{ src }}\" alt=\"{{ alt }}\" class=\"{{ className }}\" :style=\"{ width: '{{ width }}', height: '{{ height }}', objectFit: '{{ objectFit }}' }\" />",
        Target.ANGULAR: "<img src=\"{{ src }}\" alt=\"{{ alt }}\" class=\"{{ className }}\" [ngStyle]=\"{ width: '{{ width }}', height: '{{ height }}', objectFit: '{{ objectFit }}' }\" />",
        Target.HTML: "<img src=\"{{ src }}\" alt=\"{{ alt }}\" class=\"{{ className }}\" style=\"width: {{ width }}; height: {{ height }}; object-fit: {{ objectFit }};\" />",
    },
)

INPUT = ComponentDefinition(
    type="input",
    name="Input",
    category="forms",
    role="textbox",
    prop_schema={
        "name": _prop(PropKind.STRING, "Field Name", "field", required=True,
                      pattern=r"^[A-Za-z_][A-Za-z0-9_-]*$"),
        "label": _prop(PropKind.STRING, "Label", "Label"),
        "placeholder": _prop(PropKind.STRING, "Placeholder", ""),
        "inputType": _prop(PropKind.SELECT, "Type", "text", group=PropGroup.BEHAVIOR,
                           options=_options("text", "email", "password", "number", "tel")),
        "required": _prop(PropKind.BOOLEAN, "Required", False, group=PropGroup.BEHAVIOR),
    },
    export_templates={
        Target.REACT: (
            "<label className=\"{{ className }}\">\n"
            "  {{ label }}\n"
            "  <input name=\"{{ name }}\" type=\"{{ inputType }}\" placeholder=\"{{ placeholder }}\" required={{ required | jsx }} />\n"
            "</label>"
        ),
        Target.VUE: (
            "<label class=\"{{ className }}\">\n"
            "  {{ label }}\n"
            "  <input name=\"{{ name }}\" type=\"{{ inputType }}\" placeholder=\"{{ placeholder }}\" :required=\"{{ required }}\" />\n"
            "</label>"
        ),
        Target.ANGULAR: (
            "<label class=\"{{ className }}\">\n"
            "  {{ label }}\n"
            "  <input name=\"{{ name }}\" type=\"{{ inputType }}\" placeholder=\"{{ placeholder }}\" [required]=\"{{ required }}\" />\n"
            "</label>"
        ),
        Target.HTML: (
            "<label class=\"{{ className }}\">\n"
            "  {{ label }}\n"
            "  <input name=\"{{ name }}\" type=\"{{ inputType }}\" placeholder=\"{{ placeholder }}\" />\n"
            "</label>"
        ),
    },
)

FORM = ComponentDefinition(
    type="form",
    name="Form",
    category="forms",
    role="form",
    container=True,
    accepts=("input", "button", "text", "heading"),
    prop_schema={
        "action": _prop(PropKind.STRING, "Action", "/submit", group=PropGroup.BEHAVIOR),
        "method": _prop(PropKind.SELECT, "Method", "post", group=PropGroup.BEHAVIOR,
                        options=_options("get", "post")),
    },
    export_templates={
        Target.REACT: (
            "<form className=\"{{ className }}\" action=\"{{ action }}\" method=\"{{ method }}\">\n"
            "  {{ children | indent(2) }}\n"
            "</form>"
        ),
        Target.VUE: (
            "<form class=\"{{ className }}\" action=\"{{ action }}\" method=\"{{ method }}\">\n"
            "  {{ children | indent(2) }}\n"
            "</form>"
        ),
        Target.ANGULAR: (
            "<form class=\"{{ className }}\" action=\"{{ action }}\" method=\"{{ method }}\">\n"
            "  {{ children | indent(2) }}\n"
            "</form>"
        ),
        Target.HTML: (
            "<form class=\"{{ className }}\" action=\"{{ action }}\" method=\"{{ method }}\">\n"
            "  {{ children | indent(2) }}\n"
            "</form>"
        ),
    },
)

NAVIGATION = ComponentDefinition(
    type="navigation",
    name="Navigation",
    category="navigation",
    role="navigation",
    container=True,
    accepts=("link", "button", "image"),
    max_children=12,
    prop_schema={
        "orientation": _prop(PropKind.SELECT, "Orientation", "horizontal", group=PropGroup.LAYOUT,
                             options=_options("horizontal", "vertical")),
        "items": _prop(PropKind.ARRAY, "Items", None),
    },
    export_templates={
        Target.REACT: "<nav className=\"nav nav-{{ orientation }} {{ className }}\">\n  {{ children | indent(2) }}\n</nav>",
        Target.VUE: "<nav class=\"nav nav-{{ orientation }} {{ className }}\">\n  {{ children | indent(2) }}\n</nav>",
        Target.ANGULAR: "<nav class=\"nav nav-{{ orientation }} {{ className }}\">\n  {{ children | indent(2) }}\n</nav>",
        Target.HTML: "<nav class=\"nav nav-{{ orientation }} {{ className }}\">\n  {{ children | indent(2) }}\n</nav>",
    },
)

HEADER = ComponentDefinition(
    type="header",
    name="Header",
    category="navigation",
    role="banner",
    container=True,
    accepts=("navigation", "heading", "image", "link", "button", "container"),
    prop_schema={
        "sticky": _prop(PropKind.BOOLEAN, "Sticky", False, group=PropGroup.BEHAVIOR),
        "background": _prop(PropKind.COLOR, "Background", "#ffffff", group=PropGroup.APPEARANCE),
    },
    export_templates={
        Target.REACT: "<header className=\"{{ className }}\" data-sticky=\"{{ sticky }}\" style={ { background: '{{ background }}' } }>\n  {{ children | indent(2) }}\n</header>",
        Target.VUE: "<header class=\"{{ className }}\" data-sticky=\"{{ sticky }}\" :style=\"{ background: '{{ background }}' }\">\n  {{ children | indent(2) }}\n</header>",
        Target.ANGULAR: "<header class=\"{{ className }}\" data-sticky=\"{{ sticky }}\" [ngStyle]=\"{ background: '{{ background }}' }\">\n  {{ children | indent(2) }}\n</header>",
        Target.HTML: "<header class=\"{{ className }}\" data-sticky=\"{{ sticky }}\" style=\"background: {{ background }};\">\n  {{ children | indent(2) }}\n</header>",
    },
)

FOOTER = ComponentDefinition(
    type="footer",
    name="Footer",
    category="navigation",
    role="contentinfo",
    container=True,
    accepts=("navigation", "text", "link", "container"),
    prop_schema={
        "copyright": _prop(PropKind.STRING, "Copyright", "All rights reserved."),
        "links": _prop(PropKind.OBJECT, "Links", None),
    },
    export_templates={
        Target.REACT: "<footer className=\"{{ className }}\">\n  {{ children | indent(2) }}\n  <small>{{ copyright }}</small>\n</footer>",
        Target.VUE: "<footer class=\"{{ className }}\">\n  {{ children | indent(2) }}\n  <small>{{ copyright }}</small>\n</footer>",
        Target.ANGULAR: "<footer class=\"{{ className }}\">\n  {{ children | indent(2) }}\n  <small>{{ copyright }}</small>\n</footer>",
        Target.HTML: "<footer class=\"{{ className }}\">\n  {{ children | indent(2) }}\n  <small>{{ copyright }}</small>\n</footer>",
    },
)


BUILTIN_COMPONENTS: tuple[ComponentDefinition, ...] = (
    CONTAINER,
    SECTION,
    GRID,
    CARD,
    HEADING,
    TEXT,
    BUTTON,
    LINK,
    IMAGE,
    INPUT,
    FORM,
    NAVIGATION,
    HEADER,
    FOOTER,
)

"""
Template rendering
Jinja2 environment shared by the component emitters. Catalog templates are
resolved through the registry by name (``components/<type>.<target>``);
page shells ship with the package under ``emitter/templates``.

Only ``.html`` names are autoescaped, so the html target escapes prop text
while framework targets receive it verbatim.
"""

from typing import Any, Mapping

from jinja2 import ChoiceLoader, FunctionLoader, PackageLoader, select_autoescape
from jinja2.sandbox import SandboxedEnvironment
from markupsafe import Markup

from core import get_logger, safe_json_dumps
from registry import ComponentRegistry, Target

logger = get_logger(__name__)

COMPONENT_PREFIX = "components/"


def stringify(value: Any) -> str:
    """
    Render a prop value for template output.

    None and undefined names become empty, booleans are lowercase, lists
    and dicts are compact JSON with sorted keys.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple, dict)):
        return safe_json_dumps(value, sort_keys=True)
    return str(value)


def jsx_expression(value: Any) -> str:
    """``False`` -> ``{false}`` for JSX attribute expressions."""
    return "{" + stringify(value) + "}"


def component_template_name(component_type: str, target: Target | str) -> str:
    return f"{COMPONENT_PREFIX}{component_type}.{Target(target).value}"


class TemplateRenderer:
    """
    Renders catalog and page templates.

    Definitions can come from user JSON, so templates run in a sandbox.
    Compiled templates are cached by the environment and recompiled when
    the registry replaces a definition.
    """

    def __init__(self, registry: ComponentRegistry):
        self.registry = registry
        self.autoescape = select_autoescape(enabled_extensions=("html",), default_for_string=False)
        self.env = SandboxedEnvironment(
            loader=ChoiceLoader([
                FunctionLoader(self._load_component),
                PackageLoader("emitter", "templates"),
            ]),
            autoescape=self.autoescape,
            finalize=stringify,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["jsx"] = jsx_expression

    def _load_component(self, name: str):
        if not name.startswith(COMPONENT_PREFIX):
            return None
        component_type, _, target = name[len(COMPONENT_PREFIX):].rpartition(".")
        source = self.registry.template_for(component_type, target)
        if source is None:
            return None
        logger.debug("template_compiled", type=component_type, target=target)
        return source, None, lambda: self.registry.template_for(component_type, target) == source

    def escapes(self, target: Target | str) -> bool:
        """Whether output for a target is autoescaped."""
        return self.autoescape(component_template_name("page", target))

    def render_component(self, component_type: str, target: Target | str,
                         values: Mapping[str, Any]) -> str:
        """
        Render a catalog template.

        Raises:
            jinja2.TemplateError: If the template is missing or invalid
        """
        template = self.env.get_template(component_template_name(component_type, target))
        return template.render(values)

    def render(self, name: str, **context: Any) -> str:
        """Render a packaged page template (e.g. ``html/document.html``)."""
        return self.env.get_template(name).render(context)

    def safe(self, text: str) -> Markup:
        """Mark already rendered output so it is not escaped twice."""
        return Markup(text)

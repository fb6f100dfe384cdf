"""Component registry tests."""

import pytest

from core import ValidationError
from registry import (
    ComponentDefinition,
    ComponentRegistry,
    PropKind,
    PropertySchema,
    Target,
    apply_defaults,
    has_errors,
    validate_props,
    visible_properties,
)
from registry.catalog import BUILTIN_COMPONENTS


def make_definition(type_="badge", **kwargs):
    return ComponentDefinition(
        type=type_,
        name=kwargs.pop("name", "Badge"),
        prop_schema={"label": PropertySchema(kind=PropKind.STRING, label="Label", default="New")},
        export_templates={Target.HTML: "<span>{{label}}</span>"},
        **kwargs,
    )


class TestRegistry:
    """Registration and lookup."""

    def test_register_and_get(self):
        registry = ComponentRegistry()
        assert registry.register(make_definition()) is True

        assert registry.get("badge").name == "Badge"
        assert "badge" in registry
        assert registry.has("badge")
        assert registry.get("missing") is None

    def test_duplicate_is_rejected_unless_replace(self):
        registry = ComponentRegistry([make_definition()])

        assert registry.register(make_definition(name="Other")) is False
        assert registry.get("badge").name == "Badge"

        assert registry.register(make_definition(name="Other"), replace=True) is True
        assert registry.get("badge").name == "Other"

    def test_unregister(self):
        registry = ComponentRegistry([make_definition()])
        registry.unregister("badge")
        registry.unregister("badge")
        assert len(registry) == 0

    def test_template_for(self):
        registry = ComponentRegistry([make_definition()])
        assert registry.template_for("badge", "html") == "<span>{{label}}</span>"
        assert registry.template_for("badge", Target.REACT) is None
        assert registry.template_for("missing", Target.HTML) is None

    def test_list_all_and_categories(self):
        registry = ComponentRegistry([
            make_definition("a", category="layout"),
            make_definition("b", category="forms"),
            make_definition("c", category="layout"),
        ])
        assert [d.type for d in registry.list_all()] == ["a", "b", "c"]
        assert [d.type for d in registry.list_all("layout")] == ["a", "c"]
        assert registry.categories() == ["layout", "forms"]
        assert registry.get_stats()["categories"] == {"layout": 2, "forms": 1}


class TestLoadJson:
    """Loading definitions from JSON."""

    def test_load_json(self):
        registry = ComponentRegistry()
        count = registry.load_json(
            '{"components": [{"type": "badge", "name": "Badge", '
            '"export_templates": {"html": "<span></span>"}}]}'
        )
        assert count == 1
        assert registry.template_for("badge", Target.HTML) == "<span></span>"

    def test_load_json_missing_list(self):
        with pytest.raises(ValidationError):
            ComponentRegistry().load_json('{"items": []}')

    def test_load_json_invalid_definition(self):
        with pytest.raises(ValidationError):
            ComponentRegistry().load_json('{"components": [{"name": "No type"}]}')

    def test_load_json_malformed(self):
        with pytest.raises(ValidationError):
            ComponentRegistry().load_json('{"components": [')


class TestCatalog:
    """Built-in catalog integrity."""

    def test_every_builtin_has_all_targets(self, registry):
        for definition in BUILTIN_COMPONENTS:
            assert set(definition.export_templates) == set(Target), definition.type

    def test_every_builtin_default_is_valid(self, registry):
        for definition in registry.list_all():
            assert not has_errors(validate_props(definition, definition.default_props())), definition.type

    def test_container_accept_lists(self, registry):
        form = registry.get("form")
        assert form.accepts_child("input")
        assert not form.accepts_child("image")
        assert registry.get("section").accepts_child("anything")
        assert not registry.get("button").accepts_child("text")


class TestPropertyHelpers:
    """Defaults, visibility and prop validation."""

    def test_apply_defaults_keeps_explicit_values(self, registry):
        props = apply_defaults(registry.get("button"), {"text": "Save"})
        assert props["text"] == "Save"
        assert props["variant"] == "primary"

    def test_conditional_visibility(self, registry):
        button = registry.get("button")
        assert "href" not in visible_properties(button, {"variant": "primary"})
        assert "href" in visible_properties(button, {"variant": "link"})

    def test_undeclared_prop_is_info(self, registry):
        issues = validate_props(registry.get("button"), {"text": "Go", "onClick": "x"})
        assert [(i.property, i.severity.value) for i in issues] == [("onClick", "info")]

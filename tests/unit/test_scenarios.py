"""End-to-end editing scenarios across store, placement and export."""

import pytest

from core import create_container
from document import DocumentStore, parse_document
from packager import ExportOptions, ExportPackager
from placement import PlacementEngine
from registry import ComponentRegistry, Target


@pytest.mark.unit
def test_drag_then_export_html(store, engine, packager):
    """Button at (40,40) dragged by (33,7) lands on (80,40) and exports there."""
    button = store.add({"type": "button", "props": {"text": "Click me"}, "position": {"x": 40, "y": 40}})

    engine.begin_drag(button)
    engine.propose(33, 7)
    assert engine.commit().accepted

    node = store.node(button)
    assert (node.position.x, node.position.y) == (80, 40)

    result = packager.export_document(store, ExportOptions(target=Target.HTML))
    content = result.file("components/Button.html").content
    assert result.success
    assert "Click me" in content
    assert "left: 80px" in content
    assert "top: 40px" in content


@pytest.mark.unit
def test_delete_parent_then_undo_restores_subtree(store):
    """Deleting A (with child B) removes both; undo brings both back with their ids."""
    a = store.add({"type": "section", "name": "A"})
    b = store.add({"type": "text", "name": "B", "parent": a})

    store.delete(a)
    assert a not in store and b not in store

    assert store.undo()
    assert store.node(a).children == (b,)
    assert store.node(b).parent == a
    assert store.roots() == (a,)


@pytest.mark.unit
def test_load_edit_export_every_target(store, packager):
    """A parsed document exports cleanly to every target."""
    store.load(parse_document("""
    {"elements": [
        {"header#Top": {"children": [{"navigation": {"children": [{"link#Home": {"href": "/"}}]}}]}},
        {"section#Hero": {"@at": [0, 100], "children": [
            {"heading": {"text": "Build pages", "level": 1}},
            {"button#Start": {"text": "Get started", "variant": "secondary"}}
        ]}},
        {"footer": {"copyright": "2024"}}
    ]}
    """))

    for target in Target:
        result = packager.export_document(store, ExportOptions(target=target))
        assert result.success, target
        assert result.metrics.component_count == 7
        assert result.warnings == []


@pytest.mark.unit
def test_container_wires_shared_services(settings):
    injector = create_container(settings)

    store = injector.get(DocumentStore)
    engine = injector.get(PlacementEngine)

    assert engine.store is store
    assert injector.get(ComponentRegistry) is store.registry
    assert isinstance(injector.get(ExportPackager), ExportPackager)
    assert engine.grid_size == settings.grid_size

"""Document store tests."""

from datetime import datetime, timezone

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st
from returns.result import Failure, Success

from core import Settings
from core.id import sequential_factory
from document import DocumentStore, ElementDraft, Position
from registry import Severity, default_registry

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_store(**overrides) -> DocumentStore:
    config = Settings(enable_cache=False, **overrides)
    return DocumentStore(default_registry(), config, id_factory=sequential_factory(), clock=lambda: NOW)


class TestAdd:
    """Element creation."""

    def test_add_assigns_id_defaults_and_metadata(self, store, clock):
        element_id = store.add(ElementDraft(type="button", props={"text": "Save"}))

        node = store.node(element_id)
        assert element_id == "el_1"
        assert node.name == "Button"
        assert node.props["text"] == "Save"
        assert node.props["variant"] == "primary"
        assert node.metadata.version == 1
        assert node.metadata.created_at == clock()
        assert store.roots() == ("el_1",)

    def test_add_from_mapping_with_nested_children(self, store, sample_tree):
        section = store.node(sample_tree)
        heading, button = (store.node(i) for i in section.children)

        assert section.name == "Hero"
        assert heading.type == "heading"
        assert heading.parent == sample_tree
        assert button.props["text"] == "Click me"
        assert store.roots() == (sample_tree,)
        assert len(store) == 3

    def test_add_under_accepting_parent(self, store):
        form = store.add({"type": "form"})
        field = store.add({"type": "input", "parent": form})
        assert store.node(field).parent == form
        assert store.node(form).children == (field,)

    def test_add_under_rejecting_parent_falls_back_to_root(self, store):
        form = store.add({"type": "form"})
        image = store.add({"type": "image", "parent": form})
        assert store.node(image).parent is None
        assert store.roots() == (form, image)

    def test_add_unknown_type_uses_title_name(self, store):
        element_id = store.add({"type": "carousel"})
        assert store.node(element_id).name == "Carousel"
        issues = store.validate(element_id)
        assert issues[0].severity == Severity.WARNING

    def test_add_does_not_change_selection(self, store):
        first = store.add({"type": "text"})
        store.select(first)
        store.add({"type": "text"})
        assert store.selection.selected == {first}


class TestUpdate:
    """Merging edits."""

    def test_update_merges_props_and_bumps_version(self, store):
        element_id = store.add({"type": "button", "props": {"text": "Go"}})
        assert store.update(element_id, props={"variant": "outline"}) is True

        node = store.node(element_id)
        assert node.props["text"] == "Go"
        assert node.props["variant"] == "outline"
        assert node.metadata.version == 2

    def test_update_partial_position_and_styling(self, store):
        element_id = store.add({
            "type": "text",
            "position": {"x": 10, "y": 20, "z": 3},
            "styling": {"style": {"color": "red"}},
        })
        store.update(element_id, position={"x": 50}, styling={"style": {"margin": "4px"}})

        node = store.node(element_id)
        assert node.position == Position(x=50, y=20, z=3)
        assert node.styling.style == {"color": "red", "margin": "4px"}

    def test_update_missing_element(self, store):
        assert store.update("el_404", name="x") is False
        assert not store.can_undo

    def test_update_rejects_structural_fields(self, store):
        element_id = store.add({"type": "text"})
        with pytest.raises(ValueError):
            store.update(element_id, parent=None)


class TestDelete:
    """Cascading removal."""

    def test_delete_cascades(self, store, sample_tree):
        assert store.delete(sample_tree) is True
        assert len(store) == 0
        assert store.roots() == ()

    def test_delete_child_updates_parent(self, store, sample_tree):
        heading = store.node(sample_tree).children[0]
        store.delete(heading)
        assert heading not in store.node(sample_tree).children
        assert len(store) == 2

    def test_delete_missing(self, store):
        assert store.delete("nope") is False

    def test_delete_prunes_selection_and_pointers(self, store, sample_tree):
        child = store.node(sample_tree).children[1]
        store.select(child)
        store.set_hovered(child)
        store.delete(sample_tree)

        assert store.selection.selected == frozenset()
        assert store.selection.hovered is None


class TestDuplicate:
    """Deep cloning."""

    def test_duplicate_subtree(self, store, sample_tree):
        store.update(sample_tree, position={"x": 100, "y": 100})
        clone_id = store.duplicate(sample_tree)

        clone = store.get(clone_id)
        original = store.get(sample_tree)
        assert clone.name == "Hero Copy"
        assert clone.position.x == 120
        assert clone.position.y == 120
        assert clone.metadata.version == 1
        assert [c.type for c in clone.children] == [c.type for c in original.children]
        assert {c.id for c in clone.children}.isdisjoint({c.id for c in original.children})
        assert all(c.parent == clone_id for c in clone.children)
        assert store.roots() == (sample_tree, clone_id)
        assert len(store) == 6

    def test_duplicate_missing(self, store):
        assert store.duplicate("missing") is None


class TestMove:
    """Reparenting."""

    def test_move_into_container_at_index(self, store, sample_tree):
        text = store.add({"type": "text"})
        result = store.move(text, sample_tree, 0)

        assert result == Success(text)
        assert store.node(sample_tree).children[0] == text
        assert store.roots() == (sample_tree,)

    def test_move_into_own_descendant_is_rejected(self, store):
        outer = store.add({"type": "section"})
        inner = store.add({"type": "container", "parent": outer})
        before = store.snapshot

        result = store.move(outer, inner)

        assert isinstance(result, Failure)
        assert store.snapshot is before

    def test_move_into_self_is_rejected(self, store):
        section = store.add({"type": "section"})
        assert isinstance(store.move(section, section), Failure)

    def test_move_into_non_container_is_rejected(self, store):
        button = store.add({"type": "button"})
        text = store.add({"type": "text"})
        assert isinstance(store.move(text, button), Failure)

    def test_move_into_full_container_is_rejected(self, store):
        card = store.add({"type": "card", "children": [{"type": "text"} for _ in range(8)]})
        extra = store.add({"type": "text"})
        result = store.move(extra, card)
        assert "full" in result.failure()

    def test_reorder_within_full_container_is_allowed(self, store):
        card = store.add({"type": "card", "children": [{"type": "text"} for _ in range(8)]})
        last = store.node(card).children[-1]
        assert isinstance(store.move(last, card, 0), Success)
        assert store.node(card).children[0] == last

    def test_move_to_root(self, store, sample_tree):
        button = store.node(sample_tree).children[1]
        store.move(button, None)
        assert store.node(button).parent is None
        assert store.roots() == (sample_tree, button)


class TestHistory:
    """Undo and redo."""

    def test_undo_redo(self, store):
        element_id = store.add({"type": "text"})
        store.update(element_id, props={"size": 24})

        assert store.undo() is True
        assert store.node(element_id).props["size"] == 16
        assert store.redo() is True
        assert store.node(element_id).props["size"] == 24

    def test_undo_on_empty_history(self, store):
        assert store.undo() is False
        assert store.redo() is False

    def test_new_edit_discards_redo(self, store):
        store.add({"type": "text"})
        store.undo()
        assert store.can_redo
        store.add({"type": "button"})
        assert not store.can_redo

    def test_snapshots_are_not_mutated(self, store):
        element_id = store.add({"type": "text"})
        before = store.snapshot
        store.update(element_id, name="Changed")
        assert before.get(element_id).name == "Text"

    def test_undo_restores_nested_props_after_read_modify_write(self, store):
        element_id = store.add({"type": "text", "props": {"items": [1]}})

        items = store.get(element_id).props["items"]
        items.append(2)
        store.update(element_id, props={"items": items})

        assert store.undo()
        assert store.get(element_id).props["items"] == [1]
        assert store.redo()
        assert store.get(element_id).props["items"] == [1, 2]

    def test_inputs_and_views_are_detached_from_the_document(self, store):
        props = {"tags": ["a"]}
        style = {"margin": {"top": 4}}
        element_id = store.add({"type": "text", "props": props, "styling": {"style": style}})

        props["tags"].append("b")
        style["margin"]["top"] = 8
        view = store.get(element_id)
        view.props["tags"].append("c")
        view.styling.style["margin"]["top"] = 16
        store.node(element_id).props["tags"].append("d")
        store.update(element_id, styling={"style": style})
        style["margin"]["top"] = 32

        node = store.node(element_id)
        assert node.props["tags"] == ["a"]
        assert node.styling.style == {"margin": {"top": 8}}
        assert store.undo()
        assert store.node(element_id).styling.style == {"margin": {"top": 4}}

    def test_snapshot_mapping_is_read_only(self, store):
        store.add({"type": "text"})
        with pytest.raises(TypeError):
            store.snapshot.nodes["el_99"] = None

    def test_max_history(self):
        store = make_store(max_history=2)
        for _ in range(5):
            store.add({"type": "text"})
        assert store.undo() and store.undo()
        assert store.undo() is False
        assert len(store) == 3

    def test_load_resets_history(self, store):
        store.add({"type": "text"})
        roots = store.load([ElementDraft(type="section", children=[ElementDraft(type="text")])])
        assert len(roots) == 1
        assert len(store) == 2
        assert not store.can_undo

    def test_undo_prunes_selection(self, store):
        element_id = store.add({"type": "text"})
        store.select(element_id)
        store.undo()
        assert store.selection.selected == frozenset()


class TestSelection:
    """Selection and subscriptions."""

    def test_select_replace_toggle_clear(self, store):
        a = store.add({"type": "text"})
        b = store.add({"type": "text"})

        assert store.select(a) == {a}
        assert store.select(b, multi=True) == {a, b}
        assert store.select(a, multi=True) == {b}
        assert store.select(None) == frozenset()

    def test_select_unknown_is_ignored(self, store):
        assert store.select("ghost") == frozenset()

    def test_selection_is_not_history(self, store):
        element_id = store.add({"type": "text"})
        store.select(element_id)
        store.undo()
        store.redo()
        assert store.selection.selected == frozenset()

    def test_subscribe_and_unsubscribe(self, store):
        calls = []
        unsubscribe = store.subscribe(lambda s: calls.append(len(s)))

        store.add({"type": "text"})
        unsubscribe()
        store.add({"type": "text"})

        assert calls == [1]

    def test_queries(self, store, sample_tree):
        assert [n.type for n in store.find_by_type("button")] == ["button"]
        assert len(store.descendants(sample_tree)) == 2
        assert store.get("missing") is None
        assert store.tree()[0].count() == 3


# ============================================================================
# Property tests
# ============================================================================

OPERATIONS = st.lists(
    st.tuples(
        st.sampled_from(["add", "add_child", "update", "delete", "duplicate", "move_root"]),
        st.integers(min_value=0, max_value=50),
    ),
    max_size=12,
)


def apply_operation(store: DocumentStore, operation: str, pick: int) -> None:
    """Apply one edit; every branch records exactly one history entry."""
    ids = sorted(store.all_ids())
    if operation == "add" or not ids:
        store.add({"type": "section"})
        return
    target = ids[pick % len(ids)]
    if operation == "add_child":
        store.add({"type": "text", "parent": target})
    elif operation == "update":
        marks = store.get(target).props.get("marks", [])
        marks.append(pick)
        store.update(target, props={"marks": marks})
    elif operation == "delete":
        store.delete(target)
    elif operation == "duplicate":
        store.duplicate(target)
    else:
        store.move(target, None)


def tree_values(store: DocumentStore) -> list[dict]:
    return [element.model_dump() for element in store.tree()]


@hypothesis_settings(deadline=None, max_examples=50)
@given(OPERATIONS)
def test_undo_redo_round_trip(operations):
    """Property test: undo walks back through every state, redo walks forward again."""
    store = make_store()
    states = [(store.snapshot, tree_values(store))]
    for operation, pick in operations:
        apply_operation(store, operation, pick)
        states.append((store.snapshot, tree_values(store)))

    for snapshot, values in reversed(states[:-1]):
        assert store.undo()
        assert store.snapshot == snapshot
        assert tree_values(store) == values
    assert not store.undo()

    for snapshot, values in states[1:]:
        assert store.redo()
        assert store.snapshot == snapshot
        assert tree_values(store) == values
    assert not store.redo()


@hypothesis_settings(deadline=None, max_examples=50)
@given(OPERATIONS)
def test_tree_invariants_hold(operations):
    """Property test: parent links, child lists and roots stay consistent."""
    store = make_store()
    for operation, pick in operations:
        apply_operation(store, operation, pick)

    snapshot = store.snapshot
    reachable = []
    for root in snapshot.roots:
        assert snapshot.get(root).parent is None
        reachable.append(root)
        reachable.extend(snapshot.descendants(root))
    assert sorted(reachable) == sorted(snapshot.nodes)

    for node in snapshot.nodes.values():
        for child in node.children:
            assert snapshot.get(child).parent == node.id

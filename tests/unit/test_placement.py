"""Placement engine tests."""

import pytest
from hypothesis import given, strategies as st
from returns.result import Failure, Success

from core import Settings
from core.id import sequential_factory
from document import DocumentStore, ElementDraft, Position
from placement import Bounds, DropStatus, DropZone, PlacementEngine
from registry import default_registry


def make_engine(grid_size: int = 20) -> PlacementEngine:
    config = Settings(grid_size=grid_size, enable_cache=False)
    store = DocumentStore(default_registry(), config, id_factory=sequential_factory())
    return PlacementEngine(store, config)


class TestGrid:
    """Snapping and grid configuration."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, 0), (9, 0), (10, 20), (29.9, 20), (30, 40), (-10, 0), (-11, -20)],
    )
    def test_snap_value_rounds_half_up(self, engine, value, expected):
        assert engine.snap_value(value) == expected

    def test_snap_disabled_is_passthrough(self, engine):
        engine.toggle_snap(False)
        assert engine.snap_to_grid(13, 27) == (13, 27)
        assert engine.toggle_snap() is True

    def test_grid_size_is_clamped(self, engine):
        assert engine.set_grid_size(1) == 5
        assert engine.set_grid_size(500) == 100
        assert engine.set_grid_size(25) == 25

    def test_snap_position_keeps_z(self, engine):
        snapped = engine.snap_position(Position(x=33, y=7, z=4))
        assert (snapped.x, snapped.y, snapped.z) == (40, 0, 4)


@given(
    st.integers(min_value=5, max_value=100),
    st.floats(min_value=-10_000, max_value=10_000, allow_nan=False),
    st.floats(min_value=-10_000, max_value=10_000, allow_nan=False),
)
def test_snap_is_idempotent(grid_size, x, y):
    """Property test: snapping a snapped point changes nothing."""
    engine = make_engine(grid_size)
    once = engine.snap_to_grid(x, y)
    assert engine.snap_to_grid(*once) == once
    assert once[0] % grid_size == 0 and once[1] % grid_size == 0


class TestZones:
    """Drop zone lookups and checks."""

    def test_default_zones(self, engine):
        assert [z.id for z in engine.zones] == ["main-canvas", "header-zone", "footer-zone"]

    def test_bounds_are_half_open(self):
        bounds = Bounds(x=0, y=0, width=100, height=50)
        assert bounds.contains(0, 0)
        assert bounds.contains(99.9, 49.9)
        assert not bounds.contains(100, 10)
        assert not bounds.contains(10, 50)

    def test_zone_at_prefers_smallest_accepting_zone(self, engine):
        assert engine.zone_at(10, 10, "header") == "header-zone"
        assert engine.zone_at(10, 10, "button") == "main-canvas"
        assert engine.zone_at(10, 10) == "header-zone"
        assert engine.zone_at(5000, 5000) is None

    def test_valid_drop_zones(self, engine):
        assert engine.get_valid_drop_zones("navigation") == ["main-canvas", "header-zone", "footer-zone"]
        assert engine.get_valid_drop_zones("button") == ["main-canvas"]

    def test_check_drop_rejections(self, engine):
        assert isinstance(engine.check_drop("missing", ["button"]), Failure)
        assert "does not accept" in engine.check_drop("header-zone", ["button"]).failure()
        assert isinstance(engine.check_drop("header-zone", ["header"]), Success)

    def test_check_drop_capacity(self, engine):
        engine.store.add({"type": "header", "position": {"x": 0, "y": 0}})
        assert "full" in engine.check_drop("header-zone", ["header"]).failure()
        assert not engine.is_valid_drop_target("header-zone", "navigation")

    def test_add_and_remove_zone(self, engine):
        engine.add_zone(DropZone(id="sidebar", accepts=("text",), bounds=Bounds(x=1200, width=300, height=2000)))
        assert engine.zone_at(1300, 100, "text") == "sidebar"
        engine.remove_zone("sidebar")
        assert engine.get_zone("sidebar") is None


class TestDropNew:
    """Dropping palette items."""

    def test_drop_new_snaps_and_adds(self, engine):
        outcome = engine.drop_new(ElementDraft(type="button", position=Position(x=43, y=118)))

        assert outcome.accepted
        assert outcome.zone_id == "main-canvas"
        node = engine.store.node(outcome.element_ids[0])
        assert (node.position.x, node.position.y) == (40, 120)

    def test_drop_new_rejected_zone(self, engine):
        outcome = engine.drop_new(ElementDraft(type="button"), zone_id="footer-zone")
        assert outcome.status == DropStatus.REJECTED
        assert len(engine.store) == 0

    def test_drop_new_outside_every_zone(self, engine):
        outcome = engine.drop_new(ElementDraft(type="text", position=Position(x=5000, y=5000)))
        assert not outcome.accepted
        assert "No drop zone" in outcome.reason


class TestDrag:
    """Drag protocol."""

    def test_drag_commit_snaps_delta(self, engine):
        button = engine.store.add({"type": "button", "position": {"x": 40, "y": 40}})

        session = engine.begin_drag(button)
        proposal = engine.propose(33, 7)
        assert (proposal.dx, proposal.dy) == (40, 0)
        assert proposal.valid
        assert engine.store.node(button).position.x == 40

        outcome = engine.commit()
        node = engine.store.node(button)
        assert outcome.accepted
        assert session.id.startswith("drag_")
        assert (node.position.x, node.position.y) == (80, 40)
        assert engine.session is None

    def test_drag_moves_selection_as_one_edit(self, engine):
        store = engine.store
        a = store.add({"type": "text", "position": {"x": 100, "y": 100}})
        b = store.add({"type": "text", "position": {"x": 200, "y": 300}})
        store.select(a)
        store.select(b, multi=True)

        engine.begin_drag(a)
        engine.propose(20, 40)
        engine.commit()

        assert store.node(a).position == Position(x=120, y=140)
        assert store.node(b).position == Position(x=220, y=340)
        store.undo()
        assert store.node(a).position == Position(x=100, y=100)
        assert store.node(b).position == Position(x=200, y=300)

    def test_locked_elements_do_not_move(self, engine):
        store = engine.store
        locked = store.add({"type": "text", "constraints": {"locked": True}})
        free = store.add({"type": "text"})
        store.select(free)
        store.select(locked, multi=True)

        assert engine.begin_drag(locked) is None
        session = engine.begin_drag(free)
        assert session.element_ids == (free,)

    def test_rejected_drop_leaves_positions(self, engine):
        store = engine.store
        text = store.add({"type": "text", "position": {"x": 100, "y": 100}})
        engine.begin_drag(text)
        proposal = engine.propose(0, -100, zone_id="header-zone")
        assert not proposal.valid

        outcome = engine.commit()
        assert outcome.status == DropStatus.REJECTED
        assert store.node(text).position == Position(x=100, y=100)
        assert not store.can_redo

    def test_zero_delta_commit_is_noop(self, engine):
        text = engine.store.add({"type": "text", "position": {"x": 100, "y": 100}})
        engine.begin_drag(text)
        engine.propose(4, -6)
        history_before = engine.store.snapshot

        assert engine.commit().accepted
        assert engine.store.snapshot is history_before

    def test_cancel(self, engine):
        text = engine.store.add({"type": "text"})
        engine.begin_drag(text)
        assert engine.store.selection.dragged == text
        engine.propose(100, 100)
        engine.cancel()

        assert engine.session is None
        assert engine.store.selection.dragged is None
        assert engine.store.node(text).position == Position()

    def test_propose_without_session(self, engine):
        with pytest.raises(RuntimeError):
            engine.propose(10, 10)

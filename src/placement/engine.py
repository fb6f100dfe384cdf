"""
Placement Engine
Grid snapping, drop-zone checks and the drag protocol.

A drag is ``begin_drag`` followed by any number of ``propose`` calls and
exactly one ``commit`` or ``cancel``. Proposals never touch the document;
a commit writes every moved element in a single history entry.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable

from returns.result import Result, Success, Failure

from core import Settings, get_logger
from core.id import new_drag_id
from document.models import ElementDraft, Position

from .zones import DropZone, default_zones

if TYPE_CHECKING:
    from document.store import DocumentStore

logger = get_logger(__name__)

MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 100


class DropStatus(str, Enum):
    """Outcome of a drop."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class DropOutcome:
    """Result of committing a drag or dropping a new element."""

    status: DropStatus
    element_ids: tuple[str, ...] = ()
    zone_id: str | None = None
    reason: str | None = None
    positions: dict[str, Position] = field(default_factory=dict)

    @property
    def accepted(self) -> bool:
        return self.status == DropStatus.ACCEPTED


@dataclass(frozen=True)
class Proposal:
    """Snapped candidate for the current pointer position (not committed)."""

    dx: float
    dy: float
    positions: dict[str, Position]
    zone_id: str | None
    valid: bool


@dataclass
class DragSession:
    """In-memory state of one drag; discarded on commit or cancel."""

    id: str
    primary: str
    element_ids: tuple[str, ...]
    origins: dict[str, Position]
    proposal: Proposal | None = None

    @property
    def start(self) -> Position:
        return self.origins[self.primary]


class PlacementEngine:
    """Gates element placement on the canvas."""

    def __init__(self, store: "DocumentStore", settings: Settings | None = None,
                 zones: Iterable[DropZone] | None = None):
        self.store = store
        settings = settings or store.settings
        self._grid_size = _clamp_grid(settings.grid_size)
        self.snap_enabled = settings.snap_enabled
        self._zones: dict[str, DropZone] = {
            zone.id: zone for zone in (default_zones() if zones is None else zones)
        }
        self._session: DragSession | None = None

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------

    @property
    def grid_size(self) -> int:
        return self._grid_size

    def set_grid_size(self, size: int) -> int:
        """Set the grid step, clamped to the supported range."""
        self._grid_size = _clamp_grid(size)
        logger.debug("grid_size_set", requested=size, grid_size=self._grid_size)
        return self._grid_size

    def toggle_snap(self, enabled: bool | None = None) -> bool:
        self.snap_enabled = (not self.snap_enabled) if enabled is None else enabled
        return self.snap_enabled

    def snap_value(self, value: float) -> float:
        """Round to the nearest grid multiple (halves round up)."""
        if not self.snap_enabled:
            return value
        return math.floor(value / self._grid_size + 0.5) * self._grid_size

    def snap_to_grid(self, x: float, y: float) -> tuple[float, float]:
        """Snap a point; pass-through when snapping is disabled. Idempotent."""
        return self.snap_value(x), self.snap_value(y)

    def snap_position(self, position: Position) -> Position:
        x, y = self.snap_to_grid(position.x, position.y)
        return position.model_copy(update={"x": x, "y": y})

    # ------------------------------------------------------------------
    # Zones
    # ------------------------------------------------------------------

    @property
    def zones(self) -> list[DropZone]:
        return list(self._zones.values())

    def get_zone(self, zone_id: str) -> DropZone | None:
        return self._zones.get(zone_id)

    def add_zone(self, zone: DropZone) -> None:
        self._zones[zone.id] = zone

    def remove_zone(self, zone_id: str) -> None:
        self._zones.pop(zone_id, None)

    def count_in_zone(self, zone: DropZone, exclude: Iterable[str] = ()) -> int:
        """Number of document elements whose position lies inside the zone."""
        excluded = set(exclude)
        return sum(
            1
            for node in self.store.snapshot.nodes.values()
            if node.id not in excluded and zone.bounds.contains(node.position.x, node.position.y)
        )

    def check_drop(self, zone_id: str, element_types: Iterable[str],
                   exclude: Iterable[str] = ()) -> Result[DropZone, str]:
        """
        Validate dropping elements of the given types into a zone.

        Args:
            zone_id: Target zone
            element_types: One entry per element being dropped
            exclude: Ids not counted against capacity (elements being moved)

        Returns:
            Success(zone) or Failure(reason)
        """
        zone = self._zones.get(zone_id)
        if zone is None:
            return Failure(f"Drop zone {zone_id} not found")

        types = list(element_types)
        for element_type in types:
            if not zone.accepts_type(element_type):
                return Failure(f"{zone_id} does not accept {element_type}")

        if zone.max_components is not None:
            occupied = self.count_in_zone(zone, exclude)
            if occupied + len(types) > zone.max_components:
                return Failure(f"{zone_id} is full ({zone.max_components} max)")

        return Success(zone)

    def is_valid_drop_target(self, zone_id: str, element_type: str) -> bool:
        """True when the zone exists, accepts the type and has room for one more."""
        return isinstance(self.check_drop(zone_id, [element_type]), Success)

    def get_valid_drop_zones(self, element_type: str) -> list[str]:
        """Ids of zones whose accept list covers the type."""
        return [zone.id for zone in self._zones.values() if zone.accepts_type(element_type)]

    def zone_at(self, x: float, y: float, element_type: str | None = None) -> str | None:
        """
        Smallest zone containing the point, preferring zones that accept
        ``element_type`` when given.
        """
        hits = sorted(
            (z for z in self._zones.values() if z.bounds.contains(x, y)),
            key=lambda z: (z.bounds.width * z.bounds.height, z.id),
        )
        if element_type is not None:
            for zone in hits:
                if zone.accepts_type(element_type):
                    return zone.id
        return hits[0].id if hits else None

    # ------------------------------------------------------------------
    # Dropping new elements
    # ------------------------------------------------------------------

    def drop_new(self, draft: ElementDraft, zone_id: str | None = None) -> DropOutcome:
        """Snap a new element's position, validate the zone and add it."""
        position = self.snap_position(draft.position)
        zone_id = zone_id or self.zone_at(position.x, position.y, draft.type)

        if zone_id is None:
            return self._reject((), None, f"No drop zone at ({position.x:g}, {position.y:g})")

        verdict = self.check_drop(zone_id, [draft.type])
        if isinstance(verdict, Failure):
            return self._reject((), zone_id, verdict.failure())

        element_id = self.store.add(draft.model_copy(update={"position": position}))
        logger.info("element_dropped", id=element_id, type=draft.type, zone=zone_id)
        return DropOutcome(DropStatus.ACCEPTED, (element_id,), zone_id, positions={element_id: position})

    # ------------------------------------------------------------------
    # Drag protocol
    # ------------------------------------------------------------------

    @property
    def session(self) -> DragSession | None:
        return self._session

    def begin_drag(self, element_id: str) -> DragSession | None:
        """
        Start dragging an element.

        If the element is selected, every selected element moves with it.
        Locked elements stay put. Returns None when nothing can be dragged.
        """
        snapshot = self.store.snapshot
        node = snapshot.get(element_id)
        if node is None or node.constraints.locked:
            return None

        if self._session is not None:
            self.cancel()

        selected = self.store.selection.selected
        moving = sorted(selected) if element_id in selected else [element_id]
        moving = [i for i in moving if i in snapshot and not snapshot.nodes[i].constraints.locked]

        self._session = DragSession(
            id=new_drag_id(),
            primary=element_id,
            element_ids=tuple(moving),
            origins={i: snapshot.nodes[i].position for i in moving},
        )
        self.store.set_dragged(element_id)
        logger.debug("drag_started", drag=self._session.id, ids=moving)
        return self._session

    def propose(self, dx: float, dy: float, zone_id: str | None = None) -> Proposal:
        """
        Recompute the snapped candidate for a pointer delta since drag start.

        Raises:
            RuntimeError: If no drag is in progress
        """
        session = self._require_session()
        start = session.start
        target = self.snap_position(start.offset(dx, dy))
        applied_dx, applied_dy = target.x - start.x, target.y - start.y

        positions = {
            i: origin.offset(applied_dx, applied_dy) for i, origin in session.origins.items()
        }
        primary_type = self.store.snapshot.nodes[session.primary].type
        zone_id = zone_id or self.zone_at(target.x, target.y, primary_type)

        valid = zone_id is not None and isinstance(self._check_session_drop(session, zone_id), Success)
        session.proposal = Proposal(applied_dx, applied_dy, positions, zone_id, valid)
        return session.proposal

    def commit(self) -> DropOutcome:
        """
        Finish the drag: validate the last proposal and apply it as one edit.

        A rejected drop leaves every position unchanged.
        """
        session = self._require_session()
        self._end_session()

        proposal = session.proposal
        if proposal is None or (proposal.dx == 0 and proposal.dy == 0):
            return DropOutcome(DropStatus.ACCEPTED, (), proposal.zone_id if proposal else None)

        if proposal.zone_id is None:
            return self._reject(session.element_ids, None, "No drop zone under pointer")

        verdict = self._check_session_drop(session, proposal.zone_id)
        if isinstance(verdict, Failure):
            return self._reject(session.element_ids, proposal.zone_id, verdict.failure())

        moved = self.store.reposition(proposal.positions)
        logger.info("drag_committed", drag=session.id, ids=moved, zone=proposal.zone_id,
                    dx=proposal.dx, dy=proposal.dy)
        return DropOutcome(
            DropStatus.ACCEPTED,
            tuple(moved),
            proposal.zone_id,
            positions={i: proposal.positions[i] for i in moved},
        )

    def cancel(self) -> None:
        """Abandon the current drag without touching the document."""
        if self._session is not None:
            logger.debug("drag_cancelled", drag=self._session.id)
        self._end_session()

    def _check_session_drop(self, session: DragSession, zone_id: str) -> Result[DropZone, str]:
        nodes = self.store.snapshot.nodes
        types = [nodes[i].type for i in session.element_ids if i in nodes]
        return self.check_drop(zone_id, types, exclude=session.element_ids)

    def _require_session(self) -> DragSession:
        if self._session is None:
            raise RuntimeError("No drag in progress")
        return self._session

    def _end_session(self) -> None:
        self._session = None
        self.store.set_dragged(None)

    def _reject(self, element_ids: Iterable[str], zone_id: str | None, reason: str) -> DropOutcome:
        logger.info("drop_rejected", ids=list(element_ids), zone=zone_id, reason=reason)
        return DropOutcome(DropStatus.REJECTED, tuple(element_ids), zone_id, reason=reason)


def _clamp_grid(size: int) -> int:
    return max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(size)))

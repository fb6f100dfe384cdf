"""
Placement package
Grid snapping, drop zones, reparent rules and the drag protocol.
"""

from .rules import ReparentRules
from .zones import Bounds, DropZone, default_zones
from .engine import (
    DragSession,
    DropOutcome,
    DropStatus,
    PlacementEngine,
    Proposal,
)

__all__ = [
    "ReparentRules",
    "Bounds",
    "DropZone",
    "default_zones",
    "DragSession",
    "DropOutcome",
    "DropStatus",
    "PlacementEngine",
    "Proposal",
]

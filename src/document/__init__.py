"""
Document package
Element arena, snapshot history and the store that owns them.
"""

from .models import (
    Collaboration,
    Constraints,
    Element,
    ElementDraft,
    Metadata,
    Node,
    Position,
    SelectionState,
    Snapshot,
    Styling,
)
from .history import History
from .store import DocumentStore
from .codec import DocumentParser, dump_document, parse_document

__all__ = [
    "Collaboration",
    "Constraints",
    "Element",
    "ElementDraft",
    "Metadata",
    "Node",
    "Position",
    "SelectionState",
    "Snapshot",
    "Styling",
    "History",
    "DocumentStore",
    "DocumentParser",
    "dump_document",
    "parse_document",
]

"""ID Generation System.

Centralized ULID-based ID management for the page builder.

Features:
- ULIDs: Lexicographically sortable, timestamp-based
- Type-safe: NewType wrappers for different ID categories
- Prefixed: Type-specific prefixes for debugging (el_*, drag_*, exp_*)

Element ids are stable for the lifetime of a node and are never reused,
so undo can restore a deleted subtree with its original ids.
"""

from datetime import datetime
from typing import Callable, NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

ElementID = NewType("ElementID", str)
"""Document element identifier"""

DragID = NewType("DragID", str)
"""Drag session identifier"""

ExportID = NewType("ExportID", str)
"""Export run identifier"""

IdFactory = Callable[[], str]
"""Callable producing fresh element ids (injectable for tests)"""

# ============================================================================
# ID Prefixes (for debugging and type identification)
# ============================================================================


class Prefix:
    """ID prefix constants."""

    ELEMENT = "el"
    DRAG = "drag"
    EXPORT = "exp"


# ============================================================================
# ULID Generator
# ============================================================================


class Generator:
    """ULID generator.

    Monotonic within the same millisecond.
    """

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"

    def timestamp(self, id_str: str) -> int:
        """Extract timestamp (milliseconds) from ULID."""
        try:
            ulid_str = id_str.split("_")[1] if "_" in id_str else id_str
            ulid = ULID.from_str(ulid_str)
            return int(ulid.timestamp * 1000)
        except (ValueError, IndexError):
            return 0


# Singleton instance
_generator = Generator()

# ============================================================================
# Typed ID Generators
# ============================================================================


def new_element_id() -> ElementID:
    """Generate new element ID."""
    return ElementID(_generator.generate_with_prefix(Prefix.ELEMENT))


def new_drag_id() -> DragID:
    """Generate new drag session ID."""
    return DragID(_generator.generate_with_prefix(Prefix.DRAG))


def new_export_id() -> ExportID:
    """Generate new export run ID."""
    return ExportID(_generator.generate_with_prefix(Prefix.EXPORT))


def sequential_factory(prefix: str = Prefix.ELEMENT, start: int = 1) -> IdFactory:
    """Build a deterministic id factory (`el_1`, `el_2`, ...).

    Args:
        prefix: Prefix for generated ids
        start: First counter value

    Returns:
        Callable returning the next id on every call
    """
    counter = start - 1

    def _next() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}_{counter}"

    return _next


# ============================================================================
# Validation and Parsing
# ============================================================================


def is_valid(id_str: str) -> bool:
    """Check if string is a valid (optionally prefixed) ULID.

    Args:
        id_str: ID string to validate

    Returns:
        True if valid ULID format
    """
    try:
        ulid_part = id_str.split("_")[1] if "_" in id_str else id_str

        # ULID is 26 characters
        if len(ulid_part) != 26:
            return False

        ULID.from_str(ulid_part)
        return True
    except (ValueError, IndexError):
        return False


def extract_timestamp(id_str: str) -> datetime | None:
    """Extract timestamp from ULID.

    Args:
        id_str: ULID string

    Returns:
        Datetime object or None if invalid
    """
    timestamp_ms = _generator.timestamp(id_str)
    return datetime.fromtimestamp(timestamp_ms / 1000.0) if timestamp_ms > 0 else None


def extract_prefix(id_str: str) -> str | None:
    """Extract prefix from prefixed ID.

    Args:
        id_str: Prefixed ID string

    Returns:
        Prefix string or None if no prefix
    """
    parts = id_str.split("_")
    return parts[0] if len(parts) == 2 else None


# ============================================================================
# Type Guards
# ============================================================================


def is_element_id(id_str: str) -> bool:
    """Check if ID is a generated element ID."""
    return id_str.startswith(f"{Prefix.ELEMENT}_") and is_valid(id_str)


def is_drag_id(id_str: str) -> bool:
    """Check if ID is a drag session ID."""
    return id_str.startswith(f"{Prefix.DRAG}_") and is_valid(id_str)


def is_export_id(id_str: str) -> bool:
    """Check if ID is an export run ID."""
    return id_str.startswith(f"{Prefix.EXPORT}_") and is_valid(id_str)

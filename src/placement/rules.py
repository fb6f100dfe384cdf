"""Reparenting rules shared by the document store and the placement engine."""

from typing import TYPE_CHECKING

from returns.result import Result, Success, Failure

from registry import ComponentRegistry

if TYPE_CHECKING:
    from document.models import Snapshot


class ReparentRules:
    """
    Decide whether an element may be nested under a new parent.

    Pure over a snapshot; returns the rejection reason instead of raising.
    """

    def __init__(self, registry: ComponentRegistry):
        self.registry = registry

    def check_move(self, snapshot: "Snapshot", element_id: str,
                   parent_id: str | None) -> Result[None, str]:
        """
        Validate moving an existing element.

        Args:
            snapshot: Current document state
            element_id: Element to move
            parent_id: New parent (None = root level)
        """
        node = snapshot.get(element_id)
        if node is None:
            return Failure(f"Element {element_id} not found")

        if parent_id is None:
            return Success(None)

        if parent_id == element_id or parent_id in snapshot.descendants(element_id):
            return Failure("Cannot move an element into itself or its descendants")

        return self.check_parent(snapshot, node.type, parent_id, moving=element_id)

    def check_parent(self, snapshot: "Snapshot", element_type: str, parent_id: str,
                     moving: str | None = None) -> Result[None, str]:
        """
        Validate that ``parent_id`` can take one more child of ``element_type``.

        Args:
            moving: Id already among the parent's children that is being
                reordered (not counted against capacity)
        """
        parent = snapshot.get(parent_id)
        if parent is None:
            return Failure(f"Parent {parent_id} not found")

        definition = self.registry.get(parent.type)
        if definition is None or not definition.container:
            return Failure(f"{parent.type} cannot contain children")

        if not definition.accepts_child(element_type):
            return Failure(f"{parent.type} does not accept {element_type}")

        if definition.max_children is not None:
            occupied = sum(1 for child in parent.children if child != moving)
            if occupied >= definition.max_children:
                return Failure(f"{parent.type} is full ({definition.max_children} children max)")

        return Success(None)

"""
Document Models
Arena records, tree views and edit inputs for the element document.
"""

import copy
from datetime import datetime
from typing import Any, Mapping
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """Canvas position; z orders overlapping elements."""
    model_config = ConfigDict(frozen=True)

    x: float = 0
    y: float = 0
    z: int = 0

    def offset(self, dx: float, dy: float) -> "Position":
        return self.model_copy(update={"x": self.x + dx, "y": self.y + dy})


class Constraints(BaseModel):
    """Layout intent, independent of props."""
    model_config = ConfigDict(frozen=True)

    width: float | str | None = None
    height: float | str | None = None
    min_width: float | None = None
    max_width: float | None = None
    min_height: float | None = None
    max_height: float | None = None
    responsive: bool = True
    locked: bool = False


class Styling(BaseModel):
    """Free-form style overrides plus an optional class name."""
    model_config = ConfigDict(frozen=True)

    class_name: str = ""
    style: dict[str, Any] = Field(default_factory=dict)
    variants: dict[str, dict[str, Any]] = Field(default_factory=dict)


class Metadata(BaseModel):
    """Lifecycle stamps; version starts at 1 and increases on every edit."""
    model_config = ConfigDict(frozen=True)

    created_at: datetime
    updated_at: datetime
    version: int = Field(default=1, ge=1)
    author: str | None = None

    def touch(self, now: datetime) -> "Metadata":
        return self.model_copy(update={"updated_at": now, "version": self.version + 1})


class Node(BaseModel):
    """
    Arena record for one element.

    ``children`` is the authoritative structure; ``parent`` is a lookup
    convenience kept consistent by the store.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    name: str
    props: dict[str, Any] = Field(default_factory=dict)
    children: tuple[str, ...] = ()
    parent: str | None = None
    position: Position = Field(default_factory=Position)
    constraints: Constraints = Field(default_factory=Constraints)
    styling: Styling = Field(default_factory=Styling)
    metadata: Metadata


class Element(BaseModel):
    """Tree view of a node with nested children (what emitters consume)."""

    id: str
    type: str
    name: str
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["Element"] = Field(default_factory=list)
    parent: str | None = None
    position: Position = Field(default_factory=Position)
    constraints: Constraints = Field(default_factory=Constraints)
    styling: Styling = Field(default_factory=Styling)
    metadata: Metadata

    def walk(self):
        """Yield this element and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def count(self) -> int:
        return sum(1 for _ in self.walk())


Element.model_rebuild()


class ElementDraft(BaseModel):
    """Input to ``DocumentStore.add``: an element without id or metadata."""

    type: str = Field(..., min_length=1)
    name: str | None = None
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["ElementDraft"] = Field(default_factory=list)
    parent: str | None = Field(default=None, description="Attach under this element when it accepts the type")
    position: Position = Field(default_factory=Position)
    constraints: Constraints = Field(default_factory=Constraints)
    styling: Styling = Field(default_factory=Styling)
    author: str | None = None


ElementDraft.model_rebuild()


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable document state: arena plus ordered root ids.

    Node records are shared with later snapshots; read them, never mutate
    their props or styling in place.
    """

    nodes: Mapping[str, Node] = field(default_factory=dict)
    roots: tuple[str, ...] = ()

    def get(self, element_id: str) -> Node | None:
        return self.nodes.get(element_id)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def siblings_of(self, parent_id: str | None) -> tuple[str, ...]:
        if parent_id is None:
            return self.roots
        parent = self.nodes.get(parent_id)
        return parent.children if parent else ()

    def descendants(self, element_id: str) -> list[str]:
        """Ids of every descendant, depth first (excluding the element)."""
        result: list[str] = []
        stack = list(reversed(self.siblings_of(element_id)))
        while stack:
            current = stack.pop()
            result.append(current)
            node = self.nodes.get(current)
            if node:
                stack.extend(reversed(node.children))
        return result

    def to_element(self, element_id: str) -> Element:
        """
        Materialize the tree view rooted at an element.

        Props and styling are deep copies, so edits to the view never reach
        the snapshot.
        """
        node = self.nodes[element_id]
        return Element(
            id=node.id,
            type=node.type,
            name=node.name,
            props=copy.deepcopy(node.props),
            children=[self.to_element(child) for child in node.children],
            parent=node.parent,
            position=node.position,
            constraints=node.constraints,
            styling=node.styling.model_copy(deep=True),
            metadata=node.metadata,
        )

    def tree(self) -> list[Element]:
        return [self.to_element(root) for root in self.roots]


@dataclass(frozen=True)
class SelectionState:
    """Selected ids plus hover/drag pointers."""

    selected: frozenset[str] = frozenset()
    hovered: str | None = None
    dragged: str | None = None


@dataclass
class Collaboration:
    """Presence data (cursor per user, lock owner per element). Informational only."""

    cursors: dict[str, Position] = field(default_factory=dict)
    locks: dict[str, str] = field(default_factory=dict)

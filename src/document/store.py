"""
Document Store
Sole owner of the element lifecycle, the selection pointers and the
snapshot history.

Every successful mutation builds a new immutable ``Snapshot`` and pushes
it onto the history in one step. Snapshots share unchanged ``Node``
records, but each edit still copies the id -> node mapping, so memory and
time per edit grow linearly with document size.
"""

import copy
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from returns.result import Result, Success, Failure

from core import Settings, get_logger, get_settings
from core.id import IdFactory, new_element_id
from placement.rules import ReparentRules
from registry import ComponentRegistry, PropertyIssue, Severity, apply_defaults, validate_props

from .history import History
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

logger = get_logger(__name__)

Listener = Callable[["DocumentStore"], None]

UPDATABLE_FIELDS = frozenset({"name", "props", "position", "constraints", "styling"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Arena:
    """Mutable working copy of a snapshot used while one operation runs."""

    def __init__(self, snapshot: Snapshot):
        self.nodes: dict[str, Node] = dict(snapshot.nodes)
        self.roots: list[str] = list(snapshot.roots)

    def put(self, node: Node) -> None:
        self.nodes[node.id] = node

    def attach(self, element_id: str, parent_id: str | None, index: int | None = None) -> None:
        """Insert into the parent's children (or roots) and set the back-reference."""
        if parent_id is None:
            siblings = self.roots
        else:
            siblings = list(self.nodes[parent_id].children)

        position = len(siblings) if index is None else max(0, min(index, len(siblings)))
        siblings.insert(position, element_id)

        if parent_id is not None:
            self.put(self.nodes[parent_id].model_copy(update={"children": tuple(siblings)}))
        self.put(self.nodes[element_id].model_copy(update={"parent": parent_id}))

    def detach(self, element_id: str) -> None:
        """Remove from the parent's children (or roots); the node stays in the arena."""
        parent_id = self.nodes[element_id].parent
        if parent_id is None:
            self.roots.remove(element_id)
            return
        parent = self.nodes[parent_id]
        self.put(parent.model_copy(
            update={"children": tuple(c for c in parent.children if c != element_id)}
        ))

    def remove_subtree(self, element_id: str) -> list[str]:
        """Detach and drop an element with all descendants; returns removed ids."""
        self.detach(element_id)
        removed = [element_id]
        stack = list(self.nodes[element_id].children)
        while stack:
            current = stack.pop()
            removed.append(current)
            stack.extend(self.nodes[current].children)
        for node_id in removed:
            del self.nodes[node_id]
        return removed

    def freeze(self) -> Snapshot:
        return Snapshot(nodes=MappingProxyType(self.nodes), roots=tuple(self.roots))


class DocumentStore:
    """
    Element document with linear undo/redo.

    Construct once and pass to every collaborator that reads or edits the
    document; the public methods below are the only mutation surface.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        settings: Settings | None = None,
        id_factory: IdFactory | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.registry = registry
        self.settings = settings or get_settings()
        self.rules = ReparentRules(registry)
        self._new_id = id_factory or new_element_id
        self._now = clock or _utcnow

        self._history = History(max_depth=self.settings.max_history)
        self._selected: set[str] = set()
        self._hovered: str | None = None
        self._dragged: str | None = None
        self.collaboration = Collaboration()
        self._listeners: list[Listener] = []

        logger.info("store_initialized", max_history=self.settings.max_history)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        """Current (present) snapshot."""
        return self._history.present

    @property
    def selection(self) -> SelectionState:
        return SelectionState(frozenset(self._selected), self._hovered, self._dragged)

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def node(self, element_id: str) -> Node | None:
        """Copy of an element's arena record."""
        node = self.snapshot.get(element_id)
        return node.model_copy(deep=True) if node is not None else None

    def get(self, element_id: str) -> Element | None:
        """Tree view of an element and its descendants."""
        if element_id not in self.snapshot:
            return None
        return self.snapshot.to_element(element_id)

    def tree(self) -> list[Element]:
        """Root elements with nested children."""
        return self.snapshot.tree()

    def roots(self) -> tuple[str, ...]:
        return self.snapshot.roots

    def all_ids(self) -> set[str]:
        return set(self.snapshot.nodes)

    def descendants(self, element_id: str) -> list[str]:
        return self.snapshot.descendants(element_id)

    def find_by_type(self, element_type: str) -> list[Node]:
        return [
            node.model_copy(deep=True)
            for node in self.snapshot.nodes.values()
            if node.type == element_type
        ]

    def validate(self, element_id: str) -> list[PropertyIssue]:
        """Property issues for an element (advisory)."""
        node = self.snapshot.get(element_id)
        if node is None:
            return []
        definition = self.registry.get(node.type)
        if definition is None:
            return [PropertyIssue("type", f"Unknown component type {node.type}", Severity.WARNING)]
        return validate_props(definition, node.props)

    def __len__(self) -> int:
        return len(self.snapshot)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self.snapshot

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _commit(self, arena: _Arena, event: str, **fields: Any) -> None:
        self._history.push(arena.freeze())
        self._prune_pointers()
        logger.debug(event, size=len(arena.nodes), **fields)
        self._notify()

    # ------------------------------------------------------------------
    # Element lifecycle
    # ------------------------------------------------------------------

    def _build(self, arena: _Arena, draft: ElementDraft, parent_id: str | None, now: datetime) -> str:
        """Create nodes for a draft and its nested children; returns the new id."""
        definition = self.registry.get(draft.type)
        if definition is None:
            logger.warning("unknown_component_added", type=draft.type)
            props = copy.deepcopy(draft.props)
            name = draft.name or draft.type.title()
        else:
            props = copy.deepcopy(apply_defaults(definition, draft.props))
            name = draft.name or definition.name

        element_id = self._new_id()
        arena.put(Node(
            id=element_id,
            type=draft.type,
            name=name,
            props=props,
            position=draft.position,
            constraints=draft.constraints,
            styling=draft.styling.model_copy(deep=True),
            metadata=Metadata(created_at=now, updated_at=now, version=1, author=draft.author),
        ))
        arena.attach(element_id, parent_id)

        for child in draft.children:
            self._build(arena, child, element_id, now)
        return element_id

    def add(self, draft: ElementDraft | Mapping[str, Any]) -> str:
        """
        Create an element (and any nested child drafts).

        The element is appended at root level, or under ``draft.parent`` when
        that parent exists and accepts the type.

        Returns:
            Id of the new element
        """
        if not isinstance(draft, ElementDraft):
            draft = ElementDraft.model_validate(draft)

        parent_id = None
        if draft.parent is not None:
            verdict = self.rules.check_parent(self.snapshot, draft.type, draft.parent)
            if isinstance(verdict, Success):
                parent_id = draft.parent
            else:
                logger.warning("parent_rejected", parent=draft.parent, reason=verdict.failure())

        arena = _Arena(self.snapshot)
        element_id = self._build(arena, draft, parent_id, self._now())
        self._commit(arena, "element_added", id=element_id, type=draft.type, parent=parent_id)
        return element_id

    def update(self, element_id: str, **changes: Any) -> bool:
        """
        Merge changes onto an element.

        ``props`` and ``styling.style`` are merged key by key; ``position``
        and ``constraints`` accept a model or a partial mapping.

        Returns:
            False when the element does not exist
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        node = self.snapshot.get(element_id)
        if node is None:
            return False

        update: dict[str, Any] = {}
        if "name" in changes:
            update["name"] = changes["name"]
        if "props" in changes:
            update["props"] = {**node.props, **copy.deepcopy(dict(changes["props"]))}
        if "position" in changes:
            update["position"] = _merge_model(node.position, changes["position"], Position)
        if "constraints" in changes:
            update["constraints"] = _merge_model(node.constraints, changes["constraints"], Constraints)
        if "styling" in changes:
            update["styling"] = _merge_styling(node.styling, changes["styling"])

        update["metadata"] = node.metadata.touch(self._now())

        arena = _Arena(self.snapshot)
        arena.put(node.model_copy(update=update))
        self._commit(arena, "element_updated", id=element_id, fields=sorted(changes))
        return True

    def delete(self, element_id: str) -> bool:
        """
        Remove an element and every descendant.

        Removed ids are pruned from the selection and the hover/drag pointers.
        """
        if element_id not in self.snapshot:
            return False

        arena = _Arena(self.snapshot)
        removed = arena.remove_subtree(element_id)
        self._commit(arena, "element_deleted", id=element_id, removed=len(removed))
        return True

    def duplicate(self, element_id: str) -> str | None:
        """
        Deep-clone a subtree with fresh ids and append it at root level.

        The clone's root is offset by the configured duplicate offset and every
        cloned node starts again at version 1.

        Returns:
            Id of the cloned root, None when the element does not exist
        """
        source = self.snapshot.get(element_id)
        if source is None:
            return None

        now = self._now()
        offset = self.settings.duplicate_offset
        arena = _Arena(self.snapshot)

        def clone(node: Node, parent_id: str | None, is_root: bool) -> str:
            new_id = self._new_id()
            arena.put(node.model_copy(update={
                "id": new_id,
                "name": f"{node.name} Copy" if is_root else node.name,
                "props": copy.deepcopy(node.props),
                "children": (),
                "parent": None,
                "position": node.position.offset(offset, offset) if is_root else node.position,
                "metadata": Metadata(created_at=now, updated_at=now, version=1,
                                     author=node.metadata.author),
            }))
            arena.attach(new_id, parent_id)
            for child_id in node.children:
                clone(self.snapshot.nodes[child_id], new_id, False)
            return new_id

        new_root = clone(source, None, True)
        self._commit(arena, "element_duplicated", source=element_id, id=new_root)
        return new_root

    def move(self, element_id: str, new_parent: str | None, index: int | None = None) -> Result[str, str]:
        """
        Reparent (or reorder) an element.

        Args:
            element_id: Element to move
            new_parent: Target parent, None for root level
            index: Position among the new siblings (default: append)

        Returns:
            Success(element_id) or Failure(reason); a failure leaves the
            document unchanged
        """
        verdict = self.rules.check_move(self.snapshot, element_id, new_parent)
        if isinstance(verdict, Failure):
            logger.info("move_rejected", id=element_id, parent=new_parent, reason=verdict.failure())
            return Failure(verdict.failure())

        arena = _Arena(self.snapshot)
        arena.detach(element_id)
        arena.attach(element_id, new_parent, index)
        node = arena.nodes[element_id]
        arena.put(node.model_copy(update={"metadata": node.metadata.touch(self._now())}))
        self._commit(arena, "element_moved", id=element_id, parent=new_parent, index=index)
        return Success(element_id)

    def reposition(self, positions: Mapping[str, Position]) -> list[str]:
        """
        Set new positions for several elements as one history entry.

        Unknown and locked elements are skipped.

        Returns:
            Ids actually moved
        """
        now = self._now()
        arena = _Arena(self.snapshot)
        moved: list[str] = []

        for element_id, position in positions.items():
            node = arena.nodes.get(element_id)
            if node is None or node.constraints.locked:
                continue
            arena.put(node.model_copy(update={
                "position": position,
                "metadata": node.metadata.touch(now),
            }))
            moved.append(element_id)

        if moved:
            self._commit(arena, "elements_repositioned", ids=moved)
        return moved

    def load(self, drafts: Iterable[ElementDraft], reset_history: bool = True) -> list[str]:
        """
        Replace the document with freshly built elements.

        Returns:
            Ids of the new root elements
        """
        now = self._now()
        arena = _Arena(Snapshot())
        roots = [self._build(arena, draft, None, now) for draft in drafts]

        if reset_history:
            self._history.reset(arena.freeze())
            self._prune_pointers()
            logger.info("document_loaded", roots=len(roots), size=len(arena.nodes))
            self._notify()
        else:
            self._commit(arena, "document_loaded", roots=len(roots))
        return roots

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        """Step back one snapshot; False when there is nothing to undo."""
        if not self._history.undo():
            return False
        self._prune_pointers()
        logger.debug("undo", past=len(self._history.past), future=len(self._history.future))
        self._notify()
        return True

    def redo(self) -> bool:
        """Re-apply the last undone snapshot; False when there is nothing to redo."""
        if not self._history.redo():
            return False
        self._prune_pointers()
        logger.debug("redo", past=len(self._history.past), future=len(self._history.future))
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Selection and pointers (no history)
    # ------------------------------------------------------------------

    def select(self, element_id: str | None, multi: bool = False) -> frozenset[str]:
        """
        Replace or toggle the selection.

        Args:
            element_id: Element to select, None clears the selection
            multi: Toggle membership instead of replacing

        Returns:
            The resulting selection
        """
        if element_id is None:
            self._selected.clear()
        elif element_id in self.snapshot:
            if not multi:
                self._selected = {element_id}
            elif element_id in self._selected:
                self._selected.discard(element_id)
            else:
                self._selected.add(element_id)
        self._notify()
        return frozenset(self._selected)

    def set_hovered(self, element_id: str | None) -> None:
        self._hovered = element_id if element_id in self.snapshot else None
        self._notify()

    def set_dragged(self, element_id: str | None) -> None:
        self._dragged = element_id if element_id in self.snapshot else None

    def _prune_pointers(self) -> None:
        present = self.snapshot
        self._selected = {i for i in self._selected if i in present}
        if self._hovered not in present:
            self._hovered = None
        if self._dragged not in present:
            self._dragged = None
        self.collaboration.locks = {
            element_id: owner
            for element_id, owner in self.collaboration.locks.items()
            if element_id in present
        }


def _merge_model(current: Any, change: Any, model: type) -> Any:
    if isinstance(change, model):
        return change
    return model.model_validate({**current.model_dump(), **dict(change)})


def _merge_styling(current: Styling, change: Styling | Mapping[str, Any]) -> Styling:
    if isinstance(change, Styling):
        return change.model_copy(deep=True)
    change = copy.deepcopy(dict(change))
    return Styling(
        class_name=change.get("class_name", current.class_name),
        style={**current.style, **change.get("style", {})},
        variants={**current.variants, **change.get("variants", {})},
    )

"""Conversion between the flat component list and the nested forest."""

from __future__ import annotations

from typing import TYPE_CHECKING

from formbridge import logger
from formbridge.exceptions import CyclicParentageError, DanglingParentReferenceError, DuplicateIdError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from formbridge.typing.models import Component

_UNVISITED = 0
_ON_CHAIN = 1
_ROOTED = 2


def _index_by_id(flat: Sequence[Component]) -> dict[str, int]:
    """Map every component id to its position in the flat list.

    Args:
        flat (Sequence[Component]): Flat component list.

    Raises:
        DuplicateIdError: If two components share an id.

    Returns:
        dict[str, int]: Position by id.
    """
    index: dict[str, int] = {}
    for position, component in enumerate(flat):
        if component.id in index:
            raise DuplicateIdError(component_id=component.id)
        index[component.id] = position
    return index


def _resolve_parents(flat: Sequence[Component], index: dict[str, int]) -> list[int | None]:
    """Resolve each parent id against the whole document.

    Args:
        flat (Sequence[Component]): Flat component list.
        index (dict[str, int]): Position by id.

    Raises:
        DanglingParentReferenceError: If a parent id is unknown.

    Returns:
        list[int | None]: Parent position per component, None for roots.
    """
    parents: list[int | None] = []
    for component in flat:
        if component.parent_id is None:
            parents.append(None)
            continue
        parent = index.get(component.parent_id)
        if parent is None:
            raise DanglingParentReferenceError(component_id=component.id, parent_id=component.parent_id)
        parents.append(parent)
    return parents


def _ensure_acyclic(flat: Sequence[Component], parents: list[int | None]) -> None:
    """Reject parent chains that never reach a root.

    Args:
        flat (Sequence[Component]): Flat component list.
        parents (list[int | None]): Parent position per component.

    Raises:
        CyclicParentageError: If a parent chain loops.
    """
    state = [_UNVISITED] * len(parents)
    for start in range(len(parents)):
        chain: list[int] = []
        node: int | None = start
        while node is not None and state[node] == _UNVISITED:
            state[node] = _ON_CHAIN
            chain.append(node)
            node = parents[node]
        if node is not None and state[node] == _ON_CHAIN:
            loop = chain[chain.index(node) :]
            raise CyclicParentageError(cycle=tuple(flat[position].id for position in [*loop, node]))
        for position in chain:
            state[position] = _ROOTED


def build_tree(flat: Sequence[Component]) -> list[Component]:
    """Nest a flat, parent-pointer addressed component list.

    Children keep the relative order they had in the flat list. The input is
    left untouched: every component of the result is a copy.

    Args:
        flat (Sequence[Component]): Flat component list, in designer order.

    Returns:
        list[Component]: Root components, each carrying its subtree.
    """
    index = _index_by_id(flat)
    parents = _resolve_parents(flat, index)
    _ensure_acyclic(flat, parents)

    arena = [component.model_copy(update={"children": []}, deep=True) for component in flat]

    roots: list[Component] = []
    for position, parent in enumerate(parents):
        if parent is None:
            roots.append(arena[position])
        else:
            arena[parent].children.append(arena[position])

    logger.debug("Component tree built", extra={"components": len(arena), "roots": len(roots)})
    return roots


def flatten_forest(forest: Sequence[Component]) -> list[Component]:
    """Flatten a forest back into a parent-pointer list, in pre-order.

    Args:
        forest (Sequence[Component]): Root components.

    Returns:
        list[Component]: Copies without children, parent ids taken from the structure.
    """
    flat: list[Component] = []
    stack: list[tuple[Component, str | None]] = [(root, None) for root in reversed(forest)]
    while stack:
        component, parent_id = stack.pop()
        flat.append(component.model_copy(update={"children": [], "parent_id": parent_id}, deep=True))
        stack.extend((child, component.id) for child in reversed(component.children))
    return flat

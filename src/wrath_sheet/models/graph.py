"""Structural operations on property trees.

A property tree is a mapping of node id to frozen node. Every operation
here returns a new mapping and leaves its input untouched; nodes that are
not edited are shared between the old and new snapshots.

The operations assume a structurally valid tree (every parent resolves, no
cycles). Malformed trees are an upstream bug and are not diagnosed here.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import TypeAlias

from wrath_sheet.core.exceptions import PropertyTreeError
from wrath_sheet.models.properties import Property, semantic_name


PropertyMap: TypeAlias = Mapping[str, Property]


def _ordered_children(
    properties: Mapping[str, Property],
    children: Sequence[str],
    new_child: Property,
) -> tuple[str, ...]:
    """Insert a child id after every sibling whose order is not greater."""
    position = len(children)
    for index, child_id in enumerate(children):
        sibling = properties.get(child_id)
        if sibling is not None and sibling.order > new_child.order:
            position = index
            break
    return (*children[:position], new_child.id, *children[position:])


def add_property(properties: PropertyMap, node: Property, parent_id: str) -> dict[str, Property]:
    """Attach a node under a parent.

    The node's ``parent`` is set to ``parent_id`` and its id is inserted into
    the parent's children, keeping them sorted by ``order`` (ties keep
    insertion order).

    Args:
        properties: Current tree.
        node: Node to attach. Its own ``children`` are kept as given.
        parent_id: Id of the parent node.

    Returns:
        A new tree containing the node.

    Raises:
        PropertyTreeError: If the parent is unknown or the id already exists.
    """
    if node.id in properties:
        raise PropertyTreeError("Property id already exists", property_id=node.id)
    parent = properties.get(parent_id)
    if parent is None:
        raise PropertyTreeError(
            f"Parent property {parent_id!r} not found",
            property_id=node.id,
            details={"parent_id": parent_id},
        )

    placed = node.model_copy(update={"parent": parent_id})
    updated = dict(properties)
    updated[placed.id] = placed
    updated[parent_id] = parent.model_copy(
        update={"children": _ordered_children(updated, parent.children, placed)}
    )
    return updated


def add_subtree(
    properties: PropertyMap,
    nodes: Sequence[Property],
    parent_id: str,
) -> dict[str, Property]:
    """Attach a pre-built subtree under a parent.

    The first node is the subtree root and is attached with
    :func:`add_property`. The remaining nodes must already be linked to it
    (their parents and the children lists inside the subtree are kept).

    Args:
        properties: Current tree.
        nodes: Subtree nodes, root first.
        parent_id: Id of the node receiving the subtree root.

    Returns:
        A new tree containing the subtree.

    Raises:
        PropertyTreeError: If the subtree is empty, a node id already exists,
            or the parent is unknown.
    """
    if not nodes:
        raise PropertyTreeError("Cannot attach an empty subtree", property_id=parent_id)
    for node in nodes[1:]:
        if node.id in properties:
            raise PropertyTreeError("Property id already exists", property_id=node.id)

    updated = add_property(properties, nodes[0], parent_id)
    for node in nodes[1:]:
        updated[node.id] = node
    return updated


def remove_property(properties: PropertyMap, node_id: str) -> dict[str, Property]:
    """Remove a node and its whole subtree.

    Args:
        properties: Current tree.
        node_id: Id of the node to remove.

    Returns:
        A new tree without the node or any of its descendants.

    Raises:
        PropertyTreeError: If the node is unknown or is the root.
    """
    node = properties.get(node_id)
    if node is None:
        raise PropertyTreeError("Property not found", property_id=node_id)
    if node.parent is None:
        raise PropertyTreeError("Cannot remove the root property", property_id=node_id)

    doomed: set[str] = set()
    pending = [node_id]
    while pending:
        current_id = pending.pop()
        current = properties.get(current_id)
        if current is None or current_id in doomed:
            continue
        doomed.add(current_id)
        pending.extend(current.children)

    updated = {key: value for key, value in properties.items() if key not in doomed}
    parent = updated.get(node.parent)
    if parent is not None:
        updated[parent.id] = parent.model_copy(
            update={"children": tuple(child for child in parent.children if child != node_id)}
        )
    return updated


def replace_property(properties: PropertyMap, node: Property) -> dict[str, Property]:
    """Swap the payload of an existing node, keeping its tree links.

    The replacement keeps the stored node's ``parent`` and ``children``. If
    its ``order`` changed, it is repositioned among its siblings.

    Args:
        properties: Current tree.
        node: Replacement node with the same id.

    Returns:
        A new tree with the node replaced.

    Raises:
        PropertyTreeError: If no node with that id exists.
    """
    existing = properties.get(node.id)
    if existing is None:
        raise PropertyTreeError("Property not found", property_id=node.id)

    replaced = node.model_copy(update={"parent": existing.parent, "children": existing.children})
    updated = dict(properties)
    updated[node.id] = replaced

    if existing.parent is not None and replaced.order != existing.order:
        parent = updated.get(existing.parent)
        if parent is not None:
            siblings = tuple(child for child in parent.children if child != node.id)
            updated[parent.id] = parent.model_copy(
                update={"children": _ordered_children(updated, siblings, replaced)}
            )
    return updated


def set_property_enabled(properties: PropertyMap, node_id: str, enabled: bool) -> dict[str, Property]:
    """Enable or disable a node (and with it, its subtree)."""
    node = properties.get(node_id)
    if node is None:
        raise PropertyTreeError("Property not found", property_id=node_id)
    return replace_property(properties, node.model_copy(update={"enabled": enabled}))


def get_children(properties: PropertyMap, node_id: str) -> list[Property]:
    """Get the existing children of a node in order."""
    node = properties.get(node_id)
    if node is None:
        return []
    return [properties[child] for child in node.children if child in properties]


def iter_enabled_subtree(properties: PropertyMap, root_id: str) -> Iterator[Property]:
    """Walk the enabled part of a subtree in pre-order.

    Traversal follows each node's children array. A disabled node prunes
    itself and all of its descendants; child ids missing from the map are
    skipped.

    Args:
        properties: Tree to walk.
        root_id: Id of the node to start from.

    Yields:
        Enabled nodes, parents before children.
    """
    pending = [root_id]
    while pending:
        node = properties.get(pending.pop())
        if node is None or not node.enabled:
            continue
        yield node
        pending.extend(reversed(node.children))


def find_by_semantic_name(properties: PropertyMap, name: str) -> list[Property]:
    """Find every node answering to a semantic name."""
    return [node for node in properties.values() if semantic_name(node) == name]


def resolve_tag_targets(properties: PropertyMap, tags: Iterable[str]) -> list[str]:
    """Resolve a tag-based effect target to property ids.

    ``compute_entity`` consults this for every tag-targeted effect and
    applies the effect to the returned ids. No property is selected yet,
    so such effects change nothing.

    Args:
        properties: Tree the effect lives in.
        tags: Tags named by the effect target.

    Returns:
        Ids of targeted properties (currently always empty).
    """
    # TODO: select attribute and skill nodes whose tags intersect ``tags`` once
    # tag-scoped wargear effects are authored.
    return []


__all__ = [
    "PropertyMap",
    "add_property",
    "add_subtree",
    "remove_property",
    "replace_property",
    "set_property_enabled",
    "get_children",
    "iter_enabled_subtree",
    "find_by_semantic_name",
    "resolve_tag_targets",
]

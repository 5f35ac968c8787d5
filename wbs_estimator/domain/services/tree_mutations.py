"""
Tree Mutation Operators - Pure, path-preserving edits of the cost tree.

All operators take a tuple of root nodes and return a new tuple:
- Ancestors of the edited node are shallow-copied
- Siblings and subtrees off the path are reused by reference
- An unknown target id returns the input tuple itself (silent no-op)

Callers must pipe the result through rollup.recompute() before it
becomes the canonical tree.
"""
from dataclasses import replace
from typing import Callable, Optional, Tuple

from ...config import get_config
from ..entities import (
    CostCategory,
    CostNode,
    GroupNode,
    TerminalNode,
    as_decimal,
    new_id,
)
from .field_updates import FieldUpdate

Nodes = Tuple[CostNode, ...]


def find_and_apply(
    nodes: Nodes,
    target_id: str,
    transform: Callable[[CostNode], CostNode],
) -> Nodes:
    """
    Replace the node with `target_id` by `transform(node)`.

    Args:
        nodes: Sibling nodes to search (depth-first)
        target_id: Id of the node to transform
        transform: Function producing the replacement node

    Returns:
        New sibling tuple, or `nodes` itself if the id is absent
    """
    for index, node in enumerate(nodes):
        if node.id == target_id:
            replacement = transform(node)
        elif isinstance(node, GroupNode):
            children = find_and_apply(node.children, target_id, transform)
            if children is node.children:
                continue
            replacement = replace(node, children=children)
        else:
            continue
        return nodes[:index] + (replacement,) + nodes[index + 1:]

    return nodes


def find_node(nodes: Nodes, node_id: str) -> Optional[CostNode]:
    """Depth-first lookup of a node by id."""
    for node in nodes:
        if node.id == node_id:
            return node
        if isinstance(node, GroupNode):
            found = find_node(node.children, node_id)
            if found is not None:
                return found
    return None


def contains_node(node: CostNode, node_id: str) -> bool:
    """Whether `node_id` is the node itself or anywhere in its subtree."""
    if node.id == node_id:
        return True
    if isinstance(node, GroupNode):
        return find_node(node.children, node_id) is not None
    return False


def update_field(nodes: Nodes, node_id: str, update: FieldUpdate) -> Nodes:
    """Apply one typed field update to the node with `node_id`."""
    return find_and_apply(nodes, node_id, update.apply)


def _new_node(kind: str, node_cls, **extra) -> CostNode:
    defaults = get_config().get_item_defaults(kind)
    return node_cls(
        id=new_id(),
        description=defaults["description"],
        quantity=as_decimal(defaults["quantity"]),
        unit=defaults["unit"],
        unit_price=as_decimal(defaults["unit_price"]),
        category=CostCategory(defaults["category"]),
        expanded=True,
        **extra,
    )


def new_child_node() -> TerminalNode:
    """A fresh terminal item with default scope fields."""
    return _new_node("new_child", TerminalNode)


def new_root_node() -> GroupNode:
    """A fresh, empty group ready to receive sub-items."""
    return _new_node("new_root", GroupNode, children=())


def add_child(nodes: Nodes, parent_id: str, child: Optional[CostNode] = None) -> Nodes:
    """
    Append a new item under `parent_id` and expand the parent.

    A terminal parent becomes a group; its resources and schedule are
    dropped since its total now comes from children.

    Args:
        nodes: Root nodes
        parent_id: Id of the parent node
        child: Node to append (defaults to a fresh terminal item)

    Returns:
        New root tuple, or `nodes` itself if the parent does not exist
    """
    child = child if child is not None else new_child_node()

    def _append(parent: CostNode) -> CostNode:
        group = GroupNode.from_node(parent)
        return replace(group, children=group.children + (child,), expanded=True)

    return find_and_apply(nodes, parent_id, _append)


def add_root(nodes: Nodes, root: Optional[CostNode] = None) -> Nodes:
    """Append a new group (or the given node) at the end of the roots."""
    return nodes + (root if root is not None else new_root_node(),)


def delete_node(nodes: Nodes, node_id: str) -> Nodes:
    """
    Remove the node with `node_id` and its whole subtree.

    Every level is filtered; untouched branches are reused.
    """
    kept = []
    changed = False
    for node in nodes:
        if node.id == node_id:
            changed = True
            continue
        if isinstance(node, GroupNode):
            children = delete_node(node.children, node_id)
            if children is not node.children:
                node = replace(node, children=children)
                changed = True
        kept.append(node)

    return tuple(kept) if changed else nodes


def toggle_expand(nodes: Nodes, node_id: str) -> Nodes:
    """Flip the expanded flag of a node; totals are unaffected."""
    return find_and_apply(nodes, node_id, lambda node: replace(node, expanded=not node.expanded))

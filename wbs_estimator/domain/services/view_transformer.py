"""
View Transformation Engine - Regroups the canonical tree by an item tag.

Projection is a pure function of (canonical tree, mode):
1. Flatten the tree to its terminal items, depth-first
2. Bucket them by contract type, risk level or category
3. Wrap each bucket in a synthetic group, numbered by position

Terminal items keep their canonical ids, so an edit made in a regrouped
view is applied to the canonical tree by id and the view is rebuilt.
"""
from dataclasses import replace
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ...config import get_config
from ..entities import CostCategory, CostNode, GroupNode, new_id


class ViewMode(Enum):
    """Alternate hierarchies the estimate can be displayed in."""
    STANDARD = "Standard Construction"
    CONTRACT = "Contractual (Pricing)"
    RISK = "Risk Profile"
    CATEGORY = "Cost Category"


def flatten_terminals(nodes: Sequence[CostNode]) -> List[CostNode]:
    """
    Terminal items of the tree in depth-first order.

    A group with children contributes only its descendants; an empty
    group has nothing below it and is listed as a leaf.
    """
    terminals = []
    for node in nodes:
        if isinstance(node, GroupNode) and node.children:
            terminals.extend(flatten_terminals(node.children))
        else:
            terminals.append(node)
    return terminals


def bucket_key(node: CostNode, mode: ViewMode) -> Optional[str]:
    """Tag value a node is grouped under, or None when untagged."""
    if mode == ViewMode.CONTRACT:
        tag = node.contract_type
    elif mode == ViewMode.RISK:
        tag = node.risk_level
    elif mode == ViewMode.CATEGORY:
        tag = node.category
    else:
        return None
    return tag.value if tag is not None else None


def _make_group(description: str, members: List[CostNode], group_index: int) -> GroupNode:
    prefix = str(group_index)
    children = tuple(
        replace(member, wbs_code=f"{prefix}.{member_index}")
        for member_index, member in enumerate(members, start=1)
    )
    return GroupNode(
        id=new_id(),
        description=description,
        quantity=Decimal("1"),
        unit="ls",
        unit_price=Decimal("0"),
        category=CostCategory.INDIRECT,
        wbs_code=prefix,
        total=sum((member.total for member in members), Decimal("0")),
        expanded=True,
        children=children,
    )


def project(nodes: Tuple[CostNode, ...], mode: ViewMode) -> Tuple[CostNode, ...]:
    """
    Build the display tree for a view mode.

    Args:
        nodes: Recomputed canonical root nodes
        mode: View mode to project into

    Returns:
        The canonical tree itself for STANDARD, otherwise one synthetic
        group per tag value (first-encounter order) plus a final
        unassigned group for untagged items
    """
    if mode == ViewMode.STANDARD:
        return nodes

    buckets: Dict[str, List[CostNode]] = {}
    unassigned: List[CostNode] = []

    for terminal in flatten_terminals(nodes):
        key = bucket_key(terminal, mode)
        if key is None:
            unassigned.append(terminal)
        else:
            buckets.setdefault(key, []).append(terminal)

    groups = [
        _make_group(key, members, index)
        for index, (key, members) in enumerate(buckets.items(), start=1)
    ]
    if unassigned:
        groups.append(_make_group(get_config().unassigned_label, unassigned, len(groups) + 1))

    return tuple(groups)

"""
Rollup & Numbering Engine - Recomputes totals bottom-up and WBS codes top-down.

Ensures the tree invariants after every edit:
- Group.total = Σ(child.total)
- Detailed terminal.total = Σ(resource.total)
- Plain terminal.total = quantity × unit_price
- wbs_code of the k-th sibling under prefix p is 'p.k' ('k' at the root)
"""
from dataclasses import replace
from decimal import Decimal
from typing import Iterator, Sequence, Tuple

from ..entities import CostNode, GroupNode, TerminalNode
from ..exceptions import InvariantViolationError


def terminal_total(node: TerminalNode) -> Decimal:
    """Cost of a terminal node from its resources, or its plug price."""
    if node.resources:
        return sum((r.total for r in node.resources), Decimal("0"))
    return node.quantity * node.unit_price


def recompute(
    nodes: Sequence[CostNode],
    parent_prefix: str = "",
) -> Tuple[Tuple[CostNode, ...], Decimal]:
    """
    Renumber and re-total a sibling sequence and everything below it.

    Args:
        nodes: Sibling nodes in display order
        parent_prefix: WBS code of the parent ('' at the root)

    Returns:
        Tuple of (recomputed siblings, branch subtotal)
    """
    branch_total = Decimal("0")
    updated = []

    for index, node in enumerate(nodes):
        wbs_code = f"{parent_prefix}.{index + 1}" if parent_prefix else f"{index + 1}"

        if isinstance(node, GroupNode):
            children, total = recompute(node.children, wbs_code)
            node = replace(node, wbs_code=wbs_code, children=children, total=total)
        else:
            node = replace(node, wbs_code=wbs_code, total=terminal_total(node))

        branch_total += node.total
        updated.append(node)

    return tuple(updated), branch_total


def grand_total(nodes: Sequence[CostNode]) -> Decimal:
    """Sum of root totals (assumes the tree is recomputed)."""
    return sum((node.total for node in nodes), Decimal("0"))


def iter_nodes(nodes: Sequence[CostNode]) -> Iterator[CostNode]:
    """Depth-first, pre-order walk over every node of the tree."""
    for node in nodes:
        yield node
        if isinstance(node, GroupNode):
            yield from iter_nodes(node.children)


def verify_rollup(nodes: Sequence[CostNode], parent_prefix: str = "") -> None:
    """
    Check the rollup and numbering invariants without modifying the tree.

    Raises:
        InvariantViolationError: On the first node that breaks an invariant
    """
    for index, node in enumerate(nodes):
        expected_code = f"{parent_prefix}.{index + 1}" if parent_prefix else f"{index + 1}"
        if node.wbs_code != expected_code:
            raise InvariantViolationError(
                "wbs_numbering", expected_code, node.wbs_code or "<empty>"
            )

        if isinstance(node, GroupNode):
            verify_rollup(node.children, expected_code)
            expected_total = grand_total(node.children)
            name = "group_total"
        else:
            expected_total = terminal_total(node)
            name = "resource_total" if node.resources else "plug_total"

        if node.total != expected_total:
            raise InvariantViolationError(
                f"{name}[{node.wbs_code}]", str(expected_total), str(node.total)
            )

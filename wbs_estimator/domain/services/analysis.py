"""
Analysis Payload - Flattened text of the tree for the narrative summarizer.

One line per node, depth-first:
    "{wbs_code} {description} - {total}"
"""
from typing import Sequence

from ..entities import CostNode
from .rollup import iter_nodes


def summary_line(node: CostNode) -> str:
    return f"{node.wbs_code} {node.description} - {node.total:.2f}"


def build_analysis_payload(nodes: Sequence[CostNode]) -> str:
    """Text handed to the external risk summarizer; never interpreted here."""
    return "\n".join(summary_line(node) for node in iter_nodes(nodes))

"""
Estimate Workspace - Single authority over a project's canonical cost tree.

Every edit follows the same path:
    operator (pure) -> recompute (rollup & numbering) -> new canonical tree

The display tree is projected from the canonical tree on demand for the
active view mode and is never edited directly. In a regrouped view only
edits of displayed leaves (terminal items and empty groups) are accepted;
they are routed to the canonical tree by id. Structural edits are rejected
outside the standard view.

External collaborators (item generation, narrative risk analysis) are
injected as plain callables so the workspace never touches the network.
"""
import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from ..domain.entities import (
    CostCategory,
    CostNode,
    GroupNode,
    Project,
    ResourceLine,
    TerminalNode,
)
from ..domain.exceptions import (
    CollaboratorNotConfiguredError,
    StructuralEditRejectedError,
    ValidationError,
)
from ..domain.services import (
    FieldUpdate,
    IngestionResult,
    RateCatalog,
    ResourceUpdate,
    SaveDetail,
    ScheduleSummary,
    SetSchedule,
    ViewMode,
    add_child,
    add_resource,
    add_root,
    build_analysis_payload,
    contains_node,
    delete_node,
    find_and_apply,
    find_node,
    ingest_descriptors,
    new_child_node,
    new_root_node,
    project as project_view,
    recompute,
    remove_resource,
    schedule_summary,
    set_resource_from_catalog,
    toggle_expand,
    update_resource,
)

logger = logging.getLogger(__name__)

# generate(free_text_prompt) -> raw item descriptors
ItemGenerator = Callable[[str], Sequence[Mapping[str, Any]]]
# summarize(tree_summary_text) -> narrative
RiskSummarizer = Callable[[str], str]


class EstimateWorkspace:
    """
    Owns the canonical tree, the active view mode and the detail selection.
    """

    def __init__(
        self,
        estimate: Project,
        catalog: Optional[RateCatalog] = None,
        generator: Optional[ItemGenerator] = None,
        summarizer: Optional[RiskSummarizer] = None,
    ):
        items, _ = recompute(estimate.items)
        self._project = replace(estimate, items=items)
        self._mode = ViewMode.STANDARD
        self._selected_id: Optional[str] = None
        self.catalog = catalog if catalog is not None else RateCatalog.from_config()
        self.generator = generator
        self.summarizer = summarizer

    # =========================================================================
    # State
    # =========================================================================

    @property
    def project(self) -> Project:
        return self._project

    @property
    def items(self) -> Tuple[CostNode, ...]:
        """Recomputed canonical root nodes."""
        return self._project.items

    @property
    def grand_total(self) -> Decimal:
        return self._project.grand_total

    @property
    def mode(self) -> ViewMode:
        return self._mode

    def set_mode(self, mode: ViewMode) -> None:
        self._mode = ViewMode(mode)
        logger.info(f"View mode set to {self._mode.value}")

    @property
    def display_tree(self) -> Tuple[CostNode, ...]:
        """Tree to display for the active view mode (rebuilt on every call)."""
        return project_view(self.items, self._mode)

    def find(self, node_id: str) -> Optional[CostNode]:
        """Look up a node of the canonical tree by id."""
        return find_node(self.items, node_id)

    # =========================================================================
    # Detail Selection
    # =========================================================================

    @property
    def selected(self) -> Optional[CostNode]:
        """Selected node, resolved against the current canonical tree."""
        if self._selected_id is None:
            return None
        return self.find(self._selected_id)

    def select(self, node_id: str) -> Optional[CostNode]:
        node = self.find(node_id)
        self._selected_id = node.id if node is not None else None
        return node

    def clear_selection(self) -> None:
        self._selected_id = None

    def schedule_summary(self, node_id: str) -> Optional[ScheduleSummary]:
        """Crew hours and daily output of a terminal item, if it exists."""
        node = self.find(node_id)
        if not isinstance(node, TerminalNode):
            return None
        return schedule_summary(node)

    # =========================================================================
    # Commit Path
    # =========================================================================

    def _commit(self, items: Tuple[CostNode, ...]) -> None:
        recomputed, total = recompute(items)
        self._project = replace(self._project, items=recomputed, last_modified=datetime.now())
        if self._selected_id is not None and self.find(self._selected_id) is None:
            self._selected_id = None
        logger.debug(f"Committed canonical tree, grand total {total}")

    def _require_standard_view(self, operation: str) -> None:
        if self._mode != ViewMode.STANDARD:
            logger.warning(f"Rejected '{operation}' in {self._mode.value} view")
            raise StructuralEditRejectedError(operation, self._mode.value)

    def _edit(self, node_id: str, transform: Callable[[CostNode], CostNode]) -> Optional[CostNode]:
        target = self.find(node_id)
        if target is None:
            logger.warning(f"Edit ignored: node '{node_id}' not found")
            return None
        if self._mode != ViewMode.STANDARD and isinstance(target, GroupNode) and target.children:
            self._require_standard_view("edit group items")

        self._commit(find_and_apply(self.items, node_id, transform))
        return self.find(node_id)

    # =========================================================================
    # Field Edits (any view, terminal items only outside the standard view)
    # =========================================================================

    def update_field(self, node_id: str, update: FieldUpdate) -> Optional[CostNode]:
        """Apply one typed field update; returns the recomputed node or None."""
        return self._edit(node_id, update.apply)

    def set_schedule(self, node_id: str, duration, hours_per_day) -> Optional[CostNode]:
        """Change an item's schedule; labor/equipment quantities follow."""
        return self.update_field(node_id, SetSchedule(duration, hours_per_day))

    def save_detail(
        self,
        node_id: str,
        resources: Sequence[ResourceLine],
        duration,
        hours_per_day,
        quantity,
        contract_type=None,
        risk_level=None,
    ) -> Optional[CostNode]:
        """Commit the whole detail sheet of a terminal item."""
        update = SaveDetail(
            resources=tuple(resources),
            duration=duration,
            hours_per_day=hours_per_day,
            quantity=quantity,
            contract_type=contract_type,
            risk_level=risk_level,
        )
        return self.update_field(node_id, update)

    # =========================================================================
    # Resource Edits
    # =========================================================================

    def add_resource(self, node_id: str, category: CostCategory) -> Optional[CostNode]:
        return self._edit(node_id, lambda node: add_resource(node, CostCategory(category), self.catalog))

    def update_resource(self, node_id: str, resource_id: str, update: ResourceUpdate) -> Optional[CostNode]:
        return self._edit(node_id, lambda node: update_resource(node, resource_id, update))

    def apply_catalog_entry(self, node_id: str, resource_id: str, entry_id: str) -> Optional[CostNode]:
        """Price a resource line from the rate catalog."""
        entry = self.catalog.get(entry_id)
        return self._edit(node_id, lambda node: set_resource_from_catalog(node, resource_id, entry))

    def remove_resource(self, node_id: str, resource_id: str) -> Optional[CostNode]:
        return self._edit(node_id, lambda node: remove_resource(node, resource_id))

    # =========================================================================
    # Structural Edits (standard view only)
    # =========================================================================

    def add_child(self, parent_id: str) -> Optional[CostNode]:
        """Append a new sub-item; returns it, or None if the parent is unknown."""
        self._require_standard_view("add a sub-item")
        child = new_child_node()
        items = add_child(self.items, parent_id, child)
        if items is self.items:
            logger.warning(f"Add child ignored: parent '{parent_id}' not found")
            return None
        self._commit(items)
        return self.find(child.id)

    def add_root(self) -> CostNode:
        """Append a new top-level phase."""
        self._require_standard_view("add a phase")
        root = new_root_node()
        self._commit(add_root(self.items, root))
        return self.find(root.id)

    def delete_node(self, node_id: str) -> bool:
        """Delete a node and its subtree; clears the selection if it was inside."""
        self._require_standard_view("delete items")
        target = self.find(node_id)
        if target is None:
            logger.warning(f"Delete ignored: node '{node_id}' not found")
            return False
        if self._selected_id is not None and contains_node(target, self._selected_id):
            self._selected_id = None
        self._commit(delete_node(self.items, node_id))
        return True

    def toggle_expand(self, node_id: str) -> None:
        """Flip expansion in the standard view; ignored in regrouped views."""
        if self._mode != ViewMode.STANDARD:
            logger.debug(f"Expansion toggle ignored in {self._mode.value} view")
            return
        self._project = replace(self._project, items=toggle_expand(self.items, node_id))

    # =========================================================================
    # External Collaborators
    # =========================================================================

    def merge_generated(self, raw_items: Sequence[Any]) -> IngestionResult:
        """Ingest generated descriptors and append them as new phases."""
        self._require_standard_view("add generated items")
        result = ingest_descriptors(raw_items)
        if result.nodes:
            self._commit(self.items + result.nodes)
        return result

    def generate_items(self, prompt: str) -> IngestionResult:
        """
        Ask the item generator for a scope breakdown and merge it.

        Raises:
            ValidationError: If the prompt is blank
            CollaboratorNotConfiguredError: If no generator was injected
        """
        if not prompt or not prompt.strip():
            raise ValidationError("prompt", "must not be blank")
        if self.generator is None:
            raise CollaboratorNotConfiguredError("item generator")
        self._require_standard_view("add generated items")

        raw_items: List[Any] = list(self.generator(prompt.strip()) or [])
        logger.info(f"Generator returned {len(raw_items)} items")
        return self.merge_generated(raw_items)

    def analysis_payload(self) -> str:
        return build_analysis_payload(self.items)

    def analyze_risk(self) -> str:
        """
        Hand the flattened tree to the risk summarizer and return its narrative.

        Raises:
            CollaboratorNotConfiguredError: If no summarizer was injected
        """
        if self.summarizer is None:
            raise CollaboratorNotConfiguredError("risk summarizer")
        return self.summarizer(self.analysis_payload())

"""
Ingestion of Generated Items - Converts raw descriptors into cost nodes.

Descriptors come from the external item generator:
    {description, quantity?, unit?, unitPrice?, category, notes?, children?}

Rules:
- Missing quantity -> 1, unit -> 'ls', unitPrice -> 0
- Missing or unknown category -> Material
- Missing description -> configured placeholder
- Missing both description and category -> rejected with its subtree
- A descriptor with children (even empty) becomes a group
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ...config import get_config
from ..entities import CostCategory, CostNode, GroupNode, TerminalNode, as_decimal, new_id
from ..exceptions import MalformedItemError
from .rollup import recompute

logger = logging.getLogger(__name__)


class ItemDescriptor(BaseModel):
    """One generated item; children are validated level by level."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    unit_price: Optional[Decimal] = Field(default=None, alias="unitPrice")
    category: Optional[CostCategory] = None
    notes: Optional[str] = None
    children: Optional[List[Any]] = Field(
        default=None,
        validation_alias=AliasChoices("children", "subItems"),
    )

    @field_validator("quantity", "unit_price", mode="before")
    @classmethod
    def _drop_unusable_number(cls, value):
        """NaN, infinite, negative and non-numeric values fall back to defaults."""
        if value is None or isinstance(value, bool):
            return None
        amount = as_decimal(value, default=None)
        if amount is None or not amount.is_finite() or amount < 0:
            return None
        return amount

    @field_validator("category", mode="before")
    @classmethod
    def _drop_unknown_category(cls, value):
        try:
            return CostCategory(value)
        except ValueError:
            return None

    @field_validator("description", "unit", "notes", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        return text or None


@dataclass
class IngestionResult:
    """Converted nodes plus the descriptors that had to be rejected."""
    nodes: Tuple[CostNode, ...] = ()
    rejected: List[MalformedItemError] = field(default_factory=list)

    @property
    def accepted_count(self) -> int:
        return len(self.nodes)


def _convert(raw: Any, rejected: List[MalformedItemError]) -> Optional[CostNode]:
    if not isinstance(raw, Mapping):
        rejected.append(MalformedItemError("descriptor is not a mapping", raw))
        return None

    try:
        descriptor = ItemDescriptor.model_validate(dict(raw))
    except PydanticValidationError as e:
        rejected.append(MalformedItemError(f"invalid fields ({e.error_count()} errors)", raw))
        return None

    if descriptor.description is None and descriptor.category is None:
        rejected.append(MalformedItemError("missing both description and category", raw))
        return None

    defaults = get_config().get_item_defaults("ingestion")
    common = dict(
        id=new_id(),
        description=descriptor.description or defaults["description"],
        quantity=(
            descriptor.quantity if descriptor.quantity is not None
            else as_decimal(defaults["quantity"])
        ),
        unit=descriptor.unit or defaults["unit"],
        unit_price=(
            descriptor.unit_price if descriptor.unit_price is not None
            else as_decimal(defaults["unit_price"])
        ),
        category=descriptor.category or CostCategory(defaults["category"]),
        notes=descriptor.notes or "",
        expanded=True,
    )

    if descriptor.children is None:
        return TerminalNode(**common)

    children = tuple(
        child for child in (_convert(c, rejected) for c in descriptor.children)
        if child is not None
    )
    return GroupNode(**common, children=children)


def ingest_descriptors(raw_items: Sequence[Any]) -> IngestionResult:
    """
    Convert a batch of generated descriptors into recomputed cost nodes.

    Args:
        raw_items: Descriptors as returned by the item generator

    Returns:
        IngestionResult with numbered, totalled root nodes and rejections
    """
    rejected: List[MalformedItemError] = []
    converted = [_convert(raw, rejected) for raw in raw_items or ()]
    nodes, _ = recompute([node for node in converted if node is not None])

    for error in rejected:
        logger.warning(error.message)
    logger.info(f"Ingested {len(nodes)} root items ({len(rejected)} rejected)")

    return IngestionResult(nodes=nodes, rejected=rejected)

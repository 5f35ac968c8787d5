"""
Resource Editing - Detail-sheet edits of a terminal item's resource lines.

All functions are pure: they take a terminal node and return a new one.
Adding a resource turns a plain item into a detailed one, so its total
comes from the resource lines on the next recompute.
"""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from ...config import get_config
from ..entities import (
    CatalogEntry,
    CostCategory,
    CostNode,
    ResourceLine,
    TerminalNode,
    as_decimal,
    new_id,
)
from .field_updates import coerce_enum, require_terminal, validate_amount
from .rate_catalog import RateCatalog
from .schedule_sync import HOUR_UNIT, schedule_summary


@dataclass(frozen=True)
class ResourceUpdate:
    """
    Partial edit of a resource line; fields left as None are kept.
    """
    description: Optional[str] = None
    category: Optional[CostCategory] = None
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    unit_price: Optional[Decimal] = None
    notes: Optional[str] = None

    def __post_init__(self):
        if self.category is not None:
            object.__setattr__(self, 'category', coerce_enum('category', CostCategory, self.category))
        if self.quantity is not None:
            object.__setattr__(self, 'quantity', validate_amount('quantity', self.quantity))
        if self.unit_price is not None:
            object.__setattr__(self, 'unit_price', validate_amount('unit_price', self.unit_price))

    def apply(self, resource: ResourceLine) -> ResourceLine:
        changes = {
            name: value
            for name, value in (
                ('description', self.description),
                ('category', self.category),
                ('quantity', self.quantity),
                ('unit', self.unit),
                ('unit_price', self.unit_price),
                ('notes', self.notes),
            )
            if value is not None
        }
        return replace(resource, **changes) if changes else resource


def new_resource(
    node: TerminalNode,
    category: CostCategory,
    catalog: Optional[RateCatalog] = None,
) -> ResourceLine:
    """
    Build a default resource line for a terminal item.

    Labor and equipment lines start at the item's crew hours, priced from
    the first catalog entry of their category; other lines start at the
    configured defaults.
    """
    if category in (CostCategory.LABOR, CostCategory.EQUIPMENT):
        entry = catalog.first_for(category) if catalog is not None else None
        return ResourceLine(
            id=new_id(),
            description=entry.name if entry else "",
            category=category,
            quantity=schedule_summary(node).crew_hours,
            unit=HOUR_UNIT,
            unit_price=entry.rate if entry else Decimal("0"),
        )

    defaults = get_config().get_item_defaults("new_resource")
    return ResourceLine(
        id=new_id(),
        description="",
        category=category,
        quantity=as_decimal(defaults["quantity"]),
        unit=defaults["unit"],
        unit_price=as_decimal(defaults["unit_price"]),
    )


def add_resource(
    node: CostNode,
    category: CostCategory,
    catalog: Optional[RateCatalog] = None,
) -> TerminalNode:
    """Append a default resource line of `category` to a terminal item."""
    terminal = require_terminal(node, 'resources')
    resource = new_resource(terminal, category, catalog)
    return replace(terminal, resources=(terminal.resources or ()) + (resource,))


def update_resource(node: CostNode, resource_id: str, update: ResourceUpdate) -> TerminalNode:
    """Edit one resource line; an unknown resource id leaves the node as-is."""
    terminal = require_terminal(node, 'resources')
    resources = terminal.resources or ()
    updated = tuple(
        update.apply(resource) if resource.id == resource_id else resource
        for resource in resources
    )
    if updated == resources:
        return terminal
    return replace(terminal, resources=updated)


def apply_catalog_entry(resource: ResourceLine, entry: CatalogEntry) -> ResourceLine:
    """Price a resource line from a catalog entry (name, rate and unit)."""
    return replace(resource, description=entry.name, unit_price=entry.rate, unit=entry.unit)


def set_resource_from_catalog(node: CostNode, resource_id: str, entry: CatalogEntry) -> TerminalNode:
    """Apply a catalog entry to one resource line of a terminal item."""
    terminal = require_terminal(node, 'resources')
    resources = terminal.resources or ()
    if not any(resource.id == resource_id for resource in resources):
        return terminal
    return replace(
        terminal,
        resources=tuple(
            apply_catalog_entry(resource, entry) if resource.id == resource_id else resource
            for resource in resources
        ),
    )


def remove_resource(node: CostNode, resource_id: str) -> TerminalNode:
    """Drop one resource line from a terminal item."""
    terminal = require_terminal(node, 'resources')
    resources = terminal.resources or ()
    kept = tuple(resource for resource in resources if resource.id != resource_id)
    if len(kept) == len(resources):
        return terminal
    return replace(terminal, resources=kept)

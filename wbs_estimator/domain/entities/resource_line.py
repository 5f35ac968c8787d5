"""
Resource Line Entity - Atomic cost component of a detailed estimate item.

Implements:
- Immutable value semantics
- Cost category taxonomy (labor, material, equipment, subcontractor, indirect)
- Derived total (quantity x unit price)
"""
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import uuid4


class CostCategory(Enum):
    """Classification of cost by type."""
    LABOR = "Labor"
    MATERIAL = "Material"
    EQUIPMENT = "Equipment"
    SUBCONTRACTOR = "Subcontractor"
    INDIRECT = "Indirect"


# Categories whose quantity is driven by the crew schedule
SCHEDULE_DRIVEN_CATEGORIES = frozenset({CostCategory.LABOR, CostCategory.EQUIPMENT})


def new_id() -> str:
    """Generate a fresh, globally unique identifier."""
    return str(uuid4())


def as_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """
    Coerce a numeric value (int, float, str, Decimal) to Decimal.

    Floats go through str() so 0.1 stays 0.1. Unparseable values and
    None return the default.
    """
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


@dataclass(frozen=True)
class ResourceLine:
    """
    Single labor/equipment/material/subcontractor component of a terminal item.

    Attributes:
        id: Unique identifier
        description: Resource name (e.g., 'Foreman', 'Excavator (20T)')
        category: Type of cost
        quantity: Amount of the resource (hours, CY, EA, ...)
        unit: Unit of measure
        unit_price: Price per unit
        notes: Free-text notes
    """

    id: str = field(default_factory=new_id)
    description: str = ""
    category: CostCategory = CostCategory.LABOR
    quantity: Decimal = Decimal("0")
    unit: str = "ea"
    unit_price: Decimal = Decimal("0")
    notes: str = ""

    @property
    def total(self) -> Decimal:
        """Extended cost of the line."""
        return self.quantity * self.unit_price

    @property
    def is_schedule_driven(self) -> bool:
        """Whether the quantity follows the item's crew hours."""
        return self.category in SCHEDULE_DRIVEN_CATEGORIES

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'description': self.description,
            'category': self.category.value,
            'quantity': float(self.quantity),
            'unit': self.unit,
            'unit_price': float(self.unit_price),
            'total': float(self.total),
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ResourceLine':
        """
        Create ResourceLine from dictionary.

        Args:
            data: Dictionary with resource data

        Returns:
            ResourceLine instance
        """
        return cls(
            id=data.get('id') or new_id(),
            description=data.get('description', ''),
            category=CostCategory(data.get('category', CostCategory.LABOR.value)),
            quantity=as_decimal(data.get('quantity', 0)),
            unit=data.get('unit', 'ea'),
            unit_price=as_decimal(data.get('unit_price', 0)),
            notes=data.get('notes', ''),
        )

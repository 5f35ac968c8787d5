"""
Catalog Entry Entity - Standard rate from the labor/equipment rate catalog.
"""
from dataclasses import dataclass, field
from decimal import Decimal

from .resource_line import CostCategory, as_decimal, new_id


@dataclass(frozen=True)
class CatalogEntry:
    """
    Standard rate for a crew member or piece of equipment.

    Attributes:
        id: Catalog identifier (e.g., 'L-003')
        name: Resource name
        rate: Price per unit (usually hourly)
        unit: Unit of measure
        category: LABOR or EQUIPMENT
    """

    id: str = field(default_factory=new_id)
    name: str = ""
    rate: Decimal = Decimal("0")
    unit: str = "hr"
    category: CostCategory = CostCategory.LABOR

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'rate': float(self.rate),
            'unit': self.unit,
            'category': self.category.value,
        }

    @classmethod
    def from_dict(cls, data: dict, category: CostCategory = CostCategory.LABOR) -> 'CatalogEntry':
        """
        Create CatalogEntry from dictionary (e.g., a YAML catalog row).

        Args:
            data: Dictionary with entry data
            category: Category used when the row does not carry one
        """
        return cls(
            id=data.get('id') or new_id(),
            name=data.get('name', ''),
            rate=as_decimal(data.get('rate', 0)),
            unit=data.get('unit', 'hr'),
            category=CostCategory(data['category']) if data.get('category') else category,
        )

"""
Cost Node Entity - Node of the hierarchical estimate (WBS) tree.

Models the tree as a tagged union of two immutable variants:
- GroupNode: owns children, total is the sum of its children
- TerminalNode: costed directly (plug price) or via resource lines

Being a GroupNode is what makes a node a group, even with zero children.
"""
from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from .resource_line import CostCategory, ResourceLine, as_decimal, new_id


class ContractType(Enum):
    """Pricing arrangement under which the work is contracted."""
    LUMP_SUM = "Lump Sum"
    UNIT_PRICE = "Unit Price"
    TIME_AND_MATERIAL = "Time & Material"
    COST_PLUS = "Cost Plus"


class RiskLevel(Enum):
    """Estimator's risk rating for an item."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass(frozen=True)
class Schedule:
    """
    Crew schedule of a terminal item.

    Attributes:
        duration: Working days
        hours_per_day: Shift length in hours
    """

    duration: Decimal = Decimal("1")
    hours_per_day: Decimal = Decimal("8")

    def to_dict(self) -> dict:
        return {
            'duration': float(self.duration),
            'hours_per_day': float(self.hours_per_day),
        }


@dataclass(frozen=True)
class CostNode:
    """
    Fields shared by group and terminal nodes.

    wbs_code and total are derived by the rollup engine and are only
    meaningful after recomputation.

    Attributes:
        id: Unique identifier, stable across recomputation and views
        description: Free-text label
        quantity: Scope quantity
        unit: Unit of measure
        unit_price: Plug price, used only when no resource breakdown exists
        category: Dominant cost category
        contract_type: Optional contract tag
        risk_level: Optional risk tag
        notes: Free-text notes
        wbs_code: Derived dot-separated position (e.g. '2.1')
        total: Derived monetary value
        expanded: UI hint for tree display
    """

    id: str = field(default_factory=new_id)
    description: str = ""
    quantity: Decimal = Decimal("1")
    unit: str = "ls"
    unit_price: Decimal = Decimal("0")
    category: CostCategory = CostCategory.MATERIAL
    contract_type: Optional[ContractType] = None
    risk_level: Optional[RiskLevel] = None
    notes: str = ""
    wbs_code: str = ""
    total: Decimal = Decimal("0")
    expanded: bool = False

    @property
    def is_group(self) -> bool:
        return False

    def common_fields(self) -> dict:
        """Values of the fields shared by both node variants."""
        return {f.name: getattr(self, f.name) for f in fields(CostNode)}

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'wbs_code': self.wbs_code,
            'description': self.description,
            'quantity': float(self.quantity),
            'unit': self.unit,
            'unit_price': float(self.unit_price),
            'category': self.category.value,
            'contract_type': self.contract_type.value if self.contract_type else None,
            'risk_level': self.risk_level.value if self.risk_level else None,
            'notes': self.notes,
            'total': float(self.total),
            'expanded': self.expanded,
        }

    @staticmethod
    def from_dict(data: dict) -> 'CostNode':
        """
        Create a node from a dictionary.

        A 'children' key (even an empty list) produces a GroupNode;
        otherwise a TerminalNode is built.

        Args:
            data: Dictionary with node data

        Returns:
            GroupNode or TerminalNode instance
        """
        common = dict(
            id=data.get('id') or new_id(),
            description=data.get('description', ''),
            quantity=as_decimal(data.get('quantity', 1), Decimal("1")),
            unit=data.get('unit', 'ls'),
            unit_price=as_decimal(data.get('unit_price', 0)),
            category=CostCategory(data.get('category', CostCategory.MATERIAL.value)),
            contract_type=ContractType(data['contract_type']) if data.get('contract_type') else None,
            risk_level=RiskLevel(data['risk_level']) if data.get('risk_level') else None,
            notes=data.get('notes', ''),
            wbs_code=data.get('wbs_code', ''),
            total=as_decimal(data.get('total', 0)),
            expanded=bool(data.get('expanded', False)),
        )

        if 'children' in data:
            return GroupNode(
                **common,
                children=tuple(CostNode.from_dict(c) for c in data['children'] or ()),
            )

        resources = data.get('resources')
        schedule = data.get('schedule')
        return TerminalNode(
            **common,
            resources=(
                tuple(ResourceLine.from_dict(r) for r in resources)
                if resources is not None else None
            ),
            schedule=(
                Schedule(
                    duration=as_decimal(schedule.get('duration', 1), Decimal("1")),
                    hours_per_day=as_decimal(schedule.get('hours_per_day', 8), Decimal("8")),
                )
                if schedule else None
            ),
        )


@dataclass(frozen=True)
class GroupNode(CostNode):
    """Node whose total is the aggregate of its children."""

    children: Tuple[CostNode, ...] = ()

    @property
    def is_group(self) -> bool:
        return True

    @classmethod
    def from_node(cls, node: CostNode, children: Tuple[CostNode, ...] = ()) -> 'GroupNode':
        """
        Build a group carrying over the shared fields of another node.

        Resources and schedule of a terminal node are not carried over:
        they have no meaning once the total comes from children.
        """
        if isinstance(node, GroupNode):
            return node
        return cls(**node.common_fields(), children=children)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['children'] = [child.to_dict() for child in self.children]
        return data


@dataclass(frozen=True)
class TerminalNode(CostNode):
    """Node costed directly, either by plug price or by resource lines."""

    resources: Optional[Tuple[ResourceLine, ...]] = None
    schedule: Optional[Schedule] = None

    @property
    def is_detailed(self) -> bool:
        """Whether the total comes from a resource breakdown."""
        return bool(self.resources)

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.resources is not None:
            data['resources'] = [r.to_dict() for r in self.resources]
        if self.schedule is not None:
            data['schedule'] = self.schedule.to_dict()
        return data

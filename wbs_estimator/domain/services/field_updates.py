"""
Typed Field Updates - The closed set of edits a node accepts.

Each update validates its value when constructed, so an invalid
field/value combination never reaches the tree, and knows how to
produce the edited copy of a node via apply().
"""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional, Tuple

from ..entities import (
    CostCategory,
    CostNode,
    ContractType,
    ResourceLine,
    RiskLevel,
    Schedule,
    TerminalNode,
    as_decimal,
)
from ..exceptions import ValidationError
from .schedule_sync import synchronize_node


def validate_amount(field: str, value) -> Decimal:
    """
    Coerce a user-entered number, rejecting NaN, infinite and negative values.

    Raises:
        ValidationError: If the value is not a usable non-negative number
    """
    amount = as_decimal(value, default=None)
    if amount is None:
        raise ValidationError(field, f"{value!r} is not a number")
    if not amount.is_finite():
        raise ValidationError(field, "must be a finite number")
    if amount < 0:
        raise ValidationError(field, "cannot be negative")
    return amount


def coerce_enum(field: str, enum_cls, value, optional: bool = False):
    if value is None or value == "":
        if optional:
            return None
        raise ValidationError(field, "is required")
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(field, f"{value!r} is not one of: {allowed}")


def require_terminal(node: CostNode, field: str) -> TerminalNode:
    if not isinstance(node, TerminalNode):
        raise ValidationError(field, "only terminal items carry a schedule and resources")
    return node


class FieldUpdate:
    """Base class for node edits."""

    def apply(self, node: CostNode) -> CostNode:
        raise NotImplementedError


@dataclass(frozen=True)
class SetDescription(FieldUpdate):
    value: str

    def apply(self, node: CostNode) -> CostNode:
        return replace(node, description=self.value)


@dataclass(frozen=True)
class SetQuantity(FieldUpdate):
    value: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'value', validate_amount('quantity', self.value))

    def apply(self, node: CostNode) -> CostNode:
        return replace(node, quantity=self.value)


@dataclass(frozen=True)
class SetUnit(FieldUpdate):
    value: str

    def apply(self, node: CostNode) -> CostNode:
        return replace(node, unit=self.value)


@dataclass(frozen=True)
class SetUnitPrice(FieldUpdate):
    value: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'value', validate_amount('unit_price', self.value))

    def apply(self, node: CostNode) -> CostNode:
        return replace(node, unit_price=self.value)


@dataclass(frozen=True)
class SetCategory(FieldUpdate):
    """Change the dominant category; never changes group/terminal status."""
    value: CostCategory

    def __post_init__(self):
        object.__setattr__(self, 'value', coerce_enum('category', CostCategory, self.value))

    def apply(self, node: CostNode) -> CostNode:
        return replace(node, category=self.value)


@dataclass(frozen=True)
class SetContractType(FieldUpdate):
    value: Optional[ContractType]

    def __post_init__(self):
        object.__setattr__(
            self, 'value', coerce_enum('contract_type', ContractType, self.value, optional=True)
        )

    def apply(self, node: CostNode) -> CostNode:
        return replace(node, contract_type=self.value)


@dataclass(frozen=True)
class SetRiskLevel(FieldUpdate):
    value: Optional[RiskLevel]

    def __post_init__(self):
        object.__setattr__(
            self, 'value', coerce_enum('risk_level', RiskLevel, self.value, optional=True)
        )

    def apply(self, node: CostNode) -> CostNode:
        return replace(node, risk_level=self.value)


@dataclass(frozen=True)
class SetNotes(FieldUpdate):
    value: str

    def apply(self, node: CostNode) -> CostNode:
        return replace(node, notes=self.value)


@dataclass(frozen=True)
class SetSchedule(FieldUpdate):
    """
    Change the crew schedule of a terminal item.

    Labor and equipment resource quantities follow the new crew hours.
    """
    duration: Decimal
    hours_per_day: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'duration', validate_amount('duration', self.duration))
        object.__setattr__(self, 'hours_per_day', validate_amount('hours_per_day', self.hours_per_day))

    def apply(self, node: CostNode) -> CostNode:
        terminal = require_terminal(node, 'schedule')
        schedule = Schedule(duration=self.duration, hours_per_day=self.hours_per_day)
        return synchronize_node(replace(terminal, schedule=schedule))


@dataclass(frozen=True)
class SaveDetail(FieldUpdate):
    """
    Commit the detail sheet of a terminal item in one edit.

    Replaces resources, schedule, quantity and tags, then synchronizes
    schedule-driven resources with the new crew hours.
    """
    resources: Tuple[ResourceLine, ...]
    duration: Decimal
    hours_per_day: Decimal
    quantity: Decimal
    contract_type: Optional[ContractType] = None
    risk_level: Optional[RiskLevel] = None

    def __post_init__(self):
        object.__setattr__(self, 'resources', tuple(self.resources))
        object.__setattr__(self, 'duration', validate_amount('duration', self.duration))
        object.__setattr__(self, 'hours_per_day', validate_amount('hours_per_day', self.hours_per_day))
        object.__setattr__(self, 'quantity', validate_amount('quantity', self.quantity))
        object.__setattr__(
            self, 'contract_type',
            coerce_enum('contract_type', ContractType, self.contract_type, optional=True),
        )
        object.__setattr__(
            self, 'risk_level',
            coerce_enum('risk_level', RiskLevel, self.risk_level, optional=True),
        )

    def apply(self, node: CostNode) -> CostNode:
        terminal = require_terminal(node, 'resources')
        updated = replace(
            terminal,
            resources=self.resources,
            schedule=Schedule(duration=self.duration, hours_per_day=self.hours_per_day),
            quantity=self.quantity,
            contract_type=self.contract_type,
            risk_level=self.risk_level,
        )
        return synchronize_node(updated)

"""
Project Entity - Estimate header owning the canonical cost tree.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Tuple

from .cost_node import CostNode
from .resource_line import new_id


class ProjectStatus(Enum):
    """Lifecycle status of an estimate."""
    DRAFT = "Draft"
    ACTIVE = "Active"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class Project:
    """
    Estimate project.

    Attributes:
        id: Unique identifier
        name: Project name
        client: Client name
        location: Site location
        status: Lifecycle status
        currency: Display-only currency code
        items: Root nodes of the canonical cost tree
        last_modified: Timestamp of the last committed edit
    """

    id: str = field(default_factory=new_id)
    name: str = ""
    client: str = ""
    location: str = ""
    status: ProjectStatus = ProjectStatus.DRAFT
    currency: str = "USD"
    items: Tuple[CostNode, ...] = ()
    last_modified: datetime = field(default_factory=datetime.now)

    @property
    def grand_total(self) -> Decimal:
        """Sum of root item totals."""
        return sum((item.total for item in self.items), Decimal("0"))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'name': self.name,
            'client': self.client,
            'location': self.location,
            'status': self.status.value,
            'currency': self.currency,
            'grand_total': float(self.grand_total),
            'last_modified': self.last_modified.isoformat(),
            'items': [item.to_dict() for item in self.items],
        }

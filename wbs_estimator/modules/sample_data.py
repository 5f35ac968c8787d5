"""
Sample Estimate - Seed project used by the CLI and tests.
"""
from decimal import Decimal

from ..domain.entities import (
    CostCategory,
    GroupNode,
    Project,
    ProjectStatus,
    TerminalNode,
)
from ..domain.services import recompute


def build_sample_project() -> Project:
    """Downtown office complex with general conditions and site work."""
    items = (
        GroupNode(
            id='100',
            description='General Conditions',
            category=CostCategory.INDIRECT,
            expanded=True,
            children=(
                TerminalNode(
                    id='101',
                    description='Mobilization',
                    quantity=Decimal("1"),
                    unit='ls',
                    unit_price=Decimal("5000"),
                    category=CostCategory.INDIRECT,
                ),
                TerminalNode(
                    id='102',
                    description='Temporary Utilities',
                    quantity=Decimal("4"),
                    unit='mo',
                    unit_price=Decimal("2500"),
                    category=CostCategory.INDIRECT,
                ),
            ),
        ),
        GroupNode(
            id='200',
            description='Site Work',
            category=CostCategory.SUBCONTRACTOR,
            expanded=True,
            children=(
                TerminalNode(
                    id='201',
                    description='Excavation',
                    quantity=Decimal("500"),
                    unit='cy',
                    unit_price=Decimal("25"),
                    category=CostCategory.EQUIPMENT,
                ),
            ),
        ),
    )
    items, _ = recompute(items)
    return Project(
        id='p1',
        name='Downtown Office Complex - Phase 1',
        client='Urban Develop Corp',
        location='Seattle, WA',
        status=ProjectStatus.ACTIVE,
        currency='USD',
        items=items,
    )

"""
Unit Tests for cost tree entities.
"""
from decimal import Decimal

from wbs_estimator.domain.entities import (
    CostCategory,
    CostNode,
    GroupNode,
    ResourceLine,
    RiskLevel,
    TerminalNode,
    as_decimal,
)
from wbs_estimator.modules import build_sample_project


class TestAsDecimal:
    """Tests for numeric coercion."""

    def test_values(self):
        """Test floats, strings and fallbacks."""
        assert as_decimal(0.1) == Decimal("0.1")
        assert as_decimal("12") == Decimal("12")
        assert as_decimal(None) == Decimal("0")
        assert as_decimal("abc", Decimal("1")) == Decimal("1")


class TestCostNode:
    """Tests for the node variants."""

    def test_group_status_is_the_variant(self):
        """Test an empty group is still a group."""
        assert GroupNode().is_group
        assert not TerminalNode().is_group

    def test_terminal_detail(self):
        """Test the detailed flag follows resource lines."""
        assert not TerminalNode().is_detailed
        assert not TerminalNode(resources=()).is_detailed
        assert TerminalNode(resources=(ResourceLine(),)).is_detailed

    def test_from_node_keeps_shared_fields(self):
        """Test converting a terminal to a group."""
        terminal = TerminalNode(id='x', description="Paving", risk_level=RiskLevel.HIGH)
        group = GroupNode.from_node(terminal)
        assert group.id == 'x'
        assert group.description == "Paving"
        assert group.risk_level == RiskLevel.HIGH
        assert group.children == ()
        assert GroupNode.from_node(group) is group


class TestSerialization:
    """Tests for dictionary conversion."""

    def test_project_to_dict(self):
        """Test the sample project serializes with its totals."""
        data = build_sample_project().to_dict()
        assert data['name'] == "Downtown Office Complex - Phase 1"
        assert data['status'] == "Active"
        assert data['grand_total'] == 27500.0
        assert data['items'][0]['children'][1]['wbs_code'] == "1.2"

    def test_from_dict_variants(self):
        """Test a children key makes a group, resources stay on terminals."""
        node = CostNode.from_dict({
            'id': 'g',
            'description': "Phase",
            'children': [
                {'id': 't', 'category': 'Labor', 'resources': [
                    {'id': 'r', 'category': 'Labor', 'quantity': 8, 'unit_price': 50},
                ], 'schedule': {'duration': 2, 'hours_per_day': 4}},
            ],
        })
        assert isinstance(node, GroupNode)
        (child,) = node.children
        assert isinstance(child, TerminalNode)
        assert child.category == CostCategory.LABOR
        assert child.resources[0].total == Decimal("400")
        assert child.schedule.duration == Decimal("2")

    def test_empty_children_key_makes_group(self):
        """Test an empty children list still yields a group."""
        assert isinstance(CostNode.from_dict({'children': []}), GroupNode)

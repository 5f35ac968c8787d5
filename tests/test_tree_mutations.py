"""
Unit Tests for the Tree Mutation Operators.

Tests:
- Path-only copying with structural sharing of untouched branches
- Unknown ids are silent no-ops
- Subtree deletion at any depth
- Terminal-to-group conversion when adding a child
"""
from decimal import Decimal

import pytest

from wbs_estimator.domain.entities import GroupNode, ResourceLine, Schedule, TerminalNode
from wbs_estimator.domain.services import (
    SetDescription,
    SetQuantity,
    add_child,
    add_root,
    contains_node,
    delete_node,
    find_node,
    iter_nodes,
    new_child_node,
    recompute,
    toggle_expand,
    update_field,
)
from wbs_estimator.modules import build_sample_project


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def items():
    """Recomputed items of the sample project."""
    return build_sample_project().items


# =============================================================================
# Tests
# =============================================================================

class TestFindNode:
    """Tests for lookups by id."""

    def test_find_nested(self, items):
        """Test finding a node below a group."""
        node = find_node(items, '102')
        assert node.description == "Temporary Utilities"

    def test_find_missing(self, items):
        """Test that an unknown id yields None."""
        assert find_node(items, 'nope') is None

    def test_contains_node(self, items):
        """Test subtree membership."""
        general = items[0]
        assert contains_node(general, '100')
        assert contains_node(general, '101')
        assert not contains_node(general, '201')


class TestUpdateField:
    """Tests for typed field updates through the tree."""

    def test_only_path_is_copied(self, items):
        """Test that siblings off the edit path are shared."""
        updated = update_field(items, '101', SetQuantity(2))

        assert updated is not items
        assert updated[1] is items[1]
        assert updated[0] is not items[0]
        assert updated[0].children[1] is items[0].children[1]
        assert find_node(updated, '101').quantity == Decimal("2")

    def test_original_tree_untouched(self, items):
        """Test that the input tree is never mutated."""
        update_field(items, '101', SetDescription("Demobilization"))
        assert find_node(items, '101').description == "Mobilization"

    def test_unknown_id_returns_input(self, items):
        """Test that a missed lookup is a no-op returning the same tuple."""
        assert update_field(items, 'missing', SetQuantity(3)) is items

    def test_totals_follow_after_recompute(self, items):
        """Test the concrete quantity edit scenario."""
        updated, total = recompute(update_field(items, '101', SetQuantity(2)))
        assert updated[0].total == Decimal("20000")
        assert total == Decimal("32500")


class TestAddChild:
    """Tests for adding sub-items."""

    def test_add_to_group(self, items):
        """Test appending a child to an existing group."""
        child = new_child_node()
        updated = add_child(items, '200', child)
        site = find_node(updated, '200')
        assert site.children[-1] is child
        assert site.expanded is True
        assert updated[0] is items[0]

    def test_add_to_terminal_converts_to_group(self, items):
        """Test that a terminal parent becomes a group."""
        updated, _ = recompute(add_child(items, '201'))
        excavation = find_node(updated, '201')

        assert isinstance(excavation, GroupNode)
        assert len(excavation.children) == 1
        assert excavation.children[0].description == "New Sub-Item"
        assert excavation.children[0].wbs_code == "2.1.1"
        # Total now comes from the new child (1 ea x 0)
        assert excavation.total == Decimal("0")

    def test_conversion_drops_resources_and_schedule(self):
        """Test that resources and schedule are not carried to the group."""
        detailed = TerminalNode(
            id='t1',
            resources=(ResourceLine(quantity=Decimal("1"), unit_price=Decimal("10")),),
            schedule=Schedule(duration=Decimal("3")),
        )
        (group,) = add_child((detailed,), 't1')
        assert isinstance(group, GroupNode)
        assert not hasattr(group, 'resources')
        assert not hasattr(group, 'schedule')

    def test_unknown_parent_is_noop(self, items):
        """Test that a missing parent leaves the tree as-is."""
        assert add_child(items, 'missing') is items


class TestAddRoot:
    """Tests for adding top-level phases."""

    def test_add_root_appends_group(self, items):
        """Test a new empty group at the end."""
        updated, total = recompute(add_root(items))
        assert len(updated) == 3
        assert isinstance(updated[-1], GroupNode)
        assert updated[-1].children == ()
        assert updated[-1].description == "New Scope Item"
        assert updated[-1].wbs_code == "3"
        assert total == Decimal("27500")

    def test_add_root_to_empty_tree(self):
        """Test adding the first phase."""
        updated, _ = recompute(add_root(()))
        assert len(updated) == 1
        assert updated[0].wbs_code == "1"


class TestDeleteNode:
    """Tests for subtree deletion."""

    def test_delete_group_removes_subtree(self, items):
        """Test that every descendant disappears with its group."""
        updated, total = recompute(delete_node(items, '100'))
        ids = {node.id for node in iter_nodes(updated)}
        assert ids == {'200', '201'}
        assert total == Decimal("12500")
        assert updated[0].wbs_code == "1"

    def test_delete_nested_leaf(self, items):
        """Test deleting a leaf renumbers its later siblings."""
        updated, total = recompute(delete_node(items, '101'))
        utilities = find_node(updated, '102')
        assert utilities.wbs_code == "1.1"
        assert total == Decimal("22500")

    def test_delete_shares_untouched_branches(self, items):
        """Test that unrelated roots are reused."""
        updated = delete_node(items, '101')
        assert updated[1] is items[1]

    def test_delete_unknown_is_noop(self, items):
        """Test that deleting a missing id returns the input."""
        assert delete_node(items, 'missing') is items

    def test_delete_last_child_keeps_empty_group(self, items):
        """Test that a group emptied by deletion stays a group."""
        updated, _ = recompute(delete_node(items, '201'))
        site = find_node(updated, '200')
        assert isinstance(site, GroupNode)
        assert site.children == ()
        assert site.total == Decimal("0")


class TestToggleExpand:
    """Tests for the expansion flag."""

    def test_toggle_flips_flag(self, items):
        """Test that toggling twice restores the flag."""
        once = toggle_expand(items, '100')
        assert find_node(once, '100').expanded is False
        twice = toggle_expand(once, '100')
        assert find_node(twice, '100').expanded is True

    def test_toggle_does_not_change_totals(self, items):
        """Test that expansion is a display hint only."""
        updated = toggle_expand(items, '100')
        assert updated[0].total == items[0].total

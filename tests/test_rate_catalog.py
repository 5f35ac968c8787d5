"""
Unit Tests for the Rate Catalog.
"""
from decimal import Decimal

import pytest

from wbs_estimator.domain.entities import CatalogEntry, CostCategory
from wbs_estimator.domain.exceptions import CatalogEntryNotFoundError, DuplicateCatalogEntryError
from wbs_estimator.domain.services import RateCatalog


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def catalog():
    """Catalog loaded from the shipped configuration."""
    return RateCatalog.from_config()


# =============================================================================
# Tests
# =============================================================================

class TestCatalogLoading:
    """Tests for building the catalog from configuration."""

    def test_entry_counts(self, catalog):
        """Test ten labor and ten equipment entries."""
        assert len(catalog) == 20
        assert len(catalog.entries_for(CostCategory.LABOR)) == 10
        assert len(catalog.entries_for(CostCategory.EQUIPMENT)) == 10

    def test_get_entry(self, catalog):
        """Test lookup by id."""
        foreman = catalog.get("L-003")
        assert foreman.name == "Foreman"
        assert foreman.rate == Decimal("85.0")
        assert foreman.unit == "hr"
        assert foreman.category == CostCategory.LABOR

    def test_first_for(self, catalog):
        """Test the entry used to pre-fill new lines."""
        assert catalog.first_for(CostCategory.LABOR).id == "L-001"
        assert catalog.first_for(CostCategory.EQUIPMENT).id == "E-001"
        assert catalog.first_for(CostCategory.MATERIAL) is None

    def test_unknown_id_raises(self, catalog):
        """Test that a missing entry is an error."""
        with pytest.raises(CatalogEntryNotFoundError):
            catalog.get("X-999")


class TestCatalogEditing:
    """Tests for adding and removing entries."""

    def test_add_and_remove(self):
        """Test the catalog round-trip of one entry."""
        catalog = RateCatalog()
        entry = CatalogEntry(id="L-900", name="Welder", rate=Decimal("70"))
        catalog.add(entry)
        assert "L-900" in catalog
        assert list(catalog) == [entry]
        assert catalog.remove("L-900") is entry
        assert len(catalog) == 0

    def test_duplicate_id_rejected(self):
        """Test that ids are unique."""
        catalog = RateCatalog([CatalogEntry(id="L-900", name="Welder")])
        with pytest.raises(DuplicateCatalogEntryError):
            catalog.add(CatalogEntry(id="L-900", name="Other"))

    def test_remove_missing_raises(self):
        """Test removing an unknown entry."""
        with pytest.raises(CatalogEntryNotFoundError):
            RateCatalog().remove("nope")


class TestCatalogSearch:
    """Tests for substring and fuzzy search."""

    def test_substring_match(self, catalog):
        """Test case-insensitive substring search."""
        names = [e.name for e in catalog.search("excavator")]
        assert names[:2] == ["Excavator (20T)", "Excavator (Mini)"]

    def test_fuzzy_match(self, catalog):
        """Test that a misspelling still finds the entry."""
        names = [e.name for e in catalog.search("excavater")]
        assert "Excavator (20T)" in names

    def test_category_filter(self, catalog):
        """Test restricting results to a category."""
        results = catalog.search("operator", category=CostCategory.LABOR)
        assert {e.id for e in results} >= {"L-008", "L-009"}
        assert all(e.category == CostCategory.LABOR for e in results)

    def test_blank_returns_all(self, catalog):
        """Test that an empty term lists the whole catalog."""
        assert len(catalog.search("")) == 20
        assert len(catalog.search("   ", limit=5)) == 5

    def test_limit(self, catalog):
        """Test capping results."""
        assert len(catalog.search("excavator", limit=1)) == 1

    def test_no_match(self, catalog):
        """Test that nonsense finds nothing."""
        assert catalog.search("zzzzqqqq") == []

"""
Rate Catalog - Standard labor and equipment rates.

Search combines a case-insensitive substring match with rapidfuzz
scoring so near-miss spellings ("excavater") still find entries.
Scorer and threshold are configured under catalog.search.
"""
import logging
from typing import Dict, Iterable, Iterator, List, Optional

from rapidfuzz import fuzz

from ...config import EstimatorConfig, get_config
from ..entities import CatalogEntry, CostCategory
from ..exceptions import CatalogEntryNotFoundError, DuplicateCatalogEntryError

logger = logging.getLogger(__name__)

# Config section -> category of its entries
CATALOG_SECTIONS = {
    'labor': CostCategory.LABOR,
    'equipment': CostCategory.EQUIPMENT,
}


class RateCatalog:
    """
    In-memory rate catalog keyed by entry id, in insertion order.
    """

    def __init__(self, entries: Iterable[CatalogEntry] = ()):
        self._entries: Dict[str, CatalogEntry] = {}
        for entry in entries:
            self.add(entry)

    @classmethod
    def from_config(cls, config: Optional[EstimatorConfig] = None) -> 'RateCatalog':
        """Build the catalog from the configured labor and equipment decks."""
        config = config or get_config()
        entries = [
            CatalogEntry.from_dict(row, category)
            for section, category in CATALOG_SECTIONS.items()
            for row in config.get_catalog_entries(section)
        ]
        logger.info(f"Loaded {len(entries)} catalog entries")
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries.values())

    def __contains__(self, entry_id: str) -> bool:
        return entry_id in self._entries

    def get(self, entry_id: str) -> CatalogEntry:
        """
        Get an entry by id.

        Raises:
            CatalogEntryNotFoundError: If no entry has this id
        """
        entry = self._entries.get(entry_id)
        if entry is None:
            raise CatalogEntryNotFoundError(entry_id)
        return entry

    def add(self, entry: CatalogEntry) -> CatalogEntry:
        """Add a new entry; ids must be unique."""
        if entry.id in self._entries:
            raise DuplicateCatalogEntryError(entry.id)
        self._entries[entry.id] = entry
        return entry

    def remove(self, entry_id: str) -> CatalogEntry:
        """Remove and return the entry with this id."""
        if entry_id not in self._entries:
            raise CatalogEntryNotFoundError(entry_id)
        return self._entries.pop(entry_id)

    def entries_for(self, category: CostCategory) -> List[CatalogEntry]:
        """All entries of a category, in catalog order."""
        return [entry for entry in self._entries.values() if entry.category == category]

    def first_for(self, category: CostCategory) -> Optional[CatalogEntry]:
        """First entry of a category, used to pre-fill new resource lines."""
        entries = self.entries_for(category)
        return entries[0] if entries else None

    def search(
        self,
        term: str,
        category: Optional[CostCategory] = None,
        limit: Optional[int] = None,
    ) -> List[CatalogEntry]:
        """
        Find entries whose name matches a search term.

        Args:
            term: Search text; blank returns every entry
            category: Optional category filter
            limit: Optional maximum number of results

        Returns:
            Matching entries, best score first (catalog order on ties)
        """
        candidates = (
            self.entries_for(category) if category is not None else list(self._entries.values())
        )
        needle = (term or "").strip().lower()
        if not needle:
            return candidates[:limit] if limit else candidates

        settings = get_config().catalog_search
        scorer = getattr(fuzz, settings.get("scorer", "partial_ratio"), fuzz.partial_ratio)
        min_score = settings.get("min_score", 70)

        scored = []
        for entry in candidates:
            name = entry.name.lower()
            score = 100.0 if needle in name else scorer(needle, name)
            if score >= min_score:
                scored.append((score, entry))

        scored.sort(key=lambda pair: pair[0], reverse=True)
        results = [entry for _, entry in scored]
        return results[:limit] if limit else results

"""
Configuration loader for the WBS Estimator.

Loads settings from estimator_config.yaml and provides typed access
to all configuration sections.
"""
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional
from functools import lru_cache

import yaml


# Default config path, shipped inside the package
DEFAULT_CONFIG_PATH = Path(__file__).parent / "estimator_config.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


class EstimatorConfig:
    """
    Configuration manager for the WBS Estimator.

    Loads YAML configuration and provides typed access to all sections.
    Use get_config() to obtain the singleton instance.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = config_path or DEFAULT_CONFIG_PATH
        self._config: dict = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            raise ConfigurationError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r') as f:
                self._config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")

        if not isinstance(self._config, dict):
            raise ConfigurationError("Config file must contain a YAML mapping")

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._load()
        # Clear the cached singleton to force reload on next get_config()
        get_config.cache_clear()

    @property
    def version(self) -> str:
        """Configuration file version."""
        return self._config.get("version", "unknown")

    # =========================================================================
    # Item Defaults
    # =========================================================================

    @property
    def defaults(self) -> dict:
        """Default values for new items, resources and schedules."""
        return self._config.get("defaults", {})

    @property
    def default_duration(self) -> Decimal:
        """Default crew duration in days."""
        schedule = self.defaults.get("schedule", {})
        return Decimal(str(schedule.get("duration", 1)))

    @property
    def default_hours_per_day(self) -> Decimal:
        """Default shift length in hours."""
        schedule = self.defaults.get("schedule", {})
        return Decimal(str(schedule.get("hours_per_day", 8)))

    @property
    def crew_hours_precision(self) -> int:
        """Decimal places kept when computing crew hours."""
        return int(self.defaults.get("crew_hours_precision", 2))

    def get_item_defaults(self, kind: str) -> dict:
        """
        Get default field values for a newly created item.

        Args:
            kind: One of 'new_root', 'new_child', 'new_resource', 'ingestion'

        Returns:
            Dict with description, quantity, unit, unit_price, category
        """
        fallback = {
            "description": "",
            "quantity": 1,
            "unit": "ls",
            "unit_price": 0,
            "category": "Material",
        }
        return {**fallback, **self.defaults.get(kind, {})}

    # =========================================================================
    # View Transformation
    # =========================================================================

    @property
    def view(self) -> dict:
        """View transformation configuration."""
        return self._config.get("view", {})

    @property
    def unassigned_label(self) -> str:
        """Description of the bucket collecting untagged items."""
        return self.view.get("unassigned_label", "Unassigned / General")

    # =========================================================================
    # Rate Catalog
    # =========================================================================

    @property
    def catalog(self) -> dict:
        """Rate catalog configuration."""
        return self._config.get("catalog", {})

    @property
    def catalog_search(self) -> dict:
        """Fuzzy search settings for the rate catalog."""
        return self.catalog.get("search", {
            "scorer": "partial_ratio",
            "min_score": 70,
        })

    def get_catalog_entries(self, section: str) -> list[dict]:
        """
        Get raw catalog entries for a section.

        Args:
            section: One of 'labor', 'equipment'
        """
        return self.catalog.get(section, [])

    # =========================================================================
    # UI Configuration
    # =========================================================================

    @property
    def ui(self) -> dict:
        """UI configuration."""
        return self._config.get("ui", {})

    @property
    def currency_config(self) -> dict:
        """Currency formatting configuration."""
        return self.ui.get("currency", {
            "symbol": "$",
            "decimal_places": 2,
            "thousands_separator": ","
        })

    def format_amount(self, amount) -> str:
        """Format a monetary amount for display."""
        currency = self.currency_config
        places = currency.get("decimal_places", 2)
        separator = currency.get("thousands_separator", ",")
        text = f"{amount:,.{places}f}"
        if separator != ",":
            text = text.replace(",", separator)
        return f"{currency.get('symbol', '')}{text}"

    # =========================================================================
    # Raw Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level config value by key."""
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to config."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config."""
        return key in self._config


@lru_cache(maxsize=1)
def get_config(config_path: Optional[str] = None) -> EstimatorConfig:
    """
    Get the singleton configuration instance.

    Args:
        config_path: Optional path to config file. Only used on first call.

    Returns:
        EstimatorConfig singleton instance
    """
    path = Path(config_path) if config_path else None
    return EstimatorConfig(path)


def reload_config() -> EstimatorConfig:
    """Reload configuration from disk and return new instance."""
    get_config.cache_clear()
    return get_config()

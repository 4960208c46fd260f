"""
Configuration for Catalog Match.

Holds the candidate field names used to read identifiers and descriptive
attributes out of arbitrary spreadsheet headers, plus display labels and
aggregation settings. Config is declarative JSON - edit the file, not the
code.
"""

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

DEFAULT_CONFIG_PATH = Path(__file__).parent / "field_config.json"


@dataclass
class FieldNames:
    """Ordered candidate header names, highest priority first."""
    identifier: list[str] = field(default_factory=list)
    manufacturer: list[str] = field(default_factory=list)
    family: list[str] = field(default_factory=list)


@dataclass
class Labels:
    """Fallback display labels for values that could not be resolved."""
    unspecified_manufacturer: str = "Unspecified manufacturer"
    unspecified_family: str = "General catalog"
    unidentified: str = "Unidentified"


@dataclass
class MatchSettings:
    """Settings for matching and aggregation."""
    top_n: int = 3
    brief_sample_size: int = 10
    # When set, records without a recognised identifier column get no
    # identifier instead of falling back to their first field
    strict_identifiers: bool = False


@dataclass
class FieldConfig:
    """Full configuration for catalog matching."""
    fields: FieldNames = field(default_factory=FieldNames)
    labels: Labels = field(default_factory=Labels)
    settings: MatchSettings = field(default_factory=MatchSettings)

    # Lower-cased identifier names (built on load)
    _identifier_keys: list[str] = field(default_factory=list, repr=False)

    def __post_init__(self):
        """Normalize candidate names for case-insensitive comparison."""
        self._identifier_keys = [name.strip().lower() for name in self.fields.identifier]

    @property
    def identifier_keys(self) -> list[str]:
        return self._identifier_keys


def load_config(config_path: str | Path) -> FieldConfig:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to field_config.json

    Returns:
        FieldConfig with field names, labels, and settings

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a field list is not a list of strings
    """
    path = Path(config_path)
    with open(path, "r") as f:
        data = json.load(f)

    fields_data = data.get("fields", {})
    for key in ("identifier", "manufacturer", "family"):
        value = fields_data.get(key, [])
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"Field list '{key}' in {path} must be a list of strings")

    labels_data = data.get("labels", {})
    defaults = Labels()
    labels = Labels(
        unspecified_manufacturer=labels_data.get("unspecified_manufacturer", defaults.unspecified_manufacturer),
        unspecified_family=labels_data.get("unspecified_family", defaults.unspecified_family),
        unidentified=labels_data.get("unidentified", defaults.unidentified),
    )

    settings_data = data.get("settings", {})
    settings = MatchSettings(
        top_n=int(settings_data.get("top_n", 3)),
        brief_sample_size=int(settings_data.get("brief_sample_size", 10)),
        strict_identifiers=bool(settings_data.get("strict_identifiers", False)),
    )

    return FieldConfig(
        fields=FieldNames(
            identifier=fields_data.get("identifier", []),
            manufacturer=fields_data.get("manufacturer", []),
            family=fields_data.get("family", []),
        ),
        labels=labels,
        settings=settings,
    )


@lru_cache
def default_config() -> FieldConfig:
    """Get the cached configuration shipped with the package."""
    return load_config(DEFAULT_CONFIG_PATH)

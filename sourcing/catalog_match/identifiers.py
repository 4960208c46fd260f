"""
Identifier extraction and descriptive field lookup.

Catalogs and request lists arrive with whatever headers the author chose
("Part Number", "PN", "sku", ...). extract_identifier derives the uppercased
key used for matching; resolve_field reads display attributes such as
manufacturer or family.
"""

from typing import Mapping, Optional, Sequence

from .config import FieldConfig, default_config


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def extract_identifier(record: Optional[Mapping[str, str]], config: Optional[FieldConfig] = None) -> str:
    """
    Derive the canonical identifier for a record.

    Tries the configured identifier columns in priority order, ignoring
    header casing. Without one, falls back to the record's first field
    (unless strict identifiers are enabled).

    Returns:
        Uppercased identifier, or "" when none could be derived
    """
    if not record:
        return ""
    config = config or default_config()

    # Later headers that differ only by case overwrite earlier ones
    lower_map = {str(key).strip().lower(): value for key, value in record.items()}

    for candidate in config.identifier_keys:
        value = _clean(lower_map.get(candidate))
        if value:
            return value.upper()

    if config.settings.strict_identifiers:
        return ""

    first_value = _clean(next(iter(record.values())))
    return first_value.upper()


def resolve_field(record: Optional[Mapping[str, str]], field_names: Sequence[str]) -> str:
    """
    Return the first non-empty value among candidate field names.

    Candidates are tried in priority order; for each one the record's keys
    are scanned in their own order, case-insensitively.
    """
    if not record:
        return ""
    entries = list(record.items())
    for field_name in field_names:
        wanted = field_name.strip().lower()
        for key, value in entries:
            if str(key).strip().lower() != wanted:
                continue
            trimmed = _clean(value)
            if trimmed:
                return trimmed
    return ""


def resolve_manufacturer(record: Optional[Mapping[str, str]], config: Optional[FieldConfig] = None) -> str:
    config = config or default_config()
    return resolve_field(record, config.fields.manufacturer)


def resolve_family(record: Optional[Mapping[str, str]], config: Optional[FieldConfig] = None) -> str:
    config = config or default_config()
    return resolve_field(record, config.fields.family)

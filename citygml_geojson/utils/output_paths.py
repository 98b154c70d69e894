"""Deterministic output path generation.

Every feature is written to::

    {output_root}/{category}/{identifier}.json

Identifiers are used exactly as derived from the feature (no slug
sanitising), so the same input always produces the same path and an
existing file of that name is overwritten.
"""

from __future__ import annotations

from pathlib import Path

from citygml_geojson.core.constants import OUTPUT_EXTENSION
from citygml_geojson.models.feature import PropertyValue

FALLBACK_PREFIX = "object_"
"""Prefix of the synthetic identifier used for non-text, non-integer ids."""


def identifier_for(value: PropertyValue, sequence: int) -> str:
    """Derive the file-name identifier from an identifier property value.

    Text values are used as-is and integers are written in decimal. Any
    other value kind falls back to ``object_<sequence>``.

    Args:
        value: The identifier property value.
        sequence: Running count of features written so far in the category.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return f"{FALLBACK_PREFIX}{sequence}"


def category_dir(output_root: Path | str, category: str) -> Path:
    """Return the directory holding one category's features."""
    return Path(output_root) / category


def build_feature_path(category_directory: Path | str, identifier: str) -> Path:
    """Return the path of one feature document inside a category directory.

    The identifier is appended to the directory as text, so an absolute
    identifier still lands below ``category_directory``.
    """
    return Path(f"{category_directory}/{identifier}{OUTPUT_EXTENSION}")

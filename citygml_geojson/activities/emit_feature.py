"""Feature emitter: write one GeoJSON document per identified feature.

Looks up the configured identifier property on an extracted feature.
Features without it are skipped silently (reported as an outcome, no
file, no error). Identified features are serialised with two-space
indentation and written to ``{category_dir}/{identifier}.json``,
overwriting any existing file of that name.

Write failures are fatal and raised as ``FeatureWriteError``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from citygml_geojson.core.exceptions import FeatureWriteError
from citygml_geojson.models.outcome import FeatureOutcome, SkipReason
from citygml_geojson.utils.output_paths import build_feature_path, identifier_for

if TYPE_CHECKING:
    from pathlib import Path

    from citygml_geojson.models.feature import GeoJsonFeature

logger = logging.getLogger("citygml_geojson.activities.emit_feature")


def emit_feature(
    feature: GeoJsonFeature,
    *,
    id_field: str,
    category_directory: Path | str,
    sequence: int = 0,
) -> FeatureOutcome:
    """Write ``feature`` if it carries ``id_field``.

    Args:
        feature: An extracted feature.
        id_field: Property naming the output file.
        category_directory: Existing directory for this category.
        sequence: Running count of features written so far, used for the
            ``object_<n>`` identifier fallback.

    Returns:
        The outcome: written with its path, or skipped with a reason.

    Raises:
        FeatureWriteError: If serialisation or the file write fails.
    """
    if id_field not in feature.properties:
        return FeatureOutcome.skipped(SkipReason.MISSING_IDENTIFIER)

    identifier = identifier_for(feature.properties[id_field], sequence)
    path = build_feature_path(category_directory, identifier)

    try:
        document = feature.to_json()
        path.write_text(document, encoding="utf-8")
    except (OSError, ValueError) as exc:
        msg = f"Failed to write feature {identifier!r} to {path}: {exc}"
        raise FeatureWriteError(msg) from exc

    logger.debug(
        "Feature written | id=%s | points=%d | path=%s",
        identifier,
        feature.geometry.vertex_count,
        path,
    )
    return FeatureOutcome(written=True, identifier=identifier, path=str(path))

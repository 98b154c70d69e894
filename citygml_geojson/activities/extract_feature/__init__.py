"""Attribute/geometry extraction for one generic city object fragment.

Parses a fragment produced by the segmenter as a standalone XML document
and returns a GeoJSON LineString feature.

The extraction is split into focused stages:
- **_collector**: lxml parser target harvesting generic attributes and
  ``posList`` text while the fragment streams through the parser
- **_values**: strict int/float parsing and ``posList`` pairing

Failure handling:
- A fragment that is not well-formed never raises. The feature keeps
  whatever was completed before the error point, which for a truncated
  fragment is nothing at all.
- Unparseable int/double values are omitted, non-numeric ``posList``
  tokens are filtered out, and points that fail to reproject are
  dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from citygml_geojson.activities.extract_feature._collector import AttributeCollector, local_name
from citygml_geojson.activities.extract_feature._values import (
    parse_float,
    parse_int,
    parse_pos_list,
)
from citygml_geojson.activities.reproject import reproject_pairs
from citygml_geojson.models.feature import GeoJsonFeature

if TYPE_CHECKING:
    from citygml_geojson.activities.reproject import CoordinateReprojector

logger = logging.getLogger("citygml_geojson.activities.extract_feature")

__all__ = [
    "AttributeCollector",
    "FragmentExtraction",
    "extract_feature",
    "extract_fragment",
    "local_name",
    "parse_float",
    "parse_int",
    "parse_pos_list",
]


@dataclass(frozen=True, slots=True)
class FragmentExtraction:
    """A feature plus how its fragment parsed.

    Attributes:
        feature: The extracted feature (possibly partial or empty).
        syntax_error: Parser message if the fragment was not well-formed.
        dropped_points: Pairs lost to failed reprojection.
    """

    feature: GeoJsonFeature
    syntax_error: str | None = None
    dropped_points: int = 0

    @property
    def malformed(self) -> bool:
        return self.syntax_error is not None


def extract_fragment(
    fragment: str,
    *,
    reprojector: CoordinateReprojector | None = None,
) -> FragmentExtraction:
    """Parse one fragment into a feature and report how parsing went.

    Args:
        fragment: Self-contained XML for one generic city object.
        reprojector: HK80 → WGS 84 reprojector (shared default if ``None``).
    """
    from lxml import etree  # type: ignore[attr-defined]

    collector = AttributeCollector()
    parser = etree.XMLParser(target=collector, resolve_entities=False, no_network=True)

    syntax_error: str | None = None
    try:
        parser.feed(fragment)
        parser.close()
    except etree.XMLSyntaxError as exc:
        syntax_error = str(exc)
        logger.debug(
            "Malformed fragment, keeping %d propert(ies) parsed before the error: %s",
            len(collector.properties),
            exc,
        )

    coordinates = reproject_pairs(collector.pairs, reprojector=reprojector)
    if collector.rejected_values:
        logger.debug("Omitted %d unparseable attribute value(s)", collector.rejected_values)

    return FragmentExtraction(
        feature=GeoJsonFeature.from_parts(collector.properties, coordinates),
        syntax_error=syntax_error,
        dropped_points=len(collector.pairs) - len(coordinates),
    )


def extract_feature(
    fragment: str,
    id_field: str = "",
    *,
    reprojector: CoordinateReprojector | None = None,
) -> GeoJsonFeature:
    """Parse one fragment into a GeoJSON feature.

    ``id_field`` is accepted for symmetry with the emitter; extraction
    does not depend on it.
    """
    del id_field
    return extract_fragment(fragment, reprojector=reprojector).feature

"""Coordinate reprojection from the HK80 grid to WGS 84.

Wraps a fixed source/target pair of ``ProjectionDefinition`` records in a
pyproj ``Transformer`` built once and reused for every point.

Each ``(easting, northing)`` pair is transformed as a 3D point with
elevation 0; the elevation is discarded. A pair whose transform fails or
produces a non-finite result is dropped, never replaced, so output order
is input order minus the failures.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from citygml_geojson.core.constants import HK80_GRID, WGS84_LONGLAT
from citygml_geojson.core.exceptions import ProjectionSetupError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pyproj import Transformer

    from citygml_geojson.models.projection import ProjectionDefinition

logger = logging.getLogger("citygml_geojson.activities.reproject")


class CoordinateReprojector:
    """Transforms coordinate pairs between two fixed definitions."""

    def __init__(
        self,
        transformer: Transformer,
        source: ProjectionDefinition,
        target: ProjectionDefinition,
    ) -> None:
        self._transformer = transformer
        self.source = source
        self.target = target

    @classmethod
    def from_definitions(
        cls,
        source: ProjectionDefinition = HK80_GRID,
        target: ProjectionDefinition = WGS84_LONGLAT,
    ) -> CoordinateReprojector:
        """Build a reprojector for a source/target definition pair.

        Raises:
            ProjectionSetupError: If either definition is rejected by PROJ.
        """
        from pyproj import CRS, Transformer
        from pyproj.exceptions import CRSError, ProjError

        try:
            transformer = Transformer.from_crs(
                CRS.from_proj4(source.proj_string),
                CRS.from_proj4(target.proj_string),
                always_xy=True,
            )
        except (CRSError, ProjError) as exc:
            msg = f"Cannot build transformer {source} -> {target}: {exc}"
            raise ProjectionSetupError(msg) from exc

        logger.debug("Transformer ready | source=%s | target=%s", source, target)
        return cls(transformer, source, target)

    def transform_point(self, easting: float, northing: float) -> tuple[float, float] | None:
        """Transform one pair, returning ``None`` if it cannot be projected."""
        from pyproj.exceptions import ProjError

        if not (math.isfinite(easting) and math.isfinite(northing)):
            return None
        try:
            lon, lat, _elevation = self._transformer.transform(
                easting, northing, 0.0, errcheck=True
            )
        except ProjError:
            return None
        if not (math.isfinite(lon) and math.isfinite(lat)):
            return None
        return (lon, lat)

    def transform_pairs(self, pairs: Iterable[tuple[float, float]]) -> list[tuple[float, float]]:
        """Transform ``(easting, northing)`` pairs to ``(lon, lat)``.

        Pairs that fail to transform are dropped.
        """
        transformed: list[tuple[float, float]] = []
        dropped = 0
        for easting, northing in pairs:
            point = self.transform_point(easting, northing)
            if point is None:
                dropped += 1
                continue
            transformed.append(point)

        if dropped:
            logger.debug(
                "Dropped %d point(s) that failed to transform %s -> %s",
                dropped,
                self.source,
                self.target,
            )
        return transformed


_default_reprojector: CoordinateReprojector | None = None


def default_reprojector() -> CoordinateReprojector:
    """Return the shared HK80 → WGS 84 reprojector, building it on first use."""
    global _default_reprojector  # noqa: PLW0603
    if _default_reprojector is None:
        _default_reprojector = CoordinateReprojector.from_definitions()
    return _default_reprojector


def reproject_pairs(
    pairs: Iterable[tuple[float, float]],
    *,
    reprojector: CoordinateReprojector | None = None,
) -> list[tuple[float, float]]:
    """Reproject HK80 ``(easting, northing)`` pairs to WGS 84 ``(lon, lat)``."""
    return (reprojector or default_reprojector()).transform_pairs(pairs)

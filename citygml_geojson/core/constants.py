"""Shared pipeline constants.

Centralises input file names, identifier fields, output layout,
XML element names and the fixed cartographic definitions.
"""

from __future__ import annotations

from citygml_geojson.models.projection import ProjectionDefinition

# ---------------------------------------------------------------------------
# Directory layout
# ---------------------------------------------------------------------------

DEFAULT_INPUT_DIR: str = "./input"
"""Directory holding the source GML documents."""

DEFAULT_OUTPUT_DIR: str = "./output"
"""Root directory for per-category GeoJSON output."""

OUTPUT_EXTENSION: str = ".json"
"""File extension of each written feature document."""

# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

CENTERLINE_FILENAME: str = "CENTERLINE.gml"
CENTERLINE_ID_FIELD: str = "ROUTE_ID"
CENTERLINE_CATEGORY: str = "centerlines"

PEDESTRIAN_ZONE_FILENAME: str = "PEDESTRIAN_ZONE.gml"
PEDESTRIAN_ZONE_ID_FIELD: str = "PED_ZONE_ID"
PEDESTRIAN_ZONE_CATEGORY: str = "pedestrian_zones"

# ---------------------------------------------------------------------------
# XML element names
# ---------------------------------------------------------------------------

GENERIC_CITY_OBJECT_SUFFIX: str = ":GenericCityObject"
"""Qualified-name suffix of the top-level object element."""

STRING_ATTRIBUTE_TAG: str = "stringAttribute"
INT_ATTRIBUTE_TAG: str = "intAttribute"
DOUBLE_ATTRIBUTE_TAG: str = "doubleAttribute"
POS_LIST_TAG: str = "posList"
VALUE_TAG: str = "value"

ATTRIBUTE_NAME_KEY: str = "name"
"""Tag attribute carrying the property key of a generic attribute."""

# ---------------------------------------------------------------------------
# Progress reporting
# ---------------------------------------------------------------------------

DEFAULT_PROGRESS_INTERVAL: int = 100
"""Emit a progress line every N written features."""

# ---------------------------------------------------------------------------
# Cartographic definitions
# ---------------------------------------------------------------------------

HK80_GRID = ProjectionDefinition(
    name="HK80 Grid",
    proj_string=(
        "+proj=tmerc +lat_0=22.31213333333334 +lon_0=114.1785555555556 "
        "+k=1 +x_0=836694.05 +y_0=819069.8 +ellps=intl "
        "+towgs84=-162.619,-276.959,-161.764,0.067753,-2.24365,-1.15883,-1.09425 "
        "+units=m +no_defs"
    ),
)
"""Hong Kong 1980 Grid: transverse Mercator on the International 1924
ellipsoid with a seven-parameter (position vector) shift to WGS 84."""

WGS84_LONGLAT = ProjectionDefinition(
    name="WGS 84",
    proj_string="+proj=longlat +datum=WGS84 +no_defs",
)
"""Geographic WGS 84, longitude first."""

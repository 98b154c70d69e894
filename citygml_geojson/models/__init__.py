"""Data models.

Defines the data structures used throughout the pipeline:
- GeoJsonFeature / LineStringGeometry: extracted feature output
- ProjectionDefinition: immutable cartographic definition
- FeatureOutcome / CategoryReport: per-item and per-category results
"""

from citygml_geojson.models.feature import GeoJsonFeature, LineStringGeometry, PropertyValue
from citygml_geojson.models.outcome import CategoryReport, FeatureOutcome, SkipReason
from citygml_geojson.models.projection import ProjectionDefinition

__all__ = [
    "CategoryReport",
    "FeatureOutcome",
    "GeoJsonFeature",
    "LineStringGeometry",
    "ProjectionDefinition",
    "PropertyValue",
    "SkipReason",
]

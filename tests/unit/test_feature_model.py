"""Tests for the GeoJSON feature, outcome and projection models.

Covers:
- Feature construction from extracted parts
- Strict property value typing (text, integer, float, null)
- Immutability
- JSON serialisation (member order, two-space indent, null)
- Outcome recording on the per-category report
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from citygml_geojson.core.constants import HK80_GRID, WGS84_LONGLAT
from citygml_geojson.models import (
    CategoryReport,
    FeatureOutcome,
    GeoJsonFeature,
    LineStringGeometry,
    SkipReason,
)


class TestGeoJsonFeature:
    """Feature construction and typing."""

    def test_defaults(self) -> None:
        feature = GeoJsonFeature()
        assert feature.type == "Feature"
        assert feature.geometry.type == "LineString"
        assert feature.geometry.coordinates == []
        assert feature.properties == {}
        assert feature.is_empty

    def test_from_parts(self) -> None:
        feature = GeoJsonFeature.from_parts({"ROUTE_ID": "R1"}, [(114.0, 22.3), (114.1, 22.4)])

        assert feature.geometry.coordinates == [[114.0, 22.3], [114.1, 22.4]]
        assert feature.geometry.vertex_count == 2
        assert feature.properties == {"ROUTE_ID": "R1"}
        assert not feature.is_empty

    def test_from_parts_copies_properties(self) -> None:
        properties: dict[str, object] = {"ROUTE_ID": "R1"}
        feature = GeoJsonFeature.from_parts(properties, [])  # type: ignore[arg-type]
        properties["ROUTE_ID"] = "changed"
        assert feature.properties["ROUTE_ID"] == "R1"

    def test_properties_only_is_not_empty(self) -> None:
        assert not GeoJsonFeature.from_parts({"A": 1}, []).is_empty

    def test_value_types_preserved(self) -> None:
        feature = GeoJsonFeature(properties={"s": "7", "i": 7, "f": 7.0, "n": None})
        assert feature.properties == {"s": "7", "i": 7, "f": 7.0, "n": None}
        assert isinstance(feature.properties["i"], int)
        assert isinstance(feature.properties["f"], float)

    def test_bool_value_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            GeoJsonFeature(properties={"flag": True})

    def test_wrong_discriminator_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            GeoJsonFeature(type="FeatureCollection")  # type: ignore[arg-type]
        with pytest.raises(PydanticValidationError):
            LineStringGeometry(type="Polygon")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        feature = GeoJsonFeature()
        with pytest.raises(PydanticValidationError):
            feature.properties = {"a": "b"}  # type: ignore[misc]


class TestSerialisation:
    """JSON output."""

    def test_member_order_and_indent(self) -> None:
        text = GeoJsonFeature.from_parts({"ROUTE_ID": "R1"}, [(114.0, 22.3)]).to_json()
        lines = text.splitlines()

        assert lines[0] == "{"
        assert lines[1] == '  "type": "Feature",'
        assert lines[2] == '  "geometry": {'
        assert lines[3] == '    "type": "LineString",'
        assert text.index('"geometry"') < text.index('"properties"')

    def test_null_value(self) -> None:
        document = json.loads(GeoJsonFeature(properties={"REMARK": None}).to_json())
        assert document["properties"] == {"REMARK": None}

    def test_to_dict(self) -> None:
        feature = GeoJsonFeature.from_parts({"PED_ZONE_ID": 501}, [(114.0, 22.3)])
        assert feature.to_dict() == {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": [[114.0, 22.3]]},
            "properties": {"PED_ZONE_ID": 501},
        }

    def test_serialisation_is_deterministic(self) -> None:
        feature = GeoJsonFeature.from_parts({"B": 2, "A": "x"}, [(114.0, 22.3)])
        assert feature.to_json() == feature.to_json()
        assert GeoJsonFeature.model_validate_json(feature.to_json()) == feature


class TestOutcomes:
    """Per-feature outcomes folded into a category report."""

    def test_skipped_factory(self) -> None:
        outcome = FeatureOutcome.skipped(SkipReason.MISSING_IDENTIFIER)
        assert outcome.written is False
        assert outcome.identifier == ""
        assert outcome.reason is SkipReason.MISSING_IDENTIFIER

    def test_record(self) -> None:
        report = CategoryReport(category="centerlines")
        report.record(FeatureOutcome(written=True, identifier="R1", path="out/R1.json"))
        report.record(FeatureOutcome.skipped(SkipReason.MISSING_IDENTIFIER))
        report.record(FeatureOutcome.skipped(SkipReason.MISSING_IDENTIFIER))
        report.record(FeatureOutcome.skipped(SkipReason.MALFORMED_FRAGMENT))

        assert report.fragments == 4
        assert report.written == 1
        assert report.skipped_total == 3
        assert report.skipped[SkipReason.MISSING_IDENTIFIER] == 2

    def test_to_dict(self) -> None:
        report = CategoryReport(category="pedestrian_zones", source_path="input/P.gml")
        report.record(FeatureOutcome.skipped(SkipReason.MALFORMED_FRAGMENT))

        assert report.to_dict() == {
            "category": "pedestrian_zones",
            "source_path": "input/P.gml",
            "found": True,
            "fragments": 1,
            "written": 0,
            "skipped": {"malformed_fragment": 1},
            "truncated": False,
        }


class TestProjectionDefinitions:
    """Fixed source and target definitions."""

    def test_hk80_grid_parameters(self) -> None:
        assert "+proj=tmerc" in HK80_GRID.proj_string
        assert "+x_0=836694.05" in HK80_GRID.proj_string
        assert "+y_0=819069.8" in HK80_GRID.proj_string
        assert "+ellps=intl" in HK80_GRID.proj_string

    def test_wgs84(self) -> None:
        assert WGS84_LONGLAT.proj_string == "+proj=longlat +datum=WGS84 +no_defs"

    def test_str_is_name(self) -> None:
        assert str(HK80_GRID) == HK80_GRID.name

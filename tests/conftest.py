"""Shared pytest fixtures for the citygml_geojson test suite."""

from collections.abc import Callable
from pathlib import Path

import pytest

from citygml_geojson.activities.reproject import CoordinateReprojector

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample GML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def centerline_gml(data_dir: Path) -> Path:
    """Three centerlines: R1, R2 (bad int attribute) and one without ROUTE_ID."""
    return data_dir / "CENTERLINE.gml"


@pytest.fixture()
def pedestrian_zone_gml(data_dir: Path) -> Path:
    """Two pedestrian zones: integer id 501 and text id PZ-7."""
    return data_dir / "PEDESTRIAN_ZONE.gml"


# ---------------------------------------------------------------------------
# Edge-case GML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def truncated_gml(edge_cases_dir: Path) -> Path:
    """One complete object, then a mismatched closing tag."""
    return edge_cases_dir / "truncated_after_first.gml"


@pytest.fixture()
def nested_gml(edge_cases_dir: Path) -> Path:
    """An object containing a nested GenericCityObject, then a second object."""
    return edge_cases_dir / "nested_generic_object.gml"


@pytest.fixture()
def not_xml_gml(edge_cases_dir: Path) -> Path:
    """A CSV file with a .gml extension."""
    return edge_cases_dir / "not_xml.gml"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def write_gml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing GML text to ``tmp_path/input/<name>``."""

    def _write(name: str, content: str) -> Path:
        input_dir = tmp_path / "input"
        input_dir.mkdir(exist_ok=True)
        path = input_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(scope="session")
def reprojector() -> CoordinateReprojector:
    """HK80 → WGS 84 reprojector shared across the session."""
    return CoordinateReprojector.from_definitions()

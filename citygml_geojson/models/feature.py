"""GeoJSON feature model.

A ``GeoJsonFeature`` is one extracted generic city object: a LineString
in WGS 84 plus the typed generic attributes harvested from the GML. It is
the output of the ``extract_feature`` activity and the input to
``emit_feature``.

Property values keep their GML type: ``stringAttribute`` → ``str``,
``intAttribute`` → ``int``, ``doubleAttribute`` → ``float``. ``None`` is
representable and serialises as JSON ``null`` but extraction never
produces it.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

PropertyValue = StrictStr | StrictInt | StrictFloat | None
"""Tagged union over text, integer, floating-point and null."""


class LineStringGeometry(BaseModel):
    """GeoJSON LineString geometry.

    Attributes:
        type: Always ``"LineString"``.
        coordinates: ``[lon, lat]`` pairs in position-list order.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["LineString"] = "LineString"
    coordinates: list[list[float]] = Field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        """Number of coordinate pairs."""
        return len(self.coordinates)


class GeoJsonFeature(BaseModel):
    """A single GeoJSON feature built from one generic city object.

    Attributes:
        type: Always ``"Feature"``.
        geometry: The LineString geometry.
        properties: Generic attribute name → typed value.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["Feature"] = "Feature"
    geometry: LineStringGeometry = Field(default_factory=LineStringGeometry)
    properties: dict[str, PropertyValue] = Field(default_factory=dict)

    @classmethod
    def from_parts(
        cls,
        properties: dict[str, PropertyValue],
        coordinates: list[tuple[float, float]],
    ) -> GeoJsonFeature:
        """Build a feature from extracted properties and ``(lon, lat)`` tuples."""
        return cls(
            geometry=LineStringGeometry(coordinates=[[lon, lat] for lon, lat in coordinates]),
            properties=dict(properties),
        )

    @property
    def is_empty(self) -> bool:
        """Whether extraction produced neither properties nor coordinates."""
        return not self.properties and not self.geometry.coordinates

    def to_json(self, *, indent: int = 2) -> str:
        """Serialise to a pretty-printed GeoJSON string."""
        return self.model_dump_json(indent=indent)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict."""
        return self.model_dump()

"""Cartographic definition record.

A ``ProjectionDefinition`` is plain configuration data: a label plus a
PROJ string. The reprojector turns a (source, target) pair of these into
a pyproj transformer, so alternate datums can be substituted without
touching the transform logic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProjectionDefinition:
    """An immutable named PROJ definition.

    Attributes:
        name: Short label used in log lines (e.g. ``"HK80 Grid"``).
        proj_string: PROJ.4-style definition string.
    """

    name: str
    proj_string: str

    def __str__(self) -> str:
        return self.name

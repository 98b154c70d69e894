"""GML generic-city-object catalog → per-feature GeoJSON converter.

Streams HK80 GML catalogs (road centerlines, pedestrian zones), isolates
each top-level generic city object, extracts its typed generic attributes
and position list, reprojects the coordinates to WGS 84 and writes one
GeoJSON LineString feature per object.
"""

__version__ = "0.1.0"

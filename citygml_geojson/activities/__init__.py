"""Pipeline activities.

Each activity performs a single unit of work within the pipeline:
- segment_objects: Isolate each top-level generic city object as a fragment
- extract_feature: Harvest typed attributes and geometry from a fragment
- reproject: Transform HK80 grid coordinates to WGS 84
- emit_feature: Write one GeoJSON document per identified feature
"""

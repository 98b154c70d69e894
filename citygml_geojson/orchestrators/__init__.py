"""Pipeline orchestration.

- gml_pipeline: Sequential per-category scan → extract → emit loop
"""

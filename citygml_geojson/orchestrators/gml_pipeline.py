"""GML → GeoJSON pipeline orchestrator.

Runs each configured category in turn as one sequential
scan → extract → emit loop:

1. **Setup**: create the output root and every category directory up
   front, whether or not features will be written there.
2. **Segment**: stream the category's GML document into fragments.
3. **Extract**: parse each fragment into a GeoJSON feature.
4. **Emit**: write identified features, one file each.

The running written-feature counter lives on the category's
``CategoryReport``; it drives progress lines and the emitter's
identifier fallback. Nothing else is shared between features.

Failure semantics:
- Missing input document → warning, category skipped, run continues.
- XML syntax error inside a document → scan truncated, run continues.
- Directory setup, unreadable input or feature write failure → raised.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from citygml_geojson.activities.emit_feature import emit_feature
from citygml_geojson.activities.extract_feature import extract_fragment
from citygml_geojson.activities.reproject import CoordinateReprojector
from citygml_geojson.activities.segment_objects import ObjectSegmenter, segment_file
from citygml_geojson.core.config import PipelineConfig
from citygml_geojson.core.constants import DEFAULT_PROGRESS_INTERVAL
from citygml_geojson.core.exceptions import OutputSetupError
from citygml_geojson.models.outcome import CategoryReport, FeatureOutcome, SkipReason
from citygml_geojson.utils.output_paths import category_dir

if TYPE_CHECKING:
    from citygml_geojson.core.config import CategorySpec

logger = logging.getLogger("citygml_geojson.orchestrators.gml_pipeline")


def prepare_output(config: PipelineConfig) -> dict[str, Path]:
    """Create the output root and one directory per category.

    Returns:
        Category name → category directory.

    Raises:
        OutputSetupError: If any directory cannot be created.
    """
    directories = {
        category.name: category_dir(config.output_dir, category.name)
        for category in config.categories
    }
    try:
        Path(config.output_dir).mkdir(parents=True, exist_ok=True)
        for directory in directories.values():
            directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Failed to create output directories under {config.output_dir}: {exc}"
        raise OutputSetupError(msg) from exc
    return directories


def run_category(
    category: CategorySpec,
    *,
    input_dir: Path | str,
    category_directory: Path | str,
    reprojector: CoordinateReprojector | None = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
) -> CategoryReport:
    """Convert one category's GML document into per-feature files.

    Args:
        category: The category to process.
        input_dir: Directory holding the source document.
        category_directory: Existing output directory for this category.
        reprojector: HK80 → WGS 84 reprojector (shared default if ``None``).
        progress_interval: Log a progress line every N written features.

    Returns:
        The category report (fragments, written, skip counts, truncation).

    Raises:
        InputReadError: If the document exists but cannot be read.
        FeatureWriteError: If a feature cannot be written.
    """
    source_path = Path(input_dir) / category.source_filename
    report = CategoryReport(category=category.name, source_path=str(source_path))

    if not source_path.exists():
        report.found = False
        logger.warning(
            "Input not found, skipping category | category=%s | path=%s",
            category.name,
            source_path,
        )
        return report

    logger.info(
        "Processing %s | category=%s | id_field=%s",
        category.source_filename,
        category.name,
        category.id_field,
    )

    segmenter = ObjectSegmenter(category.target_suffix)
    for fragment in segment_file(source_path, segmenter=segmenter):
        extraction = extract_fragment(fragment, reprojector=reprojector)
        outcome = emit_feature(
            extraction.feature,
            id_field=category.id_field,
            category_directory=category_directory,
            sequence=report.written,
        )
        if not outcome.written and extraction.malformed:
            outcome = FeatureOutcome.skipped(SkipReason.MALFORMED_FRAGMENT)
        report.record(outcome)

        if outcome.written and report.written % progress_interval == 0:
            logger.info("  Processed %d features...", report.written)

    report.truncated = segmenter.truncated
    logger.info(
        "Category done | category=%s | fragments=%d | written=%d | skipped=%d | truncated=%s",
        report.category,
        report.fragments,
        report.written,
        report.skipped_total,
        report.truncated,
    )
    return report


def run_pipeline(
    config: PipelineConfig | None = None,
    *,
    reprojector: CoordinateReprojector | None = None,
) -> list[CategoryReport]:
    """Run every configured category and return one report per category.

    Raises:
        PipelineError: On any fatal setup, read or write failure.
    """
    config = config or PipelineConfig()
    directories = prepare_output(config)
    reprojector = reprojector or CoordinateReprojector.from_definitions()

    logger.info("Parsing GML files | input=%s | output=%s", config.input_dir, config.output_dir)

    reports = [
        run_category(
            category,
            input_dir=config.input_dir,
            category_directory=directories[category.name],
            reprojector=reprojector,
            progress_interval=config.progress_interval,
        )
        for category in config.categories
    ]

    logger.info(
        "Done | written=%d | output=%s",
        sum(report.written for report in reports),
        config.output_dir,
    )
    return reports

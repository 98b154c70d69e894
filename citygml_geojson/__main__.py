"""Command entry point, ``python -m citygml_geojson``.

This module is purely the wiring layer: it configures console logging,
loads configuration, runs the pipeline and maps fatal errors to a
non-zero exit status. All conversion logic lives in the package.
"""

from __future__ import annotations

import logging
import sys

from citygml_geojson.core.config import PipelineConfig
from citygml_geojson.core.exceptions import PipelineError
from citygml_geojson.orchestrators.gml_pipeline import run_pipeline

logger = logging.getLogger("citygml_geojson.main")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Install a console handler on the root logger."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main() -> int:
    """Run the conversion with the default (or environment) configuration.

    Returns:
        ``0`` on success, ``1`` on a fatal error.
    """
    configure_logging()
    try:
        config = PipelineConfig.from_env()
        run_pipeline(config)
    except PipelineError as exc:
        logger.error("Fatal pipeline error | %s", exc.to_error_dict())
        return 1
    except (OSError, ValueError) as exc:
        logger.error("Fatal error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

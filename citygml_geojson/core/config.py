"""Pipeline configuration.

The compiled-in defaults reproduce the fixed layout the converter has
always used (``./input`` → ``./output``, two categories). The input and
output directories and the progress interval may optionally be
overridden from the environment.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out of
    its valid range, so bad configuration is caught before any file is
    touched.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from citygml_geojson.core.constants import (
    CENTERLINE_CATEGORY,
    CENTERLINE_FILENAME,
    CENTERLINE_ID_FIELD,
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PROGRESS_INTERVAL,
    GENERIC_CITY_OBJECT_SUFFIX,
    PEDESTRIAN_ZONE_CATEGORY,
    PEDESTRIAN_ZONE_FILENAME,
    PEDESTRIAN_ZONE_ID_FIELD,
)
from citygml_geojson.core.exceptions import ValidationError


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class CategorySpec:
    """One input document and where its features go.

    Attributes:
        name: Category name, also the output subdirectory.
        source_filename: Input document name inside the input directory.
        id_field: Property used to name each output file.
        target_suffix: Qualified-name suffix of the top-level object element.
    """

    name: str
    source_filename: str
    id_field: str
    target_suffix: str = GENERIC_CITY_OBJECT_SUFFIX


DEFAULT_CATEGORIES: tuple[CategorySpec, ...] = (
    CategorySpec(
        name=CENTERLINE_CATEGORY,
        source_filename=CENTERLINE_FILENAME,
        id_field=CENTERLINE_ID_FIELD,
    ),
    CategorySpec(
        name=PEDESTRIAN_ZONE_CATEGORY,
        source_filename=PEDESTRIAN_ZONE_FILENAME,
        id_field=PEDESTRIAN_ZONE_ID_FIELD,
    ),
)


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Immutable pipeline configuration.

    Loaded once at startup and threaded through the orchestrator.

    Attributes:
        input_dir: Directory holding the source GML documents.
        output_dir: Root directory for per-category output.
        categories: Categories processed in order.
        progress_interval: Log a progress line every N written features.
    """

    input_dir: str = DEFAULT_INPUT_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR
    categories: tuple[CategorySpec, ...] = field(default=DEFAULT_CATEGORIES)
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    @classmethod
    def from_env(cls) -> PipelineConfig:
        """Load and validate configuration from environment variables.

        Recognised variables: ``CITYGML_INPUT_DIR``, ``CITYGML_OUTPUT_DIR``,
        ``CITYGML_PROGRESS_INTERVAL``. Unset variables keep the defaults.

        Raises:
            ConfigValidationError: If a value is out of range or empty.
            ValueError: If ``CITYGML_PROGRESS_INTERVAL`` is not an integer.
        """
        config = cls(
            input_dir=os.getenv("CITYGML_INPUT_DIR", DEFAULT_INPUT_DIR),
            output_dir=os.getenv("CITYGML_OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
            progress_interval=int(
                os.getenv("CITYGML_PROGRESS_INTERVAL", str(DEFAULT_PROGRESS_INTERVAL))
            ),
        )
        validate_config(config)
        return config


def validate_config(config: PipelineConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.input_dir:
        raise ConfigValidationError("CITYGML_INPUT_DIR", config.input_dir, "must not be empty")

    if not config.output_dir:
        raise ConfigValidationError("CITYGML_OUTPUT_DIR", config.output_dir, "must not be empty")

    if config.progress_interval <= 0:
        raise ConfigValidationError(
            "CITYGML_PROGRESS_INTERVAL",
            config.progress_interval,
            "must be > 0 (features)",
        )

    seen: set[str] = set()
    for category in config.categories:
        if category.name in seen:
            raise ConfigValidationError("categories", category.name, "duplicate category name")
        seen.add(category.name)
        if not category.id_field:
            raise ConfigValidationError(
                f"categories[{category.name}].id_field", category.id_field, "must not be empty"
            )
        if not category.target_suffix:
            raise ConfigValidationError(
                f"categories[{category.name}].target_suffix",
                category.target_suffix,
                "must not be empty",
            )

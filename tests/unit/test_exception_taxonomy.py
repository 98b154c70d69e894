"""Tests for the unified exception taxonomy.

Validates:
- PipelineError hierarchy and structured attributes
- Category classification (validation, permanent)
- ``to_error_dict()`` produces stable payload keys
- Every fatal pipeline exception carries a default stage and code
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from citygml_geojson.core.config import ConfigValidationError
from citygml_geojson.core.exceptions import (
    FeatureWriteError,
    InputReadError,
    OutputSetupError,
    PermanentError,
    PipelineError,
    ProjectionSetupError,
    ValidationError,
)


class TestPipelineErrorBase:
    """PipelineError base class behavior."""

    def test_default_attributes(self) -> None:
        err = PipelineError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.retryable is False

    def test_custom_attributes(self) -> None:
        err = PipelineError("fail", stage="emit_feature", code="WRITE", retryable=True)
        assert err.stage == "emit_feature"
        assert err.code == "WRITE"
        assert err.retryable is True

    def test_str_is_message(self) -> None:
        err = PipelineError("human-readable error")
        assert str(err) == "human-readable error"

    def test_to_error_dict_keys(self) -> None:
        err = PipelineError("x", stage="s", code="C", retryable=True)
        d = err.to_error_dict()
        assert set(d.keys()) == {"category", "code", "stage", "message", "retryable"}
        assert d["message"] == "x"
        assert d["stage"] == "s"
        assert d["code"] == "C"
        assert d["retryable"] is True


class TestCategoryBases:
    """Category base classes set correct defaults."""

    def test_validation_error_not_retryable(self) -> None:
        err = ValidationError("bad input")
        assert err.retryable is False
        assert err.category == "validation"

    def test_permanent_error_not_retryable(self) -> None:
        err = PermanentError("gone")
        assert err.retryable is False
        assert err.category == "permanent"

    def test_base_error_is_permanent_regardless_of_retryable(self) -> None:
        assert PipelineError("x", retryable=True).category == "permanent"
        assert PipelineError("x", retryable=False).category == "permanent"
        assert PipelineError("x", retryable=True).to_error_dict()["category"] == "permanent"


class TestAllExceptionsArePipelineError:
    """Every custom exception inherits from PipelineError."""

    EXCEPTION_CLASSES: ClassVar[list[type[PipelineError]]] = [
        ConfigValidationError,
        OutputSetupError,
        InputReadError,
        FeatureWriteError,
        ProjectionSetupError,
    ]

    def test_all_subclass_pipeline_error(self) -> None:
        for cls in self.EXCEPTION_CLASSES:
            assert issubclass(cls, PipelineError), f"{cls.__name__} is not a PipelineError"

    def test_config_error_is_validation(self) -> None:
        err = ConfigValidationError("KEY", 0, "must be > 0")
        assert err.category == "validation"
        assert str(err) == "Invalid configuration KEY=0: must be > 0"


class TestFatalErrorStageAndCode:
    """Every fatal exception has a default stage and code."""

    @pytest.mark.parametrize(
        ("cls", "stage", "code"),
        [
            (OutputSetupError, "setup", "OUTPUT_SETUP_FAILED"),
            (InputReadError, "segment_objects", "INPUT_READ_FAILED"),
            (FeatureWriteError, "emit_feature", "FEATURE_WRITE_FAILED"),
            (ProjectionSetupError, "reproject", "PROJECTION_SETUP_FAILED"),
        ],
    )
    def test_defaults(self, cls: type[PipelineError], stage: str, code: str) -> None:
        err = cls("failed")
        assert err.stage == stage
        assert err.code == code
        assert err.retryable is False
        assert err.category == "permanent"
        assert err.to_error_dict()["code"] == code

    def test_explicit_stage_overrides_default(self) -> None:
        err = FeatureWriteError("x", stage="custom")
        assert err.stage == "custom"
        assert err.code == "FEATURE_WRITE_FAILED"

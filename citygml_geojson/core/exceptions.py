"""Unified pipeline exception taxonomy.

Provides a shared base exception hierarchy for every pipeline stage.
Every domain exception inherits from ``PipelineError`` and carries
structured context fields so the entry point can report failures
consistently.

Taxonomy categories
-------------------
- ``ValidationError``: configuration/input contract violations.
- ``PermanentError``: unrecoverable failures that abort the run
  (filesystem setup, unreadable or non-UTF-8 input, feature write
  failures). Anything that is not a ``ValidationError`` is permanent.

Recoverable conditions (missing input file, XML syntax errors inside a
document, malformed fragments) are never raised; they are logged and
surface as skip counts on the per-category report.

Every exception exposes ``to_error_dict()`` for a stable structured
payload suitable for logging.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all pipeline-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"segment_objects"``, ``"emit_feature"``).
        code: Machine-readable error code (e.g. ``"FEATURE_WRITE_FAILED"``).
        retryable: Whether re-running the same operation could succeed.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """Configuration or contract validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(PipelineError):
    """Unrecoverable failure that aborts the whole run."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Fatal pipeline errors
# ---------------------------------------------------------------------------


class OutputSetupError(PermanentError):
    """Raised when the output root or a category directory cannot be created."""

    default_stage = "setup"
    default_code = "OUTPUT_SETUP_FAILED"


class InputReadError(PermanentError):
    """Raised when an input document exists but cannot be read."""

    default_stage = "segment_objects"
    default_code = "INPUT_READ_FAILED"


class FeatureWriteError(PermanentError):
    """Raised when a feature cannot be serialised or written to disk."""

    default_stage = "emit_feature"
    default_code = "FEATURE_WRITE_FAILED"


class ProjectionSetupError(PermanentError):
    """Raised when a projection definition cannot be turned into a transformer."""

    default_stage = "reproject"
    default_code = "PROJECTION_SETUP_FAILED"

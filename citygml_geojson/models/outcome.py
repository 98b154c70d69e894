"""Per-feature outcomes and per-category run reports.

Skipped features (missing identifier, empty fragment after a parse
failure) are recorded as outcomes and counted per category.
"""

from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass, field


class SkipReason(enum.StrEnum):
    """Why a fragment did not produce an output file."""

    MISSING_IDENTIFIER = "missing_identifier"
    MALFORMED_FRAGMENT = "malformed_fragment"


@dataclass(frozen=True, slots=True)
class FeatureOutcome:
    """Result of handing one feature to the emitter.

    Attributes:
        written: Whether a file was written.
        identifier: The file-name identifier used (empty when skipped).
        path: Path of the written file (empty when skipped).
        reason: Why the feature was skipped, if it was.
    """

    written: bool
    identifier: str = ""
    path: str = ""
    reason: SkipReason | None = None

    @classmethod
    def skipped(cls, reason: SkipReason) -> FeatureOutcome:
        return cls(written=False, reason=reason)


@dataclass(slots=True)
class CategoryReport:
    """Mutable accumulator for one category run.

    ``written`` doubles as the running feature counter: it is passed to
    the emitter for the ``object_<n>`` identifier fallback.

    Attributes:
        category: Category name.
        source_path: Input document path.
        found: Whether the input document existed.
        fragments: Number of top-level objects segmented.
        written: Number of files written.
        skipped: Skip counts keyed by reason.
        truncated: Whether an XML syntax error cut the scan short.
    """

    category: str
    source_path: str = ""
    found: bool = True
    fragments: int = 0
    written: int = 0
    skipped: Counter[SkipReason] = field(default_factory=Counter)
    truncated: bool = False

    def record(self, outcome: FeatureOutcome) -> None:
        """Fold one feature outcome into the report."""
        self.fragments += 1
        if outcome.written:
            self.written += 1
        elif outcome.reason is not None:
            self.skipped[outcome.reason] += 1

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict (for logging)."""
        return {
            "category": self.category,
            "source_path": self.source_path,
            "found": self.found,
            "fragments": self.fragments,
            "written": self.written,
            "skipped": {str(reason): count for reason, count in self.skipped.items()},
            "truncated": self.truncated,
        }

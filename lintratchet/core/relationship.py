"""
Relationship analysis between the observed counts and the baseline.

``compare`` is a pure function: it reads both ledgers and returns a
``Verdict``, stopping at the first regression so the report always names the
same first offender for the same input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Tuple

from lintratchet.logging_config import get_logger

logger = get_logger(__name__)


class Relationship(Enum):
    """How the observed ledger relates to the baseline."""
    EXPECTED = "expected"
    PROPER_SUBSET = "proper_subset"
    NOT_A_SUBSET = "not_a_subset"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    Relationship.EXPECTED: 0,
    Relationship.NOT_A_SUBSET: 1,
    Relationship.PROPER_SUBSET: 2,
}


@dataclass(frozen=True)
class Regression:
    """The first file/lint pair found to be worse than the baseline."""
    file_path: str
    lint: str
    observed: int
    baseline: Optional[int] = None
    new_file: bool = False

    @property
    def is_new(self) -> bool:
        """True when the baseline has no entry at all for this pair."""
        return self.baseline is None

    def __str__(self) -> str:
        if self.new_file:
            return f"Cannot suppress new lints in {self.file_path}: allow({self.lint})"
        if self.is_new:
            return f"Cannot add allow({self.lint}) to {self.file_path}"
        return (
            f"Cannot allow({self.lint}) count to increase in {self.file_path} "
            f"({self.baseline} -> {self.observed})"
        )


@dataclass(frozen=True)
class Improvement:
    """A file/lint pair whose count went down."""
    file_path: str
    lint: str
    observed: int
    baseline: int

    @property
    def resolved(self) -> bool:
        return self.observed == 0

    def __str__(self) -> str:
        if self.resolved:
            return f"allow({self.lint}) fully resolved in {self.file_path}"
        return f"allow({self.lint}) reduced in {self.file_path} ({self.baseline} -> {self.observed})"


@dataclass(frozen=True)
class Verdict:
    relationship: Relationship
    regression: Optional[Regression] = None
    improvements: Tuple[Improvement, ...] = ()

    @property
    def exit_code(self) -> int:
        return self.relationship.exit_code

    @property
    def resolved(self) -> Tuple[Improvement, ...]:
        return tuple(i for i in self.improvements if i.resolved)


def _find_regressions(
    observed: Mapping[str, Mapping[str, int]],
    baseline: Mapping[str, Mapping[str, int]],
) -> Tuple[Optional[Regression], List[Improvement]]:
    improvements: List[Improvement] = []
    for path, counts in observed.items():
        expected = baseline.get(path)
        for lint in sorted(counts):
            count = counts[lint]
            if expected is None or lint not in expected:
                if count > 0:
                    return Regression(path, lint, count, new_file=expected is None), improvements
                continue
            if count > expected[lint]:
                return Regression(path, lint, count, baseline=expected[lint]), improvements
            if count < expected[lint]:
                improvements.append(Improvement(path, lint, count, expected[lint]))
    return None, improvements


def _find_omissions(
    observed: Mapping[str, Mapping[str, int]],
    baseline: Mapping[str, Mapping[str, int]],
    examined_files: Iterable[str],
) -> List[Improvement]:
    improvements: List[Improvement] = []
    seen = set()
    for path in examined_files:
        if path in seen or path not in baseline:
            continue
        seen.add(path)
        counts = observed.get(path, {})
        for lint in sorted(baseline[path]):
            # lints still present in `counts` were already judged in the first pass
            if baseline[path][lint] > 0 and lint not in counts:
                improvements.append(Improvement(path, lint, 0, baseline[path][lint]))
    return improvements


def compare(
    observed: Mapping[str, Mapping[str, int]],
    baseline: Mapping[str, Mapping[str, int]],
    examined_files: Iterable[str],
) -> Verdict:
    """
    Classify the observed counts against the baseline.

    Only files in ``examined_files`` are judged. Baseline entries for other
    files are neither improvements nor regressions: those files simply were
    not part of this run.
    """
    regression, improvements = _find_regressions(observed, baseline)
    if regression is not None:
        logger.debug("Regression found: %s", regression)
        return Verdict(Relationship.NOT_A_SUBSET, regression=regression)

    improvements.extend(_find_omissions(observed, baseline, examined_files))
    if improvements:
        return Verdict(Relationship.PROPER_SUBSET, improvements=tuple(improvements))
    return Verdict(Relationship.EXPECTED)


class RelationshipAnalyzer:
    """Object wrapper around ``compare`` for callers that inject collaborators."""

    def compare(
        self,
        observed: Mapping[str, Mapping[str, int]],
        baseline: Mapping[str, Mapping[str, int]],
        examined_files: Iterable[str],
    ) -> Verdict:
        return compare(observed, baseline, examined_files)

"""
Baseline mutation policy.

The baseline only ever shrinks around what was observed, except when the
override directive explicitly allows it to grow.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping

from lintratchet.core.ledger import Ledger
from lintratchet.core.relationship import Relationship, Verdict
from lintratchet.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UpdateOutcome:
    """What the updater did to the baseline."""
    changed: bool
    grown: bool = False


def shrink_around(
    baseline: Ledger,
    observed: Mapping[str, Mapping[str, int]],
    examined_files: Iterable[str],
) -> Ledger:
    """
    Lower baseline counts of examined files to the observed counts.

    A lint missing from the observed counts is treated as 0. Counts of files
    that were not examined are left untouched. Lints that reach 0 and files
    left without lints are removed. Mutates and returns ``baseline``.
    """
    for path in dict.fromkeys(examined_files):
        if path not in baseline:
            continue
        counts = baseline[path]
        seen = observed.get(path, {})
        for lint in list(counts):
            counts[lint] = min(counts[lint], seen.get(lint, 0))
            if counts[lint] == 0:
                del counts[lint]
        if not counts:
            del baseline[path]
    return baseline


def grow_around(baseline: Ledger, observed: Mapping[str, Mapping[str, int]]) -> Ledger:
    """
    Raise baseline counts to at least the observed counts.

    Missing files and lints are inserted. Mutates and returns ``baseline``.
    """
    for path, seen in observed.items():
        for lint, count in seen.items():
            if count <= 0:
                continue
            counts = baseline.setdefault(path, {})
            counts[lint] = max(counts.get(lint, 0), count)
    return baseline


class BaselineUpdater:
    """
    Applies a verdict to the baseline.

    ``allow_growth`` is the override directive: with it, a regression grows
    the baseline instead of leaving it alone.
    """

    def __init__(self, allow_growth: bool = False):
        self.allow_growth = allow_growth

    def apply(
        self,
        verdict: Verdict,
        baseline: Ledger,
        observed: Mapping[str, Mapping[str, int]],
        examined_files: Iterable[str],
    ) -> UpdateOutcome:
        if verdict.relationship is Relationship.PROPER_SUBSET:
            shrink_around(baseline, observed, examined_files)
            logger.debug("Ratchet clicked: %d improvement(s)", len(verdict.improvements))
            return UpdateOutcome(changed=True)

        if verdict.relationship is Relationship.NOT_A_SUBSET and self.allow_growth:
            grow_around(baseline, observed)
            logger.debug("Override set: baseline grown around observed counts")
            return UpdateOutcome(changed=True, grown=True)

        return UpdateOutcome(changed=False)

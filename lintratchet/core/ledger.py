"""
Ledger data structures.

A ledger maps a file path (exactly as the caller supplied it) to the
suppressed-lint counts for that file. The same shape is used for the counts
observed in this run and for the persisted baseline.
"""

from typing import Any, Dict, Mapping

LintCounts = Dict[str, int]
Ledger = Dict[str, LintCounts]


def copy_ledger(ledger: Mapping[str, Mapping[str, int]]) -> Ledger:
    """Return a deep copy of a ledger."""
    return {path: dict(counts) for path, counts in ledger.items()}


def normalize_ledger(ledger: Mapping[str, Mapping[str, int]]) -> Ledger:
    """
    Drop zero counts and empty file entries, and sort keys.

    A zero count means the same as an absent lint, and a file without lints
    means the same as an absent file, so both are left out of the result.
    """
    result: Ledger = {}
    for path in sorted(ledger):
        counts = {lint: count for lint, count in sorted(ledger[path].items()) if count > 0}
        if counts:
            result[path] = counts
    return result


def ledger_total(ledger: Mapping[str, Mapping[str, int]]) -> int:
    """Total number of suppressions recorded in a ledger."""
    return sum(sum(counts.values()) for counts in ledger.values())


def ledger_from_dict(data: Any) -> Ledger:
    """
    Validate a decoded ``file -> lint -> count`` mapping.

    Raises:
        ValueError: If the data is not a mapping of mappings of
            non-negative integers.
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping of files, got {type(data).__name__}")

    ledger: Ledger = {}
    for path, counts in data.items():
        if counts is None:
            counts = {}
        if not isinstance(counts, dict):
            raise ValueError(f"entry for {path!r} is not a mapping of lints")
        lint_counts: LintCounts = {}
        for lint, count in counts.items():
            # bool is an int subclass; `dead_code: true` is not a count
            if isinstance(count, bool) or not isinstance(count, int):
                raise ValueError(f"count for {lint!r} in {path!r} is not an integer: {count!r}")
            if count < 0:
                raise ValueError(f"count for {lint!r} in {path!r} is negative: {count}")
            lint_counts[str(lint)] = count
        ledger[str(path)] = lint_counts
    return ledger

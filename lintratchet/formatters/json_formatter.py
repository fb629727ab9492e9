"""
JSON output formatter for machine-readable results.
"""

import json
from typing import Any, Dict, Mapping

from lintratchet.core.engine import RatchetResult
from lintratchet.core.ledger import ledger_total, normalize_ledger


class JSONFormatter:
    """
    Formats counts and ratchet results as JSON.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format_counts(self, ledger: Mapping[str, Mapping[str, int]]) -> str:
        """Format observed counts in the same shape as the baseline file."""
        data = {
            "total": ledger_total(ledger),
            "lints": {path: dict(sorted(counts.items())) for path, counts in ledger.items()},
        }
        return json.dumps(data, indent=self.indent)

    def format_result(self, result: RatchetResult, baseline_location: str) -> str:
        """Format a ratchet run as JSON."""
        verdict = result.verdict
        data: Dict[str, Any] = {
            "relationship": verdict.relationship.value,
            "exit_code": result.exit_code,
            "baseline": baseline_location,
            "persisted": result.persisted,
            "grown": result.grown,
            "examined_files": list(result.examined_files),
            "regression": None,
            "improvements": [
                {
                    "file": i.file_path,
                    "lint": i.lint,
                    "observed": i.observed,
                    "baseline": i.baseline,
                    "resolved": i.resolved,
                }
                for i in verdict.improvements
            ],
            "observed": normalize_ledger(result.observed),
        }
        if verdict.regression is not None:
            data["regression"] = {
                "file": verdict.regression.file_path,
                "lint": verdict.regression.lint,
                "observed": verdict.regression.observed,
                "baseline": verdict.regression.baseline,
            }
        return json.dumps(data, indent=self.indent)

"""
CLI output formatter for human-readable results.
"""

import sys
from typing import List, Mapping

from lintratchet.core.engine import RatchetResult
from lintratchet.core.relationship import Relationship


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    CYAN = "\033[96m"


def supports_color(stream=None) -> bool:
    """Check if the stream is a terminal that can show colors."""
    stream = stream or sys.stderr
    if not hasattr(stream, "isatty"):
        return False
    return stream.isatty()


class CLIFormatter:
    """
    Formats ratchet results for human-readable CLI output.

    Verdict messages are meant for stderr; counts for stdout.
    """

    def __init__(self, use_color: bool = True, verbose: bool = False):
        self.use_color = use_color and supports_color()
        self.verbose = verbose

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_color:
            return f"{color}{text}{Colors.RESET}"
        return text

    def format_result(
        self,
        result: RatchetResult,
        baseline_location: str,
        override_env: str = "UPDATE_ANYWAY",
    ) -> str:
        """Format the outcome of a ratchet run. Empty when there is nothing to say."""
        lines: List[str] = []
        verdict = result.verdict

        if result.relationship is Relationship.NOT_A_SUBSET:
            lines.append(self._color(str(verdict.regression), Colors.RED))
            if result.grown:
                lines.append(
                    f"{override_env}=1 is set; the new counts were recorded in {baseline_location}."
                )
            else:
                lines.append(
                    self._color(
                        f"Remove the suppression, or set {override_env}=1 to accept it.",
                        Colors.DIM,
                    )
                )

        elif result.relationship is Relationship.PROPER_SUBSET:
            for improvement in verdict.improvements:
                if improvement.resolved:
                    lines.append(self._color(str(improvement), Colors.GREEN))
                elif self.verbose:
                    lines.append(str(improvement))
            lines.append(
                self._color(
                    "Thanks for enabling more lints!  "
                    f"Please run `git add {baseline_location}` and retry your commit.",
                    Colors.BOLD,
                )
            )

        elif self.verbose:
            lines.append(f"Suppression counts match {baseline_location}.")

        return "\n".join(lines)

    def format_counts(self, ledger: Mapping[str, Mapping[str, int]]) -> str:
        """Format observed lint counts, grouped by file."""
        lines: List[str] = []
        total = 0
        for path, counts in ledger.items():
            lines.append(self._color(path, Colors.CYAN))
            if not counts:
                lines.append(self._color("  (no suppressions)", Colors.DIM))
            for lint in sorted(counts):
                lines.append(f"  {lint:<40} {counts[lint]:>5}")
                total += counts[lint]
        lines.append("")
        lines.append(self._color(f"Total suppressions: {total}", Colors.BOLD))
        return "\n".join(lines)

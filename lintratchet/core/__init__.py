"""Core ratchet engine and data structures."""

from lintratchet.core.ledger import Ledger, LintCounts
from lintratchet.core.scanner import SuppressionScanner, count_suppressions
from lintratchet.core.store import BaselineStore, MemoryBaselineStore, YamlBaselineStore
from lintratchet.core.relationship import (
    Improvement,
    Regression,
    Relationship,
    RelationshipAnalyzer,
    Verdict,
    compare,
)
from lintratchet.core.updater import BaselineUpdater, grow_around, shrink_around
from lintratchet.core.engine import Evaluation, RatchetEngine, RatchetResult

__all__ = [
    "Ledger",
    "LintCounts",
    "SuppressionScanner",
    "count_suppressions",
    "BaselineStore",
    "MemoryBaselineStore",
    "YamlBaselineStore",
    "Improvement",
    "Regression",
    "Relationship",
    "RelationshipAnalyzer",
    "Verdict",
    "compare",
    "BaselineUpdater",
    "grow_around",
    "shrink_around",
    "Evaluation",
    "RatchetEngine",
    "RatchetResult",
]

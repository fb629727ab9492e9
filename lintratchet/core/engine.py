"""
Ratchet engine.

One run goes Scan -> Compare -> (conditional) Persist -> Done. A parse
failure while scanning aborts the run before the baseline is even loaded.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional

from lintratchet.config import RatchetConfig
from lintratchet.core.ledger import Ledger
from lintratchet.core.relationship import Relationship, RelationshipAnalyzer, Verdict
from lintratchet.core.scanner import SuppressionScanner
from lintratchet.core.store import BaselineStore, YamlBaselineStore
from lintratchet.core.updater import BaselineUpdater
from lintratchet.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Evaluation:
    """Everything gathered before the baseline is touched."""
    examined_files: List[str]
    observed: Ledger
    baseline: Ledger
    verdict: Verdict


@dataclass
class RatchetResult:
    """Results from a complete run."""
    verdict: Verdict
    observed: Ledger
    baseline: Ledger
    examined_files: List[str] = field(default_factory=list)
    persisted: bool = False
    grown: bool = False

    @property
    def relationship(self) -> Relationship:
        return self.verdict.relationship

    @property
    def exit_code(self) -> int:
        return self.verdict.exit_code


class RatchetEngine:
    """
    Runs the ratchet over a list of changed files.

    The store, scanner and environment are injectable; by default the
    baseline lives in the YAML file named by the configuration and the
    override is read from ``os.environ``.
    """

    def __init__(
        self,
        config: Optional[RatchetConfig] = None,
        store: Optional[BaselineStore] = None,
        scanner: Optional[SuppressionScanner] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.config = config or RatchetConfig()
        self.store = store or YamlBaselineStore(self.config.baseline)
        self.scanner = scanner or SuppressionScanner(
            suppression_attributes=self.config.suppression_attributes,
            extensions=self.config.extensions,
        )
        self.environ = environ
        self.analyzer = RelationshipAnalyzer()

    @property
    def override_requested(self) -> bool:
        return self.config.override_requested(self.environ)

    def evaluate(self, file_paths: Iterable[str]) -> Evaluation:
        """Scan the files, load the baseline and compare them."""
        examined = self.scanner.select(file_paths)
        observed = self.scanner.scan_files(examined)
        baseline = self.store.load()
        verdict = self.analyzer.compare(observed, baseline, examined)
        logger.debug(
            "Compared %d file(s) against %s: %s",
            len(examined),
            self.store.location,
            verdict.relationship.value,
        )
        return Evaluation(
            examined_files=examined,
            observed=observed,
            baseline=baseline,
            verdict=verdict,
        )

    def apply(self, evaluation: Evaluation) -> RatchetResult:
        """Update and persist the baseline if the verdict allows it."""
        updater = BaselineUpdater(allow_growth=self.override_requested)
        outcome = updater.apply(
            evaluation.verdict,
            evaluation.baseline,
            evaluation.observed,
            evaluation.examined_files,
        )
        if outcome.changed:
            self.store.save(evaluation.baseline)

        return RatchetResult(
            verdict=evaluation.verdict,
            observed=evaluation.observed,
            baseline=evaluation.baseline,
            examined_files=evaluation.examined_files,
            persisted=outcome.changed,
            grown=outcome.grown,
        )

    def run(self, file_paths: Iterable[str]) -> RatchetResult:
        return self.apply(self.evaluate(file_paths))

    def count(self, file_paths: Iterable[str]) -> Ledger:
        """Observed counts for the files, without consulting the baseline."""
        return self.scanner.scan_files(file_paths)

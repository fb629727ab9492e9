"""
Lint Suppression Ratchet

Counts the lints silenced by ``#[allow(...)]`` attributes in Rust sources and
makes sure the total, per file and per lint, never goes up between commits.
"""

__version__ = "1.0.0"

from lintratchet.core.engine import RatchetEngine
from lintratchet.core.relationship import Relationship, Verdict, compare
from lintratchet.core.scanner import SuppressionScanner
from lintratchet.core.store import MemoryBaselineStore, YamlBaselineStore
from lintratchet.config import RatchetConfig
from lintratchet.exceptions import BaselineError, ConfigError, ParseError, RatchetError, SourceReadError

__all__ = [
    "RatchetEngine",
    "Relationship",
    "Verdict",
    "compare",
    "SuppressionScanner",
    "MemoryBaselineStore",
    "YamlBaselineStore",
    "RatchetConfig",
    "BaselineError",
    "ConfigError",
    "ParseError",
    "RatchetError",
    "SourceReadError",
]

"""
Suppression scanner.

Counts the lints silenced by suppression attributes in a source file. A
suppression counts once for every declaration it shields: ``#[allow(x)]`` on
an ``impl`` block with three methods adds 3 to ``x``, the same as writing the
attribute on each method.
"""

from typing import Iterable, List, Optional, Sequence

from lintratchet.core.ledger import Ledger, LintCounts
from lintratchet.exceptions import SourceReadError
from lintratchet.logging_config import get_logger
from lintratchet.parsing.base import Declaration
from lintratchet.parsing.treesitter import (
    build_declarations,
    language_for_path,
    parse_file,
    parse_source,
)

logger = get_logger(__name__)

DEFAULT_SUPPRESSION_ATTRIBUTES = ("allow",)
DEFAULT_EXTENSIONS = (".rs",)


def count_suppressions(root: Declaration, attribute_names: Iterable[str]) -> LintCounts:
    """Sum the blast-radius weight of every suppressed lint in a tree."""
    names = set(attribute_names)
    counts: LintCounts = {}

    for declaration in root.walk():
        if not declaration.known:
            continue
        weight = declaration.weight
        for attribute in declaration.attributes:
            if attribute.name not in names:
                continue
            for lint in attribute.lints:
                counts[lint] = counts.get(lint, 0) + weight
    return counts


class SuppressionScanner:
    """
    Builds lint counts for source files.

    Only files whose extension is in ``extensions`` are scanned; anything
    else is skipped without comment.
    """

    def __init__(
        self,
        suppression_attributes: Optional[Sequence[str]] = None,
        extensions: Optional[Sequence[str]] = None,
    ):
        self.suppression_attributes = tuple(suppression_attributes or DEFAULT_SUPPRESSION_ATTRIBUTES)
        self.extensions = tuple(extensions or DEFAULT_EXTENSIONS)

    def is_scannable(self, file_path: str) -> bool:
        return language_for_path(file_path, self.extensions) is not None

    def scan(self, file_path: str) -> LintCounts:
        """
        Count the suppressed lints in one file.

        Raises:
            ParseError: If the file is not valid source.
            OSError: If the file cannot be read.
        """
        parsed = parse_file(file_path, language_for_path(file_path, self.extensions))
        return count_suppressions(build_declarations(parsed), self.suppression_attributes)

    def scan_source(self, source: str, file_path: str = "<string>") -> LintCounts:
        """Count the suppressed lints in source text."""
        parsed = parse_source(source.encode("utf-8"), path=file_path)
        return count_suppressions(build_declarations(parsed), self.suppression_attributes)

    def select(self, file_paths: Iterable[str]) -> List[str]:
        """The supplied paths this scanner would examine, in order, without duplicates."""
        selected: List[str] = []
        for path in file_paths:
            if path in selected:
                continue
            if self.is_scannable(path):
                selected.append(path)
            else:
                logger.debug("Skipping %s: not a scanned file type", path)
        return selected

    def scan_files(self, file_paths: Iterable[str]) -> Ledger:
        """
        Build the observed ledger for a list of files.

        Files that no longer exist (deleted or renamed in the change) are left
        out of the ledger. A file that exists but cannot be read, or does not
        parse, aborts the whole scan.

        Raises:
            ParseError: If a file is not valid source.
            SourceReadError: If a file exists but cannot be read.
        """
        ledger: Ledger = {}
        for path in self.select(file_paths):
            try:
                counts = self.scan(path)
            except (FileNotFoundError, NotADirectoryError) as e:
                logger.debug("Skipping %s: %s", path, e)
                continue
            except OSError as e:
                raise SourceReadError(path, e.strerror or str(e)) from e
            logger.debug("Scanned %s: %s", path, counts or "no suppressions")
            ledger[path] = counts
        return ledger

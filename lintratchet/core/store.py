"""
Baseline stores.

The baseline ("shame file") is the record of previously accepted suppression
counts. Stores are injected into the engine so tests can keep it in memory.
"""

import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional

import yaml

from lintratchet.core.ledger import Ledger, copy_ledger, ledger_from_dict, normalize_ledger
from lintratchet.exceptions import BaselineError
from lintratchet.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_BASELINE_PATH = ".therug.yaml"

# Top-level key of the persisted document.
LINTS_KEY = "lints"

DEFAULT_FILE_MODE = 0o644


class BaselineStore(ABC):
    """Loads and persists the baseline ledger."""

    @abstractmethod
    def load(self) -> Ledger:
        """Return the persisted ledger, or an empty one if none exists."""

    @abstractmethod
    def save(self, ledger: Mapping[str, Mapping[str, int]]) -> None:
        """Persist ``ledger``, replacing what was stored."""

    @property
    def location(self) -> str:
        return "<memory>"


class MemoryBaselineStore(BaselineStore):
    """A store that keeps the baseline in memory."""

    def __init__(self, initial: Optional[Mapping[str, Mapping[str, int]]] = None):
        self.ledger: Ledger = normalize_ledger(initial or {})
        self.save_count = 0

    def load(self) -> Ledger:
        return copy_ledger(self.ledger)

    def save(self, ledger: Mapping[str, Mapping[str, int]]) -> None:
        self.ledger = normalize_ledger(ledger)
        self.save_count += 1


class YamlBaselineStore(BaselineStore):
    """
    A YAML file holding ``lints: {file: {lint: count}}``.

    Keys are written sorted so the file diffs cleanly under version control.
    """

    def __init__(self, path: str = DEFAULT_BASELINE_PATH):
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def load(self) -> Ledger:
        if not self.path.exists():
            logger.debug("No baseline at %s; starting from an empty one", self.path)
            return {}

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise BaselineError(str(self.path), f"cannot be read: {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise BaselineError(str(self.path), f"is not valid YAML: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise BaselineError(str(self.path), "expected a mapping at the top level")

        try:
            ledger = ledger_from_dict(data.get(LINTS_KEY))
        except ValueError as e:
            raise BaselineError(str(self.path), str(e)) from e

        logger.debug("Loaded baseline with %d file(s) from %s", len(ledger), self.path)
        return ledger

    def dumps(self, ledger: Mapping[str, Mapping[str, int]]) -> str:
        document = {LINTS_KEY: normalize_ledger(ledger)}
        return yaml.safe_dump(document, default_flow_style=False, sort_keys=True)

    def _file_mode(self) -> int:
        """Mode of the existing baseline, or 0644 for a new one."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def save(self, ledger: Mapping[str, Mapping[str, int]]) -> None:
        content = self.dumps(ledger)
        tmp_path = None
        try:
            # Written next to the target so the rename stays on one filesystem.
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.path.parent,
                delete=False,
                prefix=f"{self.path.name}.",
                suffix=".tmp",
            ) as fh:
                tmp_path = Path(fh.name)
                fh.write(content)
            # NamedTemporaryFile creates the file with mode 0600.
            os.chmod(tmp_path, self._file_mode())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise BaselineError(str(self.path), f"cannot be written: {e}") from e

        logger.debug("Saved baseline with %d file(s) to %s", len(normalize_ledger(ledger)), self.path)

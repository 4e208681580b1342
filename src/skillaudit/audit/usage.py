"""
Usage evidence mined from free-text logs.

Counts case-insensitive mentions of a skill's directory name in the files
of a log directory. Dated daily notes (``YYYY-MM-DD.md``) are selected by
the date in their name; any other ``.log``/``.md`` file by its mtime.

This is a heuristic. A skill name that is also a common word will be
overcounted.
"""

from __future__ import annotations

import datetime as _datetime
import logging as _logging
import pathlib as _pathlib
import re as _re

import skillaudit.constants as constants

_logger = _logging.getLogger(__name__)

_DATED_FILE_RE = _re.compile(r"^(\d{4}-\d{2}-\d{2})\.md$")

# Characters in a skill name that prose may also write as whitespace
_SEPARATORS = frozenset("-_")

_SCANNED_SUFFIXES = (".log", ".md")


def build_usage_pattern(identifier: str) -> _re.Pattern[str]:
    """
    Build the mention pattern for a skill identifier.

    Each separator matches either itself or a whitespace character, so
    ``web-search`` matches "web-search" and "Web Search".
    """
    parts: list[str] = []
    for char in identifier:
        if char in _SEPARATORS:
            parts.append(rf"[\s{_re.escape(char)}]")
        else:
            parts.append(_re.escape(char))
    return _re.compile("".join(parts), _re.IGNORECASE)


class UsageScanner:
    """Counts skill mentions in a log directory over a trailing window."""

    def __init__(
        self,
        log_dir: _pathlib.Path,
        days: int = constants.DEFAULT_AUDIT_DAYS,
        *,
        now: _datetime.datetime | None = None,
    ) -> None:
        """
        Initialize the scanner.

        Args:
            log_dir: Directory whose immediate files are scanned.
            days: Window size; files older than now minus this are ignored.
            now: Reference time (defaults to the current local time).
        """
        if days < 0:
            raise ValueError(f"days must be >= 0, got {days}")
        self._log_dir = log_dir
        self._days = days
        self._cutoff = (now or _datetime.datetime.now()) - _datetime.timedelta(days=days)
        self._contents: list[str] | None = None  # in-window file texts, read once

    @property
    def cutoff(self) -> _datetime.datetime:
        """Earliest modification time a non-dated file may have."""
        return self._cutoff

    @property
    def cutoff_date(self) -> str:
        """Earliest date (YYYY-MM-DD) a dated file may carry."""
        return self._cutoff.date().isoformat()

    def _in_window(self, path: _pathlib.Path) -> bool:
        dated = _DATED_FILE_RE.match(path.name)
        if dated:
            # Fixed-width zero-padded dates compare correctly as strings
            return dated.group(1) >= self.cutoff_date
        if not path.name.endswith(_SCANNED_SUFFIXES):
            return False
        modified = _datetime.datetime.fromtimestamp(path.stat().st_mtime)
        return modified >= self._cutoff

    def candidate_files(self) -> list[_pathlib.Path]:
        """Files in the log directory that fall inside the window."""
        if not self._log_dir.is_dir():
            return []

        try:
            entries = sorted(self._log_dir.iterdir())
        except OSError as e:
            _logger.warning("Cannot list log directory %s: %s", self._log_dir, e)
            return []

        files: list[_pathlib.Path] = []
        for path in entries:
            try:
                if path.is_file() and self._in_window(path):
                    files.append(path)
            except OSError as e:
                _logger.warning("Skipping log file %s: %s", path, e)
        return files

    def _load_contents(self) -> list[str]:
        if self._contents is None:
            self._contents = []
            for path in self.candidate_files():
                try:
                    self._contents.append(path.read_text(encoding="utf-8", errors="replace"))
                except OSError as e:
                    _logger.warning("Skipping unreadable log file %s: %s", path, e)
        return self._contents

    def count(self, identifier: str) -> int:
        """
        Count mentions of ``identifier`` across in-window files.

        Returns:
            Non-overlapping match total; 0 if the log directory is missing.
        """
        pattern = build_usage_pattern(identifier)
        return sum(len(pattern.findall(content)) for content in self._load_contents())

"""
Tests for usage scanning.

Tests verify that:
- Separators in a skill name also match whitespace
- Dated files are selected by name, other files by mtime
- Missing directories and empty windows yield zero
"""

import datetime as _datetime
import os as _os
import pathlib as _pathlib

import pytest as _pytest

import skillaudit.audit.usage as usage

NOW = _datetime.datetime(2026, 10, 18, 12, 0, 0)


def _set_mtime(path: _pathlib.Path, when: _datetime.datetime) -> None:
    stamp = when.timestamp()
    _os.utime(path, (stamp, stamp))


class TestBuildUsagePattern:
    """Tests for build_usage_pattern function."""

    def test_hyphen_matches_space_and_hyphen(self) -> None:
        """A hyphenated name matches hyphenated and spaced prose."""
        pattern = usage.build_usage_pattern("web-search")
        text = "Used web-search, then Web Search, then web_search."
        assert pattern.findall(text) == ["web-search", "Web Search"]

    def test_underscore_matches_space_and_underscore(self) -> None:
        """Underscores are interchangeable with whitespace too."""
        pattern = usage.build_usage_pattern("my_tool")
        assert len(pattern.findall("my_tool and my tool")) == 2

    def test_case_insensitive(self) -> None:
        """Matching ignores case."""
        assert usage.build_usage_pattern("alpha").findall("ALPHA Alpha alpha") == [
            "ALPHA",
            "Alpha",
            "alpha",
        ]

    def test_regex_characters_are_literal(self) -> None:
        """Characters like '.' and '+' only match themselves."""
        pattern = usage.build_usage_pattern("c++.x")
        assert pattern.findall("c++.x cxx c++zx") == ["c++.x"]

    def test_substrings_are_counted(self) -> None:
        """Mentions inside longer words still count (heuristic)."""
        assert len(usage.build_usage_pattern("git").findall("github gitlab git")) == 3


class TestUsageScanner:
    """Tests for UsageScanner class."""

    def test_missing_directory_returns_zero(self, tmp_path: _pathlib.Path) -> None:
        """A log directory that doesn't exist yields zero."""
        scanner = usage.UsageScanner(tmp_path / "missing", 7, now=NOW)
        assert scanner.count("alpha") == 0

    def test_zero_day_window_with_no_files(self, tmp_path: _pathlib.Path) -> None:
        """A 0-day window over an empty directory yields zero."""
        scanner = usage.UsageScanner(tmp_path, 0, now=NOW)
        assert scanner.count("alpha") == 0

    def test_negative_window_rejected(self, tmp_path: _pathlib.Path) -> None:
        """Negative windows are invalid."""
        with _pytest.raises(ValueError):
            usage.UsageScanner(tmp_path, -1, now=NOW)

    def test_cutoff_date(self, tmp_path: _pathlib.Path) -> None:
        """Cutoff date is now minus the window."""
        scanner = usage.UsageScanner(tmp_path, 7, now=NOW)
        assert scanner.cutoff_date == "2026-10-11"
        assert scanner.cutoff == NOW - _datetime.timedelta(days=7)

    def test_dated_files_selected_by_name(self, tmp_path: _pathlib.Path) -> None:
        """Dated files count only when their date is on or after the cutoff."""
        (tmp_path / "2026-10-11.md").write_text("alpha")  # cutoff day
        (tmp_path / "2026-10-17.md").write_text("alpha alpha")
        (tmp_path / "2026-10-10.md").write_text("alpha alpha alpha")  # too old

        scanner = usage.UsageScanner(tmp_path, 7, now=NOW)

        assert scanner.count("alpha") == 3

    def test_dated_files_ignore_mtime(self, tmp_path: _pathlib.Path) -> None:
        """An old-named file with a fresh mtime is still excluded."""
        old = tmp_path / "2020-01-01.md"
        old.write_text("alpha")
        _set_mtime(old, NOW)

        assert usage.UsageScanner(tmp_path, 7, now=NOW).count("alpha") == 0

    def test_other_files_selected_by_mtime(self, tmp_path: _pathlib.Path) -> None:
        """Other .log/.md files count only when modified within the window."""
        recent = tmp_path / "actions.log"
        recent.write_text("alpha ran\nalpha ran again")
        _set_mtime(recent, NOW - _datetime.timedelta(days=1))

        stale = tmp_path / "notes.md"
        stale.write_text("alpha")
        _set_mtime(stale, NOW - _datetime.timedelta(days=30))

        assert usage.UsageScanner(tmp_path, 7, now=NOW).count("alpha") == 2

    def test_other_extensions_ignored(self, tmp_path: _pathlib.Path) -> None:
        """Files that are neither .log nor .md are skipped."""
        other = tmp_path / "data.txt"
        other.write_text("alpha")
        _set_mtime(other, NOW)

        assert usage.UsageScanner(tmp_path, 7, now=NOW).count("alpha") == 0

    def test_not_recursive(self, tmp_path: _pathlib.Path) -> None:
        """Files in subdirectories are not scanned."""
        sub = tmp_path / "archive"
        sub.mkdir()
        (sub / "2026-10-17.md").write_text("alpha")

        assert usage.UsageScanner(tmp_path, 7, now=NOW).count("alpha") == 0

    def test_malformed_date_name_uses_mtime(self, tmp_path: _pathlib.Path) -> None:
        """A name that isn't strictly YYYY-MM-DD.md falls back to mtime."""
        loose = tmp_path / "2026-1-1.md"
        loose.write_text("alpha")
        _set_mtime(loose, NOW - _datetime.timedelta(days=60))

        assert usage.UsageScanner(tmp_path, 7, now=NOW).count("alpha") == 0

    def test_counts_each_skill_separately(self, tmp_path: _pathlib.Path) -> None:
        """One scanner serves several skills."""
        (tmp_path / "2026-10-18.md").write_text("Used alpha and beta. Alpha again.")

        scanner = usage.UsageScanner(tmp_path, 7, now=NOW)

        assert scanner.count("alpha") == 2
        assert scanner.count("beta") == 1
        assert scanner.count("gamma") == 0

    def test_candidate_files(self, tmp_path: _pathlib.Path) -> None:
        """Only in-window files are candidates, in name order."""
        (tmp_path / "2026-10-18.md").write_text("")
        (tmp_path / "2026-10-12.md").write_text("")
        (tmp_path / "2026-09-01.md").write_text("")

        files = usage.UsageScanner(tmp_path, 7, now=NOW).candidate_files()

        assert [f.name for f in files] == ["2026-10-12.md", "2026-10-18.md"]

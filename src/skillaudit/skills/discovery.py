"""
Skill discovery across configured roots.

Each root is scanned for immediate subdirectories containing SKILL.md.
Roots are processed in the order given; a skill directory name seen in a
later root replaces the one from an earlier root.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import skillaudit.constants as constants
import skillaudit.errors as errors
import skillaudit.skills.skill as skill_module

_logger = _logging.getLogger(__name__)


def _default_label(path: _pathlib.Path) -> str:
    return str(path)


class SkillDiscovery:
    """
    Discovers skills from a list of root directories.

    Missing roots are skipped. A root that exists but can't be listed is
    a fatal error (SkillRootError). Unreadable descriptors are skipped with
    a warning.
    """

    def __init__(
        self,
        search_paths: _typing.Sequence[_pathlib.Path],
        *,
        vendor: str = constants.DEFAULT_VENDOR,
        label_for: _typing.Callable[[_pathlib.Path], str] = _default_label,
    ) -> None:
        """
        Initialize skill discovery.

        Args:
            search_paths: Skill roots, lowest to highest priority.
            vendor: Metadata namespace passed to the descriptor parser.
            label_for: Builds the source label shown for each root.
        """
        self._search_paths = list(search_paths)
        self._vendor = vendor
        self._label_for = label_for

    def get_search_paths(self) -> list[_pathlib.Path]:
        """Get the search paths in use."""
        return list(self._search_paths)

    def _list_entries(self, root: _pathlib.Path) -> list[_pathlib.Path]:
        try:
            return sorted(root.iterdir())
        except OSError as e:
            raise errors.SkillRootError(str(root), e.strerror or str(e)) from e

    def _load_entry(
        self, entry: _pathlib.Path, source: str
    ) -> skill_module.SkillRecord | None:
        """Load one root entry, or None if it isn't a readable skill directory."""
        try:
            if not (entry.is_dir() and (entry / constants.SKILL_FILE_NAME).is_file()):
                return None
            return skill_module.load_skill(entry, source=source, vendor=self._vendor)
        except OSError as e:
            _logger.warning("Skipping unreadable skill %s: %s", entry, e)
            return None

    def discover_root(self, root: _pathlib.Path) -> list[skill_module.SkillRecord]:
        """
        Load every skill directly under one root.

        Returns:
            Skill records in directory-name order (empty if root is missing).

        Raises:
            SkillRootError: If the root exists but can't be enumerated.
        """
        try:
            exists, is_dir = root.exists(), root.is_dir()
        except OSError as e:
            raise errors.SkillRootError(str(root), e.strerror or str(e)) from e
        if not exists:
            _logger.debug("Skill root %s does not exist, skipping", root)
            return []
        if not is_dir:
            raise errors.SkillRootError(str(root), "not a directory")

        source = self._label_for(root)
        records: list[skill_module.SkillRecord] = []
        for entry in self._list_entries(root):
            record = self._load_entry(entry, source)
            if record is not None:
                records.append(record)
        return records

    def discover(self) -> dict[str, skill_module.SkillRecord]:
        """
        Discover all skills from search paths.

        Later sources override earlier sources (by directory name).

        Returns:
            Dict mapping directory name to SkillRecord.
        """
        skills: dict[str, skill_module.SkillRecord] = {}
        for root in self._search_paths:
            for record in self.discover_root(root):
                if record.dir_name in skills:
                    _logger.debug(
                        "Skill %s from %s overrides %s",
                        record.dir_name,
                        record.source,
                        skills[record.dir_name].source,
                    )
                skills[record.dir_name] = record
        return skills

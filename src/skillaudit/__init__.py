"""
Skill Audit - read-only auditor for agent skill directories.

Scans installed SKILL.md skills and reports which are healthy, actively
used, published on a registry, or candidates for removal.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("skill-audit")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Skill Audit Contributors"

from skillaudit.config import Settings  # noqa: E402

__all__ = ["__version__", "__version_info__", "Settings"]

"""
Skill records and SKILL.md header parsing.

A skill is a directory containing a SKILL.md file. The file starts with a
``---`` delimited header of ``key: value`` lines; the ``metadata`` value is
itself a serialized mapping (usually JSON) holding vendor-specific data
such as required executables and environment variables.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import json as _json
import logging as _logging
import pathlib as _pathlib
import re as _re
import typing as _typing

import yaml as _yaml

import skillaudit.constants as constants

_logger = _logging.getLogger(__name__)

# Leading header block: a line of only ---, the body, a closing --- line
_FRONTMATTER_RE = _re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)",
    _re.DOTALL,
)

# One "key: value" line; keys start with a word character
_FIELD_RE = _re.compile(r"^(\w[\w-]*):\s*(.+)$")

_MISSING = object()


class SkillMetadata:
    """
    Read-only view over a skill's nested metadata mapping.

    Lookups use dotted paths (``"clawdbot.requires.bins"``). Any path that
    runs into a missing key or a non-mapping value resolves to the default
    instead of raising.
    """

    def __init__(self, data: _typing.Mapping[str, _typing.Any] | None = None) -> None:
        self._data: dict[str, _typing.Any] = dict(data or {})

    def get(self, path: str, default: _typing.Any = None) -> _typing.Any:
        """Resolve a dotted path, returning ``default`` when absent."""
        value: _typing.Any = self._data
        for key in path.split("."):
            if not isinstance(value, _typing.Mapping):
                return default
            value = value.get(key, _MISSING)
            if value is _MISSING:
                return default
        return value

    def get_list(self, path: str) -> tuple[str, ...]:
        """
        Resolve a dotted path to a tuple of strings.

        A scalar is treated as a one-element list; None and mappings give
        an empty tuple. Duplicates are dropped, declaration order is kept.
        """
        value = self.get(path)
        if value is None or isinstance(value, _typing.Mapping):
            return ()
        if isinstance(value, (str, int, float)):
            value = [value]
        items: list[str] = []
        for item in value:
            if item is None:
                continue
            text = str(item).strip()
            if text and text not in items:
                items.append(text)
        return tuple(items)

    def get_str(self, path: str, default: str = "") -> str:
        """Resolve a dotted path to a string (non-strings give ``default``)."""
        value = self.get(path)
        return value if isinstance(value, str) else default

    def to_dict(self) -> dict[str, _typing.Any]:
        """Shallow copy of the underlying mapping."""
        return dict(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SkillMetadata):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"SkillMetadata({self._data!r})"


@_dataclasses.dataclass(frozen=True)
class SkillRecord:
    """
    One inventoried skill.

    Identity is the directory name; ``name`` is only what the header
    declares and is never used as a key.
    """

    dir_name: str
    """Name of the directory holding SKILL.md (the skill identifier)."""

    name: str
    """Declared name from the header (defaults to dir_name)."""

    description: str
    """Declared description (empty if absent)."""

    path: _pathlib.Path
    """Path to the skill directory."""

    source: str = ""
    """Label of the skill root the record came from."""

    metadata: SkillMetadata = _dataclasses.field(
        default_factory=SkillMetadata, compare=False
    )
    """Parsed metadata blob (empty if absent or malformed)."""

    required_bins: tuple[str, ...] = ()
    """Executables declared under <vendor>.requires.bins."""

    required_env: tuple[str, ...] = ()
    """Environment variables declared under <vendor>.requires.env."""

    emoji: str = ""
    """Display emoji declared under <vendor>.emoji."""

    @property
    def skill_file(self) -> _pathlib.Path:
        """Path to the SKILL.md file."""
        return self.path / constants.SKILL_FILE_NAME

    @property
    def display_name(self) -> str:
        """Emoji (if any) followed by the directory name."""
        return f"{self.emoji} {self.dir_name}" if self.emoji else self.dir_name

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "dir_name": self.dir_name,
            "name": self.name,
            "description": self.description,
            "path": str(self.path),
            "source": self.source,
            "emoji": self.emoji,
            "required_bins": list(self.required_bins),
            "required_env": list(self.required_env),
        }


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_metadata(raw: str) -> SkillMetadata:
    """
    Parse a serialized metadata blob.

    JSON is tried first, then YAML (for flow mappings written by hand).
    Anything that fails to parse, or parses to something other than a
    mapping, yields empty metadata.
    """
    try:
        data = _json.loads(raw)
    except ValueError:
        try:
            data = _yaml.safe_load(raw)
        except _yaml.YAMLError as e:
            _logger.warning("Ignoring malformed skill metadata: %s", e)
            return SkillMetadata()
    if not isinstance(data, dict):
        _logger.warning("Ignoring skill metadata that is not a mapping: %r", raw[:80])
        return SkillMetadata()
    return SkillMetadata(data)


def parse_frontmatter(content: str) -> dict[str, str]:
    """
    Parse the leading header block of a SKILL.md file.

    Args:
        content: Raw file content.

    Returns:
        Mapping of header keys to values with surrounding quotes removed.
        Empty if the file has no header block.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return {}

    fields: dict[str, str] = {}
    for line in match.group(1).splitlines():
        field = _FIELD_RE.match(line)
        if field:
            fields[field.group(1)] = _strip_quotes(field.group(2).strip())
    return fields


def load_skill(
    skill_dir: _pathlib.Path,
    *,
    source: str = "",
    vendor: str = constants.DEFAULT_VENDOR,
) -> SkillRecord:
    """
    Load a skill record from a directory.

    Args:
        skill_dir: Path to skill directory (must contain SKILL.md).
        source: Label of the root the skill was found under.
        vendor: Metadata namespace holding requirements and emoji.

    Returns:
        Parsed SkillRecord.

    Raises:
        FileNotFoundError: If SKILL.md doesn't exist.
        OSError: If SKILL.md can't be read.
    """
    skill_file = skill_dir / constants.SKILL_FILE_NAME
    content = skill_file.read_text(encoding="utf-8", errors="replace")
    fields = parse_frontmatter(content)

    metadata = parse_metadata(fields["metadata"]) if "metadata" in fields else SkillMetadata()

    return SkillRecord(
        dir_name=skill_dir.name,
        name=fields.get("name") or skill_dir.name,
        description=fields.get("description", ""),
        path=skill_dir,
        source=source,
        metadata=metadata,
        required_bins=metadata.get_list(f"{vendor}.requires.bins"),
        required_env=metadata.get_list(f"{vendor}.requires.env"),
        emoji=metadata.get_str(f"{vendor}.emoji"),
    )

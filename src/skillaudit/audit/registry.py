"""
Registry version lookup.

Queries an optional registry CLI (``<tool> search <name>``) and looks for
an output line whose first token is the skill name, e.g.::

    web-search v1.2.0  Web Search  (0.448)

A failing or slow lookup only affects the skill being looked up.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import logging as _logging
import typing as _typing

import skillaudit.commands as commands
import skillaudit.constants as constants
import skillaudit.errors as errors

_logger = _logging.getLogger(__name__)

UNKNOWN_VERSION = "unknown"


class RegistryStatus(str, _enum.Enum):
    """Outcome of a registry lookup."""

    UNAVAILABLE = "unavailable"  # lookups disabled or tool missing
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@_dataclasses.dataclass(frozen=True)
class RegistryResult:
    """Registry lookup result for one skill."""

    status: RegistryStatus
    version: str | None = None
    """Published version; "unknown" when listed without a parseable version."""

    @classmethod
    def unavailable(cls) -> RegistryResult:
        return cls(RegistryStatus.UNAVAILABLE)

    @classmethod
    def found(cls, version: str | None) -> RegistryResult:
        return cls(RegistryStatus.FOUND, version or UNKNOWN_VERSION)

    @classmethod
    def not_found(cls) -> RegistryResult:
        return cls(RegistryStatus.NOT_FOUND)

    @classmethod
    def error(cls) -> RegistryResult:
        return cls(RegistryStatus.ERROR)

    @property
    def is_published(self) -> bool:
        """True when the registry lists the skill."""
        return self.status is RegistryStatus.FOUND

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {"status": self.status.value, "version": self.version}


def parse_search_output(output: str, identifier: str) -> RegistryResult:
    """
    Find ``identifier`` in registry search output.

    The first line whose first whitespace-delimited token equals the
    identifier (case-insensitive) wins; its second token, minus a leading
    ``v``, is the version.
    """
    wanted = identifier.lower()
    for line in output.splitlines():
        tokens = line.split()
        if not tokens or tokens[0].lower() != wanted:
            continue
        version = tokens[1] if len(tokens) > 1 else ""
        if version[:1] in ("v", "V"):
            version = version[1:]
        return RegistryResult.found(version)
    return RegistryResult.not_found()


class RegistryChecker:
    """Looks up published skill versions through the registry CLI."""

    def __init__(
        self,
        runner: commands.CommandRunner,
        *,
        command: str = constants.DEFAULT_REGISTRY_COMMAND,
        timeout: float = constants.DEFAULT_REGISTRY_TIMEOUT,
        enabled: bool = True,
    ) -> None:
        self._runner = runner
        self._command = command
        self._timeout = timeout
        self._enabled = enabled
        self._available: bool | None = None

    @property
    def available(self) -> bool:
        """Whether lookups are enabled and the registry tool is installed."""
        if self._available is None:
            self._available = self._enabled and self._runner.command_exists(self._command)
            if self._enabled and not self._available:
                _logger.info("Registry tool %s not found, skipping version checks", self._command)
        return self._available

    def check(self, identifier: str) -> RegistryResult:
        """
        Look up one skill by its directory name.

        Returns:
            UNAVAILABLE if lookups are off, otherwise FOUND, NOT_FOUND or
            ERROR. Never raises for a failed lookup.
        """
        if not self.available:
            return RegistryResult.unavailable()
        if identifier.startswith("-"):
            # Would be parsed as an option by the registry tool
            _logger.warning("Not looking up %s: name starts with '-'", identifier)
            return RegistryResult.not_found()

        try:
            result = self._runner.run(
                [self._command, "search", identifier],
                timeout=self._timeout,
            )
        except errors.CommandError as e:
            _logger.warning("Registry lookup for %s failed: %s", identifier, e)
            return RegistryResult.error()

        if not result.ok:
            _logger.warning(
                "Registry lookup for %s exited with %d: %s",
                identifier,
                result.returncode,
                result.stderr.strip(),
            )
            return RegistryResult.error()

        return parse_search_output(result.stdout, identifier)

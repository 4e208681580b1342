"""
External command execution.

Health and registry checks talk to the host only through a CommandRunner,
so tests can substitute a fake without spawning real processes.
"""

from __future__ import annotations

import abc as _abc
import dataclasses as _dataclasses
import logging as _logging
import subprocess as _subprocess
import typing as _typing

import skillaudit.constants as constants
import skillaudit.errors as errors

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a finished command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0


class CommandRunner(_abc.ABC):
    """Narrow interface for the host commands an audit needs."""

    @_abc.abstractmethod
    def command_exists(self, name: str) -> bool:
        """Return True if ``name`` resolves to a runnable command."""
        ...

    @_abc.abstractmethod
    def run(
        self,
        args: _typing.Sequence[str],
        *,
        timeout: float,
    ) -> CommandResult:
        """
        Run a command and capture its output.

        Raises:
            CommandError: If the command cannot be started or times out.
        """
        ...


class SubprocessCommandRunner(CommandRunner):
    """CommandRunner backed by :mod:`subprocess`."""

    def __init__(self, lookup_timeout: float = constants.COMMAND_EXISTS_TIMEOUT) -> None:
        self._lookup_timeout = lookup_timeout

    def command_exists(self, name: str) -> bool:
        if not name:
            return False
        # Name is passed as $1, never spliced into the shell text
        try:
            result = _subprocess.run(
                ["sh", "-c", 'command -v "$1"', "sh", name],
                capture_output=True,
                text=True,
                timeout=self._lookup_timeout,
            )
        except (_subprocess.TimeoutExpired, OSError) as e:
            _logger.debug("Presence check for %s failed: %s", name, e)
            return False
        return result.returncode == 0

    def run(
        self,
        args: _typing.Sequence[str],
        *,
        timeout: float,
    ) -> CommandResult:
        try:
            completed = _subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except _subprocess.TimeoutExpired as e:
            raise errors.CommandError(
                f"'{' '.join(args)}' timed out after {timeout:g}s"
            ) from e
        except OSError as e:
            raise errors.CommandError(f"'{' '.join(args)}' could not run: {e}") from e

        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

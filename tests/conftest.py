"""
Shared pytest fixtures for Skill Audit tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import json as _json
import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest

import skillaudit.commands as commands
import skillaudit.config as config
import skillaudit.errors as errors

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "SKILL_DIRS",
    "MEMORY_DIR",
    "AUDIT_DAYS",
    "SKIP_HUB",
    "SKILL_AUDIT_ENV_FILE",
]


def is_config_key(key: str) -> bool:
    return key in ENV_KEYS_TO_CLEAR or key.upper().startswith("SKILL_AUDIT_")


# =============================================================================
# Environment Isolation
# =============================================================================


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """
    Return environment dict with Skill Audit configuration keys removed.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    return {k: v for k, v in _os.environ.items() if not is_config_key(k)}


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]):
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture
def clean_settings(isolated_env) -> config.Settings:
    """
    Settings instance isolated from environment and .env file.

    This fixture ensures tests get predictable default settings.
    """
    with isolated_env:
        return config.Settings.construct_without_dotenv()


# =============================================================================
# Fake Command Runner
# =============================================================================


class FakeCommandRunner(commands.CommandRunner):
    """
    CommandRunner that never spawns processes.

    ``installed`` lists commands that exist. ``outputs`` maps a command
    line (joined with spaces) to its result, or to an exception to raise.
    """

    def __init__(
        self,
        installed: _typing.Iterable[str] = (),
        outputs: dict[str, commands.CommandResult | Exception] | None = None,
    ) -> None:
        self.installed = set(installed)
        self.outputs = dict(outputs or {})
        self.lookups: list[str] = []
        self.calls: list[tuple[list[str], float]] = []

    def command_exists(self, name: str) -> bool:
        self.lookups.append(name)
        return name in self.installed

    def run(
        self,
        args: _typing.Sequence[str],
        *,
        timeout: float,
    ) -> commands.CommandResult:
        self.calls.append((list(args), timeout))
        outcome = self.outputs.get(" ".join(args))
        if outcome is None:
            return commands.CommandResult(returncode=0, stdout="")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@_pytest.fixture
def fake_runner() -> FakeCommandRunner:
    """A runner with nothing installed."""
    return FakeCommandRunner()


def timeout_error(command: str = "clawdhub") -> errors.CommandError:
    """CommandError as raised by a timed-out registry search."""
    return errors.CommandError(f"'{command} search x' timed out after 15s")


# =============================================================================
# Skill Directory Builders
# =============================================================================


def write_skill(
    root: _pathlib.Path,
    dir_name: str,
    *,
    name: str | None = None,
    description: str | None = "Test skill",
    bins: _typing.Sequence[str] = (),
    env: _typing.Sequence[str] = (),
    emoji: str | None = None,
    vendor: str = "clawdbot",
    metadata: str | None = None,
) -> _pathlib.Path:
    """
    Create ``root/dir_name/SKILL.md`` with a header block.

    ``metadata`` overrides the generated metadata line verbatim.
    """
    skill_dir = root / dir_name
    skill_dir.mkdir(parents=True, exist_ok=True)

    if metadata is None:
        vendor_data: dict[str, _typing.Any] = {"requires": {"bins": list(bins), "env": list(env)}}
        if emoji:
            vendor_data["emoji"] = emoji
        metadata = _json.dumps({vendor: vendor_data}, ensure_ascii=False)

    lines = ["---", f"name: {name or dir_name}"]
    if description is not None:
        lines.append(f"description: {description}")
    lines.append(f"metadata: {metadata}")
    lines += ["---", "", f"# {dir_name}", "", f"Instructions for {dir_name}.", ""]

    (skill_dir / "SKILL.md").write_text("\n".join(lines), encoding="utf-8")
    return skill_dir

"""
Dependency health checks.

A skill is healthy when every executable it declares resolves on the host
and every environment variable it declares is set to a non-empty value.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import skillaudit.commands as commands
import skillaudit.skills.skill as skill_module


@_dataclasses.dataclass(frozen=True)
class HealthResult:
    """Missing requirements for one skill, alongside what it declared."""

    bins: tuple[str, ...] = ()
    envs: tuple[str, ...] = ()
    missing_bins: tuple[str, ...] = ()
    missing_envs: tuple[str, ...] = ()

    @property
    def healthy(self) -> bool:
        """True when nothing declared is missing."""
        return not self.missing_bins and not self.missing_envs

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "healthy": self.healthy,
            "bins": list(self.bins),
            "envs": list(self.envs),
            "missing_bins": list(self.missing_bins),
            "missing_envs": list(self.missing_envs),
        }


def check_health(
    record: skill_module.SkillRecord,
    runner: commands.CommandRunner,
    environ: _typing.Mapping[str, str],
) -> HealthResult:
    """
    Check a skill's declared executables and environment variables.

    Args:
        record: Skill to check.
        runner: Resolves executables; lookup failures count as missing.
        environ: Process environment snapshot.

    Returns:
        HealthResult with the two missing subsets computed independently.
    """
    missing_bins = tuple(b for b in record.required_bins if not runner.command_exists(b))
    missing_envs = tuple(e for e in record.required_env if not environ.get(e))
    return HealthResult(
        bins=record.required_bins,
        envs=record.required_env,
        missing_bins=missing_bins,
        missing_envs=missing_envs,
    )

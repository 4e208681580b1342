"""
Audit pipeline.

Discovers skills, runs health, usage and registry checks for each one,
and collects the results into an AuditReport. Nothing on disk or in the
environment is modified.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import datetime as _datetime
import logging as _logging
import os as _os
import typing as _typing

import skillaudit.audit.health as health_module
import skillaudit.audit.recommend as recommend_module
import skillaudit.audit.registry as registry_module
import skillaudit.audit.usage as usage_module
import skillaudit.commands as commands
import skillaudit.config as config
import skillaudit.skills.discovery as discovery
import skillaudit.skills.skill as skill_module

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True)
class AuditResult:
    """Check results for one skill."""

    record: skill_module.SkillRecord
    health: health_module.HealthResult
    usage: int
    registry: registry_module.RegistryResult

    @property
    def recommendation(self) -> recommend_module.Recommendation:
        """Recomputed from the check results on every access."""
        return recommend_module.recommend(self.health, self.usage, self.registry)

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "skill": self.record.to_dict(),
            "health": self.health.to_dict(),
            "usage": self.usage,
            "registry": self.registry.to_dict(),
            "recommendation": self.recommendation.value,
        }


def sort_key(record: skill_module.SkillRecord) -> tuple[str, str]:
    """Case-insensitive directory-name order, ties broken by exact name."""
    return (record.dir_name.casefold(), record.dir_name)


@_dataclasses.dataclass(frozen=True)
class AuditReport:
    """Everything a renderer needs."""

    results: tuple[AuditResult, ...]
    generated_at: _datetime.datetime
    days: int
    registry_available: bool
    registry_command: str = ""

    @property
    def tally(self) -> recommend_module.Tally:
        return recommend_module.Tally(r.recommendation for r in self.results)

    def with_recommendation(
        self, recommendation: recommend_module.Recommendation
    ) -> list[AuditResult]:
        """Results carrying the given recommendation, in report order."""
        return [r for r in self.results if r.recommendation is recommendation]

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generated_at": self.generated_at.isoformat(timespec="seconds"),
            "days": self.days,
            "registry_available": self.registry_available,
            "registry_command": self.registry_command,
            "total": len(self.results),
            "tally": self.tally.to_dict(),
            "skills": [r.to_dict() for r in self.results],
        }


class SkillAuditor:
    """
    Runs a read-only audit with a fixed configuration.

    Per-skill check failures are absorbed into that skill's result. Only a
    skill root that exists but can't be listed aborts the run
    (SkillRootError from discovery).
    """

    def __init__(
        self,
        settings: config.Settings,
        runner: commands.CommandRunner | None = None,
        *,
        environ: _typing.Mapping[str, str] | None = None,
        now: _datetime.datetime | None = None,
    ) -> None:
        """
        Initialize the auditor.

        Args:
            settings: Frozen configuration.
            runner: Host command access (default: real subprocesses).
            environ: Environment used for env-var requirements
                (default: a snapshot of os.environ).
            now: Reference time for the usage window and report header.
        """
        self._settings = settings
        self._runner = runner or commands.SubprocessCommandRunner()
        self._environ = dict(_os.environ if environ is None else environ)
        self._now = now

    def discover(self) -> list[skill_module.SkillRecord]:
        """Inventory skills across configured roots, sorted for reporting."""
        disc = discovery.SkillDiscovery(
            self._settings.skill_dir_paths,
            vendor=self._settings.vendor,
            label_for=config.Settings.source_label,
        )
        return sorted(disc.discover().values(), key=sort_key)

    def run(self) -> AuditReport:
        """Audit every discovered skill."""
        now = self._now or _datetime.datetime.now()
        records = self.discover()
        _logger.debug("Auditing %d skills", len(records))

        scanner = usage_module.UsageScanner(
            self._settings.log_dir_path, self._settings.days, now=now
        )
        registry = registry_module.RegistryChecker(
            self._runner,
            command=self._settings.registry_command,
            timeout=self._settings.registry_timeout,
            enabled=not self._settings.skip_registry,
        )

        results = tuple(
            self.audit_skill(record, scanner, registry) for record in records
        )
        return AuditReport(
            results=results,
            generated_at=now,
            days=self._settings.days,
            registry_available=registry.available,
            registry_command=self._settings.registry_command,
        )

    def audit_skill(
        self,
        record: skill_module.SkillRecord,
        scanner: usage_module.UsageScanner,
        registry: registry_module.RegistryChecker,
    ) -> AuditResult:
        """Run the three independent checks for one skill."""
        return AuditResult(
            record=record,
            health=health_module.check_health(record, self._runner, self._environ),
            usage=scanner.count(record.dir_name),
            registry=registry.check(record.dir_name),
        )

"""
Audit checks and recommendation policy.

Each skill gets three independent checks (dependency health, usage
evidence, registry version) that feed one recommendation.
"""

from skillaudit.audit.auditor import AuditReport, AuditResult, SkillAuditor
from skillaudit.audit.health import HealthResult, check_health
from skillaudit.audit.recommend import Recommendation, Tally
from skillaudit.audit.registry import (
    RegistryChecker,
    RegistryResult,
    RegistryStatus,
    parse_search_output,
)
from skillaudit.audit.usage import UsageScanner, build_usage_pattern

__all__ = [
    # Pipeline
    "SkillAuditor",
    "AuditReport",
    "AuditResult",
    # Health
    "HealthResult",
    "check_health",
    # Usage
    "UsageScanner",
    "build_usage_pattern",
    # Registry
    "RegistryChecker",
    "RegistryResult",
    "RegistryStatus",
    "parse_search_output",
    # Policy
    "Recommendation",
    "Tally",
]

"""
Markdown report renderer.

Produces the human-readable audit report: header, summary tallies, one
table row per skill, and a list of skills needing attention.
"""

from __future__ import annotations

import skillaudit.audit.auditor as auditor
import skillaudit.audit.health as health_module
import skillaudit.audit.recommend as recommend
import skillaudit.audit.registry as registry_module
import skillaudit.report.icons as icons

TABLE_RULE = "|---|-------|--------|------|-------|--------|----------|-----|"

READ_ONLY_FOOTER = "_Audit complete. This report is read-only — no changes were made._"


def _cell(text: str) -> str:
    # Pipes would split the table cell
    return text.replace("|", "\\|")


def format_requires(health: health_module.HealthResult) -> str:
    return ", ".join(health.bins) or icons.PLACEHOLDER


def format_usage(usage: int) -> str:
    return f"{icons.ICON_USAGE} {usage}" if usage > 0 else icons.PLACEHOLDER


def format_health(health: health_module.HealthResult) -> str:
    """Missing executables take precedence over missing env vars."""
    if health.missing_bins:
        return f"{icons.ICON_MISSING_BIN} {', '.join(health.missing_bins)}"
    if health.missing_envs:
        return f"{icons.ICON_WARNING} env: {', '.join(health.missing_envs)}"
    return icons.ICON_OK


def format_registry(registry: registry_module.RegistryResult) -> str:
    status = registry.status
    if status is registry_module.RegistryStatus.UNAVAILABLE:
        return "n/a"
    if status is registry_module.RegistryStatus.NOT_FOUND:
        return icons.PLACEHOLDER
    if status is registry_module.RegistryStatus.ERROR:
        return "err"
    if registry.version == registry_module.UNKNOWN_VERSION:
        return registry_module.UNKNOWN_VERSION
    return f"v{registry.version}"


def format_row(index: int, result: auditor.AuditResult) -> str:
    """One table row; ``index`` is 1-based."""
    record = result.record
    cells = [
        str(index),
        record.display_name,
        record.source,
        format_requires(result.health),
        format_usage(result.usage),
        format_health(result.health),
        format_registry(result.registry),
        icons.recommendation_label(result.recommendation),
    ]
    return "| " + " | ".join(_cell(c) for c in cells) + " |"


def _summary_lines(report: auditor.AuditReport) -> list[str]:
    tally = report.tally
    registry_name = report.registry_command or "Registry"
    if report.registry_available:
        registry_state = f"available {icons.ICON_OK}"
    else:
        registry_state = f"not available {icons.ICON_WARNING} (version checks skipped)"

    lines = [
        f"- **Total skills:** {len(report.results)}",
        f"- **Registry ({registry_name}):** {registry_state}",
    ]
    for rec in recommend.Recommendation:
        lines.append(
            f"- {icons.RECOMMENDATION_ICONS[rec]} **{rec.value.capitalize()}:** {tally[rec]}"
        )
    return lines


def _attention_lines(report: auditor.AuditReport) -> list[str]:
    broken = report.with_recommendation(recommend.Recommendation.REMOVE)
    env_issues = [
        r
        for r in report.results
        if r.health.missing_envs and r.recommendation is not recommend.Recommendation.REMOVE
    ]

    if not broken and not env_issues:
        return ["_No critical issues found._"]

    lines: list[str] = []
    for r in broken:
        lines.append(
            f"- **{r.record.dir_name}** — {icons.ICON_REMOVE} Broken: "
            f"`{', '.join(r.health.missing_bins)}` not found. Install deps or remove skill."
        )
    for r in env_issues:
        lines.append(
            f"- **{r.record.dir_name}** — {icons.ICON_WARNING} Missing env: "
            f"`{', '.join(r.health.missing_envs)}`. Set env vars or review if needed."
        )
    return lines


def render_markdown(report: auditor.AuditReport) -> str:
    """Render the full report as markdown text (no trailing newline)."""
    timestamp = report.generated_at.strftime("%Y-%m-%d %H:%M:%S")

    lines = [
        f"# {icons.ICON_REPORT} Skill Audit Report",
        "",
        f"_Generated: {timestamp}_",
        f"_Usage window: last {report.days} days_",
        "",
        "## Summary",
        "",
        *_summary_lines(report),
        "",
        "## Detailed Report",
        "",
        f"| # | Skill | Source | Bins | Usage ({report.days}d) | Health | Registry | Rec |",
        TABLE_RULE,
    ]
    lines.extend(format_row(i, r) for i, r in enumerate(report.results, start=1))
    lines += [
        "",
        f"## {icons.ICON_WARNING} Skills Needing Attention",
        "",
        *_attention_lines(report),
        "",
        "---",
        READ_ONLY_FOOTER,
    ]
    return "\n".join(lines)

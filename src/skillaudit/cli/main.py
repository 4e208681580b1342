"""
Main CLI entry point for Skill Audit.

Provides the command-line interface using Click. Running ``skill-audit``
with no subcommand performs a full audit and prints the report.
"""

import json as _json
import logging as _logging
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic

import skillaudit
import skillaudit.audit as audit
import skillaudit.commands as commands
import skillaudit.config as config
import skillaudit.errors as errors
import skillaudit.report as report

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr; stdout carries only the report."""
    _logging.basicConfig(
        level=_logging.DEBUG if verbose else _logging.WARNING,
        format=_LOG_FORMAT,
        stream=_sys.stderr,
        force=True,
    )


def _fail(message: str) -> _typing.NoReturn:
    _click.echo(f"Audit failed: {message}", err=True)
    raise SystemExit(1)


def _build_settings(
    skill_dirs: tuple[str, ...],
    log_dir: str | None,
    days: int | None,
    skip_registry: bool,
) -> config.Settings:
    """Load settings from the environment, with CLI options taking precedence."""
    overrides: dict[str, _typing.Any] = {}
    if skill_dirs:
        overrides["skill_dirs"] = ",".join(skill_dirs)
    if log_dir is not None:
        overrides["log_dir"] = log_dir
    if days is not None:
        overrides["days"] = days
    if skip_registry:
        overrides["skip_registry"] = True

    try:
        return config.Settings(**overrides)
    except _pydantic.ValidationError as e:
        _fail(f"invalid configuration\n{e}")


@_click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@_click.version_option(skillaudit.__version__, "-v", "--version", prog_name="skill-audit")
@_click.option(
    "-d",
    "--skill-dir",
    "skill_dirs",
    multiple=True,
    help="Skill root to scan (repeatable; later roots win). Default: $SKILL_DIRS or ./skills",
)
@_click.option(
    "--log-dir",
    type=str,
    default=None,
    help="Directory of usage logs. Default: $MEMORY_DIR or ./memory",
)
@_click.option(
    "--days",
    type=_click.IntRange(min=0),
    default=None,
    help="Usage window in days. Default: $AUDIT_DAYS or 7",
)
@_click.option(
    "--skip-registry",
    is_flag=True,
    help="Skip registry version lookups",
)
@_click.option(
    "--verbose",
    is_flag=True,
    help="Log check details to stderr",
)
@_click.option(
    "--format",
    "output_format",
    type=_click.Choice(report.OUTPUT_FORMATS),
    default="markdown",
    show_default=True,
    help="Report format when no subcommand is given",
)
@_click.option("--json", "json_output", is_flag=True, help="Shortcut for --format json")
@_click.pass_context
def cli(
    ctx: _click.Context,
    skill_dirs: tuple[str, ...],
    log_dir: str | None,
    days: int | None,
    skip_registry: bool,
    verbose: bool,
    output_format: str,
    json_output: bool,
) -> None:
    """
    Skill Audit - read-only auditor for agent skills.

    Reports which skills are healthy, in use, published, or candidates
    for removal. Nothing is installed, changed or deleted.

    \b
    Examples:
        skill-audit                          # Markdown report
        skill-audit --json                   # JSON report
        skill-audit -d ./skills -d ~/skills  # Scan two roots
        skill-audit list                     # Inventory only
        skill-audit config                   # Show effective settings
    """
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = _build_settings(skill_dirs, log_dir, days, skip_registry)
    ctx.obj["output_format"] = "json" if json_output else output_format

    if ctx.invoked_subcommand is None:
        ctx.invoke(audit_cmd)


@cli.command(name="audit")
@_click.option(
    "--format",
    "output_format",
    type=_click.Choice(report.OUTPUT_FORMATS),
    default=None,
    help="Report format (default: the group's --format, else markdown)",
)
@_click.option("--json", "json_output", is_flag=True, help="Shortcut for --format json")
@_click.pass_context
def audit_cmd(
    ctx: _click.Context, output_format: str | None = None, json_output: bool = False
) -> None:
    """Run the audit and print the report."""
    settings: config.Settings = ctx.obj["settings"]
    if json_output:
        output_format = "json"
    elif output_format is None:
        output_format = ctx.obj.get("output_format", "markdown")

    auditor = audit.SkillAuditor(settings, commands.SubprocessCommandRunner())
    try:
        result = auditor.run()
    except errors.SkillAuditError as e:
        _fail(str(e))

    report.write_report(result, output_format)  # type: ignore[arg-type]


@cli.command(name="list")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def list_cmd(ctx: _click.Context, json_output: bool) -> None:
    """List discovered skills without running any checks."""
    settings: config.Settings = ctx.obj["settings"]
    try:
        records = audit.SkillAuditor(settings).discover()
    except errors.SkillAuditError as e:
        _fail(str(e))

    if json_output:
        _click.echo(_json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False))
        return

    _click.echo("Skill Roots:")
    for path in settings.skill_dir_paths:
        exists = "✓" if path.is_dir() else "(not found)"
        _click.echo(f"  {path} {exists}")
    _click.echo()

    if not records:
        _click.echo("No skills found.")
        return

    _click.echo(f"Discovered Skills ({len(records)}):")
    _click.echo(f"{'Directory':<30} {'Name':<30} {'Source'}")
    _click.echo("-" * 80)
    for r in records:
        _click.echo(f"{r.dir_name:<30} {r.name:<30} {r.source}")


@cli.command(name="config")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def config_cmd(ctx: _click.Context, json_output: bool) -> None:
    """Show the effective configuration."""
    settings: config.Settings = ctx.obj["settings"]

    if json_output:
        data = settings.model_dump()
        data["skill_dir_paths"] = [str(p) for p in settings.skill_dir_paths]
        data["log_dir_path"] = str(settings.log_dir_path)
        _click.echo(_json.dumps(data, indent=2))
        return

    _click.echo("Skill Audit Configuration:")
    _click.echo("  Skill Roots:")
    for path in settings.skill_dir_paths:
        _click.echo(f"    {path}")
    _click.echo(f"  Log Dir: {settings.log_dir_path}")
    _click.echo(f"  Window: {settings.days} days")
    _click.echo(f"  Registry: {settings.registry_command}" + (" (skipped)" if settings.skip_registry else ""))
    _click.echo(f"  Registry Timeout: {settings.registry_timeout:g}s")
    _click.echo(f"  Vendor: {settings.vendor}")


def main() -> None:
    """Console script entry point."""
    cli()

"""
Report output formats.

- markdown: plain markdown text (default, pipe-friendly)
- json: machine-readable report
- rich: markdown rendered for the terminal with Rich
"""

from __future__ import annotations

import json as _json
import sys as _sys
import typing as _typing

import rich.console as _rich_console
import rich.markdown as _rich_markdown

import skillaudit.audit.auditor as auditor
import skillaudit.report.markdown as markdown

OutputFormat = _typing.Literal["markdown", "json", "rich"]

OUTPUT_FORMATS: tuple[str, ...] = _typing.get_args(OutputFormat)


def render_json(report: auditor.AuditReport) -> str:
    """Serialize the report as indented JSON."""
    return _json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def write_report(
    report: auditor.AuditReport,
    output_format: OutputFormat = "markdown",
    stream: _typing.TextIO | None = None,
) -> None:
    """
    Write a report to a stream.

    Args:
        report: Completed audit.
        output_format: One of OUTPUT_FORMATS.
        stream: Destination (default: sys.stdout).
    """
    out = stream or _sys.stdout
    if output_format == "json":
        out.write(render_json(report) + "\n")
    elif output_format == "rich":
        console = _rich_console.Console(file=out)
        console.print(_rich_markdown.Markdown(markdown.render_markdown(report)))
    elif output_format == "markdown":
        out.write(markdown.render_markdown(report) + "\n")
    else:
        raise ValueError(f"Unknown output format: {output_format}")

"""
Report rendering for Skill Audit.

Renders an AuditReport as markdown, JSON, or Rich terminal output.
"""

from skillaudit.report.markdown import render_markdown
from skillaudit.report.output import (
    OUTPUT_FORMATS,
    OutputFormat,
    render_json,
    write_report,
)

__all__ = [
    "OUTPUT_FORMATS",
    "OutputFormat",
    "render_json",
    "render_markdown",
    "write_report",
]

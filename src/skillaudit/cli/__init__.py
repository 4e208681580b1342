"""
CLI module for Skill Audit.

Provides the command-line interface using Click.
"""

from skillaudit.cli.main import cli, main

__all__ = ["main", "cli"]

"""
Shared constants for Skill Audit.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Discovery defaults
SKILL_FILE_NAME = "SKILL.md"
"""Descriptor file expected directly inside each skill directory."""

DEFAULT_SKILL_DIRS = "./skills"
"""Default comma-separated list of skill roots."""

DEFAULT_VENDOR = "clawdbot"
"""Metadata namespace holding requires.bins, requires.env and emoji."""

# Usage scanning defaults
DEFAULT_LOG_DIR = "./memory"
"""Default directory with dated .md logs and other .log/.md files."""

DEFAULT_AUDIT_DAYS = 7
"""Default usage window in days."""

# Registry defaults
DEFAULT_REGISTRY_COMMAND = "clawdhub"
"""Registry command-line tool queried with ``<tool> search <name>``."""

DEFAULT_REGISTRY_TIMEOUT = 15.0
"""Timeout for a single registry search (seconds)."""

# Presence checks
COMMAND_EXISTS_TIMEOUT = 5.0
"""Timeout for a single executable-presence lookup (seconds)."""

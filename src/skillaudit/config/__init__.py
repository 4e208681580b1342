"""
Configuration module for Skill Audit.

Uses pydantic-settings for environment variable loading.
"""

from skillaudit.config.settings import Settings

__all__ = ["Settings"]

"""
Skill inventory for Skill Audit.

Skills are directories containing a SKILL.md descriptor. They are
discovered from an ordered list of roots and keyed by directory name.
"""

from skillaudit.skills.discovery import SkillDiscovery
from skillaudit.skills.skill import (
    SkillMetadata,
    SkillRecord,
    load_skill,
    parse_frontmatter,
    parse_metadata,
)

__all__ = [
    # Records
    "SkillMetadata",
    "SkillRecord",
    # Parsing
    "load_skill",
    "parse_frontmatter",
    "parse_metadata",
    # Discovery
    "SkillDiscovery",
]

"""
Recommendation policy.

Combines dependency health, usage evidence and registry status into one
of four categories. First matching rule wins:

1. Any required executable missing -> remove
2. Published on the registry -> keep if used, else review
3. Used in the window -> keep
4. Otherwise -> review

``update`` is part of the taxonomy and tally but no rule produces it yet.
"""

from __future__ import annotations

import enum as _enum
import typing as _typing

import skillaudit.audit.health as health_module
import skillaudit.audit.registry as registry_module


class Recommendation(str, _enum.Enum):
    """What to do with a skill."""

    KEEP = "keep"
    UPDATE = "update"
    REVIEW = "review"
    REMOVE = "remove"


def recommend(
    health: health_module.HealthResult,
    usage: int,
    registry: registry_module.RegistryResult,
) -> Recommendation:
    """Derive a recommendation from a skill's three check results."""
    if health.missing_bins:
        return Recommendation.REMOVE
    if registry.is_published:
        return Recommendation.KEEP if usage > 0 else Recommendation.REVIEW
    if usage > 0:
        return Recommendation.KEEP
    # Missing env vars and plain idleness both land here
    return Recommendation.REVIEW


class Tally(dict[Recommendation, int]):
    """Count of skills per recommendation; every category is present."""

    def __init__(self, recommendations: _typing.Iterable[Recommendation] = ()) -> None:
        super().__init__((rec, 0) for rec in Recommendation)
        for rec in recommendations:
            self[rec] += 1

    @property
    def total(self) -> int:
        return sum(self.values())

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {rec.value: count for rec, count in self.items()}

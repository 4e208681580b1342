"""
Icon constants for audit reports.

Every degraded or missing value in the report is shown with an explicit
marker rather than left blank.
"""

import skillaudit.audit.recommend as recommend

# =============================================================================
# Icon Constants
# =============================================================================

ICON_REPORT = "🔍"       # Report title
ICON_OK = "✅"           # Healthy / available / keep
ICON_WARNING = "⚠️"      # Missing env var, registry missing, attention
ICON_MISSING_BIN = "❌"  # Missing required executable
ICON_USAGE = "📊"        # Usage count
ICON_UPDATE = "🔄"
ICON_REVIEW = "🔎"
ICON_REMOVE = "🗑️"

PLACEHOLDER = "—"        # No data

RECOMMENDATION_ICONS: dict[recommend.Recommendation, str] = {
    recommend.Recommendation.KEEP: ICON_OK,
    recommend.Recommendation.UPDATE: ICON_UPDATE,
    recommend.Recommendation.REVIEW: ICON_REVIEW,
    recommend.Recommendation.REMOVE: ICON_REMOVE,
}


def recommendation_label(rec: recommend.Recommendation) -> str:
    """Icon followed by the category name, e.g. "🗑️ remove"."""
    return f"{RECOMMENDATION_ICONS[rec]} {rec.value}"

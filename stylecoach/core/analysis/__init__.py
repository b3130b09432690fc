"""
stylecoach.core.analysis - classification pipeline stages

Structure:
- models.py: Enums and dataclasses shared by every stage
- extractor.py: Signal Extractor (one message -> weighted category sums)
- aggregator.py: Score Aggregator (messages -> RawScoreVector)
- normalizer.py: Normalizer (RawScoreVector -> integer percentages)
- style/: Style Ranker (primary, secondary, classification)
- recommendations.py: Recommendation Generator
- engagement.py: Engagement metrics from lexicon signals
- user_aggregate.py: Aggregate Reporter (profiles -> developer summary)

All public symbols are re-exported from this package.
"""

# =============================================================================
# Explicit imports from models.py
# =============================================================================

from .models import (
    CoachingRecommendation,
    Message,
    MessageRole,
    RawScoreVector,
    StyleCategory,
    StyleClassification,
    StyleProfile,
    parse_timestamp,
)

# =============================================================================
# Pipeline stages
# =============================================================================

from .aggregator import aggregate, resolve_subject_id
from .engagement import EngagementMetrics, EngagementTier, analyze_engagement
from .extractor import extract, extract_rule_hits
from .normalizer import is_insufficient, normalize
from .recommendations import confidence_band, generate_style_insights, recommend
from .style import RankedStyle, classify_distribution, rank
from .user_aggregate import DeveloperStyleSummary, ReportWindow, TrendDirection, report

__all__ = [
    # Models
    "CoachingRecommendation",
    "Message",
    "MessageRole",
    "RawScoreVector",
    "StyleCategory",
    "StyleClassification",
    "StyleProfile",
    "parse_timestamp",
    # Extractor / Aggregator / Normalizer
    "extract",
    "extract_rule_hits",
    "aggregate",
    "resolve_subject_id",
    "normalize",
    "is_insufficient",
    # Ranker
    "RankedStyle",
    "rank",
    "classify_distribution",
    # Recommendations
    "recommend",
    "generate_style_insights",
    "confidence_band",
    # Engagement
    "EngagementMetrics",
    "EngagementTier",
    "analyze_engagement",
    # Reporter
    "DeveloperStyleSummary",
    "ReportWindow",
    "TrendDirection",
    "report",
]

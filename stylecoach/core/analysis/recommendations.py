"""Recommendation Generator for interaction style profiles.

Maps a ranked StyleProfile to coaching guidance using a static rule table
keyed by (category, classification), with the confidence band substituted
into the rendered text.

Public API:
    - recommend: Build the primary (and, for hybrids, secondary) recommendation
    - generate_style_insights: Observational insight lines for a profile
    - confidence_band: Band name for a primary percent
    - PRIMARY_TEMPLATES / SECONDARY_TEMPLATES / CATEGORY_TIPS: Rule tables
"""

from __future__ import annotations

from dataclasses import dataclass

from stylecoach.common.errors import UnknownClassificationError
from stylecoach.common.lexicon import Lexicon

from .models import CoachingRecommendation, StyleCategory, StyleClassification, StyleProfile

# =============================================================================
# Constants
# =============================================================================

# (minimum percent, band id, display word), checked top-down
CONFIDENCE_BANDS: tuple[tuple[int, str, str], ...] = (
    (60, "high", "Strong"),
    (40, "moderate", "Developing"),
    (0, "emerging", "Emerging"),
)

CATEGORY_LABELS: dict[str, str] = {
    StyleCategory.STRATEGIC_ARCHITECT.value: "Strategic Architect",
    StyleCategory.TECHNICAL_IMPLEMENTER.value: "Technical Implementer",
    StyleCategory.LEARNING_EXPLORER.value: "Learning Explorer",
    StyleCategory.RAPID_PROTOTYPER.value: "Rapid Prototyper",
    StyleCategory.CREATIVE_COLLABORATOR.value: "Creative Collaborator",
}

PRIMARY_PRIORITY = 1
SECONDARY_PRIORITY = 2


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class RecommendationTemplate:
    """Guidance template.

    Placeholders: {band}, {label}, {confidence}, {secondary_label},
    {secondary_score}.
    """

    text: str

    def render(self, **values: object) -> str:
        return self.text.format(**values)


# =============================================================================
# Template Data
# =============================================================================

PRIMARY_TEMPLATES: dict[tuple[str, StyleClassification], RecommendationTemplate] = {
    # Strategic Architect
    (StyleCategory.STRATEGIC_ARCHITECT.value, StyleClassification.PURE): RecommendationTemplate(
        "{band} {label} ({confidence}%): leverage for system design and architecture decisions."
    ),
    (StyleCategory.STRATEGIC_ARCHITECT.value, StyleClassification.HYBRID): RecommendationTemplate(
        "{band} {label} ({confidence}%) with {secondary_label} tendencies ({secondary_score}%): "
        "pair system-level direction with hands-on follow-through."
    ),
    (StyleCategory.STRATEGIC_ARCHITECT.value, StyleClassification.BALANCED): RecommendationTemplate(
        "{label} leads at {confidence}% without dominating: build on it with architecture reviews "
        "and big-picture planning sessions."
    ),
    # Technical Implementer
    (StyleCategory.TECHNICAL_IMPLEMENTER.value, StyleClassification.PURE): RecommendationTemplate(
        "{band} {label} ({confidence}%): provide step-by-step guidance for complex problems."
    ),
    (StyleCategory.TECHNICAL_IMPLEMENTER.value, StyleClassification.HYBRID): RecommendationTemplate(
        "{band} {label} ({confidence}%) with {secondary_label} tendencies ({secondary_score}%): "
        "connect each fix to the design decision behind it."
    ),
    (StyleCategory.TECHNICAL_IMPLEMENTER.value, StyleClassification.BALANCED): RecommendationTemplate(
        "{label} leads at {confidence}% without dominating: deepen implementation skills through "
        "code review and debugging walkthroughs."
    ),
    # Learning Explorer
    (StyleCategory.LEARNING_EXPLORER.value, StyleClassification.PURE): RecommendationTemplate(
        "{band} {label} ({confidence}%): support deep conceptual understanding."
    ),
    (StyleCategory.LEARNING_EXPLORER.value, StyleClassification.HYBRID): RecommendationTemplate(
        "{band} {label} ({confidence}%) with {secondary_label} tendencies ({secondary_score}%): "
        "turn new concepts into small, shippable experiments."
    ),
    (StyleCategory.LEARNING_EXPLORER.value, StyleClassification.BALANCED): RecommendationTemplate(
        "{label} leads at {confidence}% without dominating: channel curiosity into focused "
        "learning goals."
    ),
    # Rapid Prototyper
    (StyleCategory.RAPID_PROTOTYPER.value, StyleClassification.PURE): RecommendationTemplate(
        "{band} {label} ({confidence}%): focus on pragmatic, efficient solutions."
    ),
    (StyleCategory.RAPID_PROTOTYPER.value, StyleClassification.HYBRID): RecommendationTemplate(
        "{band} {label} ({confidence}%) with {secondary_label} tendencies ({secondary_score}%): "
        "schedule a hardening pass after each prototype."
    ),
    (StyleCategory.RAPID_PROTOTYPER.value, StyleClassification.BALANCED): RecommendationTemplate(
        "{label} leads at {confidence}% without dominating: keep the speed while agreeing on "
        "quality checkpoints."
    ),
    # Creative Collaborator
    (StyleCategory.CREATIVE_COLLABORATOR.value, StyleClassification.PURE): RecommendationTemplate(
        "{band} {label} ({confidence}%): encourage innovative problem-solving approaches."
    ),
    (StyleCategory.CREATIVE_COLLABORATOR.value, StyleClassification.HYBRID): RecommendationTemplate(
        "{band} {label} ({confidence}%) with {secondary_label} tendencies ({secondary_score}%): "
        "pair design exploration with clear acceptance criteria."
    ),
    (StyleCategory.CREATIVE_COLLABORATOR.value, StyleClassification.BALANCED): RecommendationTemplate(
        "{label} leads at {confidence}% without dominating: give creative ideas a structured "
        "place in planning."
    ),
}

SECONDARY_TEMPLATES: dict[str, RecommendationTemplate] = {
    StyleCategory.STRATEGIC_ARCHITECT.value: RecommendationTemplate(
        "Secondary {secondary_label} tendencies ({secondary_score}%): involve them in design "
        "discussions, not just task execution."
    ),
    StyleCategory.TECHNICAL_IMPLEMENTER.value: RecommendationTemplate(
        "Secondary {secondary_label} tendencies ({secondary_score}%): give them ownership of "
        "concrete implementation work."
    ),
    StyleCategory.LEARNING_EXPLORER.value: RecommendationTemplate(
        "Secondary {secondary_label} tendencies ({secondary_score}%): make room for questions "
        "and background reading."
    ),
    StyleCategory.RAPID_PROTOTYPER.value: RecommendationTemplate(
        "Secondary {secondary_label} tendencies ({secondary_score}%): use quick prototypes to "
        "validate ideas early."
    ),
    StyleCategory.CREATIVE_COLLABORATOR.value: RecommendationTemplate(
        "Secondary {secondary_label} tendencies ({secondary_score}%): invite them to "
        "brainstorming and UX reviews."
    ),
}

CATEGORY_TIPS: dict[str, tuple[str, ...]] = {
    StyleCategory.STRATEGIC_ARCHITECT.value: (
        "Leverage for system design and architecture decisions",
        "Provide comprehensive analysis and big-picture context",
        "Enable delegation of technical implementation",
    ),
    StyleCategory.TECHNICAL_IMPLEMENTER.value: (
        "Provide step-by-step guidance for complex problems",
        "Encourage exploration of underlying concepts",
        "Guide toward best practices and code quality",
    ),
    StyleCategory.LEARNING_EXPLORER.value: (
        "Support deep conceptual understanding",
        "Provide context and theoretical background",
        "Encourage mentoring and knowledge sharing",
    ),
    StyleCategory.RAPID_PROTOTYPER.value: (
        "Focus on pragmatic, efficient solutions",
        "Balance speed with quality considerations",
        "Guide toward scalable approaches",
    ),
    StyleCategory.CREATIVE_COLLABORATOR.value: (
        "Encourage innovative problem-solving approaches",
        "Focus on user experience and design thinking",
        "Support experimental and creative solutions",
    ),
}

# Categories without an entry (custom lexicons) use these.
GENERIC_PRIMARY_TEMPLATE = RecommendationTemplate(
    "{band} {label} ({confidence}%): reinforce the habits behind this style."
)
GENERIC_SECONDARY_TEMPLATE = RecommendationTemplate(
    "Secondary {secondary_label} tendencies ({secondary_score}%): keep this style in play."
)

# (category, exclusive minimum percent, insight); only the first match per category is used
STYLE_INSIGHT_RULES: tuple[tuple[str, int, str], ...] = (
    (
        StyleCategory.STRATEGIC_ARCHITECT.value,
        60,
        "Exceptional strategic thinking with execution-led refinement patterns",
    ),
    (
        StyleCategory.STRATEGIC_ARCHITECT.value,
        40,
        "Shows strong strategic thinking and a system-level approach",
    ),
    (
        StyleCategory.STRATEGIC_ARCHITECT.value,
        20,
        "Emerging strategic thinking, could benefit from architecture coaching",
    ),
    (
        StyleCategory.TECHNICAL_IMPLEMENTER.value,
        60,
        "Primarily focused on technical implementation and problem-solving",
    ),
    (
        StyleCategory.LEARNING_EXPLORER.value,
        50,
        "Demonstrates strong learning curiosity and conceptual thinking",
    ),
    (
        StyleCategory.RAPID_PROTOTYPER.value,
        30,
        "Shows a pragmatic, speed-focused development approach",
    ),
    (
        StyleCategory.CREATIVE_COLLABORATOR.value,
        30,
        "Exhibits creative problem-solving and design thinking",
    ),
)


# =============================================================================
# Helper Functions
# =============================================================================


def confidence_band(confidence: float) -> tuple[str, str]:
    """Get (band id, display word) for a primary percent."""
    for minimum, band, word in CONFIDENCE_BANDS:
        if confidence >= minimum:
            return band, word
    return CONFIDENCE_BANDS[-1][1], CONFIDENCE_BANDS[-1][2]


def category_label(category: str, lexicon: Lexicon | None = None) -> str:
    """Display label for a category: lexicon label, built-in label, or title-cased id."""
    if lexicon is not None and category in lexicon.categories:
        return lexicon.label_for(category)
    return CATEGORY_LABELS.get(category, category.replace("_", " ").title())


def _checked_classification(profile: StyleProfile) -> StyleClassification:
    try:
        return StyleClassification(profile.classification)
    except ValueError as e:
        raise UnknownClassificationError(
            f"Profile {profile.subject_id} has unknown classification {profile.classification!r}",
            context={"subject_id": profile.subject_id},
        ) from e


# =============================================================================
# Public API
# =============================================================================


def recommend(profile: StyleProfile, lexicon: Lexicon | None = None) -> tuple[CoachingRecommendation, ...]:
    """Generate coaching recommendations for a profile.

    Returns one primary-style recommendation and, for hybrid profiles, one
    secondary-style recommendation.

    Args:
        profile: Ranked profile
        lexicon: Optional lexicon for category labels

    Returns:
        Tuple of CoachingRecommendation, primary first

    Raises:
        UnknownClassificationError: If profile.classification is not recognized.
    """
    classification = _checked_classification(profile)
    _, band_word = confidence_band(profile.confidence)
    secondary_label = category_label(profile.secondary, lexicon) if profile.secondary else ""
    values = {
        "band": band_word,
        "label": category_label(profile.primary, lexicon),
        "confidence": profile.confidence,
        "secondary_label": secondary_label,
        "secondary_score": profile.secondary_score,
    }
    profile_ref = profile.profile_id

    primary_template = PRIMARY_TEMPLATES.get((profile.primary, classification), GENERIC_PRIMARY_TEMPLATE)

    recommendations = [
        CoachingRecommendation(
            subject_id=profile.subject_id,
            profile_ref=profile_ref,
            category=profile.primary,
            text=primary_template.render(**values),
            priority=PRIMARY_PRIORITY,
            tips=CATEGORY_TIPS.get(profile.primary, ()),
        )
    ]

    if classification is StyleClassification.HYBRID and profile.secondary:
        secondary_template = SECONDARY_TEMPLATES.get(profile.secondary, GENERIC_SECONDARY_TEMPLATE)
        recommendations.append(
            CoachingRecommendation(
                subject_id=profile.subject_id,
                profile_ref=profile_ref,
                category=profile.secondary,
                text=secondary_template.render(**values),
                priority=SECONDARY_PRIORITY,
                tips=CATEGORY_TIPS.get(profile.secondary, ()),
            )
        )

    return tuple(recommendations)


def generate_style_insights(profile: StyleProfile, lexicon: Lexicon | None = None) -> list[str]:
    """Observational insight lines for a profile.

    Raises:
        UnknownClassificationError: If profile.classification is not recognized.
    """
    classification = _checked_classification(profile)
    insights: list[str] = []
    matched: set[str] = set()
    for category, minimum, text in STYLE_INSIGHT_RULES:
        if category in matched:
            continue
        if profile.score(category) > minimum:
            insights.append(text)
            matched.add(category)

    if classification is StyleClassification.HYBRID and profile.secondary:
        insights.append(
            f"Hybrid style: primary {category_label(profile.primary, lexicon).lower()} "
            f"with strong {category_label(profile.secondary, lexicon).lower()} tendencies"
        )
    return insights

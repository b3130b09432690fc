"""
Tests for stylecoach.core.analysis.recommendations module.

Verifies:
- Template lookup by (category, classification)
- Secondary recommendation only for hybrid profiles
- Confidence band substitution
- Generic fallback for custom categories
- Style insight lines
"""

from dataclasses import replace

import pytest

from stylecoach.common.errors import UnknownClassificationError
from stylecoach.core.analysis.models import StyleCategory, StyleClassification
from stylecoach.core.analysis.recommendations import (
    CATEGORY_TIPS,
    PRIMARY_PRIORITY,
    PRIMARY_TEMPLATES,
    SECONDARY_PRIORITY,
    category_label,
    confidence_band,
    generate_style_insights,
    recommend,
)
from tests.helpers_style import make_profile


@pytest.fixture
def pure_architect():
    return make_profile(
        "strategic_architect",
        {"strategic_architect": 70, "technical_implementer": 20, "learning_explorer": 10},
        secondary="technical_implementer",
    )


@pytest.fixture
def hybrid_architect():
    return make_profile(
        "strategic_architect",
        {"strategic_architect": 45, "technical_implementer": 35, "learning_explorer": 20},
        classification=StyleClassification.HYBRID,
        secondary="technical_implementer",
    )


# ---------------------------------------------------------------------------
# Template table
# ---------------------------------------------------------------------------


class TestTemplateTable:
    def test_every_builtin_combination_present(self):
        for category in StyleCategory:
            for classification in StyleClassification:
                assert (category.value, classification) in PRIMARY_TEMPLATES

    def test_every_builtin_category_has_tips(self):
        assert set(CATEGORY_TIPS) == {c.value for c in StyleCategory}


class TestConfidenceBand:
    @pytest.mark.parametrize(
        "confidence,band",
        [(100, "high"), (60, "high"), (59, "moderate"), (40, "moderate"), (39, "emerging"), (0, "emerging")],
    )
    def test_bands(self, confidence, band):
        assert confidence_band(confidence)[0] == band


# ---------------------------------------------------------------------------
# recommend()
# ---------------------------------------------------------------------------


class TestRecommend:
    def test_pure_profile_single_recommendation(self, pure_architect):
        recommendations = recommend(pure_architect)
        assert len(recommendations) == 1
        primary = recommendations[0]
        assert primary.category == "strategic_architect"
        assert primary.priority == PRIMARY_PRIORITY
        assert primary.text.startswith("Strong Strategic Architect (70%)")
        assert primary.tips == CATEGORY_TIPS["strategic_architect"]

    def test_hybrid_profile_adds_secondary(self, hybrid_architect):
        primary, secondary = recommend(hybrid_architect)
        assert primary.priority == PRIMARY_PRIORITY
        assert secondary.priority == SECONDARY_PRIORITY
        assert secondary.category == "technical_implementer"
        assert "Technical Implementer" in primary.text
        assert "35%" in secondary.text
        assert primary.text.startswith("Developing Strategic Architect (45%)")

    def test_balanced_profile(self):
        profile = make_profile(
            "learning_explorer",
            {"learning_explorer": 30, "rapid_prototyper": 24, "creative_collaborator": 22},
            classification=StyleClassification.BALANCED,
            secondary="rapid_prototyper",
        )
        recommendations = recommend(profile)
        assert len(recommendations) == 1
        assert "Learning Explorer leads at 30%" in recommendations[0].text

    def test_profile_ref_links_back(self, hybrid_architect):
        for recommendation in recommend(hybrid_architect):
            assert recommendation.profile_ref == hybrid_architect.profile_id
            assert recommendation.subject_id == hybrid_architect.subject_id

    def test_custom_category_uses_generic_template(self, minimal_lexicon):
        profile = make_profile(
            "planner",
            {"planner": 60, "builder": 40},
            classification=StyleClassification.HYBRID,
            secondary="builder",
        )
        primary, secondary = recommend(profile, minimal_lexicon)
        assert primary.text.startswith("Strong Planner (60%)")
        assert primary.tips == ()
        assert "Builder" in secondary.text

    def test_unknown_classification_raises(self, pure_architect):
        broken = replace(pure_architect, classification="dominant")
        with pytest.raises(UnknownClassificationError):
            recommend(broken)

    def test_pure_function(self, hybrid_architect):
        assert recommend(hybrid_architect) == recommend(hybrid_architect)


# ---------------------------------------------------------------------------
# Labels and insights
# ---------------------------------------------------------------------------


class TestCategoryLabel:
    def test_builtin(self):
        assert category_label("rapid_prototyper") == "Rapid Prototyper"

    def test_unknown_falls_back_to_title_case(self):
        assert category_label("night_owl") == "Night Owl"

    def test_lexicon_label_preferred(self, minimal_lexicon):
        assert category_label("planner", minimal_lexicon) == "Planner"


class TestStyleInsights:
    def test_exceptional_strategic(self, pure_architect):
        insights = generate_style_insights(pure_architect)
        assert insights == ["Exceptional strategic thinking with execution-led refinement patterns"]

    def test_only_first_strategic_band_used(self, hybrid_architect):
        insights = generate_style_insights(hybrid_architect)
        assert "Shows strong strategic thinking and a system-level approach" in insights
        assert not any(i.startswith("Emerging strategic") for i in insights)

    def test_hybrid_line(self, hybrid_architect):
        insights = generate_style_insights(hybrid_architect)
        assert insights[-1] == "Hybrid style: primary strategic architect with strong technical implementer tendencies"

    def test_other_categories(self):
        profile = make_profile(
            "learning_explorer",
            {"learning_explorer": 51, "rapid_prototyper": 31, "creative_collaborator": 18},
            classification=StyleClassification.HYBRID,
            secondary="rapid_prototyper",
        )
        insights = generate_style_insights(profile)
        assert "Demonstrates strong learning curiosity and conceptual thinking" in insights
        assert "Shows a pragmatic, speed-focused development approach" in insights
        assert not any("creative" in i.lower() and "exhibits" in i.lower() for i in insights)

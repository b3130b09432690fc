# -*- coding: utf-8 -*-
"""Engagement metrics.

Measures how many of a subject's messages exhibit each engagement signal
declared in the lexicon's `signals` list. A message either exhibits a signal
or not; match counts do not matter here.

Public API:
    - EngagementMetrics: Rates, score, tier, insights and coaching tips
    - EngagementTier: excellent / good / moderate
    - analyze_engagement(): Compute metrics for a message list
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from stylecoach.common.lexicon import Lexicon

# Signal names the score is built from; missing signals count as 0%.
QUESTION_ASKING = "question_asking"
PROBLEM_SOLVING = "problem_solving"
CODE_SHARING = "code_sharing"
LEARNING = "learning"
ENGAGEMENT_SIGNALS = (QUESTION_ASKING, PROBLEM_SOLVING, CODE_SHARING, LEARNING)

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60
LOW_QUESTION_RATE = 20
HIGH_QUESTION_RATE = 60
LOW_LEARNING_RATE = 50
HIGH_LEARNING_RATE = 80
HIGH_CODE_SHARING_RATE = 90
HIGH_PROBLEM_SOLVING_RATE = 80


class EngagementTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"


@dataclass(frozen=True)
class EngagementMetrics:
    """Engagement summary for one message set.

    Attributes:
        message_count: Number of messages analyzed
        rates: Signal name -> percent of messages exhibiting it (0-100)
        engagement_score: Mean of the four engagement signal rates
        tier: Engagement tier derived from engagement_score
        insights: Observational lines
        tips: Coaching tips
    """

    message_count: int
    rates: Mapping[str, int]
    engagement_score: int
    tier: EngagementTier
    insights: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()

    def rate(self, signal: str) -> int:
        return self.rates.get(signal, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "messageCount": self.message_count,
            "rates": dict(self.rates),
            "engagementScore": self.engagement_score,
            "tier": self.tier.value,
            "insights": list(self.insights),
            "tips": list(self.tips),
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def engagement_tier(score: float) -> EngagementTier:
    if score >= EXCELLENT_THRESHOLD:
        return EngagementTier.EXCELLENT
    if score >= GOOD_THRESHOLD:
        return EngagementTier.GOOD
    return EngagementTier.MODERATE


def _insights(rates: Mapping[str, int], score: int, tier: EngagementTier) -> list[str]:
    insights: list[str] = []
    question_rate = rates.get(QUESTION_ASKING, 0)
    learning_rate = rates.get(LEARNING, 0)

    if question_rate < LOW_QUESTION_RATE:
        insights.append(f"Low question-asking rate ({question_rate}%), encourage more curiosity and inquiry")
    elif question_rate > HIGH_QUESTION_RATE:
        insights.append(f"Excellent question-asking approach ({question_rate}%), shows a strong learning mindset")

    if learning_rate < LOW_LEARNING_RATE:
        insights.append(f"Learning conversations could be improved ({learning_rate}%), encourage explanation requests")
    elif learning_rate > HIGH_LEARNING_RATE:
        insights.append(f"Outstanding learning engagement ({learning_rate}%), actively seeks understanding")

    if rates.get(CODE_SHARING, 0) > HIGH_CODE_SHARING_RATE:
        insights.append(f"Excellent code-sharing patterns ({rates[CODE_SHARING]}%), highly technical interactions")
    if rates.get(PROBLEM_SOLVING, 0) > HIGH_PROBLEM_SOLVING_RATE:
        insights.append(f"Strong problem-solving focus ({rates[PROBLEM_SOLVING]}%), uses the assistant for debugging")

    if tier is EngagementTier.EXCELLENT:
        insights.append(f"Excellent engagement ({score}): highly engaged and productive")
    elif tier is EngagementTier.GOOD:
        insights.append(f"Good engagement ({score}): well engaged with room for growth")
    else:
        insights.append(f"Moderate engagement ({score}): could benefit from more interactive sessions")
    return insights


def _tips(rates: Mapping[str, int], score: int) -> list[str]:
    tips: list[str] = []
    if rates.get(QUESTION_ASKING, 0) < LOW_QUESTION_RATE:
        tips.append('Encourage more curiosity: ask "how" and "why" questions to deepen understanding')
        tips.append("Practice inquiry-driven development: question assumptions and explore alternatives")
    if rates.get(LEARNING, 0) < LOW_LEARNING_RATE:
        tips.append("Request explanations: ask for the reasoning behind code and decisions")
        tips.append('Seek conceptual understanding: focus on "why" something works, not just "how"')
    if score < GOOD_THRESHOLD:
        tips.append("Increase interaction depth: use multi-turn conversations for complex problems")
        tips.append("Explore edge cases: discuss potential issues and alternative approaches")
    elif score > EXCELLENT_THRESHOLD:
        tips.append("Share this engagement model with the team")
        tips.append("Mentor colleagues on effective assistant interaction")
    return tips


def analyze_engagement(messages: Iterable[Any], lexicon: Lexicon) -> EngagementMetrics:
    """Compute engagement metrics from the lexicon's signal rules.

    Args:
        messages: Messages (objects with a `text` attribute)
        lexicon: Loaded lexicon; its `signals` define what is counted

    Returns:
        EngagementMetrics. Empty input gives zero rates, the moderate tier
        and no tips.
    """
    messages = list(messages)
    signal_names = [rule.name for rule in lexicon.signals]
    for name in ENGAGEMENT_SIGNALS:
        if name not in signal_names:
            signal_names.append(name)

    if not messages:
        return EngagementMetrics(
            message_count=0,
            rates=MappingProxyType(dict.fromkeys(signal_names, 0)),
            engagement_score=0,
            tier=EngagementTier.MODERATE,
        )

    hits = dict.fromkeys(signal_names, 0)
    for message in messages:
        text = getattr(message, "text", None)
        if not isinstance(text, str) or not text.strip():
            continue
        for rule in lexicon.signals:
            if rule.compiled.search(text):
                hits[rule.name] += 1

    rates = {name: _round_half_up(count * 100 / len(messages)) for name, count in hits.items()}
    score = _round_half_up(sum(rates[name] for name in ENGAGEMENT_SIGNALS) / len(ENGAGEMENT_SIGNALS))
    tier = engagement_tier(score)
    return EngagementMetrics(
        message_count=len(messages),
        rates=MappingProxyType(rates),
        engagement_score=score,
        tier=tier,
        insights=tuple(_insights(rates, score, tier)),
        tips=tuple(_tips(rates, score)),
    )

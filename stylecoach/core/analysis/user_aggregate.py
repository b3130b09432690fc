# stylecoach/core/analysis/user_aggregate.py
"""Per-developer style aggregation across conversations.

This module provides:
- ReportWindow: Half-open [start, end) time window over profile timestamps
- TrendDirection: stable / shifting / insufficient_data
- DeveloperStyleSummary: Rolled-up counts, rates and trend for one subject
- report(): Build a DeveloperStyleSummary from StyleProfiles

The reporter only reads StyleProfiles; it never re-touches raw messages.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from stylecoach.common.errors import MalformedConversationError

from .models import StyleClassification, StyleProfile

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TrendDirection(str, Enum):
    """Whether recent profiles' primary style differs from older ones."""

    STABLE = "stable"
    SHIFTING = "shifting"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class ReportWindow:
    """Half-open time window [start, end). None bounds are open.

    Profiles without a generated_at timestamp fall inside only an
    unbounded window.
    """

    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def trailing(cls, days: float, end: datetime | None = None) -> ReportWindow:
        """Window covering the `days` days before `end` (now if None)."""
        end = end or datetime.now(timezone.utc)
        return cls(start=end - timedelta(days=days), end=end)

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, moment: datetime | None) -> bool:
        if moment is None:
            return self.is_unbounded
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment >= self.end:
            return False
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


@dataclass(frozen=True)
class DeveloperStyleSummary:
    """Style summary for one developer over a window.

    Attributes:
        subject_id: Developer the summary describes
        window: Window the profiles were selected with
        profile_count: Number of profiles inside the window
        most_frequent_primary: Most common primary category (None if no profiles)
        primary_stability: Fraction of profiles whose primary equals most_frequent_primary
        primary_counts: Primary category -> profile count
        classification_counts: Classification value -> profile count
        classification_rates: Classification value -> fraction of profiles
        average_scores: Category -> mean normalized percent
        trend: Trend of the primary style over the window
        earlier_primary: Most frequent primary of the older half
        recent_primary: Most frequent primary of the recent half
    """

    subject_id: str
    window: ReportWindow
    profile_count: int
    most_frequent_primary: str | None
    primary_stability: float
    primary_counts: Mapping[str, int] = field(default_factory=dict)
    classification_counts: Mapping[str, int] = field(default_factory=dict)
    classification_rates: Mapping[str, float] = field(default_factory=dict)
    average_scores: Mapping[str, float] = field(default_factory=dict)
    trend: TrendDirection = TrendDirection.INSUFFICIENT_DATA
    earlier_primary: str | None = None
    recent_primary: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict (camelCase keys)."""
        return {
            "subjectId": self.subject_id,
            "window": self.window.to_dict(),
            "profileCount": self.profile_count,
            "mostFrequentPrimary": self.most_frequent_primary,
            "primaryStability": round(self.primary_stability, 4),
            "primaryCounts": dict(self.primary_counts),
            "classificationCounts": dict(self.classification_counts),
            "classificationRates": {k: round(v, 4) for k, v in self.classification_rates.items()},
            "averageScores": {k: round(v, 2) for k, v in self.average_scores.items()},
            "trend": self.trend.value,
            "earlierPrimary": self.earlier_primary,
            "recentPrimary": self.recent_primary,
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _category_order(profiles: Sequence[StyleProfile]) -> list[str]:
    """Categories in score-map order, first-seen across profiles."""
    order: list[str] = []
    for profile in profiles:
        for category in profile.normalized_scores:
            if category not in order:
                order.append(category)
        if profile.primary not in order:
            order.append(profile.primary)
    return order


def _most_frequent(primaries: Iterable[str], order: Sequence[str]) -> str | None:
    counts = Counter(primaries)
    if not counts:
        return None
    rank = {category: i for i, category in enumerate(order)}
    return min(counts, key=lambda c: (-counts[c], rank.get(c, len(rank)), c))


def _classification_value(profile: StyleProfile) -> str:
    return str(getattr(profile.classification, "value", profile.classification))


def _sort_key(profile: StyleProfile) -> datetime:
    return profile.generated_at or _EPOCH


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def report(
    subject_id: str,
    profiles: Iterable[StyleProfile],
    window: ReportWindow | None = None,
) -> DeveloperStyleSummary:
    """Roll up a developer's profiles inside a window.

    Args:
        subject_id: Developer the profiles belong to
        profiles: StyleProfiles for that developer (any order)
        window: Time window (None for all profiles)

    Returns:
        DeveloperStyleSummary. No profiles in the window gives zero counts
        and an insufficient_data trend.

    Raises:
        MalformedConversationError: If a profile belongs to another subject.
    """
    window = window or ReportWindow()
    profiles = list(profiles)
    for profile in profiles:
        if profile.subject_id != subject_id:
            raise MalformedConversationError(
                f"Profile for '{profile.subject_id}' passed to report for '{subject_id}'",
                context={"subject_id": subject_id, "profile_subject": profile.subject_id},
            )

    selected = sorted((p for p in profiles if window.contains(p.generated_at)), key=_sort_key)
    if not selected:
        return DeveloperStyleSummary(
            subject_id=subject_id,
            window=window,
            profile_count=0,
            most_frequent_primary=None,
            primary_stability=0.0,
        )

    order = _category_order(selected)
    count = len(selected)
    primary_counts = Counter(p.primary for p in selected)
    most_frequent = _most_frequent((p.primary for p in selected), order)

    classification_counts = {c.value: 0 for c in StyleClassification}
    for profile in selected:
        value = _classification_value(profile)
        classification_counts[value] = classification_counts.get(value, 0) + 1

    average_scores = {category: sum(p.score(category) for p in selected) / count for category in order}

    trend = TrendDirection.INSUFFICIENT_DATA
    earlier_primary = recent_primary = None
    if count >= 2:
        half = count // 2
        earlier_primary = _most_frequent((p.primary for p in selected[:half]), order)
        recent_primary = _most_frequent((p.primary for p in selected[half:]), order)
        trend = TrendDirection.STABLE if earlier_primary == recent_primary else TrendDirection.SHIFTING

    return DeveloperStyleSummary(
        subject_id=subject_id,
        window=window,
        profile_count=count,
        most_frequent_primary=most_frequent,
        primary_stability=primary_counts[most_frequent] / count if most_frequent else 0.0,
        primary_counts={c: primary_counts[c] for c in order if primary_counts[c]},
        classification_counts=classification_counts,
        classification_rates={k: v / count for k, v in classification_counts.items()},
        average_scores=average_scores,
        trend=trend,
        earlier_primary=earlier_primary,
        recent_primary=recent_primary,
    )

# -*- coding: utf-8 -*-
"""Style Ranker.

This module orders a normalized distribution, picks the primary and secondary
categories and classifies the profile shape.

Classification rules (thresholds are percentages):
    hybrid   iff a secondary exists and secondary >= hybrid_threshold
    pure     iff primary >= dominance_threshold and not hybrid
    balanced otherwise (evidence exists but no category dominates)

An all-zero distribution is never classified: it raises InsufficientDataError.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from stylecoach.common.errors import InsufficientDataError
from stylecoach.common.typed_config import DEFAULT_DOMINANCE_THRESHOLD, DEFAULT_HYBRID_THRESHOLD
from stylecoach.core.analysis.models import StyleClassification
from stylecoach.core.analysis.normalizer import is_insufficient

from .models import RankedStyle


def classify_distribution(
    primary_score: float,
    secondary_score: float,
    dominance_threshold: float = DEFAULT_DOMINANCE_THRESHOLD,
    hybrid_threshold: float = DEFAULT_HYBRID_THRESHOLD,
) -> StyleClassification:
    """Classify a profile from its top two percentages.

    Args:
        primary_score: Percent of the primary category
        secondary_score: Percent of the secondary category (0 if none)
        dominance_threshold: Minimum primary percent for "pure"
        hybrid_threshold: Minimum secondary percent for "hybrid"

    Returns:
        StyleClassification
    """
    # secondary_score 0 means no secondary category
    if secondary_score > 0 and secondary_score >= hybrid_threshold:
        return StyleClassification.HYBRID
    if primary_score >= dominance_threshold:
        return StyleClassification.PURE
    return StyleClassification.BALANCED


def rank(
    normalized: Mapping[str, int],
    dominance_threshold: float = DEFAULT_DOMINANCE_THRESHOLD,
    hybrid_threshold: float = DEFAULT_HYBRID_THRESHOLD,
    category_order: Sequence[str] | None = None,
) -> RankedStyle:
    """Rank a normalized distribution.

    Args:
        normalized: Category id -> percent
        dominance_threshold: Minimum primary percent for "pure"
        hybrid_threshold: Minimum secondary percent for "hybrid"
        category_order: Tie-break priority (defaults to the key order of
            normalized, which is the lexicon declaration order)

    Returns:
        RankedStyle

    Raises:
        InsufficientDataError: If every category is zero.
    """
    if is_insufficient(normalized):
        raise InsufficientDataError(
            "No style signal found: all category scores are zero",
            user_message="Not enough evidence to classify an interaction style",
        )

    order_source = list(category_order) if category_order is not None else list(normalized.keys())
    order = {category: i for i, category in enumerate(order_source)}
    fallback = len(order)

    ordering = tuple(
        sorted(
            normalized.items(),
            key=lambda item: (-item[1], order.get(item[0], fallback), item[0]),
        )
    )

    primary, primary_score = ordering[0]
    if len(ordering) > 1 and ordering[1][1] > 0:
        secondary: str | None = ordering[1][0]
        secondary_score = ordering[1][1]
    else:
        secondary = None
        secondary_score = 0

    return RankedStyle(
        primary=primary,
        secondary=secondary,
        classification=classify_distribution(primary_score, secondary_score, dominance_threshold, hybrid_threshold),
        confidence=primary_score,
        ordering=ordering,
        tied=secondary is not None and secondary_score == primary_score,
    )

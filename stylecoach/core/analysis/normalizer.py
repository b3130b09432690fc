# -*- coding: utf-8 -*-
"""Normalizer.

Converts a RawScoreVector into an integer percentage distribution.

Percentages use largest-remainder rounding: every value is the floor or the
ceiling of its exact share and the distribution sums to exactly 100 whenever
the raw total is positive. A zero total yields an all-zero map, which callers
must treat as "insufficient data", never as a balanced profile.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType

from .models import RawScoreVector


def normalize(raw: RawScoreVector) -> Mapping[str, int]:
    """Convert raw scores to percentages summing to 100.

    Args:
        raw: Raw score vector (key order is the tie-break order for
            distributing rounding remainders)

    Returns:
        Immutable mapping category id -> percent, same key order as raw.scores.
    """
    categories = list(raw.scores.keys())
    total = raw.total
    if total <= 0:
        return MappingProxyType(dict.fromkeys(categories, 0))

    exact = {c: raw.scores[c] * 100.0 / total for c in categories}
    floors = {c: math.floor(exact[c]) for c in categories}
    leftover = 100 - sum(floors.values())

    order = {c: i for i, c in enumerate(categories)}
    by_remainder = sorted(categories, key=lambda c: (-(exact[c] - floors[c]), order[c]))
    for category in by_remainder[:leftover]:
        floors[category] += 1

    return MappingProxyType({c: floors[c] for c in categories})


def is_insufficient(normalized: Mapping[str, int]) -> bool:
    """True if a normalized map carries no evidence (all zeros or empty)."""
    return not any(normalized.values())

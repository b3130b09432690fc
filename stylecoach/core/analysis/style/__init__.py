# -*- coding: utf-8 -*-
"""Style Ranking - Public API.

This package ranks a normalized style distribution and classifies the
profile as pure, hybrid or balanced.

Public API:
    - RankedStyle: Ranking result
    - rank(): Order a distribution and classify it
    - classify_distribution(): Classification from the top two percentages

Example usage:
    >>> from stylecoach.core.analysis.style import rank
    >>> result = rank({"strategic_architect": 42, "technical_implementer": 38, "learning_explorer": 20})
    >>> result.classification.value
    'hybrid'
"""

from .analyzer import classify_distribution, rank
from .models import RankedStyle

__all__ = [
    "RankedStyle",
    "rank",
    "classify_distribution",
]

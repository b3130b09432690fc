# -*- coding: utf-8 -*-
"""Style Ranking Data Models.

This module defines the result of ranking a normalized distribution:
- RankedStyle: Immutable primary/secondary/classification result
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stylecoach.core.analysis.models import StyleClassification


@dataclass(frozen=True)
class RankedStyle:
    """Result of ranking a normalized score distribution.

    Attributes:
        primary: Highest-percent category (ties by category order)
        secondary: Runner-up category, None if it has zero percent
        classification: pure / hybrid / balanced
        confidence: Primary percent (0-100)
        ordering: All (category, percent) pairs, best first
        tied: True if the runner-up has the same percent as the primary
    """

    primary: str
    secondary: str | None
    classification: StyleClassification
    confidence: int
    ordering: tuple[tuple[str, int], ...]
    tied: bool = False

    @property
    def secondary_score(self) -> int:
        """Percent of the runner-up category (0 if none)."""
        return self.ordering[1][1] if len(self.ordering) > 1 else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary": self.primary,
            "secondary": self.secondary,
            "classification": self.classification.value,
            "confidence": self.confidence,
            "ordering": [[c, p] for c, p in self.ordering],
            "tied": self.tied,
        }

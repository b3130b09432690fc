"""
Data models for the interaction style lexicon.

This module defines immutable dataclasses for lexicon rules and categories.
All classes use frozen=True and tuple fields for complete immutability.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class PatternRule:
    """A single weighted pattern rule (immutable).

    Attributes:
        category: Category id this rule contributes to.
        name: Rule name, unique within its category (e.g., "system_thinking").
        pattern: Regex source the rule matches with.
        weight: Contribution per match (always > 0).
        terms: Source terms when the rule was declared with `terms`, else ().
        is_regex: True if the rule was declared with a raw `regex`.
        compiled: Case-insensitive compiled pattern (excluded from equality).
    """

    category: str
    name: str
    pattern: str
    weight: float
    terms: tuple[str, ...] = ()
    is_regex: bool = False
    compiled: re.Pattern[str] = field(default=None, compare=False, repr=False)  # type: ignore[assignment]

    def count_matches(self, text: str) -> int:
        """Count non-overlapping matches of this rule in text."""
        return sum(1 for _ in self.compiled.finditer(text))


@dataclass(frozen=True)
class StyleCategoryDefinition:
    """A style category and its ordered rules (immutable).

    Attributes:
        id: Category identifier in snake_case (e.g., "strategic_architect").
        label: Human-readable label (e.g., "Strategic Architect").
        rules: Ordered pattern rules (non-empty).
    """

    id: str
    label: str
    rules: tuple[PatternRule, ...]


@dataclass(frozen=True)
class Lexicon:
    """A versioned, immutable pattern lexicon.

    Category order is significant: it is the tie-break priority used by the
    ranker and the key order of every score map built from this lexicon.

    Attributes:
        version: Lexicon version string (e.g., "v2").
        description: Free-form description.
        category_definitions: Ordered category definitions.
        signals: Engagement signal rules (category "signal"), may be empty.
    """

    version: str
    description: str
    category_definitions: tuple[StyleCategoryDefinition, ...]
    signals: tuple[PatternRule, ...] = ()
    _by_id: Mapping[str, StyleCategoryDefinition] = field(
        default=None, compare=False, repr=False  # type: ignore[assignment]
    )

    def __post_init__(self) -> None:
        if self._by_id is None:
            index = MappingProxyType({c.id: c for c in self.category_definitions})
            object.__setattr__(self, "_by_id", index)

    @property
    def categories(self) -> tuple[str, ...]:
        """Category ids in declaration (priority) order."""
        return tuple(c.id for c in self.category_definitions)

    def _definition(self, category: str) -> StyleCategoryDefinition:
        try:
            return self._by_id[category]
        except KeyError:
            raise KeyError(f"Unknown category '{category}' in lexicon {self.version}") from None

    def rules_for(self, category: str) -> tuple[PatternRule, ...]:
        """Get the ordered rules for a category.

        Raises:
            KeyError: If the category is not part of this lexicon.
        """
        return self._definition(category).rules

    def label_for(self, category: str) -> str:
        """Get the display label for a category (falls back to the id)."""
        definition = self._by_id.get(category)
        if definition is None or not definition.label:
            return category.replace("_", " ").title()
        return definition.label

    @property
    def rule_count(self) -> int:
        """Total number of category rules."""
        return sum(len(c.rules) for c in self.category_definitions)

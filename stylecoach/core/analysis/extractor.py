# -*- coding: utf-8 -*-
"""Signal Extractor.

Applies the lexicon to one message's text and returns weighted per-category
match sums. Extraction never raises on bad message content: a message with
missing, empty or non-string text contributes zero signal.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from stylecoach.common.lexicon import Lexicon

logger = logging.getLogger(__name__)


def _message_text(message: Any) -> str | None:
    text = getattr(message, "text", None)
    if not isinstance(text, str) or not text.strip():
        return None
    return text


def extract(message: Any, lexicon: Lexicon) -> Mapping[str, float]:
    """Score one message against every category of the lexicon.

    For each rule, non-overlapping case-insensitive matches are counted and
    multiplied by the rule weight; rule contributions are summed per category.

    Args:
        message: A Message (or any object with a `text` attribute)
        lexicon: Loaded lexicon

    Returns:
        Immutable mapping category id -> weighted sum, in lexicon order.
        All zeros if the message has no usable text.
    """
    scores = dict.fromkeys(lexicon.categories, 0.0)
    text = _message_text(message)
    if text is None:
        logger.debug("Message %s has no usable text, scoring as zero signal", getattr(message, "id", "?"))
        return MappingProxyType(scores)

    for definition in lexicon.category_definitions:
        scores[definition.id] = sum(rule.weight * rule.count_matches(text) for rule in definition.rules)
    return MappingProxyType(scores)


def extract_rule_hits(message: Any, lexicon: Lexicon) -> Mapping[tuple[str, str], int]:
    """Per-rule match counts for one message (rules with zero hits omitted).

    Returns:
        Immutable mapping (category id, rule name) -> match count.
    """
    hits: dict[tuple[str, str], int] = {}
    text = _message_text(message)
    if text is None:
        return MappingProxyType(hits)
    for definition in lexicon.category_definitions:
        for rule in definition.rules:
            count = rule.count_matches(text)
            if count:
                hits[(definition.id, rule.name)] = count
    return MappingProxyType(hits)

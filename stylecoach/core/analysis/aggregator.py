# -*- coding: utf-8 -*-
"""Score Aggregator.

Streams a subject's messages through the extractor and sums the per-category
results into one RawScoreVector. The per-message map step can optionally run
on a thread pool; results are always reduced in input order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from types import MappingProxyType

from stylecoach.common.errors import MalformedConversationError
from stylecoach.common.lexicon import Lexicon

from .extractor import extract
from .models import Message, RawScoreVector

logger = logging.getLogger(__name__)


def resolve_subject_id(messages: Sequence[Message], subject_id: str | None = None) -> str:
    """Determine the common subject of a message set.

    Args:
        messages: Messages to check
        subject_id: Expected subject (required when messages is empty)

    Returns:
        The shared subject id ("" if messages is empty and none was given)

    Raises:
        MalformedConversationError: If a message lacks a subject or subjects differ.
    """
    expected = subject_id
    for message in messages:
        message_subject = getattr(message, "subject_id", None)
        if not message_subject:
            raise MalformedConversationError(
                f"Message {getattr(message, 'id', '?')} has no subject id",
                context={"message_id": getattr(message, "id", None)},
            )
        if expected is None:
            expected = message_subject
        elif message_subject != expected:
            raise MalformedConversationError(
                f"Messages mix subjects: '{expected}' and '{message_subject}'",
                user_message="All messages in one classification must belong to the same subject",
                context={"subjects": sorted({expected, message_subject})},
            )
    return expected or ""


def aggregate(
    messages: Iterable[Message],
    lexicon: Lexicon,
    subject_id: str | None = None,
    max_workers: int | None = None,
) -> RawScoreVector:
    """Sum weighted category scores across all messages of one subject.

    Args:
        messages: Messages sharing one subject id
        lexicon: Loaded lexicon
        subject_id: Expected subject (used as-is for empty input)
        max_workers: If > 1, extract messages on a thread pool of this size

    Returns:
        RawScoreVector in lexicon category order. Empty input gives all zeros.

    Raises:
        MalformedConversationError: If messages mix subjects or lack a subject.
    """
    messages = list(messages)
    resolved_subject = resolve_subject_id(messages, subject_id)

    score_fn = partial(extract, lexicon=lexicon)
    if max_workers is not None and max_workers > 1 and len(messages) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            per_message: list[Mapping[str, float]] = list(executor.map(score_fn, messages))
    else:
        per_message = [score_fn(message) for message in messages]

    totals = dict.fromkeys(lexicon.categories, 0.0)
    for scores in per_message:
        for category, value in scores.items():
            totals[category] += value

    logger.debug("Aggregated %d messages for subject %s", len(messages), resolved_subject)
    return RawScoreVector(
        subject_id=resolved_subject,
        scores=MappingProxyType(totals),
        message_count=len(messages),
    )

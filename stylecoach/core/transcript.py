"""Exported chat transcript parsing.

Splits a markdown chat export into ordered Messages. A speaker marker must
start a line: ``**User**``, ``**Human**``, ``User:``, ``Human:`` open a user
message; ``**Assistant**``, ``**Cursor**``, ``Assistant:``, ``Cursor:`` open
an assistant message. Text before the first marker is ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from stylecoach.core.analysis.models import Message, MessageRole

logger = logging.getLogger(__name__)

USER_SPEAKERS = frozenset({"User", "Human"})
ASSISTANT_SPEAKERS = frozenset({"Assistant", "Cursor"})

_SPEAKER = "|".join(sorted(USER_SPEAKERS | ASSISTANT_SPEAKERS))
_MARKER_RE = re.compile(
    rf"^[ \t]*(?:\*\*(?P<bold>{_SPEAKER})\*\*:?|(?P<plain>{_SPEAKER}):)",
    re.MULTILINE,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_transcript(
    content: str,
    subject_id: str,
    conversation_id: str | None = None,
    started_at: datetime | None = None,
    min_length: int = 0,
) -> list[Message]:
    """Parse a transcript into Messages in document order.

    Args:
        content: Transcript text
        subject_id: Subject every message is attributed to
        conversation_id: Prefix for message ids (defaults to subject_id)
        started_at: Timestamp of the first message; message n is stamped
            n seconds later (defaults to the Unix epoch)
        min_length: Messages whose stripped text is not longer than this
            are dropped

    Returns:
        List of Message with ids "<conversation_id>:<n>" (n from 1)
    """
    conversation_id = conversation_id or subject_id
    started_at = started_at or _EPOCH
    markers = list(_MARKER_RE.finditer(content or ""))

    messages: list[Message] = []
    for i, match in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(content)
        text = content[match.end() : end].strip()
        if len(text) <= min_length:
            continue
        speaker = match.group("bold") or match.group("plain")
        role = MessageRole.USER if speaker in USER_SPEAKERS else MessageRole.OTHER
        n = len(messages) + 1
        messages.append(
            Message(
                id=f"{conversation_id}:{n}",
                subject_id=subject_id,
                text=text,
                timestamp=started_at + timedelta(seconds=n - 1),
                role=role,
            )
        )

    logger.debug("Parsed %d messages from transcript %s", len(messages), conversation_id)
    return messages


def user_messages(messages: Iterable[Message]) -> list[Message]:
    """Filter to the user stream (the only stream that is classified)."""
    return [m for m in messages if m.role is MessageRole.USER]

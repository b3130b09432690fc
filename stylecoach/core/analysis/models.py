# -*- coding: utf-8 -*-
"""Core data models for interaction style classification.

This module defines the data structures that flow through the pipeline:
- Message: One immutable transcript message (input contract)
- RawScoreVector: Weighted per-category sums for one subject
- StyleProfile: Immutable classification result
- CoachingRecommendation: Guidance derived from a StyleProfile

Rounding and camelCase naming happen only in to_dict().
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from stylecoach.common.errors import MalformedConversationError


class StyleCategory(str, Enum):
    """Built-in style category identifiers, in tie-break priority order.

    Inherits from str so members compare equal to the plain ids used in
    score maps. Custom lexicons may declare further categories.
    """

    STRATEGIC_ARCHITECT = "strategic_architect"
    TECHNICAL_IMPLEMENTER = "technical_implementer"
    LEARNING_EXPLORER = "learning_explorer"
    RAPID_PROTOTYPER = "rapid_prototyper"
    CREATIVE_COLLABORATOR = "creative_collaborator"


class StyleClassification(str, Enum):
    """Profile shape derived from the two thresholds."""

    PURE = "pure"
    HYBRID = "hybrid"
    BALANCED = "balanced"


class MessageRole(str, Enum):
    """Conversational role of a message."""

    USER = "user"
    OTHER = "other"


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp (trailing "Z" allowed) into an aware datetime.

    Naive timestamps are taken as UTC.

    Raises:
        ValueError: If the value is not a datetime or ISO-8601 string.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Expected ISO-8601 timestamp, got {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Message:
    """One transcript message.

    Attributes:
        id: Message identifier
        subject_id: Conversation or developer the message belongs to
        text: Message text (may be empty; extraction treats it as zero signal)
        timestamp: Aware datetime of the message
        role: MessageRole.USER for the classified stream
    """

    id: str
    subject_id: str
    text: str
    timestamp: datetime
    role: MessageRole = MessageRole.USER

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Message:
        """Build a Message from an input record.

        Accepts `subjectId` or `subject_id`. Missing text is tolerated.

        Raises:
            MalformedConversationError: If a required field is missing or invalid.
        """
        if not isinstance(d, Mapping):
            raise MalformedConversationError(f"Message record must be a mapping, got {type(d).__name__}")

        message_id = d.get("id")
        subject_id = d.get("subjectId", d.get("subject_id"))
        for field_name, value in (("id", message_id), ("subjectId", subject_id)):
            if value is None or not str(value).strip():
                raise MalformedConversationError(
                    f"Message record is missing required field '{field_name}'",
                    context={"record_id": message_id},
                )

        try:
            timestamp = parse_timestamp(d.get("timestamp"))
        except ValueError as e:
            raise MalformedConversationError(
                f"Message {message_id} has an invalid timestamp: {e}",
                context={"record_id": message_id},
            ) from e

        raw_role = d.get("role", MessageRole.USER.value)
        try:
            role = MessageRole(raw_role)
        except ValueError as e:
            raise MalformedConversationError(
                f"Message {message_id} has an unknown role {raw_role!r}",
                context={"record_id": message_id},
            ) from e

        text = d.get("text")
        return cls(
            id=str(message_id),
            subject_id=str(subject_id),
            text=text if isinstance(text, str) else "",
            timestamp=timestamp,
            role=role,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the input record shape."""
        return {
            "id": self.id,
            "subjectId": self.subject_id,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "role": self.role.value,
        }


@dataclass(frozen=True)
class RawScoreVector:
    """Unnormalized weighted scores for one subject.

    Attributes:
        subject_id: Subject the scores belong to
        scores: Category id -> weighted match sum, in lexicon order
        message_count: Number of messages that were aggregated
    """

    subject_id: str
    scores: Mapping[str, float]
    message_count: int = 0

    @property
    def total(self) -> float:
        """Sum of all category scores."""
        return sum(self.scores.values())

    @property
    def is_zero(self) -> bool:
        """True if no category received any signal."""
        return self.total <= 0.0


@dataclass(frozen=True)
class CoachingRecommendation:
    """Coaching guidance for one category of a profile.

    Attributes:
        subject_id: Subject of the profile
        profile_ref: StyleProfile.profile_id of the source profile
        category: Category the guidance targets
        text: Rendered guidance headline
        priority: 1 for the primary style, 2 for the secondary style
        tips: Concrete focus points
    """

    subject_id: str
    profile_ref: str
    category: str
    text: str
    priority: int
    tips: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "subjectId": self.subject_id,
            "profileRef": self.profile_ref,
            "category": self.category,
            "text": self.text,
            "priority": self.priority,
            "tips": list(self.tips),
        }


@dataclass(frozen=True)
class StyleProfile:
    """Result of classifying one subject's messages.

    A new classification always produces a new profile; profiles are never
    mutated. Two classifications of identical input with the same lexicon
    version compare equal on every field.

    Attributes:
        subject_id: Subject the profile describes
        normalized_scores: Category id -> integer percent, sums to 100
        primary: Highest-scoring category
        secondary: Runner-up category, None if it has no signal
        confidence: Primary category percent
        classification: pure / hybrid / balanced
        generated_at: Timestamp of the latest message (None for undated input)
        lexicon_version: Version of the lexicon used
        message_count: Number of messages classified
        recommendations: Coaching guidance derived from this profile
    """

    subject_id: str
    normalized_scores: Mapping[str, int]
    primary: str
    secondary: str | None
    confidence: int
    classification: StyleClassification
    generated_at: datetime | None
    lexicon_version: str
    message_count: int = 0
    recommendations: tuple[CoachingRecommendation, ...] = ()

    @property
    def profile_id(self) -> str:
        """Stable digest identifying this profile's content."""
        payload = json.dumps(
            [
                self.subject_id,
                self.lexicon_version,
                list(self.normalized_scores.items()),
                self.primary,
                self.secondary,
                str(getattr(self.classification, "value", self.classification)),
                self.generated_at.isoformat() if self.generated_at else None,
                self.message_count,
            ],
            separators=(",", ":"),
        )
        return hashlib.sha1(payload.encode("utf-8")).hexdigest()[:16]

    def score(self, category: str) -> int:
        """Percent for a category (0 if absent)."""
        return self.normalized_scores.get(category, 0)

    @property
    def secondary_score(self) -> int:
        """Percent of the secondary category (0 if none)."""
        return self.score(self.secondary) if self.secondary else 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-serializable output record."""
        return {
            "subjectId": self.subject_id,
            "profileId": self.profile_id,
            "normalizedScores": dict(self.normalized_scores),
            "primary": self.primary,
            "secondary": self.secondary,
            "classification": str(getattr(self.classification, "value", self.classification)),
            "confidence": self.confidence,
            "generatedAt": self.generated_at.isoformat() if self.generated_at else None,
            "lexiconVersion": self.lexicon_version,
            "messageCount": self.message_count,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> StyleProfile:
        """Rebuild a profile from to_dict() output (recommendations included).

        Raises:
            MalformedConversationError: If required keys are missing or invalid.
        """
        try:
            generated_at = d.get("generatedAt")
            profile = cls(
                subject_id=str(d["subjectId"]),
                normalized_scores=dict(d["normalizedScores"]),
                primary=str(d["primary"]),
                secondary=d.get("secondary"),
                confidence=int(d["confidence"]),
                classification=StyleClassification(d["classification"]),
                generated_at=parse_timestamp(generated_at) if generated_at else None,
                lexicon_version=str(d.get("lexiconVersion", "")),
                message_count=int(d.get("messageCount", 0)),
            )
            recommendations = tuple(
                CoachingRecommendation(
                    subject_id=str(r.get("subjectId", profile.subject_id)),
                    profile_ref=str(r.get("profileRef", profile.profile_id)),
                    category=str(r["category"]),
                    text=str(r["text"]),
                    priority=int(r.get("priority", 1)),
                    tips=tuple(r.get("tips", ())),
                )
                for r in d.get("recommendations", ())
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MalformedConversationError(f"Invalid profile record: {e}") from e

        if not recommendations:
            return profile
        return replace(profile, recommendations=recommendations)

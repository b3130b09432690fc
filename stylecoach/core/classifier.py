"""Classification pipeline facade.

Runs Aggregator -> Normalizer -> Ranker -> Recommendation Generator and
returns a StyleProfile carrying its recommendations.

Usage:
    from stylecoach.core.classifier import StyleClassifier

    classifier = StyleClassifier()
    profile = classifier.classify(messages)
    print(profile.to_dict())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

from stylecoach.common.errors import InsufficientDataError, StyleCoachError
from stylecoach.common.lexicon import Lexicon, load_lexicon
from stylecoach.common.typed_config import ClassifierConfig
from stylecoach.core.analysis.aggregator import aggregate
from stylecoach.core.analysis.models import Message, StyleProfile
from stylecoach.core.analysis.normalizer import normalize
from stylecoach.core.analysis.recommendations import recommend
from stylecoach.core.analysis.style import rank

logger = logging.getLogger(__name__)


class StyleClassifier:
    """Classifies message sets with one lexicon and one set of thresholds.

    Instances hold only immutable state and may be shared across threads.
    """

    def __init__(self, config: ClassifierConfig | None = None, lexicon: Lexicon | None = None) -> None:
        self.config = (config or ClassifierConfig()).validate()
        self.lexicon = lexicon if lexicon is not None else load_lexicon(self.config.lexicon_version)

    def classify(
        self,
        messages: Iterable[Message],
        subject_id: str | None = None,
        max_workers: int | None = None,
    ) -> StyleProfile:
        """Classify one subject's messages.

        Args:
            messages: Messages sharing one subject id (user stream only)
            subject_id: Expected subject (optional)
            max_workers: Thread pool size for per-message extraction

        Returns:
            StyleProfile with recommendations

        Raises:
            MalformedConversationError: If messages mix subjects or lack a subject.
            InsufficientDataError: If there is no style signal at all.
        """
        messages = list(messages)
        raw = aggregate(messages, self.lexicon, subject_id=subject_id, max_workers=max_workers)
        normalized = normalize(raw)
        try:
            ranked = rank(
                normalized,
                dominance_threshold=self.config.dominance_threshold,
                hybrid_threshold=self.config.hybrid_threshold,
                category_order=self.lexicon.categories,
            )
        except InsufficientDataError as e:
            e.context.update(subject_id=raw.subject_id, message_count=raw.message_count)
            raise

        profile = StyleProfile(
            subject_id=raw.subject_id,
            normalized_scores=normalized,
            primary=ranked.primary,
            secondary=ranked.secondary,
            confidence=ranked.confidence,
            classification=ranked.classification,
            generated_at=max((m.timestamp for m in messages), default=None),
            lexicon_version=self.lexicon.version,
            message_count=raw.message_count,
        )
        logger.debug(
            "Classified %s: %s (%s, %d%%)",
            profile.subject_id,
            profile.primary,
            profile.classification.value,
            profile.confidence,
        )
        return replace(profile, recommendations=recommend(profile, self.lexicon))

    def classify_many(
        self,
        batches: Mapping[str, Iterable[Message]],
        max_workers: int | None = None,
    ) -> dict[str, StyleProfile | StyleCoachError]:
        """Classify independent subjects concurrently.

        A failure for one subject is returned in its slot and never aborts
        the others.

        Args:
            batches: subject_id -> that subject's messages
            max_workers: Thread pool size (None for the executor default)

        Returns:
            subject_id -> StyleProfile or the StyleCoachError it raised,
            in the key order of batches
        """

        def _run(item: tuple[str, list[Message]]) -> StyleProfile | StyleCoachError:
            subject, messages = item
            try:
                return self.classify(messages, subject_id=subject)
            except StyleCoachError as e:
                logger.warning("Classification failed for %s: %s", subject, e)
                return e

        items = [(subject, list(messages)) for subject, messages in batches.items()]
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(_run, items))
        return {subject: result for (subject, _), result in zip(items, results)}


def classify(messages: Iterable[Message], config: ClassifierConfig | None = None) -> StyleProfile:
    """Classify one subject's messages with the given (or default) config."""
    return StyleClassifier(config).classify(messages)


def classify_many(
    batches: Mapping[str, Iterable[Message]],
    config: ClassifierConfig | None = None,
    max_workers: int | None = None,
) -> dict[str, StyleProfile | StyleCoachError]:
    """Classify several subjects concurrently; see StyleClassifier.classify_many."""
    return StyleClassifier(config).classify_many(batches, max_workers=max_workers)

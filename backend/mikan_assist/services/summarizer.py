from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Sequence
from uuid import uuid4

from mikan_assist.services import lexicon
from mikan_assist.services.analysis import contains_any, count_matches, match_labels, normalize, polarity
from mikan_assist.services.domain import CustomerSummary, InvalidInput, Message

_log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def topics_for(message: Message) -> list[str]:
    return match_labels(message.content, lexicon.TOPIC_TRIGGERS)


def preferences_for(message: Message) -> list[str]:
    return match_labels(message.content, lexicon.PREFERENCE_TRIGGERS)


def is_purchase_record(message: Message) -> bool:
    if message.type != "order":
        return False
    content = normalize(message.content)
    return contains_any(content, lexicon.PRODUCT_FAMILY_WORDS) and contains_any(
        content, lexicon.QUANTITY_UNIT_WORDS
    )


def history_sentiment(history: Sequence[Message]) -> str:
    """Polarity count over the whole history.

    Each lexicon entry present in a message adds one point to its side. The
    scores are not weighted or normalized by message length, so a single long
    message can outweigh several short ones.
    """
    positive = 0
    negative = 0
    for message in history:
        content = normalize(message.content)
        positive += count_matches(content, lexicon.PROFILE_POSITIVE_WORDS)
        negative += count_matches(content, lexicon.PROFILE_NEGATIVE_WORDS)
    return polarity(positive, negative)


class ProfileSummarizer:
    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or _utcnow

    def generate(self, customer_id: str, history: Sequence[Message]) -> CustomerSummary:
        if not history:
            return CustomerSummary(
                id=str(uuid4()),
                customer_id=customer_id,
                key_topics=(),
                sentiment="neutral",
                purchase_history=(),
                preferences=(),
                last_updated=self._clock(),
            )

        topics: list[str] = []
        preferences: list[str] = []
        purchases: list[str] = []
        for message in history:
            topics.extend(topics_for(message))
            preferences.extend(preferences_for(message))
            if is_purchase_record(message):
                purchases.append(message.content or "")

        summary = CustomerSummary(
            id=str(uuid4()),
            customer_id=customer_id,
            key_topics=tuple(topics),
            sentiment=history_sentiment(history),
            purchase_history=tuple(purchases),
            preferences=tuple(preferences),
            last_updated=self._clock(),
        )
        _log.debug(
            "Generated summary for %s from %d messages: sentiment=%s topics=%d purchases=%d",
            customer_id,
            len(history),
            summary.sentiment,
            len(summary.key_topics),
            len(summary.purchase_history),
        )
        return summary

    def update(self, customer_id: str, existing: CustomerSummary, new_message: Message) -> CustomerSummary:
        """Merge topics and preferences found in ``new_message`` into ``existing``.

        Sentiment and purchase history are carried over from ``existing``
        untouched; only ``generate`` derives them.
        """
        if new_message is None or new_message.content is None:
            raise InvalidInput("new message content is required")

        # The merged summary keeps the customer_id it was created with.
        return replace(
            existing,
            key_topics=existing.key_topics + tuple(topics_for(new_message)),
            preferences=existing.preferences + tuple(preferences_for(new_message)),
            last_updated=self._clock(),
        )

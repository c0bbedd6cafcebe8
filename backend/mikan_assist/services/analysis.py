from __future__ import annotations

import logging
from typing import Iterable, Mapping

from mikan_assist.services import lexicon
from mikan_assist.services.domain import MessageAnalysis

_log = logging.getLogger(__name__)


def normalize(text: str | None) -> str:
    return (text or "").lower()


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    return any(p in text for p in phrases)


def count_matches(text: str, phrases: Iterable[str]) -> int:
    """One point per lexicon entry present in ``text``; repeats of the same entry count once."""
    return sum(1 for p in phrases if p in text)


def match_labels(text: str | None, table: Mapping[str, tuple[str, ...]]) -> list[str]:
    content = normalize(text)
    return [label for label, phrases in table.items() if contains_any(content, phrases)]


def polarity(positive: int, negative: int) -> str:
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def classify_type(content: str) -> str:
    for message_type, cues in lexicon.TYPE_CUES:
        if contains_any(content, cues):
            return message_type
    return lexicon.DEFAULT_MESSAGE_TYPE


def extract_keywords(content: str) -> tuple[str, ...]:
    return tuple(word for word in lexicon.KEYWORD_VOCABULARY if word in content)


def message_sentiment(content: str) -> str:
    return polarity(
        count_matches(content, lexicon.MESSAGE_POSITIVE_WORDS),
        count_matches(content, lexicon.MESSAGE_NEGATIVE_WORDS),
    )


def urgency_level(content: str) -> str:
    if contains_any(content, lexicon.HIGH_URGENCY_WORDS):
        return "high"
    if contains_any(content, lexicon.MEDIUM_URGENCY_WORDS):
        return "medium"
    return "low"


def analyze_message(text: str | None) -> MessageAnalysis:
    content = normalize(text)
    analysis = MessageAnalysis(
        type=classify_type(content),
        keywords=extract_keywords(content),
        sentiment=message_sentiment(content),
        urgency=urgency_level(content),
    )
    _log.debug(
        "Analyzed message: type=%s sentiment=%s urgency=%s keywords=%s",
        analysis.type,
        analysis.sentiment,
        analysis.urgency,
        ",".join(analysis.keywords),
    )
    return analysis


def product_name(text: str | None) -> str:
    content = normalize(text)
    for cue, name in lexicon.PRODUCT_VARIETIES:
        if cue in content:
            return name
    return lexicon.DEFAULT_PRODUCT_NAME

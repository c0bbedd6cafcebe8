from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Literal, Protocol, Sequence, TypeVar

from mikan_assist.services.lexicon import PREFERENCE_TRIGGERS, TOPIC_TRIGGERS

Tone = Literal["friendly", "professional", "apologetic", "enthusiastic"]
Sentiment = Literal["positive", "neutral", "negative"]
Category = Literal["order", "inquiry", "review", "request", "feedback", "complaint"]
Sender = Literal["customer", "farmer"]
Urgency = Literal["low", "medium", "high"]

TONES: tuple[str, ...] = ("friendly", "professional", "apologetic", "enthusiastic")
DEFAULT_TONES: tuple[str, ...] = ("friendly", "professional")
SENTIMENTS: tuple[str, ...] = ("positive", "neutral", "negative")
CATEGORIES: tuple[str, ...] = ("order", "inquiry", "review", "request", "feedback", "complaint")
SENDERS: tuple[str, ...] = ("customer", "farmer")

_T = TypeVar("_T")


class InvalidInput(ValueError):
    """A required field is missing or a value is outside its vocabulary."""


class RandomSource(Protocol):
    def choice(self, seq: Sequence[_T]) -> _T: ...


def _labels(labels: Sequence[str], vocabulary: Iterable[str], kind: str) -> tuple[str, ...]:
    unknown = [label for label in labels if label not in vocabulary]
    if unknown:
        raise InvalidInput(f"unknown {kind} label(s): {', '.join(map(repr, unknown))}")
    return tuple(dict.fromkeys(labels))


@dataclass(frozen=True)
class Message:
    id: str
    content: str | None
    type: Category
    timestamp: datetime
    sender: Sender = "customer"

    def __post_init__(self) -> None:
        if self.type not in CATEGORIES:
            raise InvalidInput(f"unknown message category: {self.type!r}")
        if self.sender not in SENDERS:
            raise InvalidInput(f"unknown sender role: {self.sender!r}")


@dataclass(frozen=True)
class CustomerSummary:
    id: str
    customer_id: str
    key_topics: tuple[str, ...]
    sentiment: Sentiment
    purchase_history: tuple[str, ...]
    preferences: tuple[str, ...]
    last_updated: datetime

    def __post_init__(self) -> None:
        if self.sentiment not in SENTIMENTS:
            raise InvalidInput(f"unknown sentiment: {self.sentiment!r}")
        # Label sets keep discovery order.
        object.__setattr__(self, "key_topics", _labels(self.key_topics, TOPIC_TRIGGERS, "topic"))
        object.__setattr__(self, "preferences", _labels(self.preferences, PREFERENCE_TRIGGERS, "preference"))
        object.__setattr__(self, "purchase_history", tuple(self.purchase_history))


@dataclass(frozen=True)
class ResponseSuggestion:
    id: str
    content: str
    tone: Tone
    confidence: float
    reasoning: str


@dataclass(frozen=True)
class ResponseGenerationRequest:
    customer_message: str | None
    customer_summary: CustomerSummary | None = None
    conversation_history: Sequence[Message] | None = None
    preferred_tone: Tone | None = None


@dataclass(frozen=True)
class MessageAnalysis:
    type: Category
    keywords: tuple[str, ...]
    sentiment: Sentiment
    urgency: Urgency

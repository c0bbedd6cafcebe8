from __future__ import annotations

import logging
import random
from typing import Sequence
from uuid import uuid4

from mikan_assist.services import templates
from mikan_assist.services.analysis import analyze_message, product_name
from mikan_assist.services.domain import (
    DEFAULT_TONES,
    TONES,
    CustomerSummary,
    InvalidInput,
    Message,
    MessageAnalysis,
    RandomSource,
    ResponseGenerationRequest,
    ResponseSuggestion,
)
from mikan_assist.services.lexicon import display_label, display_sentiment

_log = logging.getLogger(__name__)

BASE_CONFIDENCE = {
    "order": 0.90,
    "feedback": 0.85,
    "complaint": 0.80,
}
DEFAULT_CONFIDENCE = 0.70
CONTEXT_BOOST = 0.10
RECENT_HISTORY_WINDOW = 3


def build_context(summary: CustomerSummary | None, history: Sequence[Message] | None) -> str:
    parts: list[str] = []
    if summary is not None:
        parts.append("顧客情報:")
        if summary.preferences:
            parts.append(f"好み（{', '.join(display_label(p) for p in summary.preferences)}）")
        if summary.purchase_history:
            parts.append(f"購入履歴（{len(summary.purchase_history)}件）")
        parts.append(f"感情：{display_sentiment(summary.sentiment)}")
    if history:
        recent = list(history)[-RECENT_HISTORY_WINDOW:]
        parts.append(f"最近のやり取り：{len(recent)}件")
    return " ".join(parts)


def score(message_type: str, context: str) -> float:
    confidence = BASE_CONFIDENCE.get(message_type, DEFAULT_CONFIDENCE)
    if context:
        confidence += CONTEXT_BOOST
    return round(min(confidence, 1.0), 2)


def build_reasoning(analysis: MessageAnalysis, tone: str, context: str) -> str:
    reasoning = (
        f"メッセージタイプ「{analysis.type}」、感情「{display_sentiment(analysis.sentiment)}」"
        f"に基づき、「{tone}」なトーンで回答を生成。"
    )
    if context:
        reasoning += f" 顧客コンテキストを考慮：{context}。"
    if analysis.urgency == "high":
        reasoning += " 緊急性が高いため、迅速な対応を意識。"
    return reasoning


class ResponseEngine:
    def __init__(self, rng: RandomSource | None = None):
        self._rng: RandomSource = rng or random.Random()

    def analyze(self, text: str | None) -> MessageAnalysis:
        return analyze_message(text)

    def build_context(self, summary: CustomerSummary | None, history: Sequence[Message] | None) -> str:
        return build_context(summary, history)

    def suggest(self, request: ResponseGenerationRequest) -> list[ResponseSuggestion]:
        if request.customer_message is None:
            raise InvalidInput("customer message is required")
        if request.preferred_tone and request.preferred_tone not in TONES:
            raise InvalidInput(f"unknown tone: {request.preferred_tone!r}")

        analysis = self.analyze(request.customer_message)
        context = self.build_context(request.customer_summary, request.conversation_history)
        tones = (request.preferred_tone,) if request.preferred_tone else DEFAULT_TONES

        suggestions = [
            self._generate_one(request.customer_message, analysis, context, tone)
            for tone in tones
        ]
        # sorted() is stable, so equal scores keep tone-evaluation order.
        ranked = sorted(suggestions, key=lambda s: s.confidence, reverse=True)
        _log.debug(
            "Ranked %d suggestions for %s message: %s",
            len(ranked),
            analysis.type,
            ", ".join(f"{s.tone}={s.confidence:.2f}" for s in ranked),
        )
        return ranked

    def _generate_one(
        self,
        message: str,
        analysis: MessageAnalysis,
        context: str,
        tone: str,
    ) -> ResponseSuggestion:
        pool = templates.templates_for(analysis.type, analysis.sentiment, tone)
        content = self._rng.choice(pool)
        if templates.PRODUCT_PLACEHOLDER in content:
            content = content.replace(templates.PRODUCT_PLACEHOLDER, product_name(message))

        return ResponseSuggestion(
            id=str(uuid4()),
            content=content,
            tone=tone,
            confidence=score(analysis.type, context),
            reasoning=build_reasoning(analysis, tone, context),
        )

from __future__ import annotations

import pytest

from mikan_assist.services import lexicon
from mikan_assist.services.analysis import (
    analyze_message,
    classify_type,
    match_labels,
    message_sentiment,
    normalize,
    product_name,
    urgency_level,
)


@pytest.mark.parametrize(
    "text",
    ["青島みかんを5kg注文したいです", "みかんを購入したいのですが", "3kg注文お願いします", "10KGでお願いします"],
)
def test_order_messages(text: str) -> None:
    assert analyze_message(text).type == "order"


@pytest.mark.parametrize("text", ["ありがとうございました。とても美味しかったです", "美味しいみかんでした"])
def test_feedback_messages(text: str) -> None:
    assert analyze_message(text).type == "feedback"


@pytest.mark.parametrize("text", ["配送に問題がありました", "不満があります", "クレームです"])
def test_complaint_messages(text: str) -> None:
    assert analyze_message(text).type == "complaint"


def test_unmatched_and_empty_messages_fall_back_to_inquiry() -> None:
    assert analyze_message("みかんについて質問があります").type == "inquiry"
    assert analyze_message("").type == "inquiry"
    assert analyze_message(None).type == "inquiry"


def test_type_priority_order_over_feedback_over_complaint() -> None:
    assert classify_type(normalize("ありがとう、また注文します")) == "order"
    assert classify_type(normalize("注文した箱に問題がありました")) == "order"
    assert classify_type(normalize("ありがとう、でも箱に問題がありました")) == "feedback"
    assert classify_type(normalize("美味しいけど不満もあります")) == "feedback"


def test_keywords_follow_vocabulary_order() -> None:
    analysis = analyze_message("梱包してKGで青島みかんを")
    assert analysis.keywords == ("みかん", "青島", "kg", "梱包")
    assert analyze_message("配送日を教えて").keywords == ()


def test_message_sentiment_polarity() -> None:
    assert message_sentiment("最高に良い、でも少し残念") == "positive"
    assert message_sentiment("悪い、残念、でもありがとう") == "negative"
    assert message_sentiment("ありがとう、でも問題が") == "neutral"
    assert message_sentiment("") == "neutral"


def test_urgency_levels() -> None:
    assert urgency_level("至急お願いします") == "high"
    assert urgency_level("すぐに欲しいです。できれば今週") == "high"
    assert urgency_level("できれば来週に") == "medium"
    assert urgency_level("お時間のある時にご連絡ください") == "medium"
    assert urgency_level("よろしくお願いします") == "low"


def test_analysis_outputs_are_independent() -> None:
    analysis = analyze_message("急ぎで問題を解決してほしい")
    assert analysis.type == "complaint"
    assert analysis.sentiment == "negative"
    assert analysis.urgency == "high"
    assert analysis.keywords == ("問題",)


def test_product_name_prefers_variety_cues() -> None:
    assert product_name("青島みかんを5kg") == "青島みかん"
    assert product_name("温州みかんを3kg") == "温州みかん"
    assert product_name("温州と青島を両方") == "温州みかん"
    assert product_name("みかんを注文") == lexicon.DEFAULT_PRODUCT_NAME
    assert product_name("") == "みかん"


def test_match_labels_fires_each_label_once() -> None:
    assert match_labels("ギフトで贈答用、ギフト包装", lexicon.PREFERENCE_TRIGGERS) == ["gift-packaging"]
    assert match_labels(None, lexicon.TOPIC_TRIGGERS) == []

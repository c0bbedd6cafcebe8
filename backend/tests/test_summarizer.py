from __future__ import annotations

from datetime import datetime, timezone

import pytest

from mikan_assist.services.domain import CustomerSummary, InvalidInput, Message
from mikan_assist.services.summarizer import ProfileSummarizer, history_sentiment, is_purchase_record

FIXED_NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


def _msg(content: str | None, type: str = "inquiry", sender: str = "customer", idx: int = 1) -> Message:
    return Message(
        id=str(idx),
        content=content,
        type=type,  # type: ignore[arg-type]
        timestamp=datetime(2024, 1, idx, tzinfo=timezone.utc),
        sender=sender,  # type: ignore[arg-type]
    )


def _existing_summary() -> CustomerSummary:
    return CustomerSummary(
        id="summary123",
        customer_id="customer123",
        key_topics=("packaging-interest",),
        sentiment="positive",
        purchase_history=("青島みかん 5kg",),
        preferences=("gift-packaging",),
        last_updated=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_generate_from_conversation_history() -> None:
    history = [
        _msg("青島みかんを5kg注文したい", type="order", idx=1),
        _msg("梱包について気になります", idx=2),
        _msg("とても美味しかった！", type="review", idx=3),
    ]
    summary = ProfileSummarizer().generate("customer123", history)

    assert summary.customer_id == "customer123"
    assert summary.key_topics == ("packaging-interest",)
    assert summary.sentiment == "positive"
    assert summary.purchase_history == ("青島みかんを5kg注文したい",)
    assert summary.preferences == ()
    assert summary.id


def test_generate_empty_history_is_neutral_and_empty() -> None:
    summary = ProfileSummarizer(clock=lambda: FIXED_NOW).generate("customer123", [])

    assert summary.key_topics == ()
    assert summary.preferences == ()
    assert summary.purchase_history == ()
    assert summary.sentiment == "neutral"
    assert summary.last_updated == FIXED_NOW


def test_generate_deduplicates_labels_across_history() -> None:
    history = [
        _msg("梱包は丁寧に。梱包材も気になります", idx=1),
        _msg("ギフト用の梱包で、家族みんなで食べます", idx=2),
        _msg("贈答用にもう一箱。次回もリピートします", idx=3),
        _msg("新商品と新しい商品の案内をください", idx=4),
    ]
    summary = ProfileSummarizer().generate("c1", history)

    assert set(summary.key_topics) == {"packaging-interest", "repeat-purchase-intent", "new-product-interest"}
    assert len(summary.key_topics) == 3
    assert summary.preferences == ("gift-packaging", "family-oriented")


def test_generate_topics_are_superset_of_each_message() -> None:
    summarizer = ProfileSummarizer()
    history = [
        _msg("梱包について", idx=1),
        _msg("家族で食べました", idx=2),
        _msg("新商品はありますか", idx=3),
    ]
    combined = summarizer.generate("c1", history)
    for message in history:
        single = summarizer.generate("c1", [message])
        assert set(single.key_topics) <= set(combined.key_topics)
        assert set(single.preferences) <= set(combined.preferences)


def test_sentiment_counts_each_keyword_once_per_message() -> None:
    # Two positive entries in one message outweigh one negative entry.
    assert history_sentiment([_msg("ありがとう、次も楽しみです"), _msg("箱に問題がありました")]) == "positive"
    # Repeating the same entry does not add points: 1 vs 2.
    assert history_sentiment([_msg("ありがとう、ありがとう"), _msg("問題があり不満です")]) == "negative"
    assert history_sentiment([_msg("美味しかった"), _msg("箱が破れていた")]) == "neutral"
    assert history_sentiment([_msg("配送日を教えてください")]) == "neutral"


def test_purchase_record_requires_order_product_and_unit() -> None:
    assert is_purchase_record(_msg("青島みかんを5kg注文", type="order"))
    assert is_purchase_record(_msg("温州みかん 10KG お願いします", type="order"))
    assert not is_purchase_record(_msg("青島みかんを5kg欲しい", type="inquiry"))
    assert not is_purchase_record(_msg("みかんを注文したい", type="order"))
    assert not is_purchase_record(_msg("りんごを3kg注文", type="order"))


def test_purchase_history_keeps_raw_text_and_duplicates() -> None:
    history = [
        _msg("みかん5kg注文", type="order", idx=1),
        _msg("みかん5kg注文", type="order", idx=2),
        _msg("みかん3KGで", type="order", idx=3),
    ]
    summary = ProfileSummarizer().generate("c1", history)
    assert summary.purchase_history == ("みかん5kg注文", "みかん5kg注文", "みかん3KGで")


def test_generate_tolerates_missing_content() -> None:
    summary = ProfileSummarizer().generate("c1", [_msg(None), _msg("梱包について", idx=2)])
    assert summary.key_topics == ("packaging-interest",)
    assert summary.sentiment == "neutral"


def test_update_merges_topics_and_preferences_only() -> None:
    existing = _existing_summary()
    summarizer = ProfileSummarizer(clock=lambda: FIXED_NOW)
    new_message = _msg("新しい商品について質問があります。家族用とギフト用を検討中です", idx=4)

    updated = summarizer.update("customer123", existing, new_message)

    assert "new-product-interest" in updated.key_topics
    assert "packaging-interest" in updated.key_topics
    assert updated.preferences == ("gift-packaging", "family-oriented")
    assert updated.sentiment == existing.sentiment
    assert updated.purchase_history == existing.purchase_history
    assert updated.id == existing.id
    assert updated.customer_id == existing.customer_id
    assert updated.last_updated == FIXED_NOW
    assert updated.last_updated > existing.last_updated


def test_update_does_not_recompute_sentiment_or_purchases() -> None:
    existing = _existing_summary()
    complaint = _msg("みかん5kg注文したけど問題があり不満です。クレームです", type="order", idx=5)

    updated = ProfileSummarizer().update("customer123", existing, complaint)

    assert updated.sentiment == "positive"
    assert updated.purchase_history == ("青島みかん 5kg",)
    assert updated.key_topics == existing.key_topics
    assert updated.preferences == existing.preferences


def test_update_rejects_missing_content() -> None:
    with pytest.raises(InvalidInput):
        ProfileSummarizer().update("customer123", _existing_summary(), _msg(None))


def test_update_accepts_empty_content() -> None:
    updated = ProfileSummarizer().update("customer123", _existing_summary(), _msg(""))
    assert updated.key_topics == ("packaging-interest",)


def test_summary_rejects_unknown_sentiment() -> None:
    with pytest.raises(InvalidInput):
        CustomerSummary(
            id="s",
            customer_id="c",
            key_topics=(),
            sentiment="ecstatic",  # type: ignore[arg-type]
            purchase_history=(),
            preferences=(),
            last_updated=FIXED_NOW,
        )


def test_message_rejects_unknown_category() -> None:
    with pytest.raises(InvalidInput):
        _msg("hello", type="shipping")


@pytest.mark.parametrize(
    "key_topics, preferences",
    [
        (("<script>",), ()),
        (("gift-packaging",), ()),
        ((), ("packaging-interest",)),
        ((), ("organic",)),
    ],
)
def test_summary_rejects_labels_outside_the_tables(key_topics, preferences) -> None:
    with pytest.raises(InvalidInput):
        CustomerSummary(
            id="s",
            customer_id="c",
            key_topics=key_topics,
            sentiment="neutral",
            purchase_history=(),
            preferences=preferences,
            last_updated=FIXED_NOW,
        )


def test_summary_deduplicates_labels_in_first_seen_order() -> None:
    summary = CustomerSummary(
        id="s",
        customer_id="c",
        key_topics=("repeat-purchase-intent", "packaging-interest", "repeat-purchase-intent"),
        sentiment="neutral",
        purchase_history=(),
        preferences=("family-oriented", "family-oriented"),
        last_updated=FIXED_NOW,
    )
    assert summary.key_topics == ("repeat-purchase-intent", "packaging-interest")
    assert summary.preferences == ("family-oriented",)

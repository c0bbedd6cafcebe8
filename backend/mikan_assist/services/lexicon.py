from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# label -> trigger phrases; a label fires when any phrase is a substring of the
# lower-cased message text.
TOPIC_TRIGGERS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "packaging-interest": ("梱包",),
        "new-product-interest": ("新しい商品", "新商品"),
        "repeat-purchase-intent": ("次回も", "リピート"),
    }
)

PREFERENCE_TRIGGERS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "gift-packaging": ("贈答用", "ギフト"),
        "family-oriented": ("家族", "みんな"),
    }
)

LABEL_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "packaging-interest": "梱包への関心",
        "new-product-interest": "新商品への関心",
        "repeat-purchase-intent": "リピート希望",
        "gift-packaging": "贈答用梱包",
        "family-oriented": "家族向け",
    }
)

# Profile-level lexicons (history scan in the summarizer).
PROFILE_POSITIVE_WORDS: tuple[str, ...] = ("美味しい", "美味しかった", "楽しみ", "ありがとう")
PROFILE_NEGATIVE_WORDS: tuple[str, ...] = ("破れ", "問題", "クレーム", "不満")

# Message-level lexicons (single inbound message in the response engine).
MESSAGE_POSITIVE_WORDS: tuple[str, ...] = ("美味しい", "ありがとう", "楽しみ", "良い", "最高")
MESSAGE_NEGATIVE_WORDS: tuple[str, ...] = ("問題", "不満", "クレーム", "悪い", "残念")

PRODUCT_FAMILY_WORDS: tuple[str, ...] = ("みかん",)
QUANTITY_UNIT_WORDS: tuple[str, ...] = ("kg",)

# Evaluated in order, first match wins; "inquiry" is the fallback.
TYPE_CUES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("order", ("注文", "購入", "kg")),
    ("feedback", ("ありがとう", "美味しい")),
    ("complaint", ("問題", "不満", "クレーム")),
)
DEFAULT_MESSAGE_TYPE = "inquiry"

KEYWORD_VOCABULARY: tuple[str, ...] = (
    "みかん",
    "青島",
    "温州",
    "注文",
    "購入",
    "kg",
    "梱包",
    "美味しい",
    "ありがとう",
    "問題",
    "不満",
)

HIGH_URGENCY_WORDS: tuple[str, ...] = ("急ぎ", "すぐ", "至急")
MEDIUM_URGENCY_WORDS: tuple[str, ...] = ("できれば", "お時間のある時")

# Ordered, first match wins.
PRODUCT_VARIETIES: tuple[tuple[str, str], ...] = (
    ("温州", "温州みかん"),
    ("青島", "青島みかん"),
)
DEFAULT_PRODUCT_NAME = "みかん"

SENTIMENT_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "positive": "ポジティブ",
        "neutral": "ニュートラル",
        "negative": "ネガティブ",
    }
)


def display_label(label: str) -> str:
    return LABEL_DISPLAY_NAMES.get(label, label)


def display_sentiment(sentiment: str) -> str:
    return SENTIMENT_DISPLAY_NAMES.get(sentiment, sentiment)

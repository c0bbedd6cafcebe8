from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from mikan_assist.services.domain import TONES

PRODUCT_PLACEHOLDER = "{product}"

# Pool keys: order, positive-feedback, feedback, complaint, inquiry.
ORDER_POOL = "order"
POSITIVE_FEEDBACK_POOL = "positive-feedback"
FEEDBACK_POOL = "feedback"
COMPLAINT_POOL = "complaint"
GENERAL_POOL = "inquiry"


def _same_for_every_tone(templates: tuple[str, ...]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({tone: templates for tone in TONES})


TEMPLATE_POOLS: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        ORDER_POOL: MappingProxyType(
            {
                "friendly": (
                    "ご注文ありがとうございます！{product}ですね。とても美味しく仕上がっておりますよ。",
                    "{product}のご注文をいただき、ありがとうございます！心を込めてお送りいたします。",
                ),
                "professional": (
                    "ご注文を承りました。{product}について、詳細をご確認させていただきます。",
                    "{product}のご注文ありがとうございます。お客様のご要望に沿って準備いたします。",
                ),
                "enthusiastic": (
                    "わぁ！{product}のご注文ありがとうございます！今年は特に美味しく育ちました！",
                    "{product}のご注文、本当にありがとうございます！自信をもってお届けします！",
                ),
                "apologetic": (
                    "ご注文いただき恐縮です。{product}について、最善を尽くして対応いたします。",
                ),
            }
        ),
        POSITIVE_FEEDBACK_POOL: MappingProxyType(
            {
                "friendly": (
                    "お褒めの言葉をいただき、本当に嬉しいです！また美味しいみかんをお届けしますね。",
                    "ありがとうございます！お客様に喜んでいただけて、農家冥利に尽きます。",
                ),
                "professional": (
                    "ご満足いただけましたこと、大変嬉しく思います。今後ともよろしくお願いいたします。",
                    "お気に入りいただき、誠にありがとうございます。品質向上に努めてまいります。",
                ),
                "enthusiastic": (
                    "わぁ！そんなに喜んでいただけて、本当に嬉しいです！次回も期待してくださいね！",
                    "ありがとうございます！お客様の笑顔が私たちの一番の喜びです！",
                ),
                "apologetic": (
                    "お気に入りいただき、恐縮です。これからも精進いたします。",
                ),
            }
        ),
        FEEDBACK_POOL: _same_for_every_tone(
            ("ご意見をいただき、ありがとうございます。今後の参考にさせていただきます。",)
        ),
        # Apology framing does not vary with tone.
        COMPLAINT_POOL: _same_for_every_tone(
            (
                "この度は、ご不便をおかけして大変申し訳ございません。すぐに改善に努めます。",
                "申し訳ございません。ご指摘いただき、今後このようなことがないよう気をつけます。",
                "大変申し訳ございません。お客様のご意見を真摯に受け止め、対応いたします。",
            )
        ),
        GENERAL_POOL: MappingProxyType(
            {
                "friendly": (
                    "ご連絡ありがとうございます！何かお手伝いできることがあれば、お気軽におっしゃってくださいね。",
                    "いつもありがとうございます！どのようなことでしょうか？",
                ),
                "professional": (
                    "お問い合わせいただき、ありがとうございます。詳細についてご回答いたします。",
                    "ご質問をいただき、ありがとうございます。適切に対応させていただきます。",
                ),
                "enthusiastic": (
                    "ご連絡ありがとうございます！喜んでお答えします！",
                    "いつもありがとうございます！何でもお気軽にお聞かせください！",
                ),
                "apologetic": (
                    "ご連絡いただき、恐縮です。可能な限り対応いたします。",
                ),
            }
        ),
    }
)


def pool_key(message_type: str, sentiment: str) -> str:
    if message_type == "order":
        return ORDER_POOL
    if message_type == "feedback":
        return POSITIVE_FEEDBACK_POOL if sentiment == "positive" else FEEDBACK_POOL
    if message_type == "complaint":
        return COMPLAINT_POOL
    return GENERAL_POOL


def templates_for(message_type: str, sentiment: str, tone: str) -> tuple[str, ...]:
    return TEMPLATE_POOLS[pool_key(message_type, sentiment)][tone]

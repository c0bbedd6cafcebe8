from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Sequence
from uuid import uuid4

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from mikan_assist.models import ConversationMessage, Customer, CustomerSummaryRecord, SuggestionRecord
from mikan_assist.services.domain import CustomerSummary, Message, ResponseSuggestion


def as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on storage, so rows are kept in UTC.
    return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)


def create_customer(db: Session, *, name: str, email: str, phone: str | None = None) -> Customer:
    customer = Customer(
        id=uuid4().hex,
        name=name.strip(),
        email=email.strip().lower(),
        phone=(phone or "").strip() or None,
        tags=[],
        total_orders=0,
    )
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def get_customer(db: Session, *, customer_id: str) -> Customer | None:
    return db.get(Customer, customer_id)


def add_messages(db: Session, *, customer_id: str, messages: Iterable[Message]) -> int:
    inserted = 0
    orders = 0
    for message in messages:
        db.add(
            ConversationMessage(
                customer_id=customer_id,
                message_id=message.id,
                content=message.content or "",
                type=message.type,
                sender=message.sender,
                timestamp=as_utc(message.timestamp),
            )
        )
        inserted += 1
        if message.type == "order" and message.sender == "customer":
            orders += 1

    customer = db.get(Customer, customer_id)
    if customer is not None and orders:
        customer.total_orders = (customer.total_orders or 0) + orders
        customer.updated_at = datetime.now(timezone.utc)
    db.commit()
    return inserted


def list_messages(db: Session, *, customer_id: str, limit: int | None = None) -> list[ConversationMessage]:
    """Chronological conversation log; with ``limit`` only the most recent rows are returned."""
    stmt = (
        select(ConversationMessage)
        .where(ConversationMessage.customer_id == customer_id)
        .order_by(desc(ConversationMessage.timestamp), desc(ConversationMessage.id))
    )
    if limit is not None:
        stmt = stmt.limit(max(0, limit))
    rows = list(db.scalars(stmt).all())
    rows.reverse()
    return rows


def to_message(row: ConversationMessage) -> Message:
    return Message(
        id=row.message_id,
        content=row.content,
        type=row.type,  # type: ignore[arg-type]
        timestamp=as_utc(row.timestamp),
        sender=row.sender,  # type: ignore[arg-type]
    )


def save_summary(db: Session, *, summary: CustomerSummary) -> CustomerSummaryRecord:
    record = db.scalar(
        select(CustomerSummaryRecord).where(CustomerSummaryRecord.customer_id == summary.customer_id)
    )
    if record is None:
        record = CustomerSummaryRecord(customer_id=summary.customer_id)
        db.add(record)
    record.summary_id = summary.id
    record.key_topics = list(summary.key_topics)
    record.sentiment = summary.sentiment
    record.purchase_history = list(summary.purchase_history)
    record.preferences = list(summary.preferences)
    record.last_updated = summary.last_updated
    db.commit()
    db.refresh(record)
    return record


def get_summary(db: Session, *, customer_id: str) -> CustomerSummary | None:
    record = db.scalar(select(CustomerSummaryRecord).where(CustomerSummaryRecord.customer_id == customer_id))
    if record is None:
        return None
    return CustomerSummary(
        id=record.summary_id,
        customer_id=record.customer_id,
        key_topics=tuple(record.key_topics or ()),
        sentiment=record.sentiment,  # type: ignore[arg-type]
        purchase_history=tuple(record.purchase_history or ()),
        preferences=tuple(record.preferences or ()),
        last_updated=record.last_updated,
    )


def record_suggestions(
    db: Session,
    *,
    customer_id: str,
    original_message: str,
    suggestions: Sequence[ResponseSuggestion],
) -> list[SuggestionRecord]:
    records = [
        SuggestionRecord(
            suggestion_id=s.id,
            customer_id=customer_id,
            original_message=original_message,
            suggested_response=s.content,
            tone=s.tone,
            confidence=s.confidence,
            reasoning=s.reasoning,
            was_used=False,
        )
        for s in suggestions
    ]
    db.add_all(records)
    db.commit()
    return records


def list_suggestion_records(db: Session, *, customer_id: str, limit: int) -> list[SuggestionRecord]:
    stmt = (
        select(SuggestionRecord)
        .where(SuggestionRecord.customer_id == customer_id)
        .order_by(desc(SuggestionRecord.id))
        .limit(max(0, limit))
    )
    return list(db.scalars(stmt).all())


def count_suggestion_records(db: Session, *, customer_id: str) -> int:
    stmt = select(func.count()).select_from(SuggestionRecord).where(SuggestionRecord.customer_id == customer_id)
    return int(db.scalar(stmt) or 0)


def mark_suggestion_used(db: Session, *, suggestion_id: str) -> SuggestionRecord | None:
    record = db.scalar(select(SuggestionRecord).where(SuggestionRecord.suggestion_id == suggestion_id))
    if record is None:
        return None
    if not record.was_used:
        record.was_used = True
        record.used_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(record)
    return record

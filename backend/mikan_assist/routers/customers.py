from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from mikan_assist import crud
from mikan_assist.db import get_session
from mikan_assist.schemas import (
    CustomerCreate,
    CustomerOut,
    CustomerSummaryIn,
    CustomerSummaryOut,
    MessageIn,
    SummaryGenerateRequest,
    SummaryUpdateRequest,
)
from mikan_assist.services.domain import CustomerSummary, InvalidInput, Message
from mikan_assist.services.summarizer import ProfileSummarizer

router = APIRouter(prefix="/customers", tags=["customers"])

_log = logging.getLogger(__name__)
_summarizer = ProfileSummarizer()


def to_domain_message(payload: MessageIn) -> Message:
    return Message(
        id=payload.id or str(uuid4()),
        content=payload.content,
        type=payload.type or "inquiry",
        timestamp=crud.as_utc(payload.timestamp) if payload.timestamp else datetime.now(timezone.utc),
        sender=payload.sender or "customer",
    )


def to_domain_summary(payload: CustomerSummaryIn) -> CustomerSummary:
    return CustomerSummary(
        id=payload.id,
        customer_id=payload.customer_id,
        key_topics=tuple(payload.key_topics),
        sentiment=payload.sentiment,
        purchase_history=tuple(payload.purchase_history),
        preferences=tuple(payload.preferences),
        last_updated=payload.last_updated,
    )


@router.post("", response_model=CustomerOut, status_code=201)
def create_customer(payload: CustomerCreate, db: Session = Depends(get_session)):
    customer = crud.create_customer(db, name=payload.name, email=str(payload.email), phone=payload.phone)
    _log.info("Created customer %s", customer.id)
    return customer


@router.post("/summary", response_model=CustomerSummaryOut)
def generate_summary(payload: SummaryGenerateRequest, db: Session = Depends(get_session)):
    messages = [to_domain_message(m) for m in payload.messages]
    summary = _summarizer.generate(payload.customer_id, messages)
    if messages:
        crud.add_messages(db, customer_id=payload.customer_id, messages=messages)
    crud.save_summary(db, summary=summary)
    _log.info("Stored summary for customer %s (%d messages)", payload.customer_id, len(messages))
    return summary


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: str, db: Session = Depends(get_session)):
    customer = crud.get_customer(db, customer_id=customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/{customer_id}/summary", response_model=CustomerSummaryOut)
def get_summary(customer_id: str, db: Session = Depends(get_session)):
    summary = crud.get_summary(db, customer_id=customer_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Summary not found")
    return summary


@router.put("/{customer_id}/summary", response_model=CustomerSummaryOut)
def update_summary(customer_id: str, payload: SummaryUpdateRequest, db: Session = Depends(get_session)):
    if payload.existing_summary is not None and payload.existing_summary.customer_id != customer_id:
        raise HTTPException(status_code=400, detail="existing_summary belongs to another customer")

    try:
        if payload.existing_summary is not None:
            existing = to_domain_summary(payload.existing_summary)
        else:
            existing = crud.get_summary(db, customer_id=customer_id)
        if existing is None:
            raise HTTPException(status_code=404, detail="Summary not found")
        message = to_domain_message(payload.new_message)
        updated = _summarizer.update(customer_id, existing, message)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    crud.add_messages(db, customer_id=customer_id, messages=[message])
    crud.save_summary(db, summary=updated)
    return updated

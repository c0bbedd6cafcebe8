from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mikan_assist import crud
from mikan_assist.db import get_session
from mikan_assist.models import SuggestionRecord
from mikan_assist.routers.customers import to_domain_message
from mikan_assist.schemas import (
    ConversationAnalysisOut,
    ConversationAnalyzeRequest,
    ConversationInsights,
    CustomerSummaryOut,
    MessageOut,
    ResponseHistoryItem,
    ResponseHistoryOut,
    ResponseSuggestionOut,
    ResponseSuggestionRequest,
    ResponseSuggestionsOut,
    SuggestionRequestInfo,
)
from mikan_assist.services.domain import InvalidInput, ResponseGenerationRequest
from mikan_assist.services.suggestions import ResponseEngine
from mikan_assist.services.summarizer import ProfileSummarizer
from mikan_assist.settings import settings

router = APIRouter(prefix="/conversations", tags=["conversations"])

_log = logging.getLogger(__name__)
_summarizer = ProfileSummarizer()
_engine = ResponseEngine()

_ANONYMOUS_CUSTOMER = "anonymous"


def _history_item(record: SuggestionRecord) -> ResponseHistoryItem:
    return ResponseHistoryItem(
        id=record.suggestion_id,
        customer_id=record.customer_id,
        original_message=record.original_message,
        suggested_response=record.suggested_response,
        tone=record.tone,  # type: ignore[arg-type]
        confidence=record.confidence,
        was_used=record.was_used,
        created_at=record.created_at,
        used_at=record.used_at,
    )


@router.post("/analyze", response_model=ConversationAnalysisOut)
def analyze_conversation(payload: ConversationAnalyzeRequest):
    messages = [to_domain_message(m) for m in payload.messages]
    summary = _summarizer.generate(payload.customer_id or _ANONYMOUS_CUSTOMER, messages)
    return ConversationAnalysisOut(
        message_count=len(messages),
        customer_messages=sum(1 for m in messages if m.sender == "customer"),
        farmer_messages=sum(1 for m in messages if m.sender == "farmer"),
        summary=CustomerSummaryOut.model_validate(summary),
        insights=ConversationInsights(
            dominant_sentiment=summary.sentiment,
            key_topics=list(summary.key_topics),
            preferences=list(summary.preferences),
            purchase_history=list(summary.purchase_history),
        ),
    )


@router.post("/response-suggestions", response_model=ResponseSuggestionsOut)
def generate_response_suggestions(payload: ResponseSuggestionRequest, db: Session = Depends(get_session)):
    summary = None
    history = None
    if payload.customer_id:
        summary = crud.get_summary(db, customer_id=payload.customer_id)
        rows = crud.list_messages(db, customer_id=payload.customer_id, limit=settings.context_history_limit)
        history = [crud.to_message(row) for row in rows]

    request = ResponseGenerationRequest(
        customer_message=payload.customer_message,
        customer_summary=summary,
        conversation_history=history,
        preferred_tone=payload.preferred_tone,
    )
    try:
        suggestions = _engine.suggest(request)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    if payload.customer_id:
        crud.record_suggestions(
            db,
            customer_id=payload.customer_id,
            original_message=payload.customer_message or "",
            suggestions=suggestions,
        )
        _log.info("Recorded %d suggestions for customer %s", len(suggestions), payload.customer_id)

    return ResponseSuggestionsOut(
        suggestions=[ResponseSuggestionOut.model_validate(s) for s in suggestions],
        request_info=SuggestionRequestInfo(
            customer_message=payload.customer_message or "",
            customer_id=payload.customer_id,
            preferred_tone=payload.preferred_tone,
            has_customer_context=bool(summary is not None or history),
        ),
    )


@router.post("/response-history/{suggestion_id}/use", response_model=ResponseHistoryItem)
def mark_suggestion_used(suggestion_id: str, db: Session = Depends(get_session)):
    record = crud.mark_suggestion_used(db, suggestion_id=suggestion_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Suggestion not found")
    return _history_item(record)


@router.get("/{customer_id}/response-history", response_model=ResponseHistoryOut)
def get_response_history(
    customer_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    db: Session = Depends(get_session),
):
    effective_limit = limit or settings.response_history_default_limit
    records = crud.list_suggestion_records(db, customer_id=customer_id, limit=effective_limit)
    return ResponseHistoryOut(
        history=[_history_item(r) for r in records],
        total=crud.count_suggestion_records(db, customer_id=customer_id),
        limit=effective_limit,
    )


@router.get("/{customer_id}", response_model=list[MessageOut])
def get_conversation(customer_id: str, db: Session = Depends(get_session)):
    return [crud.to_message(row) for row in crud.list_messages(db, customer_id=customer_id)]

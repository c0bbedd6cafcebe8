from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from mikan_assist.services.domain import Category, Sender, Sentiment, Tone


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=64)


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    total_orders: int = 0
    created_at: datetime
    updated_at: datetime


class MessageIn(BaseModel):
    # Everything except content may be omitted; the router fills defaults.
    id: Optional[str] = Field(None, max_length=64)
    content: Optional[str] = None
    type: Optional[Category] = None
    timestamp: Optional[datetime] = None
    sender: Optional[Sender] = None


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: Optional[str] = None
    type: Category
    timestamp: datetime
    sender: Sender


class CustomerSummaryIn(BaseModel):
    id: str
    customer_id: str
    key_topics: list[str] = Field(default_factory=list)
    sentiment: Sentiment = "neutral"
    purchase_history: list[str] = Field(default_factory=list)
    preferences: list[str] = Field(default_factory=list)
    last_updated: datetime


class CustomerSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    key_topics: list[str]
    sentiment: Sentiment
    purchase_history: list[str]
    preferences: list[str]
    last_updated: datetime


class SummaryGenerateRequest(BaseModel):
    customer_id: str = Field(min_length=1, max_length=64)
    messages: list[MessageIn] = Field(default_factory=list)


class SummaryUpdateRequest(BaseModel):
    existing_summary: Optional[CustomerSummaryIn] = None
    new_message: MessageIn


class ConversationAnalyzeRequest(BaseModel):
    messages: list[MessageIn]
    customer_id: Optional[str] = Field(None, min_length=1, max_length=64)


class ConversationInsights(BaseModel):
    dominant_sentiment: Sentiment
    key_topics: list[str]
    preferences: list[str]
    purchase_history: list[str]


class ConversationAnalysisOut(BaseModel):
    message_count: int
    customer_messages: int
    farmer_messages: int
    summary: CustomerSummaryOut
    insights: ConversationInsights


class ResponseSuggestionRequest(BaseModel):
    customer_message: Optional[str] = None
    customer_id: Optional[str] = Field(None, min_length=1, max_length=64)
    preferred_tone: Optional[Tone] = None


class ResponseSuggestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    tone: Tone
    confidence: float
    reasoning: str


class SuggestionRequestInfo(BaseModel):
    customer_message: str
    customer_id: Optional[str] = None
    preferred_tone: Optional[Tone] = None
    has_customer_context: bool = False


class ResponseSuggestionsOut(BaseModel):
    suggestions: list[ResponseSuggestionOut]
    request_info: SuggestionRequestInfo


class ResponseHistoryItem(BaseModel):
    id: str
    customer_id: str
    original_message: str
    suggested_response: str
    tone: Tone
    confidence: float
    was_used: bool
    created_at: datetime
    used_at: Optional[datetime] = None


class ResponseHistoryOut(BaseModel):
    history: list[ResponseHistoryItem]
    total: int
    limit: int

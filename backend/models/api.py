"""Request and response schemas for the HTTP API."""
from typing import List, Optional
from pydantic import BaseModel


class TurnRequest(BaseModel):
    """Chat turn request. Fields are optional so missing values return a 400, not a 422."""
    prompt: Optional[str] = None
    user: Optional[str] = None


class TurnResponse(BaseModel):
    reply: str


class FinalizeRequest(BaseModel):
    user: Optional[str] = None


class FinalizeResponse(BaseModel):
    message: str


class HistoryEntry(BaseModel):
    role: str
    content: str


class HistoryResponse(BaseModel):
    chatHistory: List[HistoryEntry]


class ErrorResponse(BaseModel):
    error: str

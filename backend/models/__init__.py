"""Data models for the job-intake chat backend."""
from .conversation import ConversationTurn, Interaction, HistoryMode, SYSTEM, USER, ASSISTANT
from .record import StructuredRecord, JOB_RECORD_FIELDS
from .api import (
    TurnRequest,
    TurnResponse,
    FinalizeRequest,
    FinalizeResponse,
    HistoryEntry,
    HistoryResponse,
    ErrorResponse,
)

__all__ = [
    "ConversationTurn",
    "Interaction",
    "HistoryMode",
    "SYSTEM",
    "USER",
    "ASSISTANT",
    "StructuredRecord",
    "JOB_RECORD_FIELDS",
    "TurnRequest",
    "TurnResponse",
    "FinalizeRequest",
    "FinalizeResponse",
    "HistoryEntry",
    "HistoryResponse",
    "ErrorResponse",
]

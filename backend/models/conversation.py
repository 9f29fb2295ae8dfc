"""Conversation data models."""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"
ROLES = (SYSTEM, USER, ASSISTANT)


@dataclass(frozen=True)
class ConversationTurn:
    """A single role-tagged message in a conversation."""
    role: str
    content: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Unknown role {self.role!r}, expected one of {ROLES}")

    def to_message(self) -> Dict[str, str]:
        """Return the turn in the chat-completions message format."""
        return {"role": self.role, "content": self.content}


@dataclass
class Interaction:
    """One stored prompt/reply pair for a user."""
    prompt: Optional[str]
    reply: Optional[str]
    timestamp: Optional[datetime] = None

    def to_turns(self) -> List[ConversationTurn]:
        """
        Expand the interaction into conversation turns.

        A missing side of the pair is omitted rather than inserted empty.

        Returns:
            User turn (if a prompt was recorded) followed by assistant turn
            (if a reply was recorded)
        """
        turns = []
        if self.prompt:
            turns.append(ConversationTurn(USER, self.prompt))
        if self.reply:
            turns.append(ConversationTurn(ASSISTANT, self.reply))
        return turns


@dataclass(frozen=True)
class HistoryMode:
    """How much history to read: the N most recent turns, or all of it."""
    limit: Optional[int] = None

    @classmethod
    def bounded(cls, limit: int) -> "HistoryMode":
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        return cls(limit=limit)

    @classmethod
    def unbounded(cls) -> "HistoryMode":
        return cls(limit=None)

    @property
    def is_bounded(self) -> bool:
        return self.limit is not None

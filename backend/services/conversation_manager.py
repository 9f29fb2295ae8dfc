"""Conversation history storage backed by Supabase."""
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional
from supabase import create_client, Client

from config import SUPABASE_URL, SUPABASE_KEY, HISTORY_TABLE, HISTORY_CEILING
from errors import PersistenceError
from models.conversation import ConversationTurn, Interaction, HistoryMode

logger = logging.getLogger(__name__)

_FRACTION = re.compile(r"\.(\d+)")


class ConversationManager:
    """
    Reads and appends per-user conversation history.

    Each row of the history table is one interaction (optional prompt,
    optional reply) with a server-assigned ``created_at`` used for ordering.
    """

    def __init__(
        self,
        client: Optional[Client] = None,
        table: str = HISTORY_TABLE,
        max_history: int = HISTORY_CEILING
    ):
        """
        Initialize the conversation manager.

        Args:
            client: Supabase client (built from SUPABASE_URL/SUPABASE_KEY when omitted)
            table: Name of the history table
            max_history: Ceiling on turns returned by an unbounded fetch
        """
        if client is None:
            if not SUPABASE_URL or not SUPABASE_KEY:
                raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set in environment variables")
            client = create_client(SUPABASE_URL, SUPABASE_KEY)

        self.client: Client = client
        self.table = table
        self.max_history = max_history
        logger.info(f"ConversationManager initialized with Supabase table '{table}'")

    def fetch_turns(self, user_id: str, mode: HistoryMode) -> List[ConversationTurn]:
        """
        Get the conversation history for a user, oldest turn first.

        Store failures are logged and produce an empty history, so the
        conversation continues as a fresh start.

        Args:
            user_id: Opaque user identifier
            mode: Bounded (N most recent turns) or unbounded

        Returns:
            Ordered list of ConversationTurn
        """
        try:
            if mode.is_bounded:
                # Each interaction yields at most two turns, so N rows always cover N turns
                interactions = self.get_interactions(user_id, limit=mode.limit, newest_first=True)
                interactions.reverse()
                cap = mode.limit
            else:
                interactions = self.get_interactions(user_id, limit=self.max_history)
                cap = self.max_history
        except PersistenceError as e:
            logger.error(f"History unavailable for user {user_id}, starting fresh: {e}")
            return []

        turns: List[ConversationTurn] = []
        for interaction in interactions:
            turns.extend(interaction.to_turns())

        if mode.is_bounded:
            turns = turns[-cap:]
        else:
            turns = turns[:cap]

        logger.debug(f"Fetched {len(turns)} turns for user {user_id}", extra={"user_id": user_id, "turns": len(turns)})
        return turns

    def get_interactions(
        self,
        user_id: str,
        limit: Optional[int] = None,
        newest_first: bool = False
    ) -> List[Interaction]:
        """
        Retrieve stored interactions for a user.

        Args:
            user_id: Opaque user identifier
            limit: Optional maximum number of rows
            newest_first: Order by created_at (then id) descending instead of ascending

        Returns:
            List of Interaction in the requested order

        Raises:
            PersistenceError: If the store cannot be read
        """
        try:
            query = (
                self.client.table(self.table)
                .select("prompt, reply, created_at")
                .eq("user_id", user_id)
                .order("created_at", desc=newest_first)
                .order("id", desc=newest_first)
            )
            if limit:
                query = query.limit(limit)
            result = query.execute()
            return [self._to_interaction(row) for row in (result.data or [])]
        except Exception as e:
            raise PersistenceError(f"Error retrieving history for user {user_id}: {e}") from e

    def append_interaction(self, user_id: str, prompt: Optional[str], reply: Optional[str]) -> None:
        """
        Append one prompt/reply pair to a user's history.

        Args:
            user_id: Opaque user identifier
            prompt: User prompt (omitted from the row when empty)
            reply: Assistant reply (omitted from the row when empty)

        Raises:
            PersistenceError: If the row could not be written
        """
        row: Dict[str, Any] = {"user_id": user_id}
        if prompt:
            row["prompt"] = prompt
        if reply:
            row["reply"] = reply

        try:
            self.client.table(self.table).insert(row).execute()
        except Exception as e:
            raise PersistenceError(f"Error saving interaction for user {user_id}: {e}") from e

        logger.info(f"Added interaction for user {user_id}", extra={"user_id": user_id})

    def _to_interaction(self, row: Dict[str, Any]) -> Interaction:
        for column in ("prompt", "reply"):
            if row.get(column) is not None and not isinstance(row[column], str):
                raise ValueError(f"Column {column!r} holds {type(row[column]).__name__}, expected text")
        created_at = row.get("created_at")
        return Interaction(
            prompt=row.get("prompt"),
            reply=row.get("reply"),
            timestamp=self._parse_timestamp(created_at) if created_at else None
        )

    def _parse_timestamp(self, timestamp_str: str) -> Optional[datetime]:
        """
        Parse a Supabase timestamp.

        Supabase returns a variable number of fractional-second digits, which
        ``fromisoformat`` rejects on older interpreters, so the fraction is
        normalized to six digits first.
        """
        normalized = timestamp_str.replace("Z", "+00:00")
        normalized = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), normalized, count=1)
        try:
            return datetime.fromisoformat(normalized)
        except ValueError:
            logger.warning(f"Unparseable timestamp from store: {timestamp_str!r}")
            return None

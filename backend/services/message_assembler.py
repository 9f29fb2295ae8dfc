"""Builds the ordered message list sent to the chat model."""
import logging
from typing import List, Sequence

from models.conversation import ConversationTurn, SYSTEM, USER
from models.record import JOB_RECORD_FIELDS

logger = logging.getLogger(__name__)

SUMMARY_INSTRUCTION = (
    "The conversation is over. Summarize the job described in this conversation "
    "as a single JSON object with exactly these keys: "
    + ", ".join(f'"{field}"' for field in JOB_RECORD_FIELDS)
    + ". Every value must be a string. Use an empty string for any field you "
    "cannot determine from the conversation. Respond with ONLY the JSON object "
    "and no additional explanation, commentary or formatting."
)


class MessageAssembler:
    """Composes system spec, history and new input into one message list."""

    def assemble(
        self,
        system_text: str,
        history: Sequence[ConversationTurn],
        new_input: str
    ) -> List[ConversationTurn]:
        """
        Build ``[system] + history + [user(new_input)]``.

        System turns found in ``history`` are dropped so the list always
        starts with exactly one system turn.

        Args:
            system_text: System specification text
            history: Prior turns, oldest first
            new_input: Content of the final user turn

        Returns:
            Ordered list of ConversationTurn
        """
        messages = [ConversationTurn(SYSTEM, system_text)]
        dropped = 0
        for turn in history:
            if turn.role == SYSTEM:
                dropped += 1
                continue
            messages.append(turn)
        if dropped:
            logger.warning(f"Dropped {dropped} system turn(s) found in history")

        messages.append(ConversationTurn(USER, new_input))
        return messages

    def assemble_summary_request(
        self,
        system_text: str,
        history: Sequence[ConversationTurn]
    ) -> List[ConversationTurn]:
        """Build the finalize request: history followed by the JSON-only summary instruction."""
        return self.assemble(system_text, history, SUMMARY_INSTRUCTION)

"""
Conversation orchestrator.

Ties the spec loader, history store, message assembler, LLM client,
structured extractor and export sink into the two request flows:

- chat turn: reply to a prompt using the most recent history, then save the pair
- finalize: summarize the whole history as JSON, extract a job record, export it

Collaborators are injected so the flows can run without network access.
"""
import logging
from typing import List, Optional

from config import HISTORY_LIMIT, MAX_TOKENS, SUMMARY_MAX_TOKENS
from errors import ValidationError, PersistenceError
from models.conversation import ConversationTurn, HistoryMode
from services.conversation_manager import ConversationManager
from services.export_sink import ExportSink, build_export_row
from services.llm_client import LLMClient
from services.message_assembler import MessageAssembler
from services.spec_loader import SpecificationLoader
from services.structured_extractor import StructuredExtractor

logger = logging.getLogger(__name__)

NO_RESPONSE_REPLY = "Sorry, no response generated."
FINALIZED_MESSAGE = "Conversation finalized and exported."


class ConversationOrchestrator:
    """Runs the chat-turn and finalize flows for one request at a time."""

    def __init__(
        self,
        spec_loader: SpecificationLoader,
        history_store: ConversationManager,
        llm_client: LLMClient,
        export_sink: ExportSink,
        assembler: Optional[MessageAssembler] = None,
        extractor: Optional[StructuredExtractor] = None,
        history_limit: int = HISTORY_LIMIT
    ):
        self.spec_loader = spec_loader
        self.history_store = history_store
        self.llm_client = llm_client
        self.export_sink = export_sink
        self.assembler = assembler or MessageAssembler()
        self.extractor = extractor or StructuredExtractor()
        self.history_mode = HistoryMode.bounded(history_limit)

    def handle_turn(self, prompt: Optional[str], user_id: Optional[str]) -> str:
        """
        Reply to one user prompt.

        Args:
            prompt: New user input
            user_id: Opaque user identifier

        Returns:
            Reply text (a fixed apology when the model returned nothing)

        Raises:
            ValidationError: If prompt or user_id is missing; no I/O is attempted
            ProviderError: If the completion call fails
        """
        if not _present(prompt) or not _present(user_id):
            raise ValidationError("Missing prompt or user")

        system_text = self.spec_loader.load()
        history = self.history_store.fetch_turns(user_id, self.history_mode)
        messages = self.assembler.assemble(system_text, history, prompt)

        logger.info(
            f"Chat turn for user {user_id} with {len(history)} history turns",
            extra={"user_id": user_id, "flow": "turn", "turns": len(history)}
        )

        response = self.llm_client.complete(messages, max_tokens=MAX_TOKENS)
        reply = response.text if response.text and response.text.strip() else NO_RESPONSE_REPLY

        # Saving is best effort: the reply is returned even if the write fails
        try:
            self.history_store.append_interaction(user_id, prompt, reply)
        except PersistenceError as e:
            logger.error(f"Failed to save turn for user {user_id}: {e}", extra={"user_id": user_id, "flow": "turn"})

        return reply

    def finalize(self, user_id: Optional[str]) -> str:
        """
        Close a conversation and export its structured job record.

        Args:
            user_id: Opaque user identifier

        Returns:
            Confirmation message

        Raises:
            ValidationError: If user_id is missing; no I/O is attempted
            ProviderError: If the completion call fails
            ExtractionError: If the reply holds no parseable JSON object (including an empty reply)
        """
        if not _present(user_id):
            raise ValidationError("Missing user")

        system_text = self.spec_loader.load()
        history = self.history_store.fetch_turns(user_id, HistoryMode.unbounded())
        messages = self.assembler.assemble_summary_request(system_text, history)

        logger.info(
            f"Finalizing conversation for user {user_id} ({len(history)} turns)",
            extra={"user_id": user_id, "flow": "finalize", "turns": len(history)}
        )

        response = self.llm_client.complete(messages, max_tokens=SUMMARY_MAX_TOKENS, temperature=0.0)
        record = self.extractor.extract(response.text)

        row = build_export_row(record, user_id)
        try:
            self.export_sink.append_record(row)
        except PersistenceError as e:
            logger.error(f"Failed to export record for user {user_id}: {e}", extra={"user_id": user_id, "flow": "finalize"})

        return FINALIZED_MESSAGE

    def get_history(self, user_id: Optional[str]) -> List[ConversationTurn]:
        """
        Return the stored conversation for resuming it in a client.

        Raises:
            ValidationError: If user_id is missing
        """
        if not _present(user_id):
            raise ValidationError("Missing user")
        return self.history_store.fetch_turns(user_id, HistoryMode.unbounded())


def _present(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(value.strip())

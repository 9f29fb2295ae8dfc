"""Unit tests for MessageAssembler."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

import pytest
from models.conversation import ConversationTurn, SYSTEM, USER, ASSISTANT
from models.record import JOB_RECORD_FIELDS
from services.message_assembler import MessageAssembler, SUMMARY_INSTRUCTION


def _history(pairs):
    turns = []
    for i in range(pairs):
        turns.append(ConversationTurn(USER, f"Question {i}"))
        turns.append(ConversationTurn(ASSISTANT, f"Answer {i}"))
    return turns


class TestMessageAssembler:
    """Test suite for MessageAssembler."""

    @pytest.fixture
    def assembler(self):
        return MessageAssembler()

    @pytest.mark.parametrize("pairs", [0, 1, 5, 500])
    def test_exactly_one_system_turn_first(self, assembler, pairs):
        """Test that the system turn leads regardless of history length."""
        messages = assembler.assemble("Be helpful.", _history(pairs), "Hello")

        assert messages[0] == ConversationTurn(SYSTEM, "Be helpful.")
        assert sum(1 for m in messages if m.role == SYSTEM) == 1

    def test_order_is_system_history_input(self, assembler):
        """Test that history keeps its order between system and new input."""
        history = _history(2)

        messages = assembler.assemble("spec", history, "Next question")

        assert messages[1:-1] == history
        assert messages[-1] == ConversationTurn(USER, "Next question")
        assert len(messages) == len(history) + 2

    def test_system_turns_in_history_are_dropped(self, assembler):
        """Test that a stray system turn in history does not duplicate the system slot."""
        history = [ConversationTurn(SYSTEM, "old spec")] + _history(1)

        messages = assembler.assemble("new spec", history, "Hi")

        assert [m.role for m in messages] == [SYSTEM, USER, ASSISTANT, USER]
        assert messages[0].content == "new spec"

    def test_summary_request_appends_instruction(self, assembler):
        """Test that finalize replaces user input with the JSON-only instruction."""
        messages = assembler.assemble_summary_request("spec", _history(3))

        assert messages[0].role == SYSTEM
        assert messages[-1] == ConversationTurn(USER, SUMMARY_INSTRUCTION)
        assert len(messages) == 8

    def test_summary_instruction_names_every_field(self):
        """Test that the instruction lists the schema and forbids extra text."""
        for field in JOB_RECORD_FIELDS:
            assert f'"{field}"' in SUMMARY_INSTRUCTION
        assert "ONLY the JSON object" in SUMMARY_INSTRUCTION
        assert "empty string" in SUMMARY_INSTRUCTION

    def test_history_is_not_mutated(self, assembler):
        """Test that the caller's history list is left untouched."""
        history = _history(1)
        snapshot = list(history)

        assembler.assemble("spec", history, "Hi")

        assert history == snapshot

"""Tests for the wire-to-langchain message adapter."""

from __future__ import annotations

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from chat_relay.messages import adapt_messages, build_conversation
from chat_relay.schemas import Message


def _message(role: str, *texts: str) -> Message:
    return Message.model_validate({"role": role, "parts": [{"type": "text", "text": t} for t in texts]})


class TestAdaptMessages:
    """Tests for adapt_messages."""

    def test_system_parts_joined_with_space(self):
        """System text parts collapse into one string."""
        (adapted,) = adapt_messages([_message("system", "A", "B")])

        assert isinstance(adapted, SystemMessage)
        assert adapted.content == "A B"

    def test_user_parts_forwarded_unchanged(self):
        """User content is the original part array."""
        parts = [{"type": "text", "text": "first"}, {"type": "text", "text": "second"}]
        (adapted,) = adapt_messages([Message.model_validate({"role": "user", "parts": parts})])

        assert isinstance(adapted, HumanMessage)
        assert adapted.content == parts

    def test_assistant_becomes_ai_message(self):
        """Assistant turns are replayed as model output."""
        (adapted,) = adapt_messages([_message("assistant", "Hel", "lo")])

        assert isinstance(adapted, AIMessage)
        assert adapted.content == "Hello"

    def test_preserves_order(self):
        """Output order matches input order."""
        adapted = adapt_messages(
            [_message("user", "q1"), _message("assistant", "a1"), _message("system", "s"), _message("user", "q2")]
        )

        assert [type(m) for m in adapted] == [HumanMessage, AIMessage, SystemMessage, HumanMessage]

    def test_empty_system_parts(self):
        """A system message without parts adapts to an empty string."""
        (adapted,) = adapt_messages([_message("system")])

        assert adapted.content == ""


class TestBuildConversation:
    """Tests for build_conversation."""

    def test_prepends_system_instruction(self):
        """The fixed instruction comes first."""
        conversation = build_conversation("You are a helpful assistant", [_message("user", "hi")])

        assert isinstance(conversation[0], SystemMessage)
        assert conversation[0].content == "You are a helpful assistant"
        assert len(conversation) == 2

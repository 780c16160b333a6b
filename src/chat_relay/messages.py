"""Convert validated wire messages into langchain chat messages."""

from __future__ import annotations

from typing import Any, Iterable

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from .schemas import ContentPart, Message


def system_text(parts: Iterable[ContentPart]) -> str:
    return " ".join(part.text for part in parts)


def user_content(parts: Iterable[ContentPart]) -> list[dict[str, Any]]:
    """Forward the part array as structured multi-part content."""
    return [part.model_dump() for part in parts]


def assistant_text(parts: Iterable[ContentPart]) -> str:
    return "".join(part.text for part in parts)


def adapt_message(message: Message) -> BaseMessage:
    if message.role == "system":
        return SystemMessage(content=system_text(message.parts))
    if message.role == "user":
        return HumanMessage(content=user_content(message.parts))
    if message.role == "assistant":
        return AIMessage(content=assistant_text(message.parts))
    raise ValueError(f"Unsupported message role: {message.role}")


def adapt_messages(messages: Iterable[Message]) -> list[BaseMessage]:
    """Adapt every message, preserving order."""
    return [adapt_message(message) for message in messages]


def build_conversation(system_prompt: str, messages: Iterable[Message]) -> list[BaseMessage]:
    """Prepend the fixed system instruction to the adapted caller messages."""
    return [SystemMessage(content=system_prompt), *adapt_messages(messages)]

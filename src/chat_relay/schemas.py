"""Request payload schema for chat completions."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from .errors import PayloadValidationError

Role = Literal["system", "user", "assistant"]


class TextPart(BaseModel):
    """Plain text content part."""

    type: Literal["text"]
    text: str


# New part kinds go here as an ``Annotated[Union[...], Field(discriminator="type")]``.
ContentPart = TextPart


class Message(BaseModel):
    role: Role
    parts: list[ContentPart]


class ModelSelector(BaseModel):
    uri: str
    params: dict[str, Any]


class ChatPayload(BaseModel):
    """Body of a chat completion request."""

    messages: list[Message]
    model: ModelSelector


class ErrorDetail(BaseModel):
    path: str
    message: str
    type: str = Field(default="value_error")


def _format_loc(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "body"


def validation_details(exc: ValidationError) -> list[dict[str, Any]]:
    """Flatten a pydantic ``ValidationError`` into field path + reason entries."""
    return [
        ErrorDetail(path=_format_loc(tuple(err["loc"])), message=err["msg"], type=err["type"]).model_dump()
        for err in exc.errors()
    ]


def parse_payload(raw: Any) -> ChatPayload:
    """Validate a decoded JSON value, raising ``PayloadValidationError`` on failure."""
    try:
        return ChatPayload.model_validate(raw)
    except ValidationError as exc:
        raise PayloadValidationError("Invalid request body", details=validation_details(exc)) from exc

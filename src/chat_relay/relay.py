"""Relay a provider token stream to the caller chunk by chunk.

The relay moves through ``INIT -> STREAMING -> DONE``; ``ERROR`` can be
entered from any state. ``start()`` opens the provider stream and waits for
the first non-empty chunk while the response status is still unsent, so
provider failures up to that point become a normal JSON error response.
Once ``body()`` is handed to the HTTP layer the status line and headers are
committed: a failure after that is logged and the body simply ends, without
any trailing error text.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, AsyncIterator, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage

from .errors import ProviderError, StreamError

logger = logging.getLogger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}
STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"


class RelayState(str, Enum):
    INIT = "init"
    STREAMING = "streaming"
    DONE = "done"
    ERROR = "error"


def chunk_text(chunk: Any) -> str:
    """Text carried by one streamed message chunk."""
    content = getattr(chunk, "content", chunk)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        pieces = []
        for part in content:
            if isinstance(part, str):
                pieces.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                pieces.append(part.get("text", ""))
        return "".join(pieces)
    return ""


class CompletionRelay:
    """Pump one provider stream into one HTTP response body."""

    def __init__(
        self,
        model: BaseChatModel,
        conversation: Sequence[BaseMessage],
        idle_timeout: float | None = None,
    ):
        self._model = model
        self._conversation = list(conversation)
        self._idle_timeout = idle_timeout
        self._stream: AsyncIterator[Any] | None = None
        self._pending: bytes | None = None
        self.state = RelayState.INIT
        self.chunks_sent = 0

    async def start(self) -> None:
        """Open the provider stream; raises ``ProviderError`` on failure."""
        try:
            self._stream = self._model.astream(self._conversation).__aiter__()
            self._pending = await self._next_chunk()
        except Exception as exc:
            self.state = RelayState.ERROR
            logger.exception("Failed to open provider stream")
            await self.aclose()
            raise ProviderError("Failed to process request", details=str(exc) or type(exc).__name__) from exc

    async def body(self) -> AsyncIterator[bytes]:
        """Yield provider chunks as UTF-8 bytes, in order, without framing."""
        if self.state is not RelayState.INIT:
            raise RuntimeError(f"Relay cannot stream from state {self.state.value}")
        self.state = RelayState.STREAMING
        try:
            chunk = self._pending
            self._pending = None
            while chunk is not None:
                yield chunk
                self.chunks_sent += 1
                chunk = await self._read()
            self.state = RelayState.DONE
            logger.info(f"Stream completed after {self.chunks_sent} chunks")
        except StreamError as exc:
            self.state = RelayState.ERROR
            logger.error(f"Stream error after {self.chunks_sent} chunks: {exc.details}")
        except (asyncio.CancelledError, GeneratorExit):
            self.state = RelayState.ERROR
            logger.warning(f"Client went away after {self.chunks_sent} chunks")
            raise
        finally:
            await self.aclose()

    async def _read(self) -> bytes | None:
        try:
            return await self._next_chunk()
        except Exception as exc:
            raise StreamError("Stream error", details=str(exc) or type(exc).__name__) from exc

    async def _next_chunk(self) -> bytes | None:
        """Next non-empty chunk, or None once the provider stream is exhausted."""
        assert self._stream is not None
        while True:
            try:
                chunk = await asyncio.wait_for(self._stream.__anext__(), timeout=self._idle_timeout)
            except StopAsyncIteration:
                return None
            text = chunk_text(chunk)
            if text:
                return text.encode("utf-8")

    async def aclose(self) -> None:
        """Close the provider stream; a relay closed before streaming ends in ERROR."""
        if self.state is RelayState.INIT:
            self.state = RelayState.ERROR
            self._pending = None
        stream, self._stream = self._stream, None
        aclose = getattr(stream, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception as exc:
            logger.warning(f"Error closing provider stream: {exc}")

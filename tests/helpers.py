"""Shared test helpers (fake chat models, mocked identity service)."""

from __future__ import annotations

import asyncio
from typing import Callable

import httpx
from langchain_core.messages import AIMessageChunk

_RealAsyncClient = httpx.AsyncClient


class FakeStreamingModel:
    """Chat model stand-in whose ``astream`` yields fixed chunks.

    ``error`` is raised after the chunks are exhausted; ``stall`` sleeps that
    many seconds before ending instead.
    """

    def __init__(
        self,
        chunks: list[str] | None = None,
        error: Exception | None = None,
        stall: float | None = None,
    ):
        self.chunks = list(chunks or [])
        self.error = error
        self.stall = stall
        self.calls: list[list] = []
        self.closed = False

    async def astream(self, messages):
        self.calls.append(list(messages))
        try:
            for chunk in self.chunks:
                yield AIMessageChunk(content=chunk)
            if self.stall is not None:
                await asyncio.sleep(self.stall)
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


def fake_factory(model) -> Callable:
    """Chat model factory returning ``model`` and recording its arguments."""

    def factory(settings, deployment, params=None):
        factory.calls.append((deployment, params))
        return model

    factory.calls = []
    return factory


def failing_factory(message: str = "Missing Azure AI resource name or API key in environment variables"):
    def factory(settings, deployment, params=None):
        raise RuntimeError(message)

    return factory


def mock_async_client(handler: Callable[[httpx.Request], httpx.Response]):
    """Replacement for ``httpx.AsyncClient`` routing every request to ``handler``."""

    def factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return _RealAsyncClient(*args, **kwargs)

    return factory

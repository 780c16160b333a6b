"""HTTP surface of the chat relay."""

from .app import create_app

__all__ = ["create_app"]

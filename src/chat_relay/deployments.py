"""Deployment allow-list and resolution of ``model.uri``."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .errors import UnknownDeploymentError

# The only place deployment names are declared. The active allow-list is
# configurable (``DEPLOYMENTS``) and falls back to this tuple.
DEFAULT_DEPLOYMENTS: tuple[str, ...] = (
    "gpt-4.1",
    "gpt-4.1-mini",
    "gpt-4.1-nano",
    "gpt-4o",
    "gpt-4o-mini",
    "o3-mini",
)


@dataclass(frozen=True)
class Deployment:
    """A deployment name that passed the allow-list check."""

    name: str

    def __str__(self) -> str:
        return self.name


def is_deployment(uri: object, allowed: Iterable[str]) -> bool:
    return isinstance(uri, str) and uri in set(allowed)


def resolve_deployment(uri: object, allowed: Iterable[str]) -> Deployment:
    """Return a typed handle for ``uri`` or raise ``UnknownDeploymentError``."""
    if not is_deployment(uri, allowed):
        raise UnknownDeploymentError("Invalid deployment in model.uri")
    return Deployment(name=uri)  # type: ignore[arg-type]

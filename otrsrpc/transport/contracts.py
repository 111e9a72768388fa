"""Runtime contract for RPC transports."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from .protocol import ConnectionParams


@runtime_checkable
class Transport(Protocol):
    last_request: str | None
    last_response: str | None

    def call(self, method: str, params: Sequence[Any]) -> Any: ...
    def close(self) -> None: ...


TransportFactory = Callable[[ConnectionParams], Transport]

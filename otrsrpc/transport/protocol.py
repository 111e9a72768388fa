"""Shared RPC models passed between the connection manager and transports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class ConnectionParams:
    """Snapshot of everything a transport needs to reach the server."""

    target: str
    namespace: str
    login: str
    password: str = field(repr=False)
    trace: bool = False
    timeout_seconds: float = 30.0
    style: str = "rpc"
    use: str = "encoded"


@dataclass(slots=True)
class SoapFault:
    """Normalized SOAP fault payload."""

    code: str
    string: str
    detail: Any = None


@dataclass(slots=True)
class SoapResponse:
    """Decoded SOAP response body."""

    parts: list[Any] = field(default_factory=list)
    fault: SoapFault | None = None

    @property
    def result(self) -> Any:
        """One return part yields its value; several yield the list of them."""
        if not self.parts:
            return None
        if len(self.parts) == 1:
            return self.parts[0]
        return list(self.parts)

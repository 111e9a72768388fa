"""SOAP-over-HTTP transport for the OTRS ``rpc.pl`` endpoint."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx
from loguru import logger

from otrsrpc.errors import TransportError, sanitize_error_message

from .protocol import ConnectionParams
from .serialization import decode_envelope, encode_envelope


class SoapTransport:
    """SOAP 1.1 RPC/encoded calls over one persistent HTTP client."""

    def __init__(self, params: ConnectionParams, client: httpx.Client | None = None):
        self.params = params
        auth = (params.login, params.password) if params.login else None
        self._client = client or httpx.Client(timeout=params.timeout_seconds, auth=auth)
        self.last_request: str | None = None
        self.last_response: str | None = None

    def call(self, method: str, params: Sequence[Any]) -> Any:
        """Invoke ``method`` with positional ``params`` and return the decoded result."""
        try:
            body = encode_envelope(method, self.params.namespace, params)
        except ValueError as exc:
            raise TransportError(
                f"cannot encode {method} request: {exc}",
                code="TRANSPORT_BAD_REQUEST",
            ) from exc
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{self.params.namespace}#{method}"',
        }
        if self.params.trace:
            self.last_request = body
            logger.debug("SOAP request to {}: {}", self.params.target, self._redact(body))

        try:
            resp = self._client.post(self.params.target, content=body.encode("utf-8"), headers=headers)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"rpc timeout: {method} {self.params.target}",
                code="TRANSPORT_TIMEOUT",
                retryable=True,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"rpc network error: {method} {self.params.target}: {exc}",
                code="TRANSPORT_NETWORK_ERROR",
                retryable=True,
            ) from exc

        status_code = int(getattr(resp, "status_code", 0) or 0)
        text = str(getattr(resp, "text", "") or "")
        if self.params.trace:
            self.last_response = text
            logger.debug("SOAP response {} from {}: {}", status_code, self.params.target, self._redact(text))

        try:
            decoded = decode_envelope(resp.content)
        except ValueError as exc:
            if status_code >= 400:
                raise self._http_error(status_code, text) from exc
            raise TransportError(
                f"rpc bad response: {exc}",
                code="TRANSPORT_BAD_RESPONSE",
                status_code=status_code or None,
            ) from exc

        if decoded.fault is not None:
            fault = decoded.fault
            raise TransportError(
                f"SOAP fault {fault.code}: {fault.string}",
                code="TRANSPORT_FAULT",
                status_code=status_code or None,
                fault_code=fault.code,
                fault_string=fault.string,
            )
        if status_code >= 400:
            raise self._http_error(status_code, text)
        return decoded.result

    def close(self) -> None:
        self._client.close()

    def _redact(self, text: str) -> str:
        return sanitize_error_message(text, secrets=(self.params.password,))

    def _http_error(self, status_code: int, text: str) -> TransportError:
        snippet = self._redact(text.strip())[:200] or "request failed"
        return TransportError(
            f"rpc http error {status_code}: {snippet}",
            code="TRANSPORT_HTTP_ERROR",
            status_code=status_code,
            retryable=_is_retryable_status(status_code),
        )


def _is_retryable_status(status_code: int) -> bool:
    return status_code >= 500 or status_code in {408, 425, 429}

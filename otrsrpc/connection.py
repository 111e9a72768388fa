"""Credentials and the lazily built RPC connection."""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from otrsrpc.config.access import get_rpc_options
from otrsrpc.config.schema import DEFAULT_URI, RpcOptions
from otrsrpc.errors import ConfigurationError
from otrsrpc.transport import ConnectionParams, SoapTransport, Transport, TransportFactory

REQUIRED_FIELDS = ("location", "uri", "username", "password")


@dataclass(slots=True)
class Credentials:
    """Endpoint and login a connection is built from."""

    location: str = ""
    uri: str = DEFAULT_URI
    username: str = ""
    password: str = field(default="", repr=False)

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


class ConnectionManager:
    """Build the transport on first use and drop it whenever it goes stale.

    ``options`` pins the RPC suffix and trace flag for this manager; when
    omitted, the process-wide values are read at each connect.
    """

    def __init__(
        self,
        transport_factory: TransportFactory | None = None,
        options: RpcOptions | None = None,
    ):
        self._factory: TransportFactory = transport_factory or SoapTransport
        self._options = options
        self._transport: Transport | None = None
        self.connect_count = 0

    @property
    def connected(self) -> bool:
        return self._transport is not None

    @property
    def transport(self) -> Transport | None:
        return self._transport

    def options(self) -> RpcOptions:
        return self._options or get_rpc_options()

    def ensure_connection(self, credentials: Credentials) -> Transport:
        """Return the live transport, creating it from ``credentials`` if needed.

        Raises:
            ConfigurationError: one or more required credentials are empty.
        """
        if self._transport is not None:
            return self._transport
        missing = credentials.missing_fields()
        if missing:
            raise ConfigurationError(missing)
        options = self.options()
        params = ConnectionParams(
            target=credentials.location + options.rpc_suffix,
            namespace=credentials.uri,
            login=credentials.username,
            password=credentials.password,
            trace=options.trace,
            timeout_seconds=options.timeout_seconds,
        )
        self._transport = self._factory(params)
        self.connect_count += 1
        logger.debug("Connected to {} (namespace {}, trace={})", params.target, params.namespace, params.trace)
        return self._transport

    def invalidate(self) -> None:
        """Drop the live transport; the next ``ensure_connection`` rebuilds it."""
        transport = self._transport
        self._transport = None
        if transport is None:
            return
        try:
            transport.close()
        except Exception as exc:
            logger.warning("Closing RPC transport failed: {}", exc)

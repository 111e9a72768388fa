"""Generic client for the OTRS ``Dispatch`` RPC interface.

Every remote operation goes through one procedure::

    Dispatch(username, password, module, operation, key1, value1, key2, value2, ...)

and answers with the same interleaved shape, which is rebuilt into a dict.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

from otrsrpc.codec import flatten, positional_values, unflatten
from otrsrpc.config.schema import ClientSettings, RpcOptions
from otrsrpc.connection import REQUIRED_FIELDS, ConnectionManager, Credentials
from otrsrpc.errors import TransportError
from otrsrpc.transport import Transport, TransportFactory

DISPATCH_METHOD = "Dispatch"
MODULE_SUFFIX = "Object"


class OtrsClient:
    """Client bound to one remote module (``Ticket`` -> ``TicketObject``).

    Credentials are seeded once from ``OTRS_API_LOCATION``, ``OTRS_API_URI``,
    ``OTRS_API_USERNAME`` and ``OTRS_API_PASSWORD`` unless ``settings`` is
    given; explicit keyword arguments win over both. Changing any credential
    drops the connection, and the next call reconnects with the new values.

    Arguments stored with :meth:`set` or passed to :meth:`call` stay in the
    pending buffer across calls until :meth:`reset`, so a second operation
    sends the first one's arguments too. Pass ``auto_reset=True`` to clear
    the buffer after every dispatch instead.

    An instance holds mutable per-call state and must be used by one caller
    at a time.
    """

    default_module = ""

    def __init__(
        self,
        module: str = "",
        *,
        location: str | None = None,
        uri: str | None = None,
        username: str | None = None,
        password: str | None = None,
        settings: ClientSettings | None = None,
        transport_factory: TransportFactory | None = None,
        options: RpcOptions | None = None,
        auto_reset: bool = False,
    ):
        self._credentials = Credentials()
        self._connection = ConnectionManager(transport_factory, options)
        self._module = ""
        self._data: dict[str, Any] = {}
        self._last_request: str | None = None
        self._last_response: str | None = None
        self.auto_reset = auto_reset

        self.set_module(module or self.default_module)
        self._seed(settings if settings is not None else ClientSettings())
        explicit = {"location": location, "uri": uri, "username": username, "password": password}
        for name, value in explicit.items():
            if value:
                getattr(self, f"set_{name}")(value)

    def _seed(self, settings: ClientSettings) -> None:
        for name in REQUIRED_FIELDS:
            value = getattr(settings, name, "")
            if value:
                getattr(self, f"set_{name}")(value)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(module={self._module!r}, location={self.location!r}, "
            f"uri={self.uri!r}, username={self.username!r}, connected={self.connected})"
        )

    def __enter__(self) -> "OtrsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- credentials -------------------------------------------------------

    @property
    def location(self) -> str:
        return self._credentials.location

    @property
    def uri(self) -> str:
        return self._credentials.uri

    @property
    def username(self) -> str:
        return self._credentials.username

    @property
    def module(self) -> str:
        return self._module

    @property
    def connected(self) -> bool:
        return self._connection.connected

    @property
    def connection(self) -> ConnectionManager:
        return self._connection

    def set_location(self, location: str) -> "OtrsClient":
        self._credentials.location = location
        self._connection.invalidate()
        return self

    def set_username(self, username: str) -> "OtrsClient":
        self._credentials.username = username
        self._connection.invalidate()
        return self

    def set_password(self, password: str) -> "OtrsClient":
        self._credentials.password = password
        self._connection.invalidate()
        return self

    def set_uri(self, uri: str) -> "OtrsClient":
        self._credentials.uri = uri
        self._connection.invalidate()
        return self

    def set_module(self, module: str) -> "OtrsClient":
        """Bind the remote object; ``"Ticket"`` is stored as ``"TicketObject"``."""
        self._module = f"{module}{MODULE_SUFFIX}" if module else ""
        return self

    # -- pending arguments -------------------------------------------------

    @property
    def pending(self) -> dict[str, Any]:
        """Copy of the arguments queued for the next dispatch."""
        return dict(self._data)

    def set(self, key: str, value: Any) -> "OtrsClient":
        self._data[key] = value
        return self

    def reset(self) -> None:
        self._data = {}

    # -- dispatch ----------------------------------------------------------

    def call(self, operation: str, args: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Run any remote operation by name.

        ``args`` is merged into the pending buffer before dispatch and the
        first letter of ``operation`` is upper-cased (``ticketGet`` ->
        ``TicketGet``).
        """
        if not operation:
            raise ValueError("operation name must not be empty")
        if args is not None and not isinstance(args, Mapping):
            raise TypeError(f"args must be a mapping, got {type(args).__name__}")
        for key, value in (args or {}).items():
            self.set(key, value)
        return self.dispatch(operation[:1].upper() + operation[1:])

    def operation(self, name: str) -> Callable[..., dict[str, Any]]:
        """Return a callable bound to one operation name.

        The callable accepts an optional mapping and/or keyword arguments.
        """
        def invoke(args: Mapping[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
            merged = dict(args or {})
            merged.update(kwargs)
            return self.call(name, merged)

        invoke.__name__ = name
        invoke.__qualname__ = f"{type(self).__name__}.{name}"
        return invoke

    def dispatch(self, operation: str) -> dict[str, Any]:
        """Send the pending buffer as ``operation`` and rebuild the reply.

        Raises:
            ConfigurationError: credentials are incomplete; nothing is sent.
            TransportError: the transport failed; the connection is dropped.
        """
        transport = self._connection.ensure_connection(self._credentials)
        payload = [
            self._credentials.username,
            self._credentials.password,
            self._module,
            operation,
            *flatten(self._data),
        ]
        logger.debug("Dispatch {}::{} with {} argument(s)", self._module or "-", operation, len(self._data))
        try:
            raw = transport.call(DISPATCH_METHOD, payload)
        except TransportError as exc:
            self._connection.invalidate()
            logger.debug("Dispatch {} failed: {}", operation, exc)
            raise
        except Exception as exc:
            self._connection.invalidate()
            raise TransportError(f"{DISPATCH_METHOD} {operation} failed: {exc}") from exc
        finally:
            self._remember_exchange(transport)
            if self.auto_reset:
                self.reset()
        return unflatten(positional_values(raw))

    def _remember_exchange(self, transport: Transport) -> None:
        self._last_request = getattr(transport, "last_request", None)
        self._last_response = getattr(transport, "last_response", None)

    def last_request(self) -> str | None:
        """Raw request text of the latest exchange, when tracing was on."""
        return self._last_request

    def last_response(self) -> str | None:
        """Raw response text of the latest exchange, when tracing was on."""
        return self._last_response

    def close(self) -> None:
        self._connection.invalidate()

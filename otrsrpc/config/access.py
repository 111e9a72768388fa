"""Process-wide RPC options facade.

The RPC path suffix and the trace flag are shared by every connection
created in this process. Reads and writes are serialized by one lock; the
environment (``OTRS_API_RPC``, ``OTRS_API_TRACE``,
``OTRS_API_TIMEOUT_SECONDS``) seeds the values on first access.
"""

from __future__ import annotations

import threading

from otrsrpc.config.schema import ProcessSettings, RpcOptions

_lock = threading.RLock()
_options: RpcOptions | None = None


def get_rpc_options() -> RpcOptions:
    """Return the current process-wide options snapshot."""
    global _options
    with _lock:
        if _options is None:
            _options = RpcOptions.from_settings(ProcessSettings())
        return _options


def _update(**changes: object) -> RpcOptions:
    global _options
    with _lock:
        _options = get_rpc_options().model_copy(update=changes)
        return _options


def get_rpc_suffix() -> str:
    return get_rpc_options().rpc_suffix


def set_rpc_suffix(name: str) -> None:
    """Change the path appended to ``location`` for new connections."""
    _update(rpc_suffix=name)


def get_trace() -> bool:
    return get_rpc_options().trace


def set_trace(enabled: bool) -> None:
    """Enable or disable raw request/response capture for new connections."""
    _update(trace=bool(enabled))


def set_timeout_seconds(seconds: float) -> None:
    _update(timeout_seconds=float(seconds))


def reset_rpc_options() -> None:
    """Forget overrides; the next read seeds from the environment again."""
    global _options
    with _lock:
        _options = None

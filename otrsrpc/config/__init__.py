"""Configuration module for otrsrpc."""

from otrsrpc.config.access import (
    get_rpc_options,
    get_rpc_suffix,
    get_trace,
    reset_rpc_options,
    set_rpc_suffix,
    set_timeout_seconds,
    set_trace,
)
from otrsrpc.config.schema import ClientSettings, ProcessSettings, RpcOptions

__all__ = [
    "ClientSettings",
    "ProcessSettings",
    "RpcOptions",
    "get_rpc_options",
    "get_rpc_suffix",
    "get_trace",
    "reset_rpc_options",
    "set_rpc_suffix",
    "set_timeout_seconds",
    "set_trace",
]

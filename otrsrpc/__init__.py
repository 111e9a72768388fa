"""
otrsrpc - generic client for the OTRS Dispatch RPC interface.
"""

from loguru import logger

__version__ = "0.1.0"

from otrsrpc.client import OtrsClient
from otrsrpc.codec import flatten, unflatten
from otrsrpc.config import get_rpc_suffix, get_trace, set_rpc_suffix, set_trace
from otrsrpc.errors import ConfigurationError, ErrorCategory, OtrsRpcError, TransportError
from otrsrpc.operations import CustomerUserClient, Operation, QueueClient, TicketClient, UserClient

logger.disable("otrsrpc")

__all__ = [
    "ConfigurationError",
    "CustomerUserClient",
    "ErrorCategory",
    "Operation",
    "OtrsClient",
    "OtrsRpcError",
    "QueueClient",
    "TicketClient",
    "TransportError",
    "UserClient",
    "flatten",
    "get_rpc_suffix",
    "get_trace",
    "set_rpc_suffix",
    "set_trace",
    "unflatten",
]

"""RPC transports and their wire helpers."""

from .contracts import Transport, TransportFactory
from .protocol import ConnectionParams, SoapFault, SoapResponse
from .serialization import decode_element, decode_envelope, encode_envelope, encode_value
from .soap import SoapTransport

__all__ = [
    "ConnectionParams",
    "SoapFault",
    "SoapResponse",
    "SoapTransport",
    "Transport",
    "TransportFactory",
    "decode_element",
    "decode_envelope",
    "encode_envelope",
    "encode_value",
]

"""Serialization helpers for SOAP 1.1 RPC/encoded envelopes.

Requests are positional: every argument becomes ``param<N>`` under the
method element, typed with ``xsi:type`` the way SOAP::Lite servers expect.
Responses are decoded leniently, one Python value per return part.
"""

from __future__ import annotations

import base64
import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping, Sequence
from typing import Any
from xml.sax.saxutils import escape, quoteattr

from .protocol import SoapFault, SoapResponse

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENC_NS = "http://schemas.xmlsoap.org/soap/encoding/"
XSD_NS = "http://www.w3.org/2001/XMLSchema"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

_XSI_TYPE = f"{{{XSI_NS}}}type"
_XSI_NIL = f"{{{XSI_NS}}}nil"
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_XML_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")

_INT_TYPES = {"int", "integer", "long", "short", "byte", "unsignedInt", "unsignedLong", "unsignedShort", "nonNegativeInteger", "positiveInteger"}
_FLOAT_TYPES = {"double", "float", "decimal"}


def encode_envelope(method: str, namespace: str, params: Sequence[Any]) -> str:
    """Encode one RPC call into a complete SOAP envelope string."""
    body = "".join(encode_value(f"param{i}", value) for i, value in enumerate(params))
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<SOAP-ENV:Envelope xmlns:SOAP-ENV="{SOAP_ENV_NS}"'
        f" xmlns:ns1={quoteattr(namespace)}"
        f' xmlns:xsd="{XSD_NS}"'
        f' xmlns:xsi="{XSI_NS}"'
        f' xmlns:SOAP-ENC="{SOAP_ENC_NS}"'
        f' SOAP-ENV:encodingStyle="{SOAP_ENC_NS}">'
        f"<SOAP-ENV:Body><ns1:{method}>{body}</ns1:{method}></SOAP-ENV:Body>"
        "</SOAP-ENV:Envelope>"
    )


def encode_value(name: str, value: Any) -> str:
    """Encode one named value as a typed element.

    Raises:
        ValueError: a mapping key is not usable as an XML element name.
    """
    if value is None:
        return f'<{name} xsi:nil="true"/>'
    if isinstance(value, bool):
        return _leaf(name, "xsd:boolean", "true" if value else "false")
    if isinstance(value, int):
        xsd_type = "xsd:int" if _INT32_MIN <= value <= _INT32_MAX else "xsd:long"
        return _leaf(name, xsd_type, str(value))
    if isinstance(value, float):
        return _leaf(name, "xsd:double", repr(value))
    if isinstance(value, (bytes, bytearray)):
        return _leaf(name, "xsd:base64Binary", base64.b64encode(bytes(value)).decode("ascii"))
    if isinstance(value, Mapping):
        children = []
        for key, item in value.items():
            key = str(key)
            if not _XML_NAME.match(key):
                raise ValueError(f"struct key {key!r} is not a valid element name")
            children.append(encode_value(key, item))
        return f'<{name} xsi:type="SOAP-ENC:Struct">{"".join(children)}</{name}>'
    if isinstance(value, (list, tuple)):
        items = "".join(encode_value("item", item) for item in value)
        return (
            f'<{name} xsi:type="SOAP-ENC:Array" SOAP-ENC:arrayType="xsd:anyType[{len(value)}]">'
            f"{items}</{name}>"
        )
    return _leaf(name, "xsd:string", str(value))


def _leaf(name: str, xsd_type: str, text: str) -> str:
    return f'<{name} xsi:type="{xsd_type}">{escape(text)}</{name}>'


def decode_envelope(payload: str | bytes) -> SoapResponse:
    """Decode a SOAP response envelope.

    Raises:
        ValueError: the payload is not XML or has no SOAP Body.
    """
    raw = payload.encode("utf-8") if isinstance(payload, str) else payload
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as exc:
        raise ValueError(f"invalid SOAP XML: {exc}") from exc
    body = next((child for child in root if _local(child.tag) == "Body"), None)
    if body is None:
        raise ValueError("SOAP envelope has no Body")
    first = next(iter(body), None)
    if first is None:
        return SoapResponse()
    if _local(first.tag) == "Fault":
        return SoapResponse(fault=_decode_fault(first))
    return SoapResponse(parts=[decode_element(part) for part in first])


def _decode_fault(element: ET.Element) -> SoapFault:
    code = ""
    string = ""
    detail: Any = None
    for child in element:
        name = _local(child.tag)
        if name == "faultcode":
            code = _local((child.text or "").strip())
        elif name == "faultstring":
            string = (child.text or "").strip()
        elif name == "detail":
            detail = decode_element(child)
    return SoapFault(code=code or "Server", string=string or "SOAP fault", detail=detail)


def decode_element(element: ET.Element) -> Any:
    """Decode one typed element into a Python value."""
    if (element.get(_XSI_NIL) or "").lower() in ("true", "1"):
        return None
    xsi_type = _local(element.get(_XSI_TYPE) or "")
    children = list(element)
    if _is_array(element, xsi_type):
        return [decode_element(child) for child in children]
    if children:
        # struct; a repeated member name keeps the last value
        return {_local(child.tag): decode_element(child) for child in children}
    if xsi_type.endswith("Struct"):
        return {}
    return _coerce(element.text or "", xsi_type)


def _is_array(element: ET.Element, xsi_type: str) -> bool:
    if xsi_type.endswith("Array"):
        return True
    return any(_local(attr) == "arrayType" for attr in element.attrib)


def _coerce(text: str, xsi_type: str) -> Any:
    if xsi_type in _INT_TYPES:
        try:
            return int(text.strip())
        except ValueError:
            return text
    if xsi_type in _FLOAT_TYPES:
        try:
            return float(text.strip())
        except ValueError:
            return text
    if xsi_type == "boolean":
        return text.strip().lower() in ("true", "1")
    if xsi_type == "base64Binary" or xsi_type == "base64":
        try:
            return base64.b64decode(text.strip(), validate=False)
        except ValueError:
            return text
    return text


def _local(name: str) -> str:
    """Strip ``{namespace}`` or ``prefix:`` qualification."""
    if name.startswith("{"):
        name = name.split("}", 1)[1]
    return name.rsplit(":", 1)[-1]

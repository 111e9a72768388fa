import xml.etree.ElementTree as ET

import pytest

from otrsrpc.transport.serialization import (
    SOAP_ENV_NS,
    XSI_NS,
    decode_element,
    decode_envelope,
    encode_envelope,
    encode_value,
)


def _envelope(body: str) -> str:
    return (
        f'<soap:Envelope xmlns:soap="{SOAP_ENV_NS}" xmlns:xsi="{XSI_NS}"'
        ' xmlns:xsd="http://www.w3.org/2001/XMLSchema"'
        ' xmlns:soapenc="http://schemas.xmlsoap.org/soap/encoding/">'
        f"<soap:Body>{body}</soap:Body></soap:Envelope>"
    )


def test_encode_envelope_positional_params() -> None:
    xml = encode_envelope("Dispatch", "Core", ["soap", "pw", "TicketObject", "TicketGet", "TicketID", 42])
    root = ET.fromstring(xml)
    body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    method = body[0]

    assert method.tag == "{Core}Dispatch"
    assert [child.tag for child in method] == [f"param{i}" for i in range(6)]
    assert method[3].text == "TicketGet"
    assert method[5].get(f"{{{XSI_NS}}}type") == "xsd:int"


def test_encode_value_scalar_types() -> None:
    assert encode_value("p", None) == '<p xsi:nil="true"/>'
    assert encode_value("p", True) == '<p xsi:type="xsd:boolean">true</p>'
    assert encode_value("p", 7) == '<p xsi:type="xsd:int">7</p>'
    assert encode_value("p", 2**40) == f'<p xsi:type="xsd:long">{2**40}</p>'
    assert encode_value("p", 1.5) == '<p xsi:type="xsd:double">1.5</p>'
    assert encode_value("p", b"hi") == '<p xsi:type="xsd:base64Binary">aGk=</p>'
    assert encode_value("p", "a<b&c") == '<p xsi:type="xsd:string">a&lt;b&amp;c</p>'


def test_encode_value_struct_and_array() -> None:
    struct = encode_value("p", {"Name": "x"})
    assert struct == '<p xsi:type="SOAP-ENC:Struct"><Name xsi:type="xsd:string">x</Name></p>'
    array = encode_value("p", [1, "a"])
    assert 'SOAP-ENC:arrayType="xsd:anyType[2]"' in array
    assert array.count("<item ") == 2


def test_encode_rejects_invalid_struct_key() -> None:
    with pytest.raises(ValueError):
        encode_value("p", {"bad key": 1})


def test_decode_multi_part_response() -> None:
    xml = _envelope(
        '<DispatchResponse xmlns="Core">'
        '<s-gensym3 xsi:type="xsd:string">TicketID</s-gensym3>'
        '<s-gensym5 xsi:type="xsd:int">42</s-gensym5>'
        "</DispatchResponse>"
    )
    response = decode_envelope(xml)
    assert response.fault is None
    assert response.result == ["TicketID", 42]


def test_decode_single_part_response() -> None:
    xml = _envelope('<DispatchResponse><s-gensym3 xsi:type="xsd:string">only</s-gensym3></DispatchResponse>')
    assert decode_envelope(xml.encode("utf-8")).result == "only"


def test_decode_empty_response() -> None:
    assert decode_envelope(_envelope("<DispatchResponse/>")).result is None
    assert decode_envelope(_envelope("")).result is None


def test_decode_fault() -> None:
    xml = _envelope(
        "<soap:Fault><faultcode>soap:Client</faultcode>"
        "<faultstring>Auth for user soap failed!</faultstring></soap:Fault>"
    )
    fault = decode_envelope(xml).fault
    assert fault is not None
    assert fault.code == "Client"
    assert fault.string == "Auth for user soap failed!"


def test_decode_element_types() -> None:
    element = ET.fromstring(
        f'<r xmlns:xsi="{XSI_NS}" xmlns:soapenc="http://schemas.xmlsoap.org/soap/encoding/">'
        '<nil xsi:nil="true"/>'
        '<flag xsi:type="xsd:boolean">1</flag>'
        '<num xsi:type="xsd:double">2.5</num>'
        '<bin xsi:type="xsd:base64Binary">aGk=</bin>'
        '<list soapenc:arrayType="xsd:string[2]"><item>a</item><item>b</item></list>'
        '<empty xsi:type="soapenc:Struct"/>'
        "<text>plain</text>"
        "</r>"
    )
    assert decode_element(element) == {
        "nil": None,
        "flag": True,
        "num": 2.5,
        "bin": b"hi",
        "list": ["a", "b"],
        "empty": {},
        "text": "plain",
    }


@pytest.mark.parametrize("payload", ["not xml", "<html><body>oops</body></html>", b""])
def test_decode_rejects_non_soap(payload) -> None:
    with pytest.raises(ValueError):
        decode_envelope(payload)

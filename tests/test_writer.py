from lxml import etree

from adyen_soap.querier import XMLQuerier
from adyen_soap.testing import AUTHORISE_RESPONSE, LIST_RESPONSE
from adyen_soap.writer import envelope, root_element, sub_element, to_log_string, to_string


def build_request():
    root = root_element("payment", "authorise", ("payment", "common"))
    request = sub_element(root, "payment", "paymentRequest")
    sub_element(request, "payment", "reference", "order-id")
    card = sub_element(request, "payment", "card")
    sub_element(card, "payment", "number", "4444333322221111")
    sub_element(card, "payment", "cvc", "737")
    return root


def test_envelope_wraps_request_in_soap_body():
    xml_bytes = envelope(build_request())

    assert xml_bytes.startswith(b"<?xml")
    assert b'xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/"' in xml_bytes
    assert b'xmlns:payment="http://payment.services.adyen.com"' in xml_bytes

    querier = XMLQuerier.xml(xml_bytes)
    assert querier.text("/soap:Envelope/soap:Body/payment:authorise/payment:paymentRequest/payment:reference") == "order-id"


def test_envelope_leaves_request_untouched():
    request = build_request()
    envelope(request)
    assert request.getparent() is None


def test_sub_element_stringifies_values():
    root = root_element("payment", "authorise", ("payment",))
    assert sub_element(root, "payment", "fraudOffset", 30).text == "30"
    assert sub_element(root, "payment", "empty").text is None


def test_to_string_uses_prefixes():
    assert "<payment:reference>order-id</payment:reference>" in to_string(build_request())


def test_to_log_string_masks_sensitive_values():
    logged = to_log_string(build_request())

    assert "4444333322221111" not in logged
    assert "<payment:number>************1111</payment:number>" in logged
    assert "<payment:cvc>737</payment:cvc>" not in logged
    assert "<payment:reference>order-id</payment:reference>" in logged


def test_querier_text_and_missing_nodes():
    querier = XMLQuerier.xml(AUTHORISE_RESPONSE)
    result = querier.xpath("//payment:authoriseResponse/payment:paymentResult")

    assert result.text("./payment:pspReference") == "9876543210987654"
    assert result.text("./payment:refusalReason") == ""
    assert result.text("./payment:doesNotExist") == ""
    assert result.xpath("./payment:doesNotExist").empty()
    assert result.xpath("./payment:doesNotExist").text("./payment:pspReference") == ""


def test_querier_block_form():
    querier = XMLQuerier.xml(AUTHORISE_RESPONSE)
    code = querier.xpath(
        "//payment:authoriseResponse/payment:paymentResult",
        lambda result: result.text("./payment:resultCode"),
    )
    assert code == "Authorised"


def test_querier_iterates_node_sets():
    querier = XMLQuerier.xml(LIST_RESPONSE)
    details = querier.xpath("//recurring:RecurringDetail")

    assert len(details) == 3
    assert [d.text("./recurring:variant") for d in details.each()] == ["mc", "IDEAL", "elv"]
    assert len(details.xpath("./recurring:card").children()) == 4


def test_querier_tolerates_malformed_input():
    for data in (b"", None, b"<soap:Envelope>", "not xml at all"):
        querier = XMLQuerier.xml(data)
        assert querier.empty()
        assert querier.text("//soap:Fault/faultstring") == ""


def test_querier_does_not_expand_entities():
    data = b"""<?xml version="1.0"?>
    <!DOCTYPE r [<!ENTITY x SYSTEM "file:///etc/passwd">]>
    <r>&x;</r>"""
    querier = XMLQuerier.xml(data)
    assert "root:" not in querier.text("/r")
    assert isinstance(querier.nodes[0], etree._Element)

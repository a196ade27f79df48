import copy
from typing import Any, Iterable, Optional

from lxml import etree

NAMESPACES = {
    "soap": "http://schemas.xmlsoap.org/soap/envelope/",
    "xsd": "http://www.w3.org/2001/XMLSchema",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
    "payment": "http://payment.services.adyen.com",
    "recurring": "http://recurring.services.adyen.com",
    "payout": "http://payout.services.adyen.com",
    "common": "http://common.services.adyen.com",
}

ENVELOPE_NAMESPACES = ("soap", "xsd", "xsi")

# Elements whose text must never reach a log line.
SENSITIVE_TAGS = {"number", "cvc", "iban", "bankAccountNumber"}


def qname(prefix: str, tag: str) -> str:
    return f"{{{NAMESPACES[prefix]}}}{tag}"


def root_element(prefix: str, tag: str, namespaces: Iterable[str]) -> etree._Element:
    """Creates a request root declaring the given namespace prefixes."""
    return etree.Element(qname(prefix, tag), nsmap={p: NAMESPACES[p] for p in namespaces})


def sub_element(
    parent: etree._Element, prefix: str, tag: str, text: Optional[Any] = None
) -> etree._Element:
    element = etree.SubElement(parent, qname(prefix, tag))
    if text is not None:
        element.text = str(text)
    return element


def envelope(body: etree._Element) -> bytes:
    """
    Wraps a request element in a SOAP 1.1 envelope and returns the encoded
    byte string that is posted to the service.
    """
    document = root_element("soap", "Envelope", ENVELOPE_NAMESPACES)
    soap_body = sub_element(document, "soap", "Body")
    soap_body.append(copy.deepcopy(body))

    return etree.tostring(
        document,
        pretty_print=True,
        xml_declaration=True,
        encoding="UTF-8"
    )


def to_string(element: etree._Element) -> str:
    return etree.tostring(element, pretty_print=True, encoding="unicode")


def _mask(value: str) -> str:
    """Keeps the last four characters of long values only."""
    if len(value) > 4:
        return "*" * (len(value) - 4) + value[-4:]
    return "*" * len(value)


def to_log_string(element: etree._Element) -> str:
    """Serializes a request with card numbers, CVCs and account numbers masked."""
    masked = copy.deepcopy(element)
    for node in masked.iter():
        if not isinstance(node.tag, str):
            continue
        if etree.QName(node).localname in SENSITIVE_TAGS and node.text:
            node.text = _mask(node.text)
    return to_string(masked)

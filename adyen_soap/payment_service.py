"""
Maps actions to Adyen's Payment SOAP service.

A :class:`PaymentService` is instantiated with the params for the call that
will eventually be made::

    payment = PaymentService({
        "reference": "order-id",
        "amount": {"currency": "EUR", "value": "1234"},
        "shopper": {"email": "s.hopper@example.com", "reference": "user-id", "ip": "61.294.12.12"},
        "card": {"holder_name": "Simon Hopper", "number": "4444333322221111",
                 "cvc": "737", "expiry_month": 12, "expiry_year": 2012},
    })
    response = payment.authorise_payment()
    response.authorised  # => True

The shortcut functions in :mod:`adyen_soap.api` are usually more convenient.
"""

from typing import Any, Dict, Optional, Tuple

from lxml import etree

from adyen_soap.client import SimpleSOAPClient
from adyen_soap.response import Response, ResponseAttr
from adyen_soap.testing import (
    AUTHORISATION_REFUSED_RESPONSE,
    AUTHORISATION_REQUEST_INVALID_RESPONSE,
    AUTHORISE_RESPONSE,
    build_http_response,
)
from adyen_soap.writer import root_element, sub_element

REQUEST_NAMESPACES = ("payment", "recurring", "common")

# Order in which shopper details are written, with their element names.
SHOPPER_ELEMENTS = (
    ("reference", "shopperReference"),
    ("email", "shopperEmail"),
    ("ip", "shopperIP"),
    ("statement", "shopperStatement"),
)

LATEST = "LATEST"


class AuthorisationResponse(Response):
    """
    Result of any of the authorise calls.

    A request the service considers invalid comes back as a SOAP fault;
    :attr:`invalid_request` is then True and :meth:`error` translates the
    fault into an ``(attribute, message)`` pair suitable for form errors.
    """

    ERRORS: Dict[str, Tuple[str, str]] = {
        "validation 101 Invalid card number": ("number", "is not a valid creditcard number"),
        "validation 103 CVC is not the right length": ("cvc", "is not the right length"),
        "validation 128 Card Holder Missing": ("holder_name", "can’t be blank"),
        "validation Couldn't parse expiry year": ("expiry_year", "could not be recognized"),
        "validation Expiry month should be between 1 and 12 inclusive": ("expiry_month", "could not be recognized"),
    }

    AUTHORISED = "Authorised"
    REFUSED = "Refused"

    psp_reference = ResponseAttr()
    result_code = ResponseAttr()
    auth_code = ResponseAttr()
    refusal_reason = ResponseAttr()

    @classmethod
    def original_fault_message_for(cls, attribute: str, message: str) -> str:
        """Reverse of :meth:`error`: the fault message an error pair came from."""
        for fault, error in cls.ERRORS.items():
            if error == (attribute, message):
                return fault
        return message

    @property
    def success(self) -> bool:
        return super().success and self.params["result_code"] == self.AUTHORISED

    @property
    def authorised(self) -> bool:
        return self.success

    authorized = authorised

    @property
    def refused(self) -> bool:
        return self.params["result_code"] == self.REFUSED

    @property
    def invalid_request(self) -> bool:
        return self.fault_message is not None

    def error(self, prefix: Optional[str] = None) -> Tuple[str, Optional[str]]:
        """
        Returns the attribute and message for the fault, e.g.
        ``("number", "is not a valid creditcard number")``. Unknown faults are
        reported on ``"base"``. A ``prefix`` is prepended to any attribute
        other than ``"base"``.
        """
        error = self.ERRORS.get(self.fault_message or "")
        if error is None:
            return ("base", self.fault_message)
        attribute, message = error
        if prefix:
            attribute = f"{prefix}_{attribute}"
        return (attribute, message)

    def _parse_params(self) -> Dict[str, Any]:
        result = self.xml_querier.xpath("//payment:authoriseResponse/payment:paymentResult")
        if self.invalid_request:
            refusal_reason = self.fault_message
        else:
            refusal_reason = result.text("./payment:refusalReason")
        return {
            "psp_reference": result.text("./payment:pspReference"),
            "result_code": result.text("./payment:resultCode"),
            "auth_code": result.text("./payment:authCode"),
            "refusal_reason": refusal_reason,
        }


class ModificationResponse(Response):
    """
    Result of a modification request. Success only means the request was
    received; the outcome is delivered later by notification.
    """

    request_received_value: str = ""
    base_xpath: str = ""

    psp_reference = ResponseAttr()
    response = ResponseAttr()

    @property
    def success(self) -> bool:
        return super().success and self.params["response"] == self.request_received_value

    def _parse_params(self) -> Dict[str, Any]:
        result = self.xml_querier.xpath(self.base_xpath)
        return {
            "psp_reference": result.text("./payment:pspReference"),
            "response": result.text("./payment:response"),
        }


class CaptureResponse(ModificationResponse):
    request_received_value = "[capture-received]"
    base_xpath = "//payment:captureResponse/payment:captureResult"


class RefundResponse(ModificationResponse):
    request_received_value = "[refund-received]"
    base_xpath = "//payment:refundResponse/payment:refundResult"


class CancelOrRefundResponse(ModificationResponse):
    request_received_value = "[cancelOrRefund-received]"
    base_xpath = "//payment:cancelOrRefundResponse/payment:cancelOrRefundResult"


class CancelResponse(ModificationResponse):
    request_received_value = "[cancel-received]"
    base_xpath = "//payment:cancelResponse/payment:cancelResult"


class PaymentService(SimpleSOAPClient):
    """Authorises payments and modifies (captures, refunds, cancels) them."""

    ENDPOINT_URI = "https://pal-%s.adyen.com/pal/servlet/soap/Payment"

    # Test helpers

    @classmethod
    def stub_success(cls) -> None:
        cls.stubbed_response = build_http_response(AUTHORISE_RESPONSE)

    @classmethod
    def stub_refused(cls) -> None:
        cls.stubbed_response = build_http_response(AUTHORISATION_REFUSED_RESPONSE)

    @classmethod
    def stub_invalid(cls) -> None:
        cls.stubbed_response = build_http_response(
            AUTHORISATION_REQUEST_INVALID_RESPONSE % "validation 101 Invalid card number",
            status_code=500,
        )

    # Authorisations

    def authorise_payment(self) -> AuthorisationResponse:
        return self.call_webservice_action(
            "authorise", self.authorise_payment_request_body(), AuthorisationResponse
        )

    def authorise_recurring_payment(self) -> AuthorisationResponse:
        return self.call_webservice_action(
            "authorise", self.authorise_recurring_payment_request_body(), AuthorisationResponse
        )

    def authorise_one_click_payment(self) -> AuthorisationResponse:
        return self.call_webservice_action(
            "authorise", self.authorise_one_click_payment_request_body(), AuthorisationResponse
        )

    def authorise_payment_request_body(self) -> etree._Element:
        self.validate_parameters(
            {"card": ["holder_name", "number", "cvc", "expiry_year", "expiry_month"]}
        )
        root, request = self._payment_request()
        self._card(request)
        if self.params.get("recurring"):
            recurring = sub_element(request, "payment", "recurring")
            sub_element(recurring, "payment", "contract", "RECURRING,ONECLICK")
        return root

    def authorise_recurring_payment_request_body(self) -> etree._Element:
        self.validate_parameters({"shopper": ["reference", "email"]})
        root, request = self._payment_request()
        recurring = sub_element(request, "payment", "recurring")
        sub_element(recurring, "payment", "contract", "RECURRING")
        sub_element(
            request,
            "payment",
            "selectedRecurringDetailReference",
            self.params.get("recurring_detail_reference") or LATEST,
        )
        sub_element(request, "payment", "shopperInteraction", "ContAuth")
        return root

    def authorise_one_click_payment_request_body(self) -> etree._Element:
        self.validate_parameters(
            "recurring_detail_reference",
            {"shopper": ["reference", "email"]},
            {"card": ["cvc"]},
        )
        root, request = self._payment_request()
        recurring = sub_element(request, "payment", "recurring")
        sub_element(recurring, "payment", "contract", "ONECLICK")
        sub_element(
            request,
            "payment",
            "selectedRecurringDetailReference",
            self.params["recurring_detail_reference"],
        )
        card = sub_element(request, "payment", "card")
        sub_element(card, "payment", "cvc", self.params["card"]["cvc"])
        return root

    # Modifications

    def capture(self) -> CaptureResponse:
        return self.call_webservice_action("capture", self.capture_body(), CaptureResponse)

    def refund(self) -> RefundResponse:
        return self.call_webservice_action("refund", self.refund_body(), RefundResponse)

    def cancel_or_refund(self) -> CancelOrRefundResponse:
        return self.call_webservice_action(
            "cancelOrRefund", self.cancel_or_refund_body(), CancelOrRefundResponse
        )

    def cancel(self) -> CancelResponse:
        return self.call_webservice_action("cancel", self.cancel_body(), CancelResponse)

    def capture_body(self) -> etree._Element:
        return self._modification_request("capture", with_amount=True)

    def refund_body(self) -> etree._Element:
        return self._modification_request("refund", with_amount=True)

    def cancel_or_refund_body(self) -> etree._Element:
        return self._modification_request("cancelOrRefund")

    def cancel_body(self) -> etree._Element:
        return self._modification_request("cancel")

    # Partials

    def _payment_request(self) -> Tuple[etree._Element, etree._Element]:
        """Builds the authorise envelope shared by all authorisation calls."""
        self.validate_parameters("merchant_account", "reference", {"amount": ["currency", "value"]})
        root = root_element("payment", "authorise", REQUEST_NAMESPACES)
        request = sub_element(root, "payment", "paymentRequest")
        sub_element(request, "payment", "merchantAccount", self.params["merchant_account"])
        sub_element(request, "payment", "reference", self.params["reference"])
        self._amount(request, "amount")
        self._shopper(request)
        if self.params.get("fraud_offset") is not None:
            sub_element(request, "payment", "fraudOffset", self.params["fraud_offset"])
        return root, request

    def _modification_request(self, operation: str, with_amount: bool = False) -> etree._Element:
        self.validate_parameters("merchant_account", "psp_reference")
        if with_amount:
            self.validate_parameters({"amount": ["currency", "value"]})
        root = root_element("payment", operation, REQUEST_NAMESPACES)
        request = sub_element(root, "payment", "modificationRequest")
        sub_element(request, "payment", "merchantAccount", self.params["merchant_account"])
        sub_element(request, "payment", "originalReference", self.params["psp_reference"])
        if with_amount:
            self._amount(request, "modificationAmount")
        return root

    def _amount(self, parent: etree._Element, tag: str) -> None:
        amount = self.params["amount"]
        node = sub_element(parent, "payment", tag)
        sub_element(node, "common", "currency", amount["currency"])
        sub_element(node, "common", "value", amount["value"])

    def _card(self, parent: etree._Element) -> None:
        card = self.params["card"]
        node = sub_element(parent, "payment", "card")
        sub_element(node, "payment", "holderName", card["holder_name"])
        sub_element(node, "payment", "number", card["number"])
        sub_element(node, "payment", "cvc", card["cvc"])
        sub_element(node, "payment", "expiryYear", card["expiry_year"])
        sub_element(node, "payment", "expiryMonth", "%02d" % int(card["expiry_month"]))

    def _shopper(self, parent: etree._Element) -> None:
        shopper = self.params.get("shopper") or {}
        for key, tag in SHOPPER_ELEMENTS:
            if shopper.get(key):
                sub_element(parent, "payment", tag, shopper[key])

"""
Maps actions to Adyen's Payout SOAP service.

Example::

    payout = PayoutService({
        "shopper": {"email": "user@example.com", "reference": "example_user_1"},
        "bank": {
            "iban": "NL48RABO0132394782",
            "bic": "RABONL2U",
            "bank_name": "Rabobank",
            "country_code": "NL",
            "owner_name": "Test Shopper",
        },
    })
    response = payout.store_detail()
    response.detail_stored  # => True
"""

from typing import Any, Dict

from lxml import etree

from adyen_soap.client import SimpleSOAPClient
from adyen_soap.response import Response, ResponseAttr
from adyen_soap.testing import STORE_DETAIL_RESPONSE, build_http_response
from adyen_soap.writer import root_element, sub_element

REQUEST_NAMESPACES = ("payout",)

BANK_ELEMENTS = (
    ("iban", "iban"),
    ("bic", "bic"),
    ("bank_name", "bankName"),
    ("country_code", "countryCode"),
    ("owner_name", "ownerName"),
)


class StoreDetailResponse(Response):
    SUCCESS = "Success"

    psp_reference = ResponseAttr()
    result_code = ResponseAttr()
    recurring_detail_reference = ResponseAttr()

    @property
    def success(self) -> bool:
        """
        Only tells whether the details were accepted; the payout itself is
        reported by a later notification.
        """
        return super().success and self.params["result_code"] == self.SUCCESS

    @property
    def detail_stored(self) -> bool:
        return self.success

    def _parse_params(self) -> Dict[str, Any]:
        result = self.xml_querier.xpath("//payout:storeDetailResponse/payout:response")
        return {
            "psp_reference": result.text("./payout:pspReference"),
            "result_code": result.text("./payout:resultCode"),
            "recurring_detail_reference": result.text("./payout:recurringDetailReference"),
        }


class PayoutService(SimpleSOAPClient):
    ENDPOINT_URI = "https://pal-%s.adyen.com/pal/servlet/soap/Payout"

    @classmethod
    def stub_detail_stored(cls) -> None:
        cls.stubbed_response = build_http_response(STORE_DETAIL_RESPONSE % "Success")

    def store_detail(self) -> StoreDetailResponse:
        return self.call_webservice_action("storeDetail", self.store_detail_request_body(), StoreDetailResponse)

    def store_detail_request_body(self) -> etree._Element:
        self.validate_parameters(
            "merchant_account",
            {"bank": [key for key, _ in BANK_ELEMENTS]},
            {"shopper": ["email", "reference"]},
        )
        root = root_element("payout", "storeDetail", REQUEST_NAMESPACES)
        request = sub_element(root, "payout", "request")
        sub_element(request, "payout", "merchantAccount", self.params["merchant_account"])

        bank = sub_element(request, "payout", "bank")
        for key, tag in BANK_ELEMENTS:
            sub_element(bank, "payout", tag, self.params["bank"][key])

        recurring = sub_element(request, "payout", "recurring")
        sub_element(recurring, "payout", "contract", "PAYOUT")

        shopper = self.params["shopper"]
        sub_element(request, "payout", "shopperEmail", shopper["email"])
        sub_element(request, "payout", "shopperReference", shopper["reference"])
        return root

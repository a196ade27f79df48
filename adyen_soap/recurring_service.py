"""
Maps actions to Adyen's Recurring SOAP service: listing, disabling and
storing the recurring contracts (stored card or bank details) of a shopper.
"""

import calendar
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from lxml import etree

from adyen_soap.client import SimpleSOAPClient
from adyen_soap.querier import XMLQuerier
from adyen_soap.response import Response, ResponseAttr
from adyen_soap.testing import (
    DISABLE_RESPONSE,
    LIST_RESPONSE,
    STORE_TOKEN_RESPONSE,
    build_http_response,
)
from adyen_soap.writer import root_element, sub_element

REQUEST_NAMESPACES = ("recurring", "payment", "common")


# xsd:dateTime with an optional fraction of any length and an optional zone
_DATETIME_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})?$"
)


def _parse_datetime(value: str) -> Optional[datetime]:
    """
    Parses an xsd:dateTime into a datetime, or returns None when the value
    is empty or malformed.
    """
    match = _DATETIME_PATTERN.match(value.strip()) if value else None
    if not match:
        return None

    normalized = match.group("base")
    if match.group("fraction"):
        normalized += "." + match.group("fraction")[:6].ljust(6, "0")
    zone = match.group("zone")
    if zone:
        normalized += "+00:00" if zone == "Z" else zone

    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _end_of_month(year: str, month: str) -> Optional[date]:
    try:
        year_number, month_number = int(year), int(month)
        return date(year_number, month_number, calendar.monthrange(year_number, month_number)[1])
    except ValueError:
        return None


class ListResponse(Response):
    creation_date = ResponseAttr()
    details = ResponseAttr()
    last_known_shopper_email = ResponseAttr()
    shopper_reference = ResponseAttr()

    @property
    def references(self) -> List[str]:
        return [detail["recurring_detail_reference"] for detail in self.details or []]

    def _parse_params(self) -> Dict[str, Any]:
        result = self.xml_querier.xpath(
            "//recurring:listRecurringDetailsResponse/recurring:result"
        )
        details = result.xpath(".//recurring:RecurringDetail")
        if details.empty():
            return {}
        return {
            "creation_date": _parse_datetime(result.text("./recurring:creationDate")),
            "details": [self._parse_details(node) for node in details.each()],
            "last_known_shopper_email": result.text("./recurring:lastKnownShopperEmail"),
            "shopper_reference": result.text("./recurring:shopperReference"),
        }

    def _parse_details(self, node: XMLQuerier) -> Dict[str, Any]:
        detail: Dict[str, Any] = {
            "recurring_detail_reference": node.text("./recurring:recurringDetailReference"),
            "variant": node.text("./recurring:variant"),
            "creation_date": _parse_datetime(node.text("./recurring:creationDate")),
        }

        card = node.xpath("./recurring:card")
        bank = node.xpath("./recurring:bank")
        elv = node.xpath("./recurring:elv")
        if card.children():
            detail["card"] = {
                "expiry_date": _end_of_month(
                    card.text("./payment:expiryYear"), card.text("./payment:expiryMonth")
                ),
                "holder_name": card.text("./payment:holderName"),
                "number": card.text("./payment:number"),
            }
        elif bank.children():
            detail["bank"] = {
                "bank_account_number": bank.text("./payment:bankAccountNumber"),
                "bank_location_id": bank.text("./payment:bankLocationId"),
                "bank_name": bank.text("./payment:bankName"),
                "bic": bank.text("./payment:bic"),
                "country_code": bank.text("./payment:countryCode"),
                "iban": bank.text("./payment:iban"),
                "owner_name": bank.text("./payment:ownerName"),
            }
        elif elv.children():
            detail["elv"] = {
                "holder_name": elv.text("./payment:accountHolderName"),
                "bank_account_number": elv.text("./payment:bankAccountNumber"),
                "bank_location": elv.text("./payment:bankLocation"),
                "bank_location_id": elv.text("./payment:bankLocationId"),
                "bank_name": elv.text("./payment:bankName"),
            }
        return detail


class DisableResponse(Response):
    DISABLED_RESPONSES = (
        "[detail-successfully-disabled]",
        "[all-details-successfully-disabled]",
    )

    response = ResponseAttr()

    @property
    def success(self) -> bool:
        return super().success and self.params["response"] in self.DISABLED_RESPONSES

    @property
    def disabled(self) -> bool:
        return self.success

    def _parse_params(self) -> Dict[str, Any]:
        return {
            "response": self.xml_querier.text(
                "//recurring:disableResponse/recurring:result/recurring:response"
            )
        }


class StoreTokenResponse(Response):
    SUCCESS = "Success"

    psp_reference = ResponseAttr()
    result_code = ResponseAttr()
    recurring_detail_reference = ResponseAttr()

    @property
    def success(self) -> bool:
        return super().success and self.params["result_code"] == self.SUCCESS

    @property
    def stored(self) -> bool:
        return self.success

    def _parse_params(self) -> Dict[str, Any]:
        result = self.xml_querier.xpath("//recurring:storeTokenResponse/recurring:result")
        return {
            "psp_reference": result.text("./recurring:pspReference"),
            "result_code": result.text("./recurring:result"),
            "recurring_detail_reference": result.text("./recurring:rechargeReference"),
        }


class RecurringService(SimpleSOAPClient):
    """
    Lists, disables and stores recurring contracts for a shopper, identified
    by ``params["shopper"]["reference"]``.
    """

    ENDPOINT_URI = "https://pal-%s.adyen.com/pal/servlet/soap/Recurring"

    @classmethod
    def stub_listed(cls) -> None:
        cls.stubbed_response = build_http_response(LIST_RESPONSE)

    @classmethod
    def stub_disabled(cls) -> None:
        cls.stubbed_response = build_http_response(DISABLE_RESPONSE % "[all-details-successfully-disabled]")

    @classmethod
    def stub_stored(cls) -> None:
        cls.stubbed_response = build_http_response(STORE_TOKEN_RESPONSE % "Success")

    def list(self) -> ListResponse:
        return self.call_webservice_action("listRecurringDetails", self.list_request_body(), ListResponse)

    def disable(self) -> DisableResponse:
        return self.call_webservice_action("disable", self.disable_request_body(), DisableResponse)

    def store_token(self) -> StoreTokenResponse:
        return self.call_webservice_action("storeToken", self.store_token_request_body(), StoreTokenResponse)

    def list_request_body(self) -> etree._Element:
        self.validate_parameters("merchant_account", {"shopper": ["reference"]})
        root = root_element("recurring", "listRecurringDetails", REQUEST_NAMESPACES)
        request = sub_element(root, "recurring", "request")
        self._contract(request)
        sub_element(request, "recurring", "merchantAccount", self.params["merchant_account"])
        sub_element(request, "recurring", "shopperReference", self.params["shopper"]["reference"])
        return root

    def disable_request_body(self) -> etree._Element:
        self.validate_parameters("merchant_account", {"shopper": ["reference"]})
        root = root_element("recurring", "disable", REQUEST_NAMESPACES)
        request = sub_element(root, "recurring", "request")
        sub_element(request, "recurring", "merchantAccount", self.params["merchant_account"])
        sub_element(request, "recurring", "shopperReference", self.params["shopper"]["reference"])
        if self.params.get("recurring_detail_reference"):
            sub_element(
                request,
                "recurring",
                "recurringDetailReference",
                self.params["recurring_detail_reference"],
            )
        return root

    def store_token_request_body(self) -> etree._Element:
        self.validate_parameters("merchant_account", {"shopper": ["email", "reference"]})
        if self.params.get("card"):
            self.validate_parameters({"card": ["holder_name", "number", "expiry_year", "expiry_month"]})
        elif self.params.get("elv"):
            self.validate_parameters(
                {"elv": ["holder_name", "number", "bank_location", "bank_location_id", "bank_name"]}
            )
        else:
            raise ValueError("The required parameter `card` or `elv` is missing.")

        root = root_element("recurring", "storeToken", REQUEST_NAMESPACES)
        request = sub_element(root, "recurring", "request")
        self._contract(request)
        sub_element(request, "recurring", "merchantAccount", self.params["merchant_account"])
        sub_element(request, "recurring", "shopperReference", self.params["shopper"]["reference"])
        sub_element(request, "recurring", "shopperEmail", self.params["shopper"]["email"])

        if self.params.get("card"):
            card = self.params["card"]
            node = sub_element(request, "recurring", "card")
            sub_element(node, "payment", "holderName", card["holder_name"])
            sub_element(node, "payment", "number", card["number"])
            sub_element(node, "payment", "expiryYear", card["expiry_year"])
            sub_element(node, "payment", "expiryMonth", "%02d" % int(card["expiry_month"]))
        else:
            elv = self.params["elv"]
            node = sub_element(request, "recurring", "elv")
            sub_element(node, "payment", "accountHolderName", elv["holder_name"])
            sub_element(node, "payment", "bankAccountNumber", elv["number"])
            sub_element(node, "payment", "bankLocation", elv["bank_location"])
            sub_element(node, "payment", "bankLocationId", elv["bank_location_id"])
            sub_element(node, "payment", "bankName", elv["bank_name"])
        return root

    def _contract(self, request: etree._Element) -> None:
        recurring = sub_element(request, "recurring", "recurring")
        sub_element(recurring, "recurring", "contract", "RECURRING")

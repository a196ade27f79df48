"""
Shortcut functions, one per web service operation.

Each function builds the matching service with its arguments and performs
the call. ``config`` and ``session`` are passed through to the service; when
``config`` is omitted the process-wide configuration is used, see
:func:`adyen_soap.config.configure`.
"""

from typing import Any, Dict, Optional

import requests

from adyen_soap.config import Configuration
from adyen_soap.payment_service import (
    LATEST,
    AuthorisationResponse,
    CancelOrRefundResponse,
    CancelResponse,
    CaptureResponse,
    PaymentService,
    RefundResponse,
)
from adyen_soap.payout_service import PayoutService, StoreDetailResponse
from adyen_soap.recurring_service import (
    DisableResponse,
    ListResponse,
    RecurringService,
    StoreTokenResponse,
)

__all__ = [
    "authorise_payment",
    "authorise_recurring_payment",
    "authorise_one_click_payment",
    "capture_payment",
    "refund_payment",
    "cancel_or_refund_payment",
    "cancel_payment",
    "list_recurring_details",
    "disable_recurring_contract",
    "store_recurring_token",
    "store_payout_detail",
]


def authorise_payment(
    reference: str,
    amount: Dict[str, Any],
    shopper: Optional[Dict[str, Any]],
    card: Dict[str, Any],
    enable_recurring_contract: bool = False,
    fraud_offset: Optional[int] = None,
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> AuthorisationResponse:
    """
    Authorises a credit card payment.

    Args:
        reference: The merchant's reference for this payment, e.g. an order id.
        amount: ``{"currency": "EUR", "value": "1234"}``; the value is in minor units.
        shopper: Any of ``reference``, ``email``, ``ip`` and ``statement``.
        card: ``holder_name``, ``number``, ``cvc``, ``expiry_month`` and ``expiry_year``.
        enable_recurring_contract: Store the card for later recurring and
            one-click payments.
        fraud_offset: Adjusts the fraud score the service calculates.
    """
    params = {
        "reference": reference,
        "amount": amount,
        "shopper": shopper,
        "card": card,
        "recurring": enable_recurring_contract,
        "fraud_offset": fraud_offset,
    }
    return PaymentService(params, config=config, session=session).authorise_payment()


def authorise_recurring_payment(
    reference: str,
    amount: Dict[str, Any],
    shopper: Dict[str, Any],
    recurring_detail_reference: str = LATEST,
    fraud_offset: Optional[int] = None,
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> AuthorisationResponse:
    """
    Charges a stored recurring contract without the shopper present. The
    shopper must carry ``reference`` and ``email``; the latest stored detail
    is used unless ``recurring_detail_reference`` names one.
    """
    params = {
        "reference": reference,
        "amount": amount,
        "shopper": shopper,
        "recurring_detail_reference": recurring_detail_reference,
        "fraud_offset": fraud_offset,
    }
    return PaymentService(params, config=config, session=session).authorise_recurring_payment()


def authorise_one_click_payment(
    reference: str,
    amount: Dict[str, Any],
    shopper: Dict[str, Any],
    card: Dict[str, Any],
    recurring_detail_reference: str,
    fraud_offset: Optional[int] = None,
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> AuthorisationResponse:
    """
    Charges a stored one-click contract. Only the card's ``cvc`` is sent.
    """
    params = {
        "reference": reference,
        "amount": amount,
        "shopper": shopper,
        "card": card,
        "recurring_detail_reference": recurring_detail_reference,
        "fraud_offset": fraud_offset,
    }
    return PaymentService(params, config=config, session=session).authorise_one_click_payment()


def capture_payment(
    psp_reference: str,
    amount: Dict[str, Any],
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> CaptureResponse:
    params = {"psp_reference": psp_reference, "amount": amount}
    return PaymentService(params, config=config, session=session).capture()


def refund_payment(
    psp_reference: str,
    amount: Dict[str, Any],
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> RefundResponse:
    params = {"psp_reference": psp_reference, "amount": amount}
    return PaymentService(params, config=config, session=session).refund()


def cancel_or_refund_payment(
    psp_reference: str,
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> CancelOrRefundResponse:
    """Cancels the payment if it is not captured yet, refunds it otherwise."""
    params = {"psp_reference": psp_reference}
    return PaymentService(params, config=config, session=session).cancel_or_refund()


def cancel_payment(
    psp_reference: str,
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> CancelResponse:
    params = {"psp_reference": psp_reference}
    return PaymentService(params, config=config, session=session).cancel()


def list_recurring_details(
    shopper_reference: str,
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> ListResponse:
    params = {"shopper": {"reference": shopper_reference}}
    return RecurringService(params, config=config, session=session).list()


def disable_recurring_contract(
    shopper_reference: str,
    recurring_detail_reference: Optional[str] = None,
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> DisableResponse:
    """
    Disables one stored detail, or every detail of the shopper when no
    ``recurring_detail_reference`` is given.
    """
    params = {
        "shopper": {"reference": shopper_reference},
        "recurring_detail_reference": recurring_detail_reference,
    }
    return RecurringService(params, config=config, session=session).disable()


def store_recurring_token(
    shopper: Dict[str, Any],
    params: Dict[str, Any],
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> StoreTokenResponse:
    """
    Stores a card or ELV account as a recurring contract without a payment.
    ``params`` holds either a ``card`` or an ``elv`` mapping.
    """
    return RecurringService({"shopper": shopper, **params}, config=config, session=session).store_token()


def store_payout_detail(
    shopper: Dict[str, Any],
    bank: Dict[str, Any],
    *,
    config: Optional[Configuration] = None,
    session: Optional[requests.Session] = None,
) -> StoreDetailResponse:
    """Stores bank details to pay out to, for a shopper with ``email`` and ``reference``."""
    return PayoutService({"shopper": shopper, "bank": bank}, config=config, session=session).store_detail()

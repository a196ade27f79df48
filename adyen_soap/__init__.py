"""
adyen-soap: a client for Adyen's Payment, Recurring and Payout SOAP services.

Builds the XML request for an operation, posts it to the configured
environment's endpoint and classifies the parsed response.
"""

from .api import (
    authorise_one_click_payment,
    authorise_payment,
    authorise_recurring_payment,
    cancel_or_refund_payment,
    cancel_payment,
    capture_payment,
    disable_recurring_contract,
    list_recurring_details,
    refund_payment,
    store_payout_detail,
    store_recurring_token,
)
from .client import ClientError, ServerError, SimpleSOAPClient, SOAPError
from .config import ConfigError, Configuration, configure, get_configuration, load_configuration
from .models import ValidationReport
from .payment_service import PaymentService
from .payout_service import PayoutService
from .recurring_service import RecurringService
from .response import Response
from .validator import Validator

__all__ = [
    "ClientError",
    "ConfigError",
    "Configuration",
    "PaymentService",
    "PayoutService",
    "RecurringService",
    "Response",
    "ServerError",
    "SimpleSOAPClient",
    "SOAPError",
    "ValidationReport",
    "Validator",
    "authorise_one_click_payment",
    "authorise_payment",
    "authorise_recurring_payment",
    "cancel_or_refund_payment",
    "cancel_payment",
    "capture_payment",
    "configure",
    "disable_recurring_contract",
    "get_configuration",
    "list_recurring_details",
    "load_configuration",
    "refund_payment",
    "store_payout_detail",
    "store_recurring_token",
]

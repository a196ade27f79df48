import pytest

from adyen_soap.config import Configuration
from adyen_soap.payment_service import PaymentService
from adyen_soap.payout_service import PayoutService
from adyen_soap.recurring_service import RecurringService
from helpers import FakeSession


@pytest.fixture
def config():
    return Configuration(
        environment="test",
        username="ws@Company.SuperShopper",
        password="secret",
        default_params={"merchant_account": "SuperShopper"},
    )


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture(autouse=True)
def reset_stubs():
    yield
    for service_class in (PaymentService, RecurringService, PayoutService):
        service_class.stubbed_response = None

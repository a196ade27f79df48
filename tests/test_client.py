import logging

import pytest
import requests

from adyen_soap.client import ClientError, ServerError, SimpleSOAPClient
from adyen_soap.config import Configuration
from adyen_soap.payment_service import AuthorisationResponse, PaymentService
from adyen_soap.response import Response
from adyen_soap.testing import AUTHORISATION_REQUEST_INVALID_RESPONSE, AUTHORISE_RESPONSE
from adyen_soap.writer import root_element, sub_element


class EchoService(SimpleSOAPClient):
    ENDPOINT_URI = "https://pal-%s.adyen.com/pal/servlet/soap/Echo"


def echo_request():
    root = root_element("payment", "echo", ("payment",))
    sub_element(root, "payment", "number", "4444333322221111")
    return root


def test_params_are_merged_over_default_params(config, session):
    service = EchoService({"reference": "order-id"}, config=config, session=session)
    assert service.params == {"merchant_account": "SuperShopper", "reference": "order-id"}

    service = EchoService({"merchant_account": "Other"}, config=config, session=session)
    assert service.params["merchant_account"] == "Other"


def test_endpoint_depends_on_environment(session):
    live = Configuration(environment="live")
    assert EchoService(config=live, session=session).endpoint == "https://pal-live.adyen.com/pal/servlet/soap/Echo"


@pytest.mark.parametrize("blank", [None, "", "   ", {}])
def test_validate_parameters_rejects_blank_values(config, blank):
    service = EchoService({"reference": blank}, config=config)
    with pytest.raises(ValueError, match="The required parameter `reference` is missing."):
        service.validate_parameters("reference")


def test_validate_parameters_checks_nested_keys(config):
    service = EchoService({"amount": {"currency": "EUR"}}, config=config)
    service.validate_parameters("merchant_account", {"amount": ["currency"]})

    with pytest.raises(ValueError, match="The required parameter `amount => value` is missing."):
        service.validate_parameters({"amount": ["currency", "value"]})

    with pytest.raises(ValueError, match="The required parameter `shopper` is missing."):
        service.validate_parameters({"shopper": ["reference"]})


def test_validate_parameters_requires_groups_to_be_mappings(config):
    service = EchoService({"shopper": "user-id"}, config=config)
    with pytest.raises(ValueError, match="The required parameter `shopper` must be a mapping."):
        service.validate_parameters({"shopper": ["reference"]})


def test_validate_parameters_accepts_zero(config):
    service = EchoService({"fraud_offset": 0}, config=config)
    service.validate_parameters("fraud_offset")


def test_call_posts_soap_envelope(config, session):
    session.respond_with(AUTHORISE_RESPONSE)
    service = EchoService(config=config, session=session)

    response = service.call_webservice_action("echo", echo_request(), Response)

    url, kwargs = session.last_post
    assert url == "https://pal-test.adyen.com/pal/servlet/soap/Echo"
    assert kwargs["headers"] == {
        "Accept": "text/xml",
        "Content-Type": "text/xml; charset=utf-8",
        "SOAPAction": "echo",
    }
    assert kwargs["auth"] == ("ws@Company.SuperShopper", "secret")
    assert kwargs["verify"] is True
    assert kwargs["timeout"] == 30
    assert kwargs["cert"] is None
    assert kwargs["data"].startswith(b"<?xml version='1.0' encoding='UTF-8'?>")
    assert session.posted_request().tag == "{http://payment.services.adyen.com}echo"

    assert response.success is True
    assert response.status_code == 200


def test_call_sends_client_certificate(session):
    config = Configuration(client_cert="/etc/adyen/client.pem", client_key="/etc/adyen/client.key")
    service = EchoService(config=config, session=session)
    service.call_webservice_action("echo", echo_request(), Response)

    _, kwargs = session.last_post
    assert kwargs["cert"] == ("/etc/adyen/client.pem", "/etc/adyen/client.key")
    assert kwargs["auth"] is None


def test_client_error_is_raised_for_4xx(config, session):
    session.respond_with("<html>401 Unauthorized</html>", status_code=401)
    service = EchoService(config=config, session=session)

    with pytest.raises(ClientError) as exc_info:
        service.call_webservice_action("echo", echo_request(), Response)

    error = exc_info.value
    assert error.action == "echo"
    assert error.endpoint == "https://pal-test.adyen.com/pal/servlet/soap/Echo"
    assert error.response.status_code == 401
    assert str(error) == "[echo - https://pal-test.adyen.com/pal/servlet/soap/Echo] A client error occurred."


def test_server_error_is_raised_for_5xx_without_fault(config, session):
    session.respond_with("Internal Server Error", status_code=500)
    service = EchoService(config=config, session=session)

    with pytest.raises(ServerError, match="A server error occurred"):
        service.call_webservice_action("echo", echo_request(), Response)


def test_5xx_with_fault_message_is_returned(config, session):
    session.respond_with(AUTHORISATION_REQUEST_INVALID_RESPONSE % "validation 101 Invalid card number", 500)
    service = EchoService(config=config, session=session)

    response = service.call_webservice_action("echo", echo_request(), AuthorisationResponse)
    assert response.server_error is False
    assert response.http_failure is True
    assert response.fault_message == "validation 101 Invalid card number"


def test_stubbed_response_skips_the_network(config, session):
    PaymentService.stub_success()
    response = PaymentService(config=config, session=session).call_webservice_action(
        "authorise", echo_request(), AuthorisationResponse
    )

    assert session.posts == []
    assert response.authorised is True
    assert PaymentService.stubbed_response is None


def test_stub_does_not_leak_to_other_services(config, session):
    PaymentService.stub_success()
    session.respond_with(AUTHORISE_RESPONSE)
    EchoService(config=config, session=session).call_webservice_action("echo", echo_request(), Response)

    assert len(session.posts) == 1
    assert PaymentService.stubbed_response is not None


def test_stub_on_a_base_class_is_consumed_by_subclasses(config, session):
    class MyPaymentService(PaymentService):
        pass

    PaymentService.stub_success()
    session.respond_with(AUTHORISE_RESPONSE)
    response = MyPaymentService(config=config, session=session).call_webservice_action(
        "authorise", echo_request(), AuthorisationResponse
    )

    assert response.authorised is True
    assert session.posts == []
    assert PaymentService.stubbed_response is None
    assert "stubbed_response" not in vars(MyPaymentService)

    PaymentService(config=config, session=session).call_webservice_action(
        "authorise", echo_request(), AuthorisationResponse
    )
    assert len(session.posts) == 1


def test_transport_errors_propagate(config, session):
    error = requests.ConnectionError("connection refused")
    session.fail_with(error)

    with pytest.raises(requests.ConnectionError) as excinfo:
        EchoService(config=config, session=session).call_webservice_action("echo", echo_request(), Response)

    assert excinfo.value is error


def test_debug_log_masks_card_numbers(config, session, caplog):
    session.respond_with(AUTHORISE_RESPONSE)
    service = EchoService(config=config, session=session)

    with caplog.at_level(logging.DEBUG, logger="adyen_soap.client"):
        service.call_webservice_action("echo", echo_request(), Response)

    assert "Posting SOAP action echo" in caplog.text
    assert "4444333322221111" not in caplog.text
    assert "************1111" in caplog.text

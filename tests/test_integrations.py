import json

from adyen_soap.integrations.pydantic import (
    PydanticAuthorisation,
    PydanticModification,
    PydanticRecurringList,
    PydanticStoredDetail,
    from_response,
)
from adyen_soap.payment_service import AuthorisationResponse, CaptureResponse
from adyen_soap.payout_service import StoreDetailResponse
from adyen_soap.recurring_service import ListResponse
from adyen_soap.testing import (
    AUTHORISATION_REQUEST_INVALID_RESPONSE,
    AUTHORISE_RESPONSE,
    LIST_EMPTY_RESPONSE,
    LIST_RESPONSE,
    STORE_DETAIL_RESPONSE,
    build_http_response,
    modification_response,
)


def test_authorisation_to_pydantic():
    model = from_response(AuthorisationResponse(build_http_response(AUTHORISE_RESPONSE)))

    assert isinstance(model, PydanticAuthorisation)
    assert model.success is True
    assert model.psp_reference == "9876543210987654"
    assert model.refused is False

    data = json.loads(model.model_dump_json())
    assert data["result_code"] == "Authorised"
    assert data["status_code"] == 200


def test_invalid_authorisation_to_pydantic():
    http_response = build_http_response(
        AUTHORISATION_REQUEST_INVALID_RESPONSE % "validation 130 Reference Missing", status_code=500
    )
    model = from_response(AuthorisationResponse(http_response))

    assert model.success is False
    assert model.invalid_request is True
    assert model.fault_message == "validation 130 Reference Missing"
    assert model.refusal_reason == "validation 130 Reference Missing"


def test_modification_to_pydantic():
    response = CaptureResponse(build_http_response(modification_response("capture", "[capture-received]")))
    model = from_response(response)

    assert isinstance(model, PydanticModification)
    assert model.response == "[capture-received]"


def test_recurring_list_to_pydantic():
    model = from_response(ListResponse(build_http_response(LIST_RESPONSE)))

    assert isinstance(model, PydanticRecurringList)
    assert len(model.details) == 3
    assert model.details[0].card.expiry_date.isoformat() == "2012-12-31"
    assert model.details[1].bank.iban == "NL69PSTB0001234567"
    assert model.details[2].elv.bank_location == "Berlin"

    data = json.loads(model.model_dump_json())
    assert data["shopper_reference"] == "user-id"

    empty = from_response(ListResponse(build_http_response(LIST_EMPTY_RESPONSE)))
    assert empty.details == []


def test_stored_detail_to_pydantic():
    model = from_response(StoreDetailResponse(build_http_response(STORE_DETAIL_RESPONSE % "Success")))

    assert isinstance(model, PydanticStoredDetail)
    assert model.recurring_detail_reference == "2713134957760046"

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from adyen_soap.payment_service import AuthorisationResponse, ModificationResponse
from adyen_soap.payout_service import StoreDetailResponse
from adyen_soap.recurring_service import DisableResponse, ListResponse, StoreTokenResponse
from adyen_soap.response import Response


class PydanticResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status_code: int
    success: bool
    fault_message: Optional[str] = None


class PydanticAuthorisation(PydanticResponse):
    psp_reference: Optional[str] = None
    result_code: Optional[str] = None
    auth_code: Optional[str] = None
    refusal_reason: Optional[str] = None
    refused: bool = False
    invalid_request: bool = False


class PydanticModification(PydanticResponse):
    psp_reference: Optional[str] = None
    response: Optional[str] = None


class PydanticCard(BaseModel):
    expiry_date: Optional[date] = None
    holder_name: Optional[str] = None
    number: Optional[str] = None


class PydanticBank(BaseModel):
    bank_account_number: Optional[str] = None
    bank_location_id: Optional[str] = None
    bank_name: Optional[str] = None
    bic: Optional[str] = None
    country_code: Optional[str] = None
    iban: Optional[str] = None
    owner_name: Optional[str] = None


class PydanticElv(BaseModel):
    holder_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_location: Optional[str] = None
    bank_location_id: Optional[str] = None
    bank_name: Optional[str] = None


class PydanticRecurringDetail(BaseModel):
    recurring_detail_reference: str
    variant: Optional[str] = None
    creation_date: Optional[datetime] = None
    card: Optional[PydanticCard] = None
    bank: Optional[PydanticBank] = None
    elv: Optional[PydanticElv] = None


class PydanticRecurringList(PydanticResponse):
    creation_date: Optional[datetime] = None
    details: List[PydanticRecurringDetail] = []
    last_known_shopper_email: Optional[str] = None
    shopper_reference: Optional[str] = None


class PydanticDisable(PydanticResponse):
    response: Optional[str] = None


class PydanticStoredDetail(PydanticResponse):
    psp_reference: Optional[str] = None
    result_code: Optional[str] = None
    recurring_detail_reference: Optional[str] = None


def from_response(response: Response) -> PydanticResponse:
    """
    Converts a service response into its Pydantic equivalent, combining the
    parsed params with the classification flags.
    """
    data = {
        "status_code": response.status_code,
        "success": response.success,
        "fault_message": response.fault_message,
        **response.params,
    }

    if isinstance(response, AuthorisationResponse):
        data["refused"] = response.refused
        data["invalid_request"] = response.invalid_request
        return PydanticAuthorisation.model_validate(data)
    if isinstance(response, ModificationResponse):
        return PydanticModification.model_validate(data)
    if isinstance(response, ListResponse):
        data["details"] = data.get("details") or []
        return PydanticRecurringList.model_validate(data)
    if isinstance(response, DisableResponse):
        return PydanticDisable.model_validate(data)
    if isinstance(response, (StoreTokenResponse, StoreDetailResponse)):
        return PydanticStoredDetail.model_validate(data)

    return PydanticResponse.model_validate(data)

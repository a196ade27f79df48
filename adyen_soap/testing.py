"""
Canned service responses for exercising code that talks to Adyen without
hitting the network.

Every service class exposes ``stub_*`` classmethods built on these bodies,
e.g. ``PaymentService.stub_refused()``. A stub answers the next call on that
service class only.
"""

import requests

ENVELOPE = """<?xml version="1.0" encoding="UTF-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/" xmlns:xsd="http://www.w3.org/2001/XMLSchema" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <soap:Body>
%s
  </soap:Body>
</soap:Envelope>
"""

AUTHORISE_RESPONSE = ENVELOPE % """
    <ns1:authoriseResponse xmlns:ns1="http://payment.services.adyen.com">
      <ns1:paymentResult>
        <additionalData xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <authCode xmlns="http://payment.services.adyen.com">1234</authCode>
        <dccAmount xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <dccSignature xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <fraudResult xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <issuerUrl xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <md xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <paRequest xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <pspReference xmlns="http://payment.services.adyen.com">9876543210987654</pspReference>
        <refusalReason xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <resultCode xmlns="http://payment.services.adyen.com">Authorised</resultCode>
      </ns1:paymentResult>
    </ns1:authoriseResponse>"""

AUTHORISATION_REFUSED_RESPONSE = ENVELOPE % """
    <ns1:authoriseResponse xmlns:ns1="http://payment.services.adyen.com">
      <ns1:paymentResult>
        <additionalData xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <authCode xmlns="http://payment.services.adyen.com"/>
        <dccAmount xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <dccSignature xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <fraudResult xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <issuerUrl xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <md xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <paRequest xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <pspReference xmlns="http://payment.services.adyen.com">7914120802434172</pspReference>
        <refusalReason xmlns="http://payment.services.adyen.com">You need to actually own money.</refusalReason>
        <resultCode xmlns="http://payment.services.adyen.com">Refused</resultCode>
      </ns1:paymentResult>
    </ns1:authoriseResponse>"""

# Formatted with the fault string, e.g. "validation 101 Invalid card number".
AUTHORISATION_REQUEST_INVALID_RESPONSE = ENVELOPE % """
    <soap:Fault>
      <faultcode>soap:Server</faultcode>
      <faultstring>%s</faultstring>
    </soap:Fault>"""

# Modification responses are formatted with the operation name twice and the
# value of the response element, e.g. ("capture", "capture", "[capture-received]").
MODIFICATION_RESPONSE = ENVELOPE % """
    <ns1:%sResponse xmlns:ns1="http://payment.services.adyen.com">
      <ns1:%sResult>
        <additionalData xmlns="http://payment.services.adyen.com" xsi:nil="true"/>
        <pspReference xmlns="http://payment.services.adyen.com">8512867956198946</pspReference>
        <response xmlns="http://payment.services.adyen.com">%s</response>
      </ns1:%sResult>
    </ns1:%sResponse>"""


def modification_response(operation: str, value: str) -> str:
    return MODIFICATION_RESPONSE % (operation, operation, value, operation, operation)


LIST_RESPONSE = ENVELOPE % """
    <ns1:listRecurringDetailsResponse xmlns:ns1="http://recurring.services.adyen.com">
      <ns1:result xmlns:ns2="http://payment.services.adyen.com">
        <ns1:creationDate>2009-10-27T11:26:22.203+01:00</ns1:creationDate>
        <details xmlns="http://recurring.services.adyen.com">
          <RecurringDetail>
            <bank xsi:nil="true"/>
            <card>
              <expiryMonth xmlns="http://payment.services.adyen.com">12</expiryMonth>
              <expiryYear xmlns="http://payment.services.adyen.com">2012</expiryYear>
              <holderName xmlns="http://payment.services.adyen.com">S. Hopper</holderName>
              <number xmlns="http://payment.services.adyen.com">1111</number>
            </card>
            <creationDate>2009-10-27T11:50:12.178+01:00</creationDate>
            <elv xsi:nil="true"/>
            <name/>
            <recurringDetailReference>RecurringDetailReference1</recurringDetailReference>
            <variant>mc</variant>
          </RecurringDetail>
          <RecurringDetail>
            <bank>
              <bankAccountNumber xmlns="http://payment.services.adyen.com">123456789</bankAccountNumber>
              <bankLocationId xmlns="http://payment.services.adyen.com">bank-location-id</bankLocationId>
              <bankName xmlns="http://payment.services.adyen.com">AnyBank</bankName>
              <bic xmlns="http://payment.services.adyen.com">BBBBCCLLbbb</bic>
              <countryCode xmlns="http://payment.services.adyen.com">NL</countryCode>
              <iban xmlns="http://payment.services.adyen.com">NL69PSTB0001234567</iban>
              <ownerName xmlns="http://payment.services.adyen.com">S. Hopper</ownerName>
            </bank>
            <card xsi:nil="true"/>
            <creationDate>2009-10-27T11:26:22.216+01:00</creationDate>
            <elv xsi:nil="true"/>
            <name/>
            <recurringDetailReference>RecurringDetailReference2</recurringDetailReference>
            <variant>IDEAL</variant>
          </RecurringDetail>
          <RecurringDetail>
            <bank xsi:nil="true"/>
            <card xsi:nil="true"/>
            <creationDate>2009-10-27T11:26:22.216+01:00</creationDate>
            <elv>
              <accountHolderName xmlns="http://payment.services.adyen.com">S. Hopper</accountHolderName>
              <bankAccountNumber xmlns="http://payment.services.adyen.com">1234567890</bankAccountNumber>
              <bankLocation xmlns="http://payment.services.adyen.com">Berlin</bankLocation>
              <bankLocationId xmlns="http://payment.services.adyen.com">12345678</bankLocationId>
              <bankName xmlns="http://payment.services.adyen.com">TestBank</bankName>
            </elv>
            <name/>
            <recurringDetailReference>RecurringDetailReference3</recurringDetailReference>
            <variant>elv</variant>
          </RecurringDetail>
        </details>
        <ns1:lastKnownShopperEmail>s.hopper@example.com</ns1:lastKnownShopperEmail>
        <ns1:shopperReference>user-id</ns1:shopperReference>
      </ns1:result>
    </ns1:listRecurringDetailsResponse>"""

LIST_EMPTY_RESPONSE = ENVELOPE % """
    <ns1:listRecurringDetailsResponse xmlns:ns1="http://recurring.services.adyen.com">
      <ns1:result>
        <details xmlns="http://recurring.services.adyen.com" xsi:nil="true"/>
        <lastKnownShopperEmail xmlns="http://recurring.services.adyen.com" xsi:nil="true"/>
        <shopperReference xmlns="http://recurring.services.adyen.com" xsi:nil="true"/>
      </ns1:result>
    </ns1:listRecurringDetailsResponse>"""

# Formatted with the response value, e.g. "[detail-successfully-disabled]".
DISABLE_RESPONSE = ENVELOPE % """
    <ns1:disableResponse xmlns:ns1="http://recurring.services.adyen.com">
      <ns1:result>
        <response xmlns="http://recurring.services.adyen.com">%s</response>
      </ns1:result>
    </ns1:disableResponse>"""

# Formatted with the result code, e.g. "Success".
STORE_TOKEN_RESPONSE = ENVELOPE % """
    <ns1:storeTokenResponse xmlns:ns1="http://recurring.services.adyen.com">
      <ns1:result>
        <lastKnownShopperEmail xmlns="http://recurring.services.adyen.com">s.hopper@example.com</lastKnownShopperEmail>
        <pspReference xmlns="http://recurring.services.adyen.com">8513928219307891</pspReference>
        <rechargeReference xmlns="http://recurring.services.adyen.com">8313147988756818</rechargeReference>
        <result xmlns="http://recurring.services.adyen.com">%s</result>
      </ns1:result>
    </ns1:storeTokenResponse>"""

# Formatted with the result code, e.g. "Success".
STORE_DETAIL_RESPONSE = ENVELOPE % """
    <ns1:storeDetailResponse xmlns:ns1="http://payout.services.adyen.com">
      <ns1:response>
        <pspReference xmlns="http://payout.services.adyen.com">9913134957760023</pspReference>
        <recurringDetailReference xmlns="http://payout.services.adyen.com">2713134957760046</recurringDetailReference>
        <resultCode xmlns="http://payout.services.adyen.com">%s</resultCode>
      </ns1:response>
    </ns1:storeDetailResponse>"""


def build_http_response(body: str, status_code: int = 200) -> requests.Response:
    """Builds a ``requests.Response`` as if ``body`` came off the wire."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "text/xml; charset=utf-8"
    return response

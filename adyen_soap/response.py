from typing import Any, Dict, Optional

from adyen_soap.querier import XMLQuerier


class ResponseAttr:
    """Read-only shortcut for a single key of :attr:`Response.params`."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Optional["Response"], owner: type) -> Any:
        if instance is None:
            return self
        return instance.params.get(self.name)


class Response:
    """
    Base class for the parsed result of a web service call.

    Wraps the HTTP response and classifies it. Subclasses declare where
    their fields live by overriding :meth:`_parse_params` and expose those
    fields as :class:`ResponseAttr` attributes.
    """

    def __init__(self, http_response: Any):
        self.http_response = http_response
        self._params: Optional[Dict[str, Any]] = None
        self._xml_querier: Optional[XMLQuerier] = None
        self._fault_message_loaded = False
        self._fault_message: Optional[str] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} status={self.status_code} params={self.params!r}>"

    @property
    def status_code(self) -> int:
        return self.http_response.status_code

    @property
    def body(self) -> bytes:
        return self.http_response.content

    @property
    def success(self) -> bool:
        """True when the service accepted the request at the HTTP level."""
        return not self.http_failure

    @property
    def http_failure(self) -> bool:
        return not 200 <= self.status_code < 300

    @property
    def server_error(self) -> bool:
        """
        True for a 5xx answer that carries no SOAP fault. Validation errors
        also arrive as 5xx, but always with a fault string.
        """
        return 500 <= self.status_code < 600 and self.fault_message is None

    @property
    def xml_querier(self) -> XMLQuerier:
        if self._xml_querier is None:
            self._xml_querier = XMLQuerier.xml(self.body)
        return self._xml_querier

    @property
    def fault_message(self) -> Optional[str]:
        if not self._fault_message_loaded:
            message = self.xml_querier.text("//soap:Fault/faultstring")
            self._fault_message = message or None
            self._fault_message_loaded = True
        return self._fault_message

    @property
    def params(self) -> Dict[str, Any]:
        if self._params is None:
            self._params = self._parse_params()
        return self._params

    def _parse_params(self) -> Dict[str, Any]:
        return {}

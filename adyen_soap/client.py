"""
Shared plumbing for the SOAP services: parameter validation, the HTTP
transport and the error types raised for transport-level failures.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import requests
from lxml import etree

from adyen_soap.config import Configuration, get_configuration
from adyen_soap.response import Response
from adyen_soap.writer import envelope, to_log_string

__all__ = [
    "ClientError",
    "ServerError",
    "SimpleSOAPClient",
    "SOAPError",
]

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Response)


class SOAPError(Exception):
    """Raised when a call fails at the transport level."""

    kind = "unknown"

    def __init__(self, response: Response, action: str, endpoint: str):
        self.response = response
        self.action = action
        self.endpoint = endpoint
        message = f"[{action} - {endpoint}] A {self.kind} error occurred."
        if response.fault_message:
            message = f"{message} {response.fault_message}"
        super().__init__(message)


class ClientError(SOAPError):
    """The service rejected the request itself, e.g. bad credentials (HTTP 4xx)."""

    kind = "client"


class ServerError(SOAPError):
    """The service failed without returning a SOAP fault (HTTP 5xx)."""

    kind = "server"


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Mapping, list, tuple)):
        return len(value) == 0
    return False


class SimpleSOAPClient:
    """
    Base class for the service classes. A service is instantiated with the
    params needed for the call that is eventually made.

    Subclasses set ``ENDPOINT_URI`` with a ``%s`` placeholder for the
    configured environment.
    """

    ENDPOINT_URI: str = ""

    # A canned HTTP response returned, once, by the next call on this class.
    stubbed_response: Optional[Any] = None

    def __init__(
        self,
        params: Optional[Dict[str, Any]] = None,
        *,
        config: Optional[Configuration] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or get_configuration()
        self.params: Dict[str, Any] = {**self.config.default_params, **(params or {})}
        self.session = session

    @property
    def endpoint(self) -> str:
        return self.ENDPOINT_URI % self.config.environment

    def validate_parameters(self, *required: Union[str, Mapping[str, Any]]) -> None:
        """
        Raises ``ValueError`` for the first required param that is blank.

        Each item is either a param name or a mapping of a param name to the
        keys required inside it, e.g. ``{"amount": ["currency", "value"]}``.
        """
        for item in required:
            if isinstance(item, str):
                if _is_blank(self.params.get(item)):
                    raise ValueError(f"The required parameter `{item}` is missing.")
                continue

            for name, keys in item.items():
                self.validate_parameters(name)
                group = self.params[name]
                if not isinstance(group, Mapping):
                    raise ValueError(f"The required parameter `{name}` must be a mapping.")
                for key in keys:
                    if _is_blank(group.get(key)):
                        raise ValueError(f"The required parameter `{name} => {key}` is missing.")

    @classmethod
    def _stub_owner(cls) -> Optional[type]:
        """The nearest class in the MRO holding an armed stub, if any."""
        for klass in cls.__mro__:
            if vars(klass).get("stubbed_response") is not None:
                return klass
        return None

    def call_webservice_action(
        self, action: str, data: etree._Element, response_class: Type[R]
    ) -> R:
        """
        Posts ``data`` inside a SOAP envelope and wraps the answer in
        ``response_class``.
        """
        stub_owner = self._stub_owner()
        if stub_owner is not None:
            stub = stub_owner.stubbed_response
            stub_owner.stubbed_response = None
            logger.info("Returning stubbed %s response for %s", response_class.__name__, action)
            return response_class(stub)

        endpoint = self.endpoint
        headers = {
            "Accept": "text/xml",
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": action,
        }

        logger.info("Posting SOAP action %s to %s", action, endpoint)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Request body for %s:\n%s", action, to_log_string(data))

        session = self.session or requests.Session()
        try:
            http_response = session.post(
                endpoint,
                data=envelope(data),
                headers=headers,
                auth=self.config.credentials,
                cert=self.config.cert,
                timeout=self.config.timeout,
                verify=True,
            )
        finally:
            if self.session is None:
                session.close()

        response = response_class(http_response)
        if 400 <= response.status_code < 500:
            logger.warning("Client error %s for %s at %s", response.status_code, action, endpoint)
            raise ClientError(response, action, endpoint)
        if response.server_error:
            logger.warning("Server error %s for %s at %s", response.status_code, action, endpoint)
            raise ServerError(response, action, endpoint)

        logger.info("Received %s response for %s", response.status_code, action)
        return response

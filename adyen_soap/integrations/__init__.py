"""
Integrations with third-party libraries like Pydantic.
"""

from .pydantic import from_response, PydanticResponse

__all__ = ["from_response", "PydanticResponse"]

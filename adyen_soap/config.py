"""
Configuration objects and helpers for the Adyen SOAP services.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "ConfigError",
    "Configuration",
    "configure",
    "get_configuration",
    "load_configuration",
]

ENVIRONMENTS = ("test", "live")

_PARAMETER_TO_ENV_KEY = {
    "environment": "ADYEN_ENVIRONMENT",
    "username": "ADYEN_API_USERNAME",
    "password": "ADYEN_API_PASSWORD",
    "merchant_account": "ADYEN_MERCHANT_ACCOUNT",
    "client_cert": "ADYEN_CLIENT_CERT",
    "client_key": "ADYEN_CLIENT_KEY",
    "timeout": "ADYEN_TIMEOUT",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class Configuration:
    """
    Settings shared by every service call.

    Attributes:
        environment: Either ``"test"`` or ``"live"``; selects the endpoint host.
        username: The web service user, sent with HTTP basic auth.
        password: The web service user's password.
        default_params: Params merged under every service's params, typically
            ``{"merchant_account": ...}``.
        client_cert: Optional path to a client certificate (PEM).
        client_key: Optional path to the client certificate's private key.
        timeout: Seconds to wait for the remote service.
    """

    environment: str = "test"
    username: Optional[str] = None
    password: Optional[str] = None
    default_params: Dict[str, Any] = field(default_factory=dict)
    client_cert: Optional[str] = None
    client_key: Optional[str] = None
    timeout: float = 30

    def __post_init__(self) -> None:
        if self.environment not in ENVIRONMENTS:
            raise ConfigError(
                f"Unknown environment '{self.environment}', expected one of {', '.join(ENVIRONMENTS)}"
            )
        if self.client_key and not self.client_cert:
            raise ConfigError("ADYEN_CLIENT_KEY is set but ADYEN_CLIENT_CERT is missing")
        if self.timeout <= 0:
            raise ConfigError("ADYEN_TIMEOUT must be greater than zero")

    @property
    def credentials(self) -> Optional[tuple]:
        if self.username is None:
            return None
        return (self.username, self.password or "")

    @property
    def cert(self) -> Optional[Any]:
        """The value ``requests`` expects for its ``cert`` argument."""
        if not self.client_cert:
            return None
        if self.client_key:
            return (self.client_cert, self.client_key)
        return self.client_cert


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def _parse_timeout(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"ADYEN_TIMEOUT must be a number, got '{raw}'") from exc


def load_configuration(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    **explicit: Any,
) -> Configuration:
    """
    Assemble a :class:`Configuration` from the environment.

    ``base`` defaults to :data:`os.environ`. Values from ``env_file`` only fill
    keys that are not already set. ``overrides`` (keyed by ``ADYEN_*`` names)
    and explicit keyword arguments (keyed by parameter name) always win.
    """
    merged: Dict[str, str] = dict(base if base is not None else os.environ)

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown configuration parameter '{key}'") from exc
        merged[env_key] = str(value)

    default_params: Dict[str, Any] = {}
    merchant_account = merged.get("ADYEN_MERCHANT_ACCOUNT")
    if merchant_account:
        default_params["merchant_account"] = merchant_account

    timeout = merged.get("ADYEN_TIMEOUT")

    return Configuration(
        environment=merged.get("ADYEN_ENVIRONMENT") or "test",
        username=merged.get("ADYEN_API_USERNAME") or None,
        password=merged.get("ADYEN_API_PASSWORD") or None,
        default_params=default_params,
        client_cert=merged.get("ADYEN_CLIENT_CERT") or None,
        client_key=merged.get("ADYEN_CLIENT_KEY") or None,
        timeout=_parse_timeout(timeout) if timeout else 30,
    )


_default_configuration: Optional[Configuration] = None


def configure(config: Optional[Configuration] = None, **kwargs: Any) -> Configuration:
    """
    Set the process-wide configuration used by services built without one.

    Either pass a ready :class:`Configuration` or keyword arguments for one.
    """
    global _default_configuration
    if config is not None and kwargs:
        raise ValueError("Provide either a Configuration or keyword arguments, not both.")
    _default_configuration = config if config is not None else Configuration(**kwargs)
    return _default_configuration


def get_configuration() -> Configuration:
    """
    Return the process-wide configuration, loading it from the environment on
    first use.
    """
    global _default_configuration
    if _default_configuration is None:
        _default_configuration = load_configuration()
    return _default_configuration

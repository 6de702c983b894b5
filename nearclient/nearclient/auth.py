"""Auth providers.

A provider turns one credential into exactly one HTTP header.  It is
attached to a client once, at construction time::

    client = Client.connect(url, auth=ApiKey("45d124c6-..."))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

API_KEY_HEADER = "x-api-key"
AUTHORIZATION_HEADER = "Authorization"


@runtime_checkable
class AuthProvider(Protocol):
    """Credential → one ``(name, value)`` header pair."""

    def header(self) -> tuple[str, str]:
        ...


def _check_credential(kind: str, value: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{kind} must be a non-empty string")
    # header values cannot span lines
    if any(c in value for c in "\r\n\0"):
        raise ValueError(f"{kind} contains characters not allowed in a header value")
    return value


@dataclass(frozen=True, slots=True)
class ApiKey:
    """Sends the credential in the ``x-api-key`` header."""

    key: str

    def __post_init__(self) -> None:
        _check_credential("API key", self.key)

    def header(self) -> tuple[str, str]:
        return API_KEY_HEADER, self.key

    def __repr__(self) -> str:
        return "ApiKey(key=<redacted>)"


@dataclass(frozen=True, slots=True)
class BearerToken:
    """Sends ``Authorization: Bearer <token>``."""

    token: str

    def __post_init__(self) -> None:
        _check_credential("bearer token", self.token)

    def header(self) -> tuple[str, str]:
        return AUTHORIZATION_HEADER, f"Bearer {self.token}"

    def __repr__(self) -> str:
        return "BearerToken(token=<redacted>)"

"""Node client — typed JSON-RPC 2.0 over HTTP.

* ``Client.connect(url)``  → client for one endpoint
* ``client.with_header()`` → forked client with one more header
* ``client.call(method)``  → decoded result, or a ``CallError``

A client is immutable configuration plus a shared transport handle, so
one instance can serve any number of concurrent calls.  Forks made with
``with_header`` / ``with_auth`` share the parent's transport.
"""

from __future__ import annotations

import dataclasses
import enum
import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Mapping

import httpx
from wire.jsonrpc import JsonRpcRequest, JsonRpcResponse

from nearclient.auth import (
    API_KEY_HEADER,
    AUTHORIZATION_HEADER,
    ApiKey,
    AuthProvider,
    BearerToken,
)
from nearclient.errors import (
    AuthStateError,
    EncodeError,
    InvalidEndpoint,
    ProtocolError,
    TransportError,
)
from nearclient.methods.base import RpcMethod
from nearclient.resolver import resolve_error
from nearclient.transport import HttpxTransport, Transport

if TYPE_CHECKING:
    from nearclient.config import ClientSettings

log = logging.getLogger(__name__)

CONTENT_TYPE = ("Content-Type", "application/json")
AUTH_HEADERS = frozenset({API_KEY_HEADER.lower(), AUTHORIZATION_HEADER.lower()})


class AuthState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


def parse_endpoint(url: Any) -> str:
    """Normalise a URL-like value — raises ``InvalidEndpoint``."""
    if isinstance(url, bytes):
        try:
            url = url.decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidEndpoint(url, "not ASCII") from exc
    elif not isinstance(url, (str, httpx.URL)):
        url = str(url)
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidEndpoint(url, str(exc)) from exc
    if parsed.scheme not in ("http", "https"):
        raise InvalidEndpoint(url, "scheme must be http or https")
    if not parsed.host:
        raise InvalidEndpoint(url, "missing host")
    return str(parsed)


def merge_headers(
    headers: tuple[tuple[str, str], ...], updates: Iterable[tuple[str, str]]
) -> tuple[tuple[str, str], ...]:
    """Merge *updates* into *headers*: case-insensitive names, last write wins."""
    merged = list(headers)
    for name, value in updates:
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError("header names and values must be strings")
        lowered = name.lower()
        merged = [(n, v) for n, v in merged if n.lower() != lowered]
        merged.append((name, value))
    return tuple(merged)


def _plain_headers(updates: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Reject credential headers, which only ``with_auth`` may attach."""
    updates = list(updates)
    for name, _ in updates:
        if isinstance(name, str) and name.lower() in AUTH_HEADERS:
            raise AuthStateError(
                f"{name!r} is an auth header; attach credentials with with_auth()"
            )
    return updates


@dataclass(frozen=True, slots=True)
class Client:
    """Immutable handle on one node endpoint.

    Use ``Client.connect`` rather than the constructor.
    """

    url: str
    headers: tuple[tuple[str, str], ...] = ()
    transport: Transport = field(default_factory=HttpxTransport, repr=False, compare=False)
    auth_state: AuthState = AuthState.UNAUTHENTICATED
    cause_first: bool = True

    # -- Construction --------------------------------------------------

    @classmethod
    def connect(
        cls,
        url: Any,
        *,
        transport: Transport | None = None,
        auth: AuthProvider | None = None,
        headers: Mapping[str, str] | None = None,
        cause_first: bool = True,
    ) -> "Client":
        """Build a client for *url*.

        ``cause_first`` picks which handler-error payload wins when both a
        ``cause`` wrapper and the flat ``data`` could match.
        """
        client = cls(
            url=parse_endpoint(url),
            headers=merge_headers((CONTENT_TYPE,), _plain_headers((headers or {}).items())),
            transport=transport if transport is not None else HttpxTransport(),
            cause_first=cause_first,
        )
        if auth is not None:
            client = client.with_auth(auth)
        return client

    @classmethod
    def from_settings(cls, settings: "ClientSettings", **kwargs: Any) -> "Client":
        """Build a client from ``ClientSettings`` (endpoint, credential, timeout)."""
        auth: AuthProvider | None = None
        if settings.api_key:
            auth = ApiKey(settings.api_key)
        elif settings.bearer_token:
            auth = BearerToken(settings.bearer_token)
        url = parse_endpoint(settings.url)
        if "transport" not in kwargs:
            kwargs["transport"] = HttpxTransport(timeout=settings.timeout)
        return cls.connect(url, auth=auth, **kwargs)

    def with_header(self, name: str, value: str) -> "Client":
        """Return a fork of this client with *name* set to *value*."""
        headers = merge_headers(self.headers, _plain_headers([(name, value)]))
        return dataclasses.replace(self, headers=headers)

    def with_headers(self, headers: Mapping[str, str]) -> "Client":
        merged = merge_headers(self.headers, _plain_headers(headers.items()))
        return dataclasses.replace(self, headers=merged)

    def with_auth(self, provider: AuthProvider) -> "Client":
        """Return an authenticated fork.  A client takes one provider only."""
        if self.auth_state is AuthState.AUTHENTICATED:
            raise AuthStateError("client already has an auth provider attached")
        name, value = provider.header()
        return dataclasses.replace(
            self,
            headers=merge_headers(self.headers, [(name, value)]),
            auth_state=AuthState.AUTHENTICATED,
        )

    @property
    def authenticated(self) -> bool:
        return self.auth_state is AuthState.AUTHENTICATED

    # -- Lifecycle -----------------------------------------------------

    async def aclose(self) -> None:
        """Close the transport, which every fork of this client shares."""
        await self.transport.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    # -- Unary RPC -----------------------------------------------------

    async def call(self, method: RpcMethod) -> Any:
        """Send *method* and return its decoded result.

        Raises ``TransportError``, ``ProtocolError``, ``DecodeError`` or a
        ``ServerError`` (``HandlerError`` / ``GenericRpcError`` /
        ``UnrecognizedError``).
        """
        if method.requires_auth and not self.authenticated:
            raise AuthStateError(
                f"{method.method_name()!r} requires an authenticated client"
            )

        name = method.method_name()
        try:
            req = JsonRpcRequest(method=name, params=method.encode_params())
            payload = json.dumps(req.to_dict()).encode()
        except (TypeError, ValueError) as exc:
            raise EncodeError(name, str(exc)) from exc

        log.debug("rpc → %s(id=%s)", name, req.id)

        reply = await self.transport.send(self.url, payload, dict(self.headers))
        if not 200 <= reply.status < 300:
            log.debug("rpc ← %s(id=%s) HTTP %s", name, req.id, reply.status)
            raise TransportError.from_status(reply.status, reply.body)

        try:
            raw = json.loads(reply.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ProtocolError(f"body is not JSON: {exc}", reply.body) from exc
        try:
            resp = JsonRpcResponse.from_dict(raw)
        except ValueError as exc:
            raise ProtocolError(str(exc), reply.body) from exc
        if resp.id != req.id:
            raise ProtocolError(
                f"response id {resp.id!r} does not match request id {req.id!r}", reply.body
            )

        if resp.is_error:
            log.debug("rpc ← %s(id=%s) error", name, req.id)
            raise resolve_error(method, resp.error, body=reply.body, cause_first=self.cause_first)

        log.debug("rpc ← %s(id=%s) ok", name, req.id)
        return method.decode_result(resp.result)


def connect(url: Any, **kwargs: Any) -> Client:
    """Shorthand for ``Client.connect``."""
    return Client.connect(url, **kwargs)

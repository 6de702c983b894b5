"""Error taxonomy for the client.

Everything raised by this package derives from ``NearRpcError``.  Call
failures derive from ``CallError`` and always keep the raw payload they
were built from, so callers can log or retry with full context.
"""

from __future__ import annotations

import enum
from typing import Any


class NearRpcError(Exception):
    """Base class for all errors raised by ``nearclient``."""


class InvalidEndpoint(NearRpcError, ValueError):
    """The value given to ``connect`` cannot be parsed as an http(s) URL."""

    def __init__(self, endpoint: Any, reason: str) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"invalid endpoint {endpoint!r}: {reason}")


class AuthStateError(NearRpcError, RuntimeError):
    """Programmer error: the client's auth state does not allow this."""


# ── Call errors ──────────────────────────────────────────────────────


class CallError(NearRpcError):
    """Base class for every failure of a single ``Client.call``."""


class TransportKind(enum.Enum):
    CONNECT = "connect"
    TIMEOUT = "timeout"
    TLS = "tls"
    NETWORK = "network"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    REQUEST_TIMEOUT = "request_timeout"
    TOO_MANY_REQUESTS = "too_many_requests"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    HTTP_STATUS = "http_status"

    @classmethod
    def from_status(cls, status: int) -> "TransportKind":
        return _STATUS_KINDS.get(status, cls.HTTP_STATUS)


_STATUS_KINDS = {
    400: TransportKind.BAD_REQUEST,
    401: TransportKind.UNAUTHORIZED,
    408: TransportKind.REQUEST_TIMEOUT,
    429: TransportKind.TOO_MANY_REQUESTS,
    500: TransportKind.INTERNAL_SERVER_ERROR,
    503: TransportKind.SERVICE_UNAVAILABLE,
}


class TransportError(CallError):
    """The HTTP exchange failed, or the node answered with a non-2xx status."""

    def __init__(
        self,
        kind: TransportKind,
        detail: str = "",
        *,
        status: int | None = None,
        body: bytes | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.status = status
        self.body = body
        msg = f"transport error ({kind.value})"
        if status is not None:
            msg += f" [HTTP {status}]"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)

    @classmethod
    def from_status(cls, status: int, body: bytes | None = None) -> "TransportError":
        return cls(TransportKind.from_status(status), status=status, body=body)


class EncodeError(CallError):
    """The method's params could not be serialised to JSON."""

    def __init__(self, method: str, detail: str) -> None:
        self.method = method
        self.detail = detail
        super().__init__(f"cannot encode params for {method!r}: {detail}")


class ProtocolError(CallError):
    """The HTTP call succeeded but the body is not a valid response envelope."""

    def __init__(self, reason: str, body: bytes | None = None) -> None:
        self.reason = reason
        self.body = body
        super().__init__(f"malformed response: {reason}")


class DecodeError(CallError):
    """The envelope carried a ``result`` that does not match the expected type."""

    def __init__(self, expected: str, raw: Any, detail: str = "") -> None:
        self.expected = expected
        self.raw = raw
        self.detail = detail
        msg = f"result does not match {expected}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class PollTimeout(CallError):
    """``fast_forward`` ran out of attempts before reaching its target height."""

    def __init__(self, target_height: int, last_height: int | None, attempts: int) -> None:
        self.target_height = target_height
        self.last_height = last_height
        self.attempts = attempts
        super().__init__(
            f"height {target_height} not reached after {attempts} attempts "
            f"(last seen: {last_height})"
        )


# ── Resolved server errors ───────────────────────────────────────────


class ServerError(CallError):
    """The node answered with a JSON-RPC ``error`` member.

    ``raw`` is the error member exactly as decoded from the body, and
    ``body`` the undecoded response bytes when available.
    """

    def __init__(self, message: str, *, raw: Any, body: bytes | None = None) -> None:
        self.raw = raw
        self.body = body
        super().__init__(message)

    def handler_error(self) -> Any:
        """Return the method-specific error, or re-raise ``self``."""
        raise self


class HandlerError(ServerError):
    """The error payload decoded into the method's declared error type."""

    def __init__(self, error: Any, *, raw: Any, body: bytes | None = None) -> None:
        self.error = error
        super().__init__(f"handler error: {error!r}", raw=raw, body=body)

    def handler_error(self) -> Any:
        return self.error


class GenericRpcError(ServerError):
    """A well-formed ``{code, message, data}`` error the method did not claim."""

    def __init__(
        self,
        code: int,
        message: str,
        data: Any = None,
        *,
        name: str | None = None,
        cause: Any = None,
        raw: Any,
        body: bytes | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.data = data
        self.name = name
        self.cause = cause
        super().__init__(f"[{code}] {message}", raw=raw, body=body)


class UnrecognizedError(ServerError):
    """An error payload matching no known shape, kept verbatim."""

    def __init__(self, *, raw: Any, body: bytes | None = None) -> None:
        super().__init__(f"unrecognized error payload: {raw!r}", raw=raw, body=body)


class RequestValidationError(GenericRpcError):
    """The node rejected the request before dispatching it.

    ``kind`` is the cause name (``PARSE_ERROR``, ``METHOD_NOT_FOUND``) and
    ``info`` its payload.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        cause = self.cause if isinstance(self.cause, dict) else {}
        kind = cause.get("name")
        self.kind = kind if isinstance(kind, str) else None
        self.info = cause.get("info")


class InternalError(GenericRpcError):
    """The node failed internally; ``info`` is its error message, if any."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        cause = self.cause if isinstance(self.cause, dict) else {}
        info = cause.get("info")
        message = info.get("error_message") if isinstance(info, dict) else None
        self.info = message if isinstance(message, str) else None

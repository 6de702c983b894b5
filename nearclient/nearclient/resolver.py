"""Error resolution.

Turns the ``error`` member of a response into a ``ServerError``, trying
the most specific interpretation first:

1. the method's own error type, against each candidate payload
   (``cause`` wrappers and ``data``);
2. the generic ``{code, message, data}`` shape, specialised by the
   top-level ``name`` for request validation and internal errors;
3. the untouched payload, as ``UnrecognizedError``.

Nodes change their error schemas independently of clients and have been
seen emitting partially serialised errors, so each step absorbs decode
failures of the previous one.  Resolution itself never raises.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from wire.jsonrpc import JsonRpcError

from nearclient.errors import (
    GenericRpcError,
    HandlerError,
    InternalError,
    RequestValidationError,
    ServerError,
    UnrecognizedError,
)
from nearclient.methods.base import RpcMethod

log = logging.getLogger(__name__)

# top-level error names whose cause is not a handler error
NAMED_ERRORS: dict[str, type[GenericRpcError]] = {
    "REQUEST_VALIDATION_ERROR": RequestValidationError,
    "INTERNAL_ERROR": InternalError,
}


def _cause_of(value: Any) -> Any:
    if isinstance(value, dict):
        cause = value.get("cause")
        if isinstance(cause, dict) and "name" in cause:
            return cause
    return None


def handler_candidates(error: Any, *, cause_first: bool = True) -> Iterator[Any]:
    """Yield the payloads a handler error may be decoded from, in order.

    Wrapped candidates are ``error.cause`` and ``error.data.cause``; the
    flat candidate is ``error.data``.  A legacy error member that is not
    a ``{code, message}`` object is itself the last candidate.  The
    top-level cause of a request validation or internal error is not a
    handler error and is skipped.
    """
    if not isinstance(error, dict):
        return
    data = error.get("data")
    name = error.get("name")
    named = isinstance(name, str) and name in NAMED_ERRORS
    top_cause = None if named else _cause_of(error)
    wrapped = [top_cause, _cause_of(data)]
    flat = [data]
    ordered = wrapped + flat if cause_first else flat + wrapped
    if "code" not in error and "message" not in error:
        ordered.append(error)
    seen: list[int] = []
    for candidate in ordered:
        if candidate is None or id(candidate) in seen:
            continue
        seen.append(id(candidate))
        yield candidate


def resolve_error(
    method: RpcMethod,
    error: Any,
    *,
    body: bytes | None = None,
    cause_first: bool = True,
) -> ServerError:
    """Classify *error* for *method*.  Always returns, never raises."""
    for candidate in handler_candidates(error, cause_first=cause_first):
        try:
            handled = method.decode_handler_error(candidate)
        except Exception:
            # a misbehaving custom decoder must not break resolution
            log.debug("handler error decoder raised for %s", method.method_name(), exc_info=True)
            handled = None
        if handled is not None:
            return HandlerError(handled, raw=error, body=body)

    try:
        generic = JsonRpcError.from_dict(error)
    except ValueError as exc:
        log.warning("unrecognized error payload for %s: %s", method.method_name(), exc)
        return UnrecognizedError(raw=error, body=body)

    name = generic.extra.get("name")
    cls = NAMED_ERRORS.get(name, GenericRpcError) if isinstance(name, str) else GenericRpcError
    return cls(
        generic.code,
        generic.message,
        generic.data,
        name=name if isinstance(name, str) else None,
        cause=generic.extra.get("cause"),
        raw=error,
        body=body,
    )

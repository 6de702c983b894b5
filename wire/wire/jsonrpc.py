"""JSON-RPC 2.0 wire-format models.

Pure data — no I/O, no business logic.  The client and the test node
import these for serialisation only.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

# ── Standard error codes (JSON-RPC 2.0 §5.1) ────────────────────────
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000

JSONRPC_VERSION = "2.0"


# ── Models ───────────────────────────────────────────────────────────
@dataclass(slots=True)
class JsonRpcError:
    """JSON-RPC 2.0 error object.

    Node errors carry more than the three standard members (``name``,
    ``cause``); those are kept in ``extra`` so nothing is dropped.
    """

    code: int
    message: str
    data: Any = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {**self.extra, "code": self.code, "message": self.message}
        if self.data is not None:
            d["data"] = self.data
        return d

    @classmethod
    def from_dict(cls, raw: Any) -> "JsonRpcError":
        """Strictly parse an error object — raises ``ValueError`` on bad input."""
        if not isinstance(raw, dict):
            raise ValueError("error must be a JSON object")
        code = raw.get("code")
        # bool is an int subclass; JSON true is not a code
        if not isinstance(code, int) or isinstance(code, bool):
            raise ValueError("missing or invalid 'code' field")
        message = raw.get("message")
        if not isinstance(message, str):
            raise ValueError("missing or invalid 'message' field")
        extra = {k: v for k, v in raw.items() if k not in ("code", "message", "data")}
        return cls(code=code, message=message, data=raw.get("data"), extra=extra)


@dataclass(slots=True)
class JsonRpcRequest:
    """Outbound JSON-RPC 2.0 request.

    ``id`` is auto-generated if not supplied.  ``params`` is sent as
    ``null`` for methods that take no parameters.
    """

    method: str
    params: Any = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    jsonrpc: str = JSONRPC_VERSION

    # -- Convenience ---------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
            "params": self.params,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "JsonRpcRequest":
        """Parse a raw dict into a request — raises ``ValueError`` on bad input."""
        if not isinstance(raw, dict):
            raise ValueError("request must be a JSON object")
        if raw.get("jsonrpc") != JSONRPC_VERSION:
            raise ValueError("missing or invalid 'jsonrpc' field")
        method = raw.get("method")
        if not isinstance(method, str) or not method:
            raise ValueError("missing or invalid 'method' field")
        params = raw.get("params")
        if params is not None and not isinstance(params, (dict, list)):
            raise ValueError("'params' must be a JSON object, array or null")
        req_id = raw.get("id")
        if req_id is None:
            req_id = uuid.uuid4().hex
        return cls(method=method, params=params, id=req_id)


@dataclass(slots=True)
class JsonRpcResponse:
    """JSON-RPC 2.0 response.

    ``error`` holds the server's error member exactly as received; it is
    only interpreted later, by the error resolver.
    """

    id: Any
    result: Any = None
    error: Any = None
    jsonrpc: str = JSONRPC_VERSION

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            d["error"] = (
                self.error.to_dict() if isinstance(self.error, JsonRpcError) else self.error
            )
        else:
            d["result"] = self.result
        return d

    @classmethod
    def from_dict(cls, raw: Any) -> "JsonRpcResponse":
        """Parse a response envelope — raises ``ValueError`` on bad input.

        Exactly one of ``result`` / ``error`` must be present.  An
        ``error`` member set to ``null`` counts as absent.
        """
        if not isinstance(raw, dict):
            raise ValueError("response must be a JSON object")
        if raw.get("jsonrpc") != JSONRPC_VERSION:
            raise ValueError("missing or invalid 'jsonrpc' field")
        if "id" not in raw:
            raise ValueError("missing 'id' field")
        has_result = "result" in raw
        has_error = raw.get("error") is not None
        if has_result and has_error:
            raise ValueError("response carries both 'result' and 'error'")
        if not has_result and not has_error:
            raise ValueError("response carries neither 'result' nor 'error'")
        if has_error:
            return cls(id=raw["id"], error=raw["error"])
        return cls(id=raw["id"], result=raw["result"])

    # -- Factories -----------------------------------------------------
    @classmethod
    def success(cls, req_id: Any, result: Any) -> "JsonRpcResponse":
        return cls(id=req_id, result=result)

    @classmethod
    def fail(
        cls, req_id: Any, code: int, message: str, data: Any = None
    ) -> "JsonRpcResponse":
        return cls(
            id=req_id,
            error=JsonRpcError(code=code, message=message, data=data),
        )

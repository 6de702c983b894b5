"""nearclient — typed JSON-RPC client for NEAR nodes."""

from nearclient.auth import ApiKey, AuthProvider, BearerToken
from nearclient.client import AuthState, Client, connect
from nearclient.errors import (
    AuthStateError,
    CallError,
    DecodeError,
    EncodeError,
    GenericRpcError,
    HandlerError,
    InternalError,
    InvalidEndpoint,
    NearRpcError,
    PollTimeout,
    ProtocolError,
    RequestValidationError,
    ServerError,
    TransportError,
    TransportKind,
    UnrecognizedError,
)
from nearclient.methods import RpcAnyRequest, RpcMethod, any_request
from nearclient.resolver import resolve_error
from nearclient.sandbox import fast_forward
from nearclient.transport import HttpReply, HttpxTransport, Transport

__all__ = [
    "Client",
    "connect",
    "AuthState",
    "AuthProvider",
    "ApiKey",
    "BearerToken",
    "RpcMethod",
    "RpcAnyRequest",
    "any_request",
    "resolve_error",
    "fast_forward",
    "Transport",
    "HttpxTransport",
    "HttpReply",
    "NearRpcError",
    "InvalidEndpoint",
    "AuthStateError",
    "CallError",
    "TransportError",
    "TransportKind",
    "EncodeError",
    "ProtocolError",
    "DecodeError",
    "PollTimeout",
    "ServerError",
    "HandlerError",
    "GenericRpcError",
    "RequestValidationError",
    "InternalError",
    "UnrecognizedError",
]

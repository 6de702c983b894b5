"""Generic descriptor for methods missing from the catalog.

For experimental or unstable node methods, or to decode only the part
of a response you care about::

    @dataclass
    class PartialGenesis:
        chain_id: str
        genesis_height: int

    req = any_request("EXPERIMENTAL_genesis_config", None, result=PartialGenesis)
    genesis = await client.call(req)

The caller is responsible for pairing the name with the right shapes.
No handler error type is assumed: pass ``error=`` to have error payloads
decoded, otherwise they resolve as generic or unrecognized errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nearclient.methods.base import RpcMethod, decode_as, try_decode_as


@dataclass(frozen=True)
class RpcAnyRequest(RpcMethod):
    """Descriptor whose name, params and types are all supplied at call time."""

    method: str
    params: Any = None
    result_type: Any = field(default=Any, kw_only=True)
    error_type: Any = field(default=None, kw_only=True)

    def method_name(self) -> str:
        return self.method

    def encode_params(self) -> Any:
        return self.params

    def decode_result(self, value: Any) -> Any:
        return decode_as(self.result_type, value)

    def decode_handler_error(self, value: Any) -> Any | None:
        return try_decode_as(self.error_type, value)


def any_request(
    method: str,
    params: Any = None,
    *,
    result: Any = Any,
    error: Any = None,
    like: type[RpcMethod] | None = None,
) -> RpcAnyRequest:
    """Build an ``RpcAnyRequest``.

    With ``like=SomeDescriptor`` the result and error types are borrowed
    from that catalog descriptor, so a differently-shaped call can still
    decode into the catalog's types.
    """
    if like is not None:
        result, error = like.result_type, like.error_type
    return RpcAnyRequest(method, params, result_type=result, error_type=error)

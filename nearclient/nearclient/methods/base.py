"""Method descriptor contract.

A descriptor is a frozen dataclass holding one call's parameters.  Its
wire identity is declared once, through class keywords::

    @dataclass(frozen=True)
    class RpcGasPriceRequest(
        RpcMethod, method="gas_price", result=dict[str, Any], params="array"
    ):
        block_id: int | str | None = None

The base class derives ``encode_params``, ``decode_result`` and
``decode_handler_error`` from those declarations, so catalog entries are
data only.
"""

from __future__ import annotations

import dataclasses
import functools
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import TypeAdapter, ValidationError

from nearclient.errors import DecodeError

if TYPE_CHECKING:
    from nearclient.client import Client

PARAM_STYLES = ("object", "array", "value")


@functools.lru_cache(maxsize=None)
def type_adapter(tp: Any) -> TypeAdapter:
    """Return a cached ``TypeAdapter`` for *tp*."""
    return TypeAdapter(tp)


def type_name(tp: Any) -> str:
    return getattr(tp, "__qualname__", None) or repr(tp)


def decode_as(tp: Any, value: Any) -> Any:
    """Validate *value* against *tp* — raises ``DecodeError`` on mismatch."""
    try:
        return type_adapter(tp).validate_python(value)
    except ValidationError as exc:
        raise DecodeError(type_name(tp), value, str(exc)) from exc


def try_decode_as(tp: Any, value: Any) -> Any | None:
    """Best-effort variant of ``decode_as``: ``None`` when *value* does not fit."""
    if tp is None or value is None:
        return None
    try:
        return type_adapter(tp).validate_python(value)
    except ValidationError:
        return None


class RpcMethod:
    """Base class of every method descriptor.

    Class keywords
    --------------
    method : str
        Wire method name.
    result : type
        Expected type of ``result``.  Defaults to ``Any``.
    error : type | None
        Method-specific error type decoded from error payloads.  ``None``
        means the method declares none.
    params : str
        ``"object"`` (fields as a JSON object, ``None`` fields dropped),
        ``"array"`` (fields as a positional array) or ``"value"`` (the
        single field forwarded as-is).
    requires_auth : bool
        Only callable through an authenticated client.
    """

    rpc_name: ClassVar[str | None] = None
    result_type: ClassVar[Any] = Any
    error_type: ClassVar[Any] = None
    params_style: ClassVar[str] = "object"
    requires_auth: ClassVar[bool] = False

    def __init_subclass__(
        cls,
        *,
        method: str | None = None,
        result: Any = dataclasses.MISSING,
        error: Any = dataclasses.MISSING,
        params: str | None = None,
        requires_auth: bool | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        # only what is declared here overrides what is inherited
        if method is not None:
            cls.rpc_name = method
        if result is not dataclasses.MISSING:
            cls.result_type = result
        if error is not dataclasses.MISSING:
            cls.error_type = error
        if params is not None:
            if params not in PARAM_STYLES:
                raise TypeError(f"{cls.__name__}: unknown params style {params!r}")
            cls.params_style = params
        if requires_auth is not None:
            cls.requires_auth = requires_auth

    # -- Contract ------------------------------------------------------

    def method_name(self) -> str:
        if self.rpc_name is None:
            raise TypeError(f"{type(self).__name__} declares no method name")
        return self.rpc_name

    def encode_params(self) -> Any:
        """Return the JSON ``params`` value; ``None`` for zero-arg methods."""
        names = [f.name for f in dataclasses.fields(self)] if dataclasses.is_dataclass(self) else []
        if not names:
            return None
        dumped = type_adapter(type(self)).dump_python(self, mode="json")
        if self.params_style == "array":
            return [dumped[n] for n in names]
        if self.params_style == "value":
            if len(names) != 1:
                raise TypeError(f"{type(self).__name__}: 'value' params need exactly one field")
            return dumped[names[0]]
        return {n: dumped[n] for n in names if dumped[n] is not None}

    def decode_result(self, value: Any) -> Any:
        return decode_as(self.result_type, value)

    def decode_handler_error(self, value: Any) -> Any | None:
        return try_decode_as(self.error_type, value)

    # -- Symmetric call form --------------------------------------------

    async def call_on(self, client: "Client") -> Any:
        """Issue this request through *client*; same as ``client.call(self)``."""
        return await client.call(self)

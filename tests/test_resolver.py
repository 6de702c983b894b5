"""Tests for error resolution: handler → generic → unrecognized."""

import copy
from typing import Any

import pytest
from nearclient.errors import (
    GenericRpcError,
    HandlerError,
    InternalError,
    RequestValidationError,
    UnrecognizedError,
)
from nearclient.methods import (
    RpcBlockError,
    RpcBlockRequest,
    RpcStatusRequest,
    RpcTransactionError,
    RpcTransactionStatusRequest,
    any_request,
)
from nearclient.resolver import handler_candidates, resolve_error

TX = RpcTransactionStatusRequest(tx_hash="9FtH", sender_account_id="miraclx.near")


def structured_error(cause: dict[str, Any], data: Any = None) -> dict[str, Any]:
    """Error member shaped like a current node's handler error."""
    return {
        "name": "HANDLER_ERROR",
        "cause": cause,
        "code": -32000,
        "message": "Server error",
        "data": data,
    }


class TestHandlerLayer:
    def test_top_level_cause(self):
        error = structured_error({"name": "UNKNOWN_BLOCK", "info": {"block_reference": {"block_id": 1}}})
        resolved = resolve_error(RpcBlockRequest(), error)
        assert isinstance(resolved, HandlerError)
        assert resolved.error == RpcBlockError(
            name="UNKNOWN_BLOCK",
            info={"block_reference": {"block_id": 1}, "error_message": ""},
        )
        assert resolved.raw is error

    def test_cause_nested_in_data(self):
        error = {
            "code": -32000,
            "message": "Server error",
            "data": {"cause": {"name": "UNKNOWN_TRANSACTION", "info": {"requested_transaction_hash": "9FtH"}}},
        }
        resolved = resolve_error(TX, error)
        assert isinstance(resolved, HandlerError)
        assert resolved.error.name == "UNKNOWN_TRANSACTION"

    def test_flat_data(self):
        error = {
            "code": -32000,
            "message": "Server error",
            "data": {"name": "TIMEOUT_ERROR", "info": {}},
        }
        resolved = resolve_error(TX, error)
        assert isinstance(resolved, HandlerError)
        assert resolved.handler_error() == RpcTransactionError(name="TIMEOUT_ERROR", info={})

    def test_legacy_data_payload(self):
        error = {
            "code": -32000,
            "message": "Server error",
            "data": {"TxExecutionError": {"InvalidTxError": {"Expired": None}}},
        }
        resolved = resolve_error(TX, error)
        assert isinstance(resolved, HandlerError)
        assert resolved.error.name == "INVALID_TRANSACTION"

    def test_legacy_bare_error_member(self):
        error = {"name": "NOT_SYNCED_YET", "info": {}}
        resolved = resolve_error(RpcBlockRequest(), error)
        assert isinstance(resolved, HandlerError)
        assert resolved.raw is error

    def test_raw_payload_is_not_modified(self):
        error = structured_error({"name": "UNKNOWN_BLOCK"})
        before = copy.deepcopy(error)
        resolved = resolve_error(RpcBlockRequest(), error)
        assert isinstance(resolved, HandlerError)
        assert resolved.error.info == {"error_message": ""}
        assert error == before

    def test_body_is_kept(self):
        body = b'{"jsonrpc":"2.0","id":"1","error":{"name":"NOT_SYNCED_YET"}}'
        resolved = resolve_error(RpcBlockRequest(), {"name": "NOT_SYNCED_YET"}, body=body)
        assert resolved.body == body


class TestCausePrecedence:
    error = {
        "code": -32000,
        "message": "Server error",
        "cause": {"name": "UNKNOWN_BLOCK", "info": {"from": "cause"}},
        "data": {"name": "NOT_SYNCED_YET", "info": {"from": "data"}},
    }

    def test_wrapped_form_first_by_default(self):
        resolved = resolve_error(RpcBlockRequest(), self.error)
        assert resolved.error.name == "UNKNOWN_BLOCK"

    def test_flat_form_first_when_configured(self):
        resolved = resolve_error(RpcBlockRequest(), self.error, cause_first=False)
        assert resolved.error.name == "NOT_SYNCED_YET"

    def test_candidate_order(self):
        wrapped, flat = self.error["cause"], self.error["data"]
        assert list(handler_candidates(self.error)) == [wrapped, flat]
        assert list(handler_candidates(self.error, cause_first=False)) == [flat, wrapped]


class TestGenericLayer:
    def test_unknown_transaction_with_null_data(self):
        error = {"code": -32000, "message": "unknown transaction", "data": None}
        resolved = resolve_error(TX, error)
        assert isinstance(resolved, GenericRpcError)
        assert resolved.code == -32000
        assert resolved.message == "unknown transaction"
        assert resolved.data is None
        assert resolved.raw is error

    def test_unclaimed_cause_falls_back_with_context(self):
        cause = {"name": "UNKNOWN_ACCOUNT", "info": {"requested_account_id": "x.near"}}
        error = structured_error(cause, data="account x.near does not exist")
        resolved = resolve_error(RpcBlockRequest(), error)
        assert isinstance(resolved, GenericRpcError)
        assert resolved.name == "HANDLER_ERROR"
        assert resolved.cause == cause
        assert resolved.data == "account x.near does not exist"

    def test_method_without_error_type(self):
        error = {"code": -32601, "message": "Method not found"}
        resolved = resolve_error(any_request("nope"), error)
        assert isinstance(resolved, GenericRpcError)
        assert resolved.code == -32601

    def test_any_request_leaves_data_unclaimed(self):
        error = {"code": -32000, "message": "Server error", "data": "Block not found"}
        resolved = resolve_error(any_request("block"), error)
        assert isinstance(resolved, GenericRpcError)
        assert resolved.data == "Block not found"

    def test_any_request_opts_into_a_handler_type(self):
        error = {"code": -32000, "message": "Server error", "data": "Block not found"}
        resolved = resolve_error(any_request("block", error=Any), error)
        assert isinstance(resolved, HandlerError)
        assert resolved.error == "Block not found"

    def test_handler_error_reraises_for_generic(self):
        resolved = resolve_error(TX, {"code": -32000, "message": "x"})
        with pytest.raises(GenericRpcError):
            resolved.handler_error()


class TestNamedErrors:
    def test_request_validation_error(self):
        error = {
            "name": "REQUEST_VALIDATION_ERROR",
            "cause": {"name": "METHOD_NOT_FOUND", "info": {"method_name": "blokc"}},
            "code": -32601,
            "message": "Method not found",
            "data": "blokc",
        }
        resolved = resolve_error(RpcBlockRequest(), error)
        assert isinstance(resolved, RequestValidationError)
        assert resolved.kind == "METHOD_NOT_FOUND"
        assert resolved.info == {"method_name": "blokc"}
        assert resolved.code == -32601
        assert resolved.raw is error

    def test_internal_error_is_not_a_handler_error(self):
        error = {
            "name": "INTERNAL_ERROR",
            "cause": {"name": "INTERNAL_ERROR", "info": {"error_message": "storage offline"}},
            "code": -32000,
            "message": "Server error",
            "data": "storage offline",
        }
        resolved = resolve_error(RpcBlockRequest(), error)
        assert isinstance(resolved, InternalError)
        assert isinstance(resolved, GenericRpcError)
        assert resolved.info == "storage offline"
        assert resolved.code == -32000

    def test_internal_error_without_message(self):
        error = {"name": "INTERNAL_ERROR", "code": -32000, "message": "Server error"}
        resolved = resolve_error(TX, error)
        assert isinstance(resolved, InternalError)
        assert resolved.info is None

    def test_unhashable_name_is_tolerated(self):
        error = {"name": ["odd"], "code": -32000, "message": "Server error"}
        resolved = resolve_error(TX, error)
        assert type(resolved) is GenericRpcError
        assert resolved.name is None


class TestUnrecognizedLayer:
    @pytest.mark.parametrize(
        "payload",
        [
            "Internal server error",
            42,
            True,
            [1, 2, 3],
            {},
            {"code": "bad", "message": "string code"},
            {"code": -32000},
            {"message": "no code"},
            {"error": {"nested": "legacy"}},
            {"code": None, "message": None, "data": {"name": "NOPE"}},
        ],
    )
    def test_malformed_payloads_never_raise(self, payload):
        before = copy.deepcopy(payload)
        resolved = resolve_error(RpcStatusRequest(), payload)
        assert isinstance(resolved, UnrecognizedError)
        assert resolved.raw == before
        assert resolved.raw is payload

    def test_any_request_does_not_claim_malformed_payloads(self):
        payload = {"legacy": "shape"}
        resolved = resolve_error(any_request("x"), payload)
        assert isinstance(resolved, UnrecognizedError)
        assert resolved.raw is payload

    def test_body_retained_byte_for_byte(self):
        body = b'{"jsonrpc": "2.0", "id": "1", "error": "\\u00e9chec  total"}'
        resolved = resolve_error(RpcStatusRequest(), "échec  total", body=body)
        assert isinstance(resolved, UnrecognizedError)
        assert resolved.body == body

    def test_raising_decoder_falls_through(self):
        class Exploding(RpcStatusRequest):
            def decode_handler_error(self, value):
                raise RuntimeError("decoder bug")

        resolved = resolve_error(Exploding(), {"code": 1, "message": "m", "data": {"x": 1}})
        assert isinstance(resolved, GenericRpcError)

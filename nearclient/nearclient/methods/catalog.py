"""Catalog of node methods.

Each entry is data: a frozen dataclass of parameters plus the class
keywords naming the wire method, result type and handler-error type.
Results are left as plain JSON objects unless the client relies on a
field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from nearclient.methods.base import RpcMethod

JsonObject = dict[str, Any]
BlockId = int | str


# ── Result types ─────────────────────────────────────────────────────


@dataclass(slots=True)
class SyncInfo:
    latest_block_height: int
    latest_block_hash: str = ""
    latest_block_time: str = ""
    syncing: bool = False


@dataclass(slots=True)
class StatusResponse:
    sync_info: SyncInfo
    chain_id: str = ""
    protocol_version: int | None = None
    version: JsonObject = field(default_factory=dict)
    validators: list[Any] = field(default_factory=list)


@dataclass(slots=True)
class TransactionResponse:
    status: Any
    final_execution_status: str | None = None
    transaction: JsonObject | None = None
    transaction_outcome: JsonObject | None = None
    receipts_outcome: list[Any] = field(default_factory=list)


# ── Handler errors ───────────────────────────────────────────────────
# Node errors are causes tagged by ``name`` with a variant payload in
# ``info``; each type below admits only the names its methods emit.


@dataclass(slots=True)
class RpcStatusError:
    name: Literal["NODE_IS_SYNCING", "NO_NEW_BLOCKS", "EPOCH_OUT_OF_BOUNDS", "INTERNAL_ERROR"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcBlockError:
    name: Literal["UNKNOWN_BLOCK", "NOT_SYNCED_YET", "INTERNAL_ERROR"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcChunkError:
    name: Literal["INTERNAL_ERROR", "UNKNOWN_BLOCK", "INVALID_SHARD_ID", "UNKNOWN_CHUNK"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcGasPriceError:
    name: Literal["INTERNAL_ERROR", "UNKNOWN_BLOCK"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcQueryError:
    name: Literal[
        "NO_SYNCED_BLOCKS",
        "UNAVAILABLE_SHARD",
        "GARBAGE_COLLECTED_BLOCK",
        "UNKNOWN_BLOCK",
        "INVALID_ACCOUNT",
        "UNKNOWN_ACCOUNT",
        "NO_CONTRACT_CODE",
        "TOO_LARGE_CONTRACT_STATE",
        "UNKNOWN_ACCESS_KEY",
        "CONTRACT_EXECUTION_ERROR",
        "UNKNOWN_GAS_KEY",
        "INTERNAL_ERROR",
    ]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcTransactionError:
    name: Literal[
        "INVALID_TRANSACTION",
        "DOES_NOT_TRACK_SHARD",
        "REQUEST_ROUTED",
        "UNKNOWN_TRANSACTION",
        "INTERNAL_ERROR",
        "TIMEOUT_ERROR",
    ]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcValidatorError:
    name: Literal["UNKNOWN_EPOCH", "VALIDATOR_INFO_UNAVAILABLE", "INTERNAL_ERROR"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcStateChangesError:
    name: Literal["UNKNOWN_BLOCK", "NOT_SYNCED_YET", "INTERNAL_ERROR"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcReceiptError:
    name: Literal["INTERNAL_ERROR", "UNKNOWN_RECEIPT"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcProtocolConfigError:
    name: Literal["UNKNOWN_BLOCK", "INTERNAL_ERROR"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcLightClientError:
    name: Literal[
        "UNKNOWN_BLOCK",
        "INCONSISTENT_STATE",
        "NOT_CONFIRMED",
        "UNKNOWN_TRANSACTION_OR_RECEIPT",
        "UNAVAILABLE_SHARD",
        "EPOCH_OUT_OF_BOUNDS",
        "INTERNAL_ERROR",
    ]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcNetworkInfoError:
    name: Literal["INTERNAL_ERROR"]
    info: JsonObject = field(default_factory=dict)


@dataclass(slots=True)
class RpcSandboxError:
    name: Literal["INTERNAL_ERROR"]
    info: JsonObject = field(default_factory=dict)


# ── Legacy payload workarounds ───────────────────────────────────────


class _TolerantUnknownBlock:
    """Give ``UNKNOWN_BLOCK`` causes an ``info["error_message"]`` key.

    Some node versions omit it, or send ``info`` as ``null``.
    """

    def decode_handler_error(self, value: Any) -> Any | None:
        if isinstance(value, dict) and value.get("name") == "UNKNOWN_BLOCK":
            info = value.get("info")
            info = dict(info) if isinstance(info, dict) else {}
            info.setdefault("error_message", "")
            value = {"name": "UNKNOWN_BLOCK", "info": info}
        return super().decode_handler_error(value)  # type: ignore[misc]


class _LegacyTransactionError:
    """Map the old ``{"TxExecutionError": {"InvalidTxError": ...}}`` payload."""

    def decode_handler_error(self, value: Any) -> Any | None:
        if isinstance(value, dict) and isinstance(value.get("TxExecutionError"), dict):
            context = value["TxExecutionError"].get("InvalidTxError")
            if context is None:
                return None
            return RpcTransactionError(name="INVALID_TRANSACTION", info={"context": context})
        return super().decode_handler_error(value)  # type: ignore[misc]


# ── Core methods ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class RpcStatusRequest(
    RpcMethod, method="status", result=StatusResponse, error=RpcStatusError
):
    pass


@dataclass(frozen=True)
class RpcHealthRequest(RpcMethod, method="health", result=None, error=RpcStatusError):
    pass


@dataclass(frozen=True)
class RpcNetworkInfoRequest(
    RpcMethod, method="network_info", result=JsonObject, error=RpcNetworkInfoError
):
    pass


@dataclass(frozen=True)
class RpcBlockRequest(
    _TolerantUnknownBlock,
    RpcMethod,
    method="block",
    result=JsonObject,
    error=RpcBlockError,
    params="value",
):
    """``block_reference`` is ``{"finality": ...}``, ``{"block_id": ...}``
    or ``{"sync_checkpoint": ...}``."""

    block_reference: JsonObject = field(default_factory=lambda: {"finality": "final"})


@dataclass(frozen=True)
class RpcChunkRequest(
    RpcMethod, method="chunk", result=JsonObject, error=RpcChunkError, params="value"
):
    """``chunk_reference`` is ``{"chunk_id": ...}`` or ``{"block_id": ..., "shard_id": ...}``."""

    chunk_reference: JsonObject


@dataclass(frozen=True)
class RpcGasPriceRequest(
    _TolerantUnknownBlock,
    RpcMethod,
    method="gas_price",
    result=JsonObject,
    error=RpcGasPriceError,
    params="array",
):
    block_id: BlockId | None = None


@dataclass(frozen=True)
class RpcQueryRequest(
    RpcMethod, method="query", result=JsonObject, error=RpcQueryError, params="value"
):
    """``request`` carries ``request_type`` plus a block reference."""

    request: JsonObject


@dataclass(frozen=True)
class RpcValidatorsRequest(
    RpcMethod, method="validators", result=JsonObject, error=RpcValidatorError, params="array"
):
    block_id: BlockId | None = None


@dataclass(frozen=True)
class RpcLightClientExecutionProofRequest(
    RpcMethod, method="light_client_proof", result=JsonObject, error=RpcLightClientError
):
    type: Literal["transaction", "receipt"]
    light_client_head: str
    transaction_hash: str | None = None
    sender_id: str | None = None
    receipt_id: str | None = None
    receiver_id: str | None = None


@dataclass(frozen=True)
class RpcLightClientNextBlockRequest(
    RpcMethod,
    method="next_light_client_block",
    result=JsonObject | None,
    error=RpcLightClientError,
):
    last_block_hash: str


# ── Transactions ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class RpcTransactionStatusRequest(
    _LegacyTransactionError,
    RpcMethod,
    method="tx",
    result=TransactionResponse,
    error=RpcTransactionError,
):
    tx_hash: str
    sender_account_id: str
    wait_until: str | None = None


@dataclass(frozen=True)
class RpcSendTransactionRequest(
    _LegacyTransactionError,
    RpcMethod,
    method="send_tx",
    result=TransactionResponse,
    error=RpcTransactionError,
):
    """``signed_tx_base64`` is the borsh-serialised signed transaction, base64 encoded."""

    signed_tx_base64: str
    wait_until: str | None = None


@dataclass(frozen=True)
class RpcBroadcastTxAsyncRequest(
    RpcMethod, method="broadcast_tx_async", result=str, error=None, params="array"
):
    signed_tx_base64: str


@dataclass(frozen=True)
class RpcBroadcastTxCommitRequest(
    _LegacyTransactionError,
    RpcMethod,
    method="broadcast_tx_commit",
    result=TransactionResponse,
    error=RpcTransactionError,
    params="array",
):
    signed_tx_base64: str


# ── Experimental ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class RpcTransactionStatusExperimentalRequest(
    _LegacyTransactionError,
    RpcMethod,
    method="EXPERIMENTAL_tx_status",
    result=TransactionResponse,
    error=RpcTransactionError,
):
    tx_hash: str
    sender_account_id: str
    wait_until: str | None = None


@dataclass(frozen=True)
class RpcStateChangesInBlockByTypeRequest(
    _TolerantUnknownBlock,
    RpcMethod,
    method="EXPERIMENTAL_changes",
    result=JsonObject,
    error=RpcStateChangesError,
    params="value",
):
    """``request`` carries a block reference plus ``changes_type`` and its filters."""

    request: JsonObject


@dataclass(frozen=True)
class RpcStateChangesInBlockRequest(
    _TolerantUnknownBlock,
    RpcMethod,
    method="EXPERIMENTAL_changes_in_block",
    result=JsonObject,
    error=RpcStateChangesError,
    params="value",
):
    block_reference: JsonObject = field(default_factory=lambda: {"finality": "final"})


@dataclass(frozen=True)
class RpcGenesisConfigRequest(
    RpcMethod, method="EXPERIMENTAL_genesis_config", result=JsonObject, error=None
):
    pass


@dataclass(frozen=True)
class RpcProtocolConfigRequest(
    RpcMethod,
    method="EXPERIMENTAL_protocol_config",
    result=JsonObject,
    error=RpcProtocolConfigError,
    params="value",
):
    block_reference: JsonObject = field(default_factory=lambda: {"finality": "final"})


@dataclass(frozen=True)
class RpcReceiptRequest(
    RpcMethod, method="EXPERIMENTAL_receipt", result=JsonObject, error=RpcReceiptError
):
    receipt_id: str


@dataclass(frozen=True)
class RpcValidatorsOrderedRequest(
    RpcMethod,
    method="EXPERIMENTAL_validators_ordered",
    result=list[JsonObject],
    error=RpcValidatorError,
    params="array",
):
    block_id: BlockId | None = None


# ── Sandbox ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RpcSandboxPatchStateRequest(
    RpcMethod, method="sandbox_patch_state", result=JsonObject, error=RpcSandboxError
):
    """Add or mutate accounts, access keys, contract code or state. No deletions."""

    records: list[JsonObject]


@dataclass(frozen=True)
class RpcSandboxFastForwardRequest(
    RpcMethod, method="sandbox_fast_forward", result=JsonObject, error=RpcSandboxError
):
    delta_height: int

"""Method descriptors: the contract, the generic any-method and the catalog."""

from nearclient.methods.any import RpcAnyRequest, any_request
from nearclient.methods.base import RpcMethod
from nearclient.methods.catalog import (
    RpcBlockError,
    RpcBlockRequest,
    RpcBroadcastTxAsyncRequest,
    RpcBroadcastTxCommitRequest,
    RpcChunkError,
    RpcChunkRequest,
    RpcGasPriceError,
    RpcGasPriceRequest,
    RpcGenesisConfigRequest,
    RpcHealthRequest,
    RpcLightClientError,
    RpcLightClientExecutionProofRequest,
    RpcLightClientNextBlockRequest,
    RpcNetworkInfoError,
    RpcNetworkInfoRequest,
    RpcProtocolConfigError,
    RpcProtocolConfigRequest,
    RpcQueryError,
    RpcQueryRequest,
    RpcReceiptError,
    RpcReceiptRequest,
    RpcSandboxError,
    RpcSandboxFastForwardRequest,
    RpcSandboxPatchStateRequest,
    RpcSendTransactionRequest,
    RpcStateChangesError,
    RpcStateChangesInBlockByTypeRequest,
    RpcStateChangesInBlockRequest,
    RpcStatusError,
    RpcStatusRequest,
    RpcTransactionError,
    RpcTransactionStatusExperimentalRequest,
    RpcTransactionStatusRequest,
    RpcValidatorError,
    RpcValidatorsOrderedRequest,
    RpcValidatorsRequest,
    StatusResponse,
    SyncInfo,
    TransactionResponse,
)

__all__ = [
    "RpcMethod",
    "RpcAnyRequest",
    "any_request",
    # catalog
    "RpcBlockRequest",
    "RpcBroadcastTxAsyncRequest",
    "RpcBroadcastTxCommitRequest",
    "RpcChunkRequest",
    "RpcGasPriceRequest",
    "RpcGenesisConfigRequest",
    "RpcHealthRequest",
    "RpcLightClientExecutionProofRequest",
    "RpcLightClientNextBlockRequest",
    "RpcNetworkInfoRequest",
    "RpcProtocolConfigRequest",
    "RpcQueryRequest",
    "RpcReceiptRequest",
    "RpcSandboxFastForwardRequest",
    "RpcSandboxPatchStateRequest",
    "RpcSendTransactionRequest",
    "RpcStateChangesInBlockByTypeRequest",
    "RpcStateChangesInBlockRequest",
    "RpcStatusRequest",
    "RpcTransactionStatusExperimentalRequest",
    "RpcTransactionStatusRequest",
    "RpcValidatorsOrderedRequest",
    "RpcValidatorsRequest",
    # results
    "StatusResponse",
    "SyncInfo",
    "TransactionResponse",
    # handler errors
    "RpcBlockError",
    "RpcChunkError",
    "RpcGasPriceError",
    "RpcLightClientError",
    "RpcNetworkInfoError",
    "RpcProtocolConfigError",
    "RpcQueryError",
    "RpcReceiptError",
    "RpcSandboxError",
    "RpcStateChangesError",
    "RpcStatusError",
    "RpcTransactionError",
    "RpcValidatorError",
]

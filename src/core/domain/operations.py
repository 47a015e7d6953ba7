"""Catálogo estático de operaciones de la API TON (Chainbase).

Por qué una tabla estática:
- Un descriptor por endpoint, definido una vez; la fachada expone un método
  por entrada sin reflexión ni metaprogramación en runtime.
- Los parámetros siguen el esquema de la API HTTP de toncenter; el servidor
  es quien los valida.
"""

from __future__ import annotations

from core.domain.models import (
    Operation,
    ParameterLocation,
    ParameterSpec,
    SecurityKind,
    SecurityScheme,
    ServerSpec,
    ServerVariable,
)
from core.errors import UnknownOperationError


def _q(name: str, type_: str = "string", *, required: bool = False, description: str = "") -> ParameterSpec:
    return ParameterSpec(
        name=name,
        location=ParameterLocation.QUERY,
        required=required,
        type=type_,
        description=description,
    )


_ADDRESS = _q("address", required=True, description="Identifier of target TON account in any form.")
_SEQNO_AT = _q(
    "seqno",
    "integer",
    description="Seqno of masterchain block at which moment the address information should be loaded.",
)
_BLOCK_ID = (
    _q("workchain", "integer", required=True, description="Block workchain id."),
    _q("shard", "integer", required=True, description="Block shard id."),
    _q("seqno", "integer", required=True, description="Block seqno."),
)
_LOCATE_TX = (
    _q("source", required=True),
    _q("destination", required=True),
    _q("created_lt", "integer", required=True),
)


SERVERS: tuple[ServerSpec, ...] = (
    ServerSpec(
        url="https://{network}.s.chainbase.online/v1",
        variables={
            "network": ServerVariable(
                default="ton-mainnet",
                enum=("ton-mainnet", "ton-testnet"),
                description="Red TON a consultar.",
            )
        },
    ),
)

SECURITY = SecurityScheme(
    kind=SecurityKind.API_KEY,
    name="x-api-key",
    location=ParameterLocation.HEADER,
)


GET_ADDRESS_INFORMATION = Operation(
    operation_id="getAddressInformation",
    path="/getAddressInformation",
    summary="Get basic information about the address: balance, code, data, last_transaction_id.",
    tags=("accounts",),
    parameters=(_ADDRESS, _SEQNO_AT),
)
GET_EXTENDED_ADDRESS_INFORMATION = Operation(
    operation_id="getExtendedAddressInformation",
    path="/getExtendedAddressInformation",
    summary="Similar to getAddressInformation but tries to parse additional information for known contract types.",
    tags=("accounts",),
    parameters=(_ADDRESS, _SEQNO_AT),
)
GET_WALLET_INFORMATION = Operation(
    operation_id="getWalletInformation",
    path="/getWalletInformation",
    summary="Retrieve wallet information.",
    tags=("accounts",),
    parameters=(_ADDRESS, _SEQNO_AT),
)
GET_TRANSACTIONS = Operation(
    operation_id="getTransactions",
    path="/getTransactions",
    summary="Get transaction history of a given address.",
    tags=("accounts", "transactions"),
    parameters=(
        _ADDRESS,
        _q("limit", "integer", description="Maximum number of transactions in response."),
        _q("lt", "integer", description="Logical time of transaction to start with, must be sent with hash."),
        _q("hash", description="Hash of transaction to start with, must be sent with lt."),
        _q("to_lt", "integer", description="Logical time of transaction to finish with."),
        _q("archival", "boolean", description="Use only liteservers with full history."),
    ),
)
GET_ADDRESS_BALANCE = Operation(
    operation_id="getAddressBalance",
    path="/getAddressBalance",
    summary="Get balance (in nanotons) of a given address.",
    tags=("accounts",),
    parameters=(_ADDRESS, _SEQNO_AT),
)
GET_ADDRESS_STATE = Operation(
    operation_id="getAddressState",
    path="/getAddressState",
    summary="Get state of a given address: uninitialized, active or frozen.",
    tags=("accounts",),
    parameters=(_ADDRESS, _SEQNO_AT),
)
PACK_ADDRESS = Operation(
    operation_id="packAddress",
    path="/packAddress",
    summary="Convert an address from raw to human-readable format.",
    tags=("accounts",),
    parameters=(_q("address", required=True, description="Identifier of target TON account in raw form."),),
)
UNPACK_ADDRESS = Operation(
    operation_id="unpackAddress",
    path="/unpackAddress",
    summary="Convert an address from human-readable to raw format.",
    tags=("accounts",),
    parameters=(_q("address", required=True, description="Identifier of target TON account in user-friendly form."),),
)
GET_MASTERCHAIN_INFO = Operation(
    operation_id="getMasterchainInfo",
    path="/getMasterchainInfo",
    summary="Get up-to-date masterchain state.",
    tags=("blocks",),
)
GET_MASTERCHAIN_BLOCK_SIGNATURES = Operation(
    operation_id="getMasterchainBlockSignatures",
    path="/getMasterchainBlockSignatures",
    summary="Get signatures of a masterchain block.",
    tags=("blocks",),
    parameters=(_q("seqno", "integer", required=True),),
)
GET_SHARD_BLOCK_PROOF = Operation(
    operation_id="getShardBlockProof",
    path="/getShardBlockProof",
    summary="Get merkle proof of shardchain block.",
    tags=("blocks",),
    parameters=_BLOCK_ID
    + (
        _q(
            "from_seqno",
            "integer",
            description="Seqno of masterchain block starting from which proof is required.",
        ),
    ),
)
GET_CONSENSUS_BLOCK = Operation(
    operation_id="getConsensusBlock",
    path="/getConsensusBlock",
    summary="Get consensus block and its update timestamp.",
    tags=("blocks",),
)
LOOKUP_BLOCK = Operation(
    operation_id="lookupBlock",
    path="/lookupBlock",
    summary="Look up block by either seqno, lt or unixtime.",
    tags=("blocks",),
    parameters=(
        _q("workchain", "integer", required=True, description="Workchain id to look up block in."),
        _q("shard", "integer", required=True, description="Shard id to look up block in."),
        _q("seqno", "integer", description="Block's height."),
        _q("lt", "integer", description="Block's logical time."),
        _q("unixtime", "integer", description="Block's unixtime."),
    ),
)
SHARDS = Operation(
    operation_id="shards",
    path="/shards",
    summary="Get shards information.",
    tags=("blocks",),
    parameters=(_q("seqno", "integer", required=True, description="Masterchain seqno to fetch shards of."),),
)
GET_BLOCK_TRANSACTIONS = Operation(
    operation_id="getBlockTransactions",
    path="/getBlockTransactions",
    summary="Get transactions of the given block.",
    tags=("blocks", "transactions"),
    parameters=_BLOCK_ID
    + (
        _q("root_hash"),
        _q("file_hash"),
        _q("after_lt", "integer"),
        _q("after_hash"),
        _q("count", "integer"),
    ),
)
GET_BLOCK_HEADER = Operation(
    operation_id="getBlockHeader",
    path="/getBlockHeader",
    summary="Get metadata of a given block.",
    tags=("blocks",),
    parameters=_BLOCK_ID + (_q("root_hash"), _q("file_hash")),
)
GET_TOKEN_DATA = Operation(
    operation_id="getTokenData",
    path="/getTokenData",
    summary="Get NFT or Jetton information.",
    tags=("accounts",),
    parameters=(
        _q(
            "address",
            required=True,
            description="Address of NFT collection/item or Jetton master/wallet smart contract.",
        ),
    ),
)
TRY_LOCATE_TX = Operation(
    operation_id="tryLocateTx",
    path="/tryLocateTx",
    summary="Locate outcoming transaction of destination address by incoming message.",
    tags=("transactions",),
    parameters=_LOCATE_TX,
)
TRY_LOCATE_RESULT_TX = Operation(
    operation_id="tryLocateResultTx",
    path="/tryLocateResultTx",
    summary="Same as tryLocateTx: locate outcoming transaction of destination address by incoming message.",
    tags=("transactions",),
    parameters=_LOCATE_TX,
)
TRY_LOCATE_SOURCE_TX = Operation(
    operation_id="tryLocateSourceTx",
    path="/tryLocateSourceTx",
    summary="Locate incoming transaction of source address by outcoming message.",
    tags=("transactions",),
    parameters=_LOCATE_TX,
)
DETECT_ADDRESS = Operation(
    operation_id="detectAddress",
    path="/detectAddress",
    summary="Get all possible address forms.",
    tags=("accounts",),
    parameters=(_ADDRESS,),
)


OPERATIONS: tuple[Operation, ...] = (
    GET_ADDRESS_INFORMATION,
    GET_EXTENDED_ADDRESS_INFORMATION,
    GET_WALLET_INFORMATION,
    GET_TRANSACTIONS,
    GET_ADDRESS_BALANCE,
    GET_ADDRESS_STATE,
    PACK_ADDRESS,
    UNPACK_ADDRESS,
    GET_MASTERCHAIN_INFO,
    GET_MASTERCHAIN_BLOCK_SIGNATURES,
    GET_SHARD_BLOCK_PROOF,
    GET_CONSENSUS_BLOCK,
    LOOKUP_BLOCK,
    SHARDS,
    GET_BLOCK_TRANSACTIONS,
    GET_BLOCK_HEADER,
    GET_TOKEN_DATA,
    TRY_LOCATE_TX,
    TRY_LOCATE_RESULT_TX,
    TRY_LOCATE_SOURCE_TX,
    DETECT_ADDRESS,
)

_BY_ID: dict[str, Operation] = {op.operation_id: op for op in OPERATIONS}


def get_operation(operation_id: str) -> Operation:
    try:
        return _BY_ID[operation_id]
    except KeyError:
        raise UnknownOperationError(operation_id) from None

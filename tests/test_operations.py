from __future__ import annotations

import pytest

from core.domain import operations as ops
from core.errors import UnknownOperationError

EXPECTED_PATHS = [
    "/getAddressInformation",
    "/getExtendedAddressInformation",
    "/getWalletInformation",
    "/getTransactions",
    "/getAddressBalance",
    "/getAddressState",
    "/packAddress",
    "/unpackAddress",
    "/getMasterchainInfo",
    "/getMasterchainBlockSignatures",
    "/getShardBlockProof",
    "/getConsensusBlock",
    "/lookupBlock",
    "/shards",
    "/getBlockTransactions",
    "/getBlockHeader",
    "/getTokenData",
    "/tryLocateTx",
    "/tryLocateResultTx",
    "/tryLocateSourceTx",
    "/detectAddress",
]


def test_catalog_has_every_endpoint_once():
    assert [op.path for op in ops.OPERATIONS] == EXPECTED_PATHS
    assert len({op.operation_id for op in ops.OPERATIONS}) == 21


def test_all_operations_are_get_without_body():
    assert {op.method for op in ops.OPERATIONS} == {"GET"}


def test_operation_id_matches_path():
    for op in ops.OPERATIONS:
        assert op.path == "/" + op.operation_id


def test_descriptors_are_immutable():
    with pytest.raises(Exception):
        ops.GET_ADDRESS_BALANCE.path = "/other"  # type: ignore[misc]


def test_required_parameters():
    assert ops.GET_TRANSACTIONS.required_parameters == ("address",)
    assert ops.LOOKUP_BLOCK.required_parameters == ("workchain", "shard")
    assert ops.TRY_LOCATE_TX.required_parameters == ("source", "destination", "created_lt")
    assert ops.GET_MASTERCHAIN_INFO.required_parameters == ()


def test_get_operation_by_id():
    assert ops.get_operation("shards") is ops.SHARDS
    with pytest.raises(UnknownOperationError) as info:
        ops.get_operation("sendBoc")
    assert isinstance(info.value, KeyError)
    assert "sendBoc" in str(info.value)

from __future__ import annotations

import asyncio

import httpx
import pytest

from core.domain import operations as ops
from core.domain.models import ClientConfiguration
from core.errors import ConfigurationError, UnknownOperationError
from core.services.client import TonApiClient

BASE = "https://ton-mainnet.s.chainbase.online/v1"

METHODS = {
    "getAddressInformation": "get_address_information",
    "getExtendedAddressInformation": "get_extended_address_information",
    "getWalletInformation": "get_wallet_information",
    "getTransactions": "get_transactions",
    "getAddressBalance": "get_address_balance",
    "getAddressState": "get_address_state",
    "packAddress": "pack_address",
    "unpackAddress": "unpack_address",
    "getMasterchainInfo": "get_masterchain_info",
    "getMasterchainBlockSignatures": "get_masterchain_block_signatures",
    "getShardBlockProof": "get_shard_block_proof",
    "getConsensusBlock": "get_consensus_block",
    "lookupBlock": "lookup_block",
    "shards": "shards",
    "getBlockTransactions": "get_block_transactions",
    "getBlockHeader": "get_block_header",
    "getTokenData": "get_token_data",
    "tryLocateTx": "try_locate_tx",
    "tryLocateResultTx": "try_locate_result_tx",
    "tryLocateSourceTx": "try_locate_source_tx",
    "detectAddress": "detect_address",
}


def test_every_operation_has_a_method():
    assert set(METHODS) == {op.operation_id for op in ops.OPERATIONS}


@pytest.mark.asyncio
@pytest.mark.parametrize("operation_id,method_name", sorted(METHODS.items()))
async def test_each_method_issues_one_request(client, recorder, operation_id, method_name):
    result = await getattr(client, method_name)({"address": "EQCD39VS5jcptHL8vMjEXrzGaRcCVYto7HUn4bpAOg8xqB2N"})

    assert result == {"ok": True, "result": {}}
    assert len(recorder.requests) == 1
    request = recorder.requests[0]
    assert request.method == "GET"
    assert str(request.url).startswith(f"{BASE}/{operation_id}?")
    assert request.url.path == f"/v1/{operation_id}"
    assert request.content == b""


@pytest.mark.asyncio
async def test_metadata_becomes_query_params(client, recorder):
    await client.get_transactions(
        {"address": "EQabc", "limit": 5, "archival": True, "hash": None},
        lt=123,
    )
    params = recorder.requests[0].url.params
    assert params["address"] == "EQabc"
    assert params["limit"] == "5"
    assert params["archival"] == "true"
    assert params["lt"] == "123"
    assert "hash" not in params


@pytest.mark.asyncio
async def test_keyword_params_override_metadata(client, recorder):
    await client.get_address_balance({"address": "A"}, address="B")
    assert recorder.requests[0].url.params["address"] == "B"


@pytest.mark.asyncio
async def test_undeclared_params_are_forwarded_as_query(client, recorder):
    await client.get_masterchain_info(extra="1")
    assert recorder.requests[0].url.params["extra"] == "1"


@pytest.mark.asyncio
async def test_missing_required_params_are_left_to_the_server(client, recorder):
    await client.lookup_block()
    assert len(recorder.requests) == 1
    assert not recorder.requests[0].url.params


@pytest.mark.asyncio
async def test_generic_call_by_operation_id(client, recorder):
    await client.call("shards", seqno=100)
    assert recorder.requests[0].url.path == "/v1/shards"
    assert recorder.requests[0].url.params["seqno"] == "100"


@pytest.mark.asyncio
async def test_generic_call_unknown_operation(client, recorder):
    with pytest.raises(UnknownOperationError):
        await client.call("sendBoc")
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_text_response_is_returned_as_text(make_client):
    client, _ = make_client(lambda request: httpx.Response(200, text="pong"))
    assert await client.get_masterchain_info() == "pong"


@pytest.mark.asyncio
async def test_parse_response_false_returns_raw_response(client, recorder):
    client.configure(parse_response=False)
    response = await client.get_masterchain_info()
    assert isinstance(response, httpx.Response)
    assert response.status_code == 200
    assert response.json() == {"ok": True, "result": {}}


def test_configure_rejects_unknown_keys(client):
    with pytest.raises(ConfigurationError):
        client.configure({"retries": 3})
    with pytest.raises(ConfigurationError):
        client.configure(timeout=0)


def test_configure_merges_options(client):
    client.configure({"timeout": 5000})
    client.configure(parse_response=False)
    assert client.configuration.options.timeout == 5000
    assert client.configuration.options.parse_response is False
    assert client.configuration.timeout_seconds == 5.0


def test_configuration_property_is_a_copy(client):
    snapshot = client.configuration
    snapshot.credentials = ("changed",)
    assert client.configuration.credentials == ()
    assert isinstance(snapshot, ClientConfiguration)


@pytest.mark.asyncio
async def test_set_server_literal_url_is_used(client, recorder):
    client.server("https://eu.api.example.com/v14")
    await client.get_masterchain_info()
    assert str(recorder.requests[0].url) == "https://eu.api.example.com/v14/getMasterchainInfo"


@pytest.mark.asyncio
async def test_set_server_template(client, recorder):
    client.set_server("https://{region}.api.example.com/{basePath}", {"region": "eu", "basePath": "v14"})
    await client.shards(seqno=1)
    assert recorder.requests[0].url.host == "eu.api.example.com"
    assert recorder.requests[0].url.path == "/v14/shards"


def test_set_server_with_unresolved_variable_fails(client):
    with pytest.raises(ConfigurationError):
        client.server("https://{region}.api.example.com/{basePath}", {"name": "eu", "basePath": "v14"})
    assert client.configuration.server_url is None


@pytest.mark.asyncio
async def test_set_server_uses_declared_default(client, recorder):
    client.server("https://{network}.example.org/api")
    await client.get_masterchain_info()
    assert recorder.requests[0].url.host == "ton-mainnet.example.org"


@pytest.mark.asyncio
async def test_concurrent_calls_are_independent(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"path": request.url.path, "params": dict(request.url.params)})

    client, rec = make_client(handler)
    first, second = await asyncio.gather(
        client.get_address_balance(address="A"),
        client.shards(seqno=7),
    )
    assert first == {"path": "/v1/getAddressBalance", "params": {"address": "A"}}
    assert second == {"path": "/v1/shards", "params": {"seqno": "7"}}
    assert len(rec.requests) == 2


@pytest.mark.asyncio
async def test_clients_do_not_share_configuration(recorder):
    from adapters.http_client import HttpDispatcher

    one = TonApiClient(HttpDispatcher(transport=recorder.transport)).auth("key-one")
    two = TonApiClient(HttpDispatcher(transport=recorder.transport))
    two.server("https://other.example.com")

    await one.get_masterchain_info()
    await two.get_masterchain_info()

    assert recorder.requests[0].headers["x-api-key"] == "key-one"
    assert recorder.requests[0].url.host == "ton-mainnet.s.chainbase.online"
    assert "x-api-key" not in recorder.requests[1].headers
    assert recorder.requests[1].url.host == "other.example.com"


def test_operations_exposes_catalog():
    assert TonApiClient.operations() == ops.OPERATIONS

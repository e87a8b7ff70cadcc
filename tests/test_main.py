"""Integration tests for the HTTP JSON-RPC endpoint."""

import pytest
from fastapi.testclient import TestClient

from clara.gateway.errors import CANONICAL_ERROR_CODE
from clara.gateway.schemas import RPCErrorCodes
from clara.main import create_app
from clara.upstream.exceptions import UpstreamRpcError, UpstreamTransportError
from tests.samples import ADDRESS, CALL_CASES, HASH, TOKENS


@pytest.fixture
def client(mock_client) -> TestClient:
    return TestClient(create_app(mock_client))


def _call(method, params=None, id=1):
    body = {"jsonrpc": "2.0", "method": method, "id": id}
    if params is not None:
        body["params"] = params
    return body


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": "Clara"}


def test_l1_chain_id(client, mock_client):
    mock_client.l1_chain_id.return_value = 9

    response = client.post("/", json=_call("zks.L1ChainId"))

    assert response.status_code == 200
    assert response.json() == {"jsonrpc": "2.0", "result": 9, "id": 1}


def test_underscore_method_name(client, mock_client):
    mock_client.l1_chain_id.return_value = "0x9"

    response = client.post("/", json=_call("zks_L1ChainId"))

    assert response.json()["result"] == "0x9"


def test_unknown_token_error(client, mock_client):
    mock_client.get_token_price.side_effect = UpstreamRpcError(-32010, "unknown token")

    response = client.post("/", json=_call("zks.getTokenPrice", [ADDRESS], id="p"))

    assert response.status_code == 200
    assert response.json() == {
        "jsonrpc": "2.0",
        "error": {"code": CANONICAL_ERROR_CODE, "message": "unknown token"},
        "id": "p",
    }


def test_transport_error(client, mock_client):
    exc = UpstreamTransportError("https://upstream.test", "connection refused")
    mock_client.get_main_contract.side_effect = exc

    response = client.post("/", json=_call("zks.getMainContract"))

    assert response.json()["error"] == {"code": CANONICAL_ERROR_CODE, "message": str(exc)}


def test_confirmed_tokens(client, mock_client):
    mock_client.get_confirmed_tokens.return_value = TOKENS

    response = client.post("/", json=_call("zks.getConfirmedTokens", [0, 10]))

    assert response.json()["result"] == TOKENS
    mock_client.get_confirmed_tokens.assert_awaited_once_with(0, 10)


@pytest.mark.parametrize("name", list(CALL_CASES))
def test_every_method_passes_result_through(client, mock_client, name):
    params, upstream_result = CALL_CASES[name]
    from clara.zks.api import ZKS_API

    getattr(mock_client, ZKS_API[name].client_method).return_value = upstream_result

    response = client.post("/", json=_call(f"zks.{name}", params))

    assert response.json() == {"jsonrpc": "2.0", "result": upstream_result, "id": 1}


def test_named_params(client, mock_client):
    mock_client.get_all_account_balances.return_value = {ADDRESS: "0x1"}

    response = client.post("/", json=_call("zks.getAllAccountBalances", {"address": ADDRESS}))

    assert response.json()["result"] == {ADDRESS: "0x1"}
    mock_client.get_all_account_balances.assert_awaited_once_with(ADDRESS)


def test_named_params_omitting_optional(client, mock_client):
    mock_client.get_l2_to_l1_msg_proof.return_value = None

    response = client.post(
        "/", json=_call("zks.getL2ToL1MsgProof", {"block": 1000, "sender": ADDRESS, "msg": HASH})
    )

    assert response.json() == {"jsonrpc": "2.0", "result": None, "id": 1}
    mock_client.get_l2_to_l1_msg_proof.assert_awaited_once_with(1000, ADDRESS, HASH, None)


def test_method_not_found(client, mock_client):
    response = client.post("/", json=_call("zks.getFoo"))

    assert response.json()["error"]["code"] == RPCErrorCodes.METHOD_NOT_FOUND
    assert mock_client.method_calls == []


@pytest.mark.parametrize("params", [[], [ADDRESS, ADDRESS], [42], {"token": ADDRESS}])
def test_invalid_params(client, mock_client, params):
    response = client.post("/", json=_call("zks.getTokenPrice", params))

    assert response.json()["error"]["code"] == RPCErrorCodes.INVALID_PARAMS
    assert mock_client.method_calls == []


def test_parse_error(client, mock_client):
    response = client.post(
        "/", content=b'{"jsonrpc": "2.0", "method"', headers={"Content-Type": "application/json"}
    )

    assert response.json() == {
        "jsonrpc": "2.0",
        "error": {"code": RPCErrorCodes.PARSE_ERROR, "message": "Parse error"},
        "id": None,
    }
    assert mock_client.method_calls == []


def test_batch(client, mock_client):
    mock_client.l1_chain_id.return_value = "0x9"
    mock_client.get_l1_batch_number.return_value = "0x1f4"

    response = client.post("/", json=[
        _call("zks.L1ChainId", id=1),
        _call("zks.L1BatchNumber", id=2),
        _call("zks.getFoo", id=3),
    ])

    body = response.json()
    assert [entry["id"] for entry in body] == [1, 2, 3]
    assert body[0]["result"] == "0x9"
    assert body[1]["result"] == "0x1f4"
    assert body[2]["error"]["code"] == RPCErrorCodes.METHOD_NOT_FOUND


def test_notification_only_body(client, mock_client):
    mock_client.l1_chain_id.return_value = "0x9"

    response = client.post("/", json={"jsonrpc": "2.0", "method": "zks.L1ChainId"})

    assert response.status_code == 204
    assert response.content == b""
    mock_client.l1_chain_id.assert_awaited_once_with()


def test_lifespan_keeps_provided_client(mock_client):
    app = create_app(mock_client)

    with TestClient(app):
        assert app.state.upstream is mock_client

import json
import urllib.error
import urllib.request

import pytest

from chainregistry.matchers import json_params_matcher
from chainregistry.mockrpc import (
    MockRPC,
    NoMatchingCallsError,
    NoMoreCallsError,
    PendingCallsError,
    RPCCall,
    load_expectations,
)


def _request(method, params, request_id=1):
    return json.dumps({"jsonrpc": "2.0", "id": request_id, "method": method, "params": params})


def test_single_call_success():
    rpc = MockRPC([RPCCall("eth_chainId", json_params_matcher("[]"), result="0x1")])
    resp = json.loads(rpc.handle(_request("eth_chainId", [], 7)))
    assert resp == {"id": 7, "jsonrpc": "2.0", "result": "0x1", "error": None}
    assert rpc.pending_calls == []
    rpc.assert_expectations()
    assert rpc.err is None


def test_wire_format_field_order():
    rpc = MockRPC([RPCCall("m", result=True)])
    raw = rpc.handle('{"id":1,"method":"m"}')
    assert raw == b'{"id":1,"jsonrpc":"2.0","result":true,"error":null}'


def test_id_is_echoed_verbatim():
    rpc = MockRPC([RPCCall("m", result=None)])
    resp = json.loads(rpc.handle('{"id":"abc","method":"m"}'))
    assert resp["id"] == "abc"
    assert resp["result"] is None


def test_id_whitespace_is_compacted():
    rpc = MockRPC([RPCCall("m", result=1)])
    raw = rpc.handle('{"id": [1, "a b"], "method": "m"}')
    assert raw == b'{"id":[1,"a b"],"jsonrpc":"2.0","result":1,"error":null}'


def test_method_mismatch():
    rpc = MockRPC([RPCCall("eth_chainId")])
    resp = json.loads(rpc.handle(_request("eth_blockNumber", [])))
    assert resp["error"] == {"code": -32601, "message": "no matching calls"}
    assert resp["id"] == 1
    with pytest.raises(NoMatchingCallsError):
        rpc.assert_expectations()


def test_params_mismatch():
    rpc = MockRPC([RPCCall("eth_getBalance", json_params_matcher('["0x1"]'))])
    resp = json.loads(rpc.handle(_request("eth_getBalance", ["0x2"])))
    assert resp["error"]["code"] == -32602
    assert resp["error"]["message"] == "no matching calls"


def test_no_more_calls_then_sticky_error():
    rpc = MockRPC([])
    first = json.loads(rpc.handle(_request("m", [], 3)))
    assert first["error"] == {"code": -32601, "message": "no more calls"}
    assert first["id"] == 3
    second = json.loads(rpc.handle(_request("m", [], 4)))
    assert second["id"] is None
    assert second["error"]["message"] == "no more calls"
    with pytest.raises(NoMoreCallsError):
        rpc.assert_expectations()


def test_configured_error_response():
    rpc = MockRPC([RPCCall("m", err="execution reverted", err_code=3)])
    resp = json.loads(rpc.handle(_request("m", [])))
    assert resp["result"] is None
    assert resp["error"] == {"code": 3, "message": "execution reverted"}
    assert rpc.err is None


def test_batch_preserves_order():
    rpc = MockRPC([RPCCall("a", result=1), RPCCall("b", result=2)])
    body = "[" + _request("a", [], 1) + "," + _request("b", [], 2) + "]"
    resp = json.loads(rpc.handle(body))
    assert [r["id"] for r in resp] == [1, 2]
    assert [r["result"] for r in resp] == [1, 2]


def test_batch_of_one_answers_with_object():
    rpc = MockRPC([RPCCall("a", result="x")])
    resp = json.loads(rpc.handle("[" + _request("a", []) + "]"))
    assert isinstance(resp, dict)
    assert resp["result"] == "x"


def test_parse_error_does_not_stick():
    rpc = MockRPC([RPCCall("a", result=5)])
    bad = json.loads(rpc.handle(b"{broken"))
    assert bad["error"]["code"] == -32700
    assert bad["id"] is None
    good = json.loads(rpc.handle(_request("a", [])))
    assert good["result"] == 5


def test_result_keys_sorted_and_html_escaped():
    rpc = MockRPC([RPCCall("a", result={"z": "<&>", "a": 1})])
    raw = rpc.handle(_request("a", []))
    assert b"\\u003c\\u0026\\u003e" in raw
    assert raw.index(b'"a"') < raw.index(b'"z"')
    assert json.loads(raw)["result"] == {"a": 1, "z": "<&>"}


def test_leftover_calls_fail_assertion():
    rpc = MockRPC([RPCCall("a"), RPCCall("b")])
    rpc.handle(_request("a", []))
    assert len(rpc.pending_calls) == 1
    with pytest.raises(PendingCallsError, match="1 expected calls were not made"):
        rpc.assert_expectations()


def test_load_expectations(tmp_path):
    path = tmp_path / "calls.json"
    path.write_text(
        '[{"method": "eth_call", "params": [1e2, {"to": "0x1"}], "result": "0xabc"},'
        ' {"method": "eth_chainId", "err": "boom", "errCode": -32000}]'
    )
    calls = load_expectations(path)
    assert [c.method for c in calls] == ["eth_call", "eth_chainId"]
    assert calls[0].result == "0xabc"
    assert calls[0].params_matcher('[1e2,{"to":"0x1"}]') is True
    assert calls[0].params_matcher('[100,{"to":"0x1"}]') is False
    assert calls[1].err == "boom"
    assert calls[1].err_code == -32000
    assert calls[1].params_matcher(None) is True


def test_loaded_expectations_drive_server(tmp_path):
    path = tmp_path / "calls.json"
    path.write_text('[{"method": "eth_blockNumber", "params": [], "result": "0x10"}]')
    rpc = MockRPC(load_expectations(path))
    resp = json.loads(rpc.handle(_request("eth_blockNumber", [])))
    assert resp["result"] == "0x10"
    rpc.assert_expectations()
    assert rpc.pending_calls == []


def test_http_roundtrip():
    with MockRPC([RPCCall("eth_chainId", result="0xaa36a7")]) as rpc:
        endpoint = rpc.endpoint()
        assert endpoint.startswith("http://")
        req = urllib.request.Request(
            endpoint,
            data=_request("eth_chainId", []).encode(),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        with urllib.request.urlopen(req, timeout=5) as resp:
            assert resp.headers["Content-Type"] == "application/json"
            body = json.loads(resp.read())
    assert body["result"] == "0xaa36a7"
    rpc.assert_expectations()
    with pytest.raises(RuntimeError):
        rpc.endpoint()


def test_http_rejects_get():
    with MockRPC([]) as rpc:
        with pytest.raises(urllib.error.HTTPError) as info:
            urllib.request.urlopen(rpc.endpoint(), timeout=5)
        assert info.value.code == 405
        assert info.value.read() == b"only POST requests are allowed\n"
import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qsl, urlsplit

import pytest

from scanfmt.fmt import (
    ApiClient,
    ApiError,
    check_api_status,
    decimal_timestamp,
    format_timestamp,
    hex_to_int,
    param_value,
)


@pytest.fixture
def server():
    state = {"status": 200, "body": b"{}", "requests": []}

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            state["requests"].append(self.path)
            self.send_response(state["status"])
            self.send_header("Content-Type", "application/json")
            self.end_headers()
            self.wfile.write(state["body"])

        def log_message(self, *args):
            pass

    httpd = HTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    state["url"] = f"http://127.0.0.1:{httpd.server_address[1]}"
    yield state
    httpd.shutdown()
    httpd.server_close()


def test_hex_to_int():
    assert hex_to_int("0xe62a42") == 15_084_098
    assert hex_to_int("0x0") == 0
    assert hex_to_int("0x4b") == 75
    assert hex_to_int("invalid") is None


def test_hex_to_int_edge_cases():
    assert hex_to_int("ff") == 255
    assert hex_to_int("0x") is None
    assert hex_to_int("0x1_0") is None
    assert hex_to_int("0x" + "f" * 16) == 2**64 - 1
    assert hex_to_int("0x1" + "0" * 16) is None


def test_format_timestamp():
    assert format_timestamp("0x62c2bc6f") == "2022-07-04 10:09:51 UTC"
    assert format_timestamp("invalid") == "invalid"


def test_format_timestamp_epoch():
    assert format_timestamp("0x0") == "1970-01-01 00:00:00 UTC"


def test_decimal_timestamp():
    assert decimal_timestamp("1598242563") == "2020-08-24 04:16:03 UTC"
    assert decimal_timestamp("not-a-number") == "not-a-number"


def test_decimal_timestamp_rejects_non_integers():
    assert decimal_timestamp("12.5") == "12.5"
    assert decimal_timestamp("") == ""


def test_check_api_status_only_status_zero_fails():
    ok = {"status": "1", "message": "OK", "result": "something"}
    assert check_api_status(ok) is None
    with pytest.raises(ApiError):
        check_api_status({"status": "0", "message": "NOTOK", "result": "x"})


def test_check_api_status_error():
    response = {"status": "0", "message": "NOTOK", "result": "Invalid API Key"}
    with pytest.raises(ApiError, match="Invalid API Key"):
        check_api_status(response)


def test_check_api_status_missing_status():
    with pytest.raises(ApiError, match="Unknown API error"):
        check_api_status({"message": "NOTOK"})


def test_param_value():
    params = [("timestamp", "1578638524"), ("closest", "after"), ("closest", "before")]
    assert param_value(params, "closest", "before") == "after"
    assert param_value(params, "timestamp", "unknown") == "1578638524"
    assert param_value(params, "missing", "unknown") == "unknown"


def test_client_sends_query_and_decodes(server):
    server["body"] = json.dumps({"status": "1", "result": "42"}).encode()
    client = ApiClient(api_key="placeholder", chain_id=1, base_url=server["url"])
    result = client.call_api("gastracker", "gasestimate", [("gasprice", "2000000000")])
    assert result == {"status": "1", "result": "42"}
    path = server["requests"][0]
    parts = urlsplit(path)
    assert parts.path == "/"
    query = dict(parse_qsl(parts.query))
    assert query == {
        "module": "gastracker",
        "action": "gasestimate",
        "chainid": "1",
        "gasprice": "2000000000",
        "apikey": "placeholder",
    }


def test_client_without_chain_id_omits_it(server):
    client = ApiClient(api_key="placeholder", chain_id=None, base_url=server["url"] + "/")
    assert client.call_api("proxy", "eth_blockNumber", []) == {}
    query = dict(parse_qsl(urlsplit(server["requests"][0]).query))
    assert "chainid" not in query
    assert query["action"] == "eth_blockNumber"


def test_client_http_error(server):
    server["status"] = 500
    client = ApiClient(api_key="placeholder", chain_id=1, base_url=server["url"])
    with pytest.raises(ApiError, match="500"):
        client.call_api("block", "getblockreward", [])


def test_client_invalid_json(server):
    server["body"] = b"not json"
    client = ApiClient(api_key="placeholder", chain_id=1, base_url=server["url"])
    with pytest.raises(ApiError, match="Invalid JSON"):
        client.call_api("block", "getblockreward", [])
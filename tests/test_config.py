import json

import requests

from mangopay_client import API_VERSION, ClientConfig, ExplicitHeaders, IdempotencyKey
from mangopay_client.config import PRODUCTION_URL, SANDBOX_URL
from mangopay_client.diagnostics import (
    CLIENT_USER_AGENT_HEADER,
    RAW_USER_AGENT_HEADER,
    USER_AGENT_ERROR_HEADER,
    client_info_headers,
    get_uname,
)
from mangopay_client.http import (
    HttpMethod,
    HttpResponse,
    build_url,
    decode_json,
    parse_response,
    resolve_header_spec,
)


def test_root_url_defaults_to_production():
    config = ClientConfig(client_id="cid", client_passphrase="pw")

    assert config.preproduction is False
    assert config.resolved_root_url == PRODUCTION_URL == "https://api.mangopay.com"


def test_preproduction_selects_sandbox():
    config = ClientConfig(client_id="cid", client_passphrase="pw", preproduction=True)

    assert config.resolved_root_url == SANDBOX_URL == "https://api.sandbox.mangopay.com"


def test_explicit_root_url_wins():
    config = ClientConfig(
        client_id="cid", client_passphrase="pw", preproduction=True, root_url="https://proxy.test/"
    )

    assert config.resolved_root_url == "https://proxy.test"


def test_api_path_uses_version_and_client_id():
    config = ClientConfig(client_id="cid", client_passphrase="pw")

    assert API_VERSION == "v2.01"
    assert config.api_path == "/v2.01/cid"
    assert config.token_path == "/v2.01/oauth/token"


def test_resolve_header_spec_variants():
    assert resolve_header_spec(None) is None
    assert resolve_header_spec("abc") == IdempotencyKey("abc")
    assert resolve_header_spec({"A": "1"}) == ExplicitHeaders({"A": "1"})
    explicit = ExplicitHeaders({})
    assert resolve_header_spec(explicit) is explicit


def test_http_method_coercion():
    assert HttpMethod.coerce("delete") is HttpMethod.DELETE
    assert HttpMethod.coerce(HttpMethod.PUT) is HttpMethod.PUT


def test_build_url_keeps_filter_order():
    assert build_url("https://api.test", "/x", {}) == "https://api.test/x"
    assert build_url("https://api.test", "/x", {"b": 1, "a": "z y"}) == "https://api.test/x?b=1&a=z+y"


def test_decode_json_reports_failure_without_raising():
    good = decode_json(b'{"a": 1}')
    bad = decode_json(b"\xff not json")
    empty = decode_json(b"")

    assert good.ok and good.value == {"a": 1}
    assert not bad.ok and isinstance(bad.error, ValueError)
    assert not empty.ok


def test_client_info_headers_encode_blob():
    headers = client_info_headers({"bindings_version": "1", "lang": "python"})

    assert json.loads(headers[CLIENT_USER_AGENT_HEADER]) == {"bindings_version": "1", "lang": "python"}


def test_client_info_headers_fall_back_to_repr():
    def broken(value):
        raise ValueError("boom")

    headers = client_info_headers({"lang": "python"}, encoder=broken)

    assert headers == {
        RAW_USER_AGENT_HEADER: "{'lang': 'python'}",
        USER_AGENT_ERROR_HEADER: "boom (ValueError)",
    }


def test_parse_response_keeps_status_and_headers():
    raw = requests.Response()
    raw.status_code = 404
    raw._content = b"<html>gateway</html>"
    raw.headers["X-Number-Of-Pages"] = "3"

    response = parse_response(raw)

    assert isinstance(response, HttpResponse)
    assert response.status_code == 404
    assert response.data == {}
    assert response.headers["x-number-of-pages"] == "3"


def test_get_uname_survives_platform_errors(monkeypatch):
    def unavailable():
        raise OSError("uname denied")

    monkeypatch.setattr("mangopay_client.diagnostics.platform.uname", unavailable)

    assert get_uname() == "uname lookup failed"

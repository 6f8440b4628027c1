import base64
import threading
import time

import pytest

from conftest import API_PATH, CLIENT_ID, ROOT_URL, TOKEN_URL, build_client
from mangopay_client import ApiError, AuthError, ClientConfig, TransportError
from mangopay_client.auth.token import (
    AuthorizationToken,
    FileTokenStorage,
    MemoryTokenStorage,
    TokenManager,
)

CONFIG = ClientConfig(client_id=CLIENT_ID, client_passphrase="secret", root_url=ROOT_URL)


def issue(access_token="fresh", expires_in=3600):
    return {"token_type": "Bearer", "access_token": access_token, "expires_in": expires_in}


def test_exchange_uses_client_credentials(requests_mock, oauth):
    client = build_client()
    requests_mock.get(f"{ROOT_URL}{API_PATH}/users/1", json={})

    client.users.get("1")

    token_request = oauth.last_request
    expected = base64.b64encode(b"demo-client:secret").decode("ascii")
    assert token_request.method == "POST"
    assert token_request.headers["Authorization"] == f"Basic {expected}"
    assert token_request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert token_request.body == "grant_type=client_credentials"


def test_token_is_cached_until_expiry():
    now = [1000.0]
    calls = []

    def requester(method, path, **kwargs):
        calls.append(path)
        return issue(access_token=f"tok-{len(calls)}")

    manager = TokenManager(CONFIG, requester, storage=MemoryTokenStorage(), clock=lambda: now[0])

    first = manager.get_token()
    assert first.expires_at == 1000.0 + 3600 - 10
    now[0] = first.expires_at - 1
    assert manager.get_token() is first

    now[0] = first.expires_at
    refreshed = manager.get_token()

    assert refreshed.access_token == "tok-2"
    assert calls == ["/v2.01/oauth/token", "/v2.01/oauth/token"]


def test_concurrent_refresh_performs_single_exchange():
    storage = MemoryTokenStorage()
    storage.store(CONFIG.cache_key(), AuthorizationToken("Bearer", "stale", expires_at=0))
    calls = []
    calls_lock = threading.Lock()

    def requester(method, path, **kwargs):
        with calls_lock:
            calls.append(path)
        time.sleep(0.05)
        return issue()

    manager = TokenManager(CONFIG, requester, storage=storage)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(manager.get_token())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert {token.access_token for token in results} == {"fresh"}


def test_managers_sharing_storage_share_the_token():
    storage = MemoryTokenStorage()
    calls = []

    def requester(method, path, **kwargs):
        calls.append(path)
        return issue()

    TokenManager(CONFIG, requester, storage=storage).get_token()
    token = TokenManager(CONFIG, requester, storage=storage).get_token()

    assert token.access_token == "fresh"
    assert len(calls) == 1


def test_api_failure_becomes_auth_error():
    def requester(method, path, **kwargs):
        raise ApiError(f"{ROOT_URL}{path}", 401, {"error": "invalid_client"})

    manager = TokenManager(CONFIG, requester, storage=MemoryTokenStorage())

    with pytest.raises(AuthError) as excinfo:
        manager.get_token()

    assert excinfo.value.status_code == 401
    assert excinfo.value.details == {"error": "invalid_client"}


def test_transport_failure_becomes_auth_error():
    def requester(method, path, **kwargs):
        raise TransportError("Failed to communicate with MangoPay API: timeout", details="timeout")

    manager = TokenManager(CONFIG, requester, storage=MemoryTokenStorage())

    with pytest.raises(AuthError):
        manager.get_token()


def test_malformed_token_payload_is_auth_error():
    manager = TokenManager(
        CONFIG, lambda method, path, **kwargs: {"unexpected": True}, storage=MemoryTokenStorage()
    )

    with pytest.raises(AuthError):
        manager.get_token()


def test_auth_error_surfaces_from_resource_call(requests_mock):
    client = build_client()
    requests_mock.post(TOKEN_URL, status_code=401, json={"error": "invalid_client"})
    users = requests_mock.get(f"{ROOT_URL}{API_PATH}/users/1", json={})

    with pytest.raises(AuthError):
        client.users.get("1")

    assert not users.called


def test_invalidate_forces_new_exchange():
    calls = []

    def requester(method, path, **kwargs):
        calls.append(path)
        return issue(access_token=f"tok-{len(calls)}")

    manager = TokenManager(CONFIG, requester, storage=MemoryTokenStorage())
    manager.get_token()
    manager.invalidate()

    assert manager.get_token().access_token == "tok-2"


def test_file_storage_round_trip(tmp_path):
    storage = FileTokenStorage(tmp_path / "cache")
    token = AuthorizationToken("Bearer", "abc", expires_at=123.0)

    storage.store("key", token)

    assert FileTokenStorage(tmp_path / "cache").get("key") == token
    assert not list((tmp_path / "cache").glob(".token-*"))


def test_file_storage_ignores_corrupt_file(tmp_path, caplog):
    storage = FileTokenStorage(tmp_path)
    storage.path_for("key").write_text("{not json", encoding="utf-8")

    with caplog.at_level("WARNING", logger="mangopay_client.auth.token"):
        assert storage.get("key") is None

    assert "unreadable" in caplog.text


def test_temp_dir_selects_file_storage(requests_mock, oauth, tmp_path):
    client = build_client(temp_dir=str(tmp_path))
    requests_mock.get(f"{ROOT_URL}{API_PATH}/users/1", json={})

    client.users.get("1")
    other = build_client(temp_dir=str(tmp_path))
    other.users.get("1")

    assert isinstance(client.auth.storage, FileTokenStorage)
    assert oauth.call_count == 1
    assert list(tmp_path.glob("MangoPay.AuthorizationToken.*.json"))

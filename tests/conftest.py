import pytest

from mangopay_client import MangoPayClient
from mangopay_client.auth import token as token_module
from mangopay_client.auth.token import MemoryTokenStorage

ROOT_URL = "https://api.test"
CLIENT_ID = "demo-client"
API_PATH = f"/v2.01/{CLIENT_ID}"
TOKEN_URL = f"{ROOT_URL}/v2.01/oauth/token"
TOKEN_PAYLOAD = {"token_type": "Bearer", "access_token": "tok123", "expires_in": 3600}


@pytest.fixture(autouse=True)
def fresh_token_cache(monkeypatch):
    monkeypatch.setattr(token_module, "_SHARED_STORAGE", MemoryTokenStorage())


@pytest.fixture
def oauth(requests_mock):
    return requests_mock.post(TOKEN_URL, json=TOKEN_PAYLOAD)


def build_client(**kwargs) -> MangoPayClient:
    options = {
        "client_id": CLIENT_ID,
        "client_passphrase": "secret",
        "root_url": ROOT_URL,
    }
    options.update(kwargs)
    return MangoPayClient(**options)

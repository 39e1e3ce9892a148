from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from presigner.core.config import Settings, get_settings
from presigner.integrations.storage.factory import get_store_client
from presigner.integrations.storage.r2 import R2StoreClient
from presigner.main import create_app
from presigner.signing.signer import Credentials, QuerySigner


class FakeStore:
    """Records outbound requests and replays canned store responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda _: httpx.Response(200, text="")

    def reply(self, status_code: int, text: str = "") -> None:
        self.responder = lambda _: httpx.Response(status_code, text=text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        account_id="acct123",
        access_key_id="AKIDEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
        bucket="media",
    )


@pytest.fixture
def signer(credentials) -> QuerySigner:
    return QuerySigner(credentials)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        r2_account_id="acct123",
        r2_access_key_id="AKIDEXAMPLE",
        r2_secret_access_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
        r2_bucket="media",
        r2_presigner_token="",
    )


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def client(settings, fake_store):
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_store_client] = lambda: R2StoreClient(
        settings, transport=httpx.MockTransport(fake_store.handler)
    )
    return TestClient(app, raise_server_exceptions=False)

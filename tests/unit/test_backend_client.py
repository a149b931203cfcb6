"""
Unit tests for the backend auth client.
"""

import pytest
import pytest_asyncio
from httpx import ConnectError, Request, Response

from flashlearn.auth import (
    AuthRequestError,
    BackendAuthClient,
    BackendAuthResult,
    JsonFileStorage,
    MemoryStorage,
)


@pytest.fixture
def sample_login_response():
    """Login answers with jwtToken."""
    return {
        "success": True,
        "jwtToken": "jwt-abc",
        "user": {"id": "uid-1", "email": "a@x.com", "name": "Ada"},
    }


@pytest.fixture
def sample_register_response():
    """Register answers with token."""
    return {
        "success": True,
        "token": "jwt-new",
        "user": {"uid": "uid-2", "email": "b@x.com", "name": "Bea"},
    }


@pytest.fixture
def token_storage():
    return MemoryStorage()


@pytest_asyncio.fixture
async def client(token_storage):
    client = BackendAuthClient("http://localhost:3000/", token_storage)
    yield client
    await client.close()


def respond_with(status_code, payload=None, calls=None):
    async def mock_post(url, **kwargs):
        if calls is not None:
            calls.append((url, kwargs.get("json")))
        request = Request("POST", f"http://localhost:3000{url}")
        if payload is None:
            return Response(status_code, request=request)
        return Response(status_code, json=payload, request=request)

    return mock_post


class TestBackendAuthResult:
    """Tests for BackendAuthResult parsing."""

    def test_from_dict_reads_jwt_token(self, sample_login_response):
        result = BackendAuthResult.from_dict(sample_login_response)

        assert result.token == "jwt-abc"
        assert result.user["email"] == "a@x.com"

    def test_from_dict_reads_token(self, sample_register_response):
        assert BackendAuthResult.from_dict(sample_register_response).token == "jwt-new"

    def test_from_dict_without_token_raises(self):
        with pytest.raises(AuthRequestError):
            BackendAuthResult.from_dict({"user": {}})


class TestSignIn:
    """Tests for BackendAuthClient.sign_in."""

    @pytest.mark.asyncio
    async def test_success_stores_token(self, client, token_storage, sample_login_response, monkeypatch):
        calls = []
        monkeypatch.setattr(client.client, "post", respond_with(200, sample_login_response, calls))

        result = await client.sign_in("a@x.com", "pw")

        assert calls == [("/api/auth/login", {"email": "a@x.com", "password": "pw"})]
        assert result.token == "jwt-abc"
        assert client.get_token() == "jwt-abc"
        assert token_storage.get_item("jwtToken") == "jwt-abc"
        assert client.is_authenticated()
        assert client.get_current_user()["name"] == "Ada"

    @pytest.mark.asyncio
    async def test_unauthorized_uses_payload_message(self, client, monkeypatch):
        monkeypatch.setattr(
            client.client, "post",
            respond_with(401, {"success": False, "message": "Invalid credentials"}),
        )

        with pytest.raises(AuthRequestError) as exc_info:
            await client.sign_in("a@x.com", "bad")

        assert exc_info.value.message == "Invalid credentials"
        assert exc_info.value.status_code == 401
        assert not client.is_authenticated()

    @pytest.mark.asyncio
    async def test_nested_error_message(self, client, monkeypatch):
        monkeypatch.setattr(
            client.client, "post",
            respond_with(500, {"success": False, "error": {"message": "Server misconfiguration"}}),
        )

        with pytest.raises(AuthRequestError) as exc_info:
            await client.sign_in("a@x.com", "pw")

        assert exc_info.value.message == "Server misconfiguration"

    @pytest.mark.asyncio
    async def test_error_without_body_uses_default(self, client, monkeypatch):
        monkeypatch.setattr(client.client, "post", respond_with(502))

        with pytest.raises(AuthRequestError) as exc_info:
            await client.sign_in("a@x.com", "pw")

        assert exc_info.value.message == "Login failed"

    @pytest.mark.asyncio
    async def test_connection_error(self, client, monkeypatch):
        async def mock_post(url, **kwargs):
            raise ConnectError("Connection refused")

        monkeypatch.setattr(client.client, "post", mock_post)

        with pytest.raises(AuthRequestError) as exc_info:
            await client.sign_in("a@x.com", "pw")

        assert exc_info.value.message == "Login failed"
        assert exc_info.value.status_code is None


class TestSignUp:
    """Tests for BackendAuthClient.sign_up."""

    @pytest.mark.asyncio
    async def test_success(self, client, sample_register_response, monkeypatch):
        calls = []
        monkeypatch.setattr(client.client, "post", respond_with(201, sample_register_response, calls))

        result = await client.sign_up("b@x.com", "pw", "Bea")

        assert calls == [("/api/auth/register", {"email": "b@x.com", "password": "pw", "name": "Bea"})]
        assert result.user["uid"] == "uid-2"
        assert client.get_token() == "jwt-new"

    @pytest.mark.asyncio
    async def test_failure_default_message(self, client, monkeypatch):
        monkeypatch.setattr(client.client, "post", respond_with(400, {"success": False}))

        with pytest.raises(AuthRequestError) as exc_info:
            await client.sign_up("b@x.com", "pw", "Bea")

        assert exc_info.value.message == "Registration failed"
        assert exc_info.value.status_code == 400


class TestToken:
    """Token storage helpers."""

    @pytest.mark.asyncio
    async def test_sign_out_clears_token(self, client, token_storage, sample_login_response, monkeypatch):
        monkeypatch.setattr(client.client, "post", respond_with(200, sample_login_response))
        await client.sign_in("a@x.com", "pw")

        client.sign_out()

        assert client.get_token() is None
        assert token_storage.get_item("jwtToken") is None
        assert client.get_current_user() is None

    @pytest.mark.asyncio
    async def test_reads_raw_jwt_written_by_browser_build(self, client, token_storage):
        jwt = "eyJhbGciOiJIUzI1NiJ9.eyJ1aWQiOiJ4In0.sig"
        token_storage.set_item("jwtToken", jwt)

        assert client.get_token() == jwt
        assert client.is_authenticated()

    @pytest.mark.asyncio
    async def test_empty_token_is_absent(self, client, token_storage):
        token_storage.set_item("jwtToken", "")

        assert client.get_token() is None
        assert not client.is_authenticated()

    @pytest.mark.asyncio
    async def test_unreadable_token_storage_is_absent(self):
        class BrokenStorage(MemoryStorage):
            def get_item(self, key):
                raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        async with BackendAuthClient("http://localhost:3000", BrokenStorage()) as client:
            assert client.get_token() is None
            assert not client.is_authenticated()

    @pytest.mark.asyncio
    async def test_token_file_round_trip(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.set_item("jwtToken", "jwt-raw")

        async with BackendAuthClient("http://localhost:3000", storage) as client:
            assert client.get_token() == "jwt-raw"
        assert (tmp_path / "jwtToken.json").read_text(encoding="utf-8") == "jwt-raw"

    @pytest.mark.asyncio
    async def test_base_url_trailing_slash_trimmed(self, client):
        assert client.base_url == "http://localhost:3000"

from urllib.parse import parse_qs, urlparse

import aiohttp
import pytest

from conftest import FakeResponse, FakeSession
from debt_walk.auth import TokenExchanger, build_authorization_url
from debt_walk.errors import AuthError, NetworkError, ProfileError


def test_authorization_url_carries_client_and_scope(config):
    url = build_authorization_url(config)
    parsed = urlparse(url)

    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://www.strava.com/oauth/authorize"
    assert parse_qs(parsed.query) == {
        "client_id": ["186960"],
        "redirect_uri": ["https://example.github.io/debt-walk/"],
        "response_type": ["code"],
        "scope": ["activity:read_all"],
        "approval_prompt": ["force"],
    }


def test_authorization_url_is_stable(config):
    assert build_authorization_url(config) == build_authorization_url(config)


@pytest.mark.asyncio
async def test_exchange_code_posts_form_and_returns_tokens(config):
    session = FakeSession(FakeResponse(json_data={
        "access_token": "abc",
        "refresh_token": "def",
        "expires_at": 1700000000,
        "athlete": {"id": 1},
    }))

    tokens = await TokenExchanger(config, session).exchange_code("the-code")

    assert tokens.access_token == "abc"
    assert tokens.refresh_token == "def"
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "https://www.strava.com/oauth/token"
    assert kwargs["data"] == {
        "client_id": "186960",
        "client_secret": "secret",
        "code": "the-code",
        "grant_type": "authorization_code",
    }


@pytest.mark.asyncio
async def test_exchange_code_401_raises_auth_error_with_status_text(config):
    session = FakeSession(FakeResponse(status=401, reason="Unauthorized"))

    with pytest.raises(AuthError, match="Unauthorized") as excinfo:
        await TokenExchanger(config, session).exchange_code("bad-code")

    assert excinfo.value.status == 401
    assert excinfo.value.reason == "Unauthorized"


@pytest.mark.asyncio
async def test_exchange_code_transport_failure_is_auth_error(config):
    session = FakeSession(aiohttp.ClientConnectionError("connection refused"))

    with pytest.raises(AuthError) as excinfo:
        await TokenExchanger(config, session).exchange_code("the-code")

    assert isinstance(excinfo.value.__cause__, NetworkError)


@pytest.mark.asyncio
async def test_exchange_empty_code_makes_no_request(config):
    session = FakeSession()

    with pytest.raises(AuthError):
        await TokenExchanger(config, session).exchange_code("")

    assert session.calls == []


@pytest.mark.asyncio
async def test_fetch_profile_uses_bearer_token(config):
    session = FakeSession(FakeResponse(json_data={
        "id": 42,
        "firstname": "Jack",
        "lastname": "Walker",
        "city": "Boston",
        "state": "MA",
        "profile": "https://img/large.jpg",
        "profile_medium": "https://img/medium.jpg",
    }))

    athlete = await TokenExchanger(config, session).fetch_profile("abc")

    assert athlete.id == 42
    assert athlete.name == "Jack Walker"
    assert athlete.profile_medium == "https://img/medium.jpg"
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "https://www.strava.com/api/v3/athlete")
    assert kwargs["headers"]["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
async def test_fetch_profile_failure_raises_profile_error(config):
    session = FakeSession(FakeResponse(status=403, reason="Forbidden"))

    with pytest.raises(ProfileError, match="Forbidden"):
        await TokenExchanger(config, session).fetch_profile("abc")

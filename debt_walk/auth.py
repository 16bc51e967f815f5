import asyncio
import logging
from urllib.parse import urlencode

import aiohttp

from .config import ClientConfig
from .errors import AuthError, NetworkError, ProfileError
from .models import AthleteProfile, TokenPair
from .utils import bearer_headers

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
SCOPE = "activity:read_all"


def build_authorization_url(config: ClientConfig) -> str:
    """Return the Strava URL the user must visit to approve read access.

    ``approval_prompt=force`` makes Strava show the consent screen every
    time, so each visit yields a fresh authorization code.
    """
    params = {
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "response_type": "code",
        "scope": SCOPE,
        "approval_prompt": "force",
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


class TokenExchanger:
    """Exchanges authorization codes for tokens and reads the athlete profile.

    Token refresh is not implemented; the refresh token is only handed back
    to the caller for storage.
    """
    TOKEN_URL = "https://www.strava.com/oauth/token"
    ATHLETE_URL = "https://www.strava.com/api/v3/athlete"

    def __init__(self, config: ClientConfig, session: aiohttp.ClientSession) -> None:
        """Initialize the exchanger.

        Parameters
        ----------
        config: ClientConfig
            Client credentials used for the token request.
        session: aiohttp.ClientSession
            Session every request is issued on; owned by the caller.
        """
        self.config = config
        self.session = session

    async def exchange_code(self, code: str) -> TokenPair:
        if not code:
            raise AuthError("Failed to get access token: empty authorization code")
        form = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": code,
            "grant_type": "authorization_code",
        }
        try:
            async with self.session.post(self.TOKEN_URL, data=form) as resp:
                if not resp.ok:
                    raise AuthError(
                        f"Failed to get access token: {resp.reason}",
                        status=resp.status,
                        reason=resp.reason,
                    )
                data = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Error getting access token: %s", e)
            network_error = NetworkError(str(e))
            network_error.__cause__ = e
            raise AuthError(f"Failed to get access token: {e}") from network_error
        token = TokenPair.from_response(data)
        logger.info("Exchanged code for access token")
        return token

    async def fetch_profile(self, access_token: str) -> AthleteProfile:
        try:
            async with self.session.get(self.ATHLETE_URL, headers=bearer_headers(access_token)) as resp:
                if not resp.ok:
                    raise ProfileError(
                        f"Failed to fetch athlete profile: {resp.reason}",
                        status=resp.status,
                        reason=resp.reason,
                    )
                data = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Failed to fetch athlete profile: {e}") from e
        return AthleteProfile.from_api(data)

"""Authentication flow and stats pipeline.

The AuthOrchestrator is what runs "on page load": it looks at the URL the
user landed on, and when Strava redirected back with a ``code`` it exchanges
it, fetches the athlete profile and persists the session. Every failure on
that path is turned into an ``AuthResult(success=False)``.
"""
from __future__ import annotations

import logging
from pathlib import Path

import aiohttp
from tqdm.asyncio import tqdm

from .activities import ActivityFetcher
from .auth import TokenExchanger, build_authorization_url
from .config import ClientConfig
from .enums import AuthState
from .models import AthleteProfile, AuthResult, StatsSummary
from .stats import aggregate
from .token_store import (
    ACCESS_TOKEN_KEY,
    ATHLETE_KEY,
    REFRESH_TOKEN_KEY,
    FileKeyValueStore,
    KeyValueStore,
)
from .utils import get_authorization_code

logger = logging.getLogger(__name__)


class AuthOrchestrator:
    """Drives the OAuth callback and the Debt Walk stats for one session."""

    def __init__(
        self,
        config: ClientConfig,
        store: KeyValueStore | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Create the orchestrator.

        Parameters
        ----------
        config: ClientConfig
            Client credentials, athlete id and goal.
        store: KeyValueStore | None
            Where the session is persisted (defaults to a FileKeyValueStore
            at ``config.store_file`` or ``./.strava_session.json``).
        session: aiohttp.ClientSession | None
            HTTP session to use. When omitted one is created on first use and
            closed by :meth:`close`.
        """
        self.config = config
        if store is None:
            store = FileKeyValueStore(config.store_file or (Path.cwd() / ".strava_session.json"))
        self.store = store
        self.state = AuthState.AWAITING_CALLBACK
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AuthOrchestrator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def authorization_url(self) -> str:
        return build_authorization_url(self.config)

    async def authenticate(self, code: str) -> AuthResult:
        """Exchange ``code`` and fetch the athlete; never raises."""
        exchanger = TokenExchanger(self.config, self.session)
        try:
            logger.info("Exchanging authorization code for access token...")
            tokens = await exchanger.exchange_code(code)
            logger.info("Access token obtained successfully")

            logger.info("Fetching athlete profile...")
            athlete = await exchanger.fetch_profile(tokens.access_token)
        except Exception as e:
            logger.error("Authentication failed: %s", e)
            return AuthResult.failure(str(e))

        logger.info("Authenticated user: %s", athlete.name)
        logger.info("Athlete ID: %s", athlete.id)
        logger.info("City: %s, State: %s", athlete.city, athlete.state)
        return AuthResult(
            success=True,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            athlete=athlete,
        )

    def _persist(self, result: AuthResult) -> None:
        self.store.set(ACCESS_TOKEN_KEY, result.access_token)
        # the store only holds strings; a missing refresh token is kept as ""
        self.store.set(REFRESH_TOKEN_KEY, result.refresh_token or "")
        self.store.set(ATHLETE_KEY, result.athlete.to_json())
        logger.info("Credentials stored")

    async def initialize(self, location: str) -> AuthResult | None:
        """Handle the page the user landed on.

        Returns None (and logs the authorization URL) when ``location`` has no
        ``code`` parameter, otherwise the result of the authentication.
        """
        code = get_authorization_code(location)
        if not code:
            logger.info("No authorization code found. Redirect user to: %s", self.authorization_url)
            return None

        logger.info("Authorization code found in URL, authenticating...")
        result = await self.authenticate(code)
        if not result.success:
            return result

        try:
            self._persist(result)
        except Exception as e:
            logger.error("Failed to persist credentials: %s", e)
            # drop whatever part of the session made it into the store
            try:
                self.store.clear()
            except Exception:
                logger.exception("Failed to clear partially stored credentials")
            return AuthResult.failure(str(e))

        self.state = AuthState.AUTHENTICATED
        return result

    def load_session(self) -> AuthResult | None:
        """Return the persisted session, or None if nothing is stored."""
        access_token = self.store.get(ACCESS_TOKEN_KEY)
        if not access_token:
            return None
        raw_athlete = self.store.get(ATHLETE_KEY)
        athlete = None
        if raw_athlete:
            try:
                athlete = AthleteProfile.from_json(raw_athlete)
            except (ValueError, AttributeError):
                logger.warning("Ignoring malformed stored athlete profile")
        self.state = AuthState.AUTHENTICATED
        return AuthResult(
            success=True,
            access_token=access_token,
            refresh_token=self.store.get(REFRESH_TOKEN_KEY) or None,
            athlete=athlete,
        )

    def sign_out(self) -> None:
        self.store.clear()
        self.state = AuthState.AWAITING_CALLBACK

    async def get_stats(self, access_token: str, progress: bool = False) -> StatsSummary:
        """Fetch the configured activities and aggregate them against the goal.

        Errors are logged and re-raised; handling them is up to the caller.
        """
        fetcher = ActivityFetcher(self.config, self.session)
        activities = fetcher.fetch_named_activities(access_token, self.config.activity_name)
        try:
            if progress:
                activities = tqdm(activities, desc=f"Fetching {self.config.activity_name} activities", unit="act")
            collected = [activity async for activity in activities]
        except Exception:
            logger.exception("Error getting %s stats", self.config.activity_name)
            raise
        return aggregate(collected, self.config.goal_miles)

"""Paginated retrieval of athlete activities filtered by name."""
import asyncio
import logging
from typing import AsyncIterator

import aiohttp

from .config import ClientConfig
from .errors import FetchError, NetworkError
from .models import Activity
from .utils import bearer_headers

logger = logging.getLogger(__name__)


class ActivityFetcher:
    """Walks the Strava activity list page by page.

    Pages are requested strictly one after another. The walk only stops on
    an empty page, so one request past the last populated page is always
    made.
    """

    ATHLETE_ACTIVITIES_URL = "https://www.strava.com/api/v3/athletes/{athlete_id}/activities"
    OWN_ACTIVITIES_URL = "https://www.strava.com/api/v3/athlete/activities"
    PER_PAGE = 200  # Strava max per page

    def __init__(self, config: ClientConfig, session: aiohttp.ClientSession) -> None:
        self.config = config
        self.session = session

    @property
    def url(self) -> str:
        if self.config.athlete_id:
            return self.ATHLETE_ACTIVITIES_URL.format(athlete_id=self.config.athlete_id)
        return self.OWN_ACTIVITIES_URL

    async def _fetch_page(self, access_token: str, page: int) -> list:
        params = {"per_page": self.PER_PAGE, "page": page}
        try:
            async with self.session.get(self.url, headers=bearer_headers(access_token), params=params) as resp:
                if not resp.ok:
                    raise FetchError(
                        f"Failed to fetch activities: {resp.reason}",
                        status=resp.status,
                        reason=resp.reason,
                    )
                return await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Failed to fetch activities page {page}: {e}") from e

    async def fetch_named_activities(self, access_token: str, target_name: str) -> AsyncIterator[Activity]:
        """Yield every activity whose name is exactly ``target_name``.

        Raises FetchError on the first non-success page; nothing after that
        page is yielded.
        """
        page = 1
        while True:
            records = await self._fetch_page(access_token, page)
            if not records:
                logger.debug("Page %d empty; stopping", page)
                return
            matches = [record for record in records if record.get("name") == target_name]
            logger.debug("Page %d: %d records, %d named %r", page, len(records), len(matches), target_name)
            for record in matches:
                yield Activity.from_api(record)
            page += 1

    async def fetch_all(self, access_token: str, target_name: str) -> list[Activity]:
        return [activity async for activity in self.fetch_named_activities(access_token, target_name)]

"""INewsSource adapter for an Inshorts-style JSON feed."""

import logging
from typing import List, Optional

import requests

from news_briefing.config import NEWS_API_URL, NEWS_REQUEST_TIMEOUT
from news_briefing.domain.models import NewsItem
from news_briefing.errors import UpstreamUnavailableError
from news_briefing.ports.interfaces import INewsSource

logger = logging.getLogger(__name__)


class InshortsNewsSource(INewsSource):
    """GET {api_url}?category=... -> {"data": [{title, content, author, readMoreUrl, date}, ...]}"""

    def __init__(
        self,
        api_url: str = NEWS_API_URL,
        timeout: float = NEWS_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_news(self, category: str) -> List[NewsItem]:
        logger.info("Fetching %s news from %s", category, self.api_url)
        try:
            response = self.session.get(
                self.api_url,
                params={"category": category},
                headers={"Cache-Control": "no-store"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise UpstreamUnavailableError("Unable to reach the India news service.") from exc

        if not response.ok:
            logger.warning("News service answered %s", response.status_code)
            raise UpstreamUnavailableError("Unable to reach the India news service.")

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamUnavailableError("The India news service returned invalid JSON.") from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            return []
        return [NewsItem.from_dict(entry) for entry in data if isinstance(entry, dict)]

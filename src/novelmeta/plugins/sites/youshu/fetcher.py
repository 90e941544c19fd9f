import logging

from novelmeta.plugins.base.fetcher import BaseFetcher
from novelmeta.plugins.registry import hub
from novelmeta.schemas import RawPage

logger = logging.getLogger(__name__)


@hub.register_fetcher()
class YoushuFetcher(BaseFetcher):
    site_key = "youshu"
    site_name = "优书网"
    BASE_URL = "https://youshu.me"

    SEARCH_PATH = "/search/articlename/{keyword}/1.html"

    async def fetch_search_page(self, keyword: str) -> RawPage:
        path = self.SEARCH_PATH.format(keyword=self._quote(keyword))
        logger.debug("Searching %s for '%s'", self.site_key, keyword)
        return await self.fetch_page(path)

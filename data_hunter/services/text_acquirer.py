import logging
from typing import Optional, Union

from bs4 import BeautifulSoup

from data_hunter.core.config import Settings, settings as default_settings
from data_hunter.core.markets import Market, get_market
from data_hunter.services.providers import PageFetcher, TextSearchProvider

logger = logging.getLogger(__name__)

BOILERPLATE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "aside", "iframe", "form"]


def normalize_blob(text: str, max_length: int) -> str:
    """Collapse whitespace and cut to ``max_length`` characters."""
    return " ".join(text.split())[:max_length].strip()


def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(BOILERPLATE_TAGS):
        element.decompose()
    return soup.get_text(separator=" ")


class TextAcquirer:
    """Builds the raw text blob fed to field extraction.

    A blob comes either from a product page (boilerplate markup removed) or
    from the snippets of a web/shopping search. Failures give an empty blob.
    """

    def __init__(
        self,
        page_fetcher: Optional[PageFetcher] = None,
        text_search: Optional[TextSearchProvider] = None,
        config: Optional[Settings] = None,
    ):
        self.page_fetcher = page_fetcher
        self.text_search = text_search
        self.config = config or default_settings

    def acquire(self, source: Optional[str], market: Union[Market, str, None] = None) -> str:
        if not source:
            return ""
        if source.startswith(("http://", "https://")):
            return self.acquire_page(source)
        return self.acquire_search(source, market)

    def acquire_page(self, url: Optional[str]) -> str:
        if not url or self.page_fetcher is None:
            return ""
        try:
            html = self.page_fetcher.fetch(url)
        except Exception as e:
            logger.warning("Could not fetch %s: %s", url, e)
            return ""
        if not html:
            return ""
        return normalize_blob(html_to_text(html), self.config.max_text_length)

    def acquire_search(self, query: str, market: Union[Market, str, None] = None) -> str:
        if not query or self.text_search is None:
            return ""
        if not isinstance(market, Market):
            market = get_market(market)
        try:
            result = self.text_search.search_text(query, market)
        except Exception as e:
            logger.warning("Text search failed for %r: %s", query, e)
            return ""

        parts = list(result.snippets[: self.config.max_snippets])
        if result.shopping_descriptions:
            parts.append(result.shopping_descriptions[0])
        return normalize_blob(" ".join(parts), self.config.max_text_length)

"""
External data sources used by the resolution pipeline.

Each adapter wraps one ``requests.Session`` and raises ``ProviderError`` on
network failures or malformed payloads; callers decide how to degrade.
"""

import logging
from typing import List, Optional, Protocol

import requests

from data_hunter.core.config import Settings, settings as default_settings
from data_hunter.core.markets import Market
from data_hunter.models.schemas import BarcodeProduct, ImageSearchResult, TextSearchResult

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Raised when an external source fails or answers with garbage."""


class BarcodeLookup(Protocol):
    def lookup(self, barcode: str) -> Optional[BarcodeProduct]: ...


class ImageSearchProvider(Protocol):
    def search_images(self, query: str, market: Market) -> List[ImageSearchResult]: ...


class TextSearchProvider(Protocol):
    def search_text(self, query: str, market: Market) -> TextSearchResult: ...


class PageFetcher(Protocol):
    def fetch(self, url: str) -> str: ...


def _session(config: Settings) -> requests.Session:
    session = requests.Session()
    session.headers.update({
        "User-Agent": config.user_agent,
        "Accept-Language": "en-US,en;q=0.9",
    })
    return session


class SerpApiClient:
    """Google image and web search through SerpAPI."""

    def __init__(self, api_key: str, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.config = config or default_settings
        self.session = session or _session(self.config)

    def close(self) -> None:
        self.session.close()

    def _get(self, params: dict) -> dict:
        params = {**params, "api_key": self.api_key}
        try:
            response = self.session.get(self.config.serpapi_url, params=params, timeout=self.config.request_timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ProviderError(f"SerpAPI request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"SerpAPI returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ProviderError("SerpAPI returned an unexpected payload")
        if data.get("error"):
            # "Google hasn't returned any results" is reported as an error too
            logger.info("SerpAPI: %s (q=%r)", data["error"], params.get("q"))
            return {}
        return data

    def search_images(self, query: str, market: Market) -> List[ImageSearchResult]:
        data = self._get({
            "engine": "google",
            "tbm": "isch",
            "q": query,
            "gl": market.google_country,
            "hl": market.language,
        })
        results = []
        for item in data.get("images_results") or []:
            if not isinstance(item, dict) or not item.get("original"):
                continue
            results.append(ImageSearchResult(
                original_url=item["original"],
                link=item.get("link"),
                title=item.get("title"),
            ))
        return results

    def search_text(self, query: str, market: Market) -> TextSearchResult:
        data = self._get({
            "engine": "google",
            "q": query,
            "gl": market.google_country,
            "hl": market.language,
            "num": 10,
        })
        snippets = [
            item["snippet"] for item in data.get("organic_results") or []
            if isinstance(item, dict) and item.get("snippet")
        ]
        shopping = [
            item.get("description") or item.get("snippet")
            for item in (data.get("shopping_results") or data.get("inline_shopping_results") or [])
            if isinstance(item, dict) and (item.get("description") or item.get("snippet"))
        ]
        return TextSearchResult(snippets=snippets, shopping_descriptions=shopping)


class GoUpcLookup:
    """Authoritative barcode database lookup (go-upc.com API)."""

    def __init__(self, token: str, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.token = token
        self.config = config or default_settings
        self.session = session or _session(self.config)

    def close(self) -> None:
        self.session.close()

    def lookup(self, barcode: str) -> Optional[BarcodeProduct]:
        url = self.config.barcode_lookup_url.format(barcode=barcode)
        try:
            response = self.session.get(
                url,
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=self.config.request_timeout,
            )
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ProviderError(f"Barcode lookup failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Barcode lookup returned invalid JSON: {e}") from e

        product = data.get("product") if isinstance(data, dict) else None
        if not isinstance(product, dict):
            return None
        name = product.get("name")
        image_url = product.get("imageUrl")
        if not name and not image_url:
            return None
        return BarcodeProduct(name=name, image_url=image_url, source_url=f"https://go-upc.com/search?q={barcode}")


class WebPageFetcher:
    """Plain HTML fetch with a browser User-Agent."""

    def __init__(self, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.config = config or default_settings
        self.session = session or _session(self.config)
        self.session.headers["Accept"] = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

    def close(self) -> None:
        self.session.close()

    def fetch(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.config.request_timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ProviderError(f"Page fetch failed for {url}: {e}") from e
        return response.text

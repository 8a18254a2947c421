import io
import json

import pytest
import requests
from PIL import Image
from requests.structures import CaseInsensitiveDict

from data_hunter.core.config import Settings
from data_hunter.models.schemas import BarcodeProduct, ImageSearchResult, TextSearchResult
from data_hunter.services.providers import ProviderError


def png_bytes(width: int, height: int) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, content=b"", status_code=200, headers=None, chunk_size=None):
        if isinstance(content, (dict, list)):
            content = json.dumps(content).encode("utf-8")
        elif isinstance(content, str):
            content = content.encode("utf-8")
        self.content = content
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.chunk_size = chunk_size
        self.chunks_served = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    @property
    def text(self):
        return self.content.decode("utf-8")

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size=1):
        size = self.chunk_size or chunk_size
        for start in range(0, len(self.content), size):
            self.chunks_served += 1
            yield self.content[start:start + size]


class FakeSession:
    """Stands in for requests.Session; routes are url -> response or exception."""

    def __init__(self, routes=None, default=None):
        self.headers = CaseInsensitiveDict()
        self.routes = routes or {}
        self.default = default
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        outcome = self.routes.get(url, self.default)
        if outcome is None:
            return FakeResponse(status_code=404)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


class StubValidator:
    def __init__(self, accept=()):
        self.accept = set(accept)
        self.checked = []

    def is_acceptable(self, url):
        self.checked.append(url)
        return url in self.accept

    def close(self):
        pass


class StubLookup:
    def __init__(self, product=None, error=None):
        self.product = product
        self.error = error
        self.calls = 0

    def lookup(self, barcode):
        self.calls += 1
        if self.error:
            raise self.error
        return self.product


class StubImageSearch:
    """Returns ``responder(query)``; ``responder`` may raise."""

    def __init__(self, responder=None):
        self.responder = responder or (lambda query: [])
        self.queries = []

    def search_images(self, query, market):
        self.queries.append(query)
        return self.responder(query)


class StubTextSearch:
    def __init__(self, result=None, error=None):
        self.result = result or TextSearchResult()
        self.error = error
        self.queries = []

    def search_text(self, query, market):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.result


class StubFetcher:
    def __init__(self, pages=None):
        self.pages = pages or {}
        self.urls = []

    def fetch(self, url):
        self.urls.append(url)
        if url not in self.pages:
            raise ProviderError(f"Page fetch failed for {url}: 404")
        return self.pages[url]


@pytest.fixture
def settings():
    return Settings(_env_file=None, serpapi_key=None, barcode_lookup_token=None, google_api_key=None)


@pytest.fixture
def candidate():
    def build(url, link=None, title=None):
        return ImageSearchResult(original_url=url, link=link, title=title)
    return build


@pytest.fixture
def product():
    def build(name=None, image_url=None, source_url=None):
        return BarcodeProduct(name=name, image_url=image_url, source_url=source_url)
    return build

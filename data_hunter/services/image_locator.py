import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from data_hunter.core.config import Settings, settings as default_settings
from data_hunter.core.markets import Market, get_market
from data_hunter.models.schemas import ImageCandidate, ImageSearchResult, LocatedImage
from data_hunter.services.image_validator import ImageValidator
from data_hunter.services.providers import BarcodeLookup, ImageSearchProvider

logger = logging.getLogger(__name__)

# Retailer / barcode sites whose product shots are reliable
TRUSTED_DOMAINS = ("barcodelookup.com", "go-upc.com", "ean-search.org", "upcitemdb.com")

# User generated content, open databases, marketplaces and stock imagery
BLOCKED_MARKERS = (
    "openfoodfacts.", "myfitnesspal.", "pinterest.", "ebay.", "etsy.", "kleinanzeigen.",
    "vinted.", "shutterstock.", "istockphoto.", "alamy.", "dreamstime.", "123rf.",
    "placeholder", "no-image", "noimage", "no_image",
)

QUERY_BANS = (
    "-site:openfoodfacts.org -site:world.openfoodfacts.org -site:myfitnesspal.com "
    "-site:pinterest.* -site:ebay.*"
)


@dataclass
class LocateContext:
    barcode: str
    market: Market
    product_name: Optional[str] = None
    brand_keyword: Optional[str] = None


Strategy = Callable[[LocateContext], Optional[ImageCandidate]]


def sanitize_name(name: str) -> str:
    """Keep letters, digits and single spaces."""
    return " ".join(re.sub(r"[^\w\s]|_", " ", name).split())


def brand_keyword(name: Optional[str]) -> Optional[str]:
    """First word of a product name long enough to identify the brand."""
    for word in sanitize_name(name or "").split():
        if len(word) >= 3 and not any(ch.isdigit() for ch in word):
            return word.lower()
    return None


def is_blocked(*urls: Optional[str]) -> bool:
    for url in urls:
        if not url:
            continue
        lowered = url.lower()
        if any(marker in lowered for marker in BLOCKED_MARKERS):
            return True
    return False


class ImageLocator:
    """Runs the image strategies in order and stops at the first validated candidate."""

    def __init__(
        self,
        validator: ImageValidator,
        image_search: Optional[ImageSearchProvider] = None,
        barcode_lookup: Optional[BarcodeLookup] = None,
        config: Optional[Settings] = None,
    ):
        self.validator = validator
        self.image_search = image_search
        self.barcode_lookup = barcode_lookup
        self.config = config or default_settings
        self.strategies: List[Strategy] = [
            self.authoritative_lookup,
            self.targeted_search,
            self.localized_search,
            self.broad_search,
            self.name_search,
        ]

    def locate(self, barcode: str, market: Union[Market, str, None]) -> LocatedImage:
        if not isinstance(market, Market):
            market = get_market(market)
        ctx = LocateContext(barcode=(barcode or "").strip(), market=market)

        for strategy in self.strategies:
            try:
                candidate = strategy(ctx)
            except Exception as e:
                logger.warning("%s failed for %s: %s", strategy.__name__, ctx.barcode, e)
                continue
            if candidate is not None:
                logger.info("Image for %s found by %s: %s", ctx.barcode, strategy.__name__, candidate.url)
                return LocatedImage(
                    found=True,
                    url=candidate.url,
                    source_page_url=candidate.source_page_url,
                    product_name=ctx.product_name,
                )

        logger.info("No image found for %s", ctx.barcode)
        return LocatedImage(found=False, product_name=ctx.product_name)

    # -- strategies ---------------------------------------------------------

    def authoritative_lookup(self, ctx: LocateContext) -> Optional[ImageCandidate]:
        if self.barcode_lookup is None:
            return None
        product = self.barcode_lookup.lookup(ctx.barcode)
        if product is None:
            return None
        if product.name:
            ctx.product_name = product.name.strip()
            ctx.brand_keyword = brand_keyword(product.name)
        if product.image_url and not is_blocked(product.image_url) and self.validator.is_acceptable(product.image_url):
            return ImageCandidate(url=product.image_url, source_page_url=product.source_url, validated=True)
        return None

    def targeted_search(self, ctx: LocateContext) -> Optional[ImageCandidate]:
        sites = " OR ".join(f"site:{domain}" for domain in TRUSTED_DOMAINS)
        return self._search(f'{sites} "{ctx.barcode}"', ctx)

    def localized_search(self, ctx: LocateContext) -> Optional[ImageCandidate]:
        return self._search(f'"{ctx.barcode}" {ctx.market.country} {QUERY_BANS}', ctx)

    def broad_search(self, ctx: LocateContext) -> Optional[ImageCandidate]:
        return self._search(f"{ctx.barcode} {QUERY_BANS}", ctx)

    def name_search(self, ctx: LocateContext) -> Optional[ImageCandidate]:
        if not ctx.product_name:
            return None
        query = sanitize_name(ctx.product_name)
        if not query:
            return None
        return self._search(f"{query} {QUERY_BANS}", ctx)

    # -- helpers ------------------------------------------------------------

    def _search(self, query: str, ctx: LocateContext) -> Optional[ImageCandidate]:
        if self.image_search is None:
            return None
        results = self.image_search.search_images(query, ctx.market)
        return self._first_valid(results, ctx)

    def _first_valid(self, results: List[ImageSearchResult], ctx: LocateContext) -> Optional[ImageCandidate]:
        for result in results[: self.config.max_candidates]:
            if is_blocked(result.original_url, result.link):
                continue
            if ctx.brand_keyword and result.title and ctx.brand_keyword not in result.title.lower():
                logger.debug("Title %r does not mention %r", result.title, ctx.brand_keyword)
                continue
            if self.validator.is_acceptable(result.original_url):
                return ImageCandidate(
                    url=result.original_url,
                    source_page_url=result.link,
                    title=result.title,
                    validated=True,
                )
        return None

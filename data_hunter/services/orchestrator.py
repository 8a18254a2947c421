"""
Resolution pipeline: barcode + market in, one ``NutritionRecord`` out.

The image cascade runs first; its source page then feeds a sequence of
extraction passes (page scrape, search snippets, optional vision model).
The first pass that finds an ingredient list wins.
"""

import logging
from typing import Callable, List, Optional, Tuple

from data_hunter.core.config import Settings, settings as default_settings
from data_hunter.core.markets import DEFAULT_MARKET, Market, get_market
from data_hunter.core.vocabulary import FIELD_SYNONYMS, SECTION_STOP_WORDS
from data_hunter.models.schemas import SENTINEL, LocatedImage, NutritionFields, NutritionRecord, VisionFields
from data_hunter.services.extraction import FieldExtractionEngine
from data_hunter.services.image_locator import ImageLocator, sanitize_name
from data_hunter.services.image_validator import ImageValidator
from data_hunter.services.providers import GoUpcLookup, SerpApiClient, WebPageFetcher
from data_hunter.services.text_acquirer import TextAcquirer
from data_hunter.services.vision_service import VisionExtractor

logger = logging.getLogger(__name__)

STATUS_FOUND = "Found"
STATUS_MISSING = "Missing"

Pass = Callable[[], Optional[NutritionFields]]


def search_queries(barcode: str, market: Market, product_name: Optional[str] = None) -> List[str]:
    """Text search queries for the snippet fallback, most specific first."""
    ingredients_label = FIELD_SYNONYMS["ingredients"][market.language][0]
    nutrition_label = SECTION_STOP_WORDS[market.language][0]
    queries = [f"{barcode} {ingredients_label} {nutrition_label}"]
    name = sanitize_name(product_name or "")
    if name:
        queries.append(f"{name} {ingredients_label}")
    return queries


class ResolutionOrchestrator:
    def __init__(
        self,
        locator: ImageLocator,
        acquirer: TextAcquirer,
        engine: FieldExtractionEngine,
        vision: Optional[VisionExtractor] = None,
    ):
        self.locator = locator
        self.acquirer = acquirer
        self.engine = engine
        self.vision = vision

    def resolve(self, barcode: Optional[str], market: Optional[str]) -> NutritionRecord:
        gtin = (barcode or "").strip()
        market_code = (market or "").strip().upper() or DEFAULT_MARKET.code
        if not gtin:
            return NutritionRecord(market=market_code)

        image = LocatedImage()
        fields = NutritionFields()
        vision_name = None
        try:
            target = get_market(market_code)
            image = self.locator.locate(gtin, target)
            fields, vision_name = self.extract_fields(gtin, target, image)
        except Exception as e:
            logger.exception("Resolution failed for %s/%s", gtin, market_code)
            return self.merge(gtin, market_code, image, fields, vision_name, status=f"Error: {e}")
        return self.merge(gtin, market_code, image, fields, vision_name)

    def extract_fields(self, gtin: str, market: Market, image: LocatedImage) -> Tuple[NutritionFields, Optional[str]]:
        """Run the extraction passes; return the kept fields and a vision product name."""
        passes: List[Tuple[str, Pass]] = []
        if image.source_page_url:
            passes.append(("page", lambda: self._text_pass(self.acquirer.acquire_page(image.source_page_url), market)))
        for query in search_queries(gtin, market, image.product_name):
            passes.append(("search", lambda q=query: self._text_pass(self.acquirer.acquire_search(q, market), market)))
        if self.vision is not None and image.found and image.url:
            passes.append(("vision", lambda: self.vision.extract(image.url, market.language_name)))

        best: Optional[NutritionFields] = None
        for name, run in passes:
            try:
                result = run()
            except Exception as e:
                logger.warning("%s pass failed for %s: %s", name, gtin, e)
                continue
            if result is None:
                continue
            if self.engine.has_ingredients(result):
                logger.info("Ingredients for %s found by %s pass", gtin, name)
                best = result
                break
            if best is None or result.resolved_count() > best.resolved_count():
                best = result

        if best is None:
            return NutritionFields(), None
        if isinstance(best, VisionFields):
            vision_name = best.product_name if best.product_name != SENTINEL else None
            return NutritionFields(**best.model_dump(exclude={"product_name"})), vision_name
        return best, None

    def _text_pass(self, blob: str, market: Market) -> Optional[NutritionFields]:
        if not blob:
            return None
        return self.engine.extract(blob, [market.language])

    @staticmethod
    def merge(
        gtin: str,
        market_code: str,
        image: LocatedImage,
        fields: NutritionFields,
        vision_name: Optional[str] = None,
        status: Optional[str] = None,
    ) -> NutritionRecord:
        found = image.found or fields.resolved_count() > 0
        return NutritionRecord(
            **fields.model_dump(),
            found=found,
            status=status or (STATUS_FOUND if found else STATUS_MISSING),
            gtin=gtin,
            market=market_code,
            image_url=image.url or SENTINEL,
            source_url=image.source_page_url or SENTINEL,
            product_name=image.product_name or vision_name or SENTINEL,
        )

    def close(self) -> None:
        for component in (
            self.locator.validator,
            self.locator.image_search,
            self.locator.barcode_lookup,
            self.acquirer.page_fetcher,
            self.acquirer.text_search,
            self.vision,
        ):
            close = getattr(component, "close", None)
            if close is not None:
                close()


def build_orchestrator(config: Optional[Settings] = None) -> ResolutionOrchestrator:
    """Wire the pipeline from settings; providers without credentials stay disabled."""
    config = config or default_settings
    serpapi = SerpApiClient(config.serpapi_key, config) if config.serpapi_key else None
    lookup = GoUpcLookup(config.barcode_lookup_token, config) if config.barcode_lookup_token else None
    vision = VisionExtractor(config.google_api_key, config) if config.google_api_key else None

    locator = ImageLocator(ImageValidator(config), image_search=serpapi, barcode_lookup=lookup, config=config)
    acquirer = TextAcquirer(page_fetcher=WebPageFetcher(config), text_search=serpapi, config=config)
    engine = FieldExtractionEngine(max_value_length=config.max_value_length)

    if serpapi is None:
        logger.warning("SERPAPI_KEY not set: image and text search disabled")
    if vision is None:
        logger.info("GOOGLE_API_KEY not set: vision extraction disabled")
    return ResolutionOrchestrator(locator, acquirer, engine, vision)

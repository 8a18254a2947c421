from data_hunter.core.markets import get_market
from data_hunter.services.image_locator import ImageLocator, brand_keyword, is_blocked, sanitize_name
from data_hunter.services.providers import ProviderError
from conftest import StubImageSearch, StubLookup, StubValidator

BARCODE = "4006381333931"
GOOD = "https://shop.example.de/img/4006381333931.jpg"


def test_authoritative_image_short_circuits_search(settings, product):
    lookup = StubLookup(product("Stabilo Point 88", GOOD, "https://go-upc.com/search?q=4006381333931"))
    search = StubImageSearch(lambda q: [])
    locator = ImageLocator(StubValidator([GOOD]), image_search=search, barcode_lookup=lookup, config=settings)

    result = locator.locate(BARCODE, "DE")

    assert result.found is True
    assert result.url == GOOD
    assert result.source_page_url == "https://go-upc.com/search?q=4006381333931"
    assert result.product_name == "Stabilo Point 88"
    assert lookup.calls == 1
    assert search.queries == []


def test_cascade_order(settings):
    search = StubImageSearch(lambda q: [])
    locator = ImageLocator(StubValidator(), image_search=search, config=settings)

    result = locator.locate(BARCODE, "DE")

    assert result.found is False
    assert len(search.queries) == 3
    targeted, localized, broad = search.queries
    assert "site:barcodelookup.com OR site:go-upc.com" in targeted
    assert f'"{BARCODE}"' in targeted
    assert "Deutschland Germany" in localized
    assert "-site:openfoodfacts.org" in localized
    assert broad.startswith(BARCODE)
    assert "Germany" not in broad


def test_name_search_used_when_lookup_image_fails(settings, product, candidate):
    lookup = StubLookup(product("Milka Alpenmilch 100g!", "https://img.example.com/tiny.png"))

    def responder(query):
        if query.startswith("Milka Alpenmilch 100g"):
            return [candidate(GOOD, link="https://shop.example.de/milka", title="Milka Alpenmilch")]
        return []

    search = StubImageSearch(responder)
    locator = ImageLocator(StubValidator([GOOD]), image_search=search, barcode_lookup=lookup, config=settings)

    result = locator.locate(BARCODE, "DE")

    assert result.found is True
    assert result.url == GOOD
    assert result.source_page_url == "https://shop.example.de/milka"
    assert result.product_name == "Milka Alpenmilch 100g!"
    assert len(search.queries) == 4


def test_name_search_skipped_without_name(settings):
    search = StubImageSearch(lambda q: [])
    locator = ImageLocator(StubValidator(), image_search=search, barcode_lookup=StubLookup(None), config=settings)

    locator.locate(BARCODE, "UK")

    assert len(search.queries) == 3


def test_blocked_domains_never_validated(settings, candidate):
    off = "https://images.openfoodfacts.org/images/products/400/front.jpg"
    ebay = "https://i.ebayimg.com/x.jpg"
    search = StubImageSearch(lambda q: [
        candidate(off),
        candidate(ebay, link="https://www.ebay.de/itm/123"),
        candidate("https://cdn.example.com/placeholder.png"),
        candidate(GOOD),
    ])
    validator = StubValidator([off, ebay, GOOD])
    locator = ImageLocator(validator, image_search=search, config=settings)

    result = locator.locate(BARCODE, "DE")

    assert result.url == GOOD
    assert validator.checked == [GOOD]


def test_only_a_prefix_of_candidates_is_examined(settings, candidate):
    results = [candidate(f"https://cdn.example.com/{i}.jpg") for i in range(30)]
    validator = StubValidator()
    locator = ImageLocator(validator, image_search=StubImageSearch(lambda q: results), config=settings)

    locator.locate(BARCODE, "DE")

    # three search strategies, each capped
    assert len(validator.checked) == 3 * settings.max_candidates


def test_title_without_brand_rejected(settings, product, candidate):
    wrong = "https://shop.example.de/ritter.jpg"
    lookup = StubLookup(product("Milka Alpenmilch"))
    search = StubImageSearch(lambda q: [
        candidate(wrong, title="Ritter Sport Vollmilch"),
        candidate(GOOD, title="MILKA Alpenmilch 100 g"),
    ])
    validator = StubValidator([wrong, GOOD])
    locator = ImageLocator(validator, image_search=search, barcode_lookup=lookup, config=settings)

    result = locator.locate(BARCODE, "DE")

    assert result.url == GOOD
    assert wrong not in validator.checked


def test_provider_error_moves_to_next_strategy(settings, candidate):
    def responder(query):
        if query.startswith("site:"):
            raise ProviderError("SerpAPI request failed: 429")
        return [candidate(GOOD)]

    search = StubImageSearch(responder)
    lookup = StubLookup(error=ProviderError("Barcode lookup failed: timeout"))
    locator = ImageLocator(StubValidator([GOOD]), image_search=search, barcode_lookup=lookup, config=settings)

    result = locator.locate(BARCODE, "DE")

    assert result.found is True
    assert len(search.queries) == 2


def test_no_providers_finds_nothing(settings):
    result = ImageLocator(StubValidator(), config=settings).locate(BARCODE, "DE")

    assert result.found is False
    assert result.url is None
    assert result.product_name is None


def test_accepts_market_object(settings):
    search = StubImageSearch(lambda q: [])
    ImageLocator(StubValidator(), image_search=search, config=settings).locate(BARCODE, get_market("fr"))

    assert "France" in search.queries[1]


def test_sanitize_name():
    assert sanitize_name("Dr. Oetker  Ristorante (Pizza) – 355g!") == "Dr Oetker Ristorante Pizza 355g"
    assert sanitize_name("Müller_Milch") == "Müller Milch"


def test_brand_keyword():
    assert brand_keyword("Dr. Oetker Ristorante") == "oetker"
    assert brand_keyword("Nutella 750g") == "nutella"
    assert brand_keyword("500g Nutella") == "nutella"
    assert brand_keyword("4x125g 100 Müller") == "müller"
    assert brand_keyword(None) is None


def test_is_blocked():
    assert is_blocked("https://world.openfoodfacts.org/product/1")
    assert is_blocked(None, "https://www.pinterest.com/pin/1")
    assert not is_blocked("https://www.rewe.de/produkte/1", None)

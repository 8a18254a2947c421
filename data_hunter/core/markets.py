"""Supported markets: country display names and output languages."""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Market:
    code: str
    country: str
    language: str
    language_name: str
    google_country: str

    @property
    def country_terms(self) -> List[str]:
        """Individual words of the display name, e.g. ['Deutschland', 'Germany']."""
        return self.country.split()


DEFAULT_MARKET = Market("UK", "United Kingdom", "en", "English", "gb")

MARKETS: Dict[str, Market] = {
    m.code: m
    for m in [
        Market("DE", "Deutschland Germany", "de", "German", "de"),
        Market("AT", "Österreich Austria", "de", "German", "at"),
        Market("CH", "Schweiz Suisse Switzerland", "de", "German", "ch"),
        DEFAULT_MARKET,
        Market("GB", "United Kingdom", "en", "English", "gb"),
        Market("FR", "France", "fr", "French", "fr"),
        Market("BE", "Belgique België Belgium", "fr", "French", "be"),
        Market("IT", "Italia Italy", "it", "Italian", "it"),
        Market("ES", "España Spain", "es", "Spanish", "es"),
        Market("NL", "Nederland Netherlands", "nl", "Dutch", "nl"),
        Market("DK", "Danmark Denmark", "da", "Danish", "dk"),
        Market("SE", "Sverige Sweden", "sv", "Swedish", "se"),
        Market("NO", "Norge Norway", "no", "Norwegian", "no"),
        Market("PL", "Polska Poland", "pl", "Polish", "pl"),
        Market("PT", "Portugal", "pt", "Portuguese", "pt"),
    ]
}


def get_market(code: Optional[str]) -> Market:
    """Look up a market by code; unknown codes fall back to English."""
    if not code:
        return DEFAULT_MARKET
    return MARKETS.get(code.strip().upper(), DEFAULT_MARKET)

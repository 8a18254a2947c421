from fastapi import APIRouter, Depends, Query
from functools import lru_cache
from typing import List, Optional

from data_hunter.core.markets import MARKETS
from data_hunter.models.schemas import HealthResponse, MarketResponse, NutritionRecord
from data_hunter.services.orchestrator import ResolutionOrchestrator, build_orchestrator

router = APIRouter()


@lru_cache(maxsize=1)
def get_orchestrator() -> ResolutionOrchestrator:
    """Shared pipeline built from the environment settings"""
    return build_orchestrator()


@router.get("/api/search", response_model=NutritionRecord)
def search_product(
    gtin: str = Query("", description="Barcode (GTIN / EAN)"),
    market: Optional[str] = Query(None, description="Two-letter market code, e.g. DE"),
    orchestrator: ResolutionOrchestrator = Depends(get_orchestrator),
):
    """Resolve image and nutrition facts for one barcode"""
    return orchestrator.resolve(gtin, market)


@router.get("/api/markets", response_model=List[MarketResponse])
def list_markets():
    """Supported markets and their output languages"""
    return [
        MarketResponse(code=m.code, country=m.country, language=m.language_name)
        for m in MARKETS.values()
    ]


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        service="Master Data Hunter API",
        version="1.0.0"
    )


@router.get("/")
def root():
    """API information and documentation links"""
    return {
        "service": "Master Data Hunter API",
        "version": "1.0.0",
        "description": "Product image and nutrition facts lookup by barcode",
        "docs": "/docs",
        "health": "/health"
    }

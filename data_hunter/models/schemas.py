from pydantic import BaseModel, Field
from typing import List, Optional

SENTINEL = "-"


class NutritionFields(BaseModel):
    weight: str = Field(default=SENTINEL, description="Net weight (e.g. 500g) or -")
    ingredients: str = Field(default=SENTINEL, description="Full ingredient list as a single string or -")
    allergens: str = Field(default=SENTINEL, description="List of allergens or -")
    may_contain: str = Field(default=SENTINEL, description="May contain / traces warnings or -")
    nutrition_header: str = Field(default=SENTINEL, description="Nutrition table basis (e.g. per 100g) or -")
    energy: str = Field(default=SENTINEL, description="Energy in kJ / kcal or -")
    fat: str = Field(default=SENTINEL, description="Total fat value or -")
    saturates: str = Field(default=SENTINEL, description="Saturated fat value or -")
    carbs: str = Field(default=SENTINEL, description="Carbohydrates value or -")
    sugars: str = Field(default=SENTINEL, description="Sugars value or -")
    protein: str = Field(default=SENTINEL, description="Protein value or -")
    fiber: str = Field(default=SENTINEL, description="Fibre value or -")
    salt: str = Field(default=SENTINEL, description="Salt value or -")
    organic_cert: str = Field(default=SENTINEL, description="Organic certification code (e.g. DE-ÖKO-001) or -")

    def resolved_count(self) -> int:
        """Number of fields holding a real value."""
        return sum(1 for value in self.model_dump().values() if value != SENTINEL)


class VisionFields(NutritionFields):
    product_name: str = Field(default=SENTINEL, description="Brand + product name or -")


class NutritionRecord(NutritionFields):
    found: bool = False
    status: str = "Missing"
    gtin: str = SENTINEL
    market: str = SENTINEL
    image_url: str = SENTINEL
    source_url: str = SENTINEL
    product_name: str = SENTINEL


class ImageCandidate(BaseModel):
    url: str
    source_page_url: Optional[str] = None
    title: Optional[str] = None
    validated: bool = False


class LocatedImage(BaseModel):
    found: bool = False
    url: Optional[str] = None
    source_page_url: Optional[str] = None
    product_name: Optional[str] = None


class BarcodeProduct(BaseModel):
    name: Optional[str] = None
    image_url: Optional[str] = None
    source_url: Optional[str] = None


class ImageSearchResult(BaseModel):
    original_url: str
    link: Optional[str] = None
    title: Optional[str] = None


class TextSearchResult(BaseModel):
    snippets: List[str] = []
    shopping_descriptions: List[str] = []


class MarketResponse(BaseModel):
    code: str
    country: str
    language: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Credentials (each provider is disabled when its key is missing)
    serpapi_key: Optional[str] = None
    barcode_lookup_token: Optional[str] = None
    google_api_key: Optional[str] = None

    # Optional with defaults
    barcode_lookup_url: str = "https://go-upc.com/api/v1/code/{barcode}"
    serpapi_url: str = "https://serpapi.com/search"
    gemini_model: str = "gemini-2.5-flash"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0 Safari/537.36"
    )

    # Network
    request_timeout: float = 8.0
    image_probe_timeout: float = 4.0
    max_probe_bytes: int = 262144  # 256KB
    vision_max_image_bytes: int = 5242880  # 5MB

    # Image quality gate
    min_image_width: int = 300
    min_aspect_ratio: float = 0.3
    max_aspect_ratio: float = 2.5
    max_candidates: int = 12

    # Text acquisition / extraction
    max_text_length: int = 5000
    max_snippets: int = 5
    max_value_length: int = 500

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()

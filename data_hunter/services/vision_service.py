import base64
import logging
from typing import Optional

import requests
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.messages import HumanMessage

from data_hunter.core.config import Settings, settings as default_settings
from data_hunter.models.schemas import SENTINEL, VisionFields
from data_hunter.prompt import VISION_PROMPT

logger = logging.getLogger(__name__)


class VisionExtractor:
    """Reads nutrition facts straight off a product image with Gemini."""

    def __init__(self, api_key: str, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.config = config or default_settings
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})
        self._llm = None

    def close(self) -> None:
        self.session.close()

    @property
    def llm(self):
        if self._llm is None:
            self._llm = ChatGoogleGenerativeAI(
                model=self.config.gemini_model,
                google_api_key=self.api_key,
                temperature=0,
            ).with_structured_output(VisionFields)
        return self._llm

    def download_image(self, url: str) -> Optional[tuple]:
        """Return (mime_type, bytes) for an image no larger than the configured cap."""
        limit = self.config.vision_max_image_bytes
        try:
            with self.session.get(url, stream=True, timeout=self.config.request_timeout) as response:
                response.raise_for_status()
                mime_type = response.headers.get("Content-Type", "image/jpeg").split(";")[0].strip()
                data = bytearray()
                for chunk in response.iter_content(65536):
                    data.extend(chunk)
                    if len(data) > limit:
                        logger.info("Image %s exceeds %d bytes, skipping vision pass", url, limit)
                        return None
        except requests.RequestException as e:
            logger.warning("Image download failed for %s: %s", url, e)
            return None
        if not mime_type.startswith("image/"):
            mime_type = "image/jpeg"
        return mime_type, bytes(data)

    def extract(self, image_url: str, language_name: str) -> Optional[VisionFields]:
        """Extract product fields from the image at ``image_url``."""
        downloaded = self.download_image(image_url)
        if downloaded is None:
            return None
        mime_type, payload = downloaded
        image_data = base64.b64encode(payload).decode("utf-8")

        message = HumanMessage(
            content=[
                {"type": "text", "text": VISION_PROMPT.format(language=language_name)},
                {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{image_data}"}},
            ]
        )

        try:
            result = self.llm.invoke([message])
        except Exception as e:
            logger.warning("Vision extraction failed for %s: %s", image_url, e)
            return None
        if not isinstance(result, VisionFields):
            return None
        return _fill_blanks(result)


def _fill_blanks(fields: VisionFields) -> VisionFields:
    """Replace empty strings from the model with the sentinel."""
    cleaned = {key: (value.strip() if isinstance(value, str) and value.strip() else SENTINEL)
               for key, value in fields.model_dump().items()}
    return VisionFields(**cleaned)

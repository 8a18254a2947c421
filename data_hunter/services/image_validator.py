import logging
from typing import Optional, Tuple

import requests
from PIL import Image, ImageFile

from data_hunter.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class ImageValidator:
    """Judges whether a remote image is usable as a product photo.

    Only the image header is downloaded: chunks are streamed into a Pillow
    incremental parser until it reports a size.
    """

    def __init__(self, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.config = config or default_settings
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": self.config.user_agent,
            "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
        })

    def close(self) -> None:
        self.session.close()

    def is_acceptable(self, url: Optional[str]) -> bool:
        if not url:
            return False
        size = self.probe_dimensions(url)
        if size is None:
            return False
        accepted = self.is_acceptable_size(*size)
        if not accepted:
            logger.debug("Rejected %s: %dx%d", url, size[0], size[1])
        return accepted

    def is_acceptable_size(self, width: int, height: int) -> bool:
        if height <= 0 or width <= self.config.min_image_width:
            return False
        ratio = width / height
        return self.config.min_aspect_ratio <= ratio <= self.config.max_aspect_ratio

    def probe_dimensions(self, url: str) -> Optional[Tuple[int, int]]:
        """Return (width, height) read from the image header, or None."""
        parser = ImageFile.Parser()
        received = 0
        try:
            with self.session.get(url, stream=True, timeout=self.config.image_probe_timeout) as response:
                response.raise_for_status()
                for chunk in response.iter_content(CHUNK_SIZE):
                    if not chunk:
                        continue
                    parser.feed(chunk)
                    if parser.image is not None:
                        return parser.image.size
                    received += len(chunk)
                    if received >= self.config.max_probe_bytes:
                        break
        except (requests.RequestException, OSError, ValueError, Image.DecompressionBombError) as e:
            logger.debug("Image probe failed for %s: %s", url, e)
            return None
        logger.debug("No image header found in first %d bytes of %s", received, url)
        return None

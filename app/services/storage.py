import logging
from typing import Optional

import requests

from app.core.exceptions import TransientInfraError

logger = logging.getLogger(__name__)


class UploadStorageClient:
    """Talks to the upload service that owns the image bytes"""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def delete(self, url: str) -> None:
        try:
            response = self.session.delete(self.base_url, json={"url": url}, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to delete upload {url}: {e}")
            raise TransientInfraError("upload deletion failed") from e
        logger.info(f"Deleted upload {url}")

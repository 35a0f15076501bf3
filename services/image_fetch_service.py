"""
Image fetch service for downloading menu images over HTTP.
"""
import concurrent.futures
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from urllib.parse import urlparse

import requests

from logger_config import get_logger
from utils.exceptions import ImageFetchError

logger = get_logger(__name__)


@dataclass
class FetchedImage:
    """Downloaded image body ready for upload."""

    content: bytes
    mime_type: str
    filename: str


class ImageFetchService:
    """Service for fetching remote images."""

    DEFAULT_HEADERS = {
        'Accept': 'image/*',
        'Cache-Control': 'no-cache'
    }

    DEFAULT_MIME_TYPE = 'image/jpeg'

    CHUNK_SIZE = 8192

    def __init__(
        self,
        timeout: float = 30,
        headers: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Initialize image fetch service.

        Args:
            timeout: Seconds before a request is abandoned
            headers: Optional custom headers (defaults to DEFAULT_HEADERS)
        """
        self.timeout = timeout
        self.headers: Dict[str, str] = headers or self.DEFAULT_HEADERS

    @staticmethod
    def filename_from_url(url: str) -> str:
        """Last path segment of the URL, or a timestamped name when empty."""
        name = urlparse(url).path.rstrip('/').split('/')[-1]
        return name or f'file-{int(time.time() * 1000)}.jpg'

    def _download(self, url: str, cancelled: threading.Event) -> Tuple[str, bytes]:
        """Stream the body, stopping at the next chunk once cancelled."""
        response = requests.get(url, headers=self.headers, timeout=self.timeout, stream=True)
        try:
            response.raise_for_status()
            chunks = []
            for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                if cancelled.is_set():
                    raise ImageFetchError(f'Download cancelled: {url}', url=url)
                chunks.append(chunk)
            return response.headers.get('Content-Type', ''), b''.join(chunks)
        finally:
            response.close()

    def fetch(self, url: str) -> FetchedImage:
        """
        Download an image.

        The whole download, body included, must finish within ``timeout``
        seconds; a slow trickle of bytes does not extend it.

        Args:
            url: Image URL

        Returns:
            FetchedImage with body, content type and file name

        Raises:
            ImageFetchError: On timeout, transport error or non-2xx status
        """
        cancelled = threading.Event()
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self._download, url, cancelled)
        try:
            content_type, content = future.result(timeout=self.timeout)
        except (concurrent.futures.TimeoutError, requests.Timeout) as e:
            cancelled.set()
            future.cancel()
            logger.warning(f'Timed out after {self.timeout}s fetching {url}')
            raise ImageFetchError(f'Timed out fetching image: {url}', url=url) from e
        except requests.RequestException as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.warning(f'Failed to fetch image {url}: {str(e)}')
            raise ImageFetchError(
                f'Failed to fetch image: {status_code or "N/A"} {str(e)}',
                url=url,
                status_code=status_code
            ) from e
        finally:
            executor.shutdown(wait=False)

        mime_type = content_type.split(';')[0].strip() or self.DEFAULT_MIME_TYPE

        logger.info(f'Fetched {len(content)} bytes from {url}')
        return FetchedImage(
            content=content,
            mime_type=mime_type,
            filename=self.filename_from_url(url)
        )

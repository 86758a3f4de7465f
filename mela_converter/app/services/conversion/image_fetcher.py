"""Image download and inline encoding."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from urllib.parse import urljoin, urlparse

import httpx

from mela_converter.app.services.conversion.models import FetchedImage

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 5
FETCH_TIMEOUT_SECONDS = 15.0


def is_remote_reference(ref) -> bool:
    return isinstance(ref, str) and (ref.startswith("http://") or ref.startswith("https://"))


def resolve_redirect(current_url: str, location: str) -> str:
    """Resolve a Location header; relative paths hang off the current origin."""
    if location.startswith("http"):
        return location
    parsed = urlparse(current_url)
    return urljoin(f"{parsed.scheme}://{parsed.netloc}/", location)


class ImageFetcher(ABC):
    @abstractmethod
    async def fetch(self, url: str) -> Optional[FetchedImage]:  # pragma: no cover - interface
        """Return the image at `url`, or None when it is unavailable."""
        raise NotImplementedError


class HttpxImageFetcher(ImageFetcher):
    """Single-attempt image download with manual redirect following."""

    def __init__(
        self,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        max_redirects: int = MAX_REDIRECTS,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = httpx.Timeout(timeout)
        self.max_redirects = max_redirects
        self.headers = {"Accept": "image/*,*/*;q=0.8"}
        if user_agent:
            self.headers["User-Agent"] = user_agent
        self._transport = transport

    async def fetch(self, url: str) -> Optional[FetchedImage]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=False,
                headers=self.headers,
                transport=self._transport,
            ) as client:
                return await self._fetch_following_redirects(client, url)
        except httpx.TimeoutException:
            logger.warning("Timeout downloading image: %s", url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Error downloading image: %s (%s)", url, exc)
        return None

    async def _fetch_following_redirects(
        self, client: httpx.AsyncClient, url: str
    ) -> Optional[FetchedImage]:
        current = url
        redirects = 0
        while True:
            response = await client.get(current)
            location = response.headers.get("location")
            if 300 <= response.status_code < 400 and location:
                if redirects >= self.max_redirects:
                    logger.warning("Too many redirects for image: %s", url)
                    return None
                redirects += 1
                current = resolve_redirect(current, location)
                logger.debug("Following redirect %d for %s -> %s", redirects, url, current)
                continue

            if response.status_code != 200:
                logger.warning(
                    "Failed to download image: %s (Status: %s)", url, response.status_code
                )
                return None

            content_type = response.headers.get("content-type", "").strip()
            if not content_type.startswith("image/"):
                logger.warning(
                    "URL did not return an image: %s (Content-Type: %s)", url, content_type
                )
                return None

            return FetchedImage(content_type=content_type, data=response.content)


class ImageMaterializer:
    """Replaces image references with self-contained base64 payloads.

    Only http(s) references are fetched; anything else, including payloads
    that are already inline, is dropped. Fetches run one at a time in input
    order.
    """

    def __init__(self, fetcher: ImageFetcher, payload_format: str = "data_url"):
        if payload_format not in ("raw", "data_url"):
            raise ValueError(f"Unknown image payload format: {payload_format}")
        self.fetcher = fetcher
        self.payload_format = payload_format

    def encode(self, image: FetchedImage) -> str:
        if self.payload_format == "data_url":
            return image.data_url
        return image.data_base64

    async def materialize(self, images: Sequence) -> List[str]:
        payloads: List[str] = []
        for ref in images or []:
            if not is_remote_reference(ref):
                logger.debug("Dropping non-remote image reference")
                continue
            logger.info("  Downloading image: %s", ref)
            fetched = await self.fetcher.fetch(ref)
            if fetched is not None:
                payloads.append(self.encode(fetched))
        return payloads

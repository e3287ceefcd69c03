"""
Image resolver — fetches entry photos for embedding in the PDF.

Contract: resolve(url) returns the image bytes, or None on ANY failure
(bad status, network error, timeout, oversize body, bytes that don't
decode as an image, malformed URL). It never raises for a single bad
image, so the renderer can drop that one photo and keep going. Bodies
are streamed and the download stops once it passes IMAGE_MAX_BYTES.

Calls are awaited one at a time, in document order, by the renderer.
Layout state is mutated between blocks, so fetching concurrently would
mean buffering every page before drawing any of them. Swapping in a
prefetch step later only needs a different resolve() implementation.

Usage:
    async with ImageResolver() as resolver:
        data = await resolver.resolve("https://example.com/photo.jpg")
        if data is None:
            ...  # skip this image
"""

import logging
from io import BytesIO
from typing import Optional

import httpx
from reportlab.lib.utils import ImageReader

from bragsheet.config import settings

logger = logging.getLogger(__name__)

USER_AGENT = "bragsheet-export/1.0"


class _Rejected(Exception):
    """A response that arrived but can't be used as an image."""


class ImageResolver:
    """Fetches and validates remote images with a bounded timeout.

    Pass an httpx.AsyncClient to share a connection pool (or to inject a
    MockTransport in tests); otherwise the resolver opens and closes its
    own client through the async context manager.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        max_bytes: Optional[int] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.IMAGE_FETCH_TIMEOUT_SECONDS
        self.max_bytes = max_bytes if max_bytes is not None else settings.IMAGE_MAX_BYTES
        self._client = client
        self._owns_client = client is None
        self.attempted: list[str] = []
        self.failed: list[str] = []

    async def __aenter__(self) -> "ImageResolver":
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                headers={"User-Agent": USER_AGENT},
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def resolve(self, url: str) -> Optional[bytes]:
        """Fetch one image. Returns None instead of raising on failure."""
        self.attempted.append(url)

        if not url or not url.startswith(("http://", "https://")):
            return self._fail(url, "unsupported URL")

        if self._client is None:
            await self.__aenter__()

        try:
            data = await self._download(url)
        except httpx.TimeoutException:
            return self._fail(url, "timed out")
        except httpx.HTTPError as e:
            return self._fail(url, f"request error: {e}")
        except (httpx.InvalidURL, ValueError) as e:
            # Malformed URLs that still start with http(s)://
            return self._fail(url, f"invalid URL: {e}")
        except _Rejected as e:
            return self._fail(url, str(e))

        if not _decodes_as_image(data):
            return self._fail(url, "not a decodable image")

        return data

    async def _download(self, url: str) -> bytes:
        """Stream the body, stopping as soon as it passes max_bytes.

        Raises _Rejected for bad status, empty or oversize bodies.
        """
        async with self._client.stream("GET", httpx.URL(url), timeout=self.timeout) as response:
            if response.status_code >= 400:
                raise _Rejected(f"HTTP {response.status_code}")

            declared = response.headers.get("Content-Length", "")
            if declared.isdigit() and int(declared) > self.max_bytes:
                raise _Rejected(f"{declared} bytes exceeds limit")

            chunks = []
            size = 0
            async for chunk in response.aiter_bytes():
                size += len(chunk)
                if size > self.max_bytes:
                    raise _Rejected(f"body exceeds {self.max_bytes} bytes")
                chunks.append(chunk)

        if not size:
            raise _Rejected("empty body")
        return b"".join(chunks)

    def _fail(self, url: str, reason: str) -> None:
        logger.warning("Dropping image %s: %s", url, reason)
        self.failed.append(url)
        return None


def _decodes_as_image(data: bytes) -> bool:
    """Ask ReportLab (and Pillow underneath) whether it can embed the bytes."""
    try:
        width, height = ImageReader(BytesIO(data)).getSize()
    except Exception:
        return False
    return width > 0 and height > 0

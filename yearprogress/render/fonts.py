"""Fetching of the optional custom fonts."""

import asyncio
import logging
from typing import Optional

import requests

from yearprogress.wallpaper.styles import FLOWERS_FONT, INK_FONT

logger = logging.getLogger(__name__)


class FontLoader:
    """Downloads TrueType fonts by name, giving up quietly on failure."""

    def __init__(self, urls: dict[str, str], timeout: float = 5.0):
        """
        Initialize loader.

        Args:
            urls: Font name -> TTF URL
            timeout: Seconds before a fetch is abandoned
        """
        self.urls = urls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "FontLoader":
        return cls(
            {
                FLOWERS_FONT: settings.flowers_font_url,
                INK_FONT: settings.ink_font_url,
            },
            timeout=settings.font_fetch_timeout,
        )

    def _download(self, url: str) -> bytes:
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    def start(self, names: tuple[str, ...]) -> asyncio.Future:
        """
        Submit font downloads to worker threads right away.

        Must be called from a running event loop. The downloads are in
        flight when this returns, so the caller can do other work before
        awaiting.

        Returns:
            Future of font name -> TTF data for the fonts that arrived
        """
        loop = asyncio.get_running_loop()
        downloads = {}
        for name in names:
            url = self.urls.get(name)
            if not url:
                logger.warning(f"No URL configured for font {name}")
                continue
            downloads[name] = loop.run_in_executor(None, self._download, url)

        return asyncio.ensure_future(self._collect(downloads))

    async def _wait(self, name: str, download: asyncio.Future) -> Optional[bytes]:
        try:
            return await asyncio.wait_for(download, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out fetching font {name}, using default font")
        except requests.RequestException as e:
            logger.warning(f"Could not fetch font {name}: {e}, using default font")
        return None

    async def _collect(self, downloads: dict[str, asyncio.Future]) -> dict[str, bytes]:
        results = await asyncio.gather(
            *(self._wait(name, download) for name, download in downloads.items())
        )
        return {name: data for name, data in zip(downloads, results) if data}

    async def fetch(self, name: str) -> Optional[bytes]:
        """
        Fetch a font's bytes.

        Returns:
            TTF data, or None if the font is unknown or could not be fetched
        """
        fonts = await self.start((name,))
        return fonts.get(name)

    async def fetch_all(self, names: tuple[str, ...]) -> dict[str, bytes]:
        """Fetch several fonts concurrently, keeping only the ones that arrived."""
        return await self.start(names)

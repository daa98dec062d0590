"""Source page download with a local disk cache.

The first run stores the page under CACHE_DIR; later runs read the cached copy
so results stay reproducible without network access.
"""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path

import requests

from errors import FetchError

_DEFAULT_SOURCE_URL = "https://en.wikipedia.org/wiki/List_of_prime_ministers_of_India"
_DEFAULT_CACHE_DIR = ".cache"
_DEFAULT_REQUEST_TIMEOUT_SECONDS = 20
_DEFAULT_USER_AGENT = "officeholder-lifespans/0.1 (research script)"

LOGGER = logging.getLogger(__name__)


def cache_path_for(url: str, cache_dir: str | Path | None = None) -> Path:
    """Return the cache file path used for url."""
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]
    return Path(cache_dir or os.environ.get("CACHE_DIR", _DEFAULT_CACHE_DIR)) / f"{digest}.html"


def fetch(url: str | None = None, cache_dir: str | Path | None = None, refresh: bool = False) -> str:
    """Return the markup for url, downloading it only on a cache miss.

    Args:
        url: Page to fetch. Defaults to the SOURCE_URL env var.
        cache_dir: Directory holding cached pages. Defaults to the CACHE_DIR env var.
        refresh: Ignore any cached copy and download again.
    """
    url = url or os.environ.get("SOURCE_URL", _DEFAULT_SOURCE_URL)
    timeout = int(os.environ.get("REQUEST_TIMEOUT_SECONDS", _DEFAULT_REQUEST_TIMEOUT_SECONDS))
    user_agent = os.environ.get("USER_AGENT", _DEFAULT_USER_AGENT)
    path = cache_path_for(url, cache_dir)

    if path.exists() and not refresh:
        LOGGER.info("page cache: hit url=%s path=%s", url, path)
        return path.read_text(encoding="utf-8")

    LOGGER.info("page cache: downloading url=%s", url)
    try:
        response = requests.get(
            url,
            headers={"User-Agent": user_agent},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Failed to download {url}: {exc}") from exc

    markup = response.text
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(markup, encoding="utf-8")
    LOGGER.info("page cache: stored url=%s bytes=%s path=%s", url, len(markup), path)
    return markup

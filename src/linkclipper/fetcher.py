"""Single-page HTTP fetching."""

import asyncio
import logging
from typing import Optional

import httpx

from .config import Config
from .models import FetchResult

logger = logging.getLogger(__name__)

USER_AGENT = "LinkClipper/0.1 (+daily note link clipper)"


async def _get(url: str, config: Config, client: Optional[httpx.AsyncClient]) -> httpx.Response:
    if client is None:
        async with httpx.AsyncClient(
            timeout=config.fetch_timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as own_client:
            return await own_client.get(url)
    return await client.get(
        url,
        headers={"User-Agent": USER_AGENT},
        timeout=config.fetch_timeout,
    )


async def fetch_page(
    url: str,
    config: Config,
    client: Optional[httpx.AsyncClient] = None,
) -> FetchResult:
    """GET url and return its status and body.

    Any status code is returned as-is. Network errors, undecodable bodies and
    requests running longer than ``config.fetch_timeout`` in total yield
    ``FetchResult.failed()`` instead of raising.
    """
    try:
        response = await asyncio.wait_for(_get(url, config, client), config.fetch_timeout)
        return FetchResult(status=response.status_code, html=response.text or "")
    except asyncio.TimeoutError:
        logger.warning("Fetch for %s exceeded %ss", url, config.fetch_timeout)
        return FetchResult.failed()
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError) as e:
        logger.warning("Fetch failed for %s: %s", url, e)
        return FetchResult.failed()

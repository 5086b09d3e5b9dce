"""Premium stream proxy: forwards a byte-range request to the upstream video URL."""

from dataclasses import dataclass
from typing import AsyncIterator, Dict, Optional

import httpx

from common.logging_config import get_logger
from portal.exceptions import UpstreamFetchError

logger = get_logger(__name__)

RELAYED_HEADERS = (
    "content-type",
    "content-length",
    "content-range",
    "accept-ranges",
    "content-encoding",
    "last-modified",
    "etag",
)


@dataclass
class UpstreamStream:
    status_code: int
    headers: Dict[str, str]
    body: AsyncIterator[bytes]


def build_upstream_client(connect_timeout: float) -> httpx.AsyncClient:
    """
    Client for upstream fetches. Only connecting is bounded; once the body
    starts flowing a stalled upstream stalls the relay with it.
    """
    timeout = httpx.Timeout(None, connect=connect_timeout)
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)


class StreamService:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def open(self, url: str, range_header: Optional[str] = None) -> UpstreamStream:
        """
        Start an upstream fetch, passing the Range header through verbatim.

        Raises:
            UpstreamFetchError: On transport failure, an error status, or no body
        """
        headers = {"Range": range_header} if range_header else {}
        request = self.client.build_request("GET", url, headers=headers)
        logger.info(f"Opening upstream stream [range={range_header or '-'}]")

        try:
            response = await self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error(f"Upstream fetch failed: {type(e).__name__}: {e}")
            raise UpstreamFetchError("Upstream fetch failed") from e

        if response.status_code >= 400 or response.status_code == 204:
            await response.aclose()
            logger.error(f"Upstream returned status={response.status_code}")
            raise UpstreamFetchError("Upstream fetch failed", upstream_status=response.status_code)

        relayed = {name: response.headers[name] for name in RELAYED_HEADERS if name in response.headers}

        async def body() -> AsyncIterator[bytes]:
            try:
                async for chunk in response.aiter_raw():
                    yield chunk
            finally:
                await response.aclose()

        return UpstreamStream(status_code=response.status_code, headers=relayed, body=body())

"""Outbound HTTP helpers shared by the API-backed tools.

Every call gets the configured timeout and a User-Agent header; there are no
retries. Transport failures and non-2xx statuses are raised as HandlerError so
they surface to the client as "오류: ..." text.
"""

from typing import Any, Optional
import logging

import httpx

from .config import get_config
from .handler_wrappers import HandlerError

logger = logging.getLogger(__name__)

USER_AGENT = "MCP-Geocode-Tool/1.0"

# Tests install an httpx.MockTransport here
_transport: Optional[httpx.AsyncBaseTransport] = None


def create_client(**kwargs: Any) -> httpx.AsyncClient:
    """Create an AsyncClient with the configured timeout and default headers."""
    headers = {"User-Agent": USER_AGENT}
    headers.update(kwargs.pop("headers", {}) or {})
    return httpx.AsyncClient(
        timeout=get_config().request_timeout,
        headers=headers,
        transport=_transport,
        **kwargs,
    )


def raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise HandlerError(
        f"API 요청 실패: {response.status_code} {response.reason_phrase}",
        status=response.status_code,
        url=str(response.request.url),
    )


async def get_json(url: str, params: Optional[dict[str, Any]] = None) -> Any:
    """GET ``url`` and decode the JSON body.

    Raises:
        HandlerError: On timeout, network failure, non-2xx status or invalid JSON
    """
    async with create_client() as client:
        try:
            response = await client.get(url, params=params)
        except httpx.TimeoutException:
            raise HandlerError("API 요청 시간 초과", url=url) from None
        except httpx.HTTPError as e:
            raise HandlerError(f"API 요청 실패: {e}", url=url) from e

    logger.debug("GET %s -> %s", response.request.url, response.status_code)
    raise_for_status(response)
    try:
        return response.json()
    except ValueError:
        raise HandlerError("API 응답을 해석할 수 없습니다.", url=url) from None

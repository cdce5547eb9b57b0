import json
from typing import Any

import httpx

from screener.utils.config import Settings
from screener.utils.exceptions import NetworkError, ServerError, DecodeError
from screener.utils.logging_config import get_logger

logger = get_logger(__name__)


def build_http_client(settings: Settings, transport: httpx.AsyncBaseTransport = None) -> httpx.AsyncClient:
    # httpx defaults to a 5s timeout; None keeps the service's own pace
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout), transport=transport)


async def send_request(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.DecodingError as e:
        logger.error(f"{method} {url} returned an undecodable body: {e!r}")
        raise DecodeError(f"Response from {url} could not be decoded: {e}", url=url, cause=e) from e
    except httpx.RequestError as e:
        logger.error(f"{method} {url} failed: {e!r}")
        raise NetworkError(f"Could not reach {url}: {e}", url=url, cause=e) from e

    logger.debug(f"{method} {url} -> {response.status_code}")
    return response


def raise_for_failure(response: httpx.Response, message: str) -> None:
    """Raise ServerError for any non-2xx response, keeping the body verbatim."""
    if response.is_success:
        return
    body = response.text
    url = str(response.request.url)
    logger.error(f"Server responded {response.status_code} for {url}: {body}")
    raise ServerError(
        f"{message}: {body}" if body else f"{message}: HTTP {response.status_code}",
        status_code=response.status_code,
        body=body,
        url=url
    )


def decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        url = str(response.request.url)
        raise DecodeError(f"Response from {url} is not valid JSON", url=url, cause=e) from e

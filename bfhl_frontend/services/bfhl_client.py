import logging
from typing import Any, Dict, Optional

import httpx

from bfhl_frontend.config import get_settings
from bfhl_frontend.errors import InvalidServerResponseError, NetworkOrServerError, ServerError
from bfhl_frontend.utils.text import replace_lone_surrogates

logger = logging.getLogger("bfhl_frontend.services.bfhl_client")

JSON_HEADERS = {"Content-Type": "application/json"}


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


async def post_bfhl(
    raw_body: str,
    *,
    url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """POST ``raw_body`` verbatim to the processing endpoint and return its JSON object.

    The body is sent exactly as typed, never re-serialized. One attempt only.
    Raises ``ServerError`` for non-2xx answers (the body text is kept verbatim),
    ``InvalidServerResponseError`` when a 2xx body is not a JSON object and
    ``NetworkOrServerError`` for transport failures.
    """
    settings = get_settings()
    url = url or settings.bfhl_endpoint_url

    # lone surrogates become U+FFFD, as a browser would send them
    content = replace_lone_surrogates(raw_body).encode("utf-8")

    try:
        if client is not None:
            resp = await client.post(url, content=content, headers=JSON_HEADERS)
        else:
            timeout = httpx.Timeout(settings.bfhl_request_timeout)
            async with httpx.AsyncClient(timeout=timeout) as owned:
                resp = await owned.post(url, content=content, headers=JSON_HEADERS)
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        logger.warning("Request to BFHL endpoint %s failed: %s", url, exc)
        raise NetworkOrServerError(f"Network Error: {_describe(exc)}") from exc

    if not resp.is_success:
        body = resp.text
        logger.warning("BFHL endpoint returned HTTP %s: %s", resp.status_code, body)
        raise ServerError(resp.status_code, body)

    try:
        payload = resp.json()
    except ValueError as exc:
        logger.warning("BFHL endpoint returned a non-JSON body: %r", resp.text[:200])
        raise InvalidServerResponseError(_describe(exc)) from exc

    if not isinstance(payload, dict):
        logger.warning("BFHL endpoint returned unexpected payload: %s", payload)
        raise InvalidServerResponseError("expected a JSON object")

    logger.info("BFHL endpoint answered %s", resp.status_code)
    return payload

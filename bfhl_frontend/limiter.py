import logging
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from bfhl_frontend.config import get_settings

logger = logging.getLogger("bfhl_frontend.limiter")


def _submit_limit() -> str:
    settings = get_settings()
    return f"{settings.submit_rate_limit} per {settings.submit_rate_limit_window} seconds"


def create_limiter() -> Limiter:
    try:
        return Limiter(key_func=get_remote_address)
    except Exception:
        logger.exception("Failed to create slowapi Limiter")
        raise


limiter = create_limiter()


def get_rate_limit_decorator(limit: Optional[str] = None, error_message: Optional[str] = None) -> Any:
    return limiter.limit(limit or _submit_limit(), error_message=error_message)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded for %s on %s: %s", get_remote_address(request), request.url.path, exc.detail)
    return JSONResponse(status_code=429, content={"error": f"Rate limit exceeded: {exc.detail}"})

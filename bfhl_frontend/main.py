import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException

from bfhl_frontend import __version__
from bfhl_frontend.config import get_settings
from bfhl_frontend.limiter import limiter, rate_limit_exceeded_handler
from bfhl_frontend.logging import RequestLoggingMiddleware, init_logging
from bfhl_frontend.routes import router

settings = get_settings()
logger = logging.getLogger("bfhl_frontend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s starting; forwarding submissions to %s", settings.app_title, settings.bfhl_endpoint_url)
    try:
        yield
    finally:
        logger.info("%s shutting down", settings.app_title)


app = FastAPI(
    title=settings.app_title,
    version=__version__,
    description=(
        "Form that validates JSON input, forwards it to the BFHL processing endpoint "
        "and shows a filtered view of the response."
    ),
    lifespan=lifespan,
)
app.state.limiter = limiter

# Initialize logging and middleware
init_logging()
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]


# -------------------------------
# Unified error response handlers
# -------------------------------
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    logger.error(
        "HTTPException: %s %s -> %s | detail=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
    )
    body = {"error": exc.detail if isinstance(exc.detail, str) else "Error"}
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(
        "ValidationError: %s %s | errors=%s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation failed",
            "details": jsonable_errors(exc),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception: %s %s",
        request.method,
        request.url.path,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def jsonable_errors(exc: RequestValidationError):
    # ctx may carry exception instances that JSONResponse cannot serialize
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]

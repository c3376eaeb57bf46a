import logging
from typing import Tuple

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from bfhl_frontend.config import get_settings
from bfhl_frontend.controller import FormController
from bfhl_frontend.limiter import get_rate_limit_decorator
from bfhl_frontend.rendering import render_page
from bfhl_frontend.schemas import FormState, HealthResponse, InputUpdate
from bfhl_frontend.sessions import store

router = APIRouter()
logger = logging.getLogger("bfhl_frontend.routes")


def _resolve_session(request: Request) -> Tuple[str, FormController]:
    cookie_name = get_settings().session_cookie_name
    return store.get_or_create(request.cookies.get(cookie_name))


def _with_session_cookie(response: Response, session_id: str) -> Response:
    response.set_cookie(get_settings().session_cookie_name, session_id, httponly=True, samesite="lax")
    return response


def _state_response(session_id: str, controller: FormController) -> Response:
    state = controller.snapshot()
    return _with_session_cookie(JSONResponse(content=state.model_dump(mode="json")), session_id)


def _back_to_form(session_id: str) -> Response:
    return _with_session_cookie(RedirectResponse(url="/", status_code=303), session_id)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


# -------------------------------
# Browser form
# -------------------------------
@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def form_page(request: Request) -> Response:
    session_id, controller = _resolve_session(request)
    html = render_page(controller.snapshot(), title=get_settings().app_title)
    return _with_session_cookie(HTMLResponse(content=html), session_id)


@router.post("/submit", include_in_schema=False)
@get_rate_limit_decorator()
async def submit_form(request: Request, json_input: str = Form("")) -> Response:
    session_id, controller = _resolve_session(request)
    controller.update_input(json_input)
    await controller.submit()
    return _back_to_form(session_id)


@router.post("/filters/{tag}", include_in_schema=False)
async def toggle_filter_form(request: Request, tag: str) -> Response:
    session_id, controller = _resolve_session(request)
    controller.toggle_filter(tag)
    return _back_to_form(session_id)


# -------------------------------
# JSON API
# -------------------------------
@router.get("/api/state", response_model=FormState)
async def get_state(request: Request) -> Response:
    session_id, controller = _resolve_session(request)
    return _state_response(session_id, controller)


@router.put("/api/input", response_model=FormState)
async def update_input(request: Request, payload: InputUpdate) -> Response:
    session_id, controller = _resolve_session(request)
    controller.update_input(payload.text)
    return _state_response(session_id, controller)


@router.post("/api/submit", response_model=FormState)
@get_rate_limit_decorator()
async def submit(request: Request) -> Response:
    session_id, controller = _resolve_session(request)
    await controller.submit()
    if controller.error:
        logger.info("/api/submit finished with error for session %s", session_id)
    return _state_response(session_id, controller)


@router.post("/api/filters/{tag}", response_model=FormState)
async def toggle_filter(request: Request, tag: str) -> Response:
    session_id, controller = _resolve_session(request)
    controller.toggle_filter(tag)
    return _state_response(session_id, controller)

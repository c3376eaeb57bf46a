import logging
import time
import uuid
from typing import Callable, Optional, Tuple

from cachetools import TTLCache

from bfhl_frontend.config import get_settings
from bfhl_frontend.controller import FormController

logger = logging.getLogger("bfhl_frontend.sessions")


class SessionStore:
    """In-process map of session id → form controller. Nothing is persisted.

    Bounded in size; a session expires ``ttl`` seconds after its last use.
    """

    def __init__(self, maxsize: int, ttl: float, timer: Callable[[], float] = time.monotonic) -> None:
        self._controllers: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, FormController]:
        controller = self._controllers.get(session_id) if session_id else None
        if controller is None:
            session_id = uuid.uuid4().hex
            controller = FormController()
            logger.debug("Created form session %s", session_id)
        # re-inserting renews the expiry
        self._controllers[session_id] = controller
        return session_id, controller

    def clear(self) -> None:
        self._controllers.clear()

    def __len__(self) -> int:
        self._controllers.expire()
        return len(self._controllers)


def create_store() -> SessionStore:
    settings = get_settings()
    return SessionStore(maxsize=settings.session_max_count, ttl=settings.session_ttl_seconds)


store = create_store()

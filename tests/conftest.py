import os
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path when pytest runs from a different CWD.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from bfhl_frontend.limiter import limiter  # noqa: E402
from bfhl_frontend.main import app  # noqa: E402
from bfhl_frontend.sessions import store  # noqa: E402

SAMPLE_RESPONSE = {"alphabets": ["A", "C", "z"], "numbers": [], "highest_alphabet": "z"}


@pytest.fixture(autouse=True)
def clean_state():
    store.clear()
    limiter.reset()
    yield
    store.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_endpoint(monkeypatch):
    """Replace the outbound call; records every raw body it receives."""
    calls = []

    def install(response=None, error=None):
        async def fake_post(raw_body, **kwargs):
            calls.append(raw_body)
            if error is not None:
                raise error
            return response if response is not None else dict(SAMPLE_RESPONSE)

        monkeypatch.setattr("bfhl_frontend.services.bfhl_client.post_bfhl", fake_post)
        return calls

    return install

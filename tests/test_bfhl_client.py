import json

import httpx
import pytest

from bfhl_frontend.errors import InvalidServerResponseError, NetworkOrServerError, ServerError
from bfhl_frontend.services.bfhl_client import post_bfhl

URL = "http://bfhl.test/bfhl"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_posts_raw_body_with_json_content_type():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["content_type"] = request.headers.get("content-type")
        seen["body"] = request.content.decode("utf-8")
        return httpx.Response(200, json={"alphabets": ["A"], "numbers": [], "highest_alphabet": "A"})

    raw = '{ "data" :  ["A"] }'
    async with _client(handler) as client:
        payload = await post_bfhl(raw, url=URL, client=client)

    assert payload == {"alphabets": ["A"], "numbers": [], "highest_alphabet": "A"}
    assert seen["method"] == "POST"
    assert seen["url"] == URL
    assert seen["content_type"] == "application/json"
    # whitespace preserved: the text is not re-serialized
    assert seen["body"] == raw


@pytest.mark.asyncio
async def test_non_2xx_embeds_body_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Invalid payload")

    async with _client(handler) as client:
        with pytest.raises(ServerError) as excinfo:
            await post_bfhl('{"data": []}', url=URL, client=client)

    assert str(excinfo.value) == "Server Error: Invalid payload"
    assert excinfo.value.status_code == 400


@pytest.mark.asyncio
async def test_non_json_success_body_is_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>ok</html>")

    async with _client(handler) as client:
        with pytest.raises(InvalidServerResponseError) as excinfo:
            await post_bfhl('{"data": []}', url=URL, client=client)

    assert str(excinfo.value).startswith("Invalid response from server: ")


@pytest.mark.asyncio
async def test_non_object_success_body_is_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=json.dumps(["A"]).encode())

    async with _client(handler) as client:
        with pytest.raises(InvalidServerResponseError):
            await post_bfhl('{"data": []}', url=URL, client=client)


@pytest.mark.asyncio
async def test_transport_failure_becomes_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(NetworkOrServerError) as excinfo:
            await post_bfhl('{"data": []}', url=URL, client=client)

    assert str(excinfo.value) == "Network Error: connection refused"


@pytest.mark.asyncio
async def test_lone_surrogate_is_sent_as_replacement_character():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = request.content.decode("utf-8")
        return httpx.Response(200, json={})

    async with _client(handler) as client:
        await post_bfhl('{"data": ["\ud800"]}', url=URL, client=client)

    assert seen["body"] == '{"data": ["\ufffd"]}'

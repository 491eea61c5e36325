import asyncio
import json

import httpx

from idp.client import IdpClient


def _recording_transport(requests):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"role_id": 1, "responses": {"101": {"assessment_level": 2, "notes": "x"}}})
        if request.url.path == "/api/shares":
            return httpx.Response(201, json={"share_token": "tok"})
        return httpx.Response(200, json={})

    return httpx.MockTransport(handler)


def test_edits_are_applied_locally_and_saved_once():
    requests = []

    async def scenario():
        client = IdpClient("http://api.test", "token", transport=_recording_transport(requests), debounce_seconds=0.02)
        await client.load_responses(1)
        assert client.responses[101]["notes"] == "x"

        client.edit_response(1, 101, assessment_level=3, notes="d")
        task = client.edit_response(1, 101, assessment_level=3, notes="draft")
        assert client.responses[101] == {"assessment_level": 3, "notes": "draft"}
        assert await task is True
        await client.aclose()

    asyncio.run(scenario())

    puts = [r for r in requests if r.method == "PUT"]
    assert len(puts) == 1
    body = json.loads(puts[0].content)
    assert body["notes"] == "draft"
    assert body["client_seq"] > 0
    assert puts[0].headers["Authorization"] == "Bearer token"


def test_share_flushes_pending_saves_first():
    requests = []

    async def scenario():
        client = IdpClient("http://api.test", "token", transport=_recording_transport(requests), debounce_seconds=60)
        client.edit_response(1, 104, assessment_level=4, notes="last edit")
        assert await client.share(1, "c@example.com") == {"share_token": "tok"}
        await client.aclose()

    asyncio.run(scenario())

    assert [r.method for r in requests] == ["PUT", "POST"]


def test_saving_stays_true_until_every_competency_is_saved():
    requests = []

    async def scenario():
        client = IdpClient("http://api.test", "token", transport=_recording_transport(requests), debounce_seconds=60)
        assert client.saving is False

        client.edit_response(1, 101, assessment_level=3, notes="a")
        client.edit_response(1, 102, assessment_level=2, notes="b")
        assert client.saving is True

        assert await client.saver.flush(("response", 1, 101)) is True
        assert client.saving is True

        assert await client.saver.flush(("response", 1, 102)) is True
        assert client.saving is False
        await client.aclose()

    asyncio.run(scenario())

    assert [r.url.path for r in requests] == ["/api/responses/1/101", "/api/responses/1/102"]

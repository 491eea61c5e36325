"""
client.py
- Purpose: Async HTTP client for the IDP API with debounced autosave, for
  front-ends and scripts that edit ratings or collaborator feedback.
- Design: Edits are applied to local state immediately; persistence goes
  through DebouncedSaver keyed per competency, carrying client_seq.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from idp.services.autosave import DebouncedSaver

logger = logging.getLogger("idp.client")


class IdpClient:
    def __init__(
        self,
        base_url: str,
        access_token: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        debounce_seconds: float | None = None,
        timeout: float = 30.0,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {access_token}"},
            transport=transport,
            timeout=timeout,
        )
        self.saver = DebouncedSaver(debounce_seconds)
        self.responses: dict[int, dict[str, Any]] = {}
        self.feedback: dict[int, dict[str, Any]] = {}
        self._in_flight = 0

    @property
    def saving(self) -> bool:
        """True while any edit is waiting out its quiet period or being sent."""
        return self._in_flight > 0 or self.saver.has_pending()

    async def _autosave_put(self, url: str, body: dict[str, Any], seq: int, competency_id: int) -> bool:
        self._in_flight += 1
        try:
            await self._request("PUT", url, json={**body, "client_seq": seq})
            return True
        except httpx.HTTPError:
            logger.warning("client.autosave_failed", exc_info=True, extra={"competency_id": competency_id})
            return False
        finally:
            self._in_flight -= 1

    async def __aenter__(self) -> "IdpClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.saver.flush_all()
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        resp = await self._http.request(method, url, **kwargs)
        resp.raise_for_status()
        return resp

    # ---- own assessment ----

    async def load_responses(self, role_id: int) -> dict[str, Any]:
        body = (await self._request("GET", f"/api/responses/{role_id}")).json()
        self.responses = {int(k): v for k, v in body["responses"].items()}
        return body

    def edit_response(self, role_id: int, competency_id: int, *, assessment_level: int | None, notes: str | None):
        """Optimistic local update + debounced save."""
        value = {"assessment_level": assessment_level, "notes": notes}
        self.responses[competency_id] = value
        url = f"/api/responses/{role_id}/{competency_id}"

        async def _save(seq: int) -> bool:
            return await self._autosave_put(url, value, seq, competency_id)

        return self.saver.schedule(("response", role_id, competency_id), _save)

    async def share(self, role_id: int, collaborator_email: str) -> dict[str, Any]:
        await self.saver.flush_all()
        resp = await self._request(
            "POST",
            "/api/shares",
            json={"role_id": role_id, "collaborator_email": collaborator_email},
        )
        return resp.json()

    # ---- collaborator side ----

    async def open_share(self, share_token: str) -> dict[str, Any]:
        body = (await self._request("GET", f"/api/collaborate/{share_token}")).json()
        self.feedback = {
            int(k): {
                "collaborator_assessment_level": v.get("collaborator_assessment_level"),
                "collaborator_notes": v.get("collaborator_notes"),
            }
            for k, v in body["feedback"].items()
        }
        return body

    def edit_feedback(self, share_token: str, competency_id: int, *, level: int | None, notes: str | None):
        value = {"collaborator_assessment_level": level, "collaborator_notes": notes}
        self.feedback[competency_id] = value
        url = f"/api/collaborate/{share_token}/feedback/{competency_id}"

        async def _save(seq: int) -> bool:
            return await self._autosave_put(url, value, seq, competency_id)

        return self.saver.schedule(("feedback", share_token, competency_id), _save)

    async def submit_feedback(self, share_token: str) -> dict[str, Any]:
        await self.saver.flush_all()
        return (await self._request("POST", f"/api/collaborate/{share_token}/submit")).json()

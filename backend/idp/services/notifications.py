"""
notifications.py
- Purpose: Notification Dispatcher. Tells a collaborator that an assessment
  was shared with them.
- Design: Fire-and-forget. The service only enqueues a Celery task; any
  failure is logged and reported as False, never raised.
"""

import logging
from collections.abc import Callable
from typing import Any

from idp.core.config import settings
from idp.reference import ReferenceData, get_reference_data

logger = logging.getLogger("idp.notifications")


def _default_enqueue(payload: dict, share_id: str | None) -> Any:
    from idp.tasks.notifications import send_share_email_task

    return send_share_email_task.delay(payload, share_id=share_id)


class ShareNotifier:
    def __init__(
        self,
        reference: ReferenceData | None = None,
        enqueue: Callable[[dict, str | None], Any] | None = None,
    ):
        self.reference = reference or get_reference_data()
        self._enqueue = enqueue or _default_enqueue

    def build_payload(self, *, collaborator_email: str, original_user_email: str, role_id: int, share_token: str) -> dict:
        return {
            "collaboratorEmail": collaborator_email,
            "originalUserEmail": original_user_email,
            "roleName": self.reference.role_name(role_id),
            "shareToken": share_token,
            "shareLink": settings.collaborate_link(share_token),
        }

    def notify_share_created(
        self,
        *,
        collaborator_email: str,
        original_user_email: str,
        role_id: int,
        share_token: str,
        share_id: str | None = None,
    ) -> bool:
        payload = self.build_payload(
            collaborator_email=collaborator_email,
            original_user_email=original_user_email,
            role_id=role_id,
            share_token=share_token,
        )
        try:
            self._enqueue(payload, share_id)
        except Exception:
            # broker down, serialization error, ...: the share still stands
            logger.exception("notify.enqueue_failed", extra={"share_id": share_id})
            return False

        logger.info("notify.enqueued", extra={"share_id": share_id})
        return True

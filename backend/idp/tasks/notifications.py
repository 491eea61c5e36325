from __future__ import annotations

import logging

from idp.celery_app import celery_app
from idp.core import AppError
from idp.core.config import settings
from idp.core.request_context import clear_context, set_context
from idp.services.supabase_functions import SupabaseFunctions

logger = logging.getLogger("idp.tasks.notifications")


@celery_app.task(
    name="idp.tasks.notifications.send_share_email_task",
    bind=True,
    max_retries=settings.NOTIFY_MAX_RETRIES,
    default_retry_delay=settings.NOTIFY_RETRY_DELAY_SECONDS,
)
def send_share_email_task(self, payload: dict, share_id: str | None = None):
    """
    Deliver the "assessment shared with you" email via the edge function.
    Failures never touch the share; the owner can still hand over the link.
    """
    set_context(task_id=getattr(self.request, "id", None), share_id=share_id)
    try:
        logger.info("task.start", extra={"task": "send_share_email_task"})
        SupabaseFunctions().invoke(settings.SHARE_EMAIL_FUNCTION, payload)
        logger.info("notify.sent", extra={"task": "send_share_email_task"})
        return {"ok": True, "share_id": share_id}

    except AppError as e:
        logger.warning("task.app_error", extra={"task": "send_share_email_task", "error": str(e.message or e.reason)})
        return {"ok": False, "share_id": share_id, "error": e.message or e.reason}
    except Exception as e:
        logger.exception("task.retry", extra={"task": "send_share_email_task"})
        raise self.retry(exc=e)
    finally:
        clear_context()

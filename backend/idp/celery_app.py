# idp/celery_app.py
from celery import Celery
from dotenv import load_dotenv

from idp.core.config import settings
from idp.core.logging_config import configure_logging

load_dotenv()

# workers import this module first; set up JSON logging before anything logs
configure_logging()

NOTIFY_QUEUE = "notify_q"

celery_app = Celery(
    "idp_notifications",
    broker=settings.REDIS_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND or settings.REDIS_BROKER_URL,
    include=["idp.tasks.notifications"],
)

celery_app.conf.update(
    # a lost worker must not lose a share email
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    worker_hijack_root_logger=False,
    task_serializer="json",
    accept_content=["json"],
    result_expires=3600,
    task_default_queue=NOTIFY_QUEUE,
    task_routes={"idp.tasks.notifications.*": {"queue": NOTIFY_QUEUE}},
)

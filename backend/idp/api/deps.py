from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from idp.db.session import SessionLocal
from idp.reference import ReferenceData, get_reference_data
from idp.services.feedback_service import FeedbackService
from idp.services.local_cache import LocalResponseCache
from idp.services.notifications import ShareNotifier
from idp.services.response_store import ResponseStore
from idp.services.share_service import ShareService


def get_db() -> Generator[Session, None, None]:
    """
    Yields a DB session per request.
    Ensures the session is closed even on exceptions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_reference() -> ReferenceData:
    return get_reference_data()


def get_local_cache() -> LocalResponseCache:
    return LocalResponseCache()


def get_notifier(reference: ReferenceData = Depends(get_reference)) -> ShareNotifier:
    """
    Provides the notification dispatcher.
    Using Depends(get_notifier) keeps Celery out of tests.
    """
    return ShareNotifier(reference=reference)


def get_response_store(
    db: Session = Depends(get_db),
    cache: LocalResponseCache = Depends(get_local_cache),
) -> ResponseStore:
    return ResponseStore(db=db, cache=cache)


def get_share_service(
    db: Session = Depends(get_db),
    notifier: ShareNotifier = Depends(get_notifier),
) -> ShareService:
    return ShareService(db=db, notifier=notifier)


def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    return FeedbackService(db=db)

"""
health.py
- Purpose: Liveness plus readiness of the two things every route needs:
  the relational store and the reference dataset.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from idp.api.deps import get_db, get_reference
from idp.core.errors import store_unavailable
from idp.reference import ReferenceData

logger = logging.getLogger("idp.health")

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health")
def health(reference: ReferenceData = Depends(get_reference)):
    return {"status": "ok", "roles": len(reference.roles()), "assessment_levels": len(reference.assessments())}


@router.get("/db/health")
def db_health(db: Session = Depends(get_db)):
    try:
        db.execute(text("select 1"))
    except SQLAlchemyError:
        logger.warning("health.db_unreachable", exc_info=True)
        raise store_unavailable("Database unreachable; responses are being kept in the local cache")
    return {"status": "ok", "db": "connected"}

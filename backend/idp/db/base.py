"""
db/base.py
- Purpose: Single import point for the metadata Alembic and tests create from.
  Importing idp.models registers every table on Base.metadata.
"""

import idp.models  # noqa: F401
from idp.models.base import Base

__all__ = ["Base"]

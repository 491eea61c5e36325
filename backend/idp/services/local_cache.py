"""
local_cache.py
- Purpose: Degraded-mode cache for a user's responses, one JSON document per
  (email, role_id) bucket.
- Design: Best-effort and never reconciled with the store. Data written here
  only reaches the store through the migration sweep.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from urllib.parse import quote

from pydantic import ValidationError

from idp.core.config import settings
from idp.schemas.response import ResponseData, ResponseMap, response_map_adapter

logger = logging.getLogger("idp.local_cache")

KEY_PREFIX = "idp.responses."
KEY_SUFFIX = ".json"


def _safe_email(email: str) -> str:
    # any legal local-part (including "/") becomes one filename component
    return quote(email, safe="@.+_-")


def bucket_key(email: str, role_id: int) -> str:
    return f"{KEY_PREFIX}{_safe_email(email)}.{role_id}"


class LocalResponseCache:
    def __init__(self, root: str | os.PathLike | None = None):
        self.root = Path(root or settings.LOCAL_CACHE_DIR)

    def _path(self, email: str, role_id: int) -> Path:
        return self.root / (bucket_key(email, role_id) + KEY_SUFFIX)

    def load(self, email: str, role_id: int) -> ResponseMap:
        path = self._path(email, role_id)
        if not path.exists():
            return {}
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return response_map_adapter.validate_python(raw)
        except (OSError, json.JSONDecodeError, ValidationError):
            logger.warning("local_cache.unreadable", extra={"path": str(path)})
            return {}

    def save(self, email: str, role_id: int, data: ResponseMap) -> bool:
        """Write the whole bucket; False (and a log line) when the disk refuses."""
        path = self._path(email, role_id)
        payload = {str(cid): r.model_dump() for cid, r in data.items()}
        tmp = path.with_suffix(".tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload), encoding="utf-8")
            os.replace(tmp, path)
        except OSError:
            logger.error("local_cache.write_failed", exc_info=True, extra={"role_id": role_id})
            return False
        return True

    def put(self, email: str, role_id: int, competency_id: int, response: ResponseData) -> bool:
        current = self.load(email, role_id)
        current[competency_id] = response
        return self.save(email, role_id, current)

    def buckets(self, email: str) -> list[int]:
        """Role ids that have a cached bucket for this email."""
        if not self.root.is_dir():
            return []
        prefix = f"{KEY_PREFIX}{_safe_email(email)}."
        role_ids: list[int] = []
        for p in sorted(self.root.iterdir()):
            name = p.name
            if not (name.startswith(prefix) and name.endswith(KEY_SUFFIX)):
                continue
            tail = name[len(prefix):-len(KEY_SUFFIX)]
            if tail.isdigit() and int(tail) > 0:
                role_ids.append(int(tail))
        return sorted(role_ids)

    def remove(self, email: str, role_id: int) -> bool:
        try:
            self._path(email, role_id).unlink(missing_ok=True)
        except OSError:
            logger.error("local_cache.remove_failed", exc_info=True, extra={"role_id": role_id})
            return False
        return True

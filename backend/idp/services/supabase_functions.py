"""
supabase_functions.py
- Purpose: Adapter for invoking Supabase Edge Functions (outbound email).
- Design: Infrastructure adapter; no business logic.
"""

import json
import logging
from typing import Any

from idp.core import AppError, ErrorCode, ErrorReason
from idp.core.config import settings

logger = logging.getLogger("idp.supabase_functions")


class SupabaseFunctions:
    """Minimal adapter around `client.functions.invoke`."""

    def __init__(self, client: Any | None = None):
        if client is not None:
            self._client = client
            return

        # Import lazily so missing dependency errors are localized.
        try:
            from supabase import create_client  # type: ignore
        except ImportError as e:
            raise AppError(
                code=ErrorCode.CONFIG_ERROR,
                reason=ErrorReason.MISSING_DEPENDENCY.value,
                message="Supabase client library is not installed or failed to import",
                status_code=500,
            ) from e

        self._client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)

    def invoke(self, function_name: str, body: dict[str, Any]) -> dict[str, Any]:
        """
        Invoke an edge function with a JSON body.
        Transport/HTTP errors propagate so callers can decide whether to retry.
        """
        res = self._client.functions.invoke(function_name, invoke_options={"body": body})

        # Depending on client version the body comes back as bytes, str or dict
        if isinstance(res, (bytes, bytearray)):
            res = res.decode("utf-8")
        if isinstance(res, str):
            try:
                res = json.loads(res) if res else {}
            except json.JSONDecodeError:
                return {"raw": res}
        if isinstance(res, dict):
            return res
        return {}

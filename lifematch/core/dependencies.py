"""FastAPI dependencies shared by the endpoints."""
from typing import Optional

import structlog
from fastapi import Request

from lifematch.core.config import settings
from lifematch.database import get_db

__all__ = ["get_caller_identity", "get_db", "get_limit"]


async def get_caller_identity(request: Request) -> Optional[str]:
    """Verified caller identity from the identity header; None when anonymous.

    The identity is bound to structured logs emitted while serving the request.
    """
    identity = request.headers.get(settings.IDENTITY_HEADER, "").strip() or None
    structlog.contextvars.bind_contextvars(caller=identity or "anonymous")
    return identity


async def get_limit(limit: Optional[int] = None) -> int:
    """Recommendation page size, capped at ``MAX_RECOMMENDATIONS``."""
    if limit is None or limit <= 0:
        return settings.MAX_RECOMMENDATIONS
    return min(limit, settings.MAX_RECOMMENDATIONS)

"""Shared-secret check for the scoring API."""

import logging
import secrets

from fastapi import HTTPException, Header

from app.config import settings

logger = logging.getLogger(__name__)


def _presented_key(x_api_key: str | None, authorization: str | None) -> str | None:
    if x_api_key is not None:
        return x_api_key
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Accept `X-API-Key: <key>` or `Authorization: Bearer <key>`.

    With SCORING_API_KEY unset every request passes (local development).
    """
    expected = settings.scoring_api_key
    if expected is None:
        return ""

    presented = _presented_key(x_api_key, authorization)
    if presented is None or not secrets.compare_digest(presented, expected):
        logger.warning("Rejected scoring request: %s", "bad key" if presented else "no key")
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return presented

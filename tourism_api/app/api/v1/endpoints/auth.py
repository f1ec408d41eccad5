"""
Token issuing endpoint.

The frontend authenticates users with its identity provider and then
exchanges the verified e‑mail for an API access token here.  The token
binds the e‑mail in ``sub`` and expires after
``settings.access_token_expire_minutes``.
"""

from fastapi import APIRouter

from tourism_api.app.core.security import create_access_token
from tourism_api.app.schemas.user import TokenRequest


router = APIRouter()


@router.post("/jwt")
async def issue_token(body: TokenRequest) -> dict:
    """Return ``{"token": ...}`` for the given e‑mail."""
    return {"token": create_access_token({"sub": body.email})}

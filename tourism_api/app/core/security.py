"""
Access tokens and role checks.

Tokens are compact HS256 JWTs signed with ``SECRET_KEY``.  The API has
no passwords: ``POST /jwt`` signs whatever e‑mail the frontend sends
after its own sign-in, and that e‑mail becomes the ``sub`` claim.

Verification is stateless: ``get_current_user`` only decodes the
token.  Role checks (``require_roles``) load the user by the claim
e‑mail on every request, so a promotion or demotion takes effect
without issuing a new token.
"""

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from .config import settings
from .db import USERS, get_database
from ..schemas.user import Role


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def _compact_json(value: Dict[str, Any]) -> bytes:
    return json.dumps(value, separators=(",", ":")).encode("utf-8")


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Issue a token for ``data`` (normally ``{"sub": <email>}``).

    ``expires_delta`` is the lifetime in seconds; it defaults to
    ``ACCESS_TOKEN_EXPIRE_MINUTES`` (five hours).  The frontend sends
    the result back as ``Authorization: Bearer <token>``.
    """
    claims = {**data}
    lifetime = expires_delta or settings.access_token_expire_minutes * 60
    claims["exp"] = int(time.time()) + lifetime
    segments = [
        _b64_url_encode(_compact_json({"alg": settings.algorithm, "typ": "JWT"})),
        _b64_url_encode(_compact_json(claims)),
    ]
    signature = _sign(".".join(segments).encode("utf-8"), settings.secret_key)
    segments.append(_b64_url_encode(signature))
    return ".".join(segments)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the claims of a valid token, or ``None``.

    A token is valid when it has three segments, its signature matches
    ``SECRET_KEY``, it carries a non-empty ``sub`` and ``exp`` is not in
    the past.
    """
    segments = token.split(".")
    if len(segments) != 3:
        return None
    header_b64, payload_b64, signature_b64 = segments
    expected = _sign(f"{header_b64}.{payload_b64}".encode("utf-8"), settings.secret_key)
    try:
        if not hmac.compare_digest(expected, _b64_url_decode(signature_b64)):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (binascii.Error, ValueError):
        return None
    if not isinstance(data, dict) or not data.get("sub"):
        return None
    try:
        expires_at = int(data["exp"])
    except (KeyError, TypeError, ValueError):
        return None
    if expires_at < int(time.time()):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, Any]:
    """Dependency returning the decoded claims of the bearer token.

    A missing ``Authorization`` header and an invalid or expired token
    both produce HTTP 401.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthorized access",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthorized access",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


# ---------------------------------------------------------------------------
# Role-based access control (RBAC) helpers
# ---------------------------------------------------------------------------

def require_roles(*roles: Role) -> Callable[..., Any]:
    """Dependency factory to enforce that the current user holds one of ``roles``.

    Use this in FastAPI endpoints via ``Depends(require_roles(Role.ADMIN))``.
    The user is loaded by the e‑mail in the token; an unknown user is
    treated like a role mismatch and gets HTTP 403.  On success the
    claims are returned with the stored ``role`` attached.
    """

    async def _role_dependency(
        current_user: Dict[str, Any] = Depends(get_current_user),
        db: AsyncIOMotorDatabase = Depends(get_database),
    ) -> Dict[str, Any]:
        user = await db[USERS].find_one({"email": current_user["sub"]}, {"role": 1})
        if not user or user.get("role") not in {role.value for role in roles}:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="forbidden access",
            )
        return {**current_user, "role": Role(user["role"])}

    return _role_dependency


def require_self(email: str, current_user: Dict[str, Any]) -> None:
    """Raise HTTP 403 unless ``email`` belongs to the token subject."""
    if email != current_user.get("sub"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden access")

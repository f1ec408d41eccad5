"""Helpers shared by the API tests."""

from datetime import datetime, timezone
from typing import Any, Dict

from tourism_api.app.core.db import USERS
from tourism_api.app.core.security import create_access_token


def auth_headers(email: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': email})}"}


async def insert_user(db, email: str, role: str = "tourist", name: str = "Test User") -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    document = {"name": name, "email": email, "role": role, "created_at": now, "updated_at": now}
    result = await db[USERS].insert_one(document)
    document["_id"] = result.inserted_id
    return document

"""Current user resolution

Authentication happens upstream; the gateway forwards the authenticated
user id in the X-User-Id header.
"""

from typing import Optional
from fastapi import Header, HTTPException, status
from config import ApplicationConfig


async def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()

    if ApplicationConfig.AUTH_DISABLED:
        return ApplicationConfig.DEFAULT_USER_ID

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing X-User-Id header",
    )

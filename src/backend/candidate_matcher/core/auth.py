from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from candidate_matcher.api.deps import get_settings
from candidate_matcher.core.config import Settings

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


class AdminContext(BaseModel):
    user_id: str
    role: str


def decode_token(token: str, settings: Settings) -> AdminContext:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
        return AdminContext(
            user_id=payload["sub"],
            role=payload.get("role", "user"),
        )
    except (JWTError, KeyError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
        ) from exc


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> AdminContext:
    """Resolve the caller from a bearer JWT and insist on the admin role.

    With admin_auth_required off (demo mode), a request without credentials
    is treated as the demo admin.
    """
    if credentials is None:
        if settings.admin_auth_required:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Admin credentials required",
            )
        return AdminContext(user_id="demo-admin", role=ADMIN_ROLE)

    ctx = decode_token(credentials.credentials, settings)
    if ctx.role != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return ctx

from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError

from pos_api.core.config import settings


def create_access_token(account_id: int, role: str, expires_delta: timedelta | None = None) -> str:
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    claims = {
        "sub": str(account_id),
        "role": role,
        "iat": issued_at,
        "exp": expires_at,
        "type": "access",
    }

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    # Refresh or reset tokens are not accepted as access tokens
    if payload.get("type") != "access":
        return None

    return payload

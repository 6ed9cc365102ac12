from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import get_settings

settings = get_settings()

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """
    What the lifecycle endpoints need from a bearer token.

    tenant_id is the tenant the token was issued for; None for platform users.
    """

    user_id: UUID
    tenant_id: UUID | None
    expires_at: datetime


def create_access_token(
    subject: str,
    tenant_id: str | None,
    expires_delta_minutes: int | None = None,
) -> str:
    if expires_delta_minutes is None:
        expires_delta_minutes = settings.access_token_expire_minutes

    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_delta_minutes)
    to_encode: dict[str, Any] = {
        "sub": str(subject),
        "tenant_id": tenant_id,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> TokenClaims:
    """
    Verify signature and expiry, then parse the claims.

    Raises ValueError with a message fit for a 401 response.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise ValueError("Token has expired. Please log in again.") from None
    except JWTError as exc:
        raise ValueError("Invalid token") from exc

    try:
        user_id = UUID(str(payload["sub"]))
        raw_tenant = payload.get("tenant_id")
        tenant_id = UUID(str(raw_tenant)) if raw_tenant else None
    except (KeyError, ValueError):
        raise ValueError("Invalid token payload") from None

    return TokenClaims(
        user_id=user_id,
        tenant_id=tenant_id,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )

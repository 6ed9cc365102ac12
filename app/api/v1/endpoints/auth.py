from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import TokenClaims, decode_token
from app.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    user: User
    claims: TokenClaims


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthenticatedUser:
    """
    Resolve the bearer token to an active user.

    Tokens are issued by the auth service; this API only verifies them.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        claims = decode_token(credentials.credentials)
    except ValueError as exc:
        raise _unauthorized(str(exc))

    user = db.query(User).filter(User.id == claims.user_id).first()
    if not user or not user.is_active:
        raise _unauthorized("User not found")

    return AuthenticatedUser(user=user, claims=claims)

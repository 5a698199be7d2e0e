"""Bearer-token identity for the coldcheck API.

Only the token subject is used: it becomes ``submitted_by`` on reports.
Account management lives outside this service; ``coldcheck dev token``
issues tokens for local use.
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import get_settings
from . import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)


class User(BaseModel):
    """The actor behind a request."""

    id: str
    email: str = ""
    name: str = ""


class TokenPayload(BaseModel):
    """Claims carried by a coldcheck access token."""

    sub: str
    email: str = ""
    name: str = ""
    exp: datetime
    iat: datetime


def create_access_token(user: User, expires_in: timedelta | None = None) -> str:
    """Sign a token whose subject is ``user.id``.

    The lifetime defaults to ``JWT_EXPIRATION_HOURS``.
    """
    settings = get_settings()
    issued = datetime.now(timezone.utc)
    lifetime = expires_in or timedelta(hours=settings.jwt_expiration_hours)
    claims = TokenPayload(
        sub=user.id,
        email=user.email,
        name=user.name,
        exp=issued + lifetime,
        iat=issued,
    )
    return jwt.encode(claims.model_dump(), settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenPayload:
    """Verify signature and expiry and return the claims.

    Raises:
        AuthenticationError: If the token is expired, malformed or has a
            blank subject
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {e}")

    try:
        payload = TokenPayload(**claims)
    except PydanticValidationError as e:
        raise AuthenticationError(f"Invalid token claims: {e.error_count()} error(s)")
    if not payload.sub.strip():
        raise AuthenticationError("Token subject is empty")
    return payload


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """Resolve the bearer token on the request to a User.

    Raises:
        AuthenticationError: If no valid token was sent
    """
    if credentials is None:
        raise AuthenticationError("Authentication required")

    payload = decode_access_token(credentials.credentials)
    return User(id=payload.sub, email=payload.email, name=payload.name)


CurrentUser = Annotated[User, Depends(get_current_user)]

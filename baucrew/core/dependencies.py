"""
baucrew/core/dependencies.py

Authentication and Authorization Dependencies

Provides authentication and role-based access control (RBAC) for FastAPI routes:
- Validates identity-provider tokens from Bearer header OR HttpOnly cookie
- Resolves (or creates on first sight) the matching platform user
- Restricts access based on user roles
"""

import logging
from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.core.config import settings
from baucrew.database.enums import UserRole
from baucrew.database.models import User
from baucrew.database.session import get_db

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# OAuth2 Configuration
# ---------------------------------------------------
# auto_error disabled so a missing header falls through to the cookie check
oauth2_scheme: OAuth2PasswordBearer = OAuth2PasswordBearer(
    tokenUrl="/auth/token", auto_error=False
)


class TokenPayload(BaseModel):
    """Claims read from the identity provider's session token."""

    sub: str
    email: str | None = None
    name: str | None = None


# ---------------------------------------------------
# Authentication Functions
# ---------------------------------------------------


async def get_or_create_user(db: AsyncSession, claims: TokenPayload) -> User | None:
    """
    Return the platform user for an identity-provider subject, creating a
    CUSTOMER account the first time the subject is seen.
    Returns None when a new account cannot be created because no email is known.
    """
    result = await db.execute(select(User).filter(User.auth_user_id == claims.sub))
    user = result.unique().scalar_one_or_none()
    if user:
        return user

    if not claims.email:
        logger.warning(f"[AUTH] No email claim for new subject {claims.sub}")
        return None

    user = User(
        auth_user_id=claims.sub,
        email=claims.email,
        full_name=(claims.name or "").strip() or None,
        role=UserRole.CUSTOMER,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Concurrent first request for the same subject already created the row
        await db.rollback()
        result = await db.execute(select(User).filter(User.auth_user_id == claims.sub))
        return result.unique().scalar_one_or_none()

    logger.info(f"[AUTH] Created user {user.id} for subject {claims.sub}")
    return user


async def get_current_user(
    # Try Authorization header first (optional)
    token_header: Annotated[str | None, Depends(oauth2_scheme)] = None,
    # Fallback to reading from cookie named "access_token"
    token_cookie: Annotated[str | None, Cookie(alias="access_token")] = None,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Authenticate the current user based on the identity-provider token,
    checking Bearer header first, then HttpOnly cookie.

    Raises:
        HTTPException: 401 Unauthorized if authentication fails.
    """
    token = token_header or token_cookie

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if token is None:
        logger.debug("[AUTH] No token found in Authorization header or access_token cookie.")
        raise credentials_exception

    try:
        payload = jwt.decode(token, settings.AUTH_SECRET_KEY, algorithms=[settings.AUTH_ALGORITHM])
        claims = TokenPayload(**payload)
    except (JWTError, ValidationError) as e:
        logger.warning(f"[AUTH] Token decoding/validation failed: {e}")
        raise credentials_exception

    user = await get_or_create_user(db, claims)
    if not user:
        raise credentials_exception

    logger.debug(
        f"[AUTH] User {user.id} authenticated successfully via {'Header' if token_header else 'Cookie'}."
    )
    return user


# ---------------------------------------------------
# Authorization Functions (Role-Based)
# ---------------------------------------------------


def require_roles(*roles: UserRole) -> Callable[..., Coroutine[Any, Any, User]]:
    """
    Dependency to restrict access to users having any of the specified roles.
    """

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(
                f"[RBAC] Access denied: User {user.id} with role {user.role} attempted access (allowed roles: {roles})"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role: {user.role.value}",
            )
        return user

    return checker

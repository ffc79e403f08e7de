"""
baucrew/core/permissions.py

Role checks applied inside the service layer.
Services receive the caller identity explicitly and enforce roles themselves,
so they behave the same whether called from a route or from a test.
"""

import logging
from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from baucrew.core.exceptions import AuthorizationError
from baucrew.database.enums import UserRole

logger = logging.getLogger(__name__)


class Identity(Protocol):
    """The request-scoped caller: anything exposing an id and a role."""

    id: UUID
    role: UserRole


def ensure_role(user: Identity, allowed: Iterable[UserRole], message: str) -> None:
    """Raise AuthorizationError unless the caller holds one of the allowed roles."""
    allowed = tuple(allowed)
    if user.role not in allowed:
        logger.warning(
            f"[RBAC] Access denied: User {user.id} with role {user.role} (allowed roles: {allowed})"
        )
        raise AuthorizationError(message)

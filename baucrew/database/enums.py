"""
baucrew/database/enums.py

Enumerations

Defines enumerations used across the platform:
- UserRole: Roles assigned to users (Customer, Provider, Both, Admin)
- Role groups used by role checks on customer-side, provider-side and admin operations
"""

from enum import Enum

# ---------------------------------------------------
# User Role Enumeration
# ---------------------------------------------------


class UserRole(str, Enum):
    """
    Enum representing user roles for access control.

    Values:
    - CUSTOMER: posts job requests and books providers
    - PROVIDER: tradesperson sending offers
    - BOTH: acts on either side of the marketplace
    - ADMIN: platform oversight
    """

    CUSTOMER = "CUSTOMER"
    PROVIDER = "PROVIDER"
    BOTH = "BOTH"
    ADMIN = "ADMIN"


# ---------------------------------------------------
# Role Groups
# ---------------------------------------------------
CUSTOMER_ROLES: tuple[UserRole, ...] = (UserRole.CUSTOMER, UserRole.BOTH, UserRole.ADMIN)
PROVIDER_ROLES: tuple[UserRole, ...] = (UserRole.PROVIDER, UserRole.BOTH, UserRole.ADMIN)
ADMIN_ROLES: tuple[UserRole, ...] = (UserRole.ADMIN,)


# ---------------------------------------------------
# Provider Verification Status Enumeration
# ---------------------------------------------------


class VerificationStatus(str, Enum):
    """
    Enum representing the review state of a provider's verification documents.
    """

    NOT_SUBMITTED = "NOT_SUBMITTED"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

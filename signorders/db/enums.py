"""Enum definitions for application constants."""

from enum import Enum


class Role(str, Enum):
    """
    User roles, from broadest to narrowest visibility.

    - IT_ADMIN: Platform admin (users, offices, vendors)
    - SIGN_ADMIN: Sign department admin (all offices, all orders)
    - ADMIN_AGENT: Office manager (everything inside their own office)
    - AGENT: Listing agent (only their own orders and CC emails)
    """
    IT_ADMIN = "IT_ADMIN"
    SIGN_ADMIN = "SIGN_ADMIN"
    ADMIN_AGENT = "ADMIN_AGENT"
    AGENT = "AGENT"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


class InstallationType(str, Enum):
    """What the vendor is asked to do with the sign."""
    INSTALLATION = "INSTALLATION"
    REMOVAL = "REMOVAL"
    REPAIR = "REPAIR"

    @property
    def label(self) -> str:
        return self.value.title()


class OrderStatus(str, Enum):
    """
    Lifecycle of an order (and of a reorder).

    PENDING → IN_PROGRESS → COMPLETED, or CANCELLED at any point.
    """
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


DEFAULT_ORDER_STATUS = OrderStatus.PENDING


PROPERTY_TYPES: tuple[str, ...] = (
    "Residential",
    "Commercial",
    "Land",
    "Multi-Family",
    "Condo",
    "Townhouse",
)


# =============================================================================
# Role Permission Sets
# =============================================================================

# Roles that see every office and every agent
ROLES_UNRESTRICTED = {Role.IT_ADMIN, Role.SIGN_ADMIN}

# Roles that can physically delete orders
ROLES_CAN_HARD_DELETE = {Role.IT_ADMIN, Role.SIGN_ADMIN}

# Roles that manage users, offices and vendors
ROLES_CAN_MANAGE_LOOKUPS = {Role.IT_ADMIN, Role.SIGN_ADMIN}

"""SQLAlchemy ORM models for offices, users, vendors, orders and CC lists."""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON, Boolean, ForeignKey, Index, Integer, String, Text, Uuid, text
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from signorders.db.base import Base, TimestampMixin
from signorders.db.enums import DEFAULT_ORDER_STATUS


# =============================================================================
# Tenant & Auth Models
# =============================================================================

class Office(TimestampMixin, Base):
    """
    A real-estate office.

    Users, orders and CC email lists all belong to exactly one office,
    and office-scoped roles only ever see rows of their own office.
    """
    __tablename__ = "offices"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    manager_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("true"), nullable=False
    )

    # Relationships
    users: Mapped[list["User"]] = relationship(back_populates="office")
    orders: Mapped[list["Order"]] = relationship(back_populates="office")
    cc_emails: Mapped[list["CCEmail"]] = relationship(back_populates="office")


class User(TimestampMixin, Base):
    """
    Application user (agent or admin).

    Passwords are stored as bcrypt hashes. token_version is bumped on
    logout / password change to revoke every outstanding session token.
    """
    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_office_id", "office_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    office_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("offices.id", ondelete="SET NULL"), nullable=True
    )
    token_version: Mapped[int] = mapped_column(
        Integer, default=1, server_default=text("1"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("true"), nullable=False
    )
    last_login_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    office: Mapped["Office | None"] = relationship(back_populates="users")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Vendor(TimestampMixin, Base):
    """
    Sign installation vendor.

    service_areas holds the zip codes the vendor covers; new orders without
    an explicit vendor are assigned to the first active vendor covering
    their zip code.
    """
    __tablename__ = "vendors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    service_areas: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("true"), nullable=False
    )

    orders: Mapped[list["Order"]] = relationship(back_populates="vendor")


# =============================================================================
# Orders
# =============================================================================

class Order(TimestampMixin, Base):
    """
    A request to install, remove or repair a sign at a property.

    order_id is the human-readable identifier (SO-<millis>) shown to staff;
    it is assigned once at creation and never updated.
    """
    __tablename__ = "orders"
    __table_args__ = (
        Index("idx_orders_office_created", "office_id", "created_at"),
        Index("idx_orders_agent_id", "agent_id"),
        Index("idx_orders_installation_date", "installation_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    office_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("offices.id", ondelete="RESTRICT"), nullable=False
    )
    agent_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    installation_type: Mapped[str] = mapped_column(String(20), nullable=False)
    property_type: Mapped[str] = mapped_column(String(100), nullable=False)

    # Address
    street_address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False)

    # Contact
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Dates
    listing_date: Mapped[datetime | None] = mapped_column(nullable=True)
    expiration_date: Mapped[datetime | None] = mapped_column(nullable=True)
    installation_date: Mapped[datetime | None] = mapped_column(nullable=True)
    completion_date: Mapped[datetime | None] = mapped_column(nullable=True)

    directions: Mapped[str | None] = mapped_column(Text, nullable=True)
    additional_info: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Property features the installer must know about
    underwater_sprinkler: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
    invisible_dog_fence: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )

    vendor_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("vendors.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_ORDER_STATUS.value, nullable=False
    )

    # Relationships
    office: Mapped["Office"] = relationship(back_populates="orders")
    agent: Mapped["User"] = relationship(foreign_keys=[agent_id])
    vendor: Mapped["Vendor | None"] = relationship(back_populates="orders")
    reorders: Mapped[list["Reorder"]] = relationship(
        back_populates="original_order",
        cascade="all, delete-orphan",
        order_by="Reorder.created_at.desc()",
    )


class Reorder(TimestampMixin, Base):
    """A follow-up order against an eligible original order."""
    __tablename__ = "reorders"
    __table_args__ = (
        Index("idx_reorders_original_order_id", "original_order_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    reorder_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    original_order_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    installation_type: Mapped[str] = mapped_column(String(20), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False)
    additional_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    listing_agent_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_ORDER_STATUS.value, nullable=False
    )

    original_order: Mapped["Order"] = relationship(back_populates="reorders")
    listing_agent: Mapped["User"] = relationship(foreign_keys=[listing_agent_id])


# =============================================================================
# CC Distribution Lists
# =============================================================================

class CCEmail(TimestampMixin, Base):
    """
    Extra recipient copied on order notifications for an office
    (and optionally a single agent of that office).

    Rows are never physically deleted; is_active=False hides them.
    At most one active row per (email, office_id, agent_id).
    """
    __tablename__ = "cc_emails"
    __table_args__ = (
        Index("idx_cc_emails_office_active", "office_id", "is_active"),
        Index("idx_cc_emails_lookup", "email", "office_id", "agent_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    office_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("offices.id", ondelete="CASCADE"), nullable=False
    )
    agent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    entered_by_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    modified_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("true"), nullable=False
    )

    office: Mapped["Office"] = relationship(back_populates="cc_emails")
    agent: Mapped["User | None"] = relationship(foreign_keys=[agent_id])
    entered_by: Mapped["User"] = relationship(foreign_keys=[entered_by_user_id])
    modified_by: Mapped["User | None"] = relationship(foreign_keys=[modified_by_user_id])

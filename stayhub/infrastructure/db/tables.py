from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False, default=""),
    Column("role", String(16), nullable=False),
)

accommodations = Table(
    "accommodations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("host_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("title", String(255), nullable=False, default=""),
    Column("price_per_night", Numeric(12, 2), nullable=False),
    Column("capacity", Integer, nullable=False),
    Column("deleted", Boolean, nullable=False, default=False),
)

reservations = Table(
    "reservations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("guest_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("accommodation_id", Integer, ForeignKey("accommodations.id"), nullable=False),
    Column("check_in", DateTime, nullable=False),
    Column("check_out", DateTime, nullable=False),
    Column("guest_count", Integer, nullable=False),
    Column("total_price", Numeric(12, 2), nullable=False),
    Column("status", String(16), nullable=False),
    Column("deleted", Boolean, nullable=False, default=False),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    Index("ix_reservations_accommodation_status", "accommodation_id", "status"),
    Index("ix_reservations_guest", "guest_id"),
)

notifications = Table(
    "notifications",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("type", String(32), nullable=False),
    Column("message", String(1000), nullable=False),
    Column("payload", JSON),
    Column("status", String(16), nullable=False),
    Column("created_at", DateTime),
    Index("ix_notifications_user", "user_id"),
)

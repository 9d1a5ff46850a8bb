"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from supporthub.adapters.persistence.database import Base


class QueueModel(Base):
    __tablename__ = "queues"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=func.now()
    )

    routing_rules: Mapped[list["RoutingRuleModel"]] = relationship(back_populates="queue")

    __table_args__ = (
        Index("idx_queues_company_name", "company_id", "name", unique=True),
        Index("idx_queues_is_active", "is_active"),
    )


class RoutingRuleModel(Base):
    __tablename__ = "routing_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(Integer, nullable=False)
    queue_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("queues.id", ondelete="RESTRICT"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    # Enums are stored by name; parsing happens in the repository mappers
    match_type: Mapped[str] = mapped_column(String(50), nullable=False)
    match_operator: Mapped[str] = mapped_column(String(50), nullable=False)
    match_value: Mapped[str] = mapped_column(String(1000), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    auto_assign_agent_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    auto_set_priority: Mapped[str | None] = mapped_column(String(20), nullable=True)
    auto_add_tags: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=func.now()
    )

    queue: Mapped["QueueModel"] = relationship(back_populates="routing_rules")

    __table_args__ = (
        Index("idx_routing_rules_company_sort", "company_id", "sort_order"),
        Index("idx_routing_rules_queue", "queue_id"),
        Index("idx_routing_rules_is_active", "is_active"),
    )


class EmailConfigurationModel(Base):
    __tablename__ = "email_configurations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(Integer, nullable=False)
    shared_mailbox_address: Mapped[str] = mapped_column(String(256), nullable=False)
    display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    polling_interval_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    last_polled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    auto_create_tickets: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    default_priority: Mapped[str] = mapped_column(String(20), nullable=False, default="Medium")

    __table_args__ = (
        Index(
            "idx_email_configurations_company_mailbox",
            "company_id", "shared_mailbox_address", unique=True,
        ),
        Index("idx_email_configurations_is_active", "is_active"),
    )

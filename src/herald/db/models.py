"""SQLAlchemy ORM models."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, TypeDecorator
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from herald.events.types import EventStatus


class UTCDateTime(TypeDecorator[datetime]):
    """Stores naive UTC, returns timezone-aware UTC.

    SQLite drops tzinfo, so values are normalised on the way in and
    re-tagged on the way out.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.replace(tzinfo=None)

    def process_result_value(
        self, value: datetime | None, dialect
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class Base(DeclarativeBase):
    """Base class for all models."""


class UserRecord(Base):
    """Row in the users table."""

    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    events: Mapped[list["EventRecord"]] = relationship(
        "EventRecord",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EventRecord(Base):
    """Row in the events table."""

    __tablename__ = "events"
    __table_args__ = (Index("ix_events_status_execute_at", "status", "execute_at"),)

    event_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_name: Mapped[str] = mapped_column(String(255), nullable=False)
    execute_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    status: Mapped[EventStatus] = mapped_column(
        Enum(
            EventStatus,
            name="event_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=EventStatus.PENDING,
    )
    executed_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime, nullable=True, default=None
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped[UserRecord] = relationship("UserRecord", back_populates="events")

"""
Base models and mixins for SQLAlchemy ORM.

Provides the declarative base, a timestamp mixin and the aggregate root mixin
that collects domain events.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base


# SQLAlchemy declarative base for all ORM models
Base = declarative_base()


def utc_now() -> datetime:
    """
    Get current UTC timestamp as a naive datetime.

    Naive UTC keeps SQLite and PostgreSQL ``TIMESTAMP WITHOUT TIME ZONE``
    columns round-tripping the same value.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at timestamp columns.

    Attributes:
        created_at: Timestamp when record was created (immutable)
        updated_at: Timestamp when record was last updated (auto-updated)
    """

    created_at = Column(
        DateTime,
        nullable=False,
        default=utc_now,
        doc="UTC timestamp when record was created"
    )

    updated_at = Column(
        DateTime,
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        doc="UTC timestamp when record was last updated"
    )


class AggregateRoot:
    """
    Mixin for aggregates that record domain events.

    Events are kept in memory only; the application service publishes
    them after persisting the aggregate and then clears them. Instances
    loaded by the ORM skip ``__init__``, so the list is created lazily.
    """

    def _event_buffer(self) -> list:
        events = self.__dict__.get("_domain_events")
        if events is None:
            events = []
            self.__dict__["_domain_events"] = events
        return events

    def register_event(self, event) -> None:
        self._event_buffer().append(event)

    @property
    def domain_events(self) -> tuple:
        """Events recorded since the last ``clear_events()``, oldest first."""
        return tuple(self._event_buffer())

    def clear_events(self) -> None:
        self._event_buffer().clear()

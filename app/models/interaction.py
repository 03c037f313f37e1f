"""
Interaction model for broker-customer touchpoints.
Tracks the interaction lifecycle and follow-up reminders.
"""

from sqlalchemy import String, Text, Integer, Boolean, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, enum_column, utc_now, as_utc
from app.models.enums import Priority
from datetime import datetime, timedelta
import enum
from typing import Dict, FrozenSet, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.customer import Customer
    from app.models.broker import Broker
    from app.models.property import Property


class InteractionType(str, enum.Enum):
    DIGITAL_SHARING = "digital_sharing"
    FOLLOW_UP = "follow_up"
    PROPERTY_VISIT = "property_visit"


class InteractionStatus(str, enum.Enum):
    """Lifecycle states of an interaction."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    PAUSED = "paused"
    ENDED = "ended"


# Completed and ended are terminal. The start action narrows in_progress to pending sources and resume to paused ones.
ALLOWED_TRANSITIONS: Dict[InteractionStatus, FrozenSet[InteractionStatus]] = {
    InteractionStatus.PENDING: frozenset({
        InteractionStatus.IN_PROGRESS,
        InteractionStatus.COMPLETED,
        InteractionStatus.PAUSED,
        InteractionStatus.ENDED,
    }),
    InteractionStatus.IN_PROGRESS: frozenset({
        InteractionStatus.COMPLETED,
        InteractionStatus.PAUSED,
        InteractionStatus.ENDED,
    }),
    InteractionStatus.PAUSED: frozenset({
        InteractionStatus.IN_PROGRESS,
        InteractionStatus.ENDED,
    }),
    InteractionStatus.COMPLETED: frozenset(),
    InteractionStatus.ENDED: frozenset(),
}

OPEN_STATUSES = (InteractionStatus.PENDING, InteractionStatus.IN_PROGRESS)


def can_transition(current: InteractionStatus, target: InteractionStatus) -> bool:
    """Check whether an interaction may move from one status to another."""
    return target in ALLOWED_TRANSITIONS[InteractionStatus(current)]


def overdue_cutoff(overdue_after_days: int, now: Optional[datetime] = None) -> datetime:
    """Timestamp before which an open interaction counts as overdue."""
    return (now or utc_now()) - timedelta(days=overdue_after_days)


class Interaction(Base):
    """
    A single touchpoint between a broker and a customer.

    Digital sharing interactions carry the shared property ids and the subset
    the customer shortlisted. Property visit interactions reference the
    visited property.
    """

    __tablename__ = "interactions"

    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    broker_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("brokers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    type: Mapped[InteractionType] = mapped_column(
        enum_column(InteractionType),
        nullable=False,
        index=True
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Digital sharing
    shared_properties: Mapped[Optional[List[int]]] = mapped_column(
        JSON,
        nullable=True,
        comment="Property ids shared with the customer"
    )

    shortlisted_properties: Mapped[Optional[List[int]]] = mapped_column(
        JSON,
        nullable=True,
        comment="Subset of shared_properties the customer shortlisted"
    )

    # Property visit
    property_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    visit_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    customer_feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Scheduling
    scheduled_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    next_follow_up_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    priority: Mapped[Priority] = mapped_column(
        enum_column(Priority),
        nullable=False,
        default=Priority.MEDIUM,
        index=True
    )

    status: Mapped[InteractionStatus] = mapped_column(
        enum_column(InteractionStatus),
        nullable=False,
        default=InteractionStatus.PENDING,
        index=True
    )

    pause_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    end_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    reminder_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_reminder_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        index=True,
        comment="Last change; drives overdue detection"
    )

    # Relationships
    customer: Mapped["Customer"] = relationship("Customer", lazy="selectin")
    broker: Mapped["Broker"] = relationship("Broker", lazy="selectin")
    property: Mapped[Optional["Property"]] = relationship("Property", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Interaction(id={self.id}, type={self.type}, status={self.status})>"

    def check_overdue(self, overdue_after_days: int, now: Optional[datetime] = None) -> bool:
        """
        Check whether the interaction has gone stale.

        Args:
            overdue_after_days: Days without an update before an open interaction is overdue
            now: Reference time, defaults to the current UTC time

        Returns:
            True if the interaction is pending or in progress and was last
            updated before the cutoff
        """
        if self.status not in OPEN_STATUSES:
            return False
        updated_at = as_utc(self.updated_at)
        if updated_at is None:
            return False
        return updated_at < overdue_cutoff(overdue_after_days, now)

    def validate_rating(self) -> None:
        if self.rating is not None and not (1 <= self.rating <= 5):
            raise ValueError("Rating must be between 1 and 5")

    def validate_properties(self) -> None:
        """
        Validate the type-specific property references.

        Raises:
            ValueError: If a property visit has no property, a digital share
                has no shared properties, or a shortlisted id was not shared
        """
        if self.type == InteractionType.PROPERTY_VISIT and self.property_id is None:
            raise ValueError("Property visit interactions require a property_id")

        if self.type == InteractionType.DIGITAL_SHARING and not self.shared_properties:
            raise ValueError("Digital sharing interactions require at least one shared property")

        if self.shortlisted_properties:
            not_shared = set(self.shortlisted_properties) - set(self.shared_properties or [])
            if not_shared:
                raise ValueError(
                    f"Shortlisted properties must be among the shared properties: {sorted(not_shared)}"
                )

    def validate_all(self) -> None:
        """Run all validation checks on the interaction."""
        self.validate_rating()
        self.validate_properties()


status_updated_index = Index(
    "idx_interactions_status_updated",
    Interaction.status,
    Interaction.updated_at
)

"""
Visit model for physical property visits by customers.
"""

from sqlalchemy import Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, enum_column
from datetime import datetime
import enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.customer import Customer
    from app.models.property import Property
    from app.models.broker import Broker


class VisitStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Visit(Base):
    """
    A customer's visit to a property, optionally accompanied by a broker.
    Captures feedback and a 1-5 star rating.
    """

    __tablename__ = "visits"

    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    broker_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("brokers.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    visit_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True
    )

    feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[VisitStatus] = mapped_column(
        enum_column(VisitStatus),
        nullable=False,
        default=VisitStatus.COMPLETED,
        index=True
    )

    # Relationships
    customer: Mapped["Customer"] = relationship("Customer", lazy="selectin")
    property: Mapped["Property"] = relationship("Property", lazy="selectin")
    broker: Mapped[Optional["Broker"]] = relationship("Broker", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Visit(id={self.id}, customer_id={self.customer_id}, property_id={self.property_id})>"

    def validate_rating(self) -> None:
        """
        Validate the visit rating.

        Raises:
            ValueError: If rating is outside 1-5
        """
        if self.rating is not None and not (1 <= self.rating <= 5):
            raise ValueError("Rating must be between 1 and 5")

    def validate_all(self) -> None:
        self.validate_rating()

"""
PropertyInterest model linking a customer to a property they are interested in.
"""

from sqlalchemy import Text, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, enum_column
import enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class InterestLevel(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    REJECTED = "rejected"


class InterestSource(str, enum.Enum):
    """Where the interest was captured."""
    DIGITAL_SHARING = "digital_sharing"
    DIRECT_INQUIRY = "direct_inquiry"
    BROKER_RECOMMENDATION = "broker_recommendation"


class PropertyInterest(Base):
    """
    A customer's interest in a property.
    At most one record exists per (customer, property) pair.
    """

    __tablename__ = "property_interests"
    __table_args__ = (
        UniqueConstraint("customer_id", "property_id", name="uq_property_interest_pair"),
    )

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

    interest_level: Mapped[InterestLevel] = mapped_column(
        enum_column(InterestLevel),
        nullable=False,
        index=True
    )

    source: Mapped[Optional[InterestSource]] = mapped_column(enum_column(InterestSource), nullable=True)

    interaction_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("interactions.id", ondelete="SET NULL"),
        nullable=True
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    property: Mapped["Property"] = relationship("Property", lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<PropertyInterest(customer_id={self.customer_id}, "
            f"property_id={self.property_id}, level={self.interest_level})>"
        )

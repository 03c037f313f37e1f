"""
Customer model for prospective buyers and tenants.
Stores contact details, requirements, budget and the assigned broker.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, enum_column
from app.models.enums import Priority, PropertyCategoryType, Furnishing
from datetime import datetime
from decimal import Decimal
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.broker import Broker


class CustomerPurpose(str, enum.Enum):
    """What the customer is looking to do."""
    BUY = "buy"
    RENT = "rent"
    LEASE = "lease"


class CustomerStatus(str, enum.Enum):
    """Customer pipeline status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    FOLLOW_UP = "follow-up"
    CONVERTED = "converted"
    CLOSED = "closed"


class Customer(Base):
    """
    Customer record with preferences and budget.
    Email addresses are unique across customers.
    """

    __tablename__ = "customers"

    # Contact information
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Customer full name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Customer email address - must be unique"
    )

    phone: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    alternate_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pincode: Mapped[Optional[str]] = mapped_column(String(12), nullable=True)
    occupation: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Lead classification
    priority: Mapped[Priority] = mapped_column(
        enum_column(Priority),
        nullable=False,
        default=Priority.MEDIUM,
        index=True
    )

    purpose: Mapped[CustomerPurpose] = mapped_column(
        enum_column(CustomerPurpose),
        nullable=False,
        default=CustomerPurpose.BUY
    )

    # Requirements
    budget_min: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=12, scale=2), nullable=True)
    budget_max: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=12, scale=2), nullable=True)

    property_type: Mapped[Optional[PropertyCategoryType]] = mapped_column(
        enum_column(PropertyCategoryType),
        nullable=True
    )

    preferred_locations: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_area: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=8, scale=2), nullable=True)
    max_area: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=8, scale=2), nullable=True)
    furnishing: Mapped[Optional[Furnishing]] = mapped_column(enum_column(Furnishing), nullable=True)
    parking: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    amenities: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[CustomerStatus] = mapped_column(
        enum_column(CustomerStatus),
        nullable=False,
        default=CustomerStatus.ACTIVE,
        index=True
    )

    assigned_broker_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("brokers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Broker responsible for this customer"
    )

    last_interaction_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    # Relationships
    assigned_broker: Mapped[Optional["Broker"]] = relationship("Broker", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name={self.name}, status={self.status})>"

    def validate_budget(self) -> None:
        """
        Validate the budget range.

        Raises:
            ValueError: If the budget is negative or the range is inverted
        """
        for value in (self.budget_min, self.budget_max):
            if value is not None and value < 0:
                raise ValueError("Budget cannot be negative")
        if self.budget_min is not None and self.budget_max is not None:
            if self.budget_min > self.budget_max:
                raise ValueError("Minimum budget cannot be greater than maximum budget")

    def validate_area(self) -> None:
        if self.min_area is not None and self.max_area is not None:
            if self.min_area > self.max_area:
                raise ValueError("Minimum area cannot be greater than maximum area")

    def validate_all(self) -> None:
        """Run all validation checks on the customer."""
        self.validate_budget()
        self.validate_area()


status_priority_index = Index(
    "idx_customers_status_priority",
    Customer.status,
    Customer.priority
)

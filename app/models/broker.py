"""
Broker model for in-house and external real-estate agents.
"""

from sqlalchemy import String, Text, Integer, Numeric, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base, enum_column
from datetime import datetime
from decimal import Decimal
import enum
from typing import List, Optional


class BrokerAffiliation(str, enum.Enum):
    """Whether the broker works for the agency or independently."""
    INTERNAL = "internal"
    EXTERNAL = "external"


class BrokerStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class Broker(Base):
    """
    Broker record with contact details, commission terms and track record.
    """

    __tablename__ = "brokers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Broker email address - must be unique"
    )

    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    alternate_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # Address
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pincode: Mapped[Optional[str]] = mapped_column(String(12), nullable=True)

    # Professional details
    affiliation: Mapped[BrokerAffiliation] = mapped_column(
        enum_column(BrokerAffiliation),
        nullable=False,
        default=BrokerAffiliation.INTERNAL,
        index=True
    )

    company: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Company name for external brokers"
    )

    experience: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Years of experience"
    )

    specialization: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)

    territory: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Areas the broker covers"
    )

    # Commission and performance
    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(precision=4, scale=2),
        nullable=False,
        default=Decimal("2.5"),
        comment="Commission percentage"
    )

    total_commission: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        default=Decimal("0")
    )

    total_deals: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    rating: Mapped[Decimal] = mapped_column(
        Numeric(precision=3, scale=2),
        nullable=False,
        default=Decimal("0"),
        comment="Average rating from 0 to 5"
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[BrokerStatus] = mapped_column(
        enum_column(BrokerStatus),
        nullable=False,
        default=BrokerStatus.ACTIVE,
        index=True
    )

    joined_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Broker(id={self.id}, name={self.name}, status={self.status})>"

    def validate_commission(self) -> None:
        """
        Validate commission figures.

        Raises:
            ValueError: If commission rate or totals are out of range
        """
        if self.commission_rate is not None and not (0 <= self.commission_rate <= 100):
            raise ValueError("Commission rate must be between 0 and 100")
        if self.total_commission is not None and self.total_commission < 0:
            raise ValueError("Total commission cannot be negative")

    def validate_rating(self) -> None:
        if self.rating is not None and not (0 <= self.rating <= 5):
            raise ValueError("Rating must be between 0 and 5")

    def validate_all(self) -> None:
        """Run all validation checks on the broker."""
        self.validate_commission()
        self.validate_rating()

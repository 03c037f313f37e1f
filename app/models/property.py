"""
Property model for listed real-estate assets.
Handles pricing, location, physical attributes and listing status.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, ForeignKey, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, enum_column
from app.models.enums import PropertyCategoryType, Furnishing
from decimal import Decimal
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.category import PropertySubCategory


class PropertyStatus(str, enum.Enum):
    """Listing status."""
    AVAILABLE = "available"
    SOLD = "sold"
    RENTED = "rented"


class Facing(str, enum.Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    NORTH_EAST = "north-east"
    NORTH_WEST = "north-west"
    SOUTH_EAST = "south-east"
    SOUTH_WEST = "south-west"


class PriceRange(str, enum.Enum):
    """Price buckets used by the listing filters (L = lakh, Cr = crore)."""
    UP_TO_50L = "0-50L"
    FROM_50L_TO_1CR = "50L-1Cr"
    FROM_1CR_TO_2CR = "1Cr-2Cr"
    ABOVE_2CR = "2Cr+"

    @property
    def bounds(self):
        """(exclusive lower, inclusive upper) bounds; None means unbounded."""
        return {
            PriceRange.UP_TO_50L: (None, Decimal("5000000")),
            PriceRange.FROM_50L_TO_1CR: (Decimal("5000000"), Decimal("10000000")),
            PriceRange.FROM_1CR_TO_2CR: (Decimal("10000000"), Decimal("20000000")),
            PriceRange.ABOVE_2CR: (Decimal("20000000"), None),
        }[self]


class Property(Base):
    """
    Property listing with location data and physical attributes.
    """

    __tablename__ = "properties"

    # Basic property information
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property listing title"
    )

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    category: Mapped[PropertyCategoryType] = mapped_column(
        enum_column(PropertyCategoryType),
        nullable=False,
        index=True,
        comment="Property category - flats, tenement, bungalow or land"
    )

    sub_category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("property_sub_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Pricing information
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True,
        comment="Asking price in local currency"
    )

    # Location information
    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Locality shown in listings"
    )

    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    latitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=8),
        nullable=True
    )

    longitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=11, scale=8),
        nullable=True
    )

    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pincode: Mapped[Optional[str]] = mapped_column(String(12), nullable=True)

    # Property specifications
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    area: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=8, scale=2),
        nullable=True,
        comment="Built-up area in square feet"
    )

    owner_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    owner_contact: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    images: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    amenities: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)

    furnishing: Mapped[Optional[Furnishing]] = mapped_column(enum_column(Furnishing), nullable=True)
    parking: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    facing: Mapped[Optional[Facing]] = mapped_column(enum_column(Facing), nullable=True)
    floor: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    total_floors: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    age: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Property age in years"
    )

    status: Mapped[PropertyStatus] = mapped_column(
        enum_column(PropertyStatus),
        nullable=False,
        default=PropertyStatus.AVAILABLE,
        index=True
    )

    # Relationships
    sub_category: Mapped[Optional["PropertySubCategory"]] = relationship(
        "PropertySubCategory",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}..., price={self.price})>"

    def validate_price(self) -> None:
        """
        Validate property price.

        Raises:
            ValueError: If price is invalid
        """
        if self.price is None or self.price <= 0:
            raise ValueError("Property price must be greater than 0")

        if self.price > Decimal('9999999999.99'):
            raise ValueError("Property price exceeds maximum allowed value")

    def validate_coordinates(self) -> None:
        """
        Validate latitude and longitude coordinates.

        Raises:
            ValueError: If coordinates are invalid
        """
        if self.latitude is not None:
            if not (-90 <= self.latitude <= 90):
                raise ValueError("Latitude must be between -90 and 90 degrees")

        if self.longitude is not None:
            if not (-180 <= self.longitude <= 180):
                raise ValueError("Longitude must be between -180 and 180 degrees")

    def validate_floors(self) -> None:
        if self.floor is not None and self.total_floors is not None:
            if self.floor > self.total_floors:
                raise ValueError("Floor cannot be higher than the total number of floors")

    def validate_all(self) -> None:
        """
        Run all validation checks on the property.

        Raises:
            ValueError: If any validation fails
        """
        self.validate_price()
        self.validate_coordinates()
        self.validate_floors()


# Composite index for the listing filter panel
category_status_index = Index(
    'idx_properties_category_status',
    Property.category,
    Property.status,
    Property.price
)

city_status_index = Index(
    'idx_properties_city_status',
    Property.city,
    Property.status
)

"""
Property category lookup tables.
A category (e.g. "Residential") groups named subcategories (e.g. "2BHK Flat").
"""

from sqlalchemy import String, Text, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from typing import Optional


class PropertyCategory(Base):
    """Top-level property category."""

    __tablename__ = "property_categories"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<PropertyCategory(id={self.id}, name={self.name})>"


class PropertySubCategory(Base):
    """Subcategory belonging to exactly one category."""

    __tablename__ = "property_sub_categories"
    __table_args__ = (
        UniqueConstraint("category_id", "name", name="uq_sub_category_name"),
    )

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("property_categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    category: Mapped[PropertyCategory] = relationship("PropertyCategory", lazy="selectin")

    def __repr__(self) -> str:
        return f"<PropertySubCategory(id={self.id}, name={self.name}, category_id={self.category_id})>"

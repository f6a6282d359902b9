"""
Database models -- SQLAlchemy ORM definitions.
Single source of truth: benefits table.
Compatible with both PostgreSQL and SQLite.
"""

from sqlalchemy import Column, DateTime, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Multi-valued text columns are pipe-delimited
LIST_SEPARATOR = "|"


class BenefitRecord(Base):
    """
    Catalog benefits (discounts / perks).
    `position` preserves the curated (featured) order used by relevance
    listings without a search query.
    """
    __tablename__ = "benefits"

    id = Column(Text, primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    title = Column(Text, nullable=False, index=True)
    discount = Column(Text, nullable=False)
    category = Column(Text, nullable=False, index=True)
    description = Column(Text, default="")
    valid_days = Column(Text, default="")
    expires_at = Column(DateTime, nullable=False, index=True)
    image_square = Column(Text)
    image_hero = Column(Text)

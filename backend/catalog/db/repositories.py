"""
Repository pattern for data access.
Reads benefit rows and hands the query engine immutable Benefit values.
"""

from datetime import timezone
from typing import Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from catalog.db.models import BenefitRecord, LIST_SEPARATOR
from catalog.schemas.benefit import Benefit

logger = logging.getLogger(__name__)


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(LIST_SEPARATOR) if part.strip()]


def record_to_benefit(record: BenefitRecord) -> Benefit:
    return Benefit(
        id=record.id,
        title=record.title,
        discount=record.discount,
        category=record.category,
        description=record.description or "",
        valid_days=_split(record.valid_days),
        expires_at=record.expires_at,
        image_square={"uri": record.image_square} if record.image_square else None,
        image_hero={"uri": record.image_hero} if record.image_hero else None,
    )


def benefit_to_record(benefit: Benefit, position: int) -> BenefitRecord:
    expires_at = benefit.expires_at.astimezone(timezone.utc).replace(tzinfo=None)
    return BenefitRecord(
        id=benefit.id,
        position=position,
        title=benefit.title,
        discount=benefit.discount,
        category=benefit.category,
        description=benefit.description,
        valid_days=LIST_SEPARATOR.join(benefit.valid_days),
        expires_at=expires_at,
        image_square=benefit.image_square.uri if benefit.image_square else None,
        image_hero=benefit.image_hero.uri if benefit.image_hero else None,
    )


class BenefitRepository:
    """
    Repository for Benefit data access (benefits table).
    Read errors are logged and re-raised for the API layer to map.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_benefits(self) -> List[Benefit]:
        """All benefits in curated order."""
        try:
            rows = self.db.query(BenefitRecord).order_by(BenefitRecord.position).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching benefits: {str(e)}")
            raise
        return [record_to_benefit(r) for r in rows]

    def count_benefits(self) -> int:
        try:
            return self.db.query(BenefitRecord).count()
        except SQLAlchemyError as e:
            logger.error(f"Count error: {str(e)}")
            raise

    def add_benefits(self, benefits: Iterable[Benefit]) -> int:
        """Append benefits after the current last position. Returns rows added."""
        start = self.db.query(func.max(BenefitRecord.position)).scalar()
        start = -1 if start is None else start
        count = 0
        for offset, benefit in enumerate(benefits, start=1):
            self.db.add(benefit_to_record(benefit, start + offset))
            count += 1
        self.db.commit()
        logger.info(f"Inserted {count} benefits")
        return count

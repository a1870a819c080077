"""Offers page configuration storage."""
from sqlalchemy import Column, Integer, JSON, DateTime
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from pharmanature.data.database.connection import Base

# The configuration is a singleton: one row, always this id
OFFERS_CONFIG_ID = 1


class OffersConfigRecord(Base):
    """Stored offers configuration. The document may be partial."""

    __tablename__ = "offers_config"

    id = Column(Integer, primary_key=True, default=OFFERS_CONFIG_ID)
    document = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<OffersConfigRecord(id={self.id}, sections={list((self.document or {}).keys())})>"


def get_offers_record(db: Session) -> OffersConfigRecord:
    """Fetch the singleton row, creating an empty one on first access."""
    record = db.get(OffersConfigRecord, OFFERS_CONFIG_ID)
    if record is None:
        record = OffersConfigRecord(id=OFFERS_CONFIG_ID, document={})
        db.add(record)
        db.commit()
        db.refresh(record)
    return record

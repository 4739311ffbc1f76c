"""SQLAlchemy ORM model backing the generic record store"""

from sqlalchemy import Column, DateTime, Integer, JSON, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class LedgerRecord(Base):
    """One record of a named collection (residents, rooms, payments)"""

    __tablename__ = "ledger_record"
    __table_args__ = (UniqueConstraint("collection", "record_id", name="uq_ledger_record_collection_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(Text, nullable=False, index=True)
    record_id = Column(Text, nullable=False)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

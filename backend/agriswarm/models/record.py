# backend/agriswarm/models/record.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, JSON

from agriswarm.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class StoredRecord(Base):
    """One persisted sensor reading or flattened daily report."""

    __tablename__ = "agriswarm_records"

    id = Column(String(64), primary_key=True, index=True)
    kind = Column(String(32), nullable=False, index=True)  # "reading" | "report"
    filename = Column(String(128), nullable=False)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

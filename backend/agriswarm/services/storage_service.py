# backend/agriswarm/services/storage_service.py

"""
Persistence sink backed by SQLAlchemy.

Readings and flattened reports are stored as JSON payloads in one table,
tagged by kind and a logical filename (e.g. "sensor_data",
"agriswarm_report_2026-10-18"). Any database failure surfaces as
DependencyError; the workflow treats it as non-fatal.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from agriswarm.core.exceptions import DependencyError
from agriswarm.core.logger import logger
from agriswarm.models import StoredRecord
from agriswarm.schemas import Reading, StoredRecordOut


def _uid(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


class StorageService:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _save(self, kind: str, filename: str, payload: Dict[str, Any]) -> str:
        record_id = _uid(kind)
        try:
            with self.session_factory() as db:
                db.add(StoredRecord(id=record_id, kind=kind, filename=filename, payload=payload))
                db.commit()
        except SQLAlchemyError as exc:
            raise DependencyError(f"could not persist {kind} '{filename}'") from exc

        logger.info(f"Stored {kind}", extra={"record_id": record_id})
        return record_id

    def save_reading(self, reading: Reading, filename: str = "sensor_data") -> str:
        return self._save("reading", filename, reading.model_dump(mode="json", by_alias=True))

    def save_report(self, filename: str, data: Dict[str, Any]) -> str:
        return self._save("report", filename, dict(data))

    def list_records(self, kind: Optional[str] = None, limit: int = 20) -> List[StoredRecordOut]:
        stmt = select(StoredRecord).order_by(StoredRecord.created_at.desc()).limit(limit)
        if kind:
            stmt = stmt.where(StoredRecord.kind == kind)
        try:
            with self.session_factory() as db:
                rows = db.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise DependencyError("could not read stored records") from exc

        return [
            StoredRecordOut(
                id=r.id,
                kind=r.kind,
                filename=r.filename,
                payload=r.payload,
                created_at=r.created_at,
            )
            for r in rows
        ]

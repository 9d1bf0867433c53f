# backend/agriswarm/services/notification_service.py

"""
Alert notifications (log channel)

send_alerts() logs the alert batch at WARNING level and keeps a bounded
in-memory history that the API exposes. An email/SMS channel would replace
_send_log without touching callers.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from agriswarm.core.logger import logger
from agriswarm.schemas import Reading
from agriswarm.services.history import HistoryBuffer


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _send_log(alerts: List[str]) -> Dict[str, Any]:
    logger.warning("Sensor alerts raised", extra={"alerts": alerts})
    return {"status": "sent", "channel": "log"}


class NotificationService:
    def __init__(self, capacity: int = 200):
        self.history: HistoryBuffer = HistoryBuffer(capacity)

    def send_alerts(self, alerts: List[str], reading: Reading) -> Dict[str, Any]:
        if not alerts:
            return {"status": "skipped", "reason": "no_alerts"}

        delivery = _send_log(list(alerts))
        rec = {
            "id": f"notif_{uuid.uuid4()}",
            "alerts": list(alerts),
            "reading": reading.model_dump(mode="json", by_alias=True),
            "created_at": _now_iso(),
            **delivery,
        }
        self.history.append(rec)
        return rec

    def list_history(self, limit: int = 50) -> List[Dict[str, Any]]:
        return list(reversed(self.history.latest(limit)))

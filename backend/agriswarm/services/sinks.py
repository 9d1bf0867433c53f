from typing import Any, Dict, List, Protocol

from agriswarm.schemas import Reading


class PersistenceSink(Protocol):
    def save_reading(self, reading: Reading, filename: str) -> str:
        """Store one reading; returns an opaque record id."""
        ...

    def save_report(self, filename: str, data: Dict[str, Any]) -> str:
        """Store one flattened report; returns an opaque record id."""
        ...


class NotificationSink(Protocol):
    def send_alerts(self, alerts: List[str], reading: Reading) -> Dict[str, Any]:
        """Fire-and-forget delivery of alert messages."""
        ...

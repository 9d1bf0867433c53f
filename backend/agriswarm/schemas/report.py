# backend/agriswarm/schemas/report.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from .allocation import Allocation
from .base import FrozenModel
from .market import MarketAnalysis
from .prediction import Predictions
from .reading import Reading


class Recommendation(FrozenModel):
    priority: str             # high | medium | low
    category: str
    action: str
    details: str


class Alert(FrozenModel):
    level: str                # critical | high | medium
    type: str
    message: str
    timestamp: datetime


class Report(FrozenModel):
    timestamp: datetime
    executive_summary: str
    sensor_status: Reading
    predictions: Predictions
    resource_allocation: Allocation
    market_analysis: MarketAnalysis
    recommendations: List[Recommendation] = []
    alerts: List[Alert] = []


class StoredRecordOut(FrozenModel):
    id: str
    kind: str
    filename: str
    payload: Dict[str, Any]
    created_at: Optional[datetime] = None

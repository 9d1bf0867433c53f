# backend/agriswarm/services/workflow_service.py

"""
AgriSwarm workflow: sample -> predict -> (allocate, market) -> report.

Side effects live here and only here:
 - every sampled reading is appended to the readings history, optionally
   persisted, and checked against the sensor alert thresholds
 - every report is persisted in its flattened form
Persistence and notification failures (DependencyError) are logged and
swallowed; the report is still returned. Validation and computation errors
propagate to the caller.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence, Tuple

from agriswarm.core.exceptions import DependencyError
from agriswarm.core.logger import logger
from agriswarm.schemas import Allocation, MarketAnalysis, Predictions, Reading, Report
from agriswarm.services.history import HistoryBuffer
from agriswarm.services.market_service import MarketAdvisor
from agriswarm.services.prediction_service import generate_predictions
from agriswarm.services.report_service import assemble_report, flatten_report, report_filename
from agriswarm.services.resource_service import ResourceAllocator
from agriswarm.services.sensor_service import EnvironmentSampler, check_alerts
from agriswarm.services.sinks import NotificationSink, PersistenceSink
from agriswarm.services.validation import require_reading


class AgriSwarmWorkflow:
    def __init__(
        self,
        sampler: EnvironmentSampler,
        readings: HistoryBuffer,
        allocator: ResourceAllocator,
        market_advisor: MarketAdvisor,
        storage: Optional[PersistenceSink] = None,
        notifier: Optional[NotificationSink] = None,
        persist_readings: bool = True,
    ):
        self.sampler = sampler
        self.readings = readings
        self.allocator = allocator
        self.market_advisor = market_advisor
        self.storage = storage
        self.notifier = notifier
        self.persist_readings = persist_readings

    # -------------------------
    # Collaborators (non-fatal)
    # -------------------------
    def _call_sink(self, what: str, fn: Callable[[], Any]) -> Any:
        try:
            return fn()
        except DependencyError as exc:
            logger.warning(f"{what} failed, continuing without it: {exc}")
            return None

    def _persist_reading(self, reading: Reading) -> Optional[str]:
        if self.storage is None or not self.persist_readings:
            return None
        return self._call_sink("Reading persistence", lambda: self.storage.save_reading(reading, "sensor_data"))

    def _persist_report(self, report: Report) -> Optional[str]:
        if self.storage is None:
            return None
        return self._call_sink(
            "Report persistence",
            lambda: self.storage.save_report(report_filename(report), flatten_report(report)),
        )

    def _notify(self, alerts, reading: Reading) -> None:
        if self.notifier is None or not alerts:
            return
        self._call_sink("Alert notification", lambda: self.notifier.send_alerts(alerts, reading))

    # -------------------------
    # Agents
    # -------------------------
    def _next_reading(self) -> Tuple[Reading, Tuple[Reading, ...]]:
        """Samples a reading; returns it with the history as it was before it."""
        history = self.readings.snapshot()
        reading = self.sampler.sample()
        self.readings.append(reading)
        self._persist_reading(reading)
        self._notify(check_alerts(reading), reading)
        return reading, history

    def collect_reading(self) -> Reading:
        reading, _ = self._next_reading()
        return reading

    def predict(self) -> Predictions:
        reading, history = self._next_reading()
        return generate_predictions(reading, history)

    def allocate(self) -> Allocation:
        reading, history = self._next_reading()
        return self.allocator.allocate(reading, generate_predictions(reading, history))

    def analyze_market(self) -> MarketAnalysis:
        reading, history = self._next_reading()
        return self.market_advisor.analyze(reading, generate_predictions(reading, history))

    # -------------------------
    # Full workflow
    # -------------------------
    def _build_report(
        self,
        reading: Reading,
        history: Sequence[Reading],
        price_history: Optional[HistoryBuffer] = None,
    ) -> Report:
        now = datetime.now(timezone.utc)
        predictions = generate_predictions(reading, history, now=now)
        allocation = self.allocator.allocate(reading, predictions, now=now)
        market = self.market_advisor.analyze(reading, predictions, price_history=price_history, now=now)
        return assemble_report(reading, predictions, allocation, market, now=now)

    def run(self) -> Report:
        logger.info("Starting AgriSwarm workflow")
        reading, history = self._next_reading()
        report = self._build_report(reading, history)
        record_id = self._persist_report(report)
        logger.info(
            "AgriSwarm workflow completed",
            extra={"priority": report.resource_allocation.priority, "record_id": record_id},
        )
        return report

    def evaluate(self, reading: Any) -> Report:
        """
        Runs the pipeline on a caller-supplied reading. Shared state is left
        untouched: the reading is not recorded and prices go to a scratch copy
        of the price history.
        """
        reading = require_reading(reading)
        prices = self.market_advisor.history
        scratch = HistoryBuffer(prices.capacity, prices.snapshot())
        return self._build_report(reading, self.readings.snapshot(), price_history=scratch)

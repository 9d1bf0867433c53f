# backend/agriswarm/services/report_service.py

"""
Daily report assembly

Merges one reading, the predictions, the allocation and the market analysis
into a Report:
 - executive summary: fixed template (crop status, yield, pest risk,
   irrigation, harvest, market, risk)
 - recommendations: appended by rule, then stable-sorted high > medium > low
 - alerts: extreme temperature, high pest risk, market opportunity

flatten_report() gives the key/value layout persisted once per run.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from agriswarm.schemas import (
    Alert,
    Allocation,
    MarketAnalysis,
    Predictions,
    Reading,
    Recommendation,
    Report,
)
from agriswarm.services.validation import require_predictions, require_reading

PRIORITY_WEIGHTS = {"high": 3, "medium": 2, "low": 1}

SAFE_TEMPERATURE_RANGE = (10, 35)


def executive_summary(predictions: Predictions, market: MarketAnalysis) -> str:
    q = predictions.quality
    y = predictions.yield_
    pest = predictions.pest_risk
    price = market.price_prediction
    return "\n".join([
        "AgriSwarm Daily Report",
        "",
        f"Crop Status: {q.grade} quality ({q.score:g}/100)",
        f"Yield Prediction: {y.predicted_yield} kg/acre ({y.confidence}/100 confidence)",
        f"Pest Risk: {pest.level} ({pest.score:g}/100)",
        f"Irrigation: {predictions.irrigation.urgency} priority",
        f"Harvest: {predictions.harvest.days_to_harvest} days",
        f"Market: {market.selling_recommendation.action} ({price.predicted_price:g} PKR/kg)",
        f"Risk Level: {market.risk_assessment.overall_risk}",
    ])


def build_recommendations(
    predictions: Predictions,
    allocation: Allocation,
    market: MarketAnalysis,
) -> List[Recommendation]:
    recs: List[Recommendation] = []

    if predictions.irrigation.urgency == "high":
        recs.append(Recommendation(
            priority="high",
            category="irrigation",
            action="Immediate irrigation required",
            details=f"{round(allocation.water.amount)} liters needed",
        ))

    if predictions.pest_risk.level == "high":
        recs.append(Recommendation(
            priority="high",
            category="pest_control",
            action="Pest control measures needed",
            details=", ".join(predictions.pest_risk.recommendations),
        ))

    selling = market.selling_recommendation
    if selling.action == "sell_now":
        recs.append(Recommendation(
            priority="medium",
            category="market",
            action="Sell harvest at current prices",
            details=selling.reasoning,
        ))

    if allocation.priority == "critical":
        recs.append(Recommendation(
            priority="high",
            category="resources",
            action="Critical resource reallocation required",
            details=(
                f"{round(allocation.water.amount)} liters water, "
                f"{allocation.labor.total:g} workers, "
                f"{allocation.pesticides.amount:g} L pesticide"
            ),
        ))

    return sorted(recs, key=lambda r: PRIORITY_WEIGHTS.get(r.priority, 0), reverse=True)


def build_alerts(
    reading: Reading,
    predictions: Predictions,
    market: MarketAnalysis,
    timestamp: datetime,
) -> List[Alert]:
    alerts: List[Alert] = []
    low, high = SAFE_TEMPERATURE_RANGE

    if reading.temperature > high or reading.temperature < low:
        alerts.append(Alert(
            level="critical",
            type="temperature",
            message=f"Extreme temperature: {reading.temperature:g}°C",
            timestamp=timestamp,
        ))

    if predictions.pest_risk.level == "high":
        alerts.append(Alert(
            level="high",
            type="pest",
            message=f"High pest risk detected: {predictions.pest_risk.score:g}/100",
            timestamp=timestamp,
        ))

    if market.selling_recommendation.action == "sell_now":
        alerts.append(Alert(
            level="medium",
            type="market",
            message=f"Market opportunity: {market.price_prediction.predicted_price:g} PKR/kg predicted",
            timestamp=timestamp,
        ))

    return alerts


def assemble_report(
    reading: Reading,
    predictions: Predictions,
    allocation: Allocation,
    market: MarketAnalysis,
    now: Optional[datetime] = None,
) -> Report:
    reading = require_reading(reading)
    predictions = require_predictions(predictions)
    now = now or datetime.now(timezone.utc)

    return Report(
        timestamp=now,
        executive_summary=executive_summary(predictions, market),
        sensor_status=reading,
        predictions=predictions,
        resource_allocation=allocation,
        market_analysis=market,
        recommendations=build_recommendations(predictions, allocation, market),
        alerts=build_alerts(reading, predictions, market, now),
    )


def report_filename(report: Report) -> str:
    return f"agriswarm_report_{report.timestamp.date().isoformat()}"


def flatten_report(report: Report) -> Dict[str, str]:
    p = report.predictions
    m = report.market_analysis
    return {
        "Date": report.timestamp.date().isoformat(),
        "Yield Prediction": f"Score: {p.yield_.score:g}, Expected: {p.yield_.predicted_yield} kg/acre",
        "Pest Risk": f"Level: {p.pest_risk.level}, Score: {p.pest_risk.score:g}",
        "Irrigation": f"Urgency: {p.irrigation.urgency}, Amount: {p.irrigation.amount}",
        "Harvest Date": f"{p.harvest.estimated_date.isoformat()} ({p.harvest.days_to_harvest} days)",
        "Quality Grade": f"{p.quality.grade} ({p.quality.score:g} score)",
        "Resource Priority": report.resource_allocation.priority,
        "Market": f"{m.selling_recommendation.action} ({m.price_prediction.predicted_price:g} PKR/kg)",
        "Risk Level": f"{m.risk_assessment.overall_risk} ({m.risk_assessment.risk_score}/100)",
        "Alerts": str(len(report.alerts)),
    }

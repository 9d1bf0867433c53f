# backend/agriswarm/services/market_service.py

"""
Market analysis (market agent)

price multiplier = quality(grade) x supply/demand(month) x seasonal(month) x trend(history)

 - quality:        premium 1.3, good 1.1, standard 1.0
 - supply/demand:  Apr-Jun 0.9, Oct-Dec 0.95, else 1.0
 - seasonal:       Jan-Mar 1.2, Apr-Jun 0.9, Jul-Sep 1.0, Oct-Dec 1.1
 - trend:          mean(last 7 prices) / mean(previous 7), clamped to [0.8, 1.3];
                   1.0 until 14 prices have been recorded

The advisor is the only component with cross-call state: every analysis
appends {timestamp, predicted_price, crop} to a bounded price history.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from statistics import mean, stdev
from typing import Dict, List, Optional, Sequence

from agriswarm.schemas import (
    MarketAnalysis,
    MarketRisk,
    PriceMultipliers,
    PricePoint,
    PricePrediction,
    Predictions,
    Reading,
    RiskAssessment,
    SellingRecommendation,
)
from agriswarm.services.history import HistoryBuffer
from agriswarm.services.prediction_service import QUALITY_GRADE_MULTIPLIERS, history_confidence
from agriswarm.services.seasonal_service import seasonal_context
from agriswarm.services.validation import ensure_finite, require_predictions, require_reading

BASE_PRICES: Dict[str, float] = {"wheat": 50.0}   # PKR/kg
DEFAULT_BASE_PRICE = 50.0

TREND_WINDOW = 7
TREND_MIN_POINTS = 2 * TREND_WINDOW
TREND_MIN, TREND_MAX = 0.8, 1.3

VOLATILITY_WINDOW = 7
VOLATILITY_THRESHOLD_PCT = 20.0

RISK_WEIGHTS = {"high": 30, "medium": 15, "low": 5}


# ---------------------
# Multipliers
# ---------------------
def round_half_up(value: float) -> int:
    """Whole-number rounding with halves going up (40.5 -> 41)."""
    # trims float noise such as 40.49999999999999 before quantizing
    return int(Decimal(str(round(value, 6))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def trend_multiplier(prices: Sequence[float]) -> float:
    if len(prices) < TREND_MIN_POINTS:
        return 1.0
    recent = mean(prices[-TREND_WINDOW:])
    previous = mean(prices[-TREND_MIN_POINTS:-TREND_WINDOW])
    if previous <= 0:
        return 1.0
    return max(TREND_MIN, min(TREND_MAX, recent / previous))


def price_volatility(prices: Sequence[float]) -> float:
    """Coefficient of variation (%) over the last 7 prices."""
    window = list(prices[-VOLATILITY_WINDOW:])
    if len(window) < 2:
        return 0.0
    avg = mean(window)
    if avg == 0:
        return 0.0
    return round(stdev(window) / avg * 100, 2)


def _trend_label(trend: float) -> str:
    if trend > 1.0:
        return "bullish"
    if trend < 1.0:
        return "bearish"
    return "stable"


# ---------------------
# Selling recommendation
# ---------------------
def selling_recommendation(
    current_price: float,
    predicted_price: float,
    days_to_harvest: int,
    grade: str,
    confidence: int,
) -> SellingRecommendation:
    """First matching rule wins."""
    if predicted_price > current_price * 1.15:
        action, timing = "sell_now", "immediate"
        reasoning = f"Predicted price {predicted_price:g} PKR/kg is more than 15% above the current {current_price:g} PKR/kg"
    elif days_to_harvest <= 14 and predicted_price > current_price * 1.05:
        action, timing = "prepare_to_sell", "within_2_weeks"
        reasoning = f"Harvest in {days_to_harvest} days with prices expected to rise above {current_price:g} PKR/kg"
    elif predicted_price < current_price * 0.95:
        action, timing = "hold", "wait_for_better_prices"
        reasoning = f"Predicted price {predicted_price:g} PKR/kg is below the current {current_price:g} PKR/kg"
    elif grade == "premium":
        action, timing = "store", "consider_storage"
        reasoning = "Premium quality crop keeps its value in storage"
    else:
        action, timing = "hold", "not_applicable"
        reasoning = "No significant price movement expected"

    return SellingRecommendation(action=action, timing=timing, reasoning=reasoning, confidence=confidence)


# ---------------------
# Risk assessment
# ---------------------
def assess_risk(reading: Reading, predictions: Predictions, prices: Sequence[float]) -> RiskAssessment:
    ctx = seasonal_context(reading.timestamp)
    risks: List[MarketRisk] = []

    volatility = price_volatility(prices)
    if volatility > VOLATILITY_THRESHOLD_PCT:
        risks.append(MarketRisk(
            type="price_volatility",
            level="medium",
            description=f"Price volatility of {volatility:g}% over the last {VOLATILITY_WINDOW} analyses",
        ))
    if ctx.harvest_window:
        risks.append(MarketRisk(
            type="market_oversupply",
            level="high",
            description="Harvest season: market supply is peaking",
        ))
    if predictions.quality.score < 70:
        risks.append(MarketRisk(
            type="quality",
            level="medium",
            description=f"Quality score {predictions.quality.score:g} may lower the selling price",
        ))
    if reading.temperature > 35 or reading.temperature < 10:
        risks.append(MarketRisk(
            type="weather",
            level="high",
            description=f"Extreme temperature of {reading.temperature:g}°C threatens the crop",
        ))

    if len(risks) > 2:
        overall = "high"
    elif risks:
        overall = "medium"
    else:
        overall = "low"

    score = min(100, sum(RISK_WEIGHTS[r.level] for r in risks))
    return RiskAssessment(overall_risk=overall, risk_score=score, risks=risks)


class MarketAdvisor:
    def __init__(
        self,
        history: Optional[HistoryBuffer] = None,
        crop: str = "wheat",
        base_price: Optional[float] = None,
    ):
        self.history = history if history is not None else HistoryBuffer(90)
        self.crop = crop
        self.base_price = base_price if base_price is not None else BASE_PRICES.get(crop, DEFAULT_BASE_PRICE)

    def price_multipliers(self, reading: Reading, predictions: Predictions, prices: Sequence[float]) -> PriceMultipliers:
        ctx = seasonal_context(reading.timestamp)
        quality = QUALITY_GRADE_MULTIPLIERS.get(predictions.quality.grade, 1.0)
        trend = trend_multiplier(prices)
        combined = quality * ctx.supply_demand_multiplier * ctx.seasonal_multiplier * trend
        return PriceMultipliers(
            quality=quality,
            supply_demand=ctx.supply_demand_multiplier,
            seasonal=ctx.seasonal_multiplier,
            trend=round(trend, 4),
            combined=round(ensure_finite(combined, "price_multiplier"), 4),
        )

    def analyze(
        self,
        reading: Reading,
        predictions: Predictions,
        price_history: Optional[HistoryBuffer] = None,
        now: Optional[datetime] = None,
    ) -> MarketAnalysis:
        reading = require_reading(reading)
        predictions = require_predictions(predictions)
        buffer = price_history if price_history is not None else self.history
        now = now or datetime.now(timezone.utc)

        prices = [p.predicted_price for p in buffer.snapshot()]
        multipliers = self.price_multipliers(reading, predictions, prices)

        current = self.base_price
        # multipliers.combined is rounded for display only
        raw = ensure_finite(
            self.base_price * multipliers.quality * multipliers.supply_demand
            * multipliers.seasonal * trend_multiplier(prices),
            "predicted_price",
        )
        predicted = float(round_half_up(raw))
        confidence = history_confidence(len(prices))

        analysis = MarketAnalysis(
            price_prediction=PricePrediction(
                crop=self.crop,
                current_price=current,
                predicted_price=predicted,
                price_range=[round(predicted * 0.9, 2), round(predicted * 1.1, 2)],
                confidence=confidence,
                trend=_trend_label(multipliers.trend),
                volatility=price_volatility(prices),
                multipliers=multipliers,
            ),
            selling_recommendation=selling_recommendation(
                current,
                predicted,
                predictions.harvest.days_to_harvest,
                predictions.quality.grade,
                confidence,
            ),
            risk_assessment=assess_risk(reading, predictions, prices),
            timestamp=now,
        )

        buffer.append(PricePoint(timestamp=now, predicted_price=predicted, crop=self.crop))
        return analysis

# backend/agriswarm/services/prediction_service.py

"""
Rule-based crop predictions (prediction agent)

Five independent scorers, each a pure function of the current reading and an
optional history of past readings (oldest first):

 - predict_yield            score + expected kg/acre
 - predict_pest_risk        score + low/medium/high level + fixed advice
 - predict_irrigation_needs score x crop-stage multiplier -> urgency/amount/timing
 - predict_harvest_date     days to harvest + ISO calendar date
 - predict_crop_quality     score -> standard/good/premium grade + market value

Labels use strict '>' against their breakpoints. Confidence grows with the
amount of history available and never raises on an empty history.
"""

from datetime import date, datetime, timedelta, timezone
from statistics import mean
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from agriswarm.core.exceptions import InputValidationError
from agriswarm.schemas import (
    CropStage,
    Reading,
    YieldFactors,
    YieldPrediction,
    PestRiskPrediction,
    IrrigationPrediction,
    HarvestPrediction,
    QualityPrediction,
    Predictions,
)
from agriswarm.services.validation import require_reading

BASE_YIELD_KG_PER_ACRE = 800
QUALITY_BASE_VALUE = 50

YIELD_HISTORY_WINDOW = 10
PEST_HISTORY_WINDOW = 7

# water demand by crop stage as seen by the prediction agent
# (the resource agent keeps its own table)
STAGE_WATER_MULTIPLIERS: Dict[str, float] = {
    "planting": 0.8,
    "germination": 1.2,
    "vegetative": 1.0,
    "flowering": 1.3,
    "maturity": 0.9,
    "harvest": 0.6,
}

HARVEST_STAGE_OFFSETS: Dict[str, int] = {
    "planting": 80,
    "germination": 60,
    "vegetative": 40,
    "flowering": 20,
    "maturity": 10,
    "harvest": 0,
}
DEFAULT_HARVEST_OFFSET = 45
MIN_DAYS_TO_HARVEST = 30

QUALITY_GRADE_MULTIPLIERS: Dict[str, float] = {
    "premium": 1.3,
    "good": 1.1,
    "standard": 1.0,
}

PEST_RECOMMENDATIONS: Dict[str, List[str]] = {
    "high": [
        "Increase field monitoring frequency",
        "Consider preventive pesticide application",
        "Inspect crops daily for pest damage",
    ],
    "medium": [
        "Monitor fields every 2-3 days",
        "Prepare pesticide application if needed",
    ],
    "low": ["Continue regular monitoring"],
}

IRRIGATION_AMOUNTS = {"high": "heavy", "medium": "moderate", "low": "light"}
IRRIGATION_TIMING = {"high": "within 24 hours", "medium": "within 48 hours", "low": "within 1 week"}


# -------------------------
# Helpers
# -------------------------
def history_confidence(history_length: int) -> int:
    if history_length < 5:
        conf = 60
    elif history_length < 15:
        conf = 75
    elif history_length < 30:
        conf = 85
    else:
        conf = 95
    return max(0, min(100, conf))


def stage_key(stage) -> str:
    return stage.value if isinstance(stage, CropStage) else str(stage)


def _recent(history: Optional[Iterable[Reading]], window: int) -> Tuple[int, List[Reading]]:
    """Returns (total history length, last `window` readings)."""
    items = list(history or ())
    for item in items:
        if not isinstance(item, Reading):
            raise InputValidationError(f"history entries must be Readings, got {type(item).__name__}")
    return len(items), (items[-window:] if window > 0 else [])


# -------------------------
# Yield
# -------------------------
def _water_score(soil_moisture: float, rainfall: float) -> int:
    if 40 <= soil_moisture <= 70:
        score = 25
    elif soil_moisture < 30:
        score = -20
    elif soil_moisture > 80:
        score = -10
    else:
        score = 0
    if rainfall > 0:
        score += 10
    return score


def _yield_factors(temperature: float, soil_moisture: float, rainfall: float, solar_radiation: float) -> YieldFactors:
    return YieldFactors(
        temperature=20 if 20 <= temperature <= 30 else -10,
        water=_water_score(soil_moisture, rainfall),
        solar=15 if solar_radiation > 400 else -5,
    )


def _factor_total(f: YieldFactors) -> int:
    return 50 + f.temperature + f.water + f.solar


def predict_yield(reading: Reading, history: Sequence[Reading] = ()) -> YieldPrediction:
    reading = require_reading(reading)
    total, recent = _recent(history, YIELD_HISTORY_WINDOW)

    factors = _yield_factors(
        reading.temperature, reading.soil_moisture, reading.rainfall, reading.solar_radiation
    )
    score = float(_factor_total(factors))

    historical = None
    if recent:
        # same rules applied to the average recent conditions
        historical = float(_factor_total(_yield_factors(
            mean(r.temperature for r in recent),
            mean(r.soil_moisture for r in recent),
            mean(r.rainfall for r in recent),
            mean(r.solar_radiation for r in recent),
        )))
        score = (score + historical) / 2

    return YieldPrediction(
        score=round(score, 2),
        predicted_yield=round(BASE_YIELD_KG_PER_ACRE * score / 100),
        confidence=history_confidence(total),
        factors=factors,
        historical_score=historical,
    )


# -------------------------
# Pest risk
# -------------------------
def _weather_pest_risk(humidity: float, temperature: float) -> int:
    risk = 0
    if humidity > 70:
        risk += 30
    elif humidity > 60:
        risk += 15
    if temperature > 28:
        risk += 25
    elif temperature > 25:
        risk += 10
    return risk


def pest_level(score: float) -> str:
    if score > 60:
        return "high"
    if score > 30:
        return "medium"
    return "low"


def predict_pest_risk(reading: Reading, history: Sequence[Reading] = ()) -> PestRiskPrediction:
    reading = require_reading(reading)
    total, recent = _recent(history, PEST_HISTORY_WINDOW)

    score = float(_weather_pest_risk(reading.humidity, reading.temperature))
    if reading.rainfall > 5:
        score += 20
    if stage_key(reading.crop_stage) in ("flowering", "maturity"):
        score += 15

    historical = None
    if recent:
        historical = mean(_weather_pest_risk(r.humidity, r.temperature) for r in recent)
        score = (score + historical) / 2

    level = pest_level(score)
    return PestRiskPrediction(
        score=round(score, 2),
        level=level,
        confidence=history_confidence(total),
        recommendations=list(PEST_RECOMMENDATIONS[level]),
        historical_score=historical,
    )


# -------------------------
# Irrigation
# -------------------------
def irrigation_urgency(score: float) -> str:
    if score > 80:
        return "high"
    if score > 60:
        return "medium"
    return "low"


def predict_irrigation_needs(reading: Reading, history: Sequence[Reading] = ()) -> IrrigationPrediction:
    reading = require_reading(reading)
    total, _ = _recent(history, 0)

    score = 50.0
    if reading.soil_moisture < 30:
        score += 40
    elif reading.soil_moisture < 50:
        score += 20
    elif reading.soil_moisture > 70:
        score -= 20

    if reading.temperature > 30:
        score += 25
    elif reading.temperature > 25:
        score += 10

    if reading.humidity < 40:
        score += 20
    elif reading.humidity < 60:
        score += 10

    if reading.wind_speed > 10:
        score += 15

    multiplier = STAGE_WATER_MULTIPLIERS.get(stage_key(reading.crop_stage), 1.0)
    score = round(score * multiplier, 2)
    urgency = irrigation_urgency(score)

    return IrrigationPrediction(
        score=score,
        urgency=urgency,
        amount=IRRIGATION_AMOUNTS[urgency],
        timing=IRRIGATION_TIMING[urgency],
        stage_multiplier=multiplier,
        confidence=history_confidence(total),
    )


# -------------------------
# Harvest date
# -------------------------
def predict_harvest_date(
    reading: Reading,
    history: Sequence[Reading] = (),
    today: Optional[date] = None,
) -> HarvestPrediction:
    reading = require_reading(reading)
    total, _ = _recent(history, 0)

    days = 90
    if reading.temperature > 25:
        days -= 10
    if reading.soil_moisture > 60:
        days -= 5
    if reading.solar_radiation > 600:
        days -= 5
    days += HARVEST_STAGE_OFFSETS.get(stage_key(reading.crop_stage), DEFAULT_HARVEST_OFFSET)
    days = max(MIN_DAYS_TO_HARVEST, days)

    start = today or reading.timestamp.date()
    return HarvestPrediction(
        days_to_harvest=days,
        estimated_date=start + timedelta(days=days),
        confidence=history_confidence(total),
    )


# -------------------------
# Quality
# -------------------------
def quality_grade(score: float) -> str:
    if score > 85:
        return "premium"
    if score > 70:
        return "good"
    return "standard"


def predict_crop_quality(reading: Reading, history: Sequence[Reading] = ()) -> QualityPrediction:
    reading = require_reading(reading)
    total, _ = _recent(history, 0)
    t = reading.temperature

    score = 75.0
    if 18 <= t <= 25:
        score += 15
    elif t < 15 or t > 30:
        score -= 20
    if reading.soil_moisture < 30 or reading.soil_moisture > 80:
        score -= 15
    if reading.humidity > 75 and t > 25:
        score -= 10
    if reading.solar_radiation > 500:
        score += 10

    grade = quality_grade(score)
    return QualityPrediction(
        score=score,
        grade=grade,
        market_value=round(QUALITY_BASE_VALUE * QUALITY_GRADE_MULTIPLIERS[grade]),
        confidence=history_confidence(total),
    )


# -------------------------
# All five
# -------------------------
def generate_predictions(
    reading: Reading,
    history: Sequence[Reading] = (),
    now: Optional[datetime] = None,
) -> Predictions:
    reading = require_reading(reading)
    history = tuple(history or ())
    return Predictions(
        yield_=predict_yield(reading, history),
        pest_risk=predict_pest_risk(reading, history),
        irrigation=predict_irrigation_needs(reading, history),
        harvest=predict_harvest_date(reading, history),
        quality=predict_crop_quality(reading, history),
        timestamp=now or datetime.now(timezone.utc),
    )

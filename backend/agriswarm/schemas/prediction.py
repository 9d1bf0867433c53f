# backend/agriswarm/schemas/prediction.py
from datetime import date, datetime
from typing import Annotated, List, Optional

from pydantic import Field

from .base import CamelModel

Confidence = Annotated[int, Field(ge=0, le=100)]


class YieldFactors(CamelModel):
    temperature: int
    water: int
    solar: int


class YieldPrediction(CamelModel):
    score: float
    predicted_yield: int               # kg/acre
    confidence: Confidence
    factors: YieldFactors
    historical_score: Optional[float] = None


class PestRiskPrediction(CamelModel):
    score: float
    level: str                         # low | medium | high
    confidence: Confidence
    recommendations: List[str] = []
    historical_score: Optional[float] = None


class IrrigationPrediction(CamelModel):
    score: float
    urgency: str                       # low | medium | high
    amount: str                        # light | moderate | heavy
    timing: str
    stage_multiplier: float
    confidence: Confidence


class HarvestPrediction(CamelModel):
    days_to_harvest: int
    estimated_date: date
    confidence: Confidence


class QualityPrediction(CamelModel):
    score: float
    grade: str                         # standard | good | premium
    market_value: int
    confidence: Confidence


class Predictions(CamelModel):
    yield_: YieldPrediction = Field(..., alias="yield")
    pest_risk: PestRiskPrediction
    irrigation: IrrigationPrediction
    harvest: HarvestPrediction
    quality: QualityPrediction
    timestamp: datetime

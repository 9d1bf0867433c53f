# backend/agriswarm/schemas/market.py
from datetime import datetime
from typing import List

from pydantic import Field

from .base import FrozenModel


class PricePoint(FrozenModel):
    """One entry of the rolling price history."""

    timestamp: datetime
    predicted_price: float
    crop: str


class PriceMultipliers(FrozenModel):
    quality: float
    supply_demand: float
    seasonal: float
    trend: float
    combined: float


class PricePrediction(FrozenModel):
    crop: str
    current_price: float
    predicted_price: float
    price_range: List[float] = Field(..., min_length=2, max_length=2)
    confidence: int = Field(..., ge=0, le=100)
    trend: str                # bullish | bearish | stable
    volatility: float         # percent
    multipliers: PriceMultipliers


class SellingRecommendation(FrozenModel):
    action: str               # sell_now | prepare_to_sell | hold | store
    timing: str
    reasoning: str
    confidence: int = Field(..., ge=0, le=100)


class MarketRisk(FrozenModel):
    type: str
    level: str                # low | medium | high
    description: str


class RiskAssessment(FrozenModel):
    overall_risk: str
    risk_score: int = Field(..., ge=0, le=100)
    risks: List[MarketRisk] = []


class MarketAnalysis(FrozenModel):
    price_prediction: PricePrediction
    selling_recommendation: SellingRecommendation
    risk_assessment: RiskAssessment
    timestamp: datetime

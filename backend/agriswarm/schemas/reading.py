# backend/agriswarm/schemas/reading.py
from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from .base import CamelModel, FrozenModel


class CropStage(str, Enum):
    PLANTING = "planting"
    GERMINATION = "germination"
    VEGETATIVE = "vegetative"
    FLOWERING = "flowering"
    MATURITY = "maturity"
    HARVEST = "harvest"
    UNKNOWN = "unknown"


# growth order used by the sampler's day-of-year bucketing
STAGE_ORDER = [
    CropStage.PLANTING,
    CropStage.GERMINATION,
    CropStage.VEGETATIVE,
    CropStage.FLOWERING,
    CropStage.MATURITY,
    CropStage.HARVEST,
]


class Location(FrozenModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    region: str
    district: str


DEFAULT_LOCATION = Location(
    latitude=31.5204,
    longitude=74.3587,
    region="Punjab",
    district="Lahore",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Reading(CamelModel):
    temperature: float = Field(..., ge=-50, le=60, allow_inf_nan=False, description="degC")
    humidity: float = Field(..., ge=0, le=100, allow_inf_nan=False, description="%")
    soil_moisture: float = Field(..., ge=0, le=100, allow_inf_nan=False, description="%")
    rainfall: float = Field(0.0, ge=0, allow_inf_nan=False, description="mm")
    wind_speed: float = Field(0.0, ge=0, allow_inf_nan=False, description="km/h")
    solar_radiation: float = Field(0.0, ge=0, allow_inf_nan=False, description="W/m2")
    crop_stage: CropStage = CropStage.UNKNOWN
    location: Location = DEFAULT_LOCATION
    timestamp: datetime = Field(default_factory=_utcnow)

# backend/agriswarm/services/sensor_service.py

"""
Synthetic environment sampler (sensor agent)

Each call produces one Reading from deterministic calendar/clock baselines
plus bounded uniform noise:
 - temperature    = 25 + U(-5,5) + seasonal adjustment      (1 decimal)
 - humidity       = clamp(60 + U(-10,10), 0, 100)          (integer)
 - soilMoisture   = clamp(50 + U(-15,15), 0, 100)          (integer)
 - rainfall       = U(0,20) in monsoon months, else U(0,2)  (1 decimal)
 - windSpeed      = 5 + U(0,15)                             (1 decimal)
 - solarRadiation = max(0, baseline(hour) + U(-100,100))    (integer)
 - cropStage      = stage bucket of (day_of_year mod 180) / 30

The random source and the clock are injected so a fixed seed and a fixed
time give a fixed reading. Persistence and alerting are left to the caller.
"""

import random
from datetime import datetime
from typing import Callable, Dict, List, Optional

from agriswarm.schemas import CropStage, Location, Reading, DEFAULT_LOCATION, STAGE_ORDER
from agriswarm.services.seasonal_service import seasonal_context

# inclusive comfort band per monitored field
ALERT_THRESHOLDS: Dict[str, Dict[str, float]] = {
    "temperature": {"min": 10, "max": 35},
    "humidity": {"min": 40, "max": 80},
    "soil_moisture": {"min": 30, "max": 70},
}

_ALERT_LABELS = {
    "temperature": ("temperature", "°C"),
    "humidity": ("humidity", "%"),
    "soil_moisture": ("soil moisture", "%"),
}


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def solar_baseline(hour: int) -> float:
    if hour < 6 or hour > 18:
        return 0.0
    if hour < 12:
        return 400.0 + (hour - 6) * 100.0
    if hour < 15:
        return 800.0
    return 800.0 - (hour - 15) * 200.0


def crop_stage_for_day(day_of_year: int) -> CropStage:
    index = (day_of_year % 180) // 30
    if 0 <= index < len(STAGE_ORDER):
        return STAGE_ORDER[index]
    return CropStage.UNKNOWN


class EnvironmentSampler:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _local_now,
        location: Location = DEFAULT_LOCATION,
    ):
        self.rng = rng or random.Random()
        self.clock = clock
        self.location = location

    def sample(self) -> Reading:
        now = self.clock()
        ctx = seasonal_context(now)
        u = self.rng.uniform

        temperature = round(25 + u(-5, 5) + ctx.season_adjustment, 1)
        humidity = round(_clamp(60 + u(-10, 10), 0, 100))
        soil_moisture = round(_clamp(50 + u(-15, 15), 0, 100))
        rainfall = round(u(0, 20) if ctx.monsoon else u(0, 2), 1)
        wind_speed = round(5 + u(0, 15), 1)
        solar_radiation = round(max(0.0, solar_baseline(now.hour) + u(-100, 100)))

        return Reading(
            temperature=temperature,
            humidity=humidity,
            soil_moisture=soil_moisture,
            rainfall=rainfall,
            wind_speed=wind_speed,
            solar_radiation=solar_radiation,
            crop_stage=crop_stage_for_day(ctx.day_of_year),
            location=self.location,
            timestamp=now,
        )


def check_alerts(reading: Reading) -> List[str]:
    """Threshold alerts for a single reading, e.g. 'High temperature alert: 36.2°C'."""
    alerts: List[str] = []
    for field, bounds in ALERT_THRESHOLDS.items():
        value = getattr(reading, field)
        label, unit = _ALERT_LABELS[field]
        if value < bounds["min"]:
            alerts.append(f"Low {label} alert: {value:g}{unit}")
        elif value > bounds["max"]:
            alerts.append(f"High {label} alert: {value:g}{unit}")
    return alerts

# backend/agriswarm/services/seasonal_service.py

"""
Calendar-derived constants shared by every agent.

Month tables (calendar month 1..12):
 - temperature adjustment: Mar-May +5, Jun-Aug +10, Sep-Nov +3, else -2
 - monsoon: Jul-Sep
 - harvest window (market oversupply): Apr-Jun
 - supply/demand price multiplier: Apr-Jun 0.9, Oct-Dec 0.95, else 1.0
 - seasonal price multiplier: Jan-Mar 1.2, Apr-Jun 0.9, Jul-Sep 1.0, Oct-Dec 1.1
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union


@dataclass(frozen=True)
class SeasonalContext:
    month: int
    day_of_year: int
    season_adjustment: float
    monsoon: bool
    harvest_window: bool
    supply_demand_multiplier: float
    seasonal_multiplier: float


def _season_adjustment(month: int) -> float:
    if 3 <= month <= 5:
        return 5.0
    if 6 <= month <= 8:
        return 10.0
    if 9 <= month <= 11:
        return 3.0
    return -2.0


def _supply_demand_multiplier(month: int) -> float:
    if 4 <= month <= 6:
        return 0.9
    if 10 <= month <= 12:
        return 0.95
    return 1.0


def _seasonal_price_multiplier(month: int) -> float:
    if month <= 3:
        return 1.2
    if month <= 6:
        return 0.9
    if month <= 9:
        return 1.0
    return 1.1


def seasonal_context(when: Union[date, datetime]) -> SeasonalContext:
    month = when.month
    return SeasonalContext(
        month=month,
        day_of_year=when.timetuple().tm_yday,
        season_adjustment=_season_adjustment(month),
        monsoon=7 <= month <= 9,
        harvest_window=4 <= month <= 6,
        supply_demand_multiplier=_supply_demand_multiplier(month),
        seasonal_multiplier=_seasonal_price_multiplier(month),
    )

from datetime import date

import pytest

from agriswarm.services.seasonal_service import seasonal_context


@pytest.mark.parametrize(
    "month,adjustment",
    [(1, -2.0), (2, -2.0), (3, 5.0), (5, 5.0), (6, 10.0), (8, 10.0), (9, 3.0), (11, 3.0), (12, -2.0)],
)
def test_season_adjustment(month, adjustment):
    assert seasonal_context(date(2026, month, 15)).season_adjustment == adjustment


def test_monsoon_and_harvest_window():
    assert [m for m in range(1, 13) if seasonal_context(date(2026, m, 1)).monsoon] == [7, 8, 9]
    assert [m for m in range(1, 13) if seasonal_context(date(2026, m, 1)).harvest_window] == [4, 5, 6]


def test_price_multipliers_by_month():
    sd = [seasonal_context(date(2026, m, 1)).supply_demand_multiplier for m in range(1, 13)]
    seasonal = [seasonal_context(date(2026, m, 1)).seasonal_multiplier for m in range(1, 13)]

    assert sd == [1.0, 1.0, 1.0, 0.9, 0.9, 0.9, 1.0, 1.0, 1.0, 0.95, 0.95, 0.95]
    assert seasonal == [1.2, 1.2, 1.2, 0.9, 0.9, 0.9, 1.0, 1.0, 1.0, 1.1, 1.1, 1.1]


def test_day_of_year_starts_at_one():
    assert seasonal_context(date(2026, 1, 1)).day_of_year == 1
    assert seasonal_context(date(2026, 12, 31)).day_of_year == 365

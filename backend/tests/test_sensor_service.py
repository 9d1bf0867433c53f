import random
from datetime import datetime, timezone

import pytest

from agriswarm.schemas import CropStage, DEFAULT_LOCATION
from agriswarm.services.sensor_service import (
    EnvironmentSampler,
    check_alerts,
    crop_stage_for_day,
    solar_baseline,
)

from conftest import FIXED_NOW, make_reading


def _sampler(seed, when=FIXED_NOW):
    return EnvironmentSampler(rng=random.Random(seed), clock=lambda: when)


def test_same_seed_same_reading():
    assert _sampler(42).sample() == _sampler(42).sample()


def test_different_seeds_differ():
    assert _sampler(1).sample() != _sampler(2).sample()


def test_reading_fields_stay_in_bounds():
    for month in range(1, 13):
        for hour in (0, 7, 13, 17, 23):
            sampler = _sampler(month * 100 + hour, datetime(2026, month, 10, hour, tzinfo=timezone.utc))
            for _ in range(25):
                r = sampler.sample()
                assert 0 <= r.humidity <= 100
                assert 0 <= r.soil_moisture <= 100
                assert r.rainfall >= 0
                assert r.wind_speed >= 0
                assert r.solar_radiation >= 0
                # 25 +/- 5 plus the seasonal delta
                assert 18 <= r.temperature <= 40


def test_rounding_and_ranges_for_fixed_time(fixed_sampler):
    for _ in range(50):
        r = fixed_sampler.sample()
        assert r.humidity == int(r.humidity) and 50 <= r.humidity <= 70
        assert r.soil_moisture == int(r.soil_moisture) and 35 <= r.soil_moisture <= 65
        assert round(r.temperature, 1) == r.temperature
        # October: +3 seasonal adjustment
        assert 23 <= r.temperature <= 33
        # outside the monsoon rainfall stays small
        assert r.rainfall <= 2
        assert 5 <= r.wind_speed <= 20
        # 13:00 baseline is 800
        assert 700 <= r.solar_radiation <= 900
        assert r.crop_stage == CropStage.FLOWERING
        assert r.location == DEFAULT_LOCATION
        assert r.timestamp == FIXED_NOW


def test_monsoon_rainfall_can_exceed_dry_season_cap():
    sampler = _sampler(3, datetime(2026, 8, 1, 9, tzinfo=timezone.utc))
    rain = [sampler.sample().rainfall for _ in range(200)]
    assert max(rain) > 2
    assert max(rain) <= 20


def test_night_solar_radiation_is_clamped_at_zero():
    sampler = _sampler(9, datetime(2026, 1, 5, 2, tzinfo=timezone.utc))
    values = [sampler.sample().solar_radiation for _ in range(100)]
    assert min(values) == 0
    assert max(values) <= 100


@pytest.mark.parametrize(
    "hour,expected",
    [(0, 0), (5, 0), (6, 400), (9, 700), (11, 900), (12, 800), (14, 800), (15, 800), (17, 400), (18, 200), (19, 0)],
)
def test_solar_baseline(hour, expected):
    assert solar_baseline(hour) == expected


@pytest.mark.parametrize(
    "day,stage",
    [
        (1, CropStage.PLANTING),
        (29, CropStage.PLANTING),
        (30, CropStage.GERMINATION),
        (75, CropStage.VEGETATIVE),
        (100, CropStage.FLOWERING),
        (130, CropStage.MATURITY),
        (179, CropStage.HARVEST),
        (180, CropStage.PLANTING),
        (290, CropStage.FLOWERING),
    ],
)
def test_crop_stage_for_day(day, stage):
    assert crop_stage_for_day(day) == stage


def test_alerts_for_out_of_band_values():
    alerts = check_alerts(make_reading(temperature=36.5, humidity=85, soil_moisture=20))
    assert alerts == [
        "High temperature alert: 36.5°C",
        "High humidity alert: 85%",
        "Low soil moisture alert: 20%",
    ]


def test_no_alerts_inside_comfort_band():
    assert check_alerts(make_reading(temperature=10, humidity=40, soil_moisture=70)) == []
    assert check_alerts(make_reading(temperature=8.5))[0] == "Low temperature alert: 8.5°C"

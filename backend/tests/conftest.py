import os
import random
import tempfile
from datetime import datetime, timezone

import pytest

# importing agriswarm.main builds the module-level app, which logs to LOG_DIR
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "agriswarm-test-logs"))

from fastapi.testclient import TestClient  # noqa: E402

from agriswarm.core.config import Settings  # noqa: E402
from agriswarm.main import create_app  # noqa: E402
from agriswarm.schemas import CropStage, Reading  # noqa: E402
from agriswarm.services.sensor_service import EnvironmentSampler  # noqa: E402

# mid October: post-monsoon, outside the harvest window, day 290 (flowering)
FIXED_NOW = datetime(2026, 10, 17, 13, 0, tzinfo=timezone.utc)


def make_reading(**overrides) -> Reading:
    values = {
        "temperature": 22.0,
        "humidity": 55,
        "soil_moisture": 55,
        "rainfall": 0.0,
        "wind_speed": 5.0,
        "solar_radiation": 300,
        "crop_stage": CropStage.VEGETATIVE,
        "timestamp": FIXED_NOW,
    }
    values.update(overrides)
    return Reading(**values)


@pytest.fixture
def reading_factory():
    return make_reading


@pytest.fixture
def fixed_sampler():
    return EnvironmentSampler(rng=random.Random(42), clock=lambda: FIXED_NOW)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'agriswarm-test.db'}",
        RANDOM_SEED=7,
        LOG_DIR=str(tmp_path / "logs"),
        _env_file=None,
    )


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    with TestClient(app) as c:
        yield c

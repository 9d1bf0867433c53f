from datetime import datetime, timezone

import pytest

from agriswarm.core.exceptions import InputValidationError
from agriswarm.schemas import Report
from agriswarm.services.market_service import MarketAdvisor
from agriswarm.services.prediction_service import generate_predictions
from agriswarm.services.report_service import (
    assemble_report,
    executive_summary,
    flatten_report,
    report_filename,
)
from agriswarm.services.resource_service import ResourceAllocator

from conftest import FIXED_NOW, make_reading


def _report(**overrides):
    reading = make_reading(**overrides)
    predictions = generate_predictions(reading, now=FIXED_NOW)
    allocation = ResourceAllocator().allocate(reading, predictions, now=FIXED_NOW)
    market = MarketAdvisor().analyze(reading, predictions, now=FIXED_NOW)
    return assemble_report(reading, predictions, allocation, market, now=FIXED_NOW)


def test_executive_summary_layout():
    report = _report()
    assert report.executive_summary.split("\n") == [
        "AgriSwarm Daily Report",
        "",
        "Crop Status: premium quality (90/100)",
        "Yield Prediction: 720 kg/acre (60/100 confidence)",
        "Pest Risk: low (0/100)",
        "Irrigation: low priority",
        "Harvest: 130 days",
        "Market: sell_now (68 PKR/kg)",
        "Risk Level: low",
    ]
    assert report.executive_summary == executive_summary(report.predictions, report.market_analysis)


def test_calm_day_recommends_selling():
    report = _report()

    assert [(r.priority, r.category) for r in report.recommendations] == [("medium", "market")]
    assert [(a.level, a.type) for a in report.alerts] == [("medium", "market")]
    assert report.alerts[0].message == "Market opportunity: 68 PKR/kg predicted"
    assert report.alerts[0].timestamp == FIXED_NOW


def test_hot_dry_flowering_report():
    report = _report(temperature=36, soil_moisture=15, humidity=80, crop_stage="flowering")

    assert [r.category for r in report.recommendations] == ["irrigation", "pest_control", "resources"]
    assert all(r.priority == "high" for r in report.recommendations)
    assert report.recommendations[0].details == "10400 liters needed"
    assert report.recommendations[1].details.startswith("Increase field monitoring frequency, ")

    assert [(a.level, a.type) for a in report.alerts] == [("critical", "temperature"), ("high", "pest")]
    assert report.alerts[0].message == "Extreme temperature: 36°C"
    assert report.alerts[1].message == "High pest risk detected: 70/100"
    assert report.market_analysis.selling_recommendation.action == "hold"


def test_recommendations_sorted_high_before_medium():
    report = _report(soil_moisture=15, humidity=35, timestamp=datetime(2026, 1, 15, 9, tzinfo=timezone.utc))

    assert [(r.priority, r.category) for r in report.recommendations] == [
        ("high", "irrigation"),
        ("high", "resources"),
        ("medium", "market"),
    ]
    assert report.recommendations[1].details == "8000 liters water, 11 workers, 5 L pesticide"


def test_report_json_round_trip():
    report = _report(temperature=36, soil_moisture=15, humidity=80)
    payload = report.model_dump_json(by_alias=True)

    assert '"soilMoisture"' in payload
    assert '"yield"' in payload
    assert Report.model_validate_json(payload) == report


def test_flatten_report():
    report = _report()
    assert flatten_report(report) == {
        "Date": "2026-10-17",
        "Yield Prediction": "Score: 90, Expected: 720 kg/acre",
        "Pest Risk": "Level: low, Score: 0",
        "Irrigation": "Urgency: low, Amount: light",
        "Harvest Date": "2027-02-24 (130 days)",
        "Quality Grade": "premium (90 score)",
        "Resource Priority": "normal",
        "Market": "sell_now (68 PKR/kg)",
        "Risk Level": "low (0/100)",
        "Alerts": "1",
    }
    assert report_filename(report) == "agriswarm_report_2026-10-17"


def test_assemble_rejects_bad_predictions():
    reading = make_reading()
    predictions = generate_predictions(reading)
    allocation = ResourceAllocator().allocate(reading, predictions)
    market = MarketAdvisor().analyze(reading, predictions)

    with pytest.raises(InputValidationError):
        assemble_report(reading, {"yield": {}}, allocation, market)

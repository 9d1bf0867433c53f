import pytest

from agriswarm.core.exceptions import InputValidationError
from agriswarm.schemas import CropStage
from agriswarm.services.prediction_service import generate_predictions
from agriswarm.services.resource_service import ResourceAllocator, determine_priority

from conftest import FIXED_NOW, make_reading


def _allocate(allocator=None, **overrides):
    reading = make_reading(**overrides)
    predictions = generate_predictions(reading, now=FIXED_NOW)
    return (allocator or ResourceAllocator()).allocate(reading, predictions, now=FIXED_NOW)


def test_hot_dry_humid_flowering_is_critical():
    reading = make_reading(temperature=36, soil_moisture=15, humidity=80, crop_stage=CropStage.FLOWERING)
    predictions = generate_predictions(reading)
    allocation = ResourceAllocator().allocate(reading, predictions)

    assert allocation.priority == "critical"
    assert predictions.pest_risk.score >= 30
    assert allocation.water.urgency == "high"
    assert allocation.water.amount == 10400
    assert [z.zone for z in allocation.water.zones] == ["north_field", "south_field", "east_field"]
    assert {z.condition for z in allocation.water.zones} == {"dry"}
    assert allocation.pesticides.amount == 25
    assert allocation.equipment.sprayers_needed == 2
    assert allocation.equipment.irrigation_systems == 3


def test_calm_vegetative_day_full_breakdown():
    a = _allocate()

    assert a.priority == "normal"
    assert a.water.amount == 2000
    assert a.water.source == "borehole"
    assert a.water.distribution == "drip_irrigation"
    assert (a.fertilizer.nitrogen, a.fertilizer.phosphorus, a.fertilizer.potassium) == (250, 100, 150)
    assert a.fertilizer.total == 500
    assert (a.labor.fieldwork, a.labor.irrigation, a.labor.pest_control, a.labor.harvest) == (4, 3, 2, 1)
    assert a.labor.total == 10
    assert (a.equipment.tractors_needed, a.equipment.sprayers_needed, a.equipment.irrigation_systems) == (1, 1, 2)
    assert a.pesticides.amount == 5
    assert a.pesticides.type == "neem_oil"

    cost = a.cost_analysis
    assert (cost.water, cost.fertilizer, cost.labor, cost.equipment, cost.pesticides) == (100, 1365, 5000, 2000, 75)
    assert cost.total == 8540
    assert a.timestamp == FIXED_NOW


def test_cost_total_is_sum_of_parts():
    for overrides in ({}, {"soil_moisture": 25, "humidity": 35}, {"crop_stage": CropStage.PLANTING}):
        cost = _allocate(**overrides).cost_analysis
        parts = cost.water + cost.fertilizer + cost.labor + cost.equipment + cost.pesticides
        assert cost.total == pytest.approx(parts, abs=0.01)


def test_dry_zone_is_watered_first():
    a = _allocate(soil_moisture=32)

    zones = a.water.zones
    assert [z.zone for z in zones] == ["south_field", "north_field", "east_field"]
    assert [z.condition for z in zones] == ["dry", "optimal", "optimal"]
    assert [z.priority for z in zones] == [1, 2, 2]
    assert zones[0].amount == 2272.73
    assert zones[1].amount == zones[2].amount == 1363.64
    assert sum(z.amount for z in zones) == pytest.approx(a.water.amount, abs=0.05)


def test_wet_zone_is_watered_last():
    zones = _allocate(soil_moisture=68).water.zones
    assert [(z.zone, z.condition) for z in zones] == [
        ("north_field", "optimal"),
        ("south_field", "optimal"),
        ("east_field", "wet"),
    ]
    assert zones[-1].estimated_moisture == 73


@pytest.mark.parametrize(
    "stage,npk",
    [
        (CropStage.PLANTING, (150, 200, 100)),
        (CropStage.FLOWERING, (100, 150, 200)),
        (CropStage.GERMINATION, (50, 50, 50)),
        (CropStage.UNKNOWN, (50, 50, 50)),
    ],
)
def test_fertilizer_split_by_stage(stage, npk):
    f = ResourceAllocator().allocate_fertilizer(make_reading(crop_stage=stage))
    assert (f.nitrogen, f.phosphorus, f.potassium) == npk
    assert f.total == sum(npk)


def test_labor_shifts_towards_urgent_work():
    reading = make_reading(temperature=36, soil_moisture=15, humidity=80, crop_stage=CropStage.FLOWERING)
    labor = ResourceAllocator().allocate_labor(reading, generate_predictions(reading))

    assert labor.pest_control == 5
    assert labor.irrigation == 5
    assert labor.fieldwork == 1
    assert labor.harvest == 1
    assert labor.total == 12


def test_labor_scales_with_pool():
    labor = _allocate(ResourceAllocator(labor_pool=20)).labor
    assert labor.total == 20
    assert labor.fieldwork == 8


def test_planting_needs_two_tractors():
    equipment = _allocate(crop_stage=CropStage.PLANTING).equipment
    assert equipment.tractors_needed == 2
    assert equipment.schedule[0].startswith("Tractors")


@pytest.mark.parametrize(
    "overrides,priority",
    [
        ({"soil_moisture": 19}, "critical"),
        ({"temperature": 36}, "critical"),
        ({"humidity": 80, "temperature": 29, "rainfall": 6}, "high"),
        ({"soil_moisture": 25, "humidity": 35}, "high"),
        ({"soil_moisture": 45}, "medium"),
        ({"soil_moisture": 75, "crop_stage": CropStage.FLOWERING}, "medium"),
        ({}, "normal"),
    ],
)
def test_priority_rules(overrides, priority):
    reading = make_reading(**overrides)
    assert determine_priority(reading, generate_predictions(reading)) == priority


def test_rejects_malformed_inputs():
    reading = make_reading()
    predictions = generate_predictions(reading)
    allocator = ResourceAllocator()

    with pytest.raises(InputValidationError):
        allocator.allocate("bad", predictions)
    with pytest.raises(InputValidationError):
        allocator.allocate(reading, {"pestRisk": {}})
    with pytest.raises(InputValidationError):
        allocator.allocate({"temperature": 22, "humidity": -5, "soilMoisture": 40}, predictions)

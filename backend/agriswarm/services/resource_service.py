# backend/agriswarm/services/resource_service.py

"""
Resource allocation (resource agent)

Turns one reading plus the five predictions into concrete quantities for a
single cycle:

 - water:       pool x urgency factor (high 0.8 / medium 0.5 / low 0.2)
                x crop-stage multiplier, split across three field zones
 - fertilizer:  N/P/K split of the fertilizer pool by crop stage
 - labor:       worker pool split by crop stage, then shifted towards
                pest control / irrigation when those are urgent
 - equipment:   tractors, sprayers, irrigation systems + a day schedule
 - pesticides:  liters by pest risk level
 - priority:    first matching rule wins (see determine_priority)
 - cost:        fixed demo unit prices

Pure arithmetic: no I/O, no randomness. Malformed input raises
InputValidationError.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from agriswarm.schemas import (
    Allocation,
    CostAnalysis,
    EquipmentAllocation,
    FertilizerAllocation,
    LaborAllocation,
    PesticideAllocation,
    Predictions,
    Reading,
    WaterAllocation,
    WaterZone,
)
from agriswarm.services.prediction_service import stage_key
from agriswarm.services.validation import require_predictions, require_reading

# water demand by crop stage as seen by the resource agent
STAGE_WATER_MULTIPLIERS: Dict[str, float] = {
    "planting": 1.2,
    "germination": 1.4,
    "vegetative": 1.0,
    "flowering": 1.3,
    "maturity": 0.8,
    "harvest": 0.6,
}

URGENCY_WATER_FACTORS = {"high": 0.8, "medium": 0.5, "low": 0.2}

# (nitrogen, phosphorus, potassium) share of the fertilizer pool
FERTILIZER_RATIOS: Dict[str, Tuple[float, float, float]] = {
    "planting": (0.3, 0.4, 0.2),
    "vegetative": (0.5, 0.2, 0.3),
    "flowering": (0.2, 0.3, 0.4),
}
DEFAULT_FERTILIZER_RATIO = (0.1, 0.1, 0.1)

# (fieldwork, irrigation, pest_control, harvest) share of the worker pool
LABOR_RATIOS: Dict[str, Tuple[float, float, float, float]] = {
    "planting": (0.5, 0.3, 0.1, 0.1),
    "germination": (0.4, 0.3, 0.2, 0.1),
    "vegetative": (0.4, 0.3, 0.2, 0.1),
    "flowering": (0.3, 0.3, 0.3, 0.1),
    "maturity": (0.3, 0.2, 0.2, 0.3),
    "harvest": (0.2, 0.1, 0.1, 0.6),
}
DEFAULT_LABOR_RATIO = (0.4, 0.2, 0.2, 0.2)

# zone name, soil-moisture offset from the field sensor
WATER_ZONES: List[Tuple[str, float]] = [
    ("north_field", 0.0),
    ("south_field", -10.0),
    ("east_field", 5.0),
]
ZONE_PRIORITY = {"dry": 1, "optimal": 2, "wet": 3}
ZONE_WATER_WEIGHTS = {"dry": 0.5, "optimal": 0.3, "wet": 0.2}

PESTICIDE_LITERS = {"high": 25.0, "medium": 15.0, "low": 5.0}

# demo unit prices (PKR)
WATER_PRICE_PER_L = 0.05
FERTILIZER_PRICE_PER_KG = {"nitrogen": 2.50, "phosphorus": 3.20, "potassium": 2.80}
LABOR_RATE_PER_WORKER = 500.0
EQUIPMENT_RATES = {"tractor": 1200.0, "sprayer": 400.0, "irrigation_system": 200.0}
PESTICIDE_PRICE_PER_L = 15.0


def _zone_condition(moisture: float) -> str:
    if moisture < 30:
        return "dry"
    if moisture <= 70:
        return "optimal"
    return "wet"


def determine_priority(reading: Reading, predictions: Predictions) -> str:
    """First matching rule wins."""
    if reading.soil_moisture < 20:
        return "critical"
    if reading.temperature > 35:
        return "critical"
    if predictions.pest_risk.level == "high":
        return "high"
    if predictions.irrigation.urgency == "high":
        return "high"
    if predictions.irrigation.urgency == "medium":
        return "medium"
    if stage_key(reading.crop_stage) == "flowering":
        return "medium"
    return "normal"


class ResourceAllocator:
    def __init__(
        self,
        water_pool_l: float = 10000.0,
        fertilizer_pool_kg: float = 500.0,
        labor_pool: float = 10.0,
    ):
        self.water_pool_l = water_pool_l
        self.fertilizer_pool_kg = fertilizer_pool_kg
        self.labor_pool = labor_pool

    # ---------------------
    # Water
    # ---------------------
    def _zones(self, soil_moisture: float, total_liters: float) -> List[WaterZone]:
        rows = []
        for name, offset in WATER_ZONES:
            moisture = max(0.0, min(100.0, soil_moisture + offset))
            rows.append((name, moisture, _zone_condition(moisture)))

        weight_sum = sum(ZONE_WATER_WEIGHTS[cond] for _, _, cond in rows)
        zones = [
            WaterZone(
                zone=name,
                condition=cond,
                estimated_moisture=round(moisture, 1),
                priority=ZONE_PRIORITY[cond],
                amount=round(total_liters * ZONE_WATER_WEIGHTS[cond] / weight_sum, 2),
            )
            for name, moisture, cond in rows
        ]
        # stable: zones sharing a condition keep their field order
        return sorted(zones, key=lambda z: z.priority)

    def allocate_water(self, reading: Reading, predictions: Predictions) -> WaterAllocation:
        urgency = predictions.irrigation.urgency
        multiplier = STAGE_WATER_MULTIPLIERS.get(stage_key(reading.crop_stage), 1.0)
        amount = round(self.water_pool_l * URGENCY_WATER_FACTORS.get(urgency, 0.2) * multiplier, 2)
        return WaterAllocation(
            amount=amount,
            timing=predictions.irrigation.timing,
            urgency=urgency,
            stage_multiplier=multiplier,
            zones=self._zones(reading.soil_moisture, amount),
        )

    # ---------------------
    # Fertilizer
    # ---------------------
    def allocate_fertilizer(self, reading: Reading) -> FertilizerAllocation:
        n, p, k = FERTILIZER_RATIOS.get(stage_key(reading.crop_stage), DEFAULT_FERTILIZER_RATIO)
        pool = self.fertilizer_pool_kg
        nitrogen, phosphorus, potassium = round(pool * n, 2), round(pool * p, 2), round(pool * k, 2)
        return FertilizerAllocation(
            nitrogen=nitrogen,
            phosphorus=phosphorus,
            potassium=potassium,
            total=round(nitrogen + phosphorus + potassium, 2),
        )

    # ---------------------
    # Labor
    # ---------------------
    def allocate_labor(self, reading: Reading, predictions: Predictions) -> LaborAllocation:
        pool = self.labor_pool
        f, i, p, h = LABOR_RATIOS.get(stage_key(reading.crop_stage), DEFAULT_LABOR_RATIO)
        fieldwork, irrigation, pest_control, harvest = pool * f, pool * i, pool * p, pool * h

        if predictions.pest_risk.level == "high":
            pest_control += pool * 0.2
            fieldwork -= pool * 0.1
        if predictions.irrigation.urgency == "high":
            irrigation += pool * 0.2
            fieldwork -= pool * 0.1

        # total is the raw sum; fieldwork is not clamped at zero
        fieldwork, irrigation = round(fieldwork, 2), round(irrigation, 2)
        pest_control, harvest = round(pest_control, 2), round(harvest, 2)
        return LaborAllocation(
            fieldwork=fieldwork,
            irrigation=irrigation,
            pest_control=pest_control,
            harvest=harvest,
            total=round(fieldwork + irrigation + pest_control + harvest, 2),
        )

    # ---------------------
    # Equipment / pesticides
    # ---------------------
    def allocate_equipment(self, reading: Reading, predictions: Predictions) -> EquipmentAllocation:
        stage = stage_key(reading.crop_stage)
        pest_high = predictions.pest_risk.level == "high"
        irrigation_high = predictions.irrigation.urgency == "high"

        tractors = 2 if stage in ("planting", "harvest") else 1
        sprayers = 2 if pest_high else 1
        systems = 3 if irrigation_high else 2

        schedule = []
        if stage == "planting":
            schedule.append("Tractors: seedbed preparation and sowing")
        elif stage == "harvest":
            schedule.append("Tractors: harvesting and haulage")
        else:
            schedule.append("Tractor: routine field operations")
        if pest_high:
            schedule.append("Sprayers: preventive spraying, early morning")
        else:
            schedule.append("Sprayer: spot treatment on demand")
        schedule.append(f"Irrigation: {systems} drip systems, {predictions.irrigation.timing}")

        return EquipmentAllocation(
            tractors_needed=tractors,
            sprayers_needed=sprayers,
            irrigation_systems=systems,
            schedule=schedule,
        )

    def allocate_pesticides(self, predictions: Predictions) -> PesticideAllocation:
        return PesticideAllocation(amount=PESTICIDE_LITERS.get(predictions.pest_risk.level, 5.0))

    # ---------------------
    # Cost
    # ---------------------
    @staticmethod
    def cost_analysis(
        water: WaterAllocation,
        fertilizer: FertilizerAllocation,
        labor: LaborAllocation,
        equipment: EquipmentAllocation,
        pesticides: PesticideAllocation,
    ) -> CostAnalysis:
        water_cost = round(water.amount * WATER_PRICE_PER_L, 2)
        fertilizer_cost = round(
            fertilizer.nitrogen * FERTILIZER_PRICE_PER_KG["nitrogen"]
            + fertilizer.phosphorus * FERTILIZER_PRICE_PER_KG["phosphorus"]
            + fertilizer.potassium * FERTILIZER_PRICE_PER_KG["potassium"],
            2,
        )
        labor_cost = round(labor.total * LABOR_RATE_PER_WORKER, 2)
        equipment_cost = round(
            equipment.tractors_needed * EQUIPMENT_RATES["tractor"]
            + equipment.sprayers_needed * EQUIPMENT_RATES["sprayer"]
            + equipment.irrigation_systems * EQUIPMENT_RATES["irrigation_system"],
            2,
        )
        pesticide_cost = round(pesticides.amount * PESTICIDE_PRICE_PER_L, 2)
        return CostAnalysis(
            water=water_cost,
            fertilizer=fertilizer_cost,
            labor=labor_cost,
            equipment=equipment_cost,
            pesticides=pesticide_cost,
            total=round(water_cost + fertilizer_cost + labor_cost + equipment_cost + pesticide_cost, 2),
        )

    # ---------------------
    # Entry point
    # ---------------------
    def allocate(self, reading: Reading, predictions: Predictions, now: Optional[datetime] = None) -> Allocation:
        reading = require_reading(reading)
        predictions = require_predictions(predictions)

        water = self.allocate_water(reading, predictions)
        fertilizer = self.allocate_fertilizer(reading)
        labor = self.allocate_labor(reading, predictions)
        equipment = self.allocate_equipment(reading, predictions)
        pesticides = self.allocate_pesticides(predictions)

        return Allocation(
            water=water,
            fertilizer=fertilizer,
            labor=labor,
            equipment=equipment,
            pesticides=pesticides,
            priority=determine_priority(reading, predictions),
            cost_analysis=self.cost_analysis(water, fertilizer, labor, equipment, pesticides),
            timestamp=now or datetime.now(timezone.utc),
        )

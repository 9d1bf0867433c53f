# backend/agriswarm/schemas/allocation.py
from datetime import datetime
from typing import List

from .base import FrozenModel


class WaterZone(FrozenModel):
    zone: str
    condition: str            # dry | optimal | wet
    estimated_moisture: float
    priority: int             # 1 is irrigated first
    amount: float             # liters


class WaterAllocation(FrozenModel):
    amount: float             # liters
    timing: str
    urgency: str
    stage_multiplier: float
    source: str = "borehole"
    distribution: str = "drip_irrigation"
    zones: List[WaterZone] = []


class FertilizerAllocation(FrozenModel):
    nitrogen: float           # kg
    phosphorus: float
    potassium: float
    total: float
    application_method: str = "fertigation"
    timing: str = "with_irrigation"


class LaborAllocation(FrozenModel):
    fieldwork: float          # workers
    irrigation: float
    pest_control: float
    harvest: float
    total: float


class EquipmentAllocation(FrozenModel):
    tractors_needed: int
    sprayers_needed: int
    irrigation_systems: int
    schedule: List[str] = []


class PesticideAllocation(FrozenModel):
    amount: float             # liters
    type: str = "neem_oil"
    application_method: str = "spraying"
    timing: str = "early_morning"


class CostAnalysis(FrozenModel):
    water: float
    fertilizer: float
    labor: float
    equipment: float
    pesticides: float
    total: float


class Allocation(FrozenModel):
    water: WaterAllocation
    fertilizer: FertilizerAllocation
    labor: LaborAllocation
    equipment: EquipmentAllocation
    pesticides: PesticideAllocation
    priority: str             # critical | high | medium | normal
    cost_analysis: CostAnalysis
    timestamp: datetime

from .reading import CropStage, Location, Reading, DEFAULT_LOCATION, STAGE_ORDER
from .prediction import (
    YieldFactors,
    YieldPrediction,
    PestRiskPrediction,
    IrrigationPrediction,
    HarvestPrediction,
    QualityPrediction,
    Predictions,
)
from .allocation import (
    WaterZone,
    WaterAllocation,
    FertilizerAllocation,
    LaborAllocation,
    EquipmentAllocation,
    PesticideAllocation,
    CostAnalysis,
    Allocation,
)
from .market import (
    PricePoint,
    PriceMultipliers,
    PricePrediction,
    SellingRecommendation,
    MarketRisk,
    RiskAssessment,
    MarketAnalysis,
)
from .report import Recommendation, Alert, Report, StoredRecordOut

__all__ = [
    "CropStage",
    "Location",
    "Reading",
    "DEFAULT_LOCATION",
    "STAGE_ORDER",
    "YieldFactors",
    "YieldPrediction",
    "PestRiskPrediction",
    "IrrigationPrediction",
    "HarvestPrediction",
    "QualityPrediction",
    "Predictions",
    "WaterZone",
    "WaterAllocation",
    "FertilizerAllocation",
    "LaborAllocation",
    "EquipmentAllocation",
    "PesticideAllocation",
    "CostAnalysis",
    "Allocation",
    "PricePoint",
    "PriceMultipliers",
    "PricePrediction",
    "SellingRecommendation",
    "MarketRisk",
    "RiskAssessment",
    "MarketAnalysis",
    "Recommendation",
    "Alert",
    "Report",
    "StoredRecordOut",
]

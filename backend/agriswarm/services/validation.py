# backend/agriswarm/services/validation.py
import math
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from agriswarm.core.exceptions import ComputationError, InputValidationError
from agriswarm.schemas import Predictions, Reading


def parse_reading(data: Dict[str, Any]) -> Reading:
    """Build a Reading from raw JSON (camelCase or snake_case keys)."""
    if not isinstance(data, dict):
        raise InputValidationError("reading must be a JSON object")
    try:
        return Reading.model_validate(data)
    except PydanticValidationError as exc:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise InputValidationError("invalid sensor reading", details=details) from exc


def require_reading(reading: Any) -> Reading:
    if isinstance(reading, Reading):
        return reading
    if isinstance(reading, dict):
        return parse_reading(reading)
    raise InputValidationError(f"expected a Reading, got {type(reading).__name__}")


def require_predictions(predictions: Any) -> Predictions:
    if not isinstance(predictions, Predictions):
        raise InputValidationError(f"expected Predictions, got {type(predictions).__name__}")
    return predictions


def ensure_finite(value: float, name: str) -> float:
    if value is None or not math.isfinite(value):
        raise ComputationError(f"{name} is not a finite number", details=[{"field": name, "value": str(value)}])
    return value

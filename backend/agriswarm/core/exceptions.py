"""
Error taxonomy for the advisory pipeline.

- InputValidationError: a malformed or out-of-range reading, rejected before scoring
- ComputationError: a non-finite value escaped the arithmetic (e.g. zero-mean prices)
- DependencyError: the persistence or notification sink failed; callers log and continue
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class AgriSwarmError(Exception):
    code = "agriswarm_error"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class InputValidationError(AgriSwarmError):
    code = "validation_error"


class ComputationError(AgriSwarmError):
    code = "computation_error"


class DependencyError(AgriSwarmError):
    code = "dependency_error"


def error_body(error: str, detail: Any = None) -> Dict[str, Any]:
    return {
        "error": error,
        "detail": detail,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

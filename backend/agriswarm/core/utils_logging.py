import uuid
from typing import Any, Dict


def generate_request_id() -> str:
    return str(uuid.uuid4())


def request_log_extra(scope: Dict[str, Any], **fields: Any) -> Dict[str, Any]:
    """`extra` dict for request-scoped log lines (request_id, method, path + fields)."""
    extra = {
        "request_id": scope.get("request_id"),
        "method": scope.get("method", ""),
        "path": scope.get("path", ""),
    }
    extra.update(fields)
    return extra

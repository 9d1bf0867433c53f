# backend/agriswarm/api/workflow.py

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from agriswarm.di import Container, get_container, get_workflow
from agriswarm.schemas import Report
from agriswarm.services.workflow_service import AgriSwarmWorkflow

router = APIRouter()

AGENTS = ["sensor", "prediction", "resource", "market"]


@router.get("/status")
def api_status(container: Container = Depends(get_container)) -> Dict[str, Any]:
    return {
        "status": "running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": container.settings.APP_VERSION,
        "agents": AGENTS,
        "uptime": round(time.monotonic() - container.started_at, 3),
        "history": {
            "readings": len(container.readings),
            "prices": len(container.prices),
        },
    }


@router.get("/run", response_model=Report)
def api_run(workflow: AgriSwarmWorkflow = Depends(get_workflow)):
    """Full workflow: sensor -> predictions -> resources + market -> report."""
    return workflow.run()


@router.post("/evaluate", response_model=Report)
def api_evaluate(
    payload: Dict[str, Any] = Body(...),
    workflow: AgriSwarmWorkflow = Depends(get_workflow),
):
    """
    Full workflow on a caller-supplied reading.
    Payload uses the reading field names (temperature, humidity, soilMoisture,
    rainfall, windSpeed, solarRadiation, cropStage, optional location/timestamp).
    """
    return workflow.evaluate(payload)


@router.get("/reports")
def api_reports(
    kind: Optional[str] = Query("report", description="report | reading"),
    limit: int = Query(20, ge=1, le=100),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    records = container.storage.list_records(kind=kind, limit=limit)
    return {"count": len(records), "records": [r.model_dump(mode="json") for r in records]}


@router.get("/history/prices")
def api_price_history(container: Container = Depends(get_container)) -> Dict[str, Any]:
    points = container.prices.snapshot()
    return {
        "capacity": container.prices.capacity,
        "count": len(points),
        "prices": [p.model_dump(mode="json") for p in points],
    }

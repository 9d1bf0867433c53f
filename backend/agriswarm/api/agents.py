# backend/agriswarm/api/agents.py

from fastapi import APIRouter, Depends, Query
from typing import Any, Dict

from agriswarm.di import Container, get_container, get_workflow
from agriswarm.schemas import Allocation, MarketAnalysis, Predictions, Reading
from agriswarm.services.workflow_service import AgriSwarmWorkflow

router = APIRouter()


# -------------------------------------------------------
# INDIVIDUAL AGENTS
# -------------------------------------------------------

@router.get("/sensor", response_model=Reading)
def api_sensor(workflow: AgriSwarmWorkflow = Depends(get_workflow)):
    """One fresh synthetic reading (also recorded in the readings history)."""
    return workflow.collect_reading()


@router.get("/predictions", response_model=Predictions)
def api_predictions(workflow: AgriSwarmWorkflow = Depends(get_workflow)):
    return workflow.predict()


@router.get("/resources", response_model=Allocation)
def api_resources(workflow: AgriSwarmWorkflow = Depends(get_workflow)):
    return workflow.allocate()


@router.get("/market", response_model=MarketAnalysis)
def api_market(workflow: AgriSwarmWorkflow = Depends(get_workflow)):
    return workflow.analyze_market()


@router.get("/notifications")
def api_notifications(
    limit: int = Query(50, ge=1, le=200),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    items = container.notifier.list_history(limit)
    return {"count": len(items), "notifications": items}

# backend/agriswarm/api/location.py

from fastapi import APIRouter, HTTPException

from agriswarm.schemas.location import LocationMatch, LocationQuery
from agriswarm.services.location_service import parse_location

router = APIRouter()


@router.post("/location/parse", response_model=LocationMatch)
def api_parse_location(req: LocationQuery):
    match = parse_location(req.query)
    if match is None:
        raise HTTPException(status_code=404, detail="location_not_found")
    return match

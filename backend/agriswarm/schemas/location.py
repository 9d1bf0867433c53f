from pydantic import Field

from .base import CamelModel


class LocationQuery(CamelModel):
    query: str = Field(..., min_length=1, description="Free-text place, e.g. 'my farm near Multan'")


class LocationMatch(CamelModel):
    latitude: float
    longitude: float
    place_name: str
    confidence: str
    source: str

# backend/agriswarm/services/location_service.py
from typing import Dict, Optional, Tuple

from agriswarm.schemas.location import LocationMatch

# keyword -> (latitude, longitude, display name); cities before provinces
KNOWN_LOCATIONS: Dict[str, Tuple[float, float, str]] = {
    "lahore": (31.5204, 74.3587, "Lahore, Punjab"),
    "karachi": (24.8607, 67.0011, "Karachi, Sindh"),
    "islamabad": (33.6846, 73.0479, "Islamabad"),
    "rawalpindi": (33.5651, 73.0169, "Rawalpindi, Punjab"),
    "peshawar": (34.0151, 71.5249, "Peshawar, KPK"),
    "quetta": (30.1798, 66.9750, "Quetta, Balochistan"),
    "multan": (30.1575, 71.5249, "Multan, Punjab"),
    "faisalabad": (31.4504, 73.1350, "Faisalabad, Punjab"),
    "punjab": (31.1704, 72.7097, "Punjab Province"),
    "sindh": (25.8943, 68.5247, "Sindh Province"),
    "khyber pakhtunkhwa": (34.9526, 72.3311, "Khyber Pakhtunkhwa"),
    "balochistan": (28.4907, 65.0960, "Balochistan Province"),
}


def parse_location(query: str) -> Optional[LocationMatch]:
    """First known place name contained in the query, or None."""
    text = (query or "").lower()
    for key, (lat, lon, name) in KNOWN_LOCATIONS.items():
        if key in text:
            return LocationMatch(
                latitude=lat,
                longitude=lon,
                place_name=name,
                confidence="medium",
                source="keyword_matching",
            )
    return None

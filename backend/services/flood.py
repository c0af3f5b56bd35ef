"""Flood risk bands for a coordinate pair.

Demo heuristic, not a hydrological model: the Mekong delta reads as high
risk, the Red River delta as medium, everywhere else as low.
"""

# (name, lat range, lon range, probability), checked in order
RISK_ZONES = [
    ("high", (8.0, 12.0), (104.0, 110.0), 0.85),
    ("medium", (16.0, 22.0), (105.0, 108.0), 0.55),
]
DEFAULT_RISK = ("low", 0.15)


def assess_flood_risk(lat: float, lon: float) -> dict:
    """Classify a location into a flood risk band."""
    risk, probability = DEFAULT_RISK
    for name, (lat_lo, lat_hi), (lon_lo, lon_hi), prob in RISK_ZONES:
        if lat_lo < lat < lat_hi and lon_lo < lon < lon_hi:
            risk, probability = name, prob
            break

    return {
        "flood_risk": risk,
        "probability": probability,
        "coords": {"lat": lat, "lon": lon},
    }

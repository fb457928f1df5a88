"""Distancia geográfica (haversine) entre dos coordenadas."""

import math

# Radio medio de la Tierra en km
EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Distancia great-circle en kilómetros.

    El caller debe pasar ambos pares completos y numéricos.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)

    h = math.sin(d_lat / 2) ** 2 + math.sin(d_lon / 2) ** 2 * math.cos(phi1) * math.cos(phi2)
    # El redondeo puede dejar h apenas por encima de 1 en puntos antípodas
    h = min(1.0, h)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c

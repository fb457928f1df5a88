"""
Motor de matching.

Combina criterios ponderados (precio, ciudad, distancia, tipo de espacio,
dormitorios, recencia y keywords) para rankear listings por buscador.
"""

from suitematch.matching.engine import ListingMatcher, match_listings
from suitematch.matching.geo import EARTH_RADIUS_KM, distance_km
from suitematch.matching.parallel import match_listings_sharded, split_into_shards
from suitematch.matching.text import keyword_set, normalize

__all__ = [
    # Motor
    "ListingMatcher",
    "match_listings",
    "match_listings_sharded",
    "split_into_shards",
    # Helpers
    "distance_km",
    "EARTH_RADIUS_KM",
    "normalize",
    "keyword_set",
]

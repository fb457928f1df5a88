"""
suite-match: ranking de listings de vivienda para un buscador.
"""

from suitematch.matching import ListingMatcher, match_listings, match_listings_sharded
from suitematch.models import (
    Criterion,
    Listing,
    MatchConfig,
    MatchReason,
    MatchResult,
    MatchWeights,
    SearcherProfile,
)

__version__ = "0.1.0"

__all__ = [
    "ListingMatcher",
    "match_listings",
    "match_listings_sharded",
    "SearcherProfile",
    "Listing",
    "MatchConfig",
    "MatchWeights",
    "Criterion",
    "MatchReason",
    "MatchResult",
]

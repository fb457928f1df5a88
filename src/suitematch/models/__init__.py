"""
Modelos de datos del motor.

- Entrada: SearcherProfile, Listing, MatchConfig
- Salida: MatchResult con sus MatchReason
"""

from suitematch.models.profile import SearcherProfile
from suitematch.models.listing import Listing
from suitematch.models.match import (
    Criterion,
    MatchConfig,
    MatchReason,
    MatchResult,
    MatchWeights,
)

__all__ = [
    # Entrada
    "SearcherProfile",
    "Listing",
    "MatchConfig",
    "MatchWeights",
    # Salida
    "Criterion",
    "MatchReason",
    "MatchResult",
]

"""
Matching por shards.

Cada listing se scorea de forma independiente, así que la colección
se puede partir en shards, scorear cada uno en un thread y unir los
parciales con una única pasada global de ranking. El resultado es
idéntico al de match_listings.
"""

import asyncio
import itertools
from typing import Any, Optional

import structlog

from suitematch.matching.engine import ListingMatcher, now_epoch_ms
from suitematch.models import Listing, MatchResult

logger = structlog.get_logger()


def split_into_shards(listings: list[Listing], shards: int) -> list[list[Listing]]:
    """Parte la lista en hasta `shards` bloques contiguos."""
    if not listings:
        return []
    shards = max(1, shards)
    size = -(-len(listings) // shards)
    return [listings[i : i + size] for i in range(0, len(listings), size)]


async def match_listings_sharded(
    searcher: Any,
    listings: Any,
    config: Any = None,
    *,
    shards: Optional[int] = None,
    now_ms: Optional[float] = None,
) -> list[MatchResult]:
    """
    Versión concurrente de match_listings.

    Args:
        searcher: SearcherProfile o dict
        listings: Colección de Listing o dicts
        config: MatchConfig o dict
        shards: Cantidad de shards (default: settings.default_shards)
        now_ms: Instante de referencia compartido por todos los shards

    Returns:
        Lista de MatchResult con el mismo orden que match_listings
    """
    matcher = ListingMatcher(config)

    prepared = matcher.prepare(searcher, listings)
    if prepared is None:
        return []
    profile, records = prepared

    if now_ms is None:
        now_ms = now_epoch_ms()

    chunks = split_into_shards(records, shards or matcher.settings.default_shards)
    partials = await asyncio.gather(
        *(asyncio.to_thread(matcher.score_listings, profile, chunk, now_ms) for chunk in chunks)
    )

    ranked = matcher.rank(itertools.chain.from_iterable(partials))
    logger.info(
        "Matching por shards completado",
        shards=len(chunks),
        listings=len(records),
        returned=len(ranked),
    )
    return ranked

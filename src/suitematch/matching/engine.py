"""
Motor de matching entre un buscador y listings.

Cada listing recibe un score compuesto por términos independientes:
1. Precio vs presupuesto
2. Ciudad
3. Distancia (con corte duro opcional)
4. Tipo de espacio
5. Dormitorios vs roommates
6. Recencia
7. Keywords compartidas

Luego se descartan los descalificados, se ordena y se trunca.
"""

import time
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from suitematch.config import (
    DISQUALIFICATION_PENALTY,
    EXCLUSION_THRESHOLD,
    MAX_KEYWORD_MATCHES,
    MAX_USEFUL_DISTANCE_KM,
    MS_PER_DAY,
    RECENCY_WINDOW_DAYS,
    Settings,
    get_settings,
)
from suitematch.matching.geo import distance_km
from suitematch.matching.text import keyword_set, normalize
from suitematch.models import (
    Criterion,
    Listing,
    MatchConfig,
    MatchReason,
    MatchResult,
    SearcherProfile,
)

logger = structlog.get_logger()


def now_epoch_ms() -> float:
    return time.time() * 1000


def coerce_profile(searcher: Any) -> Optional[SearcherProfile]:
    """Perfil a partir de un modelo o un dict de storage. None si no sirve."""
    if isinstance(searcher, SearcherProfile):
        return searcher
    if isinstance(searcher, Mapping):
        return SearcherProfile.model_validate(dict(searcher))
    return None


def coerce_listings(listings: Any) -> Optional[list[Listing]]:
    """
    Materializa la colección de listings.

    Devuelve None si la entrada no es una colección utilizable.
    Los registros sin un id válido se descartan con un warning.
    """
    if listings is None or isinstance(listings, (str, bytes, Mapping)):
        return None
    if not isinstance(listings, Iterable):
        return None

    records = []
    for position, item in enumerate(listings):
        if isinstance(item, Listing):
            records.append(item)
            continue
        if not isinstance(item, Mapping):
            logger.warning("Listing ignorado: no es un registro", position=position)
            continue
        try:
            records.append(Listing.model_validate(dict(item)))
        except ValidationError as e:
            logger.warning("Listing ignorado: registro inválido", position=position, error=str(e))
    return records


def coerce_config(config: Any) -> MatchConfig:
    if isinstance(config, MatchConfig):
        return config
    if isinstance(config, Mapping):
        return MatchConfig.model_validate(dict(config))
    return MatchConfig()


class ListingMatcher:
    """
    Rankea listings para un buscador.

    Stateless entre invocaciones: la configuración se fija al construir
    y cada llamada a match() es función pura de sus entradas.
    """

    def __init__(self, config: Any = None, settings: Optional[Settings] = None):
        self.config = coerce_config(config)
        self.weights = self.config.weights
        self.settings = settings or get_settings()

    def match(
        self,
        searcher: Any,
        listings: Any,
        now_ms: Optional[float] = None,
    ) -> list[MatchResult]:
        """
        Encuentra y ordena los listings para un buscador.

        Args:
            searcher: SearcherProfile o dict con sus preferencias
            listings: Colección de Listing o dicts
            now_ms: Instante de referencia para la recencia (epoch ms)

        Returns:
            Lista de MatchResult ordenada por score descendente
        """
        prepared = self.prepare(searcher, listings)
        if prepared is None:
            return []
        profile, records = prepared

        if now_ms is None:
            now_ms = now_epoch_ms()

        scored = self.score_listings(profile, records, now_ms)
        ranked = self.rank(scored)

        logger.info(
            "Matching completado",
            listings=len(records),
            excluded=sum(1 for r in scored if not self._is_kept(r)),
            returned=len(ranked),
        )
        return ranked

    def prepare(
        self,
        searcher: Any,
        listings: Any,
    ) -> Optional[tuple[SearcherProfile, list[Listing]]]:
        """
        Valida las entradas de una invocación.

        Devuelve (perfil, listings) o None si falta el perfil o la
        colección no es utilizable; en ese caso el matching da [].
        """
        profile = coerce_profile(searcher)
        if profile is None:
            logger.warning("Matching sin perfil de buscador")
            return None

        records = coerce_listings(listings)
        if records is None:
            logger.warning("Matching sin colección de listings válida", type=type(listings).__name__)
            return None

        return profile, records

    def score_listings(
        self,
        profile: SearcherProfile,
        listings: list[Listing],
        now_ms: float,
    ) -> list[MatchResult]:
        """Scorea cada listing por separado, sin filtrar ni ordenar."""
        keywords = keyword_set([*profile.questions, profile.bio])
        return [self.score_listing(profile, listing, now_ms, keywords) for listing in listings]

    def score_listing(
        self,
        profile: SearcherProfile,
        listing: Listing,
        now_ms: float,
        keywords: Optional[tuple[str, ...]] = None,
    ) -> MatchResult:
        if keywords is None:
            keywords = keyword_set([*profile.questions, profile.bio])

        reasons = (
            *self._score_price(profile, listing),
            *self._score_city(profile, listing),
            *self._score_distance(profile, listing),
            *self._score_space_type(profile, listing),
            *self._score_bedrooms(profile, listing),
            *self._score_recency(listing, now_ms),
            *self._score_keywords(keywords, listing),
        )
        score = sum(reason.points for reason in reasons)
        return MatchResult(id=listing.id, score=score, reasons=reasons)

    def rank(self, results: Iterable[MatchResult]) -> list[MatchResult]:
        """Filtra descalificados, ordena (score desc, id asc) y trunca a top_n."""
        kept = [r for r in results if self._is_kept(r)]
        kept.sort(key=lambda r: (-r.score, r.id))
        if self.config.top_n is not None:
            kept = kept[: self.config.top_n]
        return kept

    def _is_kept(self, result: MatchResult) -> bool:
        return result.score > EXCLUSION_THRESHOLD

    # Términos de scoring

    def _score_price(self, profile: SearcherProfile, listing: Listing) -> Iterator[MatchReason]:
        low, high, price = profile.min_budget, profile.max_budget, listing.price
        if low is None or high is None or price is None:
            return

        details = {"price": price, "min_budget": low, "max_budget": high}
        if low <= price <= high:
            details["within_budget"] = True
            yield MatchReason(criterion=Criterion.PRICE, points=self.weights.price, details=details)
            return

        # Cuánto se sale del rango, relativo al ancho del rango
        # (si el ancho es 0 se usa el mínimo, y si también es 0, 1)
        dist = low - price if price < low else price - high
        divisor = max(1.0, (high - low) or low or 1.0)
        penalty = min(1.0, dist / divisor)
        details.update(within_budget=False, penalty=penalty)
        yield MatchReason(
            criterion=Criterion.PRICE,
            points=-self.weights.price * penalty,
            details=details,
        )

    def _score_city(self, profile: SearcherProfile, listing: Listing) -> Iterator[MatchReason]:
        wanted = normalize(profile.preferred_city)
        city = normalize(listing.city)
        if wanted and city and wanted == city:
            yield MatchReason(criterion=Criterion.CITY, points=self.weights.city, details={"city": wanted})

    def _score_distance(self, profile: SearcherProfile, listing: Listing) -> Iterator[MatchReason]:
        origin, target = profile.coordinates, listing.coordinates
        if origin is None or target is None:
            return

        km = distance_km(origin[0], origin[1], target[0], target[1])
        dist_score = max(0.0, 1 - km / MAX_USEFUL_DISTANCE_KM)
        yield MatchReason(
            criterion=Criterion.DISTANCE,
            points=self.weights.distance * dist_score,
            details={"distance_km": km, "distance_score": dist_score},
        )

        max_km = self.config.max_distance_km
        if max_km is not None and km > max_km:
            yield MatchReason(
                criterion=Criterion.DISTANCE_CUTOFF,
                points=-DISQUALIFICATION_PENALTY,
                details={"distance_km": km, "max_distance_km": max_km},
            )

    def _score_space_type(self, profile: SearcherProfile, listing: Listing) -> Iterator[MatchReason]:
        haystack = normalize(listing.text)
        for space_type in profile.space_types:
            needle = normalize(space_type)
            if needle and needle in haystack:
                yield MatchReason(
                    criterion=Criterion.SPACE_TYPE,
                    points=self.weights.space_type,
                    details={"space_type": space_type},
                )
                return

    def _score_bedrooms(self, profile: SearcherProfile, listing: Listing) -> Iterator[MatchReason]:
        bedrooms, roommates = listing.bedrooms, profile.max_roommates
        if bedrooms is None or roommates is None:
            return

        enough = bedrooms >= max(1, roommates)
        points = self.weights.bedrooms if enough else -self.weights.bedrooms * 0.5
        yield MatchReason(
            criterion=Criterion.BEDROOMS,
            points=points,
            details={"bedrooms": bedrooms, "max_roommates": roommates, "enough": enough},
        )

    def _score_recency(self, listing: Listing, now_ms: float) -> Iterator[MatchReason]:
        if listing.created_at is None:
            return

        age_days = (now_ms - listing.created_at) / MS_PER_DAY
        recent_score = max(0.0, 1 - age_days / RECENCY_WINDOW_DAYS)
        yield MatchReason(
            criterion=Criterion.RECENCY,
            points=self.weights.recency * recent_score,
            details={"age_days": age_days, "recency_score": recent_score},
        )

    def _score_keywords(self, keywords: tuple[str, ...], listing: Listing) -> Iterator[MatchReason]:
        # Substring contra el texto del listing, no contra sus tokens
        text = listing.text.lower()
        shared = [word for word in keywords if word in text]
        if not shared:
            return

        full_credit = MAX_KEYWORD_MATCHES
        bonus = min(full_credit, len(shared)) / full_credit
        yield MatchReason(
            criterion=Criterion.KEYWORDS,
            points=self.weights.keywords * bonus,
            details={"keywords": shared[:full_credit], "shared_count": len(shared)},
        )


def match_listings(
    searcher: Any,
    listings: Any,
    config: Any = None,
    *,
    now_ms: Optional[float] = None,
) -> list[MatchResult]:
    """Atajo: ListingMatcher(config).match(searcher, listings)."""
    return ListingMatcher(config).match(searcher, listings, now_ms=now_ms)

"""
Script para correr el matching sobre archivos JSON.

Carga un perfil de buscador y una lista de listings exportados
desde storage, ejecuta el motor y muestra el ranking.

Uso:
    python -m suitematch.scripts.run_matching --profile profile.json --listings listings.json
    python -m suitematch.scripts.run_matching --profile p.json --listings l.json --top-n 10 --max-distance-km 25
    python -m suitematch.scripts.run_matching --profile p.json --listings l.json --weights w.json --json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from suitematch.config import get_settings
from suitematch.matching import match_listings, match_listings_sharded
from suitematch.models import MatchConfig, MatchResult, SearcherProfile

# Configurar logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(message)s",
    force=True,
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def _load_json(path: str):
    with Path(path).open(encoding="utf-8") as f:
        return json.load(f)


def build_config(
    weights_path: Optional[str] = None,
    top_n: Optional[int] = None,
    max_distance_km: Optional[float] = None,
) -> MatchConfig:
    """Arma la configuración desde los flags del CLI."""
    data = {}
    if weights_path:
        data["weights"] = _load_json(weights_path)
    if top_n is not None:
        data["topN"] = top_n
    if max_distance_km is not None:
        data["maxDistanceKm"] = max_distance_km
    return MatchConfig.model_validate(data)


def _print_ranking(results: list[MatchResult]):
    print("\n=== RANKING ===")
    if not results:
        print("Sin resultados.")
        return
    for position, result in enumerate(results, start=1):
        print(f"{position:>3}. {result.id}  score={result.score:.3f}")
        for text in result.reason_texts:
            print(f"       - {text}")


def run(
    profile_path: str,
    listings_path: str,
    config: MatchConfig,
    shards: Optional[int] = None,
    as_json: bool = False,
) -> int:
    profile = SearcherProfile.model_validate(_load_json(profile_path))
    listings = _load_json(listings_path)
    logger.info(
        "Iniciando matching",
        profile=profile_path,
        listings=listings_path,
        shards=shards,
    )

    if shards:
        results = asyncio.run(match_listings_sharded(profile, listings, config, shards=shards))
    else:
        results = match_listings(profile, listings, config)

    if as_json:
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
    else:
        _print_ranking(results)
    return 0


def main():
    """Entry point del script."""
    parser = argparse.ArgumentParser(
        description="Rankea listings de un JSON para el perfil de un buscador"
    )
    parser.add_argument("--profile", required=True, help="JSON con el perfil del buscador")
    parser.add_argument("--listings", required=True, help="JSON con la lista de listings")
    parser.add_argument("--weights", default=None, help="JSON con overrides de pesos")
    parser.add_argument("--top-n", type=int, default=None, help="Máximo de resultados")
    parser.add_argument(
        "--max-distance-km",
        type=float,
        default=None,
        help="Descarta listings más lejos que esta distancia",
    )
    parser.add_argument(
        "--shards",
        type=int,
        default=None,
        help="Scorea en paralelo partiendo los listings en N shards",
    )
    parser.add_argument("--json", action="store_true", help="Salida en JSON")

    args = parser.parse_args()

    try:
        config = build_config(args.weights, args.top_n, args.max_distance_km)
        exit_code = run(
            profile_path=args.profile,
            listings_path=args.listings,
            config=config,
            shards=args.shards,
            as_json=args.json,
        )
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Matching interrumpido por usuario")
        sys.exit(130)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error("No se pudieron cargar los datos de entrada", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

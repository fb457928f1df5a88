"""
Configuración centralizada del motor.
Carga variables de entorno y define las constantes del scoring.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py -> suitematch/ -> src/ -> raíz del proyecto (donde está el .env)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Configuración operativa.

    Solo contiene lo que no altera el ranking: las constantes del
    scoring están fijas al pie del módulo.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        env_prefix="SUITEMATCH_",
        case_sensitive=False,
        extra="ignore",
    )

    # Paralelismo
    default_shards: int = Field(4, ge=1, description="Shards por defecto en matching paralelo")

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()


# Constantes del scoring

# Distancia a partir de la cual el término de distancia vale 0
MAX_USEFUL_DISTANCE_KM = 50.0

# Penalización plana por superar maxDistanceKm
DISQUALIFICATION_PENALTY = 1000.0

# Resultados con score <= a este valor se descartan
EXCLUSION_THRESHOLD = -100.0

# Días en que un listing pierde todo el bonus de recencia
RECENCY_WINDOW_DAYS = 30.0

# Keywords compartidas necesarias para el bonus completo
MAX_KEYWORD_MATCHES = 3

# Milisegundos por día (createdAt viene en epoch ms)
MS_PER_DAY = 1000 * 60 * 60 * 24

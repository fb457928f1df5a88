"""
Modelos de configuración y resultado del matching.

- MatchWeights / MatchConfig: pesos por criterio y opciones de ranking
- MatchReason: anotación estructurada de cada término que sumó
- MatchResult: score compuesto de un listing
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from suitematch.models.coercion import finite_float


class Criterion(str, Enum):
    """Criterios de scoring, en orden de evaluación."""

    PRICE = "price"
    CITY = "city"
    DISTANCE = "distance"
    DISTANCE_CUTOFF = "distance_cutoff"
    SPACE_TYPE = "space_type"
    BEDROOMS = "bedrooms"
    RECENCY = "recency"
    KEYWORDS = "keywords"


class MatchWeights(BaseModel):
    """
    Multiplicadores por criterio.

    Set cerrado de claves: las desconocidas se ignoran y los valores
    no numéricos vuelven al default de esa clave.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    price: float = 5.0
    distance: float = 3.0
    city: float = 1.5
    space_type: float = Field(1.0, alias="spaceType")
    bedrooms: float = 1.0
    recency: float = 0.5
    keywords: float = 0.5

    @model_validator(mode="before")
    @classmethod
    def _drop_invalid(cls, data: Any) -> Any:
        if isinstance(data, MatchWeights):
            return data.model_dump()
        if not isinstance(data, Mapping):
            return {}
        return {key: value for key, value in data.items() if finite_float(value) is not None}


class MatchConfig(BaseModel):
    """Opciones de una invocación de matching."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    weights: MatchWeights = Field(default_factory=MatchWeights)
    max_distance_km: Optional[float] = Field(
        None, alias="maxDistanceKm", description="Corte duro de distancia en km"
    )
    top_n: Optional[int] = Field(None, alias="topN", description="Máximo de resultados")

    @field_validator("weights", mode="before")
    @classmethod
    def _coerce_weights(cls, value):
        if value is None:
            return {}
        return value

    @field_validator("max_distance_km", mode="before")
    @classmethod
    def _coerce_distance(cls, value):
        return finite_float(value)

    @field_validator("top_n", mode="before")
    @classmethod
    def _coerce_top_n(cls, value):
        # 0, negativos y no enteros equivalen a "sin límite"
        number = finite_float(value)
        if number is None or number < 1 or not number.is_integer():
            return None
        return int(number)


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


class MatchReason(BaseModel):
    """
    Anotación de un término del score.

    `points` es el aporte exacto al score; `details` guarda los valores
    crudos que lo produjeron (de solo lectura). El texto legible se arma en render().
    """

    model_config = ConfigDict(frozen=True)

    criterion: Criterion
    points: float
    details: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator("details")
    @classmethod
    def _freeze_details(cls, value):
        # Solo lectura: las listas pasan a tuplas
        return MappingProxyType(
            {key: tuple(item) if isinstance(item, list) else item for key, item in value.items()}
        )

    @field_serializer("details")
    def _dump_details(self, value):
        return dict(value)

    def render(self) -> str:
        d = self.details
        if self.criterion is Criterion.PRICE:
            if d.get("within_budget"):
                return f"precio dentro del presupuesto: ${_fmt(d['price'])}"
            return f"precio fuera del presupuesto: ${_fmt(d['price'])}"
        if self.criterion is Criterion.CITY:
            return f"misma ciudad: {d['city']}"
        if self.criterion is Criterion.DISTANCE:
            return f"distancia {d['distance_km']:.1f} km"
        if self.criterion is Criterion.DISTANCE_CUTOFF:
            return f"fuera de la distancia máxima {_fmt(d['max_distance_km'])} km"
        if self.criterion is Criterion.SPACE_TYPE:
            return f"tipo de espacio: {d['space_type']}"
        if self.criterion is Criterion.BEDROOMS:
            if d.get("enough"):
                return f"dormitorios {d['bedrooms']} >= roommates {d['max_roommates']}"
            return f"dormitorios insuficientes: {d['bedrooms']}"
        if self.criterion is Criterion.RECENCY:
            return f"publicado hace {d['age_days']:.1f} días"
        return f"keywords compartidas: {', '.join(d['keywords'])}"

    def __str__(self) -> str:
        return self.render()


class MatchResult(BaseModel):
    """Score compuesto de un listing para un buscador."""

    model_config = ConfigDict(frozen=True)

    id: str
    score: float
    reasons: tuple[MatchReason, ...] = ()

    @property
    def reason_texts(self) -> list[str]:
        return [reason.render() for reason in self.reasons]

    def to_dict(self) -> dict:
        """Forma plana que consume la pantalla de búsqueda."""
        return {"id": self.id, "score": self.score, "reasons": self.reason_texts}

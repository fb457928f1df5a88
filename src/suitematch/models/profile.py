"""
Modelo del perfil del buscador.

Contiene solo las preferencias de vivienda que usa el motor
de matching; identidad y relaciones quedan fuera.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from suitematch.models.coercion import finite_float, non_negative_int, optional_str


class SearcherProfile(BaseModel):
    """
    Preferencias del buscador, ya resueltas desde storage.

    Todos los campos son opcionales: si falta un dato, el criterio
    que lo usa no aporta al score.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    # Presupuesto
    min_budget: Optional[float] = Field(None, alias="minBudget", description="Presupuesto mínimo mensual")
    max_budget: Optional[float] = Field(None, alias="maxBudget", description="Presupuesto máximo mensual")

    # Ubicación
    preferred_city: Optional[str] = Field(None, alias="preferredCity")
    preferred_latitude: Optional[float] = Field(None, alias="preferredLatitude")
    preferred_longitude: Optional[float] = Field(None, alias="preferredLongitude")

    # Tipo de espacio: un token o varios (la app permite elegir más de uno)
    space_type: Optional[Union[str, list[str]]] = Field(None, alias="spaceType")

    # Capacidad
    max_roommates: Optional[int] = Field(None, alias="maxRoommates", description="Cantidad de roommates buscada")

    # Texto libre para keywords
    bio: str = Field(default="")
    questions: list[str] = Field(default_factory=list)

    @field_validator(
        "min_budget",
        "max_budget",
        "preferred_latitude",
        "preferred_longitude",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, value):
        return finite_float(value)

    @field_validator("max_roommates", mode="before")
    @classmethod
    def _coerce_roommates(cls, value):
        return non_negative_int(value)

    @field_validator("preferred_city", mode="before")
    @classmethod
    def _coerce_city(cls, value):
        return optional_str(value)

    @field_validator("space_type", mode="before")
    @classmethod
    def _coerce_space_type(cls, value):
        if isinstance(value, (list, tuple)):
            return [item for item in value if isinstance(item, str)]
        return optional_str(value)

    @field_validator("bio", mode="before")
    @classmethod
    def _coerce_bio(cls, value):
        return value if isinstance(value, str) else ""

    @field_validator("questions", mode="before")
    @classmethod
    def _coerce_questions(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        return [item for item in value if isinstance(item, str)]

    @property
    def has_budget(self) -> bool:
        return self.min_budget is not None and self.max_budget is not None

    @property
    def coordinates(self) -> Optional[tuple[float, float]]:
        """(lat, lon) si el par está completo."""
        if self.preferred_latitude is None or self.preferred_longitude is None:
            return None
        return self.preferred_latitude, self.preferred_longitude

    @property
    def space_types(self) -> list[str]:
        if self.space_type is None:
            return []
        if isinstance(self.space_type, str):
            return [self.space_type]
        return list(self.space_type)

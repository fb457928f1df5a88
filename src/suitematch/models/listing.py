"""
Modelo de Listing para el motor de matching.

Representa una unidad/habitación publicada por un propietario,
con los campos que participan del scoring.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from suitematch.models.coercion import epoch_ms, finite_float, non_negative_int, optional_str


class Listing(BaseModel):
    """Listing candidato a rankear contra un buscador."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    # Identificación (desempate y identidad del resultado)
    id: str = Field(..., description="ID único del listing")

    # Precio mensual
    price: Optional[float] = Field(None, description="Precio mensual")

    # Ubicación
    city: Optional[str] = Field(None)
    latitude: Optional[float] = Field(None)
    longitude: Optional[float] = Field(None)

    # Características
    bedrooms: Optional[int] = Field(None, description="Cantidad de dormitorios")

    # Contenido textual
    title: str = Field(default="")
    description: str = Field(default="")

    # Metadatos
    created_at: Optional[float] = Field(None, alias="createdAt", description="Epoch en milisegundos")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # IDs numéricos de la base se comparan como string
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("price", "latitude", "longitude", mode="before")
    @classmethod
    def _coerce_number(cls, value):
        return finite_float(value)

    @field_validator("bedrooms", mode="before")
    @classmethod
    def _coerce_bedrooms(cls, value):
        return non_negative_int(value)

    @field_validator("city", mode="before")
    @classmethod
    def _coerce_city(cls, value):
        return optional_str(value)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return value if isinstance(value, str) else ""

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_created_at(cls, value):
        return epoch_ms(value)

    @property
    def coordinates(self) -> Optional[tuple[float, float]]:
        """(lat, lon) si el par está completo."""
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude

    @property
    def text(self) -> str:
        """Título + descripción, tal como se compara contra keywords."""
        return f"{self.title} {self.description}"

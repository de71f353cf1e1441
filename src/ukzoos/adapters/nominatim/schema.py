"""Pydantic models describing the Nominatim search payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, RootModel


class NominatimBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NominatimPlace(NominatimBaseModel):
    # Nominatim serialises coordinates as strings; pydantic coerces them.
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)
    display_name: str | None = None


class NominatimSearchResponse(RootModel[list[NominatimPlace]]):
    @property
    def first(self) -> NominatimPlace | None:
        return self.root[0] if self.root else None

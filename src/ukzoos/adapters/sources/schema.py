"""Pydantic models describing the raw zoo listings produced by the scrapers.

Keys follow the scraper output (``city``, ``county``, ``website``, ``wikiUrl``)
but the domain spellings are accepted too.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SourceBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawZooPayload(SourceBaseModel):
    name: str = ""
    locality: str | None = Field(default=None, validation_alias=AliasChoices("locality", "city"))
    region: str | None = Field(default=None, validation_alias=AliasChoices("region", "county"))
    homepage: str | None = Field(
        default=None,
        validation_alias=AliasChoices("homepage", "website", "website_url", "websiteUrl"),
    )
    external_ref: str | None = Field(
        default=None,
        validation_alias=AliasChoices("external_ref", "wikiUrl", "wiki_url"),
    )
    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float | None = Field(
        default=None,
        validation_alias=AliasChoices("longitude", "lon", "lng"),
    )

    @field_validator("name", mode="before")
    @classmethod
    def _name_none_to_blank(cls, value: object) -> object:
        return "" if value is None else value

    _normalize_optional = field_validator(
        "locality",
        "region",
        "homepage",
        "external_ref",
        "latitude",
        "longitude",
        mode="before",
    )(_blank_to_none)


class SourceDocument(SourceBaseModel):
    """A whole source file: either a bare list of zoos or ``{"zoos": [...]}``."""

    zoos: list[object] = Field(default_factory=list[object])

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, value: object) -> object:
        if isinstance(value, list):
            return {"zoos": value}
        if isinstance(value, Mapping):
            return cast(Mapping[str, object], value)
        return value

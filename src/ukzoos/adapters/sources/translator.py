"""Translate source payloads into domain records."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

from ukzoos.domain.model import Coordinates, RawZoo

if TYPE_CHECKING:
    from ukzoos.domain.model import SourceTag

    from .schema import RawZooPayload

log = getLogger(__name__)

_REFERENCE_MARKER = re.compile(r"\[[^\]]*\]")
_DECORATIONS = str.maketrans({"†": None, "‡": None, "*": None})

_IRISH_LOCATIONS: Final[tuple[str, ...]] = (
    "dublin", "cork", "galway", "limerick", "waterford", "kilkenny",
    "wexford", "kerry", "clare", "mayo", "donegal", "sligo", "louth",
    "meath", "wicklow", "kildare", "laois", "offaly", "westmeath",
    "longford", "roscommon", "leitrim", "cavan", "monaghan", "tipperary",
    "carlow", "killarney", "fota", "republic of ireland",
)  # fmt: skip
_NORTHERN_IRISH_LOCATIONS: Final[tuple[str, ...]] = (
    "belfast", "derry", "londonderry", "antrim", "armagh", "down",
    "fermanagh", "tyrone", "northern ireland",
)  # fmt: skip


def clean_zoo_name(name: str) -> str:
    """Strip wiki reference markers ("[1]") and decorative symbols."""

    text = _REFERENCE_MARKER.sub("", name).translate(_DECORATIONS)
    return " ".join(text.split())


def _place_pattern(places: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(map(re.escape, places)) + r")\b")


_IRISH_PATTERN = _place_pattern(_IRISH_LOCATIONS)
_NORTHERN_IRISH_PATTERN = _place_pattern(_NORTHERN_IRISH_LOCATIONS)


def is_irish_location(name: str, region: str | None = None) -> bool:
    """True for Republic of Ireland members; Northern Ireland counts as UK.

    Place names match as whole words so that e.g. "Louthwood" is not read as
    County Louth.
    """

    text = f"{name} {region or ''}".casefold()
    if _NORTHERN_IRISH_PATTERN.search(text):
        return False
    return _IRISH_PATTERN.search(text) is not None


def translate_payload(payload: RawZooPayload, *, source: SourceTag) -> RawZoo:
    return RawZoo(
        name=clean_zoo_name(payload.name),
        source=source,
        locality=payload.locality,
        region=payload.region,
        homepage=payload.homepage,
        external_ref=payload.external_ref,
        coordinates=_coordinates(payload),
    )


def _coordinates(payload: RawZooPayload) -> Coordinates | None:
    if payload.latitude is None or payload.longitude is None:
        return None
    try:
        return Coordinates(lat=payload.latitude, lon=payload.longitude)
    except ValueError:
        log.warning(
            "Ignoring out-of-range coordinates for %r: %s, %s",
            payload.name,
            payload.latitude,
            payload.longitude,
        )
        return None

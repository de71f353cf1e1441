"""Name normalization for zoo matching.

Keys produced here are only used for lookups; canonical zoos keep the original
casing of their best name.
"""

from __future__ import annotations

from typing import Final

DESCRIPTOR_SUFFIXES: Final[tuple[tuple[str, ...], ...]] = (
    ("sea", "life", "centre"),
    ("sea", "life", "center"),
    ("safari", "park"),
    ("wildlife", "park"),
    ("animal", "park"),
    ("aquarium",),
    ("zoo",),
)

# Vary between sources for the same place ("Manor House" vs "Manor").
NOISE_WORDS: Final[frozenset[str]] = frozenset({"house", "wild"})

# Operator abbreviations seen in front of zoo names ("ZSL London Zoo", "BZS Bristol Zoo").
LEADING_PREFIXES: Final[frozenset[str]] = frozenset({"the", "zsl", "rzss", "wwt", "bzs", "rzs"})
_LEADING_SEPARATORS: Final[frozenset[str]] = frozenset({"-", "–", "—", ":", "|"})

_APOSTROPHES = str.maketrans({"‘": "'", "’": "'", "ʼ": "'", "`": "'"})


def normalize_name(raw: str) -> str:
    """Return the lookup key for a free-text zoo name.

    Stripping rules are applied until nothing changes, so the function is
    idempotent. A rule that would leave nothing behind is not applied.
    """

    text = _collapse_whitespace(raw.translate(_APOSTROPHES).casefold())

    previous: str | None = None
    while text != previous:
        previous = text
        text = _strip_descriptor_suffix(text)
        text = _drop_noise_words(text)
        text = _strip_leading_prefix(text)
    return text


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def _strip_descriptor_suffix(text: str) -> str:
    tokens = text.split()
    for suffix in DESCRIPTOR_SUFFIXES:
        size = len(suffix)
        if len(tokens) > size and tuple(tokens[-size:]) == suffix:
            return " ".join(tokens[:-size])
    return text


def _drop_noise_words(text: str) -> str:
    tokens = text.split()
    kept = [token for token in tokens if token not in NOISE_WORDS]
    if not kept or len(kept) == len(tokens):
        return text
    return " ".join(kept)


def _strip_leading_prefix(text: str) -> str:
    tokens = text.split()
    if len(tokens) > 1 and (tokens[0] in LEADING_PREFIXES or tokens[0] in _LEADING_SEPARATORS):
        return " ".join(tokens[1:])
    return text

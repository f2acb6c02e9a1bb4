"""Structural tag utilities.

Thoughts may carry a legacy "structure" tag naming the sermon part they belong to. Tags come
in English, Russian and Ukrainian spellings and in a few short forms; this module folds them
onto one canonical token per section. Adding a locale only touches ``_STRUCTURE_TAG_ALIASES``.
"""

from __future__ import annotations

from typing import Literal, Optional

from sermonweaver.models.structure import Section

CanonicalTag = Literal["intro", "main", "conclusion"]

_STRUCTURE_TAG_ALIASES: dict[CanonicalTag, tuple[str, ...]] = {
    "intro": ("intro", "introduction", "вступление", "введение", "вступ"),
    "main": ("main", "main part", "основная часть", "основная", "основна частина", "основна"),
    "conclusion": ("conclusion", "заключение", "висновок", "висновки"),
}

_ALIAS_TO_CANONICAL: dict[str, CanonicalTag] = {
    alias: canonical for canonical, aliases in _STRUCTURE_TAG_ALIASES.items() for alias in aliases
}

_CANONICAL_TO_SECTION: dict[CanonicalTag, Section] = {
    "intro": Section.INTRODUCTION,
    "main": Section.MAIN,
    "conclusion": Section.CONCLUSION,
}

_SECTION_TO_CANONICAL: dict[Section, CanonicalTag] = {
    section: canonical for canonical, section in _CANONICAL_TO_SECTION.items()
}


def normalize_structure_tag(tag: str | None) -> Optional[CanonicalTag]:
    """Map a raw tag to its canonical token.

    Matching is case-insensitive and ignores surrounding whitespace. Returns ``None`` for
    custom (non-structural) tags.
    """

    if not tag:
        return None
    return _ALIAS_TO_CANONICAL.get(tag.strip().lower())


def is_structure_tag(tag: str | None) -> bool:
    return normalize_structure_tag(tag) is not None


def section_for_canonical_tag(tag: str | None) -> Optional[Section]:
    """Section for a canonical token (``intro`` -> introduction)."""

    if not tag:
        return None
    return _CANONICAL_TO_SECTION.get(tag)  # type: ignore[arg-type]


def canonical_tag_for_section(section: Section | str) -> Optional[CanonicalTag]:
    """Canonical structural tag for a section; ``None`` for ambiguous."""

    return _SECTION_TO_CANONICAL.get(Section(section))

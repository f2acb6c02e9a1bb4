"""Tests for structural tag utilities."""

from __future__ import annotations

import pytest

from sermonweaver.models import Section
from sermonweaver.utils.tags import (
    canonical_tag_for_section,
    is_structure_tag,
    normalize_structure_tag,
    section_for_canonical_tag,
)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("intro", "intro"),
        ("Introduction", "intro"),
        ("Вступление", "intro"),
        ("вступ", "intro"),
        ("Main", "main"),
        ("Main Part", "main"),
        ("Основная часть", "main"),
        ("  основна частина ", "main"),
        ("Conclusion", "conclusion"),
        ("Заключение", "conclusion"),
        ("висновок", "conclusion"),
    ],
)
def test_normalize_structure_tag_aliases(tag: str, expected: str) -> None:
    """It should fold localized and short forms onto one canonical token."""

    assert normalize_structure_tag(tag) == expected


@pytest.mark.parametrize("tag", ["important", "quote", "application", "", None])
def test_custom_tags_are_not_structural(tag: str | None) -> None:
    """It should return None for tags that name no section."""

    assert normalize_structure_tag(tag) is None
    assert is_structure_tag(tag) is False


def test_canonical_tag_section_mapping() -> None:
    """It should map canonical tokens and sections both ways."""

    assert section_for_canonical_tag("intro") is Section.INTRODUCTION
    assert section_for_canonical_tag("unknown") is None
    assert canonical_tag_for_section("main") == "main"
    assert canonical_tag_for_section(Section.CONCLUSION) == "conclusion"
    assert canonical_tag_for_section(Section.AMBIGUOUS) is None

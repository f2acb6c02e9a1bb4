"""Tests for incremental structure edits."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from conftest import make_outline, make_thought

from sermonweaver.models import Section, Sermon, Structure
from sermonweaver.ordering import (
    OutlinePointMismatchError,
    ThoughtNotFoundError,
    build_structure_from_sections,
    canonicalize_structure,
    insert_thought_id_in_structure,
    move_thought,
)


def test_insert_after_last_same_point_sibling() -> None:
    """It should insert right after the last id sharing the outline point."""

    thoughts_by_id = {
        "2": make_thought("2", outline_point_id="p2"),
        "4": make_thought("4", outline_point_id="p4"),
    }
    result = insert_thought_id_in_structure(
        {"main": ["2", "4"]},
        "main",
        "7",
        outline_point_id="p2",
        thoughts_by_id=thoughts_by_id,
    )
    assert result.main == ["2", "7", "4"]


def test_insert_appends_without_sibling_or_point() -> None:
    """It should append when no sibling shares the point or no point is given."""

    thoughts_by_id = {"2": make_thought("2", outline_point_id="p2")}
    with_point = insert_thought_id_in_structure(
        {"main": ["2"]}, "main", "7", outline_point_id="p9", thoughts_by_id=thoughts_by_id
    )
    without_point = insert_thought_id_in_structure({"main": ["7", "2"]}, "main", "7")
    assert with_point.main == ["2", "7"]
    assert without_point.main == ["2", "7"]


def test_insert_removes_id_from_other_sections() -> None:
    """It should leave the id only in the target section."""

    result = insert_thought_id_in_structure(
        '{"introduction": ["7", "1"], "ambiguous": ["7"], "main": ["2"]}',
        Section.CONCLUSION,
        "7",
    )
    assert result == Structure(introduction=["1"], main=["2"], conclusion=["7"])


def test_insert_does_not_mutate_input() -> None:
    """It should return a new structure."""

    original = Structure(main=["2", "4"], ambiguous=["7"])
    insert_thought_id_in_structure(original, "main", "7")
    assert original == Structure(main=["2", "4"], ambiguous=["7"])


def test_insert_with_thoughts_canonicalizes() -> None:
    """It should canonicalize the result when the thought list is given."""

    thoughts = [
        make_thought("2", outline_point_id="p2"),
        make_thought("4", outline_point_id="p4"),
        make_thought("7", outline_point_id="p2"),
    ]
    result = insert_thought_id_in_structure(
        {"main": ["4", "2", "gone"]},
        "main",
        "7",
        outline_point_id="p2",
        thoughts=thoughts,
        outline=make_outline(main=["p2", "p4"]),
    )
    assert result == Structure(main=["2", "7", "4"])


def test_move_into_outline_point(sample_sermon: Sermon) -> None:
    """It should attach the thought to the point and tag it for the section."""

    result = move_thought(sample_sermon, "5", "main", "p3")
    assert result.structure.main == ["4", "2", "3", "5"]
    assert result.structure.ambiguous == []
    assert result.thought.outline_point_id == "p3"
    assert result.thought.tags == ["main"]


def test_move_across_sections_clears_foreign_point(sample_sermon: Sermon) -> None:
    """It should drop an outline point that belongs to another section."""

    result = move_thought(sample_sermon, "2", Section.INTRODUCTION)
    assert result.thought.outline_point_id is None
    assert result.thought.tags == ["intro"]
    assert result.structure.introduction == ["1", "2"]
    assert result.structure.main == ["4", "3"]


def test_move_within_section_keeps_point(sample_sermon: Sermon) -> None:
    """It should keep the current point and replace localized structure tags."""

    result = move_thought(sample_sermon, "4", "main")
    assert result.thought.outline_point_id == "p2"
    assert result.thought.tags == ["main"]
    assert result.structure.main == ["2", "4", "3"]


def test_move_to_ambiguous_keeps_custom_tags() -> None:
    """It should strip structure tags and keep custom ones."""

    sermon = Sermon(
        thoughts=[make_thought("x", tags=["quote", "Заключение"], outline_point_id="c1")],
        structure={"conclusion": ["x"]},
        outline=make_outline(conclusion=["c1"]),
    )
    result = move_thought(sermon, "x", "ambiguous")
    assert result.thought.tags == ["quote"]
    assert result.thought.outline_point_id is None
    assert result.structure == Structure(ambiguous=["x"])


def test_move_result_survives_canonicalization(sample_sermon: Sermon) -> None:
    """It should produce metadata the canonicalizer agrees with."""

    for thought_id, section, point in [("5", "main", "p3"), ("2", "introduction", None), ("7", "ambiguous", None)]:
        result = move_thought(sample_sermon, thought_id, section, point)
        thoughts = [result.thought if t.id == thought_id else t for t in sample_sermon.thoughts]
        moved = sample_sermon.model_copy(update={"thoughts": thoughts, "structure": result.structure})
        canonical = canonicalize_structure(moved)
        stored = result.structure.ids(section)
        assert thought_id in canonical.ids(section)
        assert canonical.ids(section)[: len(stored)] == stored


def test_move_explicit_point_must_match_section(sample_sermon: Sermon) -> None:
    """It should reject an outline point from another section."""

    with pytest.raises(OutlinePointMismatchError):
        move_thought(sample_sermon, "5", "introduction", "p2")


def test_move_unknown_thought(sample_sermon: Sermon) -> None:
    """It should raise for a thought that is not in the sermon."""

    with pytest.raises(ThoughtNotFoundError):
        move_thought(sample_sermon, "missing", "main")


@dataclass
class _Item:
    id: str


def test_build_structure_from_sections() -> None:
    """It should drop local ids, duplicates and unknown sections."""

    result = build_structure_from_sections(
        {
            "introduction": ["a", "local-123", "a"],
            "main": [_Item("b"), _Item("c")],
            "bogus": ["x"],
        }
    )
    assert result == Structure(introduction=["a"], main=["b", "c"])

"""Shared builders for ordering tests."""

from __future__ import annotations

import pytest

from sermonweaver.models import Outline, OutlinePoint, Sermon, Thought


def make_thought(
    thought_id: str,
    *,
    date: str = "2024-01-01T10:00:00Z",
    tags: list[str] | None = None,
    outline_point_id: str | None = None,
) -> Thought:
    return Thought(
        id=thought_id,
        text=f"Thought {thought_id}",
        tags=list(tags or []),
        date=date,
        outline_point_id=outline_point_id,
    )


def make_outline(
    introduction: list[str] | None = None,
    main: list[str] | None = None,
    conclusion: list[str] | None = None,
) -> Outline:
    def points(ids: list[str] | None) -> list[OutlinePoint]:
        return [OutlinePoint(id=i, text=f"Point {i}") for i in ids or []]

    return Outline(introduction=points(introduction), main=points(main), conclusion=points(conclusion))


@pytest.fixture()
def sample_sermon() -> Sermon:
    """A sermon mixing every section signal."""

    outline = make_outline(introduction=["p1"], main=["p2", "p3"], conclusion=["p4"])
    thoughts = [
        make_thought("1", date="2024-01-01T09:00:00Z", tags=["Вступление"]),
        make_thought("2", date="2024-01-01T10:00:00Z", outline_point_id="p2"),
        make_thought("3", date="2024-01-01T11:00:00Z", outline_point_id="p3"),
        make_thought("4", date="2024-01-01T12:00:00Z", tags=["Основна частина"], outline_point_id="p2"),
        make_thought("5", date="2024-01-01T08:00:00Z"),
        make_thought("6", date="2024-01-01T13:00:00Z"),
        make_thought("7", date="2024-01-01T14:00:00Z", tags=["conclusion"]),
    ]
    structure = {
        "introduction": ["1"],
        "main": ["4", "2", "3"],
        "conclusion": ["7"],
        "ambiguous": [],
    }
    return Sermon(id="s1", thoughts=thoughts, structure=structure, outline=outline)

"""Outline models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from sermonweaver.models.structure import Section


class OutlinePoint(BaseModel):
    """An ordered sub-heading inside one outline section."""

    id: str
    text: str = ""


class Outline(BaseModel):
    """A sermon outline.

    Order of each list is significant: it is the print order of thought groups within the
    section.
    """

    introduction: list[OutlinePoint] = Field(default_factory=list)
    main: list[OutlinePoint] = Field(default_factory=list)
    conclusion: list[OutlinePoint] = Field(default_factory=list)

    def points(self, section: Section | str) -> list[OutlinePoint]:
        """Return outline points of a section (ambiguous has none)."""

        section = Section(section)
        if section is Section.AMBIGUOUS:
            return []
        return getattr(self, section.value)

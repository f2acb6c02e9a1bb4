"""Section and structure models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Section(str, Enum):
    """Top-level sermon buckets."""

    INTRODUCTION = "introduction"
    MAIN = "main"
    CONCLUSION = "conclusion"
    AMBIGUOUS = "ambiguous"


SECTION_ORDER: tuple[Section, ...] = (
    Section.INTRODUCTION,
    Section.MAIN,
    Section.CONCLUSION,
    Section.AMBIGUOUS,
)

# Sections that carry outline points.
OUTLINE_SECTIONS: tuple[Section, ...] = (
    Section.INTRODUCTION,
    Section.MAIN,
    Section.CONCLUSION,
)


class Structure(BaseModel):
    """Per-section ordered thought ids (a.k.a. ``thoughtsBySection``).

    This is an ordering cache, not ground truth: it may be stale, list ids under the wrong
    section or reference deleted thoughts.
    """

    introduction: list[str] = Field(default_factory=list)
    main: list[str] = Field(default_factory=list)
    conclusion: list[str] = Field(default_factory=list)
    ambiguous: list[str] = Field(default_factory=list)

    def ids(self, section: Section | str) -> list[str]:
        """Return the id list for a section."""

        return getattr(self, Section(section).value)

    def with_section(self, section: Section | str, ids: list[str]) -> "Structure":
        """Return a copy with one section replaced."""

        return self.model_copy(update={Section(section).value: list(ids)})

    def all_ids(self) -> list[str]:
        out: list[str] = []
        for section in SECTION_ORDER:
            out.extend(self.ids(section))
        return out

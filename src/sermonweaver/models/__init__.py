"""Pydantic models used across the project."""

from __future__ import annotations

from sermonweaver.models.outline import Outline, OutlinePoint
from sermonweaver.models.sermon import RawStructure, Sermon
from sermonweaver.models.structure import OUTLINE_SECTIONS, SECTION_ORDER, Section, Structure
from sermonweaver.models.thought import Thought

__all__ = [
    "OUTLINE_SECTIONS",
    "Outline",
    "OutlinePoint",
    "RawStructure",
    "SECTION_ORDER",
    "Section",
    "Sermon",
    "Structure",
    "Thought",
]

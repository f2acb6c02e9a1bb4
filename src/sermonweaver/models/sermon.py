"""Sermon snapshot model."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from sermonweaver.models.outline import Outline
from sermonweaver.models.structure import Structure
from sermonweaver.models.thought import Thought

# A stored structure as it arrives from persistence: parsed, a loose mapping or JSON text.
RawStructure = Union[Structure, dict[str, Any], str, None]


class Sermon(BaseModel):
    """The slice of a sermon the ordering core works on."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str | None = None
    thoughts: list[Thought] = Field(default_factory=list)
    structure: RawStructure = None
    thoughts_by_section: RawStructure = Field(default=None, alias="thoughtsBySection")
    outline: Outline | None = None

    def raw_structure(self) -> RawStructure:
        """Stored structure, falling back to the legacy ``thoughtsBySection`` field."""

        if self.structure is not None:
            return self.structure
        return self.thoughts_by_section

    def thoughts_by_id(self) -> dict[str, Thought]:
        """Thoughts keyed by id; the first record wins on duplicate ids."""

        out: dict[str, Thought] = {}
        for thought in self.thoughts:
            out.setdefault(thought.id, thought)
        return out

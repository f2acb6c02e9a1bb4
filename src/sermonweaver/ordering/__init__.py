"""Thought ordering core.

Pure functions reconciling outline points, structural tags and stored structures into one
deterministic order per sermon section. Nothing here performs I/O.
"""

from __future__ import annotations

from sermonweaver.ordering.ai_merge import SectionOrderResult, apply_section_order, apply_thought_assignments
from sermonweaver.ordering.canonicalizer import canonicalize_structure
from sermonweaver.ordering.mutator import (
    UNSET,
    MoveResult,
    OutlinePointMismatchError,
    ThoughtNotFoundError,
    build_structure_from_sections,
    insert_thought_id_in_structure,
    move_thought,
)
from sermonweaver.ordering.normalizer import StructureParseError, is_structure_changed, normalize_structure
from sermonweaver.ordering.projector import (
    get_preach_ordered_thoughts,
    get_preach_ordered_thoughts_by_section,
    get_thoughts_for_outline_point,
)
from sermonweaver.ordering.resolvers import (
    assign_section,
    find_thought_section_in_structure,
    resolve_section_for_new_thought,
    resolve_section_from_outline,
    resolve_section_from_tags,
)

__all__ = [
    "UNSET",
    "MoveResult",
    "OutlinePointMismatchError",
    "SectionOrderResult",
    "StructureParseError",
    "ThoughtNotFoundError",
    "apply_section_order",
    "apply_thought_assignments",
    "assign_section",
    "build_structure_from_sections",
    "canonicalize_structure",
    "find_thought_section_in_structure",
    "get_preach_ordered_thoughts",
    "get_preach_ordered_thoughts_by_section",
    "get_thoughts_for_outline_point",
    "insert_thought_id_in_structure",
    "is_structure_changed",
    "move_thought",
    "normalize_structure",
    "resolve_section_for_new_thought",
    "resolve_section_from_outline",
    "resolve_section_from_tags",
]

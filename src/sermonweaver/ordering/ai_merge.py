"""Merge an AI-sorting proposal back into a structure.

The sorting collaborator proposes an order (and optionally outline point assignments) for
one section. Only ids already in that section are reordered; ids the proposal leaves out
keep their previous relative order after the proposed ones.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Literal

from sermonweaver.logging import get_logger
from sermonweaver.models.sermon import RawStructure
from sermonweaver.models.structure import Section, Structure
from sermonweaver.models.thought import Thought
from sermonweaver.ordering.normalizer import normalize_structure
from sermonweaver.utils.ids import dedupe_ids

logger = get_logger(__name__)

ChangeType = Literal["assigned", "moved"]


@dataclass(frozen=True)
class SectionOrderResult:
    structure: Structure
    # thought id -> kind of change, for highlighting in a review UI
    changes: dict[str, ChangeType] = field(default_factory=dict)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)


def apply_section_order(
    structure: RawStructure,
    section: Section | str,
    proposed: Iterable[str],
    *,
    thoughts: Iterable[Thought] | None = None,
    assignments: Mapping[str, str] | None = None,
) -> SectionOrderResult:
    """Apply a proposed order to one section.

    Args:
        structure: Current stored structure.
        section: Section the proposal is for.
        proposed: Proposed id order; ids not currently in the section are ignored.
        thoughts: Sermon thoughts, needed to detect new outline point assignments.
        assignments: Proposed ``thought id -> outline point id`` mapping.

    Returns:
        The merged structure and per-thought change kinds. A thought counts as
        ``assigned`` when it had no outline point and the proposal gives it one, else as
        ``moved`` when its index changed.
    """

    section = Section(section)
    normalized = normalize_structure(structure)
    current = normalized.ids(section)
    present = set(current)

    proposed = list(proposed)
    sorted_ids = dedupe_ids(i for i in proposed if i in present)
    if len(sorted_ids) < len(set(proposed)):
        logger.debug("Ignoring %d proposed ids outside %s", len(set(proposed)) - len(sorted_ids), section.value)
    seen = set(sorted_ids)
    merged = sorted_ids + [i for i in current if i not in seen]

    previous_index = {thought_id: i for i, thought_id in enumerate(current)}
    current_points = {t.id: t.outline_point_id for t in thoughts or ()}
    changes: dict[str, ChangeType] = {}
    for index, thought_id in enumerate(merged):
        if assignments and assignments.get(thought_id) and not current_points.get(thought_id):
            changes[thought_id] = "assigned"
        elif previous_index[thought_id] != index:
            changes[thought_id] = "moved"

    logger.debug("AI order for %s: %d changes", section.value, len(changes))
    return SectionOrderResult(structure=normalized.with_section(section, merged), changes=changes)


def apply_thought_assignments(thoughts: Iterable[Thought], assignments: Mapping[str, str]) -> list[Thought]:
    """Updated copies of the thoughts whose outline point the proposal changes."""

    updated: list[Thought] = []
    for thought in thoughts:
        point_id = assignments.get(thought.id)
        if point_id and point_id != thought.outline_point_id:
            updated.append(thought.model_copy(update={"outline_point_id": point_id}))
    return updated

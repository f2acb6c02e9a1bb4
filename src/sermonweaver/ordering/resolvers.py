"""Section resolution for individual thoughts.

Three independent signals may place a thought: an outline point assignment, a structural
tag and the stored structure. Section *membership* is decided from the first two only:

1. the section owning ``outline_point_id``;
2. the single section implied by the thought's structural tags;
3. otherwise ``ambiguous``.
"""

from __future__ import annotations

from typing import Iterable, Optional

from sermonweaver.logging import get_logger
from sermonweaver.models.outline import Outline
from sermonweaver.models.sermon import RawStructure, Sermon
from sermonweaver.models.structure import OUTLINE_SECTIONS, SECTION_ORDER, Section
from sermonweaver.models.thought import Thought
from sermonweaver.ordering.normalizer import normalize_structure
from sermonweaver.utils.tags import normalize_structure_tag, section_for_canonical_tag

logger = get_logger(__name__)


def resolve_section_from_outline(outline: Outline | None, outline_point_id: str | None) -> Optional[Section]:
    """Return the section owning an outline point, or ``None`` for unknown/stale ids."""

    if not outline_point_id or outline is None:
        return None
    for section in OUTLINE_SECTIONS:
        if any(point.id == outline_point_id for point in outline.points(section)):
            return section
    return None


def resolve_section_from_tags(tags: Iterable[str] | None) -> Optional[Section]:
    """Return a section only if the tags imply exactly one.

    Zero structural tags, or tags naming two different sections, resolve to ``None``.
    """

    if not tags:
        return None
    canonical = {c for c in (normalize_structure_tag(tag) for tag in tags) if c}
    if len(canonical) != 1:
        if len(canonical) > 1:
            logger.debug("Conflicting structural tags %s; ignoring tag signal", sorted(canonical))
        return None
    return section_for_canonical_tag(canonical.pop())


def assign_section(
    outline: Outline | None,
    *,
    outline_point_id: str | None = None,
    tags: Iterable[str] | None = None,
) -> Section:
    """Pick the canonical section: outline point, then tags, then ambiguous."""

    outline_section = resolve_section_from_outline(outline, outline_point_id)
    if outline_section is not None:
        return outline_section
    tag_section = resolve_section_from_tags(tags)
    if tag_section is not None:
        return tag_section
    return Section.AMBIGUOUS


def assign_thought_section(thought: Thought, outline: Outline | None) -> Section:
    return assign_section(outline, outline_point_id=thought.outline_point_id, tags=thought.tags)


def resolve_section_for_new_thought(
    *,
    sermon: Sermon | None = None,
    outline_point_id: str | None = None,
    tags: Iterable[str] | None = None,
) -> Section:
    """Section for a thought that has no structure entry yet.

    Same priority as :func:`assign_section`; only the sermon outline is consulted.
    """

    outline = sermon.outline if sermon is not None else None
    return assign_section(outline, outline_point_id=outline_point_id, tags=tags)


def find_thought_section_in_structure(structure: RawStructure, thought_id: str) -> Optional[Section]:
    """First section (in fixed order) whose stored array lists ``thought_id``."""

    normalized = normalize_structure(structure)
    for section in SECTION_ORDER:
        if thought_id in normalized.ids(section):
            return section
    return None

"""Structure canonicalization.

Turns thoughts + outline + a stored (possibly stale) structure into one authoritative,
duplicate-free, totally ordered id list per section.

Per outline-bearing section, groups are emitted in outline order. Inside a group, ids keep
their stored relative order and thoughts missing from the stored array follow oldest first.
Thoughts without an outline point come after all groups, under the same two rules. Section
membership always comes from :func:`assign_thought_section`; the stored structure only
contributes ordering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from sermonweaver.logging import get_logger
from sermonweaver.models.outline import Outline
from sermonweaver.models.sermon import Sermon
from sermonweaver.models.structure import SECTION_ORDER, Section, Structure
from sermonweaver.models.thought import Thought
from sermonweaver.ordering.normalizer import normalize_structure
from sermonweaver.ordering.resolvers import resolve_section_from_outline, resolve_section_from_tags

logger = get_logger(__name__)


@dataclass(frozen=True)
class ThoughtResolution:
    """Where a thought canonically lives."""

    thought_id: str
    section: Section
    # Only set when the point exists in the outline; stale ids resolve to None.
    outline_point_id: str | None
    date: float


def resolve_thought(thought: Thought, outline: Outline | None) -> ThoughtResolution:
    outline_section = resolve_section_from_outline(outline, thought.outline_point_id)
    if outline_section is not None:
        return ThoughtResolution(thought.id, outline_section, thought.outline_point_id, thought.date_value())
    section = resolve_section_from_tags(thought.tags) or Section.AMBIGUOUS
    return ThoughtResolution(thought.id, section, None, thought.date_value())


def resolve_thoughts(thoughts: Iterable[Thought], outline: Outline | None) -> dict[str, ThoughtResolution]:
    """Resolve every thought, keyed by id in sermon order (first occurrence wins)."""

    resolutions: dict[str, ThoughtResolution] = {}
    for thought in thoughts:
        if thought.id not in resolutions:
            resolutions[thought.id] = resolve_thought(thought, outline)
    return resolutions


def oldest_first(
    resolutions: dict[str, ThoughtResolution],
    predicate: Callable[[ThoughtResolution], bool],
) -> list[str]:
    """Ids of matching thoughts sorted by date ascending; ties keep sermon order."""

    matching = [r for r in resolutions.values() if predicate(r)]
    matching.sort(key=lambda r: r.date)
    return [r.thought_id for r in matching]


def _take(order: list[str], used: set[str], ids: Iterable[str]) -> None:
    for thought_id in ids:
        if thought_id in used:
            continue
        used.add(thought_id)
        order.append(thought_id)


def build_section_order(
    section: Section,
    stored_ids: list[str],
    resolutions: dict[str, ThoughtResolution],
    outline: Outline | None,
    consumed: frozenset[str],
) -> tuple[list[str], frozenset[str]]:
    """Order one section.

    Args:
        section: Section being built.
        stored_ids: Normalized stored array for this section.
        resolutions: Resolution of every sermon thought.
        outline: Sermon outline, if any.
        consumed: Ids already emitted by earlier sections.

    Returns:
        The section's ordered ids and the consumed set extended with them.
    """

    order: list[str] = []
    used = set(consumed)

    def in_group(point_id: str | None) -> Callable[[ThoughtResolution], bool]:
        return lambda r: r.section is section and r.outline_point_id == point_id

    groups: list[str | None] = [p.id for p in outline.points(section)] if outline is not None else []
    # Ungrouped thoughts form the last group.
    groups.append(None)

    for point_id in groups:
        matches = in_group(point_id)
        _take(order, used, (i for i in stored_ids if i in resolutions and matches(resolutions[i])))
        _take(order, used, oldest_first(resolutions, lambda r: matches(r) and r.thought_id not in used))

    return order, consumed | frozenset(order)


def canonicalize_structure(sermon: Sermon) -> Structure:
    """Derive the authoritative structure of a sermon.

    The result is idempotent: canonicalizing a sermon whose structure is already canonical
    returns the same structure. Every thought id appears exactly once across the four
    sections; stored ids without a matching thought are dropped.

    Raises:
        StructureParseError: If the stored structure is malformed JSON text.
    """

    normalized = normalize_structure(sermon.raw_structure())
    resolutions = resolve_thoughts(sermon.thoughts, sermon.outline)

    stale = [i for i in normalized.all_ids() if i not in resolutions]
    if stale:
        logger.debug("Dropping %d stale structure ids", len(set(stale)))

    consumed: frozenset[str] = frozenset()
    sections: dict[str, list[str]] = {}
    for section in SECTION_ORDER:
        sections[section.value], consumed = build_section_order(
            section,
            normalized.ids(section),
            resolutions,
            sermon.outline,
            consumed,
        )
    return Structure(**sections)

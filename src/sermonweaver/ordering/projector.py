"""Ordered thought projection.

Maps structure id orderings back to ``Thought`` objects for rendering and preaching.
"""

from __future__ import annotations

from sermonweaver.logging import get_logger
from sermonweaver.models.outline import Outline
from sermonweaver.models.sermon import Sermon
from sermonweaver.models.structure import SECTION_ORDER, Section, Structure
from sermonweaver.models.thought import Thought
from sermonweaver.ordering.canonicalizer import canonicalize_structure, oldest_first, resolve_thoughts
from sermonweaver.ordering.normalizer import normalize_structure
from sermonweaver.ordering.resolvers import resolve_section_from_outline

logger = get_logger(__name__)


def project_section(
    thoughts: list[Thought],
    outline: Outline | None,
    structure: Structure,
    section: Section | str,
    *,
    include_orphans: bool = True,
) -> list[Thought]:
    """Project one section of a canonical or raw structure onto thoughts.

    Ids with no matching thought are skipped. With ``include_orphans``, thoughts resolving
    to this section but missing from its array are appended: per outline point first (oldest
    first within each point), then the rest oldest first.
    """

    section = Section(section)
    by_id: dict[str, Thought] = {}
    for thought in thoughts:
        by_id.setdefault(thought.id, thought)

    ordered: list[Thought] = []
    used: set[str] = set()
    for thought_id in structure.ids(section):
        thought = by_id.get(thought_id)
        if thought is None or thought_id in used:
            continue
        ordered.append(thought)
        used.add(thought_id)

    if not include_orphans:
        return ordered

    resolutions = resolve_thoughts(thoughts, outline)
    points = outline.points(section) if outline is not None else []
    orphan_ids: list[str] = []
    for point in points:
        orphan_ids.extend(
            oldest_first(
                resolutions,
                lambda r: r.section is section and r.outline_point_id == point.id and r.thought_id not in used,
            )
        )
        used.update(orphan_ids)
    orphan_ids.extend(oldest_first(resolutions, lambda r: r.section is section and r.thought_id not in used))

    if orphan_ids:
        logger.debug("Appending %d orphan thoughts to %s", len(orphan_ids), section.value)
    return ordered + [by_id[i] for i in orphan_ids]


def get_preach_ordered_thoughts_by_section(
    sermon: Sermon,
    section: Section | str,
    *,
    include_orphans: bool = True,
    canonicalize: bool = True,
) -> list[Thought]:
    """Thoughts of one section in preaching order.

    By default the sermon structure is canonicalized first. With ``canonicalize=False`` the
    stored structure is projected as-is (best-effort view of a stale structure), and
    ``include_orphans`` decides whether unlisted thoughts are shown.

    Raises:
        StructureParseError: If the stored structure is malformed JSON text.
    """

    structure = canonicalize_structure(sermon) if canonicalize else normalize_structure(sermon.raw_structure())
    return project_section(
        sermon.thoughts,
        sermon.outline,
        structure,
        section,
        include_orphans=include_orphans,
    )


def get_preach_ordered_thoughts(
    sermon: Sermon,
    *,
    include_orphans: bool = True,
    canonicalize: bool = True,
) -> list[Thought]:
    """Whole-sermon order: introduction, main, conclusion, then ambiguous.

    A thought already emitted by an earlier section is skipped.
    """

    structure = canonicalize_structure(sermon) if canonicalize else normalize_structure(sermon.raw_structure())
    used: set[str] = set()
    result: list[Thought] = []
    for section in SECTION_ORDER:
        for thought in project_section(
            sermon.thoughts,
            sermon.outline,
            structure,
            section,
            include_orphans=include_orphans,
        ):
            if thought.id in used:
                continue
            used.add(thought.id)
            result.append(thought)
    return result


def get_thoughts_for_outline_point(sermon: Sermon, outline_point_id: str) -> list[Thought]:
    """Thoughts attached to an outline point, in preaching order.

    Stale point ids (not in the outline) search the whole sermon.
    """

    section = resolve_section_from_outline(sermon.outline, outline_point_id)
    if section is not None:
        ordered = get_preach_ordered_thoughts_by_section(sermon, section, include_orphans=True)
    else:
        ordered = get_preach_ordered_thoughts(sermon, include_orphans=True)
    return [t for t in ordered if t.outline_point_id == outline_point_id]

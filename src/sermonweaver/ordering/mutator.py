"""Incremental structure edits.

Used after a single drag-and-drop or tag edit so callers do not need a full
canonicalization pass on every change.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final, Protocol, Union

from sermonweaver.logging import get_logger
from sermonweaver.models.outline import Outline
from sermonweaver.models.sermon import RawStructure, Sermon
from sermonweaver.models.structure import SECTION_ORDER, Section, Structure
from sermonweaver.models.thought import Thought
from sermonweaver.ordering.canonicalizer import canonicalize_structure
from sermonweaver.ordering.normalizer import normalize_structure
from sermonweaver.utils.ids import LOCAL_THOUGHT_PREFIX, dedupe_ids, is_local_thought_id
from sermonweaver.utils.tags import canonical_tag_for_section, is_structure_tag

logger = get_logger(__name__)


class ThoughtNotFoundError(LookupError):
    pass


class OutlinePointMismatchError(ValueError):
    """An explicit outline point does not belong to the target section."""


class _Unset(Enum):
    UNSET = "UNSET"


UNSET: Final = _Unset.UNSET


def insert_thought_id_in_structure(
    structure: RawStructure,
    section: Section | str,
    thought_id: str,
    *,
    outline_point_id: str | None = None,
    thoughts_by_id: Mapping[str, Thought] | None = None,
    thoughts: list[Thought] | None = None,
    outline: Outline | None = None,
) -> Structure:
    """Place ``thought_id`` into ``section``, removing it from every other section.

    With an ``outline_point_id`` and a thought lookup, the id goes right after the last id
    in the section sharing that point; otherwise it is appended. When the full ``thoughts``
    list is given the result is canonicalized before being returned.

    Raises:
        StructureParseError: If ``structure`` is malformed JSON text.
    """

    section = Section(section)
    normalized = normalize_structure(structure)
    if thoughts_by_id is None and thoughts is not None:
        thoughts_by_id = {t.id: t for t in thoughts}

    filtered = {s.value: [i for i in normalized.ids(s) if i != thought_id] for s in SECTION_ORDER}
    target = filtered[section.value]

    insert_at = len(target)
    if outline_point_id and thoughts_by_id is not None:
        for index, existing_id in enumerate(target):
            existing = thoughts_by_id.get(existing_id)
            if existing is not None and existing.outline_point_id == outline_point_id:
                insert_at = index + 1
    target.insert(insert_at, thought_id)

    result = Structure(**filtered)
    if thoughts is not None:
        return canonicalize_structure(Sermon(thoughts=thoughts, structure=result, outline=outline))
    return result


@dataclass(frozen=True)
class MoveResult:
    """Outcome of moving a thought: both values must be persisted together."""

    structure: Structure
    thought: Thought


def _target_outline_point(
    thought: Thought,
    target: Section,
    outline: Outline | None,
    requested: Union[str, None, _Unset],
) -> str | None:
    point_ids = {p.id for p in outline.points(target)} if outline is not None else set()
    if requested is UNSET:
        # Keep the current point only while it still belongs to the target section.
        current = thought.outline_point_id
        return current if current in point_ids else None
    if requested is None:
        return None
    if requested not in point_ids:
        raise OutlinePointMismatchError(
            f"Outline point {requested!r} is not part of section {target.value!r}"
        )
    return requested


def _retag(tags: list[str], target: Section) -> list[str]:
    custom = [t for t in tags if not is_structure_tag(t)]
    canonical = canonical_tag_for_section(target)
    return [canonical, *custom] if canonical else custom


def move_thought(
    sermon: Sermon,
    thought_id: str,
    target_section: Section | str,
    outline_point_id: Union[str, None, _Unset] = UNSET,
) -> MoveResult:
    """Move a thought and return the matching metadata update.

    The returned thought carries an outline point and structural tag consistent with
    ``target_section``, so the next canonicalization keeps it where it was dropped.

    Args:
        sermon: Current sermon snapshot.
        thought_id: Thought to move.
        target_section: Destination section.
        outline_point_id: ``UNSET`` keeps the current point if it belongs to the target
            section (cleared otherwise); ``None`` clears it; a point id assigns it.

    Raises:
        ThoughtNotFoundError: If the sermon has no such thought.
        OutlinePointMismatchError: If an explicit point is not in the target section.
        StructureParseError: If the stored structure is malformed JSON text.
    """

    target = Section(target_section)
    thoughts_by_id = sermon.thoughts_by_id()
    thought = thoughts_by_id.get(thought_id)
    if thought is None:
        raise ThoughtNotFoundError(f"Thought {thought_id!r} not found")

    point_id = _target_outline_point(thought, target, sermon.outline, outline_point_id)
    updated = thought.model_copy(update={"tags": _retag(thought.tags, target), "outline_point_id": point_id})
    thoughts_by_id[thought_id] = updated

    structure = insert_thought_id_in_structure(
        sermon.raw_structure(),
        target,
        thought_id,
        outline_point_id=point_id,
        thoughts_by_id=thoughts_by_id,
    )
    logger.debug("Moved %s to %s (point=%s)", thought_id, target.value, point_id)
    return MoveResult(structure=structure, thought=updated)


class _HasId(Protocol):
    id: str


def build_structure_from_sections(
    sections: Mapping[str, Iterable[Union[str, _HasId]]],
    *,
    local_prefix: str = LOCAL_THOUGHT_PREFIX,
) -> Structure:
    """Build a structure from per-section item lists as rendered by the UI.

    Items may be ids or objects with an ``id``. Unsynced local ids and duplicates are
    dropped; unknown section keys are ignored.
    """

    out: dict[str, list[str]] = {}
    for section in SECTION_ORDER:
        ids = (item if isinstance(item, str) else item.id for item in sections.get(section.value, ()))
        out[section.value] = dedupe_ids(i for i in ids if i and not is_local_thought_id(i, local_prefix))
    return Structure(**out)

"""Structure normalization.

Stored structures arrive as a parsed model, a loose mapping or JSON text. They are turned
into a clean ``Structure`` here, once, so nothing downstream re-checks the input type.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from sermonweaver.logging import get_logger
from sermonweaver.models.sermon import RawStructure
from sermonweaver.models.structure import SECTION_ORDER, Structure
from sermonweaver.utils.ids import dedupe_ids

logger = get_logger(__name__)


class StructureParseError(ValueError):
    """A string-encoded structure is not valid JSON."""


def _parse(raw: RawStructure) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, Structure):
        return raw.model_dump()
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StructureParseError(f"Invalid structure JSON: {exc.msg}") from exc
        if not isinstance(data, Mapping):
            logger.debug("Structure JSON is %s, not an object; treating as empty", type(data).__name__)
            return {}
        return data
    if isinstance(raw, Mapping):
        return raw
    logger.debug("Unsupported structure type %s; treating as empty", type(raw).__name__)
    return {}


def _clean_ids(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return dedupe_ids(x for x in value if x and isinstance(x, str))


def normalize_structure(raw: RawStructure) -> Structure:
    """Sanitize a stored structure into four duplicate-free id arrays.

    Missing or non-list sections become empty, falsy and non-string entries are dropped and
    duplicates within a section keep their first position. Duplicates *across* sections are
    left for canonicalization to resolve.

    Raises:
        StructureParseError: If ``raw`` is a string that is not valid JSON.
    """

    data = _parse(raw)
    return Structure(**{section.value: _clean_ids(data.get(section.value)) for section in SECTION_ORDER})


def is_structure_changed(prev: RawStructure, new: RawStructure) -> bool:
    """Compare two stored structures section by section.

    ``None`` on exactly one side counts as a change; ``None`` on both does not.

    Raises:
        StructureParseError: If either side is malformed JSON text.
    """

    if prev is None or new is None:
        return (prev is None) != (new is None)

    before = normalize_structure(prev)
    after = normalize_structure(new)
    return any(before.ids(section) != after.ids(section) for section in SECTION_ORDER)

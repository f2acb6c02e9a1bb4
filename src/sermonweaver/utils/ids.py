"""ID utilities."""

from __future__ import annotations

from typing import Iterable

# Optimistic ids created client-side before the thought is saved.
LOCAL_THOUGHT_PREFIX = "local-"


def dedupe_ids(ids: Iterable[str]) -> list[str]:
    """De-duplicate ids keeping first-seen order."""

    seen: set[str] = set()
    out: list[str] = []
    for x in ids:
        if x not in seen:
            out.append(x)
            seen.add(x)
    return out


def is_local_thought_id(thought_id: str, prefix: str = LOCAL_THOUGHT_PREFIX) -> bool:
    """Return True for ids that have not been synced to storage yet."""

    return thought_id.startswith(prefix)

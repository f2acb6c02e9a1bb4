"""JSON file sermon repository.

One ``<sermon_id>.json`` document per sermon, in the same camelCase shape the API uses.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from sermonweaver.logging import get_logger
from sermonweaver.models.sermon import Sermon
from sermonweaver.models.structure import Structure
from sermonweaver.models.thought import Thought
from sermonweaver.ordering.mutator import ThoughtNotFoundError
from sermonweaver.store.protocol import SermonNotFoundError, SermonRepository

logger = get_logger(__name__)


def load_sermon_file(path: Path) -> Sermon:
    """Read and validate a sermon JSON document."""

    return Sermon.model_validate_json(path.read_text(encoding="utf-8"))


def dump_sermon(sermon: Sermon) -> str:
    payload = sermon.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, ensure_ascii=False, indent=2)


def write_sermon_file(path: Path, sermon: Sermon) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_sermon(sermon) + "\n", encoding="utf-8")


@dataclass
class JsonFileSermonRepository(SermonRepository):
    """File-backed repository rooted at ``root_dir``."""

    root_dir: Path

    def __post_init__(self) -> None:
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, sermon_id: str) -> Path:
        return self.root_dir / f"{sermon_id}.json"

    def get_sermon(self, sermon_id: str) -> Sermon:
        path = self.path_for(sermon_id)
        if not path.exists():
            raise SermonNotFoundError(f"Sermon {sermon_id!r} not found in {self.root_dir}")
        sermon = load_sermon_file(path)
        if sermon.id is None:
            sermon = sermon.model_copy(update={"id": sermon_id})
        return sermon

    def save_sermon(self, sermon: Sermon) -> None:
        if not sermon.id:
            raise ValueError("Cannot save a sermon without an id")
        write_sermon_file(self.path_for(sermon.id), sermon)

    def update_structure(self, sermon_id: str, structure: Structure) -> None:
        sermon = self.get_sermon(sermon_id)
        # The legacy alias is superseded once a structure is written.
        self.save_sermon(sermon.model_copy(update={"structure": structure, "thoughts_by_section": None}))
        logger.info("Saved structure for %s", sermon_id)

    def update_thought(self, sermon_id: str, thought: Thought) -> None:
        sermon = self.get_sermon(sermon_id)
        index = next((i for i, t in enumerate(sermon.thoughts) if t.id == thought.id), None)
        if index is None:
            raise ThoughtNotFoundError(f"Thought {thought.id!r} not found in sermon {sermon_id!r}")
        thoughts = list(sermon.thoughts)
        thoughts[index] = thought
        self.save_sermon(sermon.model_copy(update={"thoughts": thoughts}))
        logger.info("Saved thought %s for %s", thought.id, sermon_id)

"""Persistence collaborator interface.

The ordering core never calls a repository; callers persist the values it returns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sermonweaver.models.sermon import Sermon
from sermonweaver.models.structure import Structure
from sermonweaver.models.thought import Thought


class SermonNotFoundError(LookupError):
    pass


class SermonRepository(ABC):
    """Storage for sermon snapshots."""

    @abstractmethod
    def get_sermon(self, sermon_id: str) -> Sermon:
        """Load a sermon snapshot."""

    @abstractmethod
    def update_structure(self, sermon_id: str, structure: Structure) -> None:
        """Persist a sermon's structure verbatim."""

    @abstractmethod
    def update_thought(self, sermon_id: str, thought: Thought) -> None:
        """Replace one thought of a sermon."""

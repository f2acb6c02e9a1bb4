"""Sermon persistence collaborators."""

from __future__ import annotations

from sermonweaver.store.file_store import JsonFileSermonRepository
from sermonweaver.store.protocol import SermonNotFoundError, SermonRepository

__all__ = ["JsonFileSermonRepository", "SermonNotFoundError", "SermonRepository"]

"""Thought model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

_DATETIME = TypeAdapter(datetime)


class Thought(BaseModel):
    """A free-form note captured by the author.

    ``outline_point_id`` and ``tags`` are the two per-thought section signals. Extra fields
    coming from storage (e.g. a legacy ``position``) are kept as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(min_length=1)
    text: str = ""
    tags: list[str] = Field(default_factory=list)
    date: str | None = None
    outline_point_id: str | None = Field(default=None, alias="outlinePointId")

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: object) -> object:
        # Stored documents may hold null or sparse tag lists.
        if value is None:
            return []
        if isinstance(value, list):
            return [t for t in value if t]
        return value

    def date_value(self) -> float:
        """Epoch seconds of ``date``; 0 when missing or unparseable."""

        if not self.date:
            return 0.0
        try:
            return _DATETIME.validate_python(self.date.strip()).timestamp()
        except (ValidationError, OverflowError, OSError):
            return 0.0

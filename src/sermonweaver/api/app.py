"""FastAPI app exposing the ordering operations.

Every endpoint is a pure function of its request body; nothing is persisted here.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from sermonweaver.config import Settings, load_settings
from sermonweaver.logging import configure_logging, get_logger, sermon_context
from sermonweaver.models.outline import Outline
from sermonweaver.models.sermon import RawStructure, Sermon
from sermonweaver.models.structure import Section, Structure
from sermonweaver.models.thought import Thought
from sermonweaver.ordering import (
    UNSET,
    OutlinePointMismatchError,
    StructureParseError,
    ThoughtNotFoundError,
    apply_section_order,
    build_structure_from_sections,
    canonicalize_structure,
    get_preach_ordered_thoughts,
    get_preach_ordered_thoughts_by_section,
    get_thoughts_for_outline_point,
    insert_thought_id_in_structure,
    move_thought,
    normalize_structure,
    resolve_section_for_new_thought,
)


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NormalizeRequest(_Request):
    structure: RawStructure = None


class SermonRequest(_Request):
    sermon: Sermon


class OrderedThoughtsRequest(_Request):
    sermon: Sermon
    section: Optional[Section] = None
    include_orphans: Optional[bool] = Field(default=None, alias="includeOrphans")
    canonicalize: bool = True


class OutlinePointThoughtsRequest(_Request):
    sermon: Sermon
    outline_point_id: str = Field(alias="outlinePointId")


class ResolveSectionRequest(_Request):
    sermon: Optional[Sermon] = None
    outline_point_id: Optional[str] = Field(default=None, alias="outlinePointId")
    tags: list[str] = Field(default_factory=list)


class ResolveSectionResponse(BaseModel):
    section: Section


class InsertRequest(_Request):
    structure: RawStructure = None
    section: Section
    thought_id: str = Field(alias="thoughtId")
    outline_point_id: Optional[str] = Field(default=None, alias="outlinePointId")
    thoughts: Optional[list[Thought]] = None
    outline: Optional[Outline] = None
    # Use thoughts only for sibling lookup, without canonicalizing the result
    canonicalize: bool = True


class MoveRequest(_Request):
    sermon: Sermon
    thought_id: str = Field(alias="thoughtId")
    section: Section
    # Omitted keeps the current point when it fits the target section; null clears it
    outline_point_id: Optional[str] = Field(default=None, alias="outlinePointId")


class MoveResponse(BaseModel):
    structure: Structure
    thought: dict[str, Any]


class FromSectionsRequest(_Request):
    sections: dict[str, list[str]]


class AiOrderRequest(_Request):
    structure: RawStructure = None
    section: Section
    order: list[str]
    thoughts: list[Thought] = Field(default_factory=list)
    assignments: dict[str, str] = Field(default_factory=dict)


class AiOrderResponse(BaseModel):
    structure: Structure
    changes: dict[str, str]


T = TypeVar("T")


def _guard(fn: Callable[[], T]) -> T:
    """Run an ordering call, mapping malformed structure JSON to HTTP 422."""

    try:
        return fn()
    except StructureParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _dump_thoughts(thoughts: list[Thought]) -> list[dict[str, Any]]:
    return [t.model_dump(mode="json", by_alias=True, exclude_none=True) for t in thoughts]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI app."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    app = FastAPI(title="SermonWeaver", version="0.1.0")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/structure/normalize")
    def structure_normalize(req: NormalizeRequest) -> Structure:
        return _guard(lambda: normalize_structure(req.structure))

    @app.post("/structure/canonicalize")
    def structure_canonicalize(req: SermonRequest) -> Structure:
        with sermon_context(sermon_id=req.sermon.id, op="canonicalize"):
            logger.info("Canonicalize requested", extra={"thoughts": len(req.sermon.thoughts)})
            return _guard(lambda: canonicalize_structure(req.sermon))

    @app.post("/structure/from-sections")
    def structure_from_sections(req: FromSectionsRequest) -> Structure:
        return build_structure_from_sections(req.sections, local_prefix=settings.local_thought_prefix)

    @app.post("/thoughts/ordered")
    def thoughts_ordered(req: OrderedThoughtsRequest) -> list[dict[str, Any]]:
        include_orphans = settings.include_orphans if req.include_orphans is None else req.include_orphans
        with sermon_context(sermon_id=req.sermon.id, op="order"):
            if req.section is None:
                thoughts = _guard(
                    lambda: get_preach_ordered_thoughts(
                        req.sermon, include_orphans=include_orphans, canonicalize=req.canonicalize
                    )
                )
            else:
                thoughts = _guard(
                    lambda: get_preach_ordered_thoughts_by_section(
                        req.sermon, req.section, include_orphans=include_orphans, canonicalize=req.canonicalize
                    )
                )
        return _dump_thoughts(thoughts)

    @app.post("/thoughts/outline-point")
    def thoughts_for_outline_point(req: OutlinePointThoughtsRequest) -> list[dict[str, Any]]:
        return _dump_thoughts(_guard(lambda: get_thoughts_for_outline_point(req.sermon, req.outline_point_id)))

    @app.post("/thoughts/resolve-section")
    def thoughts_resolve_section(req: ResolveSectionRequest) -> ResolveSectionResponse:
        section = resolve_section_for_new_thought(
            sermon=req.sermon, outline_point_id=req.outline_point_id, tags=req.tags
        )
        return ResolveSectionResponse(section=section)

    @app.post("/structure/insert")
    def structure_insert(req: InsertRequest) -> Structure:
        thoughts_by_id = {t.id: t for t in req.thoughts} if req.thoughts is not None else None
        return _guard(
            lambda: insert_thought_id_in_structure(
                req.structure,
                req.section,
                req.thought_id,
                outline_point_id=req.outline_point_id,
                thoughts_by_id=thoughts_by_id,
                thoughts=req.thoughts if req.canonicalize else None,
                outline=req.outline,
            )
        )

    @app.post("/structure/move")
    def structure_move(req: MoveRequest) -> MoveResponse:
        requested = req.outline_point_id if "outline_point_id" in req.model_fields_set else UNSET
        with sermon_context(sermon_id=req.sermon.id, op="move"):
            try:
                result = _guard(lambda: move_thought(req.sermon, req.thought_id, req.section, requested))
            except ThoughtNotFoundError as exc:
                raise HTTPException(status_code=404, detail=str(exc)) from exc
            except OutlinePointMismatchError as exc:
                raise HTTPException(status_code=422, detail=str(exc)) from exc
            logger.info("Move computed", extra={"thought_id": req.thought_id, "section": req.section.value})
        return MoveResponse(
            structure=result.structure,
            thought=result.thought.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    @app.post("/structure/ai-order")
    def structure_ai_order(req: AiOrderRequest) -> AiOrderResponse:
        result = _guard(
            lambda: apply_section_order(
                req.structure,
                req.section,
                req.order,
                thoughts=req.thoughts,
                assignments=req.assignments,
            )
        )
        return AiOrderResponse(structure=result.structure, changes=dict(result.changes))

    return app

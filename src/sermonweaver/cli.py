"""CLI entrypoints for SermonWeaver."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional

import typer
from pydantic import ValidationError

from sermonweaver.config import Settings, load_settings
from sermonweaver.logging import configure_logging, get_logger, log_exception, sermon_context
from sermonweaver.models.sermon import Sermon
from sermonweaver.models.structure import Section
from sermonweaver.ordering import (
    UNSET,
    OutlinePointMismatchError,
    StructureParseError,
    ThoughtNotFoundError,
    canonicalize_structure,
    get_preach_ordered_thoughts,
    get_preach_ordered_thoughts_by_section,
    move_thought,
)
from sermonweaver.store import JsonFileSermonRepository, SermonNotFoundError
from sermonweaver.store.file_store import load_sermon_file, write_sermon_file

app = typer.Typer(add_completion=False, help="SermonWeaver thought ordering CLI")
logger = get_logger(__name__)

_SERMON_HELP = "Sermon JSON document, or a sermon id with --store"
_STORE_HELP = "Treat SERMON as an id in the configured data directory"


def _setup() -> Settings:
    settings = load_settings()
    configure_logging(settings.log_level)
    return settings


def _open(sermon_ref: str, store: bool, settings: Settings) -> tuple[Sermon, Optional[JsonFileSermonRepository]]:
    """Load a sermon from a file path, or by id from the repository under ``data_dir``."""

    try:
        if store:
            repo = JsonFileSermonRepository(settings.data_dir)
            return repo.get_sermon(sermon_ref), repo
        return load_sermon_file(Path(sermon_ref)), None
    except SermonNotFoundError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except (OSError, ValidationError) as exc:
        raise typer.BadParameter(f"Cannot read sermon {sermon_ref}: {exc}") from exc


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _fail(msg: str) -> NoReturn:
    typer.echo(msg, err=True)
    raise typer.Exit(code=1)


def _persist(save: Callable[[], None], target: str) -> None:
    try:
        save()
    except OSError as exc:
        log_exception(logger, "Failed to write sermon", target=target)
        _fail(f"Cannot write sermon {target}: {exc}")
    logger.info("Sermon written to %s", target)


@app.command()
def canonicalize(
    sermon_ref: str = typer.Argument(..., metavar="SERMON", help=_SERMON_HELP),
    store: bool = typer.Option(False, "--store", help=_STORE_HELP),
    write: bool = typer.Option(False, "--write", "-w", help="Write the canonical structure back"),
) -> None:
    """Print the canonical structure of a sermon."""

    settings = _setup()
    sermon, repo = _open(sermon_ref, store, settings)
    with sermon_context(sermon_id=sermon.id, op="canonicalize"):
        try:
            structure = canonicalize_structure(sermon)
        except StructureParseError as exc:
            _fail(str(exc))
        if write and repo is not None:
            _persist(lambda: repo.update_structure(sermon_ref, structure), sermon_ref)
        elif write:
            updated = sermon.model_copy(update={"structure": structure, "thoughts_by_section": None})
            _persist(lambda: write_sermon_file(Path(sermon_ref), updated), sermon_ref)
    _echo_json(structure.model_dump(mode="json"))


@app.command()
def order(
    sermon_ref: str = typer.Argument(..., metavar="SERMON", help=_SERMON_HELP),
    store: bool = typer.Option(False, "--store", help=_STORE_HELP),
    section: Optional[Section] = typer.Option(None, "--section", "-s", help="Only this section"),
    include_orphans: bool = typer.Option(
        True,
        "--orphans/--no-orphans",
        help="Append thoughts missing from the stored structure",
    ),
    raw: bool = typer.Option(False, "--raw", help="Project the stored structure without canonicalizing"),
) -> None:
    """Print thoughts in preaching order."""

    settings = _setup()
    sermon, _ = _open(sermon_ref, store, settings)
    with sermon_context(sermon_id=sermon.id, op="order"):
        try:
            if section is None:
                thoughts = get_preach_ordered_thoughts(sermon, include_orphans=include_orphans, canonicalize=not raw)
            else:
                thoughts = get_preach_ordered_thoughts_by_section(
                    sermon, section, include_orphans=include_orphans, canonicalize=not raw
                )
        except StructureParseError as exc:
            _fail(str(exc))
    _echo_json([t.model_dump(mode="json", by_alias=True, exclude_none=True) for t in thoughts])


@app.command()
def move(
    sermon_ref: str = typer.Argument(..., metavar="SERMON", help=_SERMON_HELP),
    thought_id: str = typer.Argument(..., help="Thought to move"),
    section: Section = typer.Argument(..., help="Target section"),
    store: bool = typer.Option(False, "--store", help=_STORE_HELP),
    outline_point: Optional[str] = typer.Option(None, "--outline-point", "-p", help="Attach to this outline point"),
    clear_point: bool = typer.Option(False, "--clear-point", help="Detach from any outline point"),
    write: bool = typer.Option(False, "--write", "-w", help="Write structure and thought back"),
) -> None:
    """Move a thought to a section (and optionally an outline point)."""

    if outline_point and clear_point:
        raise typer.BadParameter("--outline-point and --clear-point are mutually exclusive")

    settings = _setup()
    sermon, repo = _open(sermon_ref, store, settings)
    requested = outline_point if outline_point else (None if clear_point else UNSET)
    with sermon_context(sermon_id=sermon.id, op="move"):
        try:
            result = move_thought(sermon, thought_id, section, requested)
        except (StructureParseError, ThoughtNotFoundError, OutlinePointMismatchError) as exc:
            _fail(str(exc))
        if write and repo is not None:

            def save() -> None:
                repo.update_structure(sermon_ref, result.structure)
                repo.update_thought(sermon_ref, result.thought)

            _persist(save, sermon_ref)
        elif write:
            thoughts = [result.thought if t.id == thought_id else t for t in sermon.thoughts]
            updated = sermon.model_copy(
                update={"thoughts": thoughts, "structure": result.structure, "thoughts_by_section": None}
            )
            _persist(lambda: write_sermon_file(Path(sermon_ref), updated), sermon_ref)
    _echo_json(
        {
            "structure": result.structure.model_dump(mode="json"),
            "thought": result.thought.model_dump(mode="json", by_alias=True, exclude_none=True),
        }
    )


if __name__ == "__main__":
    app()

"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
import uvicorn
from sqlmodel import Session

from folio.api.app import create_app
from folio.api.auth import admin_predicate, issue_token
from folio.config import Settings, configure_logging, load_config
from folio.core.plaintext import extract_text
from folio.core.render import render_html
from folio.crud.blogs import filter_blogs
from folio.crud.database import init_db, make_engine, reset_db
from folio.crud.projects import filter_projects
from folio.seed import load_seed_file, run_seed


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def init_cmd(
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings(overrides={"db_url": db_url})
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def list_cmd(
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    ):
    """List blog posts (drafts included) and projects in the database."""
    settings = _settings(overrides={"db_url": db_url})
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        blogs = filter_blogs(session, include_unpublished=True)
        projects = filter_projects(session)
    if not blogs and not projects:
        typer.echo("No content found in database.")
        raise typer.Exit(1)
    for b in blogs:
        state = "published" if b.published else "draft"
        typer.echo(f"  blog     {b.slug} [{state}] {b.title}")
    for p in projects:
        typer.echo(f"  project  {p.id} [{p.date.isoformat()}] {p.title}")


def render_cmd(
    path: Annotated[Path, typer.Argument(help="JSON file holding a rich document")],
    text: Annotated[bool, typer.Option("--text", help="Print extracted plain text instead of HTML")] = False,
    ):
    """Render a stored rich document to HTML (or plain text)."""
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        _fail(f"Cannot read {path}", e)
    typer.echo(extract_text(doc) if text else render_html(doc))


def seed_cmd(
    path: Annotated[Path, typer.Argument(help="YAML or JSON file with `blogs` and `projects` lists")],
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    ):
    """Load blog posts and projects from a seed file through the validation layer."""
    settings = _settings(overrides={"db_url": db_url})
    try:
        data = load_seed_file(path)
    except (OSError, ValueError) as e:
        _fail(f"Cannot load {path}", e)

    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        counts, changes = run_seed(engine, data)
    except Exception as e:
        _fail("Seed failed", e)

    for status, label in changes:
        typer.echo(f"  {status}: {label}")
    typer.echo(
        f"Seed complete - "
        f"{counts['created']} created, "
        f"{counts['skipped']} skipped, "
        f"{counts['invalid']} invalid"
    )


def serve_cmd(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 8000,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    ):
    """Serve the HTTP API with uvicorn."""
    settings = _settings(overrides={"db_url": db_url})
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


def token_cmd(
    email: Annotated[str, typer.Argument(help="Admin email to issue a session token for")],
    ):
    """Print a bearer token for the configured admin email."""
    settings = _settings()
    if not admin_predicate(settings.admin_email)(email):
        _fail(f"{email} is not the configured admin email")
    try:
        token = issue_token(email, settings)
    except ValueError as e:
        _fail("Cannot issue token", e)
    typer.echo(token)

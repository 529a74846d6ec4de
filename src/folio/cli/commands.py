"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
import uvicorn
import yaml

from folio.config import Settings, load_config
from folio.content.posts import list_posts
from folio.content.store import make_posts_store
from folio.core.format import format_date
from folio.core.parse import parse_post
from folio.core.render import render
from folio.errors import FolioError
from folio.web.app import create_app


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def serve_cmd(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 8000,
    mode: Annotated[Optional[str], typer.Option("--mode", help="'prod' for blob storage, else local files")] = None,
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Local content directory")] = None,
    ):
    """Serve the HTTP API with uvicorn."""
    settings = _settings(overrides={"mode": mode, "content_dir": content})
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


def posts_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Local content directory")] = None,
    ):
    """List blog posts, newest first."""
    settings = _settings(overrides={"content_dir": content})
    try:
        posts = list_posts(make_posts_store(settings))
    except FolioError as e:
        _fail("Could not list posts", e)
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(0)
    for p in posts:
        typer.echo(f"{format_date(p.frontmatter.date):>12}  {p.slug}  {p.frontmatter.title or ''}".rstrip())


def render_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file to render")],
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write HTML here instead of stdout")] = None,
    ):
    """Render a markdown post body (frontmatter stripped) to HTML."""
    _, body = parse_post(path.read_text(encoding="utf-8"))
    html = render(body)
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(html, encoding="utf-8")
        typer.echo(f"  {path} -> {out}")
    else:
        typer.echo(html, nl=False)


def config_cmd():
    """Print the effective configuration with secrets masked."""
    settings = _settings()
    typer.echo(yaml.safe_dump(settings.public(), sort_keys=False).rstrip())

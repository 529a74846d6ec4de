"""CLI entrypoint: Typer app definition and command registration"""

import typer

from folio.cli.commands import config_cmd, posts_cmd, render_cmd, serve_cmd


app = typer.Typer(name="folio", no_args_is_help=True, help="Portfolio site content and contact service")

app.command(name="serve")(serve_cmd)
app.command(name="posts")(posts_cmd)
app.command(name="render")(render_cmd)
app.command(name="config")(config_cmd)

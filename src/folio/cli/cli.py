"""CLI entrypoint: Typer app definition and command registration"""

import typer

from folio.cli.commands import init_cmd, list_cmd, render_cmd, seed_cmd, serve_cmd, token_cmd


app = typer.Typer(name="folio", no_args_is_help=True, help="Portfolio blog and project content service")

app.command(name="init")(init_cmd)
app.command(name="list")(list_cmd)
app.command(name="render")(render_cmd)
app.command(name="seed")(seed_cmd)
app.command(name="serve")(serve_cmd)
app.command(name="token")(token_cmd)

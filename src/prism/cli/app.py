import logging

import typer
from rich.logging import RichHandler

from prism.cli.serve import routes, serve

app = typer.Typer(
    name="prism",
    help="Prism CLI: serve and inspect hypermedia APIs.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log weaving details.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


app.command("serve")(serve)
app.command("routes")(routes)


def main() -> None:
    app()

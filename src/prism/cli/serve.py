from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

console = Console()

RootOption = Annotated[str, typer.Option(envvar="PRISM_ROOT", help="Path all actions are published under.")]


def serve(
    host: Annotated[str, typer.Option(envvar="PRISM_HOST")] = "127.0.0.1",
    port: Annotated[int, typer.Option(envvar="PRISM_PORT")] = 8000,
    root: RootOption = "/",
) -> None:
    """Start the demo API server."""
    import uvicorn

    from prism.demo import create_app

    app = create_app(root=root)
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)


def routes(root: RootOption = "/") -> None:
    """List the routes of the demo API after weaving."""
    from prism.demo import create_app

    app = create_app(root=root)
    plugin = app.state.prism
    plugin.start()

    table = Table(show_lines=False)
    for header in ("method", "path", "action", "woven"):
        table.add_column(header)
    for action in plugin.registry.actions:
        table.add_row(action.method, action.path, type(action).__name__, ", ".join(sorted(action.woven)) or "-")
    console.print(table)
    console.print(f"({len(plugin.registry.actions)} routes)")

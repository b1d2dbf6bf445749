import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from matchingref.cli.hints import explain, hints, link
from matchingref.cli.serve import serve_app

app = typer.Typer(
    name="matchingref",
    help="MatchingRef CLI: learner-facing hints and reference links for compiler diagnostics.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug details to stderr.")] = False,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True))],
        )


app.command("hints")(hints)
app.command("link")(link)
app.command("explain")(explain)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()

import random
from pathlib import Path
from typing import Annotated
from urllib.parse import urljoin

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from matchingref.config import get_settings
from matchingref.core.ast import parse_java_file, resolve_anchor_node
from matchingref.core.demo import DemoValues
from matchingref.core.explain import explain_source
from matchingref.core.hints import synthesize_hints
from matchingref.core.languages import detect_language_from_path
from matchingref.core.links import synthesize_reference_link
from matchingref.models import Diagnostic, Hint, SyntaxNode

console = Console()

_DIAGNOSTIC_LIST = TypeAdapter(list[Diagnostic])

PathArg = Annotated[str, typer.Argument(help="Path to a .java or .pde source file.")]
KindOpt = Annotated[str, typer.Option("--kind", help="Diagnostic kind reported by the compiler.")]
StartOpt = Annotated[int, typer.Option("--start", help="Byte offset where the diagnostic starts.")]
EndOpt = Annotated[int, typer.Option("--end", help="Byte offset where the diagnostic ends (exclusive).")]
ArgOpt = Annotated[list[str] | None, typer.Option("--arg", help="Diagnostic argument; repeat in order.")]
SeedOpt = Annotated[int | None, typer.Option(help="Seed for the example values.")]
EmbeddedOpt = Annotated[bool | None, typer.Option("--embedded/--standalone", help="Link to the embedded catalog view.")]


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]{escape(message)}[/red]")
    return typer.Exit(1)


def _load_anchor(path: str, start: int, end: int) -> SyntaxNode:
    try:
        root = parse_java_file(path)
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(str(exc)) from None

    anchor = resolve_anchor_node(root, start, end)
    if anchor is None:
        raise _fail(f"No syntax node covers bytes {start}-{end} of {path}.")
    return anchor


def _resolve_link(path: str) -> str:
    base_url = get_settings().base_url
    return urljoin(base_url, path) if base_url else path


def _render_hints(hints: list[Hint]) -> None:
    for index, hint in enumerate(hints, start=1):
        console.print(f"[bold]Hint {index}/{len(hints)}[/bold] {escape(hint.problem_text)}")
        console.print(escape(hint.suggestion_text))
        for code in hint.bad_code:
            console.print(Panel(Syntax(code, "java"), title="[red]Incorrect[/red]", title_align="left"))
        for code in hint.good_code:
            console.print(Panel(Syntax(code, "java"), title="[green]Corrected[/green]", title_align="left"))


def hints(path: PathArg, kind: KindOpt, start: StartOpt, end: EndOpt, arg: ArgOpt = None, seed: SeedOpt = None) -> None:
    """Show every hint for one diagnostic."""
    anchor = _load_anchor(path, start, end)
    demo = DemoValues(random.Random(seed) if seed is not None else None)

    found = synthesize_hints(kind, arg or [], anchor, demo=demo)
    if not found:
        console.print(f"[yellow]No hints available for {escape(kind)}.[/yellow]")
        return
    _render_hints(found)


def link(
    path: PathArg, kind: KindOpt, start: StartOpt, end: EndOpt, arg: ArgOpt = None, embedded: EmbeddedOpt = None
) -> None:
    """Print the reference link for one diagnostic."""
    anchor = _load_anchor(path, start, end)
    use_embedded = get_settings().embedded if embedded is None else embedded

    found = synthesize_reference_link(kind, arg or [], anchor, embedded=use_embedded)
    if found is None:
        console.print(f"[yellow]No reference link available for {escape(kind)}.[/yellow]")
        return
    console.print(_resolve_link(found), highlight=False, soft_wrap=True)


def explain(
    path: PathArg,
    diagnostics: Annotated[Path, typer.Argument(help="JSON file with a list of diagnostics.")],
    seed: SeedOpt = None,
    embedded: EmbeddedOpt = None,
) -> None:
    """Explain every diagnostic of one compile."""
    source_path = Path(path)
    try:
        detect_language_from_path(source_path)
        source = source_path.read_bytes()
        batch = _DIAGNOSTIC_LIST.validate_json(diagnostics.read_bytes())
    except (FileNotFoundError, ValueError) as exc:
        message = f"Invalid diagnostics file: {exc}" if isinstance(exc, ValidationError) else str(exc)
        raise _fail(message) from None

    use_embedded = get_settings().embedded if embedded is None else embedded
    explanations = explain_source(
        source, batch, embedded=use_embedded, rng=random.Random(seed) if seed is not None else None
    )

    for explanation in explanations:
        diagnostic = explanation.diagnostic
        console.rule(f"{escape(diagnostic.kind)} @ {diagnostic.anchor_start}-{diagnostic.anchor_end}")
        if explanation.hints:
            _render_hints(explanation.hints)
        else:
            console.print("[yellow]No hints available.[/yellow]")
        if explanation.link is not None:
            console.print(f"Reference: {_resolve_link(explanation.link)}", highlight=False, soft_wrap=True)

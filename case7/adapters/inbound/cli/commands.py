"""CLI interface for the case7 search service."""

import json

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import settings
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="case7",
    help="case7 - hybrid search over product development cases",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
) -> None:
    """Configure logging before any command runs."""
    setup_logging(log_level, json_format=settings.log_json)


def handle_cli_error(exc: Exception) -> None:
    """Display an error with its code; the full JSON only in debug mode."""
    error_data = format_exception_json(exc, include_trace=settings.debug)

    if settings.debug:
        console.print(
            Panel(
                escape(json.dumps(error_data, indent=2, default=str)),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error = error_data["error"]
    console.print(f"\n[red]Error \\[{error.get('code', 'UNKNOWN')}]:[/] {escape(error['message'])}")
    console.print(f"[dim]Type: {error['type']}[/]")

    location = error_data.get("location", {})
    if location:
        loc_str = f"{location.get('file', '?')}:{location.get('line', '?')} in {location.get('method', '?')}"
        console.print(f"[dim]Location: {loc_str}[/]")

    console.print("[dim]Set DEBUG=true for full details[/]")


@app.command()
def serve(
    host: str = typer.Option(settings.host, help="Interface to bind"),
    port: int = typer.Option(settings.port, help="Port to listen on"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from ....composition import container

    try:
        container.check_configuration()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print(f"[bold]case7[/] listening on http://{host}:{port}")
    uvicorn.run("case7.adapters.inbound.api.main:app", host=host, port=port)


@app.command()
def index(
    clear: bool = typer.Option(False, "--clear", help="Reset the vector index first"),
) -> None:
    """Embed every case and upsert it into the vector index."""
    from ....composition import container

    try:
        cases = container.get_case_store().get_all()
        if not cases:
            console.print(f"[yellow]No cases found to index in {settings.cases_dir}[/]")
            return

        indexer = container.get_indexing_service()
        if clear:
            with console.status("[bold]Clearing existing index...[/]"):
                indexer.clear_index()

        with console.status(f"[bold green]Indexing {len(cases)} cases...[/]"):
            report = indexer.index_cases(cases)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if report.failed:
        console.print(f"[red]Failed to index {len(report.failed)} cases:[/] {', '.join(report.failed)}")
        raise typer.Exit(1)

    console.print(f"[green]Successfully indexed {report.indexed} cases[/]")


@app.command()
def validate() -> None:
    """Check every case file for schema errors and missing sections."""
    from ....core.domain.exceptions import DataIngestionError
    from ....core.services.validation_service import validate_cases
    from ...outbound.case_source import MarkdownCaseLoader

    if not settings.cases_dir.is_dir():
        console.print(f"[red]Cases directory not found: {settings.cases_dir}[/]")
        raise typer.Exit(1)

    loader = MarkdownCaseLoader()
    cases = []
    load_errors: dict[str, str] = {}
    for path in sorted(settings.cases_dir.rglob("*.md")):
        try:
            cases.append(loader.load_case(path))
        except DataIngestionError as exc:
            load_errors[str(path)] = exc.message

    report = validate_cases(cases)
    report.errors.update(load_errors)

    for case_id, missing in report.missing_sections.items():
        console.print(f"[yellow]⚠ {case_id}[/] missing sections: {', '.join(missing)}")
    for case_id, error in report.errors.items():
        console.print(f"[red]✗ {escape(case_id)}[/] {escape(error)}")

    console.print(f"\nValidation complete: {report.valid} valid, {len(report.errors)} errors")
    if not report.ok:
        raise typer.Exit(1)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    category: str | None = typer.Option(None, help="Filter by category"),
    difficulty: str | None = typer.Option(None, help="Filter by difficulty"),
    limit: int = typer.Option(settings.default_search_limit, min=1, max=20, help="Maximum number of results"),
) -> None:
    """Search cases and print a ranked table."""
    from ....application.services.case_tools import SEARCH_CASES_TOOL
    from ....composition import container

    arguments = {"query": query, "category": category, "difficulty": difficulty, "limit": limit}
    try:
        tools = container.get_case_tools()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    result = tools.call_tool(SEARCH_CASES_TOOL, {k: v for k, v in arguments.items() if v is not None})
    if result.is_error:
        console.print(result.text, style="red", markup=False)
        raise typer.Exit(1)

    payload = json.loads(result.text)
    if not payload["cases"]:
        console.print("[dim]No matching cases.[/]")
        return

    table = Table(title=f"Results for '{payload['query']}'")
    table.add_column("Score", justify="right")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Excerpt", style="dim")
    for case in payload["cases"]:
        table.add_row(
            f"{case['relevance_score']:.2f}",
            case["id"],
            case["title"],
            case["category"],
            case["excerpt"],
        )
    console.print(table)


@app.command()
def get(
    case_id: str = typer.Argument(..., help="Case ID"),
    section: list[str] | None = typer.Option(None, "--section", "-s", help="Section to include"),
    max_tokens: int = typer.Option(8000, min=500, max=16000, help="Maximum tokens to return"),
) -> None:
    """Print a case, optionally narrowed to some sections."""
    from ....application.services.case_tools import GetCaseParams, fetch_case
    from ....composition import container

    lookup = fetch_case(
        container.get_case_store(),
        GetCaseParams(id=case_id, sections=section or None, max_tokens=max_tokens),
    )
    if lookup.is_error:
        console.print(lookup.message, style="red", markup=False)
        raise typer.Exit(1)

    case = lookup.payload
    console.print(
        Panel(
            Markdown(case["content"]),
            title=f"[bold]{case['title']}[/] [dim]({case['id']})[/]",
            subtitle=f"{case['category']} · {case['difficulty']} · updated {case['last_updated']}",
        )
    )


@app.command()
def status() -> None:
    """Show configuration, corpus size and vector index size."""
    from ....composition import container

    console.print("[bold]case7 Status[/]\n")

    store = container.get_case_store()
    console.print(f"📚 {len(store)} cases loaded from {store.source_dir}")

    try:
        container.check_configuration()
    except Exception as exc:
        console.print(f"❌ {escape(str(exc))}")
        return
    console.print("✅ Gemini and Qdrant credentials configured")

    try:
        count = container.get_vector_index().count()
        console.print(f"✅ Vector index: {count} vectors")
        if count < len(store):
            console.print("[yellow]Some cases are not indexed. Run 'case7 index'.[/]")
    except Exception as exc:
        handle_cli_error(exc)

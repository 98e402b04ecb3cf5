"""Command-line interface for the SEO auditor."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import settings
from .exceptions import AuditError
from .models import SEOAuditResult, Severity
from .orchestrator import AuditOrchestrator
from .utils import setup_logging

app = typer.Typer(
    name="seo-audit",
    help="Audit a web page and score its SEO, accessibility and security.",
    no_args_is_help=True,
)
console = Console()

SEVERITY_STYLES = {
    Severity.CRITICAL: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}


@app.command()
def audit(
    url: str = typer.Argument(..., help="The URL to audit"),
    screenshot: bool = typer.Option(False, "--screenshot", help="Capture a full-page screenshot"),
    links: bool = typer.Option(False, "--links", help="Collect the page's visible links"),
    formats: list[str] = typer.Option(
        [], "--format", "-f", help="Report format to write: json, csv or html (repeatable)"
    ),
    output_dir: Path = typer.Option(None, "--output", "-o", help="Reports directory"),
    # AI options
    enable_ai: bool = typer.Option(False, "--ai", help="Generate narrative insights with an LLM"),
    ai_api_key: str = typer.Option(
        None, "--ai-key", envvar="AUDIT_OPENROUTER_API_KEY",
        help="OpenRouter API key (or set AUDIT_OPENROUTER_API_KEY env var)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Render a live page and audit it."""
    setup_logging(verbose)

    if enable_ai and not (ai_api_key or settings.openrouter_api_key):
        console.print("[yellow]No AI API key found; using built-in insights instead.[/yellow]")

    console.print(Panel.fit(
        f"[bold blue]SEO Audit[/bold blue]\n"
        f"Auditing: [green]{url}[/green]\n"
        f"Screenshot: {'yes' if screenshot else 'no'} | AI insights: {'yes' if enable_ai else 'no'}",
        title="Starting Audit",
    ))

    try:
        orchestrator = AuditOrchestrator(
            url=url,
            include_screenshot=screenshot,
            include_links=links,
            enable_ai=enable_ai,
            ai_api_key=ai_api_key,
            output_dir=output_dir,
            formats=formats,
        )
        result = asyncio.run(orchestrator.run())

    except KeyboardInterrupt:
        console.print("\n[yellow]Audit cancelled by user[/yellow]")
        raise typer.Exit(1)
    except AuditError as e:
        console.print(f"\n[red]Error: {str(e)}[/red]")
        raise typer.Exit(1)

    _display_results(result, orchestrator.report_paths)
    if orchestrator.page and orchestrator.page.links:
        console.print(f"\n[cyan]Visible links:[/cyan] {len(orchestrator.page.links)}")


@app.command()
def analyze(
    html_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved HTML file"),
    url: str = typer.Option(..., "--url", "-u", help="URL the HTML was fetched from"),
    formats: list[str] = typer.Option(
        [], "--format", "-f", help="Report format to write: json, csv or html (repeatable)"
    ),
    output_dir: Path = typer.Option(None, "--output", "-o", help="Reports directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Audit a saved HTML file without a browser or AI."""
    setup_logging(verbose)

    try:
        orchestrator = AuditOrchestrator(url=url, output_dir=output_dir, formats=formats)
        html = html_file.read_text(encoding="utf-8", errors="replace")

        async def _run() -> SEOAuditResult:
            result = await orchestrator.audit_html(html)
            await orchestrator.write_reports(result)
            return result

        result = asyncio.run(_run())

    except AuditError as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise typer.Exit(1)

    _display_results(result, orchestrator.report_paths)


def _display_results(result: SEOAuditResult, report_paths: list[Path]) -> None:
    """Display audit results in formatted tables."""
    console.print()

    score = result.score
    table = Table(title="SEO Score", show_header=True)
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")

    for label, value in [
        ("Overall", score.overall),
        ("Technical", score.technical),
        ("On-Page", score.on_page),
        ("Content", score.content),
        ("Performance", score.performance),
        ("Accessibility", score.accessibility),
        ("Security", score.security),
    ]:
        color = "green" if value >= 80 else "yellow" if value >= 60 else "red"
        table.add_row(label, f"[{color}]{value}[/{color}]")

    console.print(table)

    if result.issues:
        console.print(f"\n[bold]Issues ({len(result.issues)}):[/bold]")
        for issue in result.issues[:10]:
            style = SEVERITY_STYLES[issue.severity]
            console.print(f"  • [{style}]{issue.severity.value.upper()}[/{style}] {issue.title}")
            console.print(f"    {issue.recommendation}")

    if result.accessibility:
        console.print(
            f"\nAccessibility heuristics: {result.accessibility.score}/100 "
            f"(WCAG {result.accessibility.wcag_level})"
        )
    if result.security:
        console.print(
            f"Security heuristics: {result.security.score}/100 "
            f"(HTTPS: {'yes' if result.security.https else 'no'}, "
            f"CSP meta tag: {'yes' if result.security.csp else 'no'})"
        )

    performance = result.performance
    console.print(
        f"Estimated load: {performance.load_time}ms, "
        f"{round(performance.page_size / 1024)}KB, {performance.requests} requests"
    )

    if result.insights:
        console.print("\n[bold magenta]Insights:[/bold magenta]")
        for index, insight in enumerate(result.insights, start=1):
            console.print(f"  {index}. {insight}")

    if report_paths:
        console.print(Panel.fit(
            "\n".join(f"[cyan]{path}[/cyan]" for path in report_paths),
            title="Reports",
        ))


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"SEO Audit version {__version__}")


if __name__ == "__main__":
    app()

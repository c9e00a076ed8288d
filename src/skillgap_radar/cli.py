"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from skillgap_radar.config import load_config
from skillgap_radar.controller import AnalysisController
from skillgap_radar.dashboard.views import gap_label, score_band
from skillgap_radar.errors import SkillGapError
from skillgap_radar.export.pdf_report import REPORT_FILENAME, render_html_report, render_pdf
from skillgap_radar.models.analysis import AnalysisResult
from skillgap_radar.parsers.resume_parser import ingest_path
from skillgap_radar.pipeline.gap_analyst import GapAnalyst
from skillgap_radar.samples import SAMPLE_JD, sample_payload
from skillgap_radar.storage import persistence
from skillgap_radar.storage.local_store import LocalStore, open_store

app = typer.Typer(
    name="skillgap",
    help="AI-powered semantic skill gap analysis",
    no_args_is_help=True,
)
console = Console()

_SCORE_STYLES = {"high": "green", "medium": "yellow", "low": "red"}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _open_store() -> LocalStore | None:
    return open_store(load_config().storage.resolved_db_path)


def _require_store() -> LocalStore:
    store = _open_store()
    if store is None:
        console.print("[red]Local store is unreadable. Delete it or set storage.db_path in config.yaml.[/red]")
        raise typer.Exit(1)
    return store


def _print_result(result: AnalysisResult) -> None:
    style = _SCORE_STYLES[score_band(result.match_score)]
    console.print(Panel(
        result.executive_summary,
        title=f"[{style}]Match Score: {result.match_score}%[/{style}]",
        subtitle=result.model_used or "",
    ))

    skills = Table(title="Skill Gap Matrix")
    skills.add_column("Skill")
    skills.add_column("Category", style="dim")
    skills.add_column("Req", justify="right")
    skills.add_column("Obs", justify="right")
    skills.add_column("Gap", justify="right")
    skills.add_column("Importance")
    for s in result.skills:
        gap = gap_label(s)
        skills.add_row(
            s.name,
            s.category,
            str(s.required_level),
            str(s.observed_level),
            f"[red]{gap}[/red]" if s.gap > 0 else f"[green]{gap}[/green]",
            s.importance,
        )
    console.print(skills)

    pathway = Table(title="Learning Pathway")
    pathway.add_column("Action")
    pathway.add_column("Priority")
    pathway.add_column("Timeline")
    pathway.add_column("Resource", overflow="fold")
    for a in result.learning_pathway:
        pathway.add_row(a.action, a.priority, a.timeline, a.resource)
    console.print(pathway)


def _write_exports(result: AnalysisResult, pdf: Path | None, html: Path | None) -> None:
    if pdf is not None:
        pdf.write_bytes(render_pdf(result))
        console.print(f"[green]PDF saved: {pdf}[/green]")
    if html is not None:
        html.write_text(render_html_report(result), encoding="utf-8")
        console.print(f"[green]HTML saved: {html}[/green]")


@app.command()
def analyze(
    jd: Path = typer.Option(None, "--jd", help="Job description text file"),
    resume: Path = typer.Option(None, "--resume", help="Résumé file (PDF/DOCX/TXT)"),
    deep: bool = typer.Option(False, "--deep", help="Use extended thinking"),
    sample: bool = typer.Option(False, "--sample", help="Use the built-in sample JD and résumé"),
    json_out: Path = typer.Option(None, "--json", help="Write the result JSON to this path"),
    pdf: Path = typer.Option(None, "--pdf", help="Write a PDF report to this path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Run a gap analysis of a résumé against a job description."""
    _configure_logging(verbose)
    config = load_config()

    if sample:
        jd_text, payload = SAMPLE_JD, sample_payload()
    else:
        if jd is None or resume is None:
            console.print("[red]--jd and --resume are required unless --sample is given[/red]")
            raise typer.Exit(1)
        if not jd.exists():
            console.print(f"[red]Job description file not found: {jd}[/red]")
            raise typer.Exit(1)
        jd_text = jd.read_text(encoding="utf-8")
        try:
            payload = ingest_path(resume, max_bytes=config.upload.max_size_bytes)
        except SkillGapError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)

    if not jd_text.strip():
        console.print("[red]Job description is empty[/red]")
        raise typer.Exit(1)

    if verbose:
        console.print(f"[dim]Job description: {len(jd_text)} chars[/dim]")
        console.print(f"[dim]Résumé: {payload.mime_type}, {len(payload.content)} chars[/dim]")

    analyst = GapAnalyst(config=config.llm, mode="deep" if deep else None)
    controller = AnalysisController(analyst, _open_store())

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(f"Analyzing with {analyst.model_label}...", total=None)
        result = asyncio.run(controller.submit(jd_text, payload))

    if result is None:
        console.print(f"[red]{controller.state.error}[/red]")
        raise typer.Exit(1)

    _print_result(result)
    tokens = analyst.token_summary()
    if verbose and tokens is not None:
        console.print(f"[dim]Tokens: {tokens['input']} in / {tokens['output']} out[/dim]")

    if json_out is not None:
        json_out.write_text(result.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
        console.print(f"[green]JSON saved: {json_out}[/green]")
    _write_exports(result, pdf, None)


@app.command()
def show() -> None:
    """Show the most recent cached analysis."""
    result = persistence.load_result(_require_store())
    if result is None:
        console.print("[yellow]No cached analysis. Run `skillgap analyze` first.[/yellow]")
        raise typer.Exit(1)
    _print_result(result)


@app.command()
def export(
    pdf: Path = typer.Option(None, "--pdf", help="PDF output path"),
    html: Path = typer.Option(None, "--html", help="HTML output path"),
) -> None:
    """Export the cached analysis as PDF and/or HTML."""
    result = persistence.load_result(_require_store())
    if result is None:
        console.print("[yellow]No cached analysis to export.[/yellow]")
        raise typer.Exit(1)
    if pdf is None and html is None:
        pdf = Path(REPORT_FILENAME)
    _write_exports(result, pdf, html)


@app.command()
def clear(
    theme: bool = typer.Option(False, "--theme", help="Also reset the saved theme"),
) -> None:
    """Remove the cached analysis."""
    store = _require_store()
    persistence.clear_result(store)
    console.print("[green]Cached analysis removed[/green]")
    if theme:
        persistence.clear_theme(store)
        console.print("[green]Theme preference reset[/green]")


if __name__ == "__main__":
    app()

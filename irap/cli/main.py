"""CLI interface for IRAP using Typer."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.config import load_settings
from ..core.config.settings import ReportSettings
from ..core.feedback.parser import parse_interview_type, parse_question_list
from ..core.models.enums import ExportFormat, SkillKey
from ..core.orchestrator.pipeline import ReportPipeline
from ..core.reporting.exceptions import (
    ExportSerializationFailure,
    InterviewNotFound,
    NoDataToExport,
)
from ..core.storage.object_store import ObjectStore
from ..observability.logger import get_logger, setup_logging

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="irap",
    help="Interview Review & Assessment Pipeline - review and export candidate assessments",
    add_completion=False,
)


def _get_settings() -> ReportSettings:
    settings = load_settings()
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        log_file=settings.logging.file,
    )
    return settings


def _get_pipeline(store_dir: Path | None) -> ReportPipeline:
    """Build the pipeline over the configured (or given) object store."""
    settings = _get_settings()
    store = ObjectStore(store_dir or settings.storage.object_store_dir)
    return ReportPipeline(store, settings)


def _score(value: float) -> str:
    return f"{value:g}/10"


StoreOption = Annotated[
    Path | None,
    typer.Option("--store", "-s", help="Object store directory (defaults to config)"),
]
InterviewOption = Annotated[str, typer.Option("--interview-id", "-i", help="Interview identifier")]


@app.command()
def interviews(
    owner: Annotated[
        str | None,
        typer.Option("--owner", help="Only interviews scheduled by this recruiter email"),
    ] = None,
    store: StoreOption = None,
):
    """List scheduled interviews, newest first."""
    pipeline = _get_pipeline(store)
    scheduled = pipeline.scheduled_interviews(owner)
    if not scheduled:
        console.print("[yellow]You don't have any interviews yet[/yellow]")
        return

    table = Table(title="Scheduled Interviews", show_header=True, header_style="bold magenta")
    table.add_column("Interview ID", style="cyan")
    table.add_column("Position")
    table.add_column("Duration")
    table.add_column("Created")
    table.add_column("Candidates", justify="right")

    for item in scheduled:
        table.add_row(
            item.interview_id,
            item.job_position or "N/A",
            item.duration or "N/A",
            item.created_at.strftime("%d %b %Y") if item.created_at else "N/A",
            str(len(item.interview_results)),
        )

    console.print(table)


@app.command()
def interview(interview_id: InterviewOption, store: StoreOption = None):
    """Show interview details and the generated questions."""
    pipeline = _get_pipeline(store)
    detail = pipeline.store.load_interview(interview_id)
    if detail is None:
        console.print(f"[yellow]No interview found:[/yellow] {interview_id}")
        raise typer.Exit(code=1)

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Position", detail.job_position or "N/A")
    table.add_row("Duration", detail.duration or "N/A")
    table.add_row(
        "Created on",
        detail.created_at.strftime("%B %d %Y, %I:%M %p") if detail.created_at else "N/A",
    )
    table.add_row("Type", parse_interview_type(detail) or "N/A")
    table.add_row("Candidates", str(len(detail.interview_results)))
    console.print(table)

    if detail.job_description:
        console.print("\n[bold]Job Description[/bold]")
        console.print(detail.job_description)

    questions = parse_question_list(detail)
    console.print("\n[bold]Interview Questions[/bold]")
    if not questions:
        console.print("[dim]No questions available[/dim]")
    for index, question in enumerate(questions, start=1):
        console.print(f"{index}. {question}")


@app.command()
def candidates(interview_id: InterviewOption, store: StoreOption = None):
    """List candidates of an interview, one row per candidate."""
    pipeline = _get_pipeline(store)
    try:
        rows = pipeline.candidate_rows(interview_id)
    except InterviewNotFound as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(code=1)

    if not rows:
        console.print(f"[yellow]No candidates yet for interview:[/yellow] {interview_id}")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Completed")
    table.add_column("Score", justify="right")
    table.add_column("Recommendation")

    for row in rows:
        assessment = row.assessment
        colour = "green" if assessment.is_recommended else "red"
        table.add_row(
            row.name,
            row.email or "No Email",
            row.completed_at.strftime("%Y-%m-%d %H:%M") if row.completed_at else "N/A",
            f"{assessment.overall_score}/10",
            f"[{colour}]{assessment.recommendation}[/{colour}]",
        )

    console.print(table)


@app.command()
def report(
    interview_id: InterviewOption,
    candidate: Annotated[str, typer.Option("--candidate", "-c", help="Candidate email or record id")],
    download_cv: Annotated[
        bool, typer.Option("--download-cv", help="Save the candidate's CV as {name}_CV.pdf")
    ] = False,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory to save the CV to"),
    ] = None,
    store: StoreOption = None,
):
    """Show the feedback report for one candidate."""
    pipeline = _get_pipeline(store)
    try:
        result = pipeline.candidate_report(interview_id, candidate)
    except InterviewNotFound as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(code=1)

    if result is None:
        console.print(f"[yellow]No candidate found:[/yellow] {candidate}")
        raise typer.Exit(code=1)

    row, assets = result.row, result.assets
    assessment = row.assessment

    console.print(f"\n[bold]{row.name}[/bold]  [dim]{row.email or 'No Email'}[/dim]")
    console.print(f"[bold blue]{assessment.overall_score}/10[/bold blue]")
    if assets.picture_available:
        console.print(f"[dim]Picture:[/dim] {assets.picture}")
    if assets.cv_available:
        console.print(f"[green]CV available:[/green] {assets.cv_file_path}")

    skills = Table(title="Skills Assessment", show_header=True, header_style="bold magenta")
    skills.add_column("Skill")
    skills.add_column("Score", justify="right")
    for skill in SkillKey:
        skills.add_row(skill.label, _score(assessment.rating(skill)))
    console.print(skills)

    console.print("\n[bold]Performance Summary[/bold]")
    if assessment.summary_lines:
        for line in assessment.summary_lines:
            console.print(line)
    else:
        console.print("[dim]No summary available[/dim]")

    colour = "green" if assessment.is_recommended else "red"
    console.print(
        Panel(
            assessment.recommendation_message,
            title=f"[{colour}]{assessment.recommendation}[/{colour}]",
            border_style=colour,
        )
    )

    if download_cv:
        path = pipeline.download_cv(result, output_dir)
        if path is None:
            console.print("[yellow]CV not available[/yellow]")
        else:
            console.print(f"[green]CV downloaded successfully![/green] {path}")


@app.command()
def export(
    interview_id: InterviewOption,
    export_format: Annotated[
        ExportFormat,
        typer.Option("--format", "-f", help="Report format", case_sensitive=False),
    ] = ExportFormat.CSV,
    detail: Annotated[
        bool,
        typer.Option("--detail", help="Include completion time and transcript (xlsx only)"),
    ] = False,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory to write the file to"),
    ] = None,
    store: StoreOption = None,
):
    """Export candidate assessments to CSV or a spreadsheet."""
    pipeline = _get_pipeline(store)
    try:
        payload = pipeline.export_interview(interview_id, export_format, detail=detail)
    except InterviewNotFound as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(code=1)
    except NoDataToExport as e:
        console.print(f"[yellow]{e}[/yellow]")
        return
    except ExportSerializationFailure as e:
        logger.error("export_failed", interview_id=interview_id, error=str(e))
        console.print(f"[red]! Export failed:[/red] {e}")
        raise typer.Exit(code=1)

    path = pipeline.deliver(payload, output_dir)
    console.print(
        f"[green]{export_format.value.upper()} downloaded successfully![/green] "
        f"{payload.row_count} candidates -> {path}"
    )


if __name__ == "__main__":
    app()

"""CLI commands for OT Tracker."""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ot_tracker.assessments import (
    IncompleteAssessmentError,
    validate_program_completion,
    validate_rom_completion,
)
from ot_tracker.instruments import (
    DOMAIN_NAMES,
    MAX_TOTAL_SCORE,
    PROGRAM_QUESTIONS,
    RATING_SCALE,
    ROM_MEASUREMENTS,
    ROMRegion,
    region_label,
)
from ot_tracker.models.records import ProgramAssessment, ROMAssessment
from ot_tracker.progress import build_program_report, build_rom_report
from ot_tracker.scoring import ROMStatus, score_program_evaluation, score_rom

app = typer.Typer(
    name="ot-tracker",
    help="Pediatric OT assessment scoring and progress reporting",
    add_completion=False,
)
console = Console()

STATUS_COLORS = {
    ROMStatus.NORMAL: "green",
    ROMStatus.MILD: "yellow",
    ROMStatus.MODERATE: "dark_orange",
    ROMStatus.SEVERE: "red",
}


def _load_json(path: Path) -> Any:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _fail_incomplete(error: IncompleteAssessmentError):
    console.print(f"[red]{error.message}[/red]")
    if error.missing:
        console.print(f"[red]Missing: {', '.join(error.missing)}[/red]")
    raise typer.Exit(1)


def _fmt_average(value) -> str:
    return "-" if value is None else str(value)


@app.command()
def catalog(
    instrument: str = typer.Argument("program", help="Catalog to show: program or rom"),
):
    """Show the program evaluation questions or the ROM movements."""
    if instrument == "program":
        table = Table(title="Program Evaluation")
        table.add_column("#", justify="right")
        table.add_column("Domain")
        table.add_column("Question")
        for q in PROGRAM_QUESTIONS:
            table.add_row(str(q.number), DOMAIN_NAMES[q.domain], q.text)
        console.print(table)

        scale = "\n".join(f"{level.value} = {level.label}" for level in RATING_SCALE)
        console.print(Panel(scale, title="Rating Scale"))
    elif instrument == "rom":
        table = Table(title="Range of Motion")
        table.add_column("Region")
        table.add_column("Movement")
        table.add_column("Normal", justify="right")
        table.add_column("Sides")
        for m in ROM_MEASUREMENTS:
            table.add_row(
                region_label(m.region),
                m.movement,
                f"{m.normal_range.min:g}-{m.normal_range.max:g}°",
                "L/R" if m.bilateral else "-",
            )
        console.print(table)
    else:
        console.print(f"[red]Unknown catalog: {instrument}. Use program or rom[/red]")
        raise typer.Exit(1)


@app.command("score-program")
def score_program(
    file: Path = typer.Argument(..., help="JSON file with responses (or a record with a responses key)"),
    require_complete: bool = typer.Option(
        False, "--require-complete", help="Fail unless every question is answered"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Score a program evaluation response set."""
    data = _load_json(file)
    responses = data.get("responses", data) if isinstance(data, dict) else None
    if not isinstance(responses, dict):
        console.print("[red]Expected a JSON object of question id -> rating[/red]")
        raise typer.Exit(1)

    if require_complete:
        try:
            validate_program_completion(responses)
        except IncompleteAssessmentError as e:
            _fail_incomplete(e)

    score = score_program_evaluation(responses)

    if output_json:
        typer.echo(score.model_dump_json(indent=2))
        return

    table = Table(title="Domain Averages")
    table.add_column("Domain")
    table.add_column("Average", justify="right")
    for domain, average in score.domain_averages.items():
        table.add_row(DOMAIN_NAMES[domain], _fmt_average(average))
    console.print(table)

    console.print(
        Panel(
            f"[bold]Total Score:[/bold] {score.total_score} / {MAX_TOTAL_SCORE}\n"
            f"[bold]Answered:[/bold] {score.answered_count} / {score.question_count}",
            title="Program Evaluation",
            border_style="green" if score.is_complete else "yellow",
        )
    )


@app.command("score-rom")
def score_rom_file(
    file: Path = typer.Argument(..., help="JSON file with measurements (or a record with a measurements key)"),
    regions: Optional[list[str]] = typer.Option(
        None, "--region", "-r", help="Region to score (repeatable); defaults to the file's selected regions"
    ),
    require_complete: bool = typer.Option(
        False, "--require-complete", help="Fail unless a region is selected and a reading entered"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Score a range-of-motion measurement set."""
    data = _load_json(file)
    if not isinstance(data, dict):
        console.print("[red]Expected a JSON object of measurement key -> degrees[/red]")
        raise typer.Exit(1)

    if "measurements" in data:
        measurements = data["measurements"]
        file_regions = data.get("selectedRegions", data.get("selected_regions", []))
    else:
        measurements = data
        file_regions = [region.value for region in ROMRegion]

    selected = regions or file_regions
    try:
        selected = [ROMRegion(region) for region in selected]
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if require_complete:
        try:
            validate_rom_completion(selected, measurements)
        except IncompleteAssessmentError as e:
            _fail_incomplete(e)

    result = score_rom(measurements, selected)

    if output_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    table = Table(title="ROM by Region")
    table.add_column("Region")
    table.add_column("% of Normal", justify="right")
    table.add_column("Status")
    table.add_column("Readings", justify="right")
    for region in result.regions:
        color = STATUS_COLORS[region.status]
        table.add_row(
            region.label,
            f"{region.percentage}%",
            f"[{color}]{region.status.value}[/{color}]",
            str(region.reading_count),
        )
    console.print(table)

    color = STATUS_COLORS[result.overall_status]
    console.print(
        Panel(
            f"[bold]Overall:[/bold] {result.overall_percentage}% "
            f"([{color}]{result.overall_status.value}[/{color}])\n"
            f"[bold]Readings:[/bold] {result.reading_count}",
            title="Range of Motion",
        )
    )


@app.command()
def progress(
    file: Path = typer.Argument(
        ..., help="JSON file with programAssessments and/or romAssessments arrays"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Build program and ROM progress reports from an assessment history."""
    data = _load_json(file)
    if not isinstance(data, dict):
        console.print("[red]Expected a JSON object with assessment arrays[/red]")
        raise typer.Exit(1)

    try:
        program = [ProgramAssessment.model_validate(a) for a in data.get("programAssessments", [])]
        rom = [ROMAssessment.model_validate(a) for a in data.get("romAssessments", [])]
    except ValidationError as e:
        console.print(f"[red]Invalid assessment record: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    program_report = build_program_report(program)
    rom_report = build_rom_report(rom)

    if output_json:
        typer.echo(
            json.dumps(
                {
                    "program": program_report.model_dump(mode="json"),
                    "rom": rom_report.model_dump(mode="json"),
                },
                indent=2,
            )
        )
        return

    console.print(
        Panel(
            f"[bold]Complete assessments:[/bold] {program_report.assessment_count} "
            f"(pre {program_report.pre_count}, post {program_report.post_count})\n"
            f"[bold]Overall average:[/bold] {program_report.overall_average:.2f}",
            title="Program Evaluation Progress",
        )
    )
    if program_report.has_comparison:
        table = Table(title="Pre vs Post")
        table.add_column("Domain")
        table.add_column("Pre", justify="right")
        table.add_column("Post", justify="right")
        table.add_column("Change", justify="right")
        for row in program_report.comparison:
            table.add_row(row.label, f"{row.pre:.2f}", f"{row.post:.2f}", f"{row.improvement:+.2f}")
        console.print(table)

    console.print(
        Panel(
            f"[bold]Complete assessments:[/bold] {rom_report.assessment_count}",
            title="Range of Motion Progress",
        )
    )
    if rom_report.region_comparison:
        table = Table(title="ROM Pre vs Post")
        table.add_column("Region")
        table.add_column("Pre", justify="right")
        table.add_column("Post", justify="right")
        table.add_column("Change", justify="right")
        for row in rom_report.region_comparison:
            table.add_row(row.label, f"{row.pre}%", f"{row.post}%", f"{row.change:+d}")
        console.print(table)
    if rom_report.improvement:
        imp = rom_report.improvement
        console.print(
            f"Overall ROM {imp.pre_percentage}% -> {imp.post_percentage}% "
            f"({imp.improvement:+d} points, {imp.improvement_percentage:+d}%)"
        )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
):
    """Start the REST API server."""
    import uvicorn

    from ot_tracker.config import get_settings

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(f"Starting OT Tracker API server on {host}:{port}")
    uvicorn.run(
        "ot_tracker.api.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version():
    """Show version information."""
    from ot_tracker import __version__

    console.print(f"OT Tracker v{__version__}")

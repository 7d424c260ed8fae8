from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from .config import Settings, configure_logging
from .demo_data import get_demo, list_demos
from .errors import AnalysisError, ChatError, ConfigurationError, ParseError
from .profile.csv_profiler import profile_csv_file
from .profile.summarize import snapshot_to_frame, snapshot_to_json
from .report.builder import render_report_markdown
from .report.schema import validate_report_obj
from .session import AnalysisSession
from .utils import read_json, write_json

app = typer.Typer(add_completion=False, help="Dataset Advisor: profile a CSV and get an ML strategy report.")

# ---- Demo commands ----
demo_app = typer.Typer(help="Bundled example datasets with pre-built reports.")
app.add_typer(demo_app, name="demo")

_EXIT_PARSE = 2
_EXIT_CONFIG = 3


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (default: DATASET_ADVISOR_LOG_LEVEL or WARNING)"
    ),
) -> None:
    configure_logging(log_level or Settings.from_env().log_level)


def _fail(message: str, code: int) -> typer.Exit:
    typer.echo(f"ERROR: {message}", err=True)
    return typer.Exit(code=code)


def _analysis_exit(e: AnalysisError) -> typer.Exit:
    if isinstance(e, ConfigurationError):
        typer.echo(f"ERROR: {e}", err=True)
        typer.echo("Configure OPENAI_API_KEY (and optionally DATASET_ADVISOR_LLM_MODEL) and retry.", err=True)
        return typer.Exit(code=_EXIT_CONFIG)
    return _fail(str(e), 1)


@app.command()
def profile(
    csv: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to CSV file"),
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON instead of a table"),
) -> None:
    """
    Profile a CSV locally: inferred type, unique/missing counts and mean per column.

    Nothing is sent anywhere.
    """
    try:
        snapshot = profile_csv_file(csv)
    except ParseError as e:
        raise _fail(str(e), _EXIT_PARSE) from e

    if as_json:
        typer.echo(snapshot_to_json(snapshot))
        return

    typer.echo(f"{snapshot.source_name}: {snapshot.row_count} rows x {snapshot.column_count} columns")
    typer.echo("")
    typer.echo(snapshot_to_frame(snapshot).to_string(index=False))


@app.command()
def analyze(
    csv: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to CSV file"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the report JSON to this path"),
    markdown: bool = typer.Option(True, "--markdown/--no-markdown", help="Print the report as Markdown"),
) -> None:
    """
    Profile a CSV and request an ML strategy report from the configured model.

    Only column metadata, the row count and the first rows are sent.
    """
    session = AnalysisSession.create(Settings.from_env())
    try:
        session.load_csv(csv.read_bytes(), source_name=csv.name)
    except ParseError as e:
        raise _fail(str(e), _EXIT_PARSE) from e

    try:
        report = session.analyze()
    except AnalysisError as e:
        raise _analysis_exit(e) from e

    if out is not None:
        write_json(out, report.to_json_obj())
        typer.echo(f"Report written: {out}")
    if markdown:
        typer.echo(render_report_markdown(report, session.snapshot))


@app.command()
def chat(
    csv: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to CSV file"),
) -> None:
    """
    Analyze a CSV, then ask follow-up questions about the report.

    Type 'exit' or 'quit' (or send EOF) to leave.
    """
    session = AnalysisSession.create(Settings.from_env())
    try:
        session.load_csv(csv.read_bytes(), source_name=csv.name)
        report = session.analyze()
    except ParseError as e:
        raise _fail(str(e), _EXIT_PARSE) from e
    except AnalysisError as e:
        raise _analysis_exit(e) from e

    typer.echo(f"Problem type: {report.problem_type}; target: {report.target_suggestion}")
    typer.echo(report.summary)
    typer.echo("")
    typer.echo(session.transcript[0].content)

    while True:
        try:
            question = typer.prompt("you", default="", show_default=False)
        except typer.Abort:
            break
        if question.strip().lower() in ("exit", "quit"):
            break
        if not question.strip():
            continue
        try:
            answer = session.ask(question)
        except ChatError as e:
            typer.echo(f"ERROR: {e}", err=True)
            continue
        typer.echo(f"assistant: {answer}")


@app.command()
def render(
    report_json: Path = typer.Argument(..., exists=True, dir_okay=False, help="Report JSON written by `analyze --out`"),
) -> None:
    """Render a saved report as Markdown."""
    try:
        report = validate_report_obj(read_json(report_json))
    except json.JSONDecodeError as e:
        raise _fail(f"{report_json.name} is not valid JSON: {e}", 1) from e
    except AnalysisError as e:
        raise _fail(str(e), 1) from e
    typer.echo(render_report_markdown(report))


@demo_app.command("list")
def list_demo_datasets() -> None:
    """List bundled demo datasets."""
    for d in list_demos():
        typer.echo(f"{d.key}\t{d.name} ({d.task}, {d.snapshot.row_count} rows)")


@demo_app.command("show")
def show_demo(
    key: str = typer.Argument(..., help="Demo key, e.g. titanic"),
    as_json: bool = typer.Option(False, "--json", help="Print the report JSON instead of Markdown"),
) -> None:
    """Show the pre-built report for a demo dataset."""
    try:
        demo = get_demo(key)
    except KeyError as e:
        raise _fail(str(e.args[0]), 1) from e

    if as_json:
        typer.echo(json.dumps(demo.report.to_json_obj(), indent=2, sort_keys=True))
        return
    typer.echo(render_report_markdown(demo.report, demo.snapshot))

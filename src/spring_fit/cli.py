"""CLI entrypoint for the spring-constant pipeline."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from spring_fit.config import load_config
from spring_fit.exceptions import (
    DatasetParseError,
    DatasetReadError,
    DatasetWriteError,
    InvalidConfigError,
    InvalidParameterError,
    SpringFitError,
    TraceWriteError,
)
from spring_fit.generator import generate, make_rng
from spring_fit.regression import fit, load_dataset
from spring_fit.report import format_report
from spring_fit.tracing import RunTraceCollector

app = typer.Typer(help="Generate spring measurements, fit them, and report the spring constant.")
console = Console()
err_console = Console(stderr=True)


def _say(message: str) -> None:
    """Print plain pipeline output."""
    console.print(message, markup=False, highlight=False, soft_wrap=True)


def _vprint(enabled: bool, message: str) -> None:
    """Print verbose progress messages."""
    if enabled:
        console.print(f"[cyan]verbose:[/cyan] {escape(message)}", soft_wrap=True)


def _configure_trace_streaming(trace: RunTraceCollector, enabled: bool) -> None:
    """Enable live trace-event printing in verbose mode."""
    if not enabled:
        trace.set_live_sink(None)
        return

    def _sink(event: dict[str, Any]) -> None:
        parts = [
            f"trace[{event.get('seq', '?')}]",
            f"{event.get('stage', '')}.{event.get('action', '')}",
            f"status={event.get('status', '')}",
        ]
        if event.get("duration_ms") != "":
            parts.append(f"duration_ms={event.get('duration_ms')}")
        if event.get("details"):
            parts.append(f"details={event.get('details')}")
        _vprint(True, " ".join(parts))

    trace.set_live_sink(_sink)


def _fail(
    trace: RunTraceCollector,
    stage: str,
    message: str,
    exc: SpringFitError,
    trace_path: Path | None = None,
) -> NoReturn:
    """Record the failure, print one diagnostic line and exit with status 1."""
    trace.log(stage=stage, action="failed", status="error", details=str(exc))
    _eprint(message)
    if trace_path is not None:
        try:
            trace.write_json(trace_path)
        except TraceWriteError as trace_exc:
            _eprint(f"Error: {trace_exc}")
            raise typer.Exit(code=1) from trace_exc
    raise typer.Exit(code=1) from exc


def _eprint(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


@app.command()
def run(
    config: Annotated[Path | None, typer.Option(help="Optional YAML config path.")] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose/--no-verbose", help="Enable detailed logs."),
    ] = False,
) -> None:
    """Generate data, fit a least-squares line and print the results."""
    trace = RunTraceCollector()
    _configure_trace_streaming(trace, verbose)
    try:
        _vprint(verbose, "Loading runtime configuration.")
        runtime_config = load_config(config_path=config)
    except InvalidConfigError as exc:
        _fail(trace, "config", f"Error: {exc}", exc)
    trace.log(stage="config", action="config_loaded", details=runtime_config.model_dump())
    trace_path = Path(runtime_config.trace_path) if runtime_config.trace_path else None

    data_path = Path(runtime_config.data_path)
    start = time.perf_counter()
    try:
        generate(
            data_path,
            true_slope=runtime_config.true_slope,
            num_points=runtime_config.num_points,
            noise_stddev=runtime_config.noise_stddev,
            rng=make_rng(runtime_config.seed),
            progress_callback=_say,
        )
    except (InvalidParameterError, DatasetWriteError) as exc:
        _fail(trace, "generate", f"Error: {exc}", exc, trace_path)
    trace.log(
        stage="generate",
        action="generated",
        duration_ms=_elapsed_ms(start),
        details={"path": str(data_path), "num_points": runtime_config.num_points},
    )

    _say("\n--- Starting Analysis ---")
    start = time.perf_counter()
    try:
        dataset = load_dataset(data_path)
    except DatasetReadError as exc:
        _fail(trace, "load", f"Error: Could not open {data_path}", exc, trace_path)
    except DatasetParseError as exc:
        _fail(trace, "load", f"Error: {exc}", exc, trace_path)
    trace.log(
        stage="load",
        action="loaded",
        duration_ms=_elapsed_ms(start),
        details={"samples": len(dataset)},
    )

    result = fit(dataset)
    trace.log(stage="fit", action="fitted", details=result.model_dump())

    console.print(
        format_report(len(dataset), result),
        end="",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    trace.log(stage="report", action="reported")

    if trace_path is not None:
        try:
            trace.write_json(trace_path)
        except TraceWriteError as exc:
            _fail(trace, "trace", f"Error: {exc}", exc)
        _vprint(verbose, f"Trace written: {trace_path}")


def main() -> None:
    """Script entrypoint."""
    app()


if __name__ == "__main__":
    main()

# src/stringsink/cli.py
"""stringsink command line: list and run the StringSink benchmark suites.

Exit codes: 0 on success, 1 for configuration problems, unknown suites,
allocation failures and output divergence between implementations.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Literal

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from stringsink import __version__
from stringsink.bench import SUITES, BenchmarkResult, run_benchmarks
from stringsink.contracts.errors import AllocationError, ConformanceError
from stringsink.core.config import BenchSettings, StringSinkSettings, load_settings
from stringsink.core.logging import configure_logging

__all__ = ["app"]

app = typer.Typer(
    name="stringsink",
    help="Benchmark StringSink against an io.BytesIO reference stream.",
    no_args_is_help=True,
)


def _fail(message: str) -> typer.Exit:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    return typer.Exit(1)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"stringsink version {__version__}")
        raise typer.Exit()


def _load_env_overrides(env_file: Path | None) -> bool:
    """Populate STRINGSINK_* variables from a .env file.

    Variables already set in the environment win over the file. Without an
    explicit env_file, python-dotenv searches upward from the working
    directory.

    Raises:
        typer.Exit: If env_file is given but missing
    """
    from dotenv import load_dotenv

    if env_file is None:
        return load_dotenv(override=False)
    if not env_file.is_file():
        raise _fail(f".env file not found: {env_file}")
    return load_dotenv(env_file, override=False)


def _echo_validation_error(title: str, error: ValidationError) -> None:
    typer.secho(title, fg=typer.colors.RED, err=True)
    for detail in error.errors():
        loc = ".".join(str(x) for x in detail["loc"])
        typer.echo(f"  - {loc}: {detail['msg']}", err=True)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Ignore .env files; use only the real environment.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Read STRINGSINK_* overrides from this file instead of searching for .env.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each completed suite (DEBUG level).",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Write log records to stderr as JSON lines.",
    ),
) -> None:
    """Benchmark StringSink against an io.BytesIO reference stream."""
    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "WARNING")

    if no_dotenv:
        if env_file is not None:
            typer.secho("Warning: --no-dotenv set, ignoring --env-file.", fg=typer.colors.YELLOW, err=True)
        return
    _load_env_overrides(env_file)


@app.command()
def suites() -> None:
    """List available benchmark suites."""
    for name in SUITES:
        typer.echo(name)


def _read_settings(path: Path) -> StringSinkSettings:
    try:
        return load_settings(path.expanduser())
    except FileNotFoundError as e:
        raise _fail(str(e)) from None
    except (YamlParserError, YamlScannerError) as e:
        raise _fail(f"invalid YAML in {path}: {e}") from None
    except ValidationError as e:
        _echo_validation_error(f"Configuration errors in {path.name}:", e)
        raise typer.Exit(1) from None


@app.command()
def bench(
    suite: list[str] | None = typer.Option(
        None,
        "--suite",
        "-s",
        help="Suite to run (repeatable). Defaults to every suite.",
    ),
    scale: float | None = typer.Option(
        None,
        "--scale",
        help="Fraction of each suite's full iteration count (0 < scale <= 1).",
    ),
    seed: int | None = typer.Option(
        None,
        "--seed",
        help="Seed for suites that draw random values.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        help="YAML file with sink, bench and logging settings.",
    ),
    output_format: Literal["console", "json"] = typer.Option(
        "console",
        "--format",
        "-f",
        help="'console' prints a table with speedups; 'json' prints one result object per line.",
    ),
) -> None:
    """Time StringSink against ReferenceStream across benchmark suites."""
    if settings is None:
        config = StringSinkSettings()
    else:
        config = _read_settings(settings)
        configure_logging(json_output=config.json_logs, level=config.log_level)

    # Command-line options override the settings file
    try:
        bench_settings = BenchSettings(
            scale=config.bench.scale if scale is None else scale,
            seed=config.bench.seed if seed is None else seed,
            suites=tuple(suite) if suite else config.bench.suites,
        )
    except ValidationError as e:
        _echo_validation_error("Invalid benchmark options:", e)
        raise typer.Exit(1) from None

    try:
        results = run_benchmarks(
            bench_settings.suites,
            scale=bench_settings.scale,
            seed=bench_settings.seed,
            sink_settings=config.sink,
        )
    except ConformanceError as e:
        raise _fail(str(e)) from None
    except AllocationError as e:
        raise _fail(f"{e} (raise sink.max_capacity or lower --scale)") from None

    if output_format == "json":
        for result in results:
            typer.echo(json.dumps(asdict(result)))
    else:
        _echo_table(results)


def _echo_table(results: list[BenchmarkResult]) -> None:
    typer.echo(f"{'suite':<26}{'implementation':<18}{'seconds':>12}{'MB/s':>12}")
    baseline: dict[str, float] = {}
    for result in results:
        typer.echo(f"{result.suite:<26}{result.implementation:<18}{result.seconds:>12.4f}{result.megabytes_per_second:>12.1f}")
        if result.suite not in baseline:
            baseline[result.suite] = result.seconds
        elif result.seconds > 0:
            speedup = baseline[result.suite] / result.seconds
            typer.secho(f"{'':<26}{'speedup':<18}{speedup:>11.2f}x", fg=typer.colors.GREEN if speedup >= 1 else typer.colors.YELLOW)


if __name__ == "__main__":
    app()

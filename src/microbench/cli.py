"""Command-line interface for microbench.

Subcommands:
    microbench run    Time a set of units and print statistics
    microbench dist   Display an exported runtime distribution
"""

from __future__ import annotations

from pathlib import Path

import click

from microbench import __version__
from microbench.logging import setup_logging


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """microbench — compare the speed of competing implementations."""


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@main.command()
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML profile defining the units to time.",
)
@click.option(
    "--unit-def",
    "inline_units",
    type=str,
    multiple=True,
    help="Inline unit: 'name=statement' or 'name=@module:attr' (repeatable).",
)
@click.option(
    "--setup",
    type=str,
    default="",
    help="Setup code shared by inline units.",
)
@click.option("-n", "--count", type=int, default=None, help="Repetitions per unit (default: 1000).")
@click.option(
    "--unit",
    type=click.Choice(["ns", "us", "ms", "s"]),
    default=None,
    help="Display time unit (default: us).",
)
@click.option("--precision", type=int, default=None, help="Digits after the decimal point.")
@click.option("--width", type=int, default=None, help="Minimum column width.")
@click.option(
    "--output",
    "output_base",
    type=click.Path(path_type=Path),
    default=None,
    help="Write '{BASE}-{name}.txt' and '{BASE}-{name}-dist.txt' files.",
)
@click.option("--delimiter", type=str, default=None, help="Field delimiter for --output files.")
@click.option(
    "--compare/--no-compare",
    "do_compare",
    default=None,
    help="Print the pairwise comparison matrix.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show errors.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also log at DEBUG level to this file.",
)
def run(  # noqa: PLR0913
    profile_path: Path | None,
    inline_units: tuple[str, ...],
    setup: str,
    count: int | None,
    unit: str | None,
    precision: int | None,
    width: int | None,
    output_base: Path | None,
    delimiter: str | None,
    do_compare: bool | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Time each unit COUNT times and print runtimes and comparisons.

    \b
    Examples:
        # From a YAML profile
        microbench run --profile strtod.yaml

        # Quick inline comparison
        microbench run -n 100000 \\
            --setup "val = '3.14159265358979'" \\
            --unit-def "float=float(val)" \\
            --unit-def "decimal=__import__('decimal').Decimal(val)"
    """
    from microbench.compare import compare
    from microbench.config import (
        BenchConfig,
        config_from_profile,
        load_profile,
        parse_inline_unit,
        units_from_config,
        validate_config,
    )
    from microbench.display import format_comparison, format_results
    from microbench.export import write_results
    from microbench.formatting import format_section_header
    from microbench.timing import time_units

    log = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    cli_overrides: dict[str, object] = {
        "count": count,
        "unit": unit,
        "precision": precision,
        "width": width,
        "output_base": output_base,
        "delimiter": delimiter,
        "compare": do_compare,
    }

    try:
        if profile_path:
            config = config_from_profile(load_profile(profile_path), cli_overrides=cli_overrides)
        else:
            config = config_from_profile({}, cli_overrides=cli_overrides)
        for spec in inline_units:
            config.units.append(parse_inline_unit(spec, setup=setup))
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    problems = validate_config(config)
    for problem in problems:
        if problem.severity == "warning":
            log.warning("%s: %s", problem.field, problem.message)
    errors = [p for p in problems if p.severity == "error"]
    if errors:
        raise click.UsageError("\n".join(f"{e.field}: {e.message}" for e in errors))

    try:
        units = units_from_config(config)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    ratio = config.unit_ratio
    if config.name:
        click.echo(format_section_header(config.name))
    log.info("Timing %d unit(s), %d iterations each", len(units), config.count)
    runtimes = time_units(config.count, units)

    click.echo(f"runtimes in {config.unit}:")
    click.echo(
        format_results(runtimes, unit=ratio, precision=config.precision, width=config.width)
    )

    if config.compare and len(runtimes) > 1:
        click.echo()
        click.echo(
            format_comparison(
                compare(runtimes),
                unit=ratio,
                precision=config.precision,
                width=config.width,
            )
        )

    if config.output_base is not None:
        ok = write_results(
            config.output_base,
            runtimes,
            unit=ratio,
            delimiter=config.delimiter,
            precision=config.file_precision,
        )
        if not ok:
            click.echo(f"Error: could not write results to {config.output_base}-*", err=True)
            raise SystemExit(1)
        click.echo(f"\nResults written to {config.output_base}-*.txt")


# ---------------------------------------------------------------------------
# dist
# ---------------------------------------------------------------------------


@main.command("dist")
@click.argument("dist_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--unit",
    type=click.Choice(["ns", "us", "ms", "s"]),
    default="ns",
    show_default=True,
    help="Display time unit for bucket labels.",
)
@click.option("--delimiter", type=str, default="\t", help="Field delimiter (default: tab).")
@click.option("--precision", type=int, default=2, show_default=True)
def dist(dist_file: Path, unit: str, delimiter: str, precision: int) -> None:
    """Show the runtime distribution stored in DIST_FILE.

    \b
    Examples:
        microbench dist results-float-dist.txt --unit us
    """
    from microbench.config import resolve_time_unit
    from microbench.display import format_distribution
    from microbench.export import read_distribution

    try:
        histogram = read_distribution(dist_file, delimiter=delimiter)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    name = dist_file.name.removesuffix("-dist.txt")
    click.echo(
        format_distribution(
            name, histogram, unit=resolve_time_unit(unit), precision=precision
        )
    )

"""ctlcov CLI - merge WinCC OA CTL coverage reports."""

from pathlib import Path

import click
import structlog

from ctlcov.cli.utils import discover_documents
from ctlcov.config.loader import load_config
from ctlcov.config.models import CtlCovConfig
from ctlcov.core.errors import ConfigError, DiscoveryError
from ctlcov.core.formatting import pluralize
from ctlcov.core.logging import configure_logging
from ctlcov.core.progress import status
from ctlcov.coverage.cobertura import write_cobertura
from ctlcov.coverage.collect import collect
from ctlcov.coverage.parser import CtlCoverageParser
from ctlcov.coverage.report import print_report

log = structlog.get_logger()


class ConfigurationFailed(click.ClickException):
    """Invalid configuration file or environment value."""

    exit_code = 2


def run_report(
    path: Path,
    *,
    config: CtlCovConfig,
    path_filter: str | None = None,
    verbose: bool = False,
    output: Path | None = None,
    jobs: int = 1,
) -> int:
    """Merge the documents under path, print the report and optionally export.

    Returns:
        Process exit code: 0 once at least one document was located, 1 otherwise.
    """
    try:
        documents = discover_documents(path, config.report.file_pattern)
    except DiscoveryError as e:
        log.info("no_documents", **e.details)
        click.echo(e.message)
        return 1

    click.echo(f"Processing {len(documents)} coverage file(s)...")
    click.echo()

    result = collect(documents, CtlCoverageParser(path_filter), jobs=jobs)
    for failure in result.failures:
        status(f"Warning: {failure.message}", style="warning")
    if result.failures:
        skipped = pluralize(len(result.failures), "unreadable document")
        status(f"Skipped {skipped}", style="warning")

    line_rate = print_report(result.model, verbose=verbose, config=config.report)
    log.info(
        "report_rendered",
        documents=len(result.parsed),
        files=len(result.model.files),
        line_rate=round(line_rate, 2),
    )

    if output is not None:
        write_cobertura(result.model, output, package_name=config.export.package_name)
        click.echo(f"\nCobertura XML written to: {output}")

    return 0


@click.command()
@click.version_option(version="0.1.0", prog_name="ctlcov")
@click.argument("path", default=".", type=click.Path(path_type=Path))
@click.option(
    "-f",
    "--filter",
    "path_filter",
    metavar="TEXT",
    help="Only keep files whose path contains TEXT (case-insensitive)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show the per-file table")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write a Cobertura XML file",
)
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Parse documents on this many threads",
)
@click.option("--pattern", help="Glob for report documents when PATH is a directory")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    path: Path,
    path_filter: str | None,
    verbose: bool,
    output: Path | None,
    jobs: int,
    pattern: str | None,
    debug: bool,
) -> None:
    """Merge WinCC OA coverage reports and print a summary.

    PATH is a coverage report file, or a directory scanned for
    CoverageReport_*.xml (default: current directory).
    """
    overrides: dict[str, dict[str, str]] = {}
    if pattern:
        overrides["report"] = {"file_pattern": pattern}
    if debug:
        overrides["logging"] = {"level": "DEBUG"}

    try:
        config = load_config(**overrides)
    except ConfigError as e:
        raise ConfigurationFailed(e.message) from e

    configure_logging(config=config.logging)
    ctx.exit(
        run_report(
            path,
            config=config,
            path_filter=path_filter,
            verbose=verbose,
            output=output,
            jobs=jobs,
        )
    )


if __name__ == "__main__":
    cli()

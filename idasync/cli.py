"""CLI interface for idasync."""

import logging
from typing import Any, Optional

import click
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from . import __version__
from .exceptions import IdasyncConfigError, IdasyncError
from .output import OutputFormatter
from .sync import SyncConfiguration, SyncEngine, SyncResult, load_config_from_json

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("idasync").setLevel(logging.DEBUG)
    else:
        # Set default logging level to WARNING to suppress debug/info messages
        logging.basicConfig(level=logging.WARNING)


def _display_result(out: OutputFormatter, result: SyncResult, dry_run: bool) -> None:
    if out.json_output:
        data = result.to_dict()
        data["dry_run"] = dry_run
        out.output_json(data)
        return

    if out.quiet:
        return

    if dry_run:
        out.success("Dry run complete!")
    else:
        out.success("Synchronization complete!")
    out.info(f"Files copied: {result.copied}")
    out.info(f"Files deleted: {result.deleted}")
    out.info(f"Files skipped: {result.skipped}")


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("source", type=click.Path(file_okay=True, dir_okay=True))
@click.argument("destination", type=click.Path(file_okay=True, dir_okay=True))
@click.option(
    "--copy-exclude",
    "copy_exclude",
    multiple=True,
    metavar="PATTERN",
    help="Exclude files matching pattern from copying (can be used multiple times)",
)
@click.option(
    "--delete-exclude",
    "delete_exclude",
    multiple=True,
    metavar="PATTERN",
    help="Exclude files matching pattern from deletion (can be used multiple times)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file with copyExclusions, deleteExclusions and other settings",
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would change without changing it"
)
@click.option(
    "--workers",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Number of parallel workers for scanning and copying (default: 1)",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", "json_output", is_flag=True, help="Output result as JSON")
@click.option("--debug", is_flag=True, help="Enable debug logging output")
@click.version_option(version=__version__, prog_name="idasync")
@click.pass_context
def main(
    ctx: Any,
    source: str,
    destination: str,
    copy_exclude: tuple[str, ...],
    delete_exclude: tuple[str, ...],
    verbose: bool,
    config_file: Optional[str],
    dry_run: bool,
    workers: Optional[int],
    quiet: bool,
    json_output: bool,
    debug: bool,
) -> None:
    """Sync SOURCE directory to DESTINATION (left to right only).

    New and modified files are copied, files missing from SOURCE are
    deleted from DESTINATION and emptied directories are removed.

    Patterns support wildcards (* and ?) and are case-insensitive. A
    pattern without a slash matches file names at any depth; a pattern
    with a slash matches the relative path.

    Examples:

        idasync ./src ./dist

        idasync ./src ./dist --verbose

        idasync ./src ./dist --copy-exclude "*.log" --copy-exclude "tmp/*"

        idasync ./src ./dist --delete-exclude "config.json" --verbose
    """
    _configure_logging(debug)
    out = OutputFormatter(json_output=json_output, quiet=quiet)

    try:
        base_config = (
            load_config_from_json(config_file) if config_file else SyncConfiguration()
        )
        config = base_config.merged(
            copy_exclusions=copy_exclude,
            delete_exclusions=delete_exclude,
            verbose=True if verbose else None,
            dry_run=True if dry_run else None,
            max_workers=workers,
        )
    except IdasyncConfigError as e:
        out.error(str(e))
        ctx.exit(1)
        return

    engine = SyncEngine(config, out)

    try:
        engine.validate_source(source)
        if config.verbose or out.quiet or out.json_output:
            result = engine.sync(source, destination)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                TimeElapsedColumn(),
                console=out.console,
                transient=True,
            ) as progress:
                progress.add_task("Synchronizing...", total=None)
                result = engine.sync(source, destination)
    except (IdasyncError, OSError) as e:
        logger.debug("Sync failed", exc_info=True)
        out.error(str(e))
        ctx.exit(1)
        return

    _display_result(out, result, config.dry_run)

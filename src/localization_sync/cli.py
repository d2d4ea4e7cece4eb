# SPDX-License-Identifier: MIT
"""Command-line interface for the localization sync layer."""

import functools
import sys
import traceback
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from . import __version__
from .config import ConfigManager, get_config_manager, set_config_manager
from .enums import ExportFormat
from .exceptions import LocalizationSyncError
from .export import export_records, parse_json_pairs
from .logging_config import get_status_logger, setup_logging
from .models import SyncResult
from .service import get_service


F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_errors(func: F) -> F:
    """Decorator to handle common CLI error patterns.

    Logs the error through the status logger (with a traceback when
    ``--verbose`` is set) and exits with status code 1.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        status_logger = get_status_logger()
        verbose = kwargs.get("verbose", False)

        try:
            return func(*args, **kwargs)
        except (LocalizationSyncError, ValueError, OSError) as e:
            if verbose:
                status_logger.error(f"Error in {func.__name__}: {e}")
                traceback.print_exc()
            else:
                status_logger.error(f"Error: {e}")
            sys.exit(1)

    return wrapper  # type: ignore


def print_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Print version and exit if requested."""
    if value:
        setup_logging()
        get_status_logger().info(f"Localization-Sync version {__version__}")
        ctx.exit(0)


def culture_options(func: F) -> F:
    """Attach the shared --culture/--resource options."""
    func = click.option(
        "--resource",
        "-r",
        "resource_group",
        default=None,
        help="Resource group (defaults to the shared resource)",
    )(func)
    func = click.option(
        "--culture", "-c", required=True, help="Culture identifier, e.g. en-US"
    )(func)
    return func


def _report(result: SyncResult, action: str) -> None:
    status_logger = get_status_logger()
    if not result.store_changed:
        status_logger.info(f"Nothing to {action}")
        return

    status_logger.info(f"{action.capitalize()}: {len(result.keys)} entries synced")
    if result.failed_cache_keys:
        status_logger.warning(
            f"Stored but not cached: {', '.join(result.failed_cache_keys)}"
        )


@click.group()
@click.option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show version information and exit",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a YAML configuration file",
)
def main(config_path: Path | None) -> None:
    """Localization-Sync - manage localized strings and their cache."""
    detail_logger, _ = setup_logging()
    if config_path is not None:
        set_config_manager(ConfigManager(config_path))
    detail_logger.debug("CLI initialized")


@main.command()
@click.argument("name")
@click.argument("value")
@culture_options
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@handle_cli_errors
def insert(
    name: str, value: str, culture: str, resource_group: str | None, verbose: bool
) -> None:
    """Insert a localized string, updating it if it already exists."""
    _report(get_service().crud.insert(name, value, culture, resource_group), "insert")


@main.command()
@click.argument("name")
@click.argument("value")
@culture_options
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@handle_cli_errors
def update(
    name: str, value: str, culture: str, resource_group: str | None, verbose: bool
) -> None:
    """Update an existing localized string."""
    _report(get_service().crud.update(name, value, culture, resource_group), "update")


@main.command()
@click.argument("names", nargs=-1, required=True)
@culture_options
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@handle_cli_errors
def delete(
    names: tuple[str, ...], culture: str, resource_group: str | None, verbose: bool
) -> None:
    """Delete one or more localized strings."""
    crud = get_service().crud
    if len(names) == 1:
        result = crud.delete(names[0], culture, resource_group)
    else:
        result = crud.delete_many(names, culture, resource_group)
    _report(result, "delete")


@main.command(name="import")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@culture_options
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@handle_cli_errors
def import_pairs(
    file_path: str, culture: str, resource_group: str | None, verbose: bool
) -> None:
    """Insert name/value pairs from a JSON object file.

    Entries that already exist are left unchanged.
    """
    pairs = parse_json_pairs(Path(file_path).read_text(encoding="utf-8"))
    _report(get_service().crud.insert_many(pairs, culture, resource_group), "import")


@main.command()
@click.argument("name")
@culture_options
@click.option(
    "--warm/--no-warm", default=True, help="Warm the cache before the lookup"
)
@click.option(
    "--from-snapshot", is_flag=True, help="Warm from the XML snapshot directory"
)
@handle_cli_errors
def get(
    name: str,
    culture: str,
    resource_group: str | None,
    warm: bool,
    from_snapshot: bool,
) -> None:
    """Print the localized value for NAME (or NAME itself when missing)."""
    localizer = get_service().create_localizer(
        culture, resource_group, warm=warm, from_snapshot=from_snapshot
    )
    print(localizer.get_string(name))


@main.command()
@culture_options
@click.option(
    "--format",
    "output_format",
    default=ExportFormat.JSON.value,
    type=click.Choice([f.value for f in ExportFormat]),
    help="Output format",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to a file instead of stdout",
)
@handle_cli_errors
def export(
    culture: str, resource_group: str | None, output_format: str, output: Path | None
) -> None:
    """Export every stored string for a culture and resource group."""
    records = get_service().crud.export_snapshot(culture, resource_group)
    text = export_records(records, output_format)

    if output is None:
        print(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    get_status_logger().info(f"Exported {len(records)} record(s) to {output}")


@main.command()
@culture_options
@click.option(
    "--from-snapshot", is_flag=True, help="Warm from the XML snapshot directory"
)
@handle_cli_errors
def warm(culture: str, resource_group: str | None, from_snapshot: bool) -> None:
    """Populate the cache for a culture and resource group."""
    result = get_service().bulk_loader(from_snapshot).load_sync(culture, resource_group)
    if not result.complete:
        for failure in result.failures:
            get_status_logger().error(f"  {failure.key}: {failure.error}")
        sys.exit(1)


@main.command()
@handle_cli_errors
def config() -> None:
    """Show the complete current configuration."""
    print(get_config_manager().show_config())


if __name__ == "__main__":
    main()

"""Click-based CLI interface for tokensmith."""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn

import click

from . import __version__
from .config import ExtractionConfig, load_config
from .errors import TokenError, as_token_error, handle_exception
from .exporters import ExportTarget, TokenExporter
from .pipeline import ImportResult, TokenImporter
from .token_logging import LogCategory, get_category_logger, setup_logging

logger = get_category_logger(LogCategory.CLI)


@dataclass
class CLIContext:
    """State shared by all commands."""

    config: ExtractionConfig
    verbose: bool = False
    quiet: bool = False


def should_use_color() -> bool:
    """Colorize errors only on a terminal and when NO_COLOR is unset."""
    if "NO_COLOR" in os.environ:
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def fail(error: Exception, verbose: bool = False) -> NoReturn:
    """Print a formatted error and exit with its code."""
    token_error = as_token_error(error)
    if token_error is not None:
        logger.debug(
            f"Command failed: {json.dumps(token_error.to_dict())}",
            extra={"category": token_error.category.value},
        )
    message, exit_code = handle_exception(error, use_color=should_use_color(), verbose=verbose)
    click.echo(message, err=True)
    sys.exit(exit_code)


def source_arguments(f: Any) -> Any:
    """Token source files, merged in precedence order."""
    return click.argument(
        "files",
        nargs=-1,
        required=True,
        type=click.Path(dir_okay=False, path_type=Path),
    )(f)


def output_option(f: Any) -> Any:
    return click.option(
        "--output",
        "-o",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Write to a file instead of stdout",
    )(f)


def run_import(obj: CLIContext, files: tuple[Path, ...], **overrides: Any) -> ImportResult:
    """Import files with the CLI configuration, exiting on errors."""
    config = obj.config.model_copy(update=overrides) if overrides else obj.config
    try:
        result = TokenImporter(config).import_files(list(files))
    except (TokenError, OSError) as e:
        fail(e, obj.verbose)

    for skipped in result.skipped:
        logger.warning(f"Skipped {skipped.name} ({skipped.reason})")
    if not result.has_content:
        logger.warning("No design tokens found in the given sources")
    return result


def emit(obj: CLIContext, text: str, output: Path | None, token_count: int) -> None:
    if output is None:
        click.echo(text, nl=not text.endswith("\n"))
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        fail(e, obj.verbose)
    if not obj.quiet:
        click.echo(f"Wrote {token_count} tokens to {output}", err=True)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Log output format (default from config)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write debug-level logs to this file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    config_path: Path | None,
    log_format: str | None,
    log_file: Path | None,
) -> None:
    """tokensmith - extract, merge and export design tokens."""
    if quiet and verbose:
        click.echo("Error: --quiet and --verbose are mutually exclusive", err=True)
        sys.exit(1)

    try:
        config = load_config(config_path=config_path)
    except TokenError as e:
        fail(e, verbose)

    setup_logging(
        level=config.log_level,
        quiet=quiet,
        verbose=verbose,
        log_file=log_file,
        log_format=log_format or config.log_format,
    )
    ctx.obj = CLIContext(config=config, verbose=verbose, quiet=quiet)


@cli.command()
@source_arguments
@click.option("--full", is_flag=True, help="Print typed tokens with descriptions")
@click.option(
    "--normalize-colors",
    is_flag=True,
    help="Convert hex/rgb/hsl colors to HSL triples",
)
@output_option
@click.pass_obj
def extract(
    obj: CLIContext,
    files: tuple[Path, ...],
    full: bool,
    normalize_colors: bool,
    output: Path | None,
) -> None:
    """Extract and merge tokens from FILES as JSON."""
    overrides = {"normalize_colors": True} if normalize_colors else {}
    result = run_import(obj, files, **overrides)

    data = result.tokens.to_dict() if full else result.simple.to_dict()
    emit(obj, json.dumps(data, indent=2) + "\n", output, result.tokens.total_tokens)


@cli.command()
@source_arguments
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_obj
def summary(obj: CLIContext, files: tuple[Path, ...], as_json: bool) -> None:
    """Print token counts per category for FILES."""
    result = run_import(obj, files)
    counts = result.tokens.category_counts()

    if as_json:
        click.echo(
            json.dumps(
                {
                    "categories": counts,
                    "total": result.tokens.total_tokens,
                    "sources": result.sources,
                    "skipped": [s.to_dict() for s in result.skipped],
                },
                indent=2,
            )
        )
        return

    for category, count in counts.items():
        click.echo(f"{category}: {count}")
    click.echo(f"total: {result.tokens.total_tokens}")


@cli.command()
@source_arguments
@click.option(
    "--format",
    "target",
    type=click.Choice([t.value for t in ExportTarget]),
    required=True,
    help="Output format",
)
@click.option("--normalize-colors", is_flag=True, help="Convert colors to HSL triples first")
@output_option
@click.pass_obj
def export(
    obj: CLIContext,
    files: tuple[Path, ...],
    target: str,
    normalize_colors: bool,
    output: Path | None,
) -> None:
    """Export merged tokens from FILES in another format."""
    overrides = {"normalize_colors": True} if normalize_colors else {}
    result = run_import(obj, files, **overrides)

    text = TokenExporter().export(result.simple, ExportTarget(target))
    emit(obj, text, output, result.tokens.total_tokens)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()

"""Command line interface for gifdex."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any, NoReturn

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from gifdex.collation import (
    CollationError,
    CollationRequest,
    CollationResult,
    DanglingCollectionReferenceError,
    DescriptorNotFoundError,
    DescriptorParseError,
    DuplicateCollectionError,
    InvalidDescriptorNameError,
    MissingArtifactError,
    UnknownTagError,
    collate_tree,
)
from gifdex.config import ConfigError, ConfigManager, GifdexConfig, resolve_with_precedence
from gifdex.manifest import ManifestError, ManifestRepository

console = Console()
error_console = Console(stderr=True)

LOGGER = logging.getLogger(__name__)

# Most specific classes first; the first isinstance match wins.
_ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (UnknownTagError, "unknown_tag"),
    (DanglingCollectionReferenceError, "dangling_collection_reference"),
    (DuplicateCollectionError, "duplicate_collection"),
    (MissingArtifactError, "missing_artifact"),
    (DescriptorNotFoundError, "not_found"),
    (DescriptorParseError, "parse_error"),
    (InvalidDescriptorNameError, "invalid_name"),
    (CollationError, "collation_error"),
    (ManifestError, "manifest_error"),
    (ConfigError, "config_error"),
)


def _error_code(exc: Exception) -> str:
    for error_type, code in _ERROR_CODES:
        if isinstance(exc, error_type):
            return code
    return "internal_error"


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    original: Exception | None = None,
) -> NoReturn:
    """Emit a standardized error and terminate the command.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """
    if json_output:
        console.print_json(data={"error": {"code": code, "message": message}})
        raise SystemExit(1)

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, quiet: bool) -> None:
    if quiet:
        return
    console.print(message)


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    """Return a consistent summary line for CLI commands."""
    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary for {root}: {parts}.[/green]"


def _configure_logging(level: str, *, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def _load_config(json_output: bool) -> GifdexConfig:
    try:
        return ConfigManager().load()
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)


def _run_collation(
    ctx: click.Context,
    *,
    command: str,
    root: str,
    output: str,
    layout: str | None,
    dry_run: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """Collate a tree, write its manifests unless dry_run, and report the outcome."""
    config = _load_config(json_output)
    _configure_logging(config.logging.level, verbose=bool(ctx.obj and ctx.obj.get("verbose")))

    request = CollationRequest(
        root_directory=Path(root),
        output_directory=Path(output),
        layout=layout or config.collation.layout,
        dry_run=dry_run,
    )
    LOGGER.debug("Collating %s with the %s layout", request.root_directory, request.layout)

    try:
        result: CollationResult = collate_tree(
            request, artifact_extension=config.collation.artifact_extension
        )
    except CollationError as exc:
        _handle_cli_error(str(exc), code=_error_code(exc), json_output=json_output, original=exc)

    manifests: dict[str, str] | None = None
    if not request.dry_run:
        repository = ManifestRepository(
            collections_filename=config.output.collections_filename,
            items_filename=config.output.items_filename,
            indent=config.output.indent,
        )
        try:
            paths = repository.save(request.output_directory, result)
        except ManifestError as exc:
            _handle_cli_error(str(exc), code="manifest_error", json_output=json_output, original=exc)
        manifests = {"collections": str(paths.collections), "items": str(paths.items)}

    if json_output:
        console.print_json(
            data={
                "root": str(request.root_directory),
                "layout": request.layout,
                "dry_run": request.dry_run,
                "collections": result.collection_count,
                "items": result.item_count,
                "manifests": manifests,
            }
        )
        return

    if manifests is not None:
        for label, location in manifests.items():
            _emit_message(f"[cyan]Wrote {label} manifest to {location}[/cyan]", quiet=quiet)
    _emit_message(
        _format_summary_line(
            command,
            request.root_directory,
            {
                "collections": result.collection_count,
                "items": result.item_count,
                "dry_run": request.dry_run,
            },
        ),
        quiet=quiet,
    )


def _collate_options(func):
    """Attach the options shared by both collate entry points."""
    options = [
        click.option(
            "--dir",
            "root",
            required=True,
            type=click.Path(exists=True, file_okay=False, path_type=str),
            help="Directory containing the GIF and show metadata.",
        ),
        click.option(
            "--out",
            "output",
            default=".",
            show_default=True,
            type=click.Path(file_okay=False, path_type=str),
            help="Directory in which to store the output manifests.",
        ),
        click.option("--dry-run", is_flag=True, help="Validate without writing manifests."),
        click.option("--json", "json_output", is_flag=True, help="Emit a JSON summary."),
        click.option("--quiet", is_flag=True, help="Suppress non-error output."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _assign_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    node = target
    for segment in path[:-1]:
        existing = node.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise ConfigError(
                f"Cannot assign into '{segment}' because it is not a mapping in the config file."
            )
        node = existing
    node[path[-1]] = value


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="gifdex")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """gifdex collates GIF and show metadata into validated manifests."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@_collate_options
@click.pass_context
def collate(
    ctx: click.Context,
    root: str,
    output: str,
    dry_run: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """Collate a tree where each show descriptor sits beside its directory.

    ``DIR/Show.json`` describes ``DIR/Show/`` and every ``*.json`` file inside
    ``DIR/Show/`` describes one GIF.
    """
    _run_collation(
        ctx,
        command="Collate",
        root=root,
        output=output,
        layout="sibling",
        dry_run=dry_run,
        json_output=json_output,
        quiet=quiet,
    )


@cli.command("collate-nested")
@_collate_options
@click.pass_context
def collate_nested(
    ctx: click.Context,
    root: str,
    output: str,
    dry_run: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """Collate a tree where each show directory holds its own descriptor.

    ``DIR/Show/Show.json`` describes ``DIR/Show/``; the other ``*.json`` files
    directly inside it describe GIFs.
    """
    _run_collation(
        ctx,
        command="Collate",
        root=root,
        output=output,
        layout="nested",
        dry_run=dry_run,
        json_output=json_output,
        quiet=quiet,
    )


@cli.command()
@click.option(
    "--dir",
    "root",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=str),
    help="Directory containing the GIF and show metadata.",
)
@click.option(
    "--layout",
    type=click.Choice(["sibling", "nested"]),
    help="Directory layout (defaults to collation.layout from the config).",
)
@click.option("--json", "json_output", is_flag=True, help="Emit a JSON summary.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def validate(
    ctx: click.Context,
    root: str,
    layout: str | None,
    json_output: bool,
    quiet: bool,
) -> None:
    """Check a metadata tree without writing any manifests."""
    _run_collation(
        ctx,
        command="Validate",
        root=root,
        output=".",
        layout=layout,
        dry_run=True,
        json_output=json_output,
        quiet=quiet,
    )


@cli.group()
def config() -> None:
    """Inspect and update the gifdex configuration file."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    try:
        effective = ConfigManager().load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY."""
    manager = ConfigManager()
    manager.ensure_exists()

    before = manager.read_text().splitlines()
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'output.indent'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        file_data = manager.load_file_overrides()
        _assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=GifdexConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()

    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )
    if diff:
        console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()

"""
Command-line interface for schema emission.

Loads a schema document, emits it with a registered emitter and writes
(or prints) the result.
"""

import argparse
import json
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    emit_code,
    get_emitter,
    get_language_info,
    is_language_supported,
    list_supported_languages,
    write_files,
)
from .codegen.core.config import (
    ConfigError,
    OutputType,
    Formatting,
    get_config_manager,
    load_config,
)
from .codegen.core.emitter import EmitterError, EmitResult
from .codegen.core.schema import Schema, SchemaError, convert_schema_dict
from .codegen.registry import RegistryError, get_registry
from .logging_config import get_logger, setup_logging
from .utils import JSONLoaderError, load_schema

logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="schema-emitter",
        description="Emit type declarations from a model schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-emitter schema.json -o src/models.ts
  schema-emitter schema.json --output-type oneFilePerModel -o "src/models/{{ Name }}.ts"
  schema-emitter --url https://example.com/schema.json --stdout
  schema-emitter --list-languages
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Schema JSON file")
    input_group.add_argument("--url", help="URL to fetch the schema from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the schema from standard input"
    )

    parser.add_argument(
        "--language", "-l", default="typescript", help="Target language (default: typescript)"
    )
    parser.add_argument("--output", "-o", help="Output file, directory or path template")
    parser.add_argument(
        "--output-type",
        choices=[t.value for t in OutputType],
        help="One file per model or a single merged file",
    )
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--formatting",
        choices=[f.value for f in Formatting],
        help="Formatter the output is prepared for",
    )
    parser.add_argument("--indent-size", type=int, help="Spaces per indentation level")
    parser.add_argument("--use-tabs", action="store_true", help="Indent with tabs")

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--stdout", action="store_true", help="Print emitted code instead of writing files"
    )
    output_group.add_argument(
        "--preview",
        action="store_true",
        help="Show emitted code with syntax highlighting instead of writing files",
    )
    output_group.add_argument(
        "--no-overwrite", action="store_true", help="Fail if an output file exists"
    )
    output_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show emission metadata"
    )
    output_group.add_argument(
        "--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages", action="store_true", help="List supported languages and exit"
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level)
    except ValueError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        return 1

    try:
        if args.list_languages:
            return _list_languages()

        if not is_language_supported(args.language):
            supported = ", ".join(list_supported_languages())
            raise CLIError(
                f"Unsupported language '{args.language}' (supported: {supported})"
            )

        schema = _get_schema(args)
        emitter = get_emitter(args.language, _build_config(args))
        result = emit_code(emitter, schema)
        return _output_result(result, args, emitter)

    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except (RegistryError, ConfigError, JSONLoaderError, FileNotFoundError) as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except EmitterError as e:
        logger.exception("Emission aborted")
        err_console.print(f"[red]✗ Emission aborted:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages."""
    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Emitter Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(language, info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


def _get_schema(args: argparse.Namespace) -> Schema:
    """Load the schema from file, URL or stdin."""
    if args.file or args.url:
        _, schema = load_schema(file_path=args.file, url=args.url)
        return schema

    if args.stdin:
        try:
            data = json.load(sys.stdin)
        except json.JSONDecodeError as e:
            raise CLIError(f"Invalid JSON input: {e}") from e
        try:
            return convert_schema_dict(data)
        except SchemaError as e:
            raise CLIError(f"Invalid schema: {e}") from e

    raise CLIError("Input source required (file, --url, or --stdin)")


def _build_config(args: argparse.Namespace):
    """Merge the config file with command-line overrides."""
    overrides = {}

    if args.output:
        overrides["output"] = args.output
    if args.output_type:
        overrides["output_type"] = args.output_type
    if args.formatting:
        overrides["formatting"] = args.formatting
    if args.indent_size is not None:
        overrides["indent_size"] = args.indent_size
    if args.use_tabs:
        overrides["use_tabs"] = True
    if args.no_overwrite:
        overrides["overwrite_existing"] = False

    language = get_registry().resolve(args.language)

    config = load_config(language, custom_config=overrides, config_file=args.config)
    for warning in get_config_manager().validate_config(config, language):
        logger.warning(warning)
    return config


def _output_result(result: EmitResult, args: argparse.Namespace, emitter) -> int:
    """Write or print the emitted files and report."""
    if not result.success:
        err_console.print(f"[red]✗ {result.error_message}[/red]")
        return 1

    if args.stdout:
        sys.stdout.write(result.code)
    elif args.preview:
        for emitted in result.files:
            console.print(
                Panel(
                    Syntax(emitted.contents, emitter.language_name, theme="monokai"),
                    title=emitted.path,
                    border_style="green",
                )
            )
    else:
        written = write_files(result.files, overwrite=emitter.config.overwrite_existing)
        for path in written:
            err_console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")

    if args.verbose and result.metadata:
        table = Table(title="Emission Metadata", box=box.SIMPLE, header_style="bold cyan")
        table.add_column("Property", style="bold")
        table.add_column("Value", style="green")
        for key, value in result.metadata.items():
            table.add_row(key.replace("_", " ").title(), str(value))
        err_console.print(table)

    if result.warnings:
        err_console.print("[yellow]Warnings:[/yellow]")
        for warning in result.warnings:
            err_console.print(f"  [yellow]•[/yellow] {warning}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

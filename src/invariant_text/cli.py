"""
Command-line interface for invariant-text.

Renders Python literals or JSON documents as invariant diagnostic text,
parses invariant text back into scalars, and manages render options.
"""

import ast
import json
import sys
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import numpy as np
import typer
from pydantic import ValidationError

from . import __version__
from .core.config import get_settings
from .core.parser import can_parse, parse_value
from .core.renderer import format_value
from .exceptions import ConfigurationError
from .models.enums import LogLevel
from .models.options import RenderOptions
from .utils.error_handler import ErrorHandler
from .utils.logging import get_logger, setup_logging
from .utils.rich_logging import console, setup_rich_logging

logger = get_logger(__name__)

app = typer.Typer(
    name="invariant-text",
    help="Culture-invariant structural string conversion",
    add_completion=False,
)

PARSE_TYPES: dict[str, type] = {
    "str": str,
    "bool": bool,
    "int": int,
    "float": float,
    "decimal": Decimal,
    "uuid": uuid.UUID,
    "datetime": datetime,
    "date": date,
    "time": time,
    "timedelta": timedelta,
    "int8": np.int8,
    "int16": np.int16,
    "int32": np.int32,
    "int64": np.int64,
    "uint8": np.uint8,
    "uint16": np.uint16,
    "uint32": np.uint32,
    "uint64": np.uint64,
    "float16": np.float16,
    "float32": np.float32,
    "float64": np.float64,
}


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging from settings before any command runs."""
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print_error(f"Invalid settings: {e}")
        sys.exit(1)

    if verbose:
        settings = settings.model_copy(update={"log_level": LogLevel.DEBUG})

    setup_logging(settings)
    if settings.enable_rich_console:
        setup_rich_logging()


@app.command()
def version():
    """Show version information."""
    console.console.print(f"[bold cyan]invariant-text[/bold cyan] version {__version__}")


def _read_value(value: str) -> str:
    if value == "-":
        return typer.get_text_stream("stdin").read().strip()
    return value


def _load_value(text: str, as_json: bool, as_array: bool) -> Any:
    """
    Evaluate the command-line payload.

    Raises:
        ValueError: If the text is not a valid literal/JSON document
    """
    if as_json:
        try:
            loaded = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e
    else:
        try:
            loaded = ast.literal_eval(text)
        except (ValueError, SyntaxError) as e:
            raise ValueError(f"Not a Python literal: {e}") from e

    if as_array:
        return np.array(loaded)
    return loaded


def _effective_options(
    options_file: Optional[Path], overrides: dict[str, Any], unlimited: bool
) -> RenderOptions:
    """
    Combine option sources. Precedence: flags > options file > settings.

    Raises:
        ConfigurationError: If the file or a flag produces invalid options
        FileNotFoundError: If the options file does not exist
    """
    if options_file is not None:
        from .utils.config_export import import_options

        base = import_options(options_file)
    else:
        base = get_settings().to_render_options()

    values = base.model_dump()
    values.update({k: v for k, v in overrides.items() if v is not None})
    if unlimited:
        values["max_collection_items"] = None

    try:
        return RenderOptions(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid render options: {e}") from e


@app.command("format")
def format_command(
    value: str = typer.Argument(..., help="Python literal (or JSON with --json); '-' reads stdin"),
    as_json: bool = typer.Option(False, "--json", help="Interpret VALUE as JSON"),
    as_array: bool = typer.Option(
        False, "--ndarray", help="Convert VALUE to a numpy array before rendering"
    ),
    options_file: Optional[Path] = typer.Option(
        None, "--options-file", "-f", help="YAML file with render options"
    ),
    null_string: Optional[str] = typer.Option(None, "--null-string", help="Text for None"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Nesting depth budget"),
    max_items: Optional[int] = typer.Option(None, "--max-items", help="Items per collection level"),
    unlimited: bool = typer.Option(False, "--unlimited", help="Never truncate collections"),
    show_count: Optional[bool] = typer.Option(
        None, "--count/--no-count", help="Append item counts to collections"
    ),
    show_dimensions: Optional[bool] = typer.Option(
        None, "--dimensions/--no-dimensions", help="Prefix arrays with their shape"
    ),
    separator: Optional[str] = typer.Option(None, "--separator", help="Separator between items"),
    key_value_separator: Optional[str] = typer.Option(
        None, "--kv-separator", help="Separator between map keys and values"
    ),
    decimal_format: Optional[str] = typer.Option(None, "--decimal-format", help="Format spec for Decimal"),
    double_format: Optional[str] = typer.Option(None, "--double-format", help="Format spec for float"),
    float_format: Optional[str] = typer.Option(
        None, "--float-format", help="Format spec for float32/float16"
    ),
    time_span_format: Optional[str] = typer.Option(
        None, "--time-span-format", help="Duration style: c, g or G"
    ),
    date_time_format: Optional[str] = typer.Option(
        None, "--date-time-format", help="strftime pattern for datetimes"
    ),
):
    """
    Render a value as invariant diagnostic text.

    Examples:
        invariant-text format "[1, 2, 3]"
        invariant-text format "{'a': None}" --null-string NULL
        invariant-text format "[[1, 2], [3, 4]]" --ndarray --dimensions
        echo '{"k": [1.5, true]}' | invariant-text format - --json
    """
    overrides = {
        "null_string": null_string,
        "max_nesting_depth": max_depth,
        "max_collection_items": max_items,
        "show_collection_count": show_count,
        "show_array_dimensions": show_dimensions,
        "collection_separator": separator,
        "dictionary_key_value_separator": key_value_separator,
        "decimal_format": decimal_format,
        "double_format": double_format,
        "float_format": float_format,
        "time_span_format": time_span_format,
        "date_time_format": date_time_format,
    }

    try:
        options = _effective_options(options_file, overrides, unlimited)
        payload = _load_value(_read_value(value), as_json, as_array)
    except FileNotFoundError as e:
        console.print_error(str(e))
        sys.exit(1)
    except ConfigurationError as e:
        console.print_error(e.user_message)
        sys.exit(1)
    except ValueError as e:
        console.print_error(str(e))
        sys.exit(1)

    logger.debug("format_command", value_type=type(payload).__name__)
    with ErrorHandler.log_duration("format", log_level="debug"):
        text = format_value(payload, options)
    console.print_result(text)


@app.command("parse")
def parse_command(
    text: str = typer.Argument(..., help="Invariant text to parse; '-' reads stdin"),
    type_name: str = typer.Option("str", "--type", "-t", help="Target type name"),
    strict: bool = typer.Option(
        False, "--strict", help="Fail instead of falling back to the type's default"
    ),
):
    """
    Parse invariant text into a scalar and print it back in invariant form.

    Unparseable text yields the target type's default value unless
    --strict is given.
    """
    target_type = PARSE_TYPES.get(type_name.lower())
    if target_type is None:
        console.print_error(
            f"Unknown type {type_name!r}. Choose from: {', '.join(PARSE_TYPES)}"
        )
        sys.exit(2)

    text = _read_value(text)
    if strict and not can_parse(text, target_type):
        console.print_error(f"{text!r} is not valid {type_name} text")
        sys.exit(1)

    console.print_result(format_value(parse_value(text, target_type)))


@app.command("types")
def types_command():
    """List the type names accepted by `parse --type`."""
    from rich.table import Table

    table = Table(title="Parse Types")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Python type", style="yellow")
    for name, target_type in PARSE_TYPES.items():
        table.add_row(name, f"{target_type.__module__}.{target_type.__qualname__}")
    console.console.print(table)


# Render options management subcommand group
options_app = typer.Typer(help="Render options management commands")
app.add_typer(options_app, name="options")


@options_app.command("export")
def options_export(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: .invariant_text/options.yaml)",
    ),
    minimal: bool = typer.Option(
        False, "--minimal", help="Only write options that differ from the defaults"
    ),
):
    """
    Export the effective render options (settings applied) to YAML.
    """
    from .utils.config_export import export_options

    try:
        options = get_settings().to_render_options()
        output_path = export_options(options, output, include_defaults=not minimal)
    except OSError as e:
        console.print_error(f"Export failed: {e}")
        sys.exit(1)

    console.print_success(f"Render options exported to: {output_path}")


@options_app.command("show")
def options_show(
    options_file: Optional[Path] = typer.Option(
        None, "--options-file", "-f", help="Show options loaded from this YAML file"
    ),
):
    """
    Display the effective render options.

    Values that differ from the library defaults are highlighted.
    """
    try:
        options = _effective_options(options_file, {}, unlimited=False)
    except FileNotFoundError as e:
        console.print_error(str(e))
        sys.exit(1)
    except ConfigurationError as e:
        console.print_error(e.user_message)
        sys.exit(1)

    console.print_options(options, title="Effective Render Options")


@options_app.command("diff")
def options_diff(
    first: Path = typer.Argument(..., help="First options YAML file"),
    second: Path = typer.Argument(..., help="Second options YAML file"),
):
    """Show the render options that differ between two YAML files."""
    from .utils.config_export import import_options, print_options_diff

    try:
        print_options_diff(import_options(first), import_options(second))
    except FileNotFoundError as e:
        console.print_error(str(e))
        sys.exit(1)
    except ConfigurationError as e:
        console.print_error(e.user_message)
        sys.exit(1)

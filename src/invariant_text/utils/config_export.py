"""Render options export/import utilities"""
import yaml
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..models.options import RenderOptions
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_OPTIONS_PATH = Path(".invariant_text/options.yaml")


def export_options(
    options: RenderOptions,
    output_path: Optional[Path] = None,
    include_defaults: bool = True,
) -> Path:
    """
    Export render options to a YAML file.

    Args:
        options: Options to export
        output_path: Where to save (default: .invariant_text/options.yaml)
        include_defaults: Whether to write fields left at their default

    Returns:
        Path to exported options file
    """
    if output_path is None:
        output_path = DEFAULT_OPTIONS_PATH

    output_path.parent.mkdir(parents=True, exist_ok=True)

    options_dict = options.model_dump(mode="json", exclude_defaults=not include_defaults)

    with output_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            options_dict,
            f,
            default_flow_style=False,
            sort_keys=True,
            indent=2,
            allow_unicode=True,
        )

    logger.info(f"Render options exported to {output_path}")
    return output_path


def import_options(options_path: Path) -> RenderOptions:
    """
    Import render options from a YAML file.

    Args:
        options_path: Path to options YAML file

    Returns:
        RenderOptions instance

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is not a YAML mapping of valid options
    """
    if not options_path.exists():
        raise FileNotFoundError(f"Options file not found: {options_path}")

    try:
        with options_path.open(encoding="utf-8") as f:
            options_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {options_path}: {e}", value=str(options_path)) from e

    if options_dict is None:
        options_dict = {}
    if not isinstance(options_dict, dict):
        raise ConfigurationError(
            f"Options file must contain a mapping, got {type(options_dict).__name__}",
            value=str(options_path),
        )

    try:
        options = RenderOptions(**options_dict)
    except ValidationError as e:
        fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error["loc"])
        raise ConfigurationError(
            f"Invalid render options in {options_path}: {e}",
            field=fields or None,
        ) from e

    logger.info(f"Render options loaded from {options_path}")
    return options


def print_options_diff(options1: RenderOptions, options2: RenderOptions) -> None:
    """Print differences between two sets of render options"""
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title="Render Options Diff")
    table.add_column("Option", style="cyan")
    table.add_column("Options 1", style="yellow")
    table.add_column("Options 2", style="green")

    dict1 = options1.model_dump()
    dict2 = options2.model_dump()

    for key in sorted(set(dict1) | set(dict2)):
        val1 = dict1.get(key, "—")
        val2 = dict2.get(key, "—")

        if val1 != val2:
            table.add_row(key, repr(val1), repr(val2))

    console.print(table)

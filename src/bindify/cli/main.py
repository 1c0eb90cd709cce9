"""Main CLI entry point."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from bindify.build import DEFAULT_EXTENSIONS, build_project
from bindify.compiler.exceptions import BindifyError
from bindify.compiler.transform import transform
from bindify.config import load_config, split_config


def _resolve_options(
    config_path: Optional[str], overrides: Dict[str, Any]
) -> Tuple[Dict[str, Any], Optional[Tuple[str, ...]]]:
    """Config file values with CLI flags layered on top."""
    options, extensions = split_config(load_config(config_path))
    options.update({key: value for key, value in overrides.items() if value is not None})
    return options, extensions


@click.group()
@click.version_option(package_name="bindify")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """bindify CLI.

    Run 'bindify transform FILE' to compile one document to stdout.
    Run 'bindify build SRC OUT' to compile every .html file in a directory tree.

    Options are read from bindify.config.py in the current directory when present.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("transform")
@click.argument("file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "-o", "--output", type=click.File("w", encoding="utf-8"), default="-", help="Output file"
)
@click.option("--xhtml", is_flag=True, help="Self-close void elements with ' />'")
@click.option("--binding-attribute", default=None, help="Attribute that receives binding directives")
@click.option("--config", "config_path", default=None, help="Path to a bindify.config.py file")
def transform_command(file, output, xhtml, binding_attribute, config_path) -> None:
    """Compile a single document (use '-' for stdin)."""
    options, _ = _resolve_options(
        config_path, {"xhtml_mode": xhtml or None, "binding_attribute": binding_attribute}
    )
    try:
        result = transform(file.read(), options)
    except BindifyError as e:
        raise click.ClickException(str(e))
    output.write(result)


@cli.command("build")
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--ext", "extensions", multiple=True, help="File extension to transform (repeatable)"
)
@click.option("--xhtml", is_flag=True, help="Self-close void elements with ' />'")
@click.option("--config", "config_path", default=None, help="Path to a bindify.config.py file")
def build_command(source_dir, output_dir, extensions, xhtml, config_path) -> None:
    """Compile every matching file under SOURCE_DIR into OUTPUT_DIR."""
    options, configured_extensions = _resolve_options(config_path, {"xhtml_mode": xhtml or None})
    extensions = extensions or configured_extensions or DEFAULT_EXTENSIONS

    click.echo(f"🔨 Building {source_dir} -> {output_dir}")
    try:
        written = build_project(source_dir, output_dir, extensions, options)
    except BindifyError as e:
        raise click.ClickException(str(e))
    click.echo(f"✅ Build complete ({len(written)} file(s))")


if __name__ == "__main__":
    cli()

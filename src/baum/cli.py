"""Command-line interface for Baum trees."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .codec import MAGIC, BinaryCodec
from .models import Node
from .parser import TextParser
from .printer import DEFAULT_MAX_WIDTH, PrettyPrinter
from .types import BaumError
from .utils import SizeCalculator, ValidationUtils


def _load_tree(input_file: Path) -> Node:
    """Read a tree from a binary or text file, detected by the magic prefix."""
    raw = input_file.read_bytes()
    if raw.startswith(MAGIC):
        return BinaryCodec().deserialize(raw)
    return TextParser().parse_node(raw)


def _fail(message: str) -> None:
    click.echo(f"❌ Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose: bool):
    """Baum - Convert and inspect byte trees in binary and text form."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output file (default: INPUT_FILE with a .baum suffix)')
def encode(input_file: Path, output: Path):
    """Encode a text tree into the binary format."""
    output = output or input_file.with_suffix('.baum')

    try:
        node = TextParser().parse_node(input_file.read_text(encoding='ascii'))
        data = BinaryCodec().serialize(node)
        output.write_bytes(data)
    except (BaumError, OSError, UnicodeDecodeError) as e:
        _fail(str(e))

    click.echo(f"✅ Wrote {len(data)} bytes to {output}")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--width', '-w', default=DEFAULT_MAX_WIDTH, show_default=True,
              help='Maximum line width')
def decode(input_file: Path, width: int):
    """Decode a binary tree and pretty-print it."""
    _check_width(width)
    try:
        node = BinaryCodec().deserialize(input_file.read_bytes())
    except (BaumError, OSError) as e:
        _fail(str(e))

    click.echo(PrettyPrinter(width).format(node))


@main.command(name='format')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--width', '-w', default=DEFAULT_MAX_WIDTH, show_default=True,
              help='Maximum line width')
def format_tree(input_file: Path, width: int):
    """Pretty-print a text or binary tree."""
    _check_width(width)
    try:
        node = _load_tree(input_file)
    except (BaumError, OSError) as e:
        _fail(str(e))

    click.echo(PrettyPrinter(width).format(node))


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--max-depth', type=int, help='Maximum allowed nesting depth')
@click.option('--max-length', type=int, help='Maximum allowed leaf length or child count')
def check(input_file: Path, max_depth: int, max_length: int):
    """Check that a file holds a well-formed tree."""
    try:
        node = _load_tree(input_file)
    except (BaumError, OSError) as e:
        _fail(str(e))

    result = ValidationUtils.validate_tree(node, max_depth=max_depth, max_length=max_length)
    for warning in result.warnings:
        click.echo(f"⚠️  {warning}")

    if not result.is_valid:
        click.echo("❌ Tree is not valid:")
        for error in result.errors:
            click.echo(f"   • {error.location}: {error.message}")
        sys.exit(1)

    click.echo(f"✅ {input_file} holds a valid tree")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def info(input_file: Path):
    """Show statistics about a tree."""
    try:
        node = _load_tree(input_file)
    except (BaumError, OSError) as e:
        _fail(str(e))

    stats = SizeCalculator().get_tree_statistics(node)
    click.echo(f"📊 {input_file}")
    for key, value in stats.to_dict().items():
        click.echo(f"   {key}: {value}")


def _check_width(width: int) -> None:
    result = ValidationUtils.validate_width(width)
    if not result.is_valid:
        _fail("; ".join(error.message for error in result.errors))


if __name__ == '__main__':
    main()

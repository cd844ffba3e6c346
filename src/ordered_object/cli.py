"""Command-line interface for ordered JSON objects."""

import json
import logging
import sys
import click
from pathlib import Path
from typing import Optional
from . import __version__
from .codec import dumps
from .ordered_object import OrderedObject
from .types import OrderedObjectError


def _load(input_file: Path) -> OrderedObject:
    return OrderedObject.from_json(input_file.read_bytes(), nested_ordered=True)


def _emit(obj: OrderedObject, output: Optional[Path], indent: Optional[int] = None) -> None:
    text = obj.to_json(indent=indent)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        logging.getLogger(__name__).info(f"Wrote {len(obj)} keys to {output}")
    else:
        click.echo(text)


def _fail(error: object) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose: bool):
    """Ordered Object - read, edit and rewrite JSON objects without reordering keys."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


@main.command(name="format")
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path')
@click.option('--indent', '-i', type=click.IntRange(min=0), default=None, help='Indent nested levels by N spaces')
def format_command(input_file: Path, output: Optional[Path], indent: Optional[int]):
    """Rewrite a JSON object file, keeping key order at every level."""
    try:
        _emit(_load(input_file), output, indent)
    except (OrderedObjectError, OSError) as e:
        _fail(e)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def keys(input_file: Path):
    """Print the top-level keys in order, one per line."""
    try:
        obj = _load(input_file)
    except (OrderedObjectError, OSError) as e:
        _fail(e)
    for key in obj.keys():
        click.echo(key)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('key')
def get(input_file: Path, key: str):
    """Print the JSON value stored under KEY."""
    try:
        obj = _load(input_file)
        value, found = obj.get(key)
        if not found:
            _fail(f"key {key!r} not found")
        click.echo(dumps(value))
    except (OrderedObjectError, OSError) as e:
        _fail(e)


@main.command(name="set")
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('key')
@click.argument('value')
@click.option('--string', '-s', 'as_string', is_flag=True, help='Store VALUE as a string instead of parsing it as JSON')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path')
def set_command(input_file: Path, key: str, value: str, as_string: bool, output: Optional[Path]):
    """Set KEY to VALUE; an existing key keeps its position."""
    try:
        obj = _load(input_file)
        if as_string:
            parsed = value
        else:
            try:
                parsed = json.loads(value, object_pairs_hook=OrderedObject.from_pairs)
            except ValueError as e:
                reason = e.msg if isinstance(e, json.JSONDecodeError) else e
                raise click.BadParameter(f"not valid JSON ({reason}); use --string for plain text",
                                         param_hint="VALUE")
        obj.set(key, parsed)
        _emit(obj, output)
    except (OrderedObjectError, OSError) as e:
        _fail(e)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('key')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path')
def delete(input_file: Path, key: str, output: Optional[Path]):
    """Remove KEY; the remaining keys keep their order."""
    try:
        obj = _load(input_file)
        obj.delete(key)
        _emit(obj, output)
    except (OrderedObjectError, OSError) as e:
        _fail(e)


if __name__ == '__main__':
    main()

import json
import logging

import click
import jinja2

from .pipeline import CompilerConfig, SchemaTreeError, SchemaTreePipeline, render_bindings
from .pipeline.binding import IndexSegment


def load_json(path, what):
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"cannot read {what} {path}: {e}") from e


def load_config(config_path, root_name=None):
    if config_path is not None:
        data = load_json(config_path, "config")
        if not isinstance(data, dict):
            raise click.ClickException(f"config {config_path} must hold a JSON object")
        try:
            config = CompilerConfig.from_dict(data)
        except ValueError as e:
            raise click.ClickException(f"invalid config {config_path}: {e}") from e
    else:
        config = CompilerConfig()

    # CLI flag overrides the config file
    if root_name:
        config.root_name = root_name

    return config


def load_tree(path):
    return load_json(path, "tree")


def descend(proxy, name):
    # Decimal segments pick a position only right after an array field
    last = proxy.segments[-1] if proxy.segments else None
    if name.isdecimal() and isinstance(last, IndexSegment) and last.index is None:
        return proxy.at(int(name))
    return proxy.field(name)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug information")
def schema_tree(verbose):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@schema_tree.command("compile")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--root-name", default=None, type=str, help="Name of the root type (default: ROOT)")
@click.option("--indent", default=2, type=int)
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
def compile_command(config, root_name, indent, path, output):
    """Compile the schema tree in PATH and write the schema to OUTPUT."""
    pipeline = SchemaTreePipeline(load_tree(path), load_config(config, root_name))

    try:
        out = pipeline.generate(indent=indent)
    except SchemaTreeError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w") as f:
        f.write(out + "\n")


@schema_tree.command("bind")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--as",
    "render_as",
    default="path",
    type=click.Choice(["path", "template", "backref"]),
    help="How to materialize the binding",
)
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("fields", nargs=-1)
def bind_command(config, render_as, path, fields):
    """Print the binding reached by descending FIELDS (a number after an array field selects a position)."""
    proxy = SchemaTreePipeline(load_tree(path), load_config(config)).bindings()

    try:
        for name in fields:
            proxy = descend(proxy, name)
    except SchemaTreeError as e:
        raise click.ClickException(str(e)) from e

    if render_as == "template":
        click.echo(proxy.template())
    elif render_as == "backref":
        click.echo(proxy.backref())
    else:
        click.echo(proxy.path())


@schema_tree.command("render")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--name", "-n", default="data", type=str, help="Template variable holding the root binding")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("template", type=click.Path(exists=True, resolve_path=True))
def render_command(config, name, path, template):
    """Render TEMPLATE with the bindings of the schema tree in PATH."""
    proxy = SchemaTreePipeline(load_tree(path), load_config(config)).bindings()

    with open(template, encoding="utf-8") as f:
        source = f.read()

    try:
        out = render_bindings(source, **{name: proxy})
    except (SchemaTreeError, jinja2.TemplateError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(out, nl=False)

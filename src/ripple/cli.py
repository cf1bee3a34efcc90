"""Command-line interface for Ripple."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from ripple import __version__
from ripple.config import (
    ProjectConfig,
    find_project_root,
    load_config,
    parse_alias_option,
    save_config,
    set_config_value,
)
from ripple.exceptions import RippleError
from ripple.graph.resolver import normalize_path
from ripple.ui.console import Console, configure_logging

console = Console()

CHANGE_TYPES = ["add", "modify", "delete"]
OUTPUT_FORMATS = ["tree", "text", "json", "markdown"]


def _get_project_root(path: str | None = None) -> Path:
    """Resolve the project root: --path, else the nearest .ripple dir, else cwd."""
    if path:
        root = Path(normalize_path(path))
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root
    return find_project_root() or Path.cwd().resolve()


def _load_project_config(path: str | None, aliases: tuple[str, ...] = ()) -> ProjectConfig:
    root = _get_project_root(path)
    try:
        config = load_config(root)
        if aliases:
            config.resolver.aliases = dict(parse_alias_option(a) for a in aliases)
    except RippleError as e:
        console.error(str(e))
        sys.exit(1)
    return config


@click.group()
@click.version_option(version=__version__, prog_name="ripple")
def main():
    """Ripple - see which files a change will ripple through."""
    pass


@main.command()
@click.option("--entry", "-e", required=True, help="Entry file of the project.")
@click.option("--file", "-f", "changed_file", required=True, help="Changed file path.")
@click.option(
    "--type", "-t", "change_type", required=True,
    type=click.Choice(CHANGE_TYPES), help="Change type.",
)
@click.option("--exports", "-x", default="", help="Modified exports, comma separated.")
@click.option("--alias", "aliases", multiple=True, help="Import alias as PREFIX=DIR.")
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option(
    "--format", "output_format", default="tree",
    type=click.Choice(OUTPUT_FORMATS), help="Output format.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log traversal details to stderr.")
def analyze(
    entry: str,
    changed_file: str,
    change_type: str,
    exports: str,
    aliases: tuple[str, ...],
    path: str | None,
    output_format: str,
    verbose: bool,
):
    """Show every file affected by a change to FILE."""
    from ripple.analysis import ChangeDescriptor, run_analysis
    from ripple.render import render_json, render_markdown, render_text

    configure_logging(verbose)
    config = _load_project_config(path, aliases)

    change = ChangeDescriptor(
        target_file=normalize_path(changed_file),
        change_type=change_type,
        modified_exports=exports.split(",") if exports else [],
    )

    try:
        graph, tree = run_analysis(normalize_path(entry), change, config)
    except RippleError as e:
        console.error(f"Analysis failed: {e}")
        sys.exit(1)

    root = str(config.root)
    if output_format == "json":
        click.echo(render_json(tree))
    elif output_format == "markdown":
        click.echo(render_markdown(tree, root))
    elif output_format == "text":
        click.echo("File Change Analysis Result:")
        click.echo("===========================")
        click.echo(render_text(tree, root))
    else:
        console.show_impact(tree, root)

    if graph.failures and output_format == "tree":
        console.warning(f"{len(graph.failures)} file(s) could not be parsed")


@main.command()
@click.option("--entry", "-e", required=True, help="Entry file of the project.")
@click.option("--alias", "aliases", multiple=True, help="Import alias as PREFIX=DIR.")
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option("--verbose", "-v", is_flag=True, help="Log traversal details to stderr.")
def graph(entry: str, aliases: tuple[str, ...], path: str | None, verbose: bool):
    """Show the import graph and export table reachable from ENTRY."""
    from ripple.graph import GraphBuilder

    configure_logging(verbose)
    config = _load_project_config(path, aliases)

    entry_path = Path(normalize_path(entry))
    if not entry_path.is_file():
        console.error(f"Entry file does not exist: {entry}")
        sys.exit(1)

    dep_graph = GraphBuilder(config).build(entry_path)
    root = str(config.root)
    console.show_stats(dep_graph.stats())
    console.show_graph(dep_graph, root)


# Config subcommands
@main.group()
def config():
    """View or modify Ripple configuration."""
    pass


@config.command("show")
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_show(path: str | None):
    """Show current configuration."""
    cfg = _load_project_config(path)
    console.plain(json.dumps(cfg.model_dump(), indent=2))


@config.command("get")
@click.argument("key")
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_get(key: str, path: str | None):
    """Get a configuration value (e.g., resolver.extensions)."""
    cfg = _load_project_config(path)
    data = cfg.model_dump()
    for part in key.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        else:
            console.error(f"Key not found: {key}")
            sys.exit(1)
    console.plain(json.dumps(data) if isinstance(data, (dict, list)) else str(data))


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_set(key: str, value: str, path: str | None):
    """Set a configuration value. JSON values are accepted for lists and maps."""
    root = _get_project_root(path)
    cfg = _load_project_config(str(root))

    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    try:
        cfg = set_config_value(cfg, key, parsed)
    except (KeyError, RippleError) as e:
        console.error(str(e))
        sys.exit(1)

    save_config(root, cfg)
    console.success(f"Set {key} = {value}")


if __name__ == "__main__":
    main()

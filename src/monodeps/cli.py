# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from monodeps import settings
from monodeps.graph import build_dependency_graph
from monodeps.registry import ProjectRegistry, RegistryError
from monodeps.ui.console import Console, set_console, get_console


SUGGESTIONS = {
    "config-not-found": "Run inside a Rush monorepo or point at its config:\n  monodeps graph --rush-json path/to/rush.json",
    "manifest-not-found": "Check the projectFolder entries in rush.json.",
    "duplicate-project": "Each packageName in rush.json must be unique.",
}


def load_registry(rush_json: str | None, start_folder: str | None) -> ProjectRegistry:
    """
    Resolve the project registry from CLI options.
    
    Args:
        rush_json: Explicit rush.json path (wins over everything else)
        start_folder: Folder to start the upward rush.json search from
        
    Returns:
        Loaded ProjectRegistry
    """
    if rush_json:
        return ProjectRegistry.load(Path(rush_json))
    return ProjectRegistry.discover(Path(start_folder) if start_folder else None)


DEFAULT_INDENT = 2


def resolve_indent(indent: int | None) -> int:
    """
    Pick the JSON indent: --indent, else $MONODEPS_INDENT, else 2.
    A malformed environment value falls back to 2.
    """
    if indent is not None:
        return indent
    try:
        return int(settings.INDENT)
    except (TypeError, ValueError):
        get_console().print_debug(
            f"ignoring MONODEPS_INDENT={settings.INDENT!r}, using {DEFAULT_INDENT}"
        )
        return DEFAULT_INDENT


def report_registry_error(ctx, e: RegistryError) -> None:
    console = get_console()
    details = [f"{k}: {v}" for k, v in e.details.items()]
    console.print_error(
        "Could not load monorepo projects",
        e.message,
        details=details or None,
        suggestion=SUGGESTIONS.get(e.kind),
    )
    if ctx.obj.get("debug", False):
        console.print_exception(e)


def registry_options(fn):
    fn = click.option(
        "--start-folder",
        default=None,
        type=click.Path(exists=True, file_okay=False),
        help="Folder to search upward from for rush.json (defaults to cwd)",
    )(fn)
    fn = click.option(
        "--rush-json",
        default=None,
        type=click.Path(dir_okay=False),
        help="Path to rush.json (defaults to $MONODEPS_RUSH_JSON or upward search)",
    )(fn)
    return fn


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """monodeps: dependency graph of the projects in a monorepo."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@registry_options
@click.option("--indent", default=None, type=int, help="JSON indentation (defaults to $MONODEPS_INDENT or 2)")
@click.option("--output", default=None, type=click.Path(dir_okay=False), help="Write the graph to this file instead of stdout")
@click.pass_context
def graph(ctx, rush_json, start_folder, indent, output):
    """Print the dependency graph as JSON."""
    console = get_console()
    
    try:
        registry = load_registry(rush_json, start_folder)
        dependency_graph = build_dependency_graph(registry.projects, registry.is_project)
        edges = sum(len(entry.dependencies) for entry in dependency_graph.values())
        console.print_debug(f"graph: {len(dependency_graph)} projects, {edges} edges")
        
        indent = resolve_indent(indent)
        if output:
            with open(output, "w", encoding="utf-8") as f:
                console.print_graph(dependency_graph, indent=indent, stream=f)
            console.print_info(f"Wrote {len(dependency_graph)} projects to {output}")
        else:
            console.print_graph(dependency_graph, indent=indent)
    
    except RegistryError as e:
        report_registry_error(ctx, e)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@registry_options
@click.pass_context
def projects(ctx, rush_json, start_folder):
    """List the registered projects in rush.json order."""
    console = get_console()
    
    try:
        registry = load_registry(rush_json, start_folder)
        console.print_projects(registry.names())
    except RegistryError as e:
        report_registry_error(ctx, e)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


if __name__ == "__main__":
    cli()

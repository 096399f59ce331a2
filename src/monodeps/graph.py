# graph.py
from __future__ import annotations

from typing import Callable, Iterable, Mapping, Optional, Tuple

from pyuca import Collator

from .model import DependencyGraph, ProjectEntry, ProjectManifest

# Unicode Collation Algorithm, default (root) ordering
_collator: Optional[Collator] = None


def name_collation_key(name: str) -> tuple:
    """Case-insensitive, locale-aware sort key for a project name."""
    global _collator
    if _collator is None:
        _collator = Collator()
    return _collator.sort_key(name.lower())


def get_entry(project_name: str, graph: DependencyGraph) -> ProjectEntry:
    """
    Return the graph entry for `project_name`, creating an empty one if absent.

    Side effect: inserts a new entry into `graph` on first access. A project can
    show up as someone's dependency before its own manifest is visited.
    """
    entry = graph.get(project_name)
    if entry is None:
        entry = ProjectEntry()
        graph[project_name] = entry
    return entry


def populate_entry_dependencies(
    entry: ProjectEntry,
    project_name: str,
    declared: Optional[Mapping[str, str]],
    graph: DependencyGraph,
    is_in_repo_project: Callable[[str], bool],
) -> int:
    """
    Record the in-repo edges of one dependency table (runtime or dev).

    For every declared name that is an in-repo project, the name is appended to
    `entry.dependencies` and `project_name` to that dependency's `dependents`.
    External packages and self-references are skipped. Names declared in both
    tables are recorded once per table (no dedupe).

    Returns:
        Number of edges added.
    """
    added = 0
    for dependency_name in (declared or {}):
        if dependency_name == project_name:
            continue
        if not is_in_repo_project(dependency_name):
            continue

        entry.dependencies.append(dependency_name)
        get_entry(dependency_name, graph).dependents.append(project_name)
        added += 1

    return added


def build_dependency_graph(
    projects: Iterable[ProjectManifest],
    is_in_repo_project: Callable[[str], bool],
) -> DependencyGraph:
    """
    Build the bidirectional dependency graph of a monorepo.

    Requires:
      - projects: every in-repo project, each visited exactly once as owner
      - is_in_repo_project: membership test used to drop external packages

    Cycles are recorded like any other edge; nothing is validated.
    The result is ordered by `sort_by_dependency_count`.
    """
    graph: DependencyGraph = {}

    for project in projects:
        entry = get_entry(project.name, graph)

        populate_entry_dependencies(
            entry, project.name, project.dependencies, graph, is_in_repo_project
        )
        populate_entry_dependencies(
            entry, project.name, project.dev_dependencies, graph, is_in_repo_project
        )

    return sort_by_dependency_count(graph)


def _sort_key(item: Tuple[str, ProjectEntry]) -> tuple:
    name, entry = item
    # raw name last: keeps the order total for names that differ only in case
    return (
        len(entry.dependencies),
        len(entry.dependents),
        name_collation_key(name),
        name,
    )


def sort_by_dependency_count(graph: DependencyGraph) -> DependencyGraph:
    """
    Return a copy of `graph` ordered by:
      1. number of dependencies (fewer first)
      2. number of dependents (fewer first)
      3. project name, case-insensitive, locale-aware
    Entries are shared with the input, only the key order changes.
    """
    return dict(sorted(graph.items(), key=_sort_key))

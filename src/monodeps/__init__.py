from .graph import build_dependency_graph, get_entry, populate_entry_dependencies, sort_by_dependency_count
from .model import DependencyGraph, ProjectEntry, ProjectManifest, graph_to_dict
from .registry import ProjectRegistry, RegistryError

__all__ = [
    "build_dependency_graph",
    "get_entry",
    "populate_entry_dependencies",
    "sort_by_dependency_count",
    "DependencyGraph",
    "ProjectEntry",
    "ProjectManifest",
    "graph_to_dict",
    "ProjectRegistry",
    "RegistryError",
]

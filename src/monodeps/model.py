# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional


@dataclass(frozen=True)
class ProjectManifest:
    """
    A monorepo project as seen by the graph builder.

    `dependencies` / `dev_dependencies` map package names to version specifiers.
    None means the field was missing from the manifest and is read as empty.
    """
    name: str
    dependencies: Optional[Mapping[str, str]] = None
    dev_dependencies: Optional[Mapping[str, str]] = None

    # Folder relative to the monorepo root (informational)
    folder: Optional[str] = None


@dataclass
class ProjectEntry:
    """One node of the dependency graph: outgoing and incoming in-repo edges."""
    dependencies: List[str] = field(default_factory=list)
    dependents: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "dependencies": list(self.dependencies),
            "dependents": list(self.dependents),
        }


# project name -> entry, in insertion order
DependencyGraph = Dict[str, ProjectEntry]


def graph_to_dict(graph: DependencyGraph) -> Dict[str, Dict[str, List[str]]]:
    """Plain nested dict (order preserved), ready for json.dumps."""
    return {name: entry.to_dict() for name, entry in graph.items()}

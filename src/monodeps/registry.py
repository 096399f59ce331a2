# registry.py
# Project discovery for Rush monorepos.
# Locates rush.json, reads the registered projects and their package.json
# manifests, and answers "is this name an in-repo project?".

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import settings
from .model import ProjectManifest
from .ui.console import get_console


@dataclass
class RegistryError(Exception):
    """
    Structured discovery error with enough context for clean CLI output.

    kind is one of: config-not-found, invalid-config, manifest-not-found,
    invalid-manifest, duplicate-project
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


def strip_json_comments(text: str) -> str:
    """
    Remove // and /* */ comments from JSON text, leaving string literals intact.
    Rush allows comments in rush.json.
    """
    out: List[str] = []
    i = 0
    n = len(text)
    in_string = False

    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
        elif ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1

    return "".join(out)


def find_rush_json(start_folder: Optional[Path] = None) -> Optional[Path]:
    """
    Walk up from `start_folder` (default: cwd) and return the first rush.json.

    Returns:
        Path to rush.json, or None if no ancestor has one.
    """
    current = (start_folder or Path.cwd()).resolve()
    for folder in (current, *current.parents):
        candidate = folder / settings.CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _read_json(path: Path, kind: str) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RegistryError(kind, f"Could not read {path}", {"error": str(e)}) from e
    try:
        return json.loads(strip_json_comments(text))
    except json.JSONDecodeError as e:
        raise RegistryError(kind, f"Could not parse {path}", {"error": str(e)}) from e


def load_rush_json(path: Path) -> Dict[str, Any]:
    """Parse rush.json (comments allowed) and check it has a project list."""
    data = _read_json(path, "invalid-config")
    if not isinstance(data, dict) or not isinstance(data.get("projects", []), list):
        raise RegistryError(
            "invalid-config",
            f"{path} must be an object with a 'projects' list",
        )
    return data


def _dependency_table(data: Dict[str, Any], key: str, path: Path) -> Optional[Dict[str, str]]:
    table = data.get(key)
    if table is None:
        return None
    if not isinstance(table, dict):
        raise RegistryError(
            "invalid-manifest",
            f"'{key}' in {path} must be an object",
            {"found": type(table).__name__},
        )
    return table


def read_package_json(path: Path) -> Dict[str, Any]:
    """
    Read a project manifest.

    Returns:
        {"name": str | None, "dependencies": dict | None, "devDependencies": dict | None}
        Missing dependency tables stay None.
    """
    if not path.is_file():
        raise RegistryError("manifest-not-found", f"Missing {path.name}", {"path": str(path)})

    data = _read_json(path, "invalid-manifest")
    if not isinstance(data, dict):
        raise RegistryError("invalid-manifest", f"{path} must contain a JSON object")

    return {
        "name": data.get("name"),
        "dependencies": _dependency_table(data, "dependencies", path),
        "devDependencies": _dependency_table(data, "devDependencies", path),
    }


class ProjectRegistry:
    """
    The in-repo project list plus the membership test the graph builder needs.
    """

    def __init__(self, projects: List[ProjectManifest], root: Optional[Path] = None):
        names = [p.name for p in projects]
        if len(set(names)) != len(names):
            dupes = sorted({n for n in names if names.count(n) > 1})
            raise RegistryError("duplicate-project", f"Duplicate project names found: {dupes}")

        self.root = root
        self.projects = list(projects)
        self._by_name = {p.name: p for p in self.projects}

    def is_project(self, name: str) -> bool:
        return name in self._by_name

    def names(self) -> List[str]:
        return [p.name for p in self.projects]

    def __len__(self) -> int:
        return len(self.projects)

    @classmethod
    def load(cls, rush_json: Path) -> ProjectRegistry:
        """
        Build a registry from a rush.json file.

        Each entry needs packageName and projectFolder; the dependency tables
        come from <projectFolder>/package.json.
        """
        console = get_console()
        rush_json = Path(rush_json)
        if not rush_json.is_file():
            raise RegistryError("config-not-found", f"{rush_json} does not exist")

        root = rush_json.resolve().parent
        config = load_rush_json(rush_json)

        projects: List[ProjectManifest] = []
        for item in config.get("projects", []):
            if not isinstance(item, dict) or "packageName" not in item or "projectFolder" not in item:
                raise RegistryError(
                    "invalid-config",
                    "Each project needs 'packageName' and 'projectFolder'",
                    {"entry": item},
                )

            name = item["packageName"]
            folder = item["projectFolder"]
            manifest = read_package_json(root / folder / settings.MANIFEST_FILENAME)
            if manifest["name"] is not None and manifest["name"] != name:
                console.print_debug(
                    f"{folder}: package.json name {manifest['name']!r} differs from packageName {name!r}"
                )

            projects.append(
                ProjectManifest(
                    name=name,
                    dependencies=manifest["dependencies"],
                    dev_dependencies=manifest["devDependencies"],
                    folder=folder,
                )
            )

        console.print_debug(f"registry: {len(projects)} projects from {rush_json}")
        return cls(projects, root=root)

    @classmethod
    def discover(cls, start_folder: Optional[Path] = None) -> ProjectRegistry:
        """
        Locate rush.json (MONODEPS_RUSH_JSON, else upward search) and load it.
        """
        if settings.RUSH_JSON:
            return cls.load(Path(settings.RUSH_JSON))

        start = Path(start_folder) if start_folder else Path.cwd()
        rush_json = find_rush_json(start)
        if rush_json is None:
            raise RegistryError(
                "config-not-found",
                f"Could not find {settings.CONFIG_FILENAME} in {start.resolve()} or any parent folder",
            )
        return cls.load(rush_json)

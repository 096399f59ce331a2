from __future__ import annotations

import json
from pathlib import Path

import pytest

from monodeps import settings
from monodeps.ui.console import Console, set_console


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    monkeypatch.setattr(settings, "RUSH_JSON", None)
    set_console(Console())


def _write_project(root: Path, folder: str, manifest: dict) -> None:
    project_dir = root / folder
    project_dir.mkdir(parents=True, exist_ok=True)
    (project_dir / "package.json").write_text(json.dumps(manifest), encoding="utf-8")


@pytest.fixture
def write_project():
    """Writes <root>/<folder>/package.json from a dict."""
    return _write_project


@pytest.fixture
def rush_repo(tmp_path: Path) -> Path:
    """
    A small Rush monorepo:

      apps/web     -> @acme/ui, @acme/utils (dev), react (external)
      libs/ui      -> @acme/utils
      libs/utils   -> lodash (external)
    """
    rush_json = """// rush.json
{
  "rushVersion": "5.100.0",
  /* registered projects */
  "projects": [
    { "packageName": "@acme/web", "projectFolder": "apps/web" },
    { "packageName": "@acme/ui", "projectFolder": "libs/ui" },
    { "packageName": "@acme/utils", "projectFolder": "libs/utils" }
  ]
}
"""
    (tmp_path / "rush.json").write_text(rush_json, encoding="utf-8")

    _write_project(tmp_path, "apps/web", {
        "name": "@acme/web",
        "dependencies": {"@acme/ui": "workspace:*", "react": "^18.0.0"},
        "devDependencies": {"@acme/utils": "workspace:*"},
    })
    _write_project(tmp_path, "libs/ui", {
        "name": "@acme/ui",
        "dependencies": {"@acme/utils": "workspace:*"},
    })
    _write_project(tmp_path, "libs/utils", {
        "name": "@acme/utils",
        "dependencies": {"lodash": "^4.17.21"},
    })
    return tmp_path

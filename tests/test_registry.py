from __future__ import annotations

import json

import pytest

from monodeps import settings
from monodeps.registry import (
    ProjectRegistry,
    RegistryError,
    find_rush_json,
    read_package_json,
    strip_json_comments,
)
from monodeps.model import ProjectManifest


def test_strip_comments_keeps_strings():
    text = '{"url": "http://x//y", /* c */ "a": "/* not */" // tail\n}'
    assert json.loads(strip_json_comments(text)) == {"url": "http://x//y", "a": "/* not */"}


def test_find_rush_json_walks_up(rush_repo):
    assert find_rush_json(rush_repo / "libs" / "ui") == (rush_repo / "rush.json").resolve()


def test_find_rush_json_missing(tmp_path):
    # tmp_path lives outside any rush repo
    assert find_rush_json(tmp_path) is None


def test_load_projects_in_rush_order(rush_repo):
    registry = ProjectRegistry.load(rush_repo / "rush.json")
    assert registry.names() == ["@acme/web", "@acme/ui", "@acme/utils"]
    assert len(registry) == 3

    web = registry.projects[0]
    assert list(web.dependencies) == ["@acme/ui", "react"]
    assert list(web.dev_dependencies) == ["@acme/utils"]
    assert web.folder == "apps/web"

    utils = registry.projects[2]
    assert utils.dev_dependencies is None


def test_membership(rush_repo):
    registry = ProjectRegistry.load(rush_repo / "rush.json")
    assert registry.is_project("@acme/ui")
    assert not registry.is_project("react")


def test_discover_from_nested_folder(rush_repo):
    registry = ProjectRegistry.discover(rush_repo / "apps" / "web")
    assert registry.root == rush_repo.resolve()


def test_discover_uses_setting(rush_repo, tmp_path_factory, monkeypatch):
    monkeypatch.setattr(settings, "RUSH_JSON", str(rush_repo / "rush.json"))
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    assert len(ProjectRegistry.discover(elsewhere)) == 3


def test_discover_not_found(tmp_path):
    with pytest.raises(RegistryError) as exc:
        ProjectRegistry.discover(tmp_path)
    assert exc.value.kind == "config-not-found"


def test_missing_package_json(rush_repo):
    (rush_repo / "libs" / "ui" / "package.json").unlink()
    with pytest.raises(RegistryError) as exc:
        ProjectRegistry.load(rush_repo / "rush.json")
    assert exc.value.kind == "manifest-not-found"


def test_bad_dependency_table(tmp_path, write_project):
    write_project(tmp_path, "a", {"name": "a", "dependencies": ["b"]})
    with pytest.raises(RegistryError) as exc:
        read_package_json(tmp_path / "a" / "package.json")
    assert exc.value.kind == "invalid-manifest"


def test_invalid_rush_json(tmp_path):
    (tmp_path / "rush.json").write_text("{ not json", encoding="utf-8")
    with pytest.raises(RegistryError) as exc:
        ProjectRegistry.load(tmp_path / "rush.json")
    assert exc.value.kind == "invalid-config"


def test_project_entry_needs_folder(tmp_path):
    (tmp_path / "rush.json").write_text('{"projects": [{"packageName": "a"}]}', encoding="utf-8")
    with pytest.raises(RegistryError) as exc:
        ProjectRegistry.load(tmp_path / "rush.json")
    assert exc.value.kind == "invalid-config"


def test_duplicate_names_rejected():
    with pytest.raises(RegistryError) as exc:
        ProjectRegistry([ProjectManifest("a"), ProjectManifest("a")])
    assert exc.value.kind == "duplicate-project"
    assert "duplicate-project" in str(exc.value)

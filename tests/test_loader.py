"""Tests for ecosystem detection and loader dispatch."""

import pytest

from errors import ProjectLoadError
from repository.loader import detect_ecosystem, load_project


@pytest.mark.parametrize(
    "files, expected",
    [
        (["composer.json"], "composer"),
        (["package.json"], "npm"),
        (["pyproject.toml"], "pypi"),
        (["requirements.txt"], "pypi"),
        (["composer.json", "package.json"], "composer"),
        (["package.json", "pyproject.toml"], "npm"),
    ],
)
def test_detect_ecosystem(tmp_path, files, expected):
    for name in files:
        (tmp_path / name).write_text("{}", encoding="utf-8")
    assert detect_ecosystem(str(tmp_path)) == expected


def test_detect_nothing(tmp_path):
    with pytest.raises(ProjectLoadError):
        detect_ecosystem(str(tmp_path))


def test_explicit_type_overrides_detection(tmp_path):
    (tmp_path / "composer.json").write_text('{"name": "acme/app"}', encoding="utf-8")
    (tmp_path / "package.json").write_text('{"name": "web", "version": "1.0.0"}', encoding="utf-8")

    project = load_project(str(tmp_path), "npm")

    assert project.ecosystem == "npm"
    assert project.root.name == "web"


def test_unknown_type(tmp_path):
    with pytest.raises(ProjectLoadError):
        load_project(str(tmp_path), "cargo")


def test_not_a_directory(tmp_path):
    with pytest.raises(ProjectLoadError):
        load_project(str(tmp_path / "missing"))

"""Tests for the directory walk helpers."""

from __future__ import annotations

from pathlib import Path

from resourcegen.walker import FileTree, has_extension, is_valid_resource_file, resource_base_name


def test_file_tree_is_sorted_filtered_and_restartable(project_builder) -> None:
    project_builder.write_bytes("src/b.kt")
    project_builder.write_bytes("src/a.kt")
    project_builder.write_bytes("src/nested/c.java")
    project_builder.write_bytes("src/notes.md")
    project_builder.write_bytes("src/build/generated.kt")
    project_builder.write_bytes("src/.DS_Store")
    tree = FileTree(project_builder.path("src"), predicate=has_extension("kt", ".java"))

    first = [path.name for path in tree]
    project_builder.write_bytes("src/d.kt")
    second = [path.name for path in tree]

    assert first == ["a.kt", "b.kt", "c.java"]
    assert second == ["a.kt", "b.kt", "d.kt", "c.java"]


def test_non_recursive_tree_skips_subdirectories(project_builder) -> None:
    project_builder.write_bytes("values/strings.xml")
    project_builder.write_bytes("values/night/colors.xml")

    files = FileTree(project_builder.path("values"), recursive=False).files()

    assert [path.name for path in files] == ["strings.xml"]


def test_missing_root_yields_nothing(tmp_path: Path) -> None:
    assert FileTree(tmp_path / "absent").files() == []


def test_resource_names() -> None:
    assert resource_base_name(Path("ic_logo.9.png")) == "ic_logo"
    assert is_valid_resource_file(Path("ic_logo.9.png"))
    assert not is_valid_resource_file(Path("IcLogo.png"))
    assert not is_valid_resource_file(Path("1logo.png"))

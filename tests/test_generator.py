"""End-to-end tests for the generation pipeline."""

from __future__ import annotations

import pytest

from resourcegen.config import load_config
from resourcegen.errors import DocumentParseError, NamespaceNotFoundError
from resourcegen.generator import ResourceManagerGenerator


def _build_app(project_builder):
    module_dir = project_builder.module("app", "com.example.app", dependencies=["core"])
    project_builder.module("core", "com.example.core")
    project_builder.values(
        "app",
        "strings.xml",
        """
        <string name="app_name">My App</string>
        <bool name="is_premium">false</bool>
        """,
    )
    project_builder.values("core", "strings.xml", '<string name="app_name">Core</string>')
    project_builder.write_bytes("app/src/main/res/drawable/ic_logo.xml")
    return module_dir


def test_generate_writes_default_output(project_builder) -> None:
    module_dir = _build_app(project_builder)

    result = ResourceManagerGenerator().generate(module_dir)

    assert result.path == module_dir.resolve() / "build/generated/resourcegen/main/ResourceManager.kt"
    assert result.from_cache is False
    content = result.path.read_text(encoding="utf-8")
    assert "package com.example.app" in content
    assert " fun appName(" in content
    assert " fun appName_core(" in content
    assert "com.example.core.R.string.app_name" in content
    assert " fun icLogo(" in content


def test_generate_respects_explicit_output(project_builder, tmp_path) -> None:
    module_dir = _build_app(project_builder)
    output = tmp_path / "out" / "ResourceManager.kt"

    result = ResourceManagerGenerator().generate(module_dir, output)

    assert result.path == output
    assert output.exists()


def test_second_run_reuses_cache_with_identical_output(project_builder) -> None:
    module_dir = _build_app(project_builder)
    generator = ResourceManagerGenerator()

    first = generator.generate(module_dir)
    first_content = first.path.read_text(encoding="utf-8")
    second = generator.generate(module_dir)

    assert second.from_cache is True
    assert second.path.read_text(encoding="utf-8") == first_content
    assert (module_dir / "build/cache/resourcegen/app/content.kt").exists()


def test_touching_a_resource_regenerates(project_builder) -> None:
    module_dir = _build_app(project_builder)
    generator = ResourceManagerGenerator()
    generator.generate(module_dir)

    document = project_builder.values(
        "app",
        "strings.xml",
        '<string name="app_name">My App</string>\n<string name="welcome">Hi</string>',
    )
    project_builder.touch(document)
    result = generator.generate(module_dir)

    assert result.from_cache is False
    assert " fun welcome(" in result.path.read_text(encoding="utf-8")


def test_cache_disabled_always_regenerates(project_builder) -> None:
    module_dir = _build_app(project_builder)
    config = load_config(module_dir)
    config.generation.cache = False
    generator = ResourceManagerGenerator()

    generator.generate(module_dir, config=config)
    result = generator.generate(module_dir, config=config)

    assert result.from_cache is False
    assert not (module_dir / "build/cache/resourcegen/app").exists()


def test_missing_namespace_aborts(project_builder) -> None:
    project_builder.write({"app/build.gradle.kts": "plugins {}\n"})
    module_dir = project_builder.path("app")

    with pytest.raises(NamespaceNotFoundError) as excinfo:
        ResourceManagerGenerator().generate(module_dir)

    assert "AndroidManifest.xml" in str(excinfo.value)
    assert not (module_dir / "build/generated").exists()


def test_malformed_document_fails_in_strict_mode(project_builder) -> None:
    module_dir = _build_app(project_builder)
    project_builder.write({"app/src/main/res/values/broken.xml": "<resources>"})

    with pytest.raises(DocumentParseError):
        ResourceManagerGenerator().generate(module_dir)

    assert not (module_dir / "build/generated/resourcegen/main/ResourceManager.kt").exists()


def test_lenient_mode_reports_skipped_and_does_not_cache(project_builder) -> None:
    module_dir = _build_app(project_builder)
    project_builder.write({"app/src/main/res/values/broken.xml": "<resources>"})
    config = load_config(module_dir)
    config.generation.strict = False

    result = ResourceManagerGenerator().generate(module_dir, config=config)

    assert [error.path.name for error in result.skipped_documents] == ["broken.xml"]
    assert " fun appName(" in result.path.read_text(encoding="utf-8")
    assert not (module_dir / "build/cache/resourcegen/app").exists()


def test_editing_config_regenerates(project_builder) -> None:
    module_dir = _build_app(project_builder)
    generator = ResourceManagerGenerator()
    first = generator.generate(module_dir)
    assert " fun icLogo(" in first.path.read_text(encoding="utf-8")

    photo = project_builder.write_bytes("app/src/main/res/img/photo.png")
    project_builder.write({"app/.resourcegen.yml": "generation:\n  drawable_prefix: img\n"})
    observed = [path for path in module_dir.rglob("*") if path.is_file()]
    project_builder.touch(module_dir / ".resourcegen.yml", newer_than=observed)
    project_builder.touch(photo, newer_than=observed)
    result = generator.generate(module_dir)

    assert result.from_cache is False
    content = result.path.read_text(encoding="utf-8")
    assert " fun photo(" in content
    assert " fun icLogo(" not in content

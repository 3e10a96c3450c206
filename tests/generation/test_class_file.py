"""Tests for Kotlin ResourceManager generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pytest

from resourcegen.errors import DocumentParseError
from resourcegen.generation import ClassFileGenerator
from resourcegen.generation.class_file import NOT_INITIALIZED_MESSAGE, VALUE_ACCESSORS
from resourcegen.models import ModuleDescriptor, Resource, ResourceCategory, ValueResourceKind


def _values(module: str, namespace: str, *files: Path) -> Resource:
    return Resource(ResourceCategory.VALUES, ModuleDescriptor(module, namespace, tuple(files)))


def _drawables(module: str, namespace: str, *files: Path) -> Resource:
    return Resource(ResourceCategory.DRAWABLES, ModuleDescriptor(module, namespace, tuple(files)))


def _block(content: str, name: str) -> List[str]:
    """Return the stripped lines inside ``object <name> { ... }``."""
    lines = content.splitlines()
    start = lines.index(f"    object {name} {{")
    end = lines.index("    }", start)
    return [line.strip() for line in lines[start + 1:end]]


def test_scenario_string_and_boolean(project_builder) -> None:
    document = project_builder.values(
        "app",
        "values.xml",
        """
        <string name="app_name">My App</string>
        <bool name="is_premium">false</bool>
        """,
    )

    content = ClassFileGenerator().generate(
        "com.example.app", [_values("", "com.example.app", document)]
    ).content

    assert content.startswith("// Generated by resourcegen. Do not edit.\npackage com.example.app\n")
    assert "import com.example.app.R" in content
    assert _block(content, "Strings") == [
        "@JvmOverloads @JvmStatic fun appName(vararg args: Any?, context: Context = application)"
        ": String = if (args.isEmpty()) context.getString(R.string.app_name) "
        "else context.getString(R.string.app_name, *args)"
    ]
    assert _block(content, "Booleans") == [
        "@JvmOverloads @JvmStatic fun isPremium(context: Context = application): Boolean"
        " = context.resources.getBoolean(R.bool.is_premium)"
    ]
    assert content.index("object Booleans") < content.index("object Strings")


def test_initialize_and_guard_message(project_builder) -> None:
    content = ClassFileGenerator().generate("com.example.app", []).content

    assert "@JvmStatic\n    fun initialize(application: Application) {" in content
    assert f'throw IllegalStateException("{NOT_INITIALIZED_MESSAGE}")' in content
    assert "ResourceManager.initialize(this)" in NOT_INITIALIZED_MESSAGE
    assert "object Strings" not in content


def test_values_before_drawables_and_sorted_by_name(project_builder) -> None:
    values = project_builder.values(
        "app",
        "strings.xml",
        """
        <string name="zeta">z</string>
        <string name="alpha">a</string>
        <string name="mid">m</string>
        """,
    )
    logo = project_builder.write_bytes("app/src/main/res/drawable/logo.xml")
    banner = project_builder.write_bytes("app/src/main/res/drawable/banner.png")

    content = ClassFileGenerator().generate(
        "com.example.app",
        [_drawables("", "com.example.app", logo, banner), _values("", "com.example.app", values)],
    ).content

    assert content.index("// ----- VALUES -----") < content.index("// ----- DRAWABLES -----")
    names = [line.split(" fun ")[1].split("(")[0] for line in _block(content, "Strings")]
    assert names == ["alpha", "mid", "zeta"]
    assert _block(content, "Drawables") == [
        "@JvmOverloads @JvmStatic fun banner(theme: Theme = application.theme): Drawable"
        " = application.resources.getDrawable(R.drawable.banner, theme)",
        "@JvmOverloads @JvmStatic fun logo(theme: Theme = application.theme): Drawable"
        " = application.resources.getDrawable(R.drawable.logo, theme)",
    ]


def test_kinds_ordered_by_label(project_builder) -> None:
    document = project_builder.values(
        "app",
        "values.xml",
        """
        <string name="s">s</string>
        <color name="c">#fff</color>
        <integer-array name="ia"><item>1</item></integer-array>
        <array name="a"><item>x</item></array>
        """,
    )

    content = ClassFileGenerator().generate(
        "com.example.app", [_values("", "com.example.app", document)]
    ).content

    order = [content.index(f"object {name} {{") for name in ("Arrays", "Colors", "IntArrays", "Strings")]
    assert order == sorted(order)


def test_dependency_resources_are_module_suffixed(project_builder) -> None:
    app = project_builder.values("app", "strings.xml", '<string name="title">App</string>')
    feature = project_builder.values(
        "feature-login", "strings.xml", '<string name="title">Login</string>'
    )

    content = ClassFileGenerator().generate(
        "com.example.app",
        [
            _values("", "com.example.app", app),
            _values("feature-login", "com.example.login", feature),
        ],
    ).content

    block = _block(content, "Strings")
    assert len(block) == 2
    assert " fun title(" in block[0]
    assert "R.string.title" in block[0]
    assert " fun title_featureLogin(" in block[1]
    assert "com.example.login.R.string.title" in block[1]


def test_duplicates_in_same_module_emit_once(project_builder) -> None:
    first = project_builder.values("app", "a.xml", '<string name="title">One</string>')
    second = project_builder.values("app", "b.xml", '<string name="title">Two</string>')

    content = ClassFileGenerator().generate(
        "com.example.app", [_values("", "com.example.app", first, second)]
    ).content

    assert content.count(" fun title(") == 1


def test_generation_is_deterministic_and_order_independent(project_builder) -> None:
    first = project_builder.values("app", "a.xml", '<string name="b_name">B</string>')
    second = project_builder.values("app", "b.xml", '<color name="accent">#000</color>')
    generator = ClassFileGenerator()

    forward = generator.generate("com.example.app", [_values("", "com.example.app", first, second)])
    backward = generator.generate("com.example.app", [_values("", "com.example.app", second, first)])
    again = ClassFileGenerator().generate(
        "com.example.app", [_values("", "com.example.app", first, second)]
    )

    assert forward.content == backward.content == again.content


def test_emitted_names_do_not_leak_across_calls(project_builder) -> None:
    document = project_builder.values("app", "strings.xml", '<string name="title">T</string>')
    generator = ClassFileGenerator()
    resources = [_values("", "com.example.app", document)]

    generator.generate("com.example.app", resources)
    second = generator.generate("com.example.app", resources)

    assert " fun title(" in second.content


def test_same_name_across_kinds_is_not_a_duplicate(project_builder) -> None:
    document = project_builder.values(
        "app",
        "values.xml",
        """
        <string name="accent">Accent</string>
        <color name="accent">#123456</color>
        """,
    )

    content = ClassFileGenerator().generate(
        "com.example.app", [_values("", "com.example.app", document)]
    ).content

    assert " fun accent(" in "\n".join(_block(content, "Strings"))
    assert " fun accent(" in "\n".join(_block(content, "Colors"))


def test_every_kind_has_an_accessor() -> None:
    assert set(VALUE_ACCESSORS) == set(ValueResourceKind)


def test_accessor_signatures(project_builder) -> None:
    document = project_builder.values(
        "app",
        "values.xml",
        """
        <plurals name="songs"><item quantity="one">%d song</item><item quantity="other">%d songs</item></plurals>
        <fraction name="ratio">50%</fraction>
        <color name="brand">#fff</color>
        <string-array name="planets"><item>Earth</item></string-array>
        """,
    )

    content = ClassFileGenerator().generate(
        "com.example.app", [_values("", "com.example.app", document)]
    ).content

    plurals = _block(content, "Plurals")
    assert plurals[0] == "/** Quantities: one, other. */"
    assert plurals[1].startswith(
        "@JvmOverloads @JvmStatic fun songs(quantity: Int, vararg args: Any?, "
        "context: Context = application): String"
    )
    assert _block(content, "Fractions")[0].startswith(
        "@JvmOverloads @JvmStatic fun ratio(base: Int = 0, pbase: Int = 0, "
        "context: Context = application): Float"
    )
    assert "application.resources.getColor(R.color.brand, theme)" in _block(content, "Colors")[0]
    assert "): kotlin.Array<String> = " in _block(content, "StringArrays")[0]


def test_parameterized_string_is_documented(project_builder) -> None:
    document = project_builder.values(
        "app", "strings.xml", '<string name="greeting">Hello %1$s</string>'
    )

    content = ClassFileGenerator().generate(
        "com.example.app", [_values("", "com.example.app", document)]
    ).content

    assert _block(content, "Strings")[0].startswith("/** Formatted string")


def test_plural_without_other_logs_warning(
    project_builder, caplog: pytest.LogCaptureFixture
) -> None:
    document = project_builder.values(
        "app",
        "plurals.xml",
        """
        <plurals name="items">
            <item quantity="few">%d items</item>
            <item quantity="one">%d item</item>
        </plurals>
        """,
    )

    with caplog.at_level(logging.WARNING, logger="resourcegen"):
        content = ClassFileGenerator().generate(
            "com.example.app", [_values("", "com.example.app", document)]
        ).content

    assert "/** Quantities: one, few. */" in content
    assert "has no 'other' item" in caplog.text
    assert "Plural 'items' defines few, never selected in 'en'" in caplog.text


def test_plural_checked_against_configured_language(
    project_builder, caplog: pytest.LogCaptureFixture
) -> None:
    document = project_builder.values(
        "app",
        "plurals.xml",
        """
        <plurals name="files">
            <item quantity="one">%d файл</item>
            <item quantity="other">%d файлов</item>
        </plurals>
        """,
    )
    resources = [_values("", "com.example.app", document)]

    with caplog.at_level(logging.WARNING, logger="resourcegen"):
        ClassFileGenerator().generate("com.example.app", resources)
    assert caplog.text == ""

    with caplog.at_level(logging.WARNING, logger="resourcegen"):
        ClassFileGenerator(plural_language="ru").generate("com.example.app", resources)
    assert "Plural 'files' has no item for few, many, selected in 'ru'" in caplog.text
    assert "has no 'other' item" not in caplog.text


def test_strict_mode_raises_on_malformed_document(project_builder) -> None:
    project_builder.write({"app/src/main/res/values/broken.xml": "<resources><string"})
    broken = project_builder.path("app/src/main/res/values/broken.xml")

    with pytest.raises(DocumentParseError):
        ClassFileGenerator().generate("com.example.app", [_values("", "com.example.app", broken)])


def test_lenient_mode_skips_malformed_document(project_builder) -> None:
    good = project_builder.values("app", "strings.xml", '<string name="title">T</string>')
    project_builder.write({"app/src/main/res/values/broken.xml": "<resources><string"})
    broken = project_builder.path("app/src/main/res/values/broken.xml")

    result = ClassFileGenerator(strict=False).generate(
        "com.example.app", [_values("", "com.example.app", good, broken)]
    )

    assert " fun title(" in result.content
    assert [error.path for error in result.skipped_documents] == [broken]

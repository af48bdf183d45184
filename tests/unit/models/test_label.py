"""Unit tests for the Label value type."""

import pytest
from bzlgen.core.starlark import to_string
from bzlgen.models.label import Label


class TestLabelParse:
    """Tests for Label.parse."""

    def test_absolute_with_repository(self) -> None:
        """@repo//pkg:target splits into three parts."""
        label = Label.parse("@crates//vendor/serde:serde_derive")
        assert label == Label(repository="@crates", package="vendor/serde", target="serde_derive")

    def test_canonical_repository(self) -> None:
        """Canonical @@ repository names are kept as written."""
        label = Label.parse("@@rules_rust~0.40//rust:toolchain")
        assert label.repository == "@@rules_rust~0.40"
        assert label.package == "rust"
        assert label.target == "toolchain"

    def test_main_repository(self) -> None:
        """//pkg:target has no repository."""
        label = Label.parse("//src:lib")
        assert label.repository is None
        assert label.package == "src"
        assert label.target == "lib"

    def test_root_package(self) -> None:
        """//:target lives in the root package."""
        label = Label.parse("@crates//:anyhow")
        assert label.package == ""
        assert label.target == "anyhow"

    def test_implicit_target(self) -> None:
        """//foo/bar is shorthand for //foo/bar:bar."""
        assert Label.parse("//foo/bar") == Label(repository=None, package="foo/bar", target="bar")

    def test_repository_shorthand(self) -> None:
        """@repo is shorthand for @repo//:repo."""
        assert Label.parse("@zlib") == Label(repository="@zlib", package="", target="zlib")

    def test_relative(self) -> None:
        """:target and bare names are relative."""
        assert Label.parse(":lib").is_relative
        assert Label.parse("lib") == Label.parse(":lib")

    def test_strips_whitespace(self) -> None:
        """Surrounding whitespace is ignored."""
        assert Label.parse("  //src:lib ") == Label.parse("//src:lib")

    def test_target_may_contain_slashes(self) -> None:
        """Targets naming files below the package keep their path."""
        label = Label.parse("//src:data/config.json")
        assert label == Label(repository=None, package="src", target="data/config.json")

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "//",
            "//foo/",
            "//foo:bar:baz",
            "@crates//",
            "//a//b:c",
            "///a:b",
            "//a:b c",
            "//a b:c",
            "lib name",
        ],
    )
    def test_invalid(self, text: str) -> None:
        """Malformed labels are rejected."""
        with pytest.raises(ValueError, match="Invalid label"):
            Label.parse(text)


class TestLabelFormatting:
    """Tests for str() and Starlark rendering."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("@crates//:anyhow", "@crates//:anyhow"),
            ("//foo/bar", "//foo/bar:bar"),
            ("lib", ":lib"),
            ("@zlib", "@zlib//:zlib"),
        ],
    )
    def test_str_is_canonical(self, text: str, expected: str) -> None:
        """str() writes the canonical form."""
        assert str(Label.parse(text)) == expected

    def test_renders_as_string_literal(self) -> None:
        """A label renders as a quoted string."""
        assert to_string(Label.parse("//src:lib")) == '"//src:lib"'

    def test_ordering(self) -> None:
        """Labels order by repository, package and target."""
        labels = [Label.parse("//b:x"), Label.parse("@r//a:x"), Label.parse("//a:y")]
        assert [str(label) for label in sorted(labels)] == ["//a:y", "//b:x", "@r//a:x"]

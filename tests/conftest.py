"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from bzlgen.models.select import SelectList


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def platform_select_list() -> SelectList[str]:
    """Dependencies split across three cfg() conditions plus one common value."""
    select_list: SelectList[str] = SelectList()
    select_list.insert("dep-a", "cfg(macos)")
    select_list.insert("dep-b", "cfg(macos)")
    select_list.insert("dep-d", "cfg(macos)")
    select_list.insert("dep-a", "cfg(x86_64)")
    select_list.insert("dep-c", "cfg(x86_64)")
    select_list.insert("dep-e", "cfg(pdp11)")
    select_list.insert("dep-d")
    return select_list


@pytest.fixture
def platform_mapping() -> dict[str, set[str]]:
    """Mapping from cfg() conditions to platform triples."""
    return {
        "cfg(macos)": {"x86_64-macos", "aarch64-macos"},
        "cfg(x86_64)": {"x86_64-linux", "x86_64-macos"},
    }


@pytest.fixture
def declaration_document() -> str:
    """Declaration document covering every declaration kind."""
    return """\
[[declarations]]
kind = "comment"
text = "# @generated by bzlgen"

[[declarations]]
kind = "package"

[[declarations]]
kind = "exports_files"
paths = ["defs.bzl", "cargo-bazel.json"]
globs = { include = ["*.bazel"] }

[[declarations]]
kind = "filegroup"
name = "srcs"
srcs = { include = ["**/*.rs"], exclude = ["target/**"] }

[[declarations]]
kind = "alias"
name = "anyhow"
actual = "@crates//:anyhow"
tags = ["manual"]
"""


@pytest.fixture
def rendered_document() -> str:
    """Expected keyword-form rendering of ``declaration_document``."""
    return """\
# @generated by bzlgen

package(default_visibility = ["//visibility:public"])

exports_files(
    [
        "cargo-bazel.json",
        "defs.bzl",
    ] + glob(include = ["*.bazel"], exclude = []),
)

filegroup(
    name = "srcs",
    srcs = glob(include = ["**/*.rs"], exclude = ["target/**"]),
)

alias(
    name = "anyhow",
    actual = "@crates//:anyhow",
    tags = ["manual"],
)"""


@pytest.fixture
def remap_document() -> str:
    """Remap request matching ``platform_select_list`` and ``platform_mapping``."""
    return """\
[select]
common = ["dep-d"]

[select.selects]
"cfg(macos)" = ["dep-a", "dep-b", "dep-d"]
"cfg(x86_64)" = ["dep-a", "dep-c"]
"cfg(pdp11)" = ["dep-e"]

[mapping]
"cfg(macos)" = ["x86_64-macos", "aarch64-macos"]
"cfg(x86_64)" = ["x86_64-linux", "x86_64-macos"]
"""

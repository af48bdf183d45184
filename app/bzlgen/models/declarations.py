"""Top-level Starlark declarations.

Each structured declaration knows the call it renders as. ``Comment``
carries raw text that is written out verbatim.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TypeAlias

from bzlgen.core.starlark import BinaryOp, Format, FunctionCall
from bzlgen.models.glob import Glob

PUBLIC_VISIBILITY = "//visibility:public"


def _frozen(values: Iterable[str]) -> frozenset[str]:
    return frozenset(values)


@dataclass(frozen=True, slots=True)
class Package:
    """``package(default_visibility = [...])``, always on one line.

    Attributes:
        default_visibility: Visibility labels applied to every target.
    """

    default_visibility: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_visibility", _frozen(self.default_visibility))

    @classmethod
    def default_visibility_public(cls) -> Package:
        """Package declaration making every target public."""
        return cls(default_visibility=frozenset({PUBLIC_VISIBILITY}))

    def to_call(self) -> FunctionCall:
        return FunctionCall(
            "package",
            kwargs=(("default_visibility", self.default_visibility),),
            format=Format.ONELINE,
        )


@dataclass(frozen=True, slots=True)
class ExportsFiles:
    """``exports_files([...] + glob(...))``, always multi-line.

    Attributes:
        paths: Explicit file paths to export.
        globs: Additional files to export by pattern.
    """

    paths: frozenset[str]
    globs: Glob

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", _frozen(self.paths))

    def to_call(self) -> FunctionCall:
        return FunctionCall(
            "exports_files",
            args=(BinaryOp("+", self.paths, self.globs),),
            format=Format.MULTILINE,
        )


@dataclass(frozen=True, slots=True)
class Filegroup:
    """A named group of source files."""

    name: str
    srcs: Glob

    def to_call(self) -> FunctionCall:
        return FunctionCall(
            "filegroup",
            kwargs=(("name", self.name), ("srcs", self.srcs)),
            format=Format.MULTILINE,
        )


@dataclass(frozen=True, slots=True)
class Alias:
    """An alternative name for another target.

    Attributes:
        name: Name of the alias target.
        actual: Label the alias points to.
        tags: Tags applied to the alias target.
    """

    name: str
    actual: str
    tags: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", _frozen(self.tags))

    def to_call(self) -> FunctionCall:
        return FunctionCall(
            "alias",
            kwargs=(("name", self.name), ("actual", self.actual), ("tags", self.tags)),
            format=Format.MULTILINE,
        )


@dataclass(frozen=True, slots=True)
class Comment:
    """Raw text emitted as-is, such as a license header or banner."""

    text: str


Declaration: TypeAlias = Package | ExportsFiles | Filegroup | Alias | Comment

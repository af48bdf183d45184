"""Glob value type for file-matching expressions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import total_ordering
from typing import TYPE_CHECKING

from bzlgen.core.settings import GlobStyle
from bzlgen.core.starlark import Format, FunctionCall, StarlarkError

if TYPE_CHECKING:
    from bzlgen.core.settings import EmitterSettings

RUST_SRCS_PATTERN = "**/*.rs"


@total_ordering
@dataclass(frozen=True, slots=True)
class Glob:
    """Include and exclude patterns rendered as a ``glob`` call.

    Any iterable of strings is accepted for either field and frozen on
    construction.

    Attributes:
        include: Patterns to include.
        exclude: Patterns to exclude from the included set.
    """

    include: frozenset[str] = field(default_factory=frozenset)
    exclude: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "include", frozenset(self.include))
        object.__setattr__(self, "exclude", frozenset(self.exclude))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Glob):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    @classmethod
    def new_rust_srcs(cls) -> Glob:
        """Glob matching every Rust source file below the package."""
        return cls(include={RUST_SRCS_PATTERN})

    @classmethod
    def from_patterns(cls, include: Iterable[str], exclude: Iterable[str] = ()) -> Glob:
        return cls(include=frozenset(include), exclude=frozenset(exclude))

    def sort_key(self) -> tuple[tuple[str, ...], tuple[str, ...]]:
        return tuple(sorted(self.include)), tuple(sorted(self.exclude))

    def is_empty(self) -> bool:
        """Check whether the glob includes nothing.

        Excludes are not considered: a glob with only excludes still
        matches nothing.
        """
        return not self.include

    def to_starlark(self, settings: EmitterSettings) -> FunctionCall:
        """Build the ``glob`` call for this value.

        Raises:
            StarlarkError: If there are no include patterns.
        """
        if self.is_empty():
            msg = "A glob must have at least one include pattern"
            raise StarlarkError(msg)

        if settings.glob_style is GlobStyle.POSITIONAL and not self.exclude:
            return FunctionCall("glob", args=(self.include,), format=Format.ONELINE)
        return FunctionCall(
            "glob",
            kwargs=(("include", self.include), ("exclude", self.exclude)),
            format=Format.ONELINE,
        )

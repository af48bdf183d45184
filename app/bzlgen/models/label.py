"""Bazel label value type.

Supports the absolute (``@repo//pkg:target``, ``//pkg:target``, ``//pkg``)
and relative (``:target``, ``target``) label forms.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bzlgen.core.settings import EmitterSettings

_REPOSITORY_ONLY_PATTERN = re.compile(r"^@{1,2}[\w.~+-]+$")
# Package segments are non-empty, whitespace is not allowed anywhere, and a
# relative target cannot start with "/" or "@"
_LABEL_PATTERN = re.compile(
    r"^(?:(?P<repository>@{1,2}[\w.~+-]*)?//(?P<package>(?:[^:/\s]+(?:/[^:/\s]+)*)?)"
    r"(?::(?P<target>[^:\s]+))?"
    r"|:?(?P<relative>[^:\s/@][^:\s]*))$"
)


@total_ordering
@dataclass(frozen=True, slots=True)
class Label:
    """A parsed Bazel label.

    Attributes:
        repository: Repository name including its ``@``/``@@`` prefix,
            None for the main repository or a relative label.
        package: Package path, None for a relative label.
        target: Target name within the package.
    """

    repository: str | None
    package: str | None
    target: str

    @classmethod
    def parse(cls, text: str) -> Label:
        """Parse a label string.

        Args:
            text: Label text such as ``@crates//:serde``.

        Returns:
            The parsed Label.

        Raises:
            ValueError: If the text is not a valid label.
        """
        text = text.strip()
        if _REPOSITORY_ONLY_PATTERN.match(text):
            # "@repo" is shorthand for "@repo//:repo"
            return cls(repository=text, package="", target=text.lstrip("@"))

        match = _LABEL_PATTERN.match(text)
        if match is None or not text:
            msg = f"Invalid label: {text!r}"
            raise ValueError(msg)

        relative = match.group("relative")
        if relative is not None:
            return cls(repository=None, package=None, target=relative)

        repository = match.group("repository")
        package = match.group("package")
        target = match.group("target")

        if target is None:
            # "//foo/bar" is shorthand for "//foo/bar:bar"
            if not package:
                msg = f"Invalid label, missing target: {text!r}"
                raise ValueError(msg)
            target = package.rsplit("/", 1)[-1]

        return cls(repository=repository, package=package, target=target)

    @property
    def is_relative(self) -> bool:
        """True for ``:target`` style labels."""
        return self.package is None

    def sort_key(self) -> tuple[str, str, str]:
        return self.repository or "", self.package or "", self.target

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Label):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        if self.package is None:
            return f":{self.target}"
        return f"{self.repository or ''}//{self.package}:{self.target}"

    def to_starlark(self, settings: EmitterSettings) -> str:
        return str(self)

"""Conditional collections keyed by build configuration.

A conditional collection holds an unconditioned ("common") portion and a
mapping from configuration name to a conditioned portion. The
unconditioned bucket is addressed with ``None`` wherever a configuration
is expected.

Example:
    >>> deps = SelectList()
    >>> deps.insert("//:always")
    >>> deps.insert("//:mac_only", "@platforms//os:macos")
    >>> sorted(deps.configurations(), key=configuration_sort_key)
    [None, '@platforms//os:macos']
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from bzlgen.core.starlark import BinaryOp, Commented, FunctionCall

if TYPE_CHECKING:
    from bzlgen.core.settings import EmitterSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

# Key of the fallback branch in a rendered select()
DEFAULT_CONDITION = "//conditions:default"


def configuration_sort_key(configuration: str | None) -> tuple[bool, str]:
    """Sort key placing the unconditioned sentinel before any name."""
    return configuration is not None, configuration or ""


def _configurations(common: Any, selects: Mapping[str, Any]) -> set[str | None]:
    configurations: set[str | None] = set(selects)
    if common:
        configurations.add(None)
    return configurations


class Select(ABC, Generic[T]):
    """A collection whose contents vary by configuration."""

    @abstractmethod
    def configurations(self) -> set[str | None]:
        """Gather every configuration currently set on the collection.

        Returns:
            Every conditioned configuration name, plus None when the
            unconditioned bucket is non-empty.
        """

    @abstractmethod
    def should_skip_serializing(self) -> bool:
        """Check whether the collection is empty and can be omitted."""


class SelectMap(ABC, Generic[T, U]):
    """A collection that can be transformed element-wise."""

    @abstractmethod
    def map(self, func: Callable[[T], U]) -> SelectList[U] | SelectDict[U]:
        """Apply ``func`` to every element, keeping the bucket structure."""


@total_ordering
@dataclass(frozen=True, slots=True)
class WithOriginalConfigurations(Generic[T]):
    """A remapped value with the configurations it came from.

    Attributes:
        value: The wrapped value.
        original_configurations: Source configuration names that contributed
            the value, with None standing for the unconditioned bucket.
    """

    value: T
    original_configurations: frozenset[str | None]

    def __post_init__(self) -> None:
        object.__setattr__(self, "original_configurations", frozenset(self.original_configurations))

    def sorted_configurations(self) -> list[str | None]:
        return sorted(self.original_configurations, key=configuration_sort_key)

    def sort_key(self) -> tuple[Any, tuple[tuple[bool, str], ...]]:
        return self.value, tuple(configuration_sort_key(c) for c in self.sorted_configurations())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, WithOriginalConfigurations):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def to_starlark(self, settings: EmitterSettings) -> Any:
        """Render as the bare value, commented with its named origins."""
        names = [c for c in self.sorted_configurations() if c is not None]
        if not names:
            return self.value
        return Commented(self.value, ", ".join(names))


@dataclass
class SelectList(Select[T], SelectMap[T, Any]):
    """Deduplicated values, some of which apply only under a configuration.

    Attributes:
        common: Values present under every configuration.
        selects: Values present only under the keyed configuration.
    """

    common: set[T] = field(default_factory=set)
    selects: dict[str, set[T]] = field(default_factory=dict)

    def insert(self, value: T, configuration: str | None = None) -> None:
        """Add a value to the bucket for ``configuration``.

        Args:
            value: The value to add. Duplicates are ignored.
            configuration: Target configuration, or None for the
                unconditioned bucket.
        """
        if configuration is None:
            self.common.add(value)
        else:
            self.selects.setdefault(configuration, set()).add(value)

    def get_iter(self, configuration: str | None) -> Iterator[T] | None:
        """Iterate one bucket in sorted order.

        Args:
            configuration: Configuration name, or None for the
                unconditioned bucket.

        Returns:
            Iterator over the bucket, or None if a named configuration
            has never been inserted into.
        """
        if configuration is None:
            return iter(sorted(self.common))
        values = self.selects.get(configuration)
        if values is None:
            return None
        return iter(sorted(values))

    def configurations(self) -> set[str | None]:
        return _configurations(self.common, self.selects)

    def should_skip_serializing(self) -> bool:
        return not self.common and not self.selects

    def map(self, func: Callable[[T], U]) -> SelectList[U]:
        return SelectList(
            common={func(value) for value in self.common},
            selects={cfg: {func(value) for value in values} for cfg, values in self.selects.items()},
        )

    def copy(self) -> SelectList[T]:
        """Return an independent copy of the collection."""
        return SelectList(
            common=set(self.common),
            selects={cfg: set(values) for cfg, values in self.selects.items()},
        )

    def remap_configurations(
        self, mapping: Mapping[str, Iterable[str]]
    ) -> tuple[SelectList[WithOriginalConfigurations[T]], dict[str, set[T]]]:
        """Re-key the collection into a new configuration namespace.

        Every value under an old configuration is copied to each new
        configuration that the old one maps to, remembering which old
        configurations contributed it. Common values are added to every
        new configuration that received at least one conditioned value;
        new configurations reached by nothing do not receive them.

        Args:
            mapping: Old configuration name to the new configuration names
                it expands to.

        Returns:
            Tuple of (remapped collection, unmapped values keyed by the old
            configurations that have no entry in ``mapping``).
        """
        # new configuration -> value -> old configurations
        remapped: dict[str, dict[T, set[str | None]]] = {}
        unmapped: dict[str, set[T]] = {}

        for original_configuration, values in self.selects.items():
            if original_configuration not in mapping:
                unmapped.setdefault(original_configuration, set()).update(values)
                continue
            for configuration in mapping[original_configuration]:
                for value in values:
                    bucket = remapped.setdefault(configuration, {})
                    bucket.setdefault(value, set()).add(original_configuration)

        for value in self.common:
            for bucket in remapped.values():
                bucket.setdefault(value, set()).add(None)

        if unmapped:
            logger.debug("Unmapped configurations: %s", ", ".join(sorted(unmapped)))

        result: SelectList[WithOriginalConfigurations[T]] = SelectList(
            common={WithOriginalConfigurations(value, frozenset({None})) for value in self.common},
            selects={
                configuration: {
                    WithOriginalConfigurations(value, frozenset(originals))
                    for value, originals in bucket.items()
                }
                for configuration, bucket in remapped.items()
            },
        )
        return result, unmapped

    def to_starlark(self, settings: EmitterSettings) -> Any:
        """Render as a list, a ``select()``, or ``[...] + select()``."""
        if not self.selects:
            return set(self.common)

        branches: dict[str, Any] = {cfg: set(values) for cfg, values in self.selects.items()}
        branches[DEFAULT_CONDITION] = []
        select_call = FunctionCall("select", args=(branches,))
        if not self.common:
            return select_call
        return BinaryOp("+", set(self.common), select_call)


@dataclass
class SelectDict(Select[T], SelectMap[T, Any]):
    """Keyed values, some of which apply only under a configuration.

    Attributes:
        common: Entries present under every configuration.
        selects: Entries present only under the keyed configuration.
    """

    common: dict[str, T] = field(default_factory=dict)
    selects: dict[str, dict[str, T]] = field(default_factory=dict)

    def insert(self, values: Mapping[str, T], configuration: str | None = None) -> None:
        """Merge entries into the bucket for ``configuration``.

        Later entries overwrite earlier ones with the same key.
        """
        if configuration is None:
            self.common.update(values)
        else:
            self.selects.setdefault(configuration, {}).update(values)

    def get_iter(self, configuration: str | None) -> Iterator[tuple[str, T]] | None:
        """Iterate one bucket's entries sorted by key, or None if unknown."""
        if configuration is None:
            return iter(sorted(self.common.items()))
        entries = self.selects.get(configuration)
        if entries is None:
            return None
        return iter(sorted(entries.items()))

    def configurations(self) -> set[str | None]:
        return _configurations(self.common, self.selects)

    def should_skip_serializing(self) -> bool:
        return not self.common and not self.selects

    def map(self, func: Callable[[T], U]) -> SelectDict[U]:
        return SelectDict(
            common={key: func(value) for key, value in self.common.items()},
            selects={
                cfg: {key: func(value) for key, value in entries.items()}
                for cfg, entries in self.selects.items()
            },
        )

    def copy(self) -> SelectDict[T]:
        """Return an independent copy of the collection."""
        return SelectDict(
            common=dict(self.common),
            selects={cfg: dict(entries) for cfg, entries in self.selects.items()},
        )

    def to_starlark(self, settings: EmitterSettings) -> Any:
        """Render as a dict, or a ``select()`` with common entries in every branch."""
        if not self.selects:
            return dict(self.common)

        branches: dict[str, Any] = {
            cfg: {**self.common, **entries} for cfg, entries in self.selects.items()
        }
        branches[DEFAULT_CONDITION] = dict(self.common)
        return FunctionCall("select", args=(branches,))


SelectStringList = SelectList[str]
SelectStringDict = SelectDict[str]

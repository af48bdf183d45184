"""Starlark literal and call rendering.

Turns Python values and call descriptions into Starlark source text.
Callers build the argument structure (:class:`FunctionCall`,
:class:`BinaryOp`, plain lists, sets and dicts); this module decides the
textual layout.

Example:
    >>> call = FunctionCall("alias", kwargs=(("name", "x"), ("actual", "//:y")))
    >>> to_string(call)
    'alias(name = "x", actual = "//:y")'
"""

from __future__ import annotations

import keyword
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bzlgen.core.settings import EmitterSettings

# Deeper structures are rejected rather than risking runaway recursion
MAX_NESTING = 64

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_OPERATORS = frozenset({"+", "|"})

# Starlark-only reserved word; the rest are shared with Python
_STARLARK_RESERVED = frozenset({"load"})


class StarlarkError(ValueError):
    """Raised when a value cannot be encoded as Starlark."""


class Format(Enum):
    """Line mode for a rendered call.

    Attributes:
        ONELINE: Everything on a single line.
        MULTILINE: One argument per line with trailing commas.
    """

    ONELINE = "oneline"
    MULTILINE = "multiline"


@dataclass(frozen=True, slots=True)
class FunctionCall:
    """A Starlark call expression.

    Attributes:
        name: Callee, an identifier or dotted identifier path.
        args: Positional arguments in order.
        kwargs: Keyword arguments as ``(name, value)`` pairs in order.
        format: Line mode, or None to inherit the enclosing mode.
    """

    name: str
    args: tuple[Any, ...] = ()
    kwargs: tuple[tuple[str, Any], ...] = ()
    format: Format | None = None


@dataclass(frozen=True, slots=True)
class BinaryOp:
    """An infix expression such as ``[...] + glob(...)``."""

    operator: str
    lhs: Any
    rhs: Any


@dataclass(frozen=True, slots=True)
class Commented:
    """A list element annotated with a trailing ``#`` comment.

    The comment is only written when the surrounding list is expanded
    over several lines.
    """

    value: Any
    comment: str


def quote(value: str) -> str:
    """Encode a Python string as a double-quoted Starlark string literal.

    Raises:
        StarlarkError: If the string contains unsupported control characters.
    """
    parts = ['"']
    for char in value:
        escaped = _ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif char < " " or char == "\x7f":
            msg = f"Cannot encode control character {char!r} in string literal"
            raise StarlarkError(msg)
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def _is_identifier(part: str) -> bool:
    return (
        part.isidentifier()
        and not keyword.iskeyword(part)
        and part not in _STARLARK_RESERVED
    )


def _check_name(name: str, what: str) -> None:
    if not name or not all(_is_identifier(part) for part in name.split(".")):
        msg = f"Invalid {what} name: {name!r}"
        raise StarlarkError(msg)


class _Renderer:
    """Stateless walk over a value tree, parameterized by settings."""

    def __init__(self, settings: EmitterSettings) -> None:
        self._settings = settings
        self._unit = " " * settings.indent_width

    def resolve(self, value: Any) -> Any:
        """Convert domain objects to renderable values via ``to_starlark``."""
        for _ in range(MAX_NESTING):
            to_starlark = getattr(value, "to_starlark", None)
            if not callable(to_starlark):
                return value
            value = to_starlark(self._settings)
        msg = f"Conversion of {type(value).__name__} did not settle"
        raise StarlarkError(msg)

    def render(self, value: Any, mode: Format, indent: int, in_call: bool, level: int) -> str:
        if level > MAX_NESTING:
            msg = f"Maximum nesting depth of {MAX_NESTING} exceeded"
            raise StarlarkError(msg)
        value = self.resolve(value)

        # bool is an int subclass, so it must be checked first
        if isinstance(value, bool):
            return "True" if value else "False"
        if value is None:
            return "None"
        if isinstance(value, str):
            return quote(value)
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                msg = f"Cannot encode non-finite float {value!r}"
                raise StarlarkError(msg)
            return repr(value)
        if isinstance(value, FunctionCall):
            return self._render_call(value, mode, indent, in_call, level)
        if isinstance(value, BinaryOp):
            if value.operator not in _OPERATORS:
                msg = f"Unsupported operator: {value.operator!r}"
                raise StarlarkError(msg)
            # Operands hug a lone-argument call the way call arguments do
            lhs = self.render(value.lhs, mode, indent, True, level + 1)
            rhs = self.render(value.rhs, mode, indent, True, level + 1)
            return f"{lhs} {value.operator} {rhs}"
        if isinstance(value, Commented):
            return self.render(value.value, mode, indent, in_call, level + 1)
        if isinstance(value, Mapping):
            return self._render_dict(value, mode, indent, in_call, level)
        if isinstance(value, set | frozenset):
            try:
                items = sorted(value)
            except TypeError as e:
                msg = f"Cannot order set elements for output: {e}"
                raise StarlarkError(msg) from e
            return self._render_list(items, mode, indent, in_call, level)
        if isinstance(value, list | tuple):
            return self._render_list(list(value), mode, indent, in_call, level)

        msg = f"Unsupported value type: {type(value).__name__}"
        raise StarlarkError(msg)

    def _render_list(
        self, items: list[Any], mode: Format, indent: int, in_call: bool, level: int
    ) -> str:
        items = [self.resolve(item) for item in items]
        expand = mode is Format.MULTILINE and (
            len(items) > 1 or any(isinstance(item, Commented) for item in items)
        )
        if not expand:
            inline = [self.render(item, Format.ONELINE, indent, in_call, level + 1) for item in items]
            return "[" + ", ".join(inline) + "]"

        inner = self._unit * (indent + 1)
        lines = ["["]
        for item in items:
            if isinstance(item, Commented):
                text = self.render(item.value, mode, indent + 1, in_call, level + 1)
                lines.append(f"{inner}{text},  # {item.comment}")
            else:
                text = self.render(item, mode, indent + 1, in_call, level + 1)
                lines.append(f"{inner}{text},")
        lines.append(f"{self._unit * indent}]")
        return "\n".join(lines)

    def _render_key(self, key: Any) -> str:
        if not isinstance(key, str | int):
            msg = f"Unsupported dict key type: {type(key).__name__}"
            raise StarlarkError(msg)
        return self.render(key, Format.ONELINE, 0, False, 0)

    def _render_dict(
        self, mapping: Mapping[Any, Any], mode: Format, indent: int, in_call: bool, level: int
    ) -> str:
        try:
            entries = sorted(mapping.items(), key=lambda item: item[0])
        except TypeError as e:
            msg = f"Cannot order dict keys for output: {e}"
            raise StarlarkError(msg) from e

        if mode is not Format.MULTILINE or len(entries) <= 1:
            inline = [
                f"{self._render_key(k)}: {self.render(v, Format.ONELINE, indent, in_call, level + 1)}"
                for k, v in entries
            ]
            return "{" + ", ".join(inline) + "}"

        inner = self._unit * (indent + 1)
        lines = ["{"]
        for key, value in entries:
            text = self.render(value, mode, indent + 1, in_call, level + 1)
            lines.append(f"{inner}{self._render_key(key)}: {text},")
        lines.append(f"{self._unit * indent}}}")
        return "\n".join(lines)

    def _render_call(
        self, call: FunctionCall, mode: Format, indent: int, in_call: bool, level: int
    ) -> str:
        _check_name(call.name, "function")
        for keyword, _ in call.kwargs:
            _check_name(keyword, "keyword")

        effective = call.format or mode
        if not call.args and not call.kwargs:
            return f"{call.name}()"

        if effective is Format.ONELINE:
            parts = [self.render(arg, Format.ONELINE, indent, True, level + 1) for arg in call.args]
            parts.extend(
                f"{k} = {self.render(v, Format.ONELINE, indent, True, level + 1)}"
                for k, v in call.kwargs
            )
            return f"{call.name}({', '.join(parts)})"

        # Nested calls with a lone positional argument wrap it directly: select({...})
        if in_call and len(call.args) == 1 and not call.kwargs:
            return f"{call.name}({self.render(call.args[0], effective, indent, True, level + 1)})"

        inner = self._unit * (indent + 1)
        lines = [f"{call.name}("]
        for arg in call.args:
            lines.append(f"{inner}{self.render(arg, effective, indent + 1, True, level + 1)},")
        for keyword, value in call.kwargs:
            text = self.render(value, effective, indent + 1, True, level + 1)
            lines.append(f"{inner}{keyword} = {text},")
        lines.append(f"{self._unit * indent})")
        return "\n".join(lines)


def to_string(
    value: Any,
    format: Format = Format.ONELINE,
    settings: EmitterSettings | None = None,
) -> str:
    """Render a value as Starlark source text.

    Args:
        value: A literal, a collection, a :class:`FunctionCall`, a
            :class:`BinaryOp`, or any object with ``to_starlark(settings)``.
        format: Line mode used where a call does not set its own.
        settings: Emitter settings. If None, defaults are used.

    Returns:
        The Starlark expression text, without a trailing newline.

    Raises:
        StarlarkError: If any part of the value cannot be encoded.
    """
    if settings is None:
        from bzlgen.core.settings import EmitterSettings

        settings = EmitterSettings()
    return _Renderer(settings).render(value, format, 0, False, 0)

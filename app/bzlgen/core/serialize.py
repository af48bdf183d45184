"""Serialization of declaration sequences into BUILD file text."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from bzlgen.core.starlark import to_string
from bzlgen.models.declarations import Alias, Comment, Declaration, ExportsFiles, Filegroup, Package

if TYPE_CHECKING:
    from bzlgen.core.settings import EmitterSettings

logger = logging.getLogger(__name__)

_STRUCTURED = (Package, ExportsFiles, Filegroup, Alias)


def serialize_declaration(declaration: Declaration, settings: EmitterSettings | None = None) -> str:
    """Render a single declaration.

    Args:
        declaration: The declaration to render.
        settings: Emitter settings. If None, defaults are used.

    Returns:
        The declaration text without a trailing newline.

    Raises:
        StarlarkError: If the declaration cannot be encoded.
        TypeError: If ``declaration`` is not a known declaration type.
    """
    if isinstance(declaration, Comment):
        return declaration.text
    if isinstance(declaration, _STRUCTURED):
        return to_string(declaration.to_call(), settings=settings)
    msg = f"Unknown declaration type: {type(declaration).__name__}"
    raise TypeError(msg)


def serialize(declarations: Iterable[Declaration], settings: EmitterSettings | None = None) -> str:
    """Render declarations in order, separated by one blank line.

    Args:
        declarations: Declarations to render.
        settings: Emitter settings. If None, defaults are used.

    Returns:
        The combined text, with no leading or trailing blank line. Comments
        with empty text are left out.

    Raises:
        StarlarkError: If any structured declaration cannot be encoded.
            Nothing is returned for the batch in that case.
    """
    parts: list[str] = []
    for declaration in declarations:
        if isinstance(declaration, Comment) and not declaration.text:
            logger.debug("Skipping empty comment")
            continue
        logger.debug("Rendering %s", type(declaration).__name__)
        parts.append(serialize_declaration(declaration, settings))
    return "\n\n".join(parts)

"""Document file I/O operations.

This module loads declaration documents and remap requests from TOML
files with validation through Pydantic models, and writes outputs
atomically.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, TypeVar

import tomli_w
from pydantic import BaseModel, ValidationError

from bzlgen.models.declarations import Declaration
from bzlgen.models.document import DeclarationDocument, RemapRequest
from bzlgen.models.select import SelectList, WithOriginalConfigurations

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class DocumentError(Exception):
    """Base exception for document-related errors."""


class DocumentNotFoundError(DocumentError):
    """Raised when a document file is not found."""


class DocumentParseError(DocumentError):
    """Raised when a document file cannot be parsed."""


class DocumentValidationError(DocumentError):
    """Raised when document content is invalid."""


def _load_model(path: Path, model: type[ModelT]) -> ModelT:
    if not path.exists():
        raise DocumentNotFoundError(f"Document not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise DocumentParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise DocumentError(f"Failed to read document: {e}") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DocumentValidationError(f"Invalid document content: {e}") from e


def load_declarations(path: Path) -> list[Declaration]:
    """Load the declarations listed in a TOML document.

    Args:
        path: Path to the declaration document.

    Returns:
        Declarations in document order.

    Raises:
        DocumentNotFoundError: If the file doesn't exist.
        DocumentParseError: If the TOML syntax is invalid.
        DocumentValidationError: If the content doesn't match the schema.
    """
    document = _load_model(path, DeclarationDocument)
    declarations = document.to_declarations()
    logger.info("Loaded %d declarations from %s", len(declarations), path)
    return declarations


def load_remap_request(path: Path) -> RemapRequest:
    """Load a remap request from a TOML document.

    Raises:
        DocumentNotFoundError: If the file doesn't exist.
        DocumentParseError: If the TOML syntax is invalid.
        DocumentValidationError: If the content doesn't match the schema.
    """
    request = _load_model(path, RemapRequest)
    logger.info(
        "Loaded remap request from %s (%d configurations, %d mapped)",
        path,
        len(request.select.selects),
        len(request.mapping),
    )
    return request


def remap_result_to_dict(
    remapped: SelectList[WithOriginalConfigurations[str]],
    unmapped: dict[str, set[str]],
) -> dict[str, Any]:
    """Convert a remap result to plain data for JSON or TOML output.

    The unconditioned origin cannot be written as a TOML value, so each
    entry carries it as a separate ``common`` flag.

    Args:
        remapped: Remapped collection.
        unmapped: Values whose configuration had no mapping.

    Returns:
        Dictionary with ``common``, ``selects`` and ``unmapped`` keys.
    """
    return {
        "common": [entry.value for entry in sorted(remapped.common)],
        "selects": {
            configuration: [
                {
                    "value": entry.value,
                    "original_configurations": [
                        c for c in entry.sorted_configurations() if c is not None
                    ],
                    "common": None in entry.original_configurations,
                }
                for entry in sorted(entries)
            ]
            for configuration, entries in sorted(remapped.selects.items())
        },
        "unmapped": {cfg: sorted(values) for cfg, values in sorted(unmapped.items())},
    }


def _write_atomic(path: Path, payload: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(mode="wb", dir=path.parent, delete=False, suffix=".tmp") as f:
            tmp_path = Path(f.name)
            f.write(payload)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise DocumentError(f"Failed to write {path}: {e}") from e

    logger.debug("Wrote %d bytes to %s", len(payload), path)
    return path


def write_build_file(content: str, path: Path) -> Path:
    """Write rendered Starlark text to a file atomically.

    A single trailing newline is added.

    Raises:
        DocumentError: If the file cannot be written.
    """
    return _write_atomic(path, (content + "\n").encode())


def save_remap_result(
    remapped: SelectList[WithOriginalConfigurations[str]],
    unmapped: dict[str, set[str]],
    path: Path,
) -> Path:
    """Save a remap result as TOML atomically.

    Raises:
        DocumentError: If the file cannot be written.
    """
    data = remap_result_to_dict(remapped, unmapped)
    return _write_atomic(path, tomli_w.dumps(data).encode())

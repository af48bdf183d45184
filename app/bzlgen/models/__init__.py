"""Data models for bzlgen.

This module exports the value types used to build Starlark declarations.
"""

from bzlgen.models.declarations import (
    PUBLIC_VISIBILITY,
    Alias,
    Comment,
    Declaration,
    ExportsFiles,
    Filegroup,
    Package,
)
from bzlgen.models.glob import Glob
from bzlgen.models.label import Label
from bzlgen.models.select import (
    DEFAULT_CONDITION,
    Select,
    SelectDict,
    SelectList,
    SelectMap,
    SelectStringDict,
    SelectStringList,
    WithOriginalConfigurations,
    configuration_sort_key,
)

__all__ = [
    "DEFAULT_CONDITION",
    "PUBLIC_VISIBILITY",
    "Alias",
    "Comment",
    "Declaration",
    "ExportsFiles",
    "Filegroup",
    "Glob",
    "Label",
    "Package",
    "Select",
    "SelectDict",
    "SelectList",
    "SelectMap",
    "SelectStringDict",
    "SelectStringList",
    "WithOriginalConfigurations",
    "configuration_sort_key",
]

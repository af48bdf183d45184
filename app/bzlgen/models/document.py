"""Document models for TOML input files.

This module defines the Pydantic models for the two documents the CLI
reads: a declaration document listing what to render, and a remap
request pairing a conditional list with a configuration mapping.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

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
from bzlgen.models.select import SelectList


class GlobEntry(BaseModel):
    """Glob patterns as written in a document.

    Attributes:
        include: Patterns to include; at least one is required.
        exclude: Patterns to exclude.
    """

    model_config = ConfigDict(extra="forbid")

    include: Annotated[list[str], Field(min_length=1, description="Patterns to include")]
    exclude: Annotated[
        list[str],
        Field(default_factory=list, description="Patterns to exclude"),
    ]

    def to_glob(self) -> Glob:
        return Glob.from_patterns(self.include, self.exclude)


class CommentEntry(BaseModel):
    """Raw text emitted verbatim."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["comment"]
    text: str

    def to_declaration(self) -> Comment:
        return Comment(text=self.text)


class PackageEntry(BaseModel):
    """``package()`` declaration, public by default."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["package"]
    default_visibility: Annotated[
        list[str],
        Field(
            default_factory=lambda: [PUBLIC_VISIBILITY],
            description="Default visibility labels",
        ),
    ]

    def to_declaration(self) -> Package:
        return Package(default_visibility=frozenset(self.default_visibility))


class ExportsFilesEntry(BaseModel):
    """``exports_files()`` declaration."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["exports_files"]
    paths: Annotated[list[str], Field(default_factory=list, description="Explicit paths")]
    globs: Annotated[GlobEntry, Field(description="Exported file patterns")]

    def to_declaration(self) -> ExportsFiles:
        return ExportsFiles(paths=frozenset(self.paths), globs=self.globs.to_glob())


class FilegroupEntry(BaseModel):
    """``filegroup()`` declaration."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["filegroup"]
    name: Annotated[str, Field(min_length=1, description="Target name")]
    srcs: Annotated[GlobEntry, Field(description="Source file patterns")]

    def to_declaration(self) -> Filegroup:
        return Filegroup(name=self.name, srcs=self.srcs.to_glob())


class AliasEntry(BaseModel):
    """``alias()`` declaration."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["alias"]
    name: Annotated[str, Field(min_length=1, description="Alias target name")]
    actual: Annotated[str, Field(description="Label the alias points to")]
    tags: Annotated[list[str], Field(default_factory=list, description="Target tags")]

    @field_validator("actual")
    @classmethod
    def validate_actual(cls, v: str) -> str:
        """Normalize ``actual`` to its canonical label form."""
        return str(Label.parse(v))

    def to_declaration(self) -> Alias:
        return Alias(name=self.name, actual=self.actual, tags=frozenset(self.tags))


DeclarationEntry = Annotated[
    CommentEntry | PackageEntry | ExportsFilesEntry | FilegroupEntry | AliasEntry,
    Field(discriminator="kind"),
]


class DeclarationDocument(BaseModel):
    """Ordered list of declarations to render into one file."""

    model_config = ConfigDict(extra="forbid")

    declarations: Annotated[
        list[DeclarationEntry],
        Field(default_factory=list, description="Declarations in output order"),
    ]

    def to_declarations(self) -> list[Declaration]:
        return [entry.to_declaration() for entry in self.declarations]


class SelectListEntry(BaseModel):
    """A conditional string list as written in a document.

    Attributes:
        common: Values present under every configuration.
        selects: Configuration name to the values present under it.
    """

    model_config = ConfigDict(extra="forbid")

    common: Annotated[list[str], Field(default_factory=list)]
    selects: Annotated[dict[str, list[str]], Field(default_factory=dict)]

    def to_select_list(self) -> SelectList[str]:
        select_list: SelectList[str] = SelectList()
        for value in self.common:
            select_list.insert(value)
        for configuration, values in self.selects.items():
            for value in values:
                select_list.insert(value, configuration)
        return select_list


class RemapRequest(BaseModel):
    """A conditional list and the configuration mapping to apply to it.

    Attributes:
        select: The list to remap.
        mapping: Old configuration name to new configuration names.
    """

    model_config = ConfigDict(extra="forbid")

    select: Annotated[SelectListEntry, Field(default_factory=SelectListEntry)]
    mapping: Annotated[dict[str, list[str]], Field(default_factory=dict)]

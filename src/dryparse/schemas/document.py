"""Document tree models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Value(BaseModel):
    """Raw property text with the source line it started on."""

    model_config = ConfigDict(frozen=True)

    text: str
    line: int = Field(..., ge=1)

    @property
    def plain(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


class OptionEntry(BaseModel):
    """One choice in an options block.

    Attributes:
        id: ``@id`` reference (possibly qualified or relative) or ``#tag``,
            kept exactly as written.
        title: Text after the ``:`` clause, if any.
        view_if: Condition or magic block after the ``if`` clause, if any.
        line: Source line of the entry.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: Value | None = None
    view_if: Value | None = Field(default=None, alias="viewIf")
    line: int = Field(..., ge=1)

    @property
    def is_tag(self) -> bool:
        return self.id.startswith("#")


class OptionsBlock(BaseModel):
    """The options of a node, with the properties declared among them."""

    model_config = ConfigDict(frozen=True)

    options: list[OptionEntry] = Field(default_factory=list)
    properties: dict[str, Value] = Field(default_factory=dict)


class DocumentNode(BaseModel):
    """The file root, or one ``@section`` of it."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str | None = None
    properties: dict[str, Value] = Field(default_factory=dict)
    content: str = ""
    options: OptionsBlock | None = None
    sections: list["DocumentNode"] = Field(default_factory=list)
    line: int | None = None

    def get(self, name: str) -> Value | None:
        """Return the named property, or None if it is not defined."""
        return self.properties.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the tree into JSON-ready primitives."""
        return self.model_dump(by_alias=True)

# fluentschema/models.py
"""Immutable data models behind the fluent builder.

A :class:`Document` holds everything accumulated by a builder chain.  Its
``definitions`` and ``properties`` are tuples of entries; an entry is either a
:class:`PropertyEntry` (a typed or combinator schema) or a
:class:`ReferenceEntry` (a bare ``$ref`` pointer that carries nothing else).

Type-scoped validation keywords live in a tagged ``constraints`` value, so a
string entry can only hold :class:`StringConstraints` and a numeric entry only
:class:`NumberConstraints`.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "JsonType",
    "JSON_TYPES",
    "STRING_OPTIONS",
    "NUMBER_OPTIONS",
    "CONSTRAINT_TYPES",
    "StringConstraints",
    "NumberConstraints",
    "PropertyEntry",
    "ReferenceEntry",
    "Document",
    "constraint_category",
]

JsonType = Literal["string", "number", "integer", "boolean", "array", "object", "null"]
JSON_TYPES: tuple[str, ...] = get_args(JsonType)

STRING_OPTIONS: tuple[str, ...] = ("minLength", "maxLength", "pattern", "format")
NUMBER_OPTIONS: tuple[str, ...] = (
    "minimum",
    "maximum",
    "multipleOf",
    "exclusiveMinimum",
    "exclusiveMaximum",
)

# Constraint category -> schema types allowed to carry it
CONSTRAINT_TYPES: dict[str, tuple[str, ...]] = {
    "string": ("string",),
    "number": ("number", "integer"),
}


def constraint_category(option: str) -> Optional[str]:
    """Return ``"string"`` / ``"number"`` for a type-scoped keyword, else ``None``."""
    if option in STRING_OPTIONS:
        return "string"
    if option in NUMBER_OPTIONS:
        return "number"
    return None


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


class StringConstraints(_FrozenModel):
    """Validation keywords that only apply to ``string`` schemas."""

    kind: Literal["string"] = "string"
    min_length: Optional[int] = Field(None, alias="minLength")
    max_length: Optional[int] = Field(None, alias="maxLength")
    pattern: Optional[str] = None
    format: Optional[str] = None

    def to_attributes(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"kind"})


class NumberConstraints(_FrozenModel):
    """Validation keywords that only apply to ``number`` / ``integer`` schemas."""

    kind: Literal["number"] = "number"
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    multiple_of: Optional[Union[int, float]] = Field(None, alias="multipleOf")
    exclusive_minimum: Optional[Union[int, float]] = Field(None, alias="exclusiveMinimum")
    exclusive_maximum: Optional[Union[int, float]] = Field(None, alias="exclusiveMaximum")

    def to_attributes(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"kind"})


Constraints = Annotated[
    Union[StringConstraints, NumberConstraints],
    Field(discriminator="kind"),
]


def _check_constraints(type_: Optional[str], constraints: Any) -> None:
    if constraints is not None and type_ not in CONSTRAINT_TYPES[constraints.kind]:
        raise ValueError(
            f"{constraints.kind} constraints cannot be attached to type '{type_}'"
        )


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


class PropertyEntry(_FrozenModel):
    """One named property or definition.

    ``type`` is ``None`` for pure combinator entries.  Attribute values may be
    plain JSON-like data or nested builders; the builder flattens the latter
    when the document is extracted.
    """

    kind: Literal["schema"] = "schema"
    name: str
    type: Optional[JsonType] = None
    id: Optional[str] = Field(None, alias="$id")
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    examples: Any = None
    properties: Any = None
    required: Any = None
    any_of: Any = Field(None, alias="anyOf")
    all_of: Any = Field(None, alias="allOf")
    one_of: Any = Field(None, alias="oneOf")
    not_: Any = Field(None, alias="not")
    constraints: Optional[Constraints] = None

    @model_validator(mode="after")
    def _constraints_match_type(self) -> "PropertyEntry":
        _check_constraints(self.type, self.constraints)
        return self

    def to_attributes(self) -> dict[str, Any]:
        """Return the entry's schema keywords, without its name."""
        attributes: dict[str, Any] = {}
        for key, value in (
            ("type", self.type),
            ("default", self.default),
            ("title", self.title),
            ("$id", self.id),
            ("description", self.description),
            ("examples", self.examples),
            ("properties", self.properties),
            ("required", self.required),
            ("anyOf", self.any_of),
            ("oneOf", self.one_of),
            ("allOf", self.all_of),
            ("not", self.not_),
        ):
            if value is not None:
                attributes[key] = value
        if self.constraints is not None:
            attributes.update(self.constraints.to_attributes())
        return attributes


class ReferenceEntry(_FrozenModel):
    """A property that only points at another schema location."""

    kind: Literal["ref"] = "ref"
    name: str
    ref: str = Field(alias="$ref")

    @property
    def type(self) -> None:
        return None

    def to_attributes(self) -> dict[str, Any]:
        return {"$ref": self.ref}


Entry = Annotated[Union[PropertyEntry, ReferenceEntry], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class Document(_FrozenModel):
    """The accumulated schema state held by one builder instance."""

    schema_uri: str = Field(alias="$schema")
    type: Optional[JsonType] = "object"
    id: Optional[str] = Field(None, alias="$id")
    ref: Optional[str] = Field(None, alias="$ref")
    title: Optional[str] = None
    description: Optional[str] = None
    examples: Any = None
    constraints: Optional[Constraints] = None
    definitions: tuple[Entry, ...] = ()
    properties: tuple[Entry, ...] = ()
    required: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _constraints_match_type(self) -> "Document":
        _check_constraints(self.type, self.constraints)
        return self

    @property
    def last_property(self) -> Optional[Union[PropertyEntry, ReferenceEntry]]:
        """The property that refinements and combinators act on."""
        return self.properties[-1] if self.properties else None

    def append(
        self,
        target: Literal["definitions", "properties"],
        entry: Union[PropertyEntry, ReferenceEntry],
    ) -> "Document":
        return self.model_copy(update={target: getattr(self, target) + (entry,)})

    def replace_last_property(
        self, entry: Union[PropertyEntry, ReferenceEntry]
    ) -> "Document":
        if not self.properties:
            raise IndexError("document has no properties")
        return self.model_copy(update={"properties": self.properties[:-1] + (entry,)})

    def add_required(self, name: str) -> "Document":
        return self.model_copy(update={"required": self.required + (name,)})

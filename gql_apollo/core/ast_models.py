"""Models for the JSON the Apollo CLI emits with `--target=json`.

The experimental codegen engine writes every parsed operation and fragment
to a single JSON document. These frozen pydantic models mirror that
document so it can be consumed without touching raw dictionaries.

Optional groups (args, fields, fragmentSpreads, inlineFragments) are None
when the key is absent and an empty tuple when the CLI emitted an empty
list. Fragment spreads are kept by name only and are never resolved to the
fragment definitions.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .errors import MalformedSchemaDocument

_NAME_PATTERN = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")


class _ASTModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class TypeKind(str, Enum):
    NAMED = "NamedType"
    LIST = "ListType"
    NON_NULL = "NonNullType"


# Real schemas nest a handful of wrappers; anything deeper is malformed input
MAX_TYPE_DEPTH = 64


def _parse_type_string(text: str) -> dict[str, Any]:
    """Turn a type string like `[Episode!]!` into the nested object form."""
    original = text
    text = text.strip()
    wrappers = []
    while text.endswith("!") or text.startswith("["):
        if len(wrappers) >= MAX_TYPE_DEPTH:
            raise ValueError(f"type nested deeper than {MAX_TYPE_DEPTH} levels")
        if text.endswith("!"):
            text = text[:-1].strip()
            if text.endswith("!"):
                raise ValueError(f"non-null of non-null in type {original!r}")
            wrappers.append(TypeKind.NON_NULL)
        else:
            if not text.endswith("]"):
                raise ValueError(f"unbalanced list type {original!r}")
            text = text[1:-1].strip()
            wrappers.append(TypeKind.LIST)

    if not _NAME_PATTERN.fullmatch(text):
        raise ValueError(f"invalid type name {text!r}")
    result: dict[str, Any] = {"kind": TypeKind.NAMED.value, "name": text}
    for kind in reversed(wrappers):
        result = {"kind": kind.value, "ofType": result}
    return result


def _type_depth(data: dict[str, Any]) -> int:
    depth = 0
    while isinstance(data, dict) and data.get("ofType") is not None:
        depth += 1
        if depth > MAX_TYPE_DEPTH:
            break
        data = data["ofType"]
    return depth


class GraphQLTypeReference(_ASTModel):
    """A reference to a schema type, possibly wrapped in list or non-null.

    Accepts either the type string the CLI emits for fields ("[Episode!]!")
    or the nested object form used for variables.
    """

    kind: TypeKind
    name: str | None = None
    of_type: "GraphQLTypeReference | None" = None

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, str):
            return _parse_type_string(data)
        if isinstance(data, dict) and _type_depth(data) > MAX_TYPE_DEPTH:
            raise ValueError(f"type nested deeper than {MAX_TYPE_DEPTH} levels")
        if isinstance(data, dict) and isinstance(data.get("name"), dict):
            # {"kind": "Name", "value": "Episode"}
            data = {**data, "name": data["name"].get("value")}
        return data

    @model_validator(mode="after")
    def _check_shape(self) -> "GraphQLTypeReference":
        if self.kind is TypeKind.NAMED:
            if not self.name:
                raise ValueError("named type requires a name")
        elif self.of_type is None:
            raise ValueError(f"{self.kind.value} requires ofType")
        return self

    @property
    def named_type(self) -> str:
        """The innermost type name, without list or non-null wrappers."""
        if self.kind is TypeKind.NAMED:
            return self.name
        return self.of_type.named_type

    @property
    def is_non_null(self) -> bool:
        return self.kind is TypeKind.NON_NULL

    @property
    def is_list(self) -> bool:
        if self.kind is TypeKind.NON_NULL:
            return self.of_type.is_list
        return self.kind is TypeKind.LIST

    def __str__(self) -> str:
        if self.kind is TypeKind.NAMED:
            return self.name
        if self.kind is TypeKind.LIST:
            return f"[{self.of_type}]"
        return f"{self.of_type}!"


class Argument(_ASTModel):
    """An argument passed along with a field."""

    name: str
    # Usually a string or an object; kept as raw JSON
    value: Any = None
    type: GraphQLTypeReference


class SelectionField(_ASTModel):
    """A field in a selection set.

    `response_name` matches `field_name` unless the field is aliased.
    `is_deprecated` of None means the field is not deprecated.
    """

    response_name: str
    field_name: str
    type: GraphQLTypeReference
    is_conditional: bool = False
    description: str | None = None
    is_deprecated: bool | None = None
    arguments: tuple[Argument, ...] | None = Field(default=None, alias="args")
    sub_fields: tuple["SelectionField", ...] | None = Field(default=None, alias="fields")
    fragment_spreads: tuple[str, ...] | None = None
    inline_fragments: tuple["InlineFragment", ...] | None = None

    @property
    def is_aliased(self) -> bool:
        return self.response_name != self.field_name

    def iter_fields(self) -> Iterator["SelectionField"]:
        """Yield this field and every field below it, depth first."""
        yield self
        for child in self.sub_fields or ():
            yield from child.iter_fields()
        for fragment in self.inline_fragments or ():
            for child in fragment.sub_fields or ():
                yield from child.iter_fields()


class InlineFragment(_ASTModel):
    """A fragment defined inline, e.g. `... on Droid { primaryFunction }`."""

    type_condition: str
    possible_types: tuple[str, ...] = ()
    sub_fields: tuple[SelectionField, ...] | None = Field(default=None, alias="fields")
    fragment_spreads: tuple[str, ...] | None = None


class Variable(_ASTModel):
    name: str
    type: GraphQLTypeReference


class Operation(_ASTModel):
    """A query, mutation or subscription found in the included files."""

    operation_name: str
    operation_type: str
    file_path: str | None = None
    root_type: str | None = None
    variables: tuple[Variable, ...] = ()
    source: str | None = None
    sub_fields: tuple[SelectionField, ...] = Field(default=(), alias="fields")
    fragment_spreads: tuple[str, ...] | None = None
    inline_fragments: tuple[InlineFragment, ...] | None = None
    fragments_referenced: tuple[str, ...] = ()
    source_with_fragments: str | None = None
    operation_id: str | None = None


class Fragment(_ASTModel):
    """A named fragment definition."""

    fragment_name: str
    type_condition: str
    possible_types: tuple[str, ...] = ()
    file_path: str | None = None
    source: str | None = None
    sub_fields: tuple[SelectionField, ...] = Field(default=(), alias="fields")
    fragment_spreads: tuple[str, ...] | None = None
    inline_fragments: tuple[InlineFragment, ...] | None = None


class CodegenOutput(_ASTModel):
    """The whole document written by the experimental codegen engine."""

    operations: tuple[Operation, ...] = ()
    fragments: tuple[Fragment, ...] = ()
    types_used: tuple[dict[str, Any], ...] = ()


GraphQLTypeReference.model_rebuild()
SelectionField.model_rebuild()
InlineFragment.model_rebuild()
Operation.model_rebuild()
Fragment.model_rebuild()
CodegenOutput.model_rebuild()


def _malformed(error: ValidationError) -> MalformedSchemaDocument:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or None
    return MalformedSchemaDocument(location, first["msg"])


def _validate(model: type[BaseModel], data: Any) -> Any:
    try:
        if isinstance(data, (str, bytes)):
            return model.model_validate_json(data)
        return model.model_validate(data)
    except ValidationError as e:
        raise _malformed(e) from e


def parse_field(data: Any) -> SelectionField:
    """Build a SelectionField tree from decoded JSON or a JSON string.

    Raises:
        MalformedSchemaDocument: If a required key is missing or has the wrong shape
    """
    return _validate(SelectionField, data)


def parse_codegen_output(data: Any) -> CodegenOutput:
    return _validate(CodegenOutput, data)


def load_codegen_output(path: Path) -> CodegenOutput:
    """Read and parse the JSON file written by `codegen:generate --target=json`."""
    return parse_codegen_output(Path(path).read_bytes())

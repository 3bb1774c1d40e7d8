"""
Core model representation for the transformation stage.

Holds the document-side type graph (Schema) and the
generation-side entities (Model, Field, Parameter, Operation)
that the naming and normalization passes read and rewrite.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)


class SchemaKind(Enum):
    """Kinds of OpenAPI schema nodes."""

    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    ARRAY = "array"
    OBJECT = "object"
    MAP = "map"  # object with additionalProperties only
    UNION = "union"  # oneOf
    ANY = "any"


PRIMITIVE_KINDS = frozenset(
    {SchemaKind.BOOLEAN, SchemaKind.STRING, SchemaKind.INTEGER, SchemaKind.NUMBER}
)


@dataclass
class Schema:
    """A node of the document's declared type graph."""

    kind: SchemaKind
    format: Optional[str] = None
    name: Optional[str] = None
    ref: Optional[str] = None  # Name of a referenced component schema

    # Arrays: element schema. Maps: value schema.
    items: Optional["Schema"] = None

    properties: Dict[str, "Schema"] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)
    enum: List[Any] = field(default_factory=list)
    one_of: List["Schema"] = field(default_factory=list)

    default: Any = None
    example: Any = None
    description: Optional[str] = None

    # Raw vendor extensions (x-* keys)
    extensions: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_primitive(self) -> bool:
        return self.ref is None and self.kind in PRIMITIVE_KINDS

    @property
    def is_array(self) -> bool:
        return self.ref is None and self.kind == SchemaKind.ARRAY

    @property
    def is_enum(self) -> bool:
        return self.is_primitive and bool(self.enum)

    @property
    def is_union(self) -> bool:
        return self.ref is None and self.kind == SchemaKind.UNION


@dataclass
class Annotations:
    """
    Typed out-of-band hints attached to an entity.

    The known hints are explicit attributes; anything else from the
    document stays available in ``extensions``.
    """

    is_posix_time: bool = False
    one_of_name: Optional[str] = None
    is_one_of_primitives: bool = False
    is_object_param: bool = False
    error_identifier: Optional[str] = None
    http_method: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def first_present(self, keys: Iterable[str]) -> Any:
        """Return the value of the first extension key present, else None."""
        for key in keys:
            if key in self.extensions:
                return self.extensions[key]
        return None

    def as_dict(self) -> Dict[str, Any]:
        """Render as an x-* extension dictionary for templates."""
        result = dict(self.extensions)
        if self.is_posix_time:
            result["x-isPosixTime"] = True
        if self.one_of_name:
            result["x-one-of-name"] = self.one_of_name
        if self.is_one_of_primitives:
            result["x-is-one-of-primitives"] = True
        if self.is_object_param:
            result["x-is-object-param"] = True
        if self.error_identifier:
            result["x-error-identifier"] = self.error_identifier
        if self.http_method:
            result["x-matlab-method"] = self.http_method
        return result


@dataclass(frozen=True)
class TypeRef:
    """
    Resolved type of a field or parameter.

    Either a primitive of the target language (``primitive`` holds the
    language's type enum member) or a reference to a generated model.
    """

    name: str
    primitive: Optional[Enum] = None
    is_model: bool = False
    is_array: bool = False
    is_map: bool = False
    is_posix_time: bool = False
    is_qualified: bool = False  # Helper type living in the output package

    @property
    def is_primitive(self) -> bool:
        return self.primitive is not None and not (self.is_model or self.is_qualified)

    @classmethod
    def model(cls, name: str) -> "TypeRef":
        return cls(name=name, is_model=True)


@dataclass
class EnumValue:
    """One allowed value of an enumeration with its display name."""

    name: str
    value: Any


@dataclass
class Field:
    """A property of a model."""

    name: str
    base_name: str  # Name as written in the document
    type_ref: TypeRef
    is_enum: bool = False
    enum_name: Optional[str] = None
    allowable_values: List[Any] = field(default_factory=list)
    is_array: bool = False
    is_map: bool = False
    is_primitive: bool = False
    items: Optional["Field"] = None
    required: bool = False
    description: Optional[str] = None
    annotations: Annotations = field(default_factory=Annotations)


@dataclass
class Model:
    """A named, generation-ready type."""

    name: str
    class_name: str
    fields: List[Field] = field(default_factory=list)
    is_enum: bool = False
    allowable_values: List[Any] = field(default_factory=list)
    enum_values: List[EnumValue] = field(default_factory=list)
    one_of: List[Schema] = field(default_factory=list)
    description: Optional[str] = None
    is_synthesized: bool = False
    annotations: Annotations = field(default_factory=Annotations)

    @property
    def has_fields(self) -> bool:
        return bool(self.fields)

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by sanitized or source name."""
        for f in self.fields:
            if f.name == name or f.base_name == name:
                return f
        return None


@dataclass
class Parameter:
    """Input of an operation."""

    name: str
    data_type: TypeRef
    param_name: Optional[str] = None
    location: str = "query"
    required: bool = False
    default: Any = None
    example: Any = None
    is_array: bool = False
    is_map: bool = False
    example_literal: Optional[str] = None
    annotations: Annotations = field(default_factory=Annotations)


@dataclass
class Operation:
    """A callable API operation."""

    operation_id: str
    http_method: str
    path: str = ""
    nickname: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    parameters: List[Parameter] = field(default_factory=list)
    return_type: Optional[TypeRef] = None
    annotations: Annotations = field(default_factory=Annotations)


_TYPE_KINDS = {
    "boolean": SchemaKind.BOOLEAN,
    "string": SchemaKind.STRING,
    "integer": SchemaKind.INTEGER,
    "number": SchemaKind.NUMBER,
    "array": SchemaKind.ARRAY,
    "object": SchemaKind.OBJECT,
}


def _ref_name(ref: str) -> str:
    """Last path segment of a local JSON reference."""
    return ref.rsplit("/", 1)[-1]


def schema_from_dict(data: Mapping[str, Any], name: Optional[str] = None) -> Schema:
    """
    Convert an already-parsed OpenAPI schema dictionary to a Schema.

    Args:
        data: Schema object as found under components/schemas
        name: Name to give the node (defaults to its title)

    Returns:
        Schema node with nested schemas converted recursively
    """
    extensions = {k: copy.deepcopy(v) for k, v in data.items() if k.startswith("x-")}
    common = {
        "format": data.get("format"),
        "name": name or data.get("title"),
        "default": data.get("default"),
        "example": data.get("example"),
        "description": data.get("description"),
        "enum": list(data.get("enum", [])),
        "extensions": extensions,
    }

    if "$ref" in data:
        return Schema(kind=SchemaKind.OBJECT, ref=_ref_name(data["$ref"]), **common)

    if "oneOf" in data:
        members = [schema_from_dict(m) for m in data["oneOf"]]
        return Schema(kind=SchemaKind.UNION, one_of=members, **common)

    type_name = data.get("type")
    if isinstance(type_name, list):
        # OpenAPI 3.1 style ["string", "null"]
        non_null = [t for t in type_name if t != "null"]
        type_name = non_null[0] if non_null else None

    if type_name is None:
        if "properties" in data or "additionalProperties" in data:
            type_name = "object"
        elif common["enum"]:
            type_name = "string"

    kind = _TYPE_KINDS.get(type_name) if type_name else SchemaKind.ANY
    if kind is None:
        logger.warning("Unknown schema type %r for %s, treating as any", type_name, name)
        kind = SchemaKind.ANY

    if kind == SchemaKind.ARRAY:
        items = data.get("items")
        return Schema(
            kind=kind,
            items=schema_from_dict(items) if isinstance(items, Mapping) else None,
            **common,
        )

    if kind == SchemaKind.OBJECT:
        properties = {
            prop_name: schema_from_dict(prop_data)
            for prop_name, prop_data in data.get("properties", {}).items()
        }
        additional = data.get("additionalProperties")
        if not properties and additional not in (None, False):
            value_schema = (
                schema_from_dict(additional)
                if isinstance(additional, Mapping)
                else Schema(kind=SchemaKind.ANY)
            )
            return Schema(kind=SchemaKind.MAP, items=value_schema, **common)
        return Schema(
            kind=kind,
            properties=properties,
            required=list(data.get("required", [])),
            **common,
        )

    return Schema(kind=kind, **common)


def schemas_from_components(document: Mapping[str, Any]) -> Dict[str, Schema]:
    """
    Convert all named schemas of a parsed OpenAPI document.

    Reads ``components.schemas`` (OpenAPI 3) or ``definitions``
    (Swagger 2), preserving declaration order.
    """
    raw = document.get("components", {}).get("schemas")
    if raw is None:
        raw = document.get("definitions", {})

    return {name: schema_from_dict(data, name) for name, data in raw.items()}

"""
MATLAB type system for the transformation stage.

Maps OpenAPI schemas to MATLAB primitives or to references to
generated model classes.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from ...core.naming import NameSanitizer
from ...core.schema import Schema, SchemaKind, TypeRef
from ...logging_config import get_logger

logger = get_logger(__name__)


FREE_FORM_MODEL = "FreeFormObject"
JSON_MAPPER_MAP = "JSONMapperMap"

# Types that never need a generated class or an import
MATLAB_NATIVE_TYPES = frozenset(
    {
        "double",
        "single",
        "complex",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "logical",
        "char",
        "string",
        "cellstr",
        "cell",
        "struct",
        "datetime",
        "duration",
        "timetable",
        "table",
        "categorical",
        "containers.Map",
        "timeseries",
    }
)


class MatlabType(Enum):
    """Scalar targets a schema can resolve to."""

    LOGICAL = "logical"
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    DOUBLE = "double"
    SINGLE = "single"
    DATETIME = "datetime"
    JSON_MAPPER_MAP = JSON_MAPPER_MAP

    @property
    def is_native(self) -> bool:
        return self.value in MATLAB_NATIVE_TYPES


# (kind, format) -> type; format None is the kind's default
SCALAR_TYPES: Dict[Tuple[SchemaKind, Optional[str]], MatlabType] = {
    (SchemaKind.BOOLEAN, None): MatlabType.LOGICAL,
    (SchemaKind.STRING, None): MatlabType.STRING,
    (SchemaKind.STRING, "date-time"): MatlabType.DATETIME,
    (SchemaKind.STRING, "date"): MatlabType.DATETIME,
    (SchemaKind.STRING, "binary"): MatlabType.STRING,
    (SchemaKind.STRING, "uuid"): MatlabType.STRING,
    (SchemaKind.INTEGER, None): MatlabType.INT32,
    (SchemaKind.INTEGER, "int32"): MatlabType.INT32,
    (SchemaKind.INTEGER, "int64"): MatlabType.INT64,
    # Not standard OpenAPI but extensively used in MS Azure specs
    (SchemaKind.INTEGER, "unixtime"): MatlabType.DATETIME,
    (SchemaKind.NUMBER, None): MatlabType.DOUBLE,
    (SchemaKind.NUMBER, "float"): MatlabType.SINGLE,
    (SchemaKind.NUMBER, "double"): MatlabType.DOUBLE,
    (SchemaKind.MAP, None): MatlabType.JSON_MAPPER_MAP,
}

POSIX_TIME_FORMATS = frozenset({"unixtime"})


def is_native(type_name: str) -> bool:
    """Check whether a type name is a MATLAB built-in type."""
    return type_name in MATLAB_NATIVE_TYPES


class MatlabTypeMapper:
    """
    Resolves schemas to MATLAB type references.

    Scalars come from a fixed table; everything else is a model whose
    name goes through the model naming rules.
    """

    def __init__(self, sanitizer: NameSanitizer, package_name: str):
        """
        Initialize type mapper.

        Args:
            sanitizer: Name sanitizer of the run
            package_name: Output package, used to qualify non-native helper types
        """
        self.sanitizer = sanitizer
        self.package_name = package_name

    def lookup_scalar(self, schema: Schema) -> Optional[MatlabType]:
        """Find the scalar mapping for a schema, preferring kind+format."""
        if schema.ref is not None:
            return None
        if schema.format is not None:
            scalar = SCALAR_TYPES.get((schema.kind, schema.format))
            if scalar is not None:
                return scalar
        return SCALAR_TYPES.get((schema.kind, None))

    def resolve(self, schema: Schema) -> TypeRef:
        """
        Resolve a schema to a TypeRef.

        Args:
            schema: OpenAPI schema node

        Returns:
            Primitive, package-qualified helper or model reference
        """
        if schema.is_array:
            return self._resolve_array(schema)

        scalar = self.lookup_scalar(schema)
        if scalar is not None:
            if scalar.is_native:
                return TypeRef(
                    name=scalar.value,
                    primitive=scalar,
                    is_posix_time=schema.format in POSIX_TIME_FORMATS,
                )
            return TypeRef(
                name=f"{self.package_name}.{scalar.value}",
                primitive=scalar,
                is_map=schema.kind == SchemaKind.MAP,
                is_qualified=True,
            )

        return self._resolve_model(schema)

    def _resolve_array(self, schema: Schema) -> TypeRef:
        if schema.items is None:
            logger.warning(
                "Array schema %s has no items, using %s",
                schema.name or "<inline>",
                FREE_FORM_MODEL,
            )
            return TypeRef(name=FREE_FORM_MODEL, is_model=True, is_array=True)

        item = self.resolve(schema.items)
        return TypeRef(
            name=item.name,
            primitive=item.primitive,
            is_model=item.is_model,
            is_array=True,
            is_map=item.is_map,
            is_posix_time=item.is_posix_time,
            is_qualified=item.is_qualified,
        )

    def _resolve_model(self, schema: Schema) -> TypeRef:
        name = schema.ref or schema.name
        if not name:
            logger.warning(
                "Cannot name %s schema, using %s", schema.kind.value, FREE_FORM_MODEL
            )
            return TypeRef.model(FREE_FORM_MODEL)
        return TypeRef.model(self.sanitizer.model_name(name))

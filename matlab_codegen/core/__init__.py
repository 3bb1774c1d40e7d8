"""
Core transformation components.

Provides the model representation, naming engine and normalization
pass shared by all target languages.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .naming import (
    ModelNameClashError,
    NameRole,
    NameSanitizer,
    NamingError,
    RolePolicy,
    TruncationExhaustedError,
    TruncationRegistry,
    camelize,
    is_legal_identifier,
)
from .normalize import EnumLifter, ModelNormalizer, NormalizationReport, UnionAnnotator
from .schema import (
    Annotations,
    EnumValue,
    Field,
    Model,
    Operation,
    Parameter,
    Schema,
    SchemaKind,
    TypeRef,
    schema_from_dict,
    schemas_from_components,
)

__all__ = [
    # Model representation
    "Annotations",
    "EnumValue",
    "Field",
    "Model",
    "Operation",
    "Parameter",
    "Schema",
    "SchemaKind",
    "TypeRef",
    "schema_from_dict",
    "schemas_from_components",
    # Naming
    "ModelNameClashError",
    "NameRole",
    "NameSanitizer",
    "NamingError",
    "RolePolicy",
    "TruncationExhaustedError",
    "TruncationRegistry",
    "camelize",
    "is_legal_identifier",
    # Normalization
    "EnumLifter",
    "ModelNormalizer",
    "NormalizationReport",
    "UnionAnnotator",
    # Configuration
    "ConfigError",
    "ConfigManager",
    "GeneratorConfig",
    "load_config",
]

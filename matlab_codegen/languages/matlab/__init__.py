"""
MATLAB transformation module.

Naming rules, type mapping, example literals and operation
annotations for MATLAB client and server generation.
"""

from .config import MatlabConfig
from .examples import ExampleValueSynthesizer
from .naming import (
    MATLAB_RESERVED_PROPERTY_WORDS,
    MATLAB_RESERVED_WORDS,
    create_matlab_sanitizer,
    escape_quotation_mark,
    escape_text,
    escape_unsafe_characters,
)
from .operations import OperationAnnotator, parse_object_params
from .transformer import MatlabTransformer, TransformResult, transform_models
from .types import MatlabType, MatlabTypeMapper, is_native

__all__ = [
    # Transformer
    "MatlabTransformer",
    "TransformResult",
    "transform_models",
    # Naming
    "MATLAB_RESERVED_WORDS",
    "MATLAB_RESERVED_PROPERTY_WORDS",
    "create_matlab_sanitizer",
    "escape_quotation_mark",
    "escape_text",
    "escape_unsafe_characters",
    # Types
    "MatlabType",
    "MatlabTypeMapper",
    "is_native",
    # Parameters and operations
    "ExampleValueSynthesizer",
    "OperationAnnotator",
    "parse_object_params",
    # Configuration
    "MatlabConfig",
]

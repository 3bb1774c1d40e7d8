"""
MATLAB code generation: model transformation stage.

Rewrites an OpenAPI data model into MATLAB-legal names and lifts
inline enumerations and one-of unions into named models.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from .core.config import GeneratorConfig, load_config
from .core.schema import Operation, schemas_from_components
from .languages.matlab import MatlabTransformer, TransformResult, transform_models
from .logging_config import get_logger, setup_logging

__version__ = "0.1.0"


def transform_components(
    document: Dict[str, Any],
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    operations: Iterable[Operation] = (),
    flavour: str = "matlab-client",
) -> TransformResult:
    """
    Transform the named schemas of a parsed OpenAPI document.

    Args:
        document: Parsed OpenAPI (or Swagger 2) document
        config: GeneratorConfig, override dict or path to a JSON config file
        operations: Operations built by the host
        flavour: Generator flavour when config is not a GeneratorConfig

    Returns:
        TransformResult with normalized models and annotated operations
    """
    if isinstance(config, GeneratorConfig):
        generator_config = config
    elif isinstance(config, (str, Path)):
        generator_config = load_config(flavour, config_file=config)
    else:
        generator_config = load_config(flavour, custom_config=config)

    schemas = schemas_from_components(document)
    transformer = MatlabTransformer(generator_config)
    return transform_models(transformer, schemas, operations)


__all__ = [
    "GeneratorConfig",
    "MatlabTransformer",
    "TransformResult",
    "get_logger",
    "load_config",
    "setup_logging",
    "transform_components",
    "transform_models",
]

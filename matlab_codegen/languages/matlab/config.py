"""
MATLAB-specific configuration and validation.

Extends the base configuration with flavour checks and the helpers
the transformer needs to read its settings.
"""

import copy
from dataclasses import fields
from typing import List, Tuple

from ...core.config import ConfigError, GeneratorConfig
from .naming import validate_matlab_package_name
from .operations import parse_object_params

MATLAB_FLAVOURS = {"matlab-client", "matlab-server"}


class MatlabConfig(GeneratorConfig):
    """MATLAB-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize MATLAB configuration and validate it."""
        super().__init__(**kwargs)
        self._validate_matlab_settings()

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "MatlabConfig":
        """Wrap a base configuration."""
        if isinstance(config, cls):
            return config
        values = {f.name: copy.copy(getattr(config, f.name)) for f in fields(config)}
        return cls(**values)

    @property
    def is_server(self) -> bool:
        return self.flavour == "matlab-server"

    @property
    def error_identifier_root(self) -> str:
        return self.package_name.replace(".", ":")

    def object_param_pairs(self) -> List[Tuple[str, str]]:
        return parse_object_params(self.object_params)

    def _validate_matlab_settings(self):
        """Validate MATLAB-specific configuration."""
        if self.flavour not in MATLAB_FLAVOURS:
            raise ConfigError(f"Invalid flavour: {self.flavour}")

        errors = validate_matlab_package_name(self.package_name)
        if errors:
            raise ConfigError(
                f"Invalid package name {self.package_name!r}: {'; '.join(errors)}"
            )

        if not self.enum_name_extensions:
            raise ConfigError("At least one enum name extension key is required")

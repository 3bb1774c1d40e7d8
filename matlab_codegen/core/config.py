"""
Configuration management for the transformation stage.

Handles loading and merging configuration from JSON files,
providing defaults and validation for transformer settings.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for a transformation run."""

    # Generator flavour (matlab-client or matlab-server)
    flavour: str = "matlab-client"

    # Package settings
    package_name: str = "OpenAPIClientPackage"
    package_version: str = "3.0.0"
    api_package: str = "api"
    model_package: str = "models"

    # Naming settings
    enum_name_extensions: List[str] = field(default_factory=lambda: ["x-enumNames"])

    # Parameters passed as objects: "name/Type/name/Type"
    object_params: str = ""

    # Custom settings (host-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def qualified_api_package(self) -> str:
        return f"{self.package_name}.{self.api_package}"

    def qualified_model_package(self) -> str:
        return f"{self.package_name}.{self.model_package}"


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported flavours."""
        self._configs["matlab-client"] = {
            "flavour": "matlab-client",
            "package_name": "OpenAPIClientPackage",
            "package_version": "3.0.0",
            "api_package": "api",
            "model_package": "models",
            "enum_name_extensions": ["x-enumNames"],
        }

        self._configs["matlab-server"] = {
            "flavour": "matlab-server",
            "package_name": "OpenAPIServerPackage",
            "package_version": "3.0.0",
            "api_package": "impl",
            "model_package": "models",
            "enum_name_extensions": ["x-enumNames"],
        }

    def get_config(
        self,
        flavour: str = "matlab-client",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a flavour.

        Args:
            flavour: Generator flavour name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration

        Raises:
            ConfigError: If the flavour is unknown or a file cannot be used
        """
        if flavour not in self._configs:
            raise ConfigError(
                f"Unknown flavour: {flavour}. "
                f"Available: {', '.join(self.list_flavours())}"
            )

        # Start with defaults
        base_config = dict(self._configs[flavour])

        # Load from file if provided
        if config_file:
            base_config.update(self._load_config_file(config_file))

        # Apply custom overrides
        if custom_config:
            base_config.update(custom_config)

        config = self._dict_to_config(base_config)
        for warning in self.validate_config(config):
            logger.warning("Configuration: %s", warning)
        return config

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file {path}: {str(e)}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file {path}: {str(e)}"
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys go to the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        if isinstance(config_args.get("enum_name_extensions"), str):
            config_args["enum_name_extensions"] = [config_args["enum_name_extensions"]]

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        # Custom settings are stored flat
        config_dict.update(config_dict.pop("custom"))

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def list_flavours(self) -> list[str]:
        """Get list of supported flavours."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.flavour not in self._configs:
            warnings.append(f"Invalid flavour: {config.flavour}")

        for part in config.package_name.split("."):
            if not part.isidentifier():
                warnings.append(f"Invalid package name: {config.package_name}")
                break

        if not config.enum_name_extensions:
            warnings.append("No enum name extensions configured")

        if config.object_params and len(config.object_params.split("/")) % 2:
            warnings.append(
                f"object_params must be name/Type pairs: {config.object_params}"
            )

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    flavour: str = "matlab-client",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        flavour: Generator flavour name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(flavour, custom_config, config_file)


# Example configuration file for reference
EXAMPLE_CLIENT_CONFIG = {
    "package_name": "PetStore",
    "package_version": "1.0.0",
    "enum_name_extensions": ["x-enumNames"],
    "object_params": "body/Pet",
}

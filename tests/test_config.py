import json
import logging

import pytest

from matlab_codegen.core.config import (
    EXAMPLE_CLIENT_CONFIG,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)
from matlab_codegen.languages.matlab import MatlabConfig


class TestDefaults:
    def test_client(self):
        config = load_config()
        assert config.flavour == "matlab-client"
        assert config.package_name == "OpenAPIClientPackage"
        assert config.qualified_api_package() == "OpenAPIClientPackage.api"
        assert config.qualified_model_package() == "OpenAPIClientPackage.models"
        assert config.enum_name_extensions == ["x-enumNames"]

    def test_server(self):
        config = load_config("matlab-server")
        assert config.package_name == "OpenAPIServerPackage"
        assert config.qualified_api_package() == "OpenAPIServerPackage.impl"

    def test_unknown_flavour(self):
        with pytest.raises(ConfigError, match="Unknown flavour"):
            load_config("matlab-desktop")

    def test_list_flavours(self):
        assert ConfigManager().list_flavours() == ["matlab-client", "matlab-server"]


class TestOverrides:
    def test_custom_config(self):
        config = load_config(custom_config={"package_name": "PetStore", "colour": "blue"})
        assert config.package_name == "PetStore"
        assert config.custom == {"colour": "blue"}

    def test_single_enum_key_becomes_list(self):
        config = load_config(custom_config={"enum_name_extensions": "x-enum-varnames"})
        assert config.enum_name_extensions == ["x-enum-varnames"]

    def test_validation_warnings_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            load_config(custom_config={"object_params": "body/Pet/owner"})
        assert "name/Type pairs" in caplog.text


class TestConfigFiles:
    def test_load_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(EXAMPLE_CLIENT_CONFIG), encoding="utf-8")
        config = load_config(config_file=path)
        assert config.package_name == "PetStore"
        assert config.object_params == "body/Pet"

    def test_overrides_win_over_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"package_name": "FromFile"}), encoding="utf-8")
        config = load_config(config_file=path, custom_config={"package_name": "FromArgs"})
        assert config.package_name == "FromArgs"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(config_file=tmp_path / "missing.json")

    def test_not_json_suffix(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("package_name: PetStore", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be JSON"):
            load_config(config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(config_file=path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(config_file=path)

    def test_save_and_reload(self, tmp_path):
        manager = ConfigManager()
        config = manager.get_config(
            custom_config={"package_name": "PetStore", "colour": "blue"}
        )
        path = tmp_path / "saved.json"
        manager.save_config(config, path)

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["colour"] == "blue"
        assert "custom" not in saved
        assert manager.get_config(config_file=path) == config


class TestMatlabConfig:
    def test_from_base_config(self):
        config = MatlabConfig.from_config(load_config("matlab-server"))
        assert config.is_server
        assert config.error_identifier_root == "OpenAPIServerPackage"

    def test_copies_mutable_fields(self):
        base = GeneratorConfig()
        config = MatlabConfig.from_config(base)
        config.enum_name_extensions.append("x-other")
        assert base.enum_name_extensions == ["x-enumNames"]

    def test_dotted_package_identifier(self):
        config = MatlabConfig(package_name="Org.PetStore")
        assert config.error_identifier_root == "Org:PetStore"

    def test_object_param_pairs(self):
        config = MatlabConfig(object_params="body/Pet")
        assert config.object_param_pairs() == [("body", "Pet")]

    @pytest.mark.parametrize("package_name", ["", "my-pkg", "Pkg.end", "1Pkg"])
    def test_invalid_package_name(self, package_name):
        with pytest.raises(ConfigError, match="Invalid package name"):
            MatlabConfig(package_name=package_name)

    def test_invalid_flavour(self):
        with pytest.raises(ConfigError, match="Invalid flavour"):
            MatlabConfig(flavour="go")

    def test_enum_keys_required(self):
        with pytest.raises(ConfigError):
            MatlabConfig(enum_name_extensions=[])

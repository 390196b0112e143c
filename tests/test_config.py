"""Tests for emitter configuration loading and validation."""

import json

import pytest

from schema_emitter.codegen.core.config import (
    ConfigError,
    ConfigManager,
    EmitterConfig,
    Formatting,
    OutputType,
    EXAMPLE_TYPESCRIPT_CONFIG,
    load_config,
)
from schema_emitter.codegen.languages.typescript import TypeScriptConfig


class TestEmitterConfig:
    def test_defaults(self):
        config = EmitterConfig()
        assert config.output_type is OutputType.SINGLE_FILE
        assert config.formatting is Formatting.NONE
        assert config.indent == "    "
        assert not config.one_file_per_model

    def test_string_values_coerced(self):
        config = EmitterConfig(output_type="oneFilePerModel", formatting="prettier")
        assert config.output_type is OutputType.ONE_FILE_PER_MODEL
        assert config.formatting is Formatting.PRETTIER

    @pytest.mark.parametrize(
        "overrides",
        [
            {"output_type": "manyFiles"},
            {"formatting": "black"},
            {"indent_size": -1},
            {"line_ending": "\r"},
            {"output": ""},
            {"prettier_config": ["semi"]},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            EmitterConfig(**overrides)

    def test_frozen(self):
        config = EmitterConfig()
        with pytest.raises(AttributeError):
            config.output = "other.ts"

    def test_tabs(self):
        assert EmitterConfig(use_tabs=True).indent == "\t"

    def test_with_overrides_revalidates(self):
        config = EmitterConfig().with_overrides(indent_size=2)
        assert config.indent == "  "
        with pytest.raises(ConfigError):
            config.with_overrides(output_type="nope")

    def test_to_dict_includes_custom(self):
        data = EmitterConfig(custom={"banner": "x"}).to_dict()
        assert data["output_type"] == "singleFile"
        assert data["banner"] == "x"


class TestTypeScriptConfig:
    def test_prettier_parser_forced(self):
        config = TypeScriptConfig(formatting="prettier", prettier_config={"parser": "babel"})
        assert config.prettier_config["parser"] == "typescript"

    def test_caller_options_not_mutated(self):
        options = {"singleQuote": True}
        config = TypeScriptConfig(formatting="prettier", prettier_config=options)

        assert options == {"singleQuote": True}
        assert config.prettier_config == {"singleQuote": True, "parser": "typescript"}

    def test_no_parser_without_prettier(self):
        assert TypeScriptConfig().prettier_config == {}

    def test_from_base_config(self):
        base = EmitterConfig(output="a.ts", formatting="prettier")
        config = TypeScriptConfig.from_config(base)

        assert isinstance(config, TypeScriptConfig)
        assert config.output == "a.ts"
        assert config.prettier_config["parser"] == "typescript"


class TestConfigManager:
    def test_language_defaults(self):
        config = ConfigManager().get_config("typescript")
        assert config.output == "models.ts"

    def test_custom_overrides_file(self, tmp_path):
        config_file = tmp_path / "emit.json"
        config_file.write_text(
            json.dumps({"output": "file.ts", "indent_size": 2}), encoding="utf-8"
        )

        config = ConfigManager().get_config(
            "typescript", custom_config={"output": "cli.ts"}, config_file=config_file
        )
        assert config.output == "cli.ts"
        assert config.indent_size == 2

    def test_unknown_keys_go_to_custom(self):
        config = ConfigManager().get_config("typescript", {"banner": "// gen"})
        assert config.custom == {"banner": "// gen"}

    def test_config_class_respected(self):
        config = load_config(
            custom_config=EXAMPLE_TYPESCRIPT_CONFIG, config_cls=TypeScriptConfig
        )
        assert isinstance(config, TypeScriptConfig)
        assert config.one_file_per_model
        assert config.prettier_config["parser"] == "typescript"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigManager().get_config("typescript", config_file=tmp_path / "no.json")

    def test_non_json_suffix(self, tmp_path):
        path = tmp_path / "emit.yaml"
        path.write_text("output: x", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be JSON"):
            ConfigManager().get_config("typescript", config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "emit.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            ConfigManager().get_config("typescript", config_file=path)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "emit.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            ConfigManager().get_config("typescript", config_file=path)

    def test_save_and_reload(self, tmp_path):
        manager = ConfigManager()
        path = tmp_path / "saved.json"
        original = EmitterConfig(output="x.ts", indent_size=2, custom={"banner": "b"})

        manager.save_config(original, path)
        reloaded = manager.get_config("typescript", config_file=path)

        assert reloaded == original


class TestValidateConfig:
    def validate(self, **values):
        return ConfigManager().validate_config(EmitterConfig(**values), "typescript")

    def test_clean_config(self):
        assert self.validate() == []

    def test_file_like_output_per_model(self):
        warnings = self.validate(output="models.ts", output_type="oneFilePerModel")
        assert any("used as a directory" in w for w in warnings)

    def test_placeholder_in_single_file(self):
        warnings = self.validate(output="{{ Name }}.ts")
        assert any("placeholders" in w for w in warnings)

    def test_tabs_with_indent_size(self):
        assert "indent_size is ignored when use_tabs is set" in self.validate(
            use_tabs=True, indent_size=2
        )

    def test_prettier_options_without_prettier(self):
        warnings = self.validate(prettier_config={"semi": False})
        assert "prettier_config is set but formatting is 'none'" in warnings

    def test_missing_ts_extension(self):
        warnings = self.validate(output="models.txt")
        assert any(".ts extension" in w for w in warnings)

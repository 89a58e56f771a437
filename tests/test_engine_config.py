"""
Tests for loading engine settings from YAML.
"""

import pytest

from lq import ConfigError, Engine, EngineConfig, load_engine_config


class TestLoadEngineConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_engine_config(tmp_path / "absent.yaml")

        assert config == EngineConfig()
        assert config.strict_filters is True
        assert config.strict_variables is False

    def test_empty_file_gives_defaults(self, write_file):
        assert load_engine_config(write_file("lq.yaml", "")) == EngineConfig()

    def test_full_config(self, write_file):
        path = write_file("lq.yaml", (
            'delims: ["[[", "]]", "[%", "%]"]\n'
            "strict_variables: true\n"
            "strict_filters: false\n"
        ))

        config = load_engine_config(path)

        assert config.delims == ["[[", "]]", "[%", "%]"]
        assert config.strict_variables is True
        assert config.strict_filters is False

    def test_config_drives_engine(self, write_file):
        path = write_file("lq.yaml", 'delims: ["[[", "]]", "[%", "%]"]\n')
        engine = Engine(load_engine_config(path))

        assert engine.parse_and_render("[% assign a = 'b' %][[ a ]]") == "b"

    @pytest.mark.parametrize("text,message", [
        ("colour: blue\n", "Unknown engine config keys: colour"),
        ("- a\n- b\n", "YAML must be a mapping"),
        ("delims: '{{'\n", "delims must be a list of strings"),
        ('delims: ["a", "b"]\n', "Expected 4 delimiters"),
        ("strict_variables: maybe\n", "strict_variables must be true or false"),
        ("delims: [unclosed\n", "Invalid YAML"),
    ])
    def test_invalid(self, write_file, text, message):
        path = write_file("lq.yaml", text)

        with pytest.raises(ConfigError) as exc:
            load_engine_config(path)

        assert message in str(exc.value)


class TestFromDict:

    def test_defaults(self):
        assert EngineConfig.from_dict({}) == EngineConfig()

    def test_identical_left_delimiters(self):
        with pytest.raises(ConfigError):
            EngineConfig.from_dict({"delims": ["<<", ">>", "<<", "%>"]})

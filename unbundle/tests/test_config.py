"""Test configuration for unbundle."""

import json

import pytest

from unbundle.config import (
    DEFAULT_DESTINATION,
    FormatterKind,
    UnbundleConfig,
    get_config,
    load_config_file,
)
from unbundle.exceptions import ConfigurationError


class TestUnbundleConfig:
    """Test UnbundleConfig model."""

    def test_defaults(self):
        config = UnbundleConfig()

        assert config.source is None
        assert config.destination == DEFAULT_DESTINATION
        assert config.package_name is None
        assert config.public_functions_file == 'public_fns'
        assert config.private_functions_file == 'private_fns'
        assert config.definitions_file == 'defs'
        assert config.import_map == {}
        assert config.formatter is FormatterKind.GOIMPORTS
        assert config.sort_imports is False
        assert config.clean_destination is True
        assert config.extension == '.go'

    def test_formatter_from_string(self):
        assert UnbundleConfig(formatter='none').formatter is FormatterKind.NONE

    def test_invalid_formatter(self):
        with pytest.raises(ValueError):
            UnbundleConfig(formatter='clang-format')

    @pytest.mark.parametrize('name', ['', 'a/b', 'a\\b'])
    def test_invalid_file_names(self, name):
        with pytest.raises(ValueError):
            UnbundleConfig(public_functions_file=name)

    def test_extension_gets_leading_dot(self):
        assert UnbundleConfig(extension='go').extension == '.go'

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv('UNBUNDLE_DESTINATION', 'from-env')
        monkeypatch.setenv('UNBUNDLE_FORMATTER', 'gofmt')

        config = UnbundleConfig()

        assert config.destination == 'from-env'
        assert config.formatter is FormatterKind.GOFMT


class TestLoadConfigFile:
    """Test loading explicit configuration files."""

    def test_yaml(self, tmp_path):
        path = tmp_path / 'unbundle.yaml'
        path.write_text(
            'source: ./server\n'
            'destination: out\n'
            'package_name: server\n'
            'import_map:\n'
            '  code.google.com/p/go.net/context: context\n'
        )

        config = load_config_file(path)

        assert config.source == './server'
        assert config.destination == 'out'
        assert config.package_name == 'server'
        assert config.import_map == {'code.google.com/p/go.net/context': 'context'}

    def test_json(self, tmp_path):
        path = tmp_path / 'unbundle.json'
        path.write_text(json.dumps({'formatter': 'gofmt', 'sort_imports': True}))

        config = load_config_file(path)

        assert config.formatter is FormatterKind.GOFMT
        assert config.sort_imports is True

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / 'unbundle.yaml'
        path.write_text('')

        assert load_config_file(path) == UnbundleConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match='Cannot read configuration'):
            load_config_file(tmp_path / 'missing.yaml')

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'unbundle.yaml'
        path.write_text('source: [unclosed\n')

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(path)

        assert exc_info.value.config_path == str(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'unbundle.json'
        path.write_text('{not json')

        with pytest.raises(ConfigurationError):
            load_config_file(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / 'unbundle.yaml'
        path.write_text('- a\n- b\n')

        with pytest.raises(ConfigurationError, match='must be a mapping'):
            load_config_file(path)

    def test_invalid_field(self, tmp_path):
        path = tmp_path / 'unbundle.yaml'
        path.write_text('formatter: clang-format\n')

        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(path)

        assert exc_info.value.field == 'formatter'
        assert 'unbundle.yaml' in str(exc_info.value)


class TestGetConfig:
    """Test configuration discovery."""

    def test_explicit_path(self, tmp_path):
        path = tmp_path / 'custom.yml'
        path.write_text('destination: custom\n')

        assert get_config(str(path)).destination == 'custom'

    def test_default_file_in_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / 'unbundle.yml').write_text('destination: discovered\n')
        monkeypatch.chdir(tmp_path)

        assert get_config().destination == 'discovered'

    def test_pyproject_table(self, tmp_path, monkeypatch):
        (tmp_path / 'pyproject.toml').write_text(
            '[tool.unbundle]\ndestination = "from-pyproject"\nformatter = "none"\n'
        )
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.destination == 'from-pyproject'
        assert config.formatter is FormatterKind.NONE

    def test_pyproject_without_table(self, tmp_path, monkeypatch):
        (tmp_path / 'pyproject.toml').write_text('[project]\nname = "x"\n')
        monkeypatch.chdir(tmp_path)

        assert get_config() == UnbundleConfig()

    def test_invalid_pyproject(self, tmp_path, monkeypatch):
        (tmp_path / 'pyproject.toml').write_text('[tool.unbundle\n')
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError):
            get_config()

    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert get_config() == UnbundleConfig()

    def test_yaml_takes_precedence_over_pyproject(self, tmp_path, monkeypatch):
        (tmp_path / 'unbundle.yaml').write_text('destination: yaml\n')
        (tmp_path / 'pyproject.toml').write_text(
            '[tool.unbundle]\ndestination = "pyproject"\n'
        )
        monkeypatch.chdir(tmp_path)

        assert get_config().destination == 'yaml'

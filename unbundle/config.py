import json
import os
from enum import Enum
from pathlib import Path

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from unbundle.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['unbundle.yaml', 'unbundle.yml']

DEFAULT_DESTINATION = 'unbundled'


class FormatterKind(str, Enum):
    """External formatting pass applied to every synthesized file."""

    GOIMPORTS = 'goimports'
    GOFMT = 'gofmt'
    NONE = 'none'


class UnbundleConfig(BaseSettings):
    """Settings for one unbundle run.

    Values come from a config file, ``UNBUNDLE_*`` environment variables or
    the command line, in increasing order of precedence.
    """

    model_config = SettingsConfigDict(env_prefix='UNBUNDLE_')

    source: str | None = Field(
        None, description='Go file (ending in .go) or package to split.'
    )

    destination: str = Field(
        DEFAULT_DESTINATION,
        description='Existing directory the new package folder is created in.',
    )

    package_name: str | None = Field(
        None,
        description='Destination package name and folder; defaults to the source package name.',
    )

    public_functions_file: str = Field(
        'public_fns', description='Public functions file (no extension).'
    )

    private_functions_file: str = Field(
        'private_fns', description='Private functions file (no extension).'
    )

    definitions_file: str = Field(
        'defs', description='Const and var definitions file (no extension).'
    )

    import_map: dict[str, str] = Field(
        default_factory=dict,
        description='Import paths to rewrite, mapped to their replacements.',
    )

    formatter: FormatterKind = Field(
        FormatterKind.GOIMPORTS,
        description='Formatter run over every generated file.',
    )

    sort_imports: bool = Field(
        False, description='Sort import specs instead of keeping first-seen order.'
    )

    clean_destination: bool = Field(
        True,
        description='Remove an existing destination package folder before writing.',
    )

    extension: str = Field('.go', description='Extension of the generated files.')

    @field_validator(
        'public_functions_file', 'private_functions_file', 'definitions_file'
    )
    @classmethod
    def _check_file_name(cls, value: str) -> str:
        if not value:
            raise ValueError('file name cannot be empty')
        if '/' in value or '\\' in value:
            raise ValueError(f'file name {value!r} must not contain a path separator')
        return value

    @field_validator('extension')
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if not value.startswith('.'):
            return f'.{value}'
        return value


def load_yaml(path: str | Path) -> dict:
    return yaml.load(Path(path).read_text(), Loader=yaml.FullLoader) or {}


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text())


def _validate(data: dict, config_path: str) -> UnbundleConfig:
    try:
        return UnbundleConfig(**data)
    except ValidationError as e:
        field = '.'.join(str(part) for part in e.errors()[0]['loc']) or None
        raise ConfigurationError(
            f'Invalid configuration: {e.errors()[0]["msg"]}',
            config_path=config_path,
            field=field,
        ) from e


def load_config_file(path: str | Path) -> UnbundleConfig:
    """Load configuration from an explicit YAML or JSON file."""
    path = Path(path)
    try:
        if path.suffix == '.json':
            data = load_json(path)
        else:
            data = load_yaml(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f'Cannot read configuration: {e}', config_path=str(path)
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            'Configuration must be a mapping', config_path=str(path)
        )
    return _validate(data, str(path))


def get_config(path: str | None = None) -> UnbundleConfig:
    """Load configuration from a file, pyproject.toml or the environment.

    An explicit path must exist. Without one, ``unbundle.yaml``/``unbundle.yml``
    in the working directory are tried, then the ``[tool.unbundle]`` table of
    ``pyproject.toml``, and finally environment variables and defaults.
    """
    if path:
        return load_config_file(path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return load_config_file(candidate)

    pyproject_path = Path(cwd) / 'pyproject.toml'

    if pyproject_path.exists():
        import tomllib

        try:
            pyproject = tomllib.loads(pyproject_path.read_text())
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f'Cannot read configuration: {e}', config_path=str(pyproject_path)
            ) from e
        tools = pyproject.get('tool', {})

        if 'unbundle' in tools:
            return _validate(tools['unbundle'], str(pyproject_path))

    return UnbundleConfig()

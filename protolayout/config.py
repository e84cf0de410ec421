import json
import os
from pathlib import Path
from typing import Annotated

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict, SettingsError

from protolayout.exceptions import ConfigurationError
from protolayout.languages import CodeLanguage, resolve_language

DEFAULT_FILENAMES = ['protolayout.yaml', 'protolayout.yml']


class LayoutConfig(BaseSettings):
    """Settings of one layout planning run."""

    model_config = SettingsConfigDict(env_prefix='PROTOLAYOUT_')

    declarations: str | None = Field(
        None, description='Path to a YAML or JSON file listing the message declarations.'
    )

    languages: Annotated[list[CodeLanguage], NoDecode] = Field(
        default_factory=lambda: [CodeLanguage.PYTHON],
        description='Target languages to resolve absolute paths for.',
    )

    fold_protocol: bool = Field(
        True,
        description='Whether protocols are folded into directories following their namespaces.',
    )

    output: str | None = Field(
        None, description='Optional file to write the layout report to (JSON).'
    )

    @field_validator('languages', mode='before')
    @classmethod
    def _resolve_languages(cls, value):
        if isinstance(value, CodeLanguage):
            value = [value]
        elif isinstance(value, str):
            # environment values: a JSON list or comma-separated names
            if value.strip().startswith('['):
                value = json.loads(value)
            else:
                value = [item for item in value.split(',') if item.strip()]
        if not isinstance(value, (list, tuple)):
            return value
        return [resolve_language(language) for language in value]


def load_yaml(path: str | Path) -> dict:
    return yaml.safe_load(Path(path).read_text()) or {}


def _load_file(path: str | Path) -> dict:
    try:
        return load_yaml(path)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f'Could not read configuration: {e}', config_path=str(path)
        ) from e


def _build_config(data: object, source: str) -> LayoutConfig:
    if not isinstance(data, dict):
        raise ConfigurationError(
            f'Configuration must be a mapping, not {type(data).__name__}',
            config_path=source,
        )
    try:
        return LayoutConfig(**data)
    except ValidationError as e:
        first = e.errors()[0]
        field = '.'.join(str(loc) for loc in first['loc']) or None
        raise ConfigurationError(
            f'Invalid configuration: {first["msg"]}', config_path=source, field=field
        ) from e
    except SettingsError as e:
        raise ConfigurationError(
            f'Invalid environment settings: {e}', config_path=source
        ) from e


def get_config(path: str | None = None) -> LayoutConfig:
    """Load configuration from a file, falling back to defaults.

    Lookup order: the explicit path, protolayout.yaml / protolayout.yml in the
    current directory, the [tool.protolayout] table of pyproject.toml.
    Environment variables prefixed with PROTOLAYOUT_ fill fields the file
    does not set.

    Raises:
        ConfigurationError: If a configuration file or the environment holds
            invalid settings.
    """
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        return _build_config(_load_file(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _build_config(_load_file(candidate), str(candidate))

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        try:
            pyproject = tomllib.loads(candidate.read_text())
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f'Could not read configuration: {e}', config_path=str(candidate)
            ) from e
        tools = pyproject.get('tool', {})

        if 'protolayout' in tools:
            return _build_config(tools['protolayout'], str(candidate))

    return _build_config({}, 'environment')

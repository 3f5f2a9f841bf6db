"""Resolve NexusOpsConfig from YAML files, environment and call-site overrides.

Layers, later ones winning:

    defaults < ~/.config/nexusops/config.yaml < <root>/.nexusops/config.yaml
             < NEXUSOPS__SECTION__KEY env vars < load_config(**kwargs)

YAML layers merge key by key, so a project file that only sets
``emit.output_dir`` keeps the global ``emit.indent``.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from nexusops.config.models import (
    EmitConfig,
    LoggingConfig,
    NexusOpsConfig,
    ParseConfig,
    WalkConfig,
)
from nexusops.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/nexusops/config.yaml").expanduser()
PROJECT_CONFIG_NAME = Path(".nexusops") / "config.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    """Mapping at the top of a YAML file; empty when the file is missing or blank."""
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(
            str(path), f"top level must be a mapping, got {type(data).__name__}"
        )
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """New dict with ``override`` laid over ``base``; nested mappings merge."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


class _YamlLayers(PydanticBaseSettingsSource):
    """The merged YAML layers as one pydantic-settings source."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(
        self,
        field: FieldInfo,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, dict)

    def __call__(self) -> dict[str, Any]:
        return {name: value for name, value in self._data.items() if value is not None}


def _settings_class(yaml_data: dict[str, Any]) -> type[BaseSettings]:
    """A settings class bound to one set of YAML layers, so loads never share state."""

    class NexusOpsSettings(BaseSettings):
        model_config = SettingsConfigDict(
            env_prefix="NEXUSOPS__",
            env_nested_delimiter="__",
            case_sensitive=False,
            extra="ignore",
        )

        logging: LoggingConfig = LoggingConfig()
        parse: ParseConfig = ParseConfig()
        walk: WalkConfig = WalkConfig()
        emit: EmitConfig = EmitConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _YamlLayers(settings_cls, yaml_data))

    return NexusOpsSettings


NexusOpsSettings = _settings_class({})


def _first_error(err: ValidationError) -> ConfigError:
    detail = err.errors()[0]
    field = ".".join(str(part) for part in detail["loc"])
    return ConfigError.invalid_value(field, detail.get("input"), detail["msg"])


def load_config(project_root: Path | None = None, **kwargs: Any) -> NexusOpsConfig:
    """Build the effective configuration for a project.

    Args:
        project_root: Directory holding ``.nexusops/config.yaml``; the
            current directory when omitted.
        **kwargs: Per-section overrides, e.g. ``emit={"max_workers": 4}``.

    Raises:
        ConfigError: A YAML file is malformed or a value fails validation.
    """
    root = project_root or Path.cwd()
    yaml_data = _deep_merge(
        _load_yaml(GLOBAL_CONFIG_PATH),
        _load_yaml(root / PROJECT_CONFIG_NAME),
    )

    try:
        settings = _settings_class(yaml_data)(**kwargs)
    except ValidationError as e:
        raise _first_error(e) from e
    return NexusOpsConfig.model_validate(settings.model_dump())

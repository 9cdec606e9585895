"""InvSettings: one frozen object built from CLI flags, env vars, and TOML.

Later sources lose to earlier ones:

1. keyword arguments (the CLI flags Click collected)
2. ``INVCTL_*`` environment variables, ``__`` between section and key
3. the ``[storage]`` / ``[stock]`` tables of ``invctl.toml``
4. defaults on :mod:`invctl.config.models`

Only :meth:`InvSettings.from_cli` knows which TOML file applies; it hands
the path to :class:`TomlSettingsSource` through a context variable because
pydantic-settings builds its sources from the class, not the instance.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from invctl.config.discovery import find_config
from invctl.config.models import StockConfig, StorageConfig

_active_toml: ContextVar[Path | None] = ContextVar("invctl_active_toml", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings from one ``invctl.toml``; an absent file contributes nothing."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._tables = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return self._tables


class InvSettings(BaseSettings):
    """Resolved configuration for one invctl invocation.

    Attributes:
        data_root: Directory holding ``invctl.toml`` (CWD when none was
            found). Store files live under ``data_root / storage.directory``.
        config_path: The TOML file that was read, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "INVCTL_",
        "env_nested_delimiter": "__",
    }

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    storage: StorageConfig = Field(default_factory=StorageConfig)
    stock: StockConfig = Field(default_factory=StockConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | None = None,
        **cli_flags: Any,
    ) -> InvSettings:
        """Build settings for a command run.

        An explicit *config_path* wins over walk-up discovery from
        *data_root* (or the CWD). Without *data_root*, the warehouse lives
        next to the config file that was found.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(data_root)

        if data_root is None:
            data_root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(data_root=data_root, config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)

"""CareSettings: one frozen object for everything a command needs to know.

Sources, strongest first:

1. keyword arguments (the root CLI flags),
2. ``CARERIDE_*`` environment variables, nested with ``__``
   (``CARERIDE_IDENTITY__DOCTOR_ID=doc_003``),
3. the ``careride.toml`` picked by :func:`~careride.config.discovery.find_config`,
4. the section defaults in :mod:`careride.config.models`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, TomlConfigSettingsSource

from careride.config.discovery import find_config
from careride.config.models import IdentityConfig, MessagingConfig, SearchConfig, StoreConfig

# The TOML file for the settings object under construction. Sources are
# built inside BaseSettings.__init__, so the path cannot be an argument.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


class CareSettings(BaseSettings):
    """Settings for the careride CLI and services.

    Attributes:
        root: Workspace directory: the parent of the loaded
            ``careride.toml``, or the working directory without one.
            Relative store paths resolve against it.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CARERIDE_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    store: StoreConfig = Field(default_factory=StoreConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    identity: IdentityConfig = Field(default_factory=IdentityConfig)
    messaging: MessagingConfig = Field(default_factory=MessagingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_path = _active_toml.get()
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @property
    def db_path(self) -> Path | None:
        """Database file for the store, or None when it lives in memory."""
        if self.store.in_memory:
            return None
        path = Path(self.store.path)
        return path if path.is_absolute() else self.root / path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> CareSettings:
        """Build settings for one CLI invocation.

        *config_path* (``--config``) is used as-is when it names a file;
        otherwise ``careride.toml`` is discovered from *root* (or the
        working directory). Without an explicit *root*, the workspace
        is the directory holding the discovered file.

        Raises:
            click.ClickException: the TOML file does not parse.
        """
        toml_path = find_config(root, explicit=config_path)
        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _active_toml.reset(token)

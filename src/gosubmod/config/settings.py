"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``GOSUBMOD_*`` prefix
  3. TOML file: ``gosubmod.toml`` discovered via walk-up
  4. Code defaults

A relative ``modfile`` is resolved against ``root``: the directory holding
``gosubmod.toml``, or the working directory when there is none.  A
``--modfile`` given on the command line is made absolute against the
working directory before it gets here.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from gosubmod.config.discovery import find_config


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``gosubmod.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class GosubmodSettings(BaseSettings):
    """Settings for one gosubmod invocation.

    Attributes:
        root: Directory that relative manifest paths are resolved against.
        config_path: The TOML file in effect, if any.
        modfile: Manifest to edit.
        strict: Require submodule directories to exist before adding
            replace directives for them.
        detection: ``prefix`` treats every require under the main module
            path as a submodule; ``manifest`` also requires a go.mod in the
            submodule directory.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GOSUBMOD_",
        "extra": "ignore",
    }

    # --- Resolved paths ---
    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- Manifest handling ---
    modfile: Path = Path("go.mod")
    strict: bool = True
    detection: Literal["prefix", "manifest"] = "prefix"

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @property
    def manifest_path(self) -> Path:
        """Absolute path of the manifest."""
        if self.modfile.is_absolute():
            return self.modfile
        return (self.root / self.modfile).absolute()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> GosubmodSettings:
        """Construct settings from CLI invocation.

        Discovers ``gosubmod.toml`` via walk-up (or explicit *config_path*),
        resolves *root* from the config file's parent directory, and merges
        CLI flags as highest-priority overrides.  Flags passed as ``None``
        are treated as not given.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent.absolute() if toml_path else Path.cwd()

        flags = {k: v for k, v in cli_flags.items() if v is not None}
        if "modfile" in flags:
            flags["modfile"] = Path(flags["modfile"]).absolute()

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root,
                config_path=toml_path,
                **flags,
            )
        finally:
            _tls.toml_path = None

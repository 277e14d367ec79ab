from __future__ import annotations

import copy
import importlib
import logging
import os
import sys
import types
from typing import Any, Optional, Sequence

from .errors import ConfigError

log = logging.getLogger("settings")


class Settings:
    # Root directory used to resolve relative path in settings
    # Default if None: the directory where the settings file is found
    PROJECT_ROOT: Optional[str]

    # Time zone used for blog post dates
    TIMEZONE: Optional[str]

    # Layout applied to pages that no PAGE_RULES entry matches
    LAYOUT: str

    # Per-page layout changes, as (pattern, layout) pairs. Last match wins
    PAGE_RULES: Sequence[tuple[str, Optional[str]]]

    # Blog configuration, overridable per field
    BLOG: dict[str, Any]

    # Markdown engine and its options
    MARKDOWN_ENGINE: str
    MARKDOWN: dict[str, Any]

    # Syntax highlighting of code blocks
    SYNTAX: dict[str, Any]

    # Engine used for .org sources
    ORG_ENGINE: Optional[str]

    # External front-end asset pipeline
    BUNDLER_NAME: str
    BUNDLER_CONFIG: str
    BUNDLER_COMMANDS: dict[str, str]
    BUNDLER_SOURCE: str
    BUNDLER_LATENCY_MS: int

    # PostCSS plugins by NODE_ENV
    POSTCSS_PLUGINS: dict[str, Sequence[tuple[str, dict[str, Any]]]]

    # Plugins activated in each build environment
    ENVIRONMENTS: dict[str, dict[str, dict[str, Any]]]

    def __init__(self, default_settings: Optional[str] = "siteprofile.global_settings") -> None:
        if default_settings is not None:
            # Each Settings gets its own copy of the default lists and dicts
            self.add_module(importlib.import_module(default_settings), deep_copy=True)

    def as_dict(self) -> dict[str, Any]:
        res = {}
        for setting in dir(self):
            if setting.isupper():
                res[setting] = getattr(self, setting)
        return res

    def add_module(self, mod: types.ModuleType, deep_copy: bool = False) -> None:
        """
        Add uppercase settings from mod into this module
        """
        for setting in dir(mod):
            if setting.isupper():
                value = getattr(mod, setting)
                if deep_copy:
                    value = copy.deepcopy(value)
                setattr(self, setting, value)

    def add_dict(self, data: dict[str, Any]) -> None:
        """
        Add uppercase keys from a dict as settings
        """
        for setting, value in data.items():
            if setting.isupper():
                setattr(self, setting, value)
            else:
                log.debug("ignoring non-uppercase setting %r", setting)

    def load(self, pathname: str) -> None:
        """
        Load settings from a python, toml or yaml file, importing only
        uppercase symbols
        """
        ext = os.path.splitext(pathname)[1]
        if ext == ".py":
            self._load_python(pathname)
        elif ext == ".toml":
            import toml
            try:
                with open(pathname, encoding="utf8") as fd:
                    data = toml.load(fd)
            except toml.TomlDecodeError as e:
                raise ConfigError(f"{pathname}: cannot parse settings: {e}") from e
            self.add_dict(data)
        elif ext in (".yaml", ".yml"):
            from .utils import yaml_codec
            try:
                with open(pathname, encoding="utf8") as fd:
                    data = yaml_codec.load(fd)
            except yaml_codec.YAMLError as e:
                raise ConfigError(f"{pathname}: cannot parse settings: {e}") from e
            if data is None:
                return
            if not isinstance(data, dict):
                raise ConfigError(f"{pathname}: settings must be a mapping, not {type(data).__name__}")
            self.add_dict(data)
        else:
            raise ConfigError(f"{pathname}: unsupported settings file type {ext!r}")

    def _load_python(self, pathname: str) -> None:
        orig_dwb = sys.dont_write_bytecode
        try:
            sys.dont_write_bytecode = True
            import importlib.util

            spec = importlib.util.spec_from_file_location(
                "siteprofile.user_settings", pathname
            )
            user_settings = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(user_settings)
        finally:
            sys.dont_write_bytecode = orig_dwb

        self.add_module(user_settings)

    def expand(self, template: str) -> str:
        """
        Expand a template with str.format, using all settings as arguments
        """
        try:
            return template.format(**self.as_dict())
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigError(f"cannot expand {template!r} with settings: {e}") from e

# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import toml

from thrift_compiler.errors import ConfigError

logger = logging.getLogger(__name__)


PROPERTY_PREFIX = "thrift.compiler."

PROPERTY_NATIVE = "thrift.compiler.native"
PROPERTY_EXECUTABLE = "thrift.compiler.executable"
PROPERTY_TIMEOUT = "thrift.compiler.timeout"
PROPERTY_JAVA = "thrift.compiler.java"
PROPERTY_RUNTIME = "thrift.compiler.runtime"

ALL_PROPERTIES = (
    PROPERTY_NATIVE,
    PROPERTY_EXECUTABLE,
    PROPERTY_TIMEOUT,
    PROPERTY_JAVA,
    PROPERTY_RUNTIME,
)

# The section of the TOML config file holding our options.
CONFIG_SECTION = "thrift-compiler"
CONFIG_ENV_VAR = "THRIFT_COMPILER_CONFIG"
DEFAULT_CONFIG_FILE = "thrift-compiler.toml"


def env_var_for(property_name: str) -> str:
    """E.g.: `thrift.compiler.native` -> `THRIFT_COMPILER_NATIVE`."""
    return property_name.replace(".", "_").upper()


def config_key_for(property_name: str) -> str:
    """E.g.: `thrift.compiler.native` -> `native`."""
    return property_name[len(PROPERTY_PREFIX) :]


_KNOWN_CONFIG_KEYS = frozenset(config_key_for(prop) for prop in ALL_PROPERTIES)


def load_config(
    path: Optional[str] = None, *, env: Optional[Mapping[str, str]] = None
) -> Mapping[str, Any]:
    """Loads the `[thrift-compiler]` section of a TOML config file.

    With no explicit `path` the file named by `$THRIFT_COMPILER_CONFIG` is used, falling back to
    `thrift-compiler.toml` in the working directory if that exists. Returns an empty mapping when
    there is no config file to read.
    """
    env = os.environ if env is None else env
    if path is None:
        path = env.get(CONFIG_ENV_VAR)
    if path is None:
        if not os.path.isfile(DEFAULT_CONFIG_FILE):
            return {}
        path = DEFAULT_CONFIG_FILE

    try:
        values = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Config file {path} could not be parsed as TOML:\n  {e}") from e

    section = values.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Config file {path} must have a [{CONFIG_SECTION}] table.")
    for key in sorted(set(section) - _KNOWN_CONFIG_KEYS):
        logger.warning(f"Ignoring unknown option {key!r} in [{CONFIG_SECTION}] of {path}.")
    logger.debug(f"Loaded [{CONFIG_SECTION}] from {path}: {section}")
    return section


def parse_bool(value: Any) -> bool:
    """Only a case-insensitive `true` is true, like Java's `Boolean.valueOf`."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def parse_timeout(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"The {PROPERTY_TIMEOUT} option must be a number, given: {value!r}")
    if timeout <= 0:
        raise ConfigError(f"The {PROPERTY_TIMEOUT} option must be positive, given: {value!r}")
    return timeout


class _OptionSources:
    """Looks options up in explicit properties, then the environment, then the config file."""

    def __init__(
        self,
        properties: Mapping[str, Any],
        env: Mapping[str, str],
        config: Mapping[str, Any],
    ) -> None:
        self._properties = properties
        self._env = env
        self._config = config

    def is_set(self, property_name: str) -> bool:
        return self.get(property_name) is not None

    def get(self, property_name: str) -> Any:
        if property_name in self._properties:
            return self._properties[property_name]
        env_var = env_var_for(property_name)
        if env_var in self._env:
            return self._env[env_var]
        return self._config.get(config_key_for(property_name))

    def get_str(self, property_name: str) -> Optional[str]:
        value = self.get(property_name)
        if value is None:
            return None
        value = str(value).strip()
        return value or None


@dataclass(frozen=True)
class CompilerOptions:
    """The resolved options that select and configure a thrift compiler implementation."""

    native: bool = False
    executable: Optional[str] = None
    timeout: Optional[float] = None
    java: Optional[str] = None
    runtime: Optional[str] = None

    @classmethod
    def resolve(
        cls,
        properties: Optional[Mapping[str, Any]] = None,
        *,
        env: Optional[Mapping[str, str]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> CompilerOptions:
        """Resolves options from `properties`, falling back to `env` and then to `config`.

        `env` defaults to `os.environ` and `config` to the result of `load_config()`.
        """
        sources = _sources(properties, env=env, config=config)
        return cls(
            native=parse_bool(sources.get(PROPERTY_NATIVE) or False),
            executable=sources.get_str(PROPERTY_EXECUTABLE),
            timeout=parse_timeout(sources.get(PROPERTY_TIMEOUT)),
            java=sources.get_str(PROPERTY_JAVA),
            runtime=sources.get_str(PROPERTY_RUNTIME),
        )


def native_configured(
    *, env: Optional[Mapping[str, str]] = None, config: Optional[Mapping[str, Any]] = None
) -> bool:
    """Returns True if the native switch is set in the environment or the config file."""
    return _sources(None, env=env, config=config).is_set(PROPERTY_NATIVE)


def _sources(
    properties: Optional[Mapping[str, Any]],
    *,
    env: Optional[Mapping[str, str]],
    config: Optional[Mapping[str, Any]],
) -> _OptionSources:
    env = os.environ if env is None else env
    return _OptionSources(
        properties or {},
        env,
        load_config(env=env) if config is None else config,
    )

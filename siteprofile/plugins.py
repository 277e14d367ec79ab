from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Type, Union

from .environment import Environment
from .errors import ConfigError
from .utils import FrozenMap, dump_data, freeze

log = logging.getLogger("plugins")


class Plugin(enum.Enum):
    """
    Plugins that can be activated per build environment
    """
    LIVERELOAD = "livereload"
    MINIFY_CSS = "minify_css"
    MINIFY_JAVASCRIPT = "minify_javascript"
    DISQUS = "disqus"

    @classmethod
    def parse(cls, name: Union[str, "Plugin"]) -> "Plugin":
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise ConfigError(
                f"unknown plugin {name!r}: use one of {', '.join(p.value for p in cls)}") from None


@dataclass(frozen=True)
class ParameterSpec:
    """
    Parameters accepted by a plugin, with their types
    """
    required: Mapping[str, Union[Type[Any], tuple[Type[Any], ...]]] = field(default_factory=dict)
    optional: Mapping[str, Union[Type[Any], tuple[Type[Any], ...]]] = field(default_factory=dict)

    def validate(self, plugin: Plugin, parameters: Mapping[str, Any]) -> None:
        for name in parameters:
            if name not in self.required and name not in self.optional:
                raise ConfigError(f"plugin {plugin.value!r} has no parameter {name!r}")
        for name in self.required:
            if name not in parameters:
                raise ConfigError(f"plugin {plugin.value!r} requires parameter {name!r}")
        for name, value in parameters.items():
            expected = self.required.get(name) or self.optional[name]
            if not isinstance(value, expected):
                if isinstance(expected, tuple):
                    expected_name = " or ".join(t.__name__ for t in expected)
                else:
                    expected_name = expected.__name__
                raise ConfigError(
                    f"plugin {plugin.value!r}: parameter {name!r} should be {expected_name},"
                    f" not {type(value).__name__}")


# Every Plugin has an entry here: tests/test_plugins.py checks it
# Lists loaded from settings are frozen into tuples, so both are accepted
SEQUENCE = (list, tuple)

PARAMETERS: dict[Plugin, ParameterSpec] = {
    Plugin.LIVERELOAD: ParameterSpec(optional={"host": str, "port": int, "ignore": SEQUENCE}),
    Plugin.MINIFY_CSS: ParameterSpec(optional={"ignore": SEQUENCE, "inline": bool}),
    Plugin.MINIFY_JAVASCRIPT: ParameterSpec(optional={"ignore": SEQUENCE, "inline": bool}),
    Plugin.DISQUS: ParameterSpec(required={"shortname": str}),
}


@dataclass(frozen=True)
class PluginActivation:
    """
    A plugin activated with its parameters
    """
    plugin: Plugin
    parameters: Mapping[str, Any] = field(default_factory=FrozenMap)

    def __post_init__(self):
        PARAMETERS[self.plugin].validate(self.plugin, self.parameters)
        object.__setattr__(self, "parameters", freeze(self.parameters))
        if self.plugin is Plugin.DISQUS and not self.parameters["shortname"]:
            raise ConfigError("plugin 'disqus': shortname cannot be empty")

    @property
    def name(self) -> str:
        return self.plugin.value

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "parameters": dump_data(self.parameters)}


@dataclass(frozen=True)
class EnvironmentProfile:
    """
    The plugins activated for one build environment
    """
    environment: Environment
    activations: Sequence[PluginActivation] = ()

    def __post_init__(self):
        object.__setattr__(self, "activations", tuple(self.activations))

    @property
    def plugins(self) -> frozenset[Plugin]:
        return frozenset(a.plugin for a in self.activations)

    def get(self, plugin: Plugin) -> Optional[PluginActivation]:
        for activation in self.activations:
            if activation.plugin is plugin:
                return activation
        return None

    @classmethod
    def from_settings(
            cls, environment: Environment,
            plugins: Mapping[str, Optional[Mapping[str, Any]]]) -> "EnvironmentProfile":
        activations: list[PluginActivation] = []
        for name, parameters in plugins.items():
            activation = PluginActivation(Plugin.parse(name), dict(parameters or {}))
            log.debug("%s: activating %s with %r", environment.value, name, activation.parameters)
            activations.append(activation)
        return cls(environment, tuple(activations))


def load_profiles(settings) -> dict[Environment, EnvironmentProfile]:
    """
    Build the EnvironmentProfile of every environment from settings.ENVIRONMENTS
    """
    profiles: dict[Environment, EnvironmentProfile] = {}
    for name, plugins in settings.ENVIRONMENTS.items():
        environment = Environment.parse(name)
        profiles[environment] = EnvironmentProfile.from_settings(environment, plugins or {})

    for environment in Environment:
        profiles.setdefault(environment, EnvironmentProfile(environment))

    # Test comments must never end up on the production discussion threads
    shortnames: dict[str, Environment] = {}
    for environment, profile in profiles.items():
        disqus = profile.get(Plugin.DISQUS)
        if disqus is None:
            continue
        shortname = disqus.parameters["shortname"]
        if (other := shortnames.get(shortname)) is not None:
            raise ConfigError(
                f"disqus shortname {shortname!r} is used by both {other.value} and {environment.value}")
        shortnames[shortname] = environment

    return profiles

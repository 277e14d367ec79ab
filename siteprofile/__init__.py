from .environment import Environment, NodeEnv, UnknownEnvironment
from .errors import ConfigError
from .plugins import Plugin, PluginActivation
from .resolver import ResolvedConfig, resolve
from .settings import Settings

__all__ = (
    "ConfigError", "Environment", "NodeEnv", "UnknownEnvironment",
    "Plugin", "PluginActivation", "ResolvedConfig", "resolve", "Settings")

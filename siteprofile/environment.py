from __future__ import annotations

import enum
import os
from typing import Mapping, Optional, Union

from .errors import ConfigError


class UnknownEnvironment(ConfigError):
    """
    A build environment was requested that is neither development nor build
    """
    def __init__(self, name: str):
        super().__init__(
            f"unknown environment {name!r}: use one of {', '.join(e.value for e in Environment)}")
        self.name = name


class Environment(enum.Enum):
    """
    Build mode of the site
    """
    DEVELOPMENT = "development"
    BUILD = "build"

    @classmethod
    def parse(cls, value: Union[str, "Environment"]) -> "Environment":
        """
        Return the Environment for a name, raising UnknownEnvironment if there
        is none
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownEnvironment(str(value)) from None

    @property
    def is_production(self) -> bool:
        return self is Environment.BUILD

    @property
    def default_node_env(self) -> "NodeEnv":
        return NodeEnv.PRODUCTION if self.is_production else NodeEnv.DEVELOPMENT


class NodeEnv(enum.Enum):
    """
    Value of NODE_ENV, as seen by the bundler and the PostCSS pipeline
    """
    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @classmethod
    def parse(cls, value: Union[str, "NodeEnv", None]) -> "NodeEnv":
        # Anything that is not "production" is a development build, as it is
        # for the tools reading NODE_ENV
        if isinstance(value, cls):
            return value
        if value == cls.PRODUCTION.value:
            return cls.PRODUCTION
        return cls.DEVELOPMENT

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> Optional["NodeEnv"]:
        """
        Read NODE_ENV from the environment, returning None if it is not set
        """
        if environ is None:
            environ = os.environ
        value = environ.get("NODE_ENV")
        if not value:
            return None
        return cls.parse(value)

    @property
    def is_production(self) -> bool:
        return self is NodeEnv.PRODUCTION

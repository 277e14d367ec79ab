from __future__ import annotations

import contextlib
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

import jinja2

from .environment import NodeEnv
from .errors import ConfigError
from .utils import FrozenMap, dump_data, freeze

log = logging.getLogger("postcss")

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")


@dataclass(frozen=True)
class PostCSSPlugin:
    name: str
    options: Mapping[str, Any] = field(default_factory=FrozenMap)

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ConfigError(f"PostCSS plugin name {self.name!r} should be a non-empty string")
        if not isinstance(self.options, Mapping):
            raise ConfigError(f"PostCSS plugin {self.name!r}: options should be a mapping")
        object.__setattr__(self, "options", freeze(self.options))

    def to_dict(self):
        return {"name": self.name, "options": dump_data(self.options)}


@dataclass(frozen=True)
class PostCSSPipeline:
    """
    Ordered list of PostCSS plugins for one NODE_ENV
    """
    node_env: NodeEnv
    plugins: Sequence[PostCSSPlugin] = ()

    def __post_init__(self):
        object.__setattr__(self, "plugins", tuple(self.plugins))

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.plugins]

    @classmethod
    def from_settings(cls, settings, production: bool) -> "PostCSSPipeline":
        node_env = NodeEnv.PRODUCTION if production else NodeEnv.DEVELOPMENT
        entries = settings.POSTCSS_PLUGINS.get(node_env.value)
        if entries is None:
            raise ConfigError(f"POSTCSS_PLUGINS has no {node_env.value!r} list")
        plugins: list[PostCSSPlugin] = []
        for entry in entries:
            if isinstance(entry, str):
                plugins.append(PostCSSPlugin(entry))
                continue
            try:
                name, options = entry
            except (TypeError, ValueError):
                raise ConfigError(f"PostCSS plugin {entry!r} should be a name or a (name, options) pair") from None
            plugins.append(PostCSSPlugin(name, dict(options or {})))
        return cls(node_env, tuple(plugins))

    def as_dict(self) -> dict[str, Any]:
        """
        Return the plugin list in the object form understood by
        postcss-load-config
        """
        return {"plugins": {p.name: dump_data(p.options) for p in self.plugins}}

    def to_dict(self):
        return {"node_env": self.node_env.value, "plugins": [p.to_dict() for p in self.plugins]}


def make_jinja2_env() -> jinja2.Environment:
    env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(TEMPLATE_DIR),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined)
    # Options are frozen mappings, which json cannot serialize
    env.filters["plain"] = dump_data
    return env


def render_config_js(development: PostCSSPipeline, production: PostCSSPipeline) -> str:
    """
    Render a postcss.config.js that picks the plugin list from NODE_ENV when
    PostCSS runs
    """
    env = make_jinja2_env()
    template = env.get_template("postcss.config.js")
    return template.render(development=development, production=production)


def write_config(pathname: str, development: PostCSSPipeline, production: PostCSSPipeline) -> None:
    content = render_config_js(development, production)
    tmpname = pathname + ".tmp"
    try:
        with open(tmpname, "wt", encoding="utf8") as fd:
            fd.write(content)
        os.rename(tmpname, pathname)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmpname)
        raise
    log.info("%s: written PostCSS configuration", pathname)

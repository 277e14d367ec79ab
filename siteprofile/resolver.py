from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from .blog import BlogConfig
from .bundler import BundlerInvocation
from .environment import Environment, NodeEnv
from .markup import MarkupConfig
from .page_rules import PageRules
from .plugins import EnvironmentProfile, Plugin, PluginActivation, load_profiles
from .postcss import PostCSSPipeline
from .settings import Settings
from .utils import dump_data

log = logging.getLogger("resolver")


@dataclass(frozen=True)
class ResolvedConfig:
    """
    Everything that is enabled, and how, for one build environment
    """
    environment: Environment
    node_env: NodeEnv
    page_rules: PageRules
    blog: BlogConfig
    markup: MarkupConfig
    bundler: BundlerInvocation
    postcss: PostCSSPipeline
    profile: EnvironmentProfile

    @property
    def plugin_activations(self) -> Sequence[PluginActivation]:
        return self.profile.activations

    @property
    def plugins(self) -> frozenset[Plugin]:
        return self.profile.plugins

    def is_active(self, plugin: Plugin) -> bool:
        return plugin in self.profile.plugins

    @property
    def discussion_shortname(self) -> Optional[str]:
        disqus = self.profile.get(Plugin.DISQUS)
        if disqus is None:
            return None
        return disqus.parameters["shortname"]

    def layout_for(self, path: str) -> Optional[str]:
        """
        Return the layout used to render the page at path, or None if it is
        rendered without a layout
        """
        return self.page_rules.layout_for(path)

    def to_dict(self) -> dict[str, Any]:
        return dump_data({
            "environment": self.environment,
            "node_env": self.node_env,
            "page_rules": self.page_rules,
            "blog": self.blog,
            "markup": self.markup,
            "bundler": self.bundler,
            "postcss": self.postcss,
            "plugins": list(self.profile.activations),
        })


def resolve(
        env: Union[str, Environment],
        node_env: Union[str, NodeEnv, None] = None,
        settings: Optional[Settings] = None) -> ResolvedConfig:
    """
    Resolve the configuration for a build environment.

    :arg env: ``development`` or ``build``. Anything else raises
              UnknownEnvironment
    :arg node_env: value of NODE_ENV. It defaults to ``production`` for
                   ``build`` and to ``development`` otherwise
    :arg settings: site settings. Defaults to the global settings
    """
    environment = Environment.parse(env)
    if node_env is None:
        node_env = environment.default_node_env
    else:
        node_env = NodeEnv.parse(node_env)
    if settings is None:
        settings = Settings()

    log.debug("resolving configuration for %s, NODE_ENV=%s", environment.value, node_env.value)

    profiles = load_profiles(settings)

    return ResolvedConfig(
        environment=environment,
        node_env=node_env,
        page_rules=PageRules.from_settings(settings),
        blog=BlogConfig.from_settings(settings),
        markup=MarkupConfig.from_settings(settings),
        bundler=BundlerInvocation.from_settings(settings, production=environment.is_production),
        postcss=PostCSSPipeline.from_settings(settings, production=node_env.is_production),
        profile=profiles[environment],
    )

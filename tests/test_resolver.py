from unittest import TestCase

from siteprofile import resolve
from siteprofile.environment import Environment, NodeEnv, UnknownEnvironment
from siteprofile.errors import ConfigError
from siteprofile.plugins import Plugin

from . import utils as test_utils


class TestResolve(TestCase):
    def test_development(self):
        config = resolve("development")
        self.assertIs(config.environment, Environment.DEVELOPMENT)
        self.assertIs(config.node_env, NodeEnv.DEVELOPMENT)
        self.assertEqual(config.plugins, {Plugin.LIVERELOAD, Plugin.DISQUS})
        self.assertTrue(config.is_active(Plugin.LIVERELOAD))
        self.assertFalse(config.is_active(Plugin.MINIFY_CSS))
        self.assertFalse(config.is_active(Plugin.MINIFY_JAVASCRIPT))
        self.assertEqual(config.discussion_shortname, "guillaume-testing-disqus")
        self.assertFalse(config.bundler.production)
        self.assertIn("--watch", config.bundler.command)
        self.assertNotIn("cssnano", config.postcss.names)

    def test_build(self):
        config = resolve("build")
        self.assertIs(config.environment, Environment.BUILD)
        self.assertIs(config.node_env, NodeEnv.PRODUCTION)
        self.assertEqual(config.plugins, {Plugin.MINIFY_CSS, Plugin.MINIFY_JAVASCRIPT, Plugin.DISQUS})
        self.assertFalse(config.is_active(Plugin.LIVERELOAD))
        self.assertEqual(config.discussion_shortname, "tech-thoughts-guillaume")
        self.assertTrue(config.bundler.production)
        self.assertIn("NODE_ENV=production", config.bundler.command)
        self.assertEqual(config.postcss.names[-1], "cssnano")

    def test_discussion_isolation(self):
        self.assertNotEqual(
            resolve("development").discussion_shortname,
            resolve("build").discussion_shortname)

    def test_no_discussion(self):
        settings = test_utils.make_settings(ENVIRONMENTS={"build": {"minify_css": {}}})
        self.assertIsNone(resolve("build", settings=settings).discussion_shortname)
        self.assertEqual(resolve("development", settings=settings).plugins, frozenset())

    def test_idempotent(self):
        settings = test_utils.make_settings()
        for env in ("development", "build"):
            with self.subTest(env=env):
                self.assertEqual(resolve(env, "production", settings), resolve(env, "production", settings))
                self.assertEqual(
                    resolve(env, settings=settings).to_dict(),
                    resolve(env, settings=settings).to_dict())

    def test_layouts(self):
        config = resolve("build")
        self.assertIsNone(config.layout_for("/feed.xml"))
        self.assertIsNone(config.layout_for("/posts/a.json"))
        self.assertEqual(config.layout_for("/about.html"), "layout")

    def test_node_env(self):
        # NODE_ENV selects the PostCSS plugins, the environment selects the
        # bundler command
        config = resolve("development", "production")
        self.assertEqual(config.postcss.names[-1], "cssnano")
        self.assertFalse(config.bundler.production)

        config = resolve(Environment.BUILD, NodeEnv.DEVELOPMENT)
        self.assertNotIn("cssnano", config.postcss.names)
        self.assertTrue(config.bundler.production)
        self.assertEqual(config.postcss.names, ["postcss-import", "tailwindcss", "autoprefixer"])

    def test_unknown_environment(self):
        with self.assertRaises(UnknownEnvironment):
            resolve("staging")

    def test_fail_fast(self):
        settings = test_utils.make_settings(ENVIRONMENTS={"build": {"minify_html": {}}})
        with self.assertRaisesRegex(ConfigError, "unknown plugin"):
            resolve("development", settings=settings)

    def test_to_dict(self):
        data = resolve("build").to_dict()
        self.assertEqual(data["environment"], "build")
        self.assertEqual(data["node_env"], "production")
        self.assertEqual(data["blog"]["layout"], "article")
        self.assertEqual(data["page_rules"]["rules"][-1], {"pattern": "/feed.xml", "layout": None})
        self.assertEqual(data["bundler"]["source_dir"], ".tmp/dist")
        self.assertEqual(data["postcss"]["plugins"][-1], {"name": "cssnano", "options": {}})
        self.assertEqual(data["markup"]["syntax"]["engine"], "pygments")
        self.assertEqual(
            sorted(p["name"] for p in data["plugins"]),
            ["disqus", "minify_css", "minify_javascript"])

    def test_immutable(self):
        settings = test_utils.make_settings(
            ENVIRONMENTS={
                "development": {"livereload": {"port": 8080, "ignore": ["*.map"]}, "disqus": {"shortname": "a"}},
                "build": {"disqus": {"shortname": "b"}},
            },
            POSTCSS_PLUGINS={
                "development": [["autoprefixer", {"grid": True}]],
                "production": ["autoprefixer", "cssnano"],
            })
        config = resolve("development", settings=settings)

        livereload = config.profile.get(Plugin.LIVERELOAD)
        with self.assertRaises(TypeError):
            livereload.parameters["port"] = 1234
        self.assertEqual(livereload.parameters["ignore"], ("*.map",))
        with self.assertRaises(TypeError):
            config.profile.get(Plugin.DISQUS).parameters["shortname"] = "b"
        with self.assertRaises(TypeError):
            config.postcss.plugins[0].options["grid"] = False
        with self.assertRaises(TypeError):
            config.markup.markdown.options["smartypants"] = False
        self.assertIsInstance(config.page_rules.rules, tuple)
        self.assertIsInstance(config.profile.activations, tuple)

        # Changing the settings afterwards does not reach the resolved values
        settings.ENVIRONMENTS["development"]["livereload"]["ignore"].append("*.tmp")
        self.assertEqual(livereload.parameters["ignore"], ("*.map",))

    def test_hashable(self):
        for env in ("development", "build"):
            with self.subTest(env=env):
                config = resolve(env)
                self.assertEqual(hash(config), hash(resolve(env)))
                self.assertEqual(len({config, resolve(env)}), 1)

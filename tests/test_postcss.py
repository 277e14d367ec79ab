import os
from unittest import TestCase, mock

from siteprofile.environment import NodeEnv
from siteprofile.errors import ConfigError
from siteprofile.postcss import (PostCSSPipeline, PostCSSPlugin,
                                 render_config_js, write_config)

from . import utils as test_utils


class TestPostCSS(TestCase):
    def test_pipelines(self):
        settings = test_utils.make_settings()
        dev = PostCSSPipeline.from_settings(settings, production=False)
        prod = PostCSSPipeline.from_settings(settings, production=True)

        self.assertIs(dev.node_env, NodeEnv.DEVELOPMENT)
        self.assertIs(prod.node_env, NodeEnv.PRODUCTION)
        self.assertEqual(dev.names, ["postcss-import", "tailwindcss", "autoprefixer"])
        self.assertEqual(prod.names[-1], "cssnano")
        self.assertEqual(prod.names[:-1], dev.names)

    def test_as_dict(self):
        pipeline = PostCSSPipeline(NodeEnv.PRODUCTION, (
            PostCSSPlugin("autoprefixer"),
            PostCSSPlugin("cssnano", {"preset": "default"}),
        ))
        self.assertEqual(pipeline.as_dict(), {"plugins": {"autoprefixer": {}, "cssnano": {"preset": "default"}}})

    def test_plugin_names(self):
        settings = test_utils.make_settings(POSTCSS_PLUGINS={
            "development": ["postcss-import", ["autoprefixer", None]],
            "production": [],
        })
        dev = PostCSSPipeline.from_settings(settings, production=False)
        self.assertEqual(dev.plugins, (PostCSSPlugin("postcss-import"), PostCSSPlugin("autoprefixer")))
        self.assertEqual(PostCSSPipeline.from_settings(settings, production=True).plugins, ())

    def test_invalid(self):
        settings = test_utils.make_settings(POSTCSS_PLUGINS={"development": []})
        with self.assertRaisesRegex(ConfigError, "no 'production' list"):
            PostCSSPipeline.from_settings(settings, production=True)
        settings = test_utils.make_settings(POSTCSS_PLUGINS={"development": [("a", "b", "c")]})
        with self.assertRaises(ConfigError):
            PostCSSPipeline.from_settings(settings, production=False)
        with self.assertRaises(ConfigError):
            PostCSSPlugin("")

    def test_render_config_js(self):
        settings = test_utils.make_settings()
        dev = PostCSSPipeline.from_settings(settings, production=False)
        prod = PostCSSPipeline(NodeEnv.PRODUCTION, (
            PostCSSPlugin("postcss-import"),
            PostCSSPlugin("cssnano", {"preset": "default"}),
        ))
        js = render_config_js(dev, prod)
        self.assertIn("const inProduction = (process.env.NODE_ENV == 'production');", js)
        self.assertIn('  require("tailwindcss")(),\n', js)
        self.assertIn('  require("cssnano")({"preset": "default"}),\n', js)
        self.assertIn("plugins: inProduction ? PROD_PLUGINS : DEV_PLUGINS", js)

        dev_block = js.split("const DEV_PLUGINS = [")[1].split("]")[0]
        self.assertNotIn("cssnano", dev_block)

        with test_utils.workdir() as root:
            pathname = os.path.join(root, "postcss.config.js")
            write_config(pathname, dev, prod)
            with open(pathname, encoding="utf8") as fd:
                self.assertEqual(fd.read(), js)
            self.assertFalse(os.path.exists(pathname + ".tmp"))

    def test_write_config_failure(self):
        settings = test_utils.make_settings()
        dev = PostCSSPipeline.from_settings(settings, production=False)
        prod = PostCSSPipeline.from_settings(settings, production=True)

        with test_utils.workdir({"postcss.config.js": "// old\n"}) as root:
            pathname = os.path.join(root, "postcss.config.js")
            with mock.patch("os.rename", side_effect=OSError("read-only filesystem")):
                with self.assertRaises(OSError):
                    write_config(pathname, dev, prod)
            self.assertFalse(os.path.exists(pathname + ".tmp"))
            # The previous file is left untouched
            with open(pathname, encoding="utf8") as fd:
                self.assertEqual(fd.read(), "// old\n")

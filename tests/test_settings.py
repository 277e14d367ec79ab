import os
from unittest import TestCase

from siteprofile import global_settings, resolve
from siteprofile.errors import ConfigError
from siteprofile.settings import Settings

from . import utils as test_utils


class TestSettings(TestCase):
    def test_defaults(self):
        s = Settings()
        self.assertEqual(s.TIMEZONE, global_settings.TIMEZONE)
        self.assertEqual(s.BUNDLER_SOURCE, ".tmp/dist")
        self.assertEqual(s.BUNDLER_LATENCY_MS, 1000)
        self.assertEqual(s.BLOG["layout"], "article")

    def test_defaults_not_shared(self):
        s = Settings()
        s.BLOG["paginate"] = True
        s.PAGE_RULES.append(("/*.html", None))
        s.ENVIRONMENTS["build"]["disqus"]["shortname"] = "changed"

        self.assertNotIn("paginate", global_settings.BLOG)
        self.assertNotIn("paginate", Settings().BLOG)
        self.assertEqual(len(Settings().PAGE_RULES), len(global_settings.PAGE_RULES))

        config = resolve("build")
        self.assertFalse(config.blog.paginate)
        self.assertEqual(config.layout_for("/about.html"), "layout")
        self.assertEqual(config.discussion_shortname, "tech-thoughts-guillaume")

    def test_as_dict(self):
        s = Settings()
        d = s.as_dict()
        self.assertEqual(d["TIMEZONE"], global_settings.TIMEZONE)
        self.assertNotIn("as_dict", d)

    def test_add_module(self):
        s = Settings()
        self.assertFalse(hasattr(s, "PRIO_USER"))

        s.add_module(os)

        # Merging a module add all uppercase symbols
        self.assertEqual(s.PRIO_USER, os.PRIO_USER)

        # And ignores all lowercase ones
        self.assertFalse(hasattr(s, "getuid"))

    def test_load_python(self):
        files = {
            "settings.py": "import os\nUPPERCASE = True\nlowercase = True\nLAYOUT = 'page'\n",
        }
        with test_utils.workdir(files) as root:
            s = Settings()
            s.load(os.path.join(root, "settings.py"))

        self.assertEqual(s.UPPERCASE, True)
        self.assertEqual(s.LAYOUT, "page")
        self.assertFalse(hasattr(s, "lowercase"))
        self.assertFalse(hasattr(s, "os"))

    def test_load_toml(self):
        files = {
            "siteprofile.toml": (
                'LAYOUT = "page"\n'
                'lowercase = 1\n'
                'PAGE_RULES = [{pattern = "/*.xml", layout = false}]\n'
                '[BLOG]\n'
                'layout = "post"\n'),
        }
        with test_utils.workdir(files) as root:
            s = Settings()
            s.load(os.path.join(root, "siteprofile.toml"))

        self.assertEqual(s.LAYOUT, "page")
        self.assertEqual(s.BLOG, {"layout": "post"})
        self.assertEqual(s.PAGE_RULES, [{"pattern": "/*.xml", "layout": False}])
        self.assertFalse(hasattr(s, "lowercase"))

    def test_load_yaml(self):
        files = {
            "siteprofile.yaml": "LAYOUT: page\nTIMEZONE: Europe/Rome\n",
            "empty.yaml": "",
            "list.yaml": "- 1\n- 2\n",
        }
        with test_utils.workdir(files) as root:
            s = Settings()
            s.load(os.path.join(root, "siteprofile.yaml"))
            self.assertEqual(s.LAYOUT, "page")
            self.assertEqual(s.TIMEZONE, "Europe/Rome")

            s.load(os.path.join(root, "empty.yaml"))
            self.assertEqual(s.LAYOUT, "page")

            with self.assertRaises(ConfigError):
                s.load(os.path.join(root, "list.yaml"))

    def test_load_errors(self):
        files = {
            "settings.ini": "[foo]\n",
            "broken.toml": "LAYOUT = \n",
        }
        with test_utils.workdir(files) as root:
            s = Settings()
            with self.assertRaises(ConfigError):
                s.load(os.path.join(root, "settings.ini"))
            with self.assertRaises(ConfigError):
                s.load(os.path.join(root, "broken.toml"))

    def test_expand(self):
        s = Settings()
        self.assertEqual(s.expand("--config {BUNDLER_CONFIG}"), "--config ./webpack.config.js")
        with self.assertRaises(ConfigError):
            s.expand("{DOES_NOT_EXIST}")

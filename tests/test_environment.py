from unittest import TestCase

from siteprofile.environment import Environment, NodeEnv, UnknownEnvironment
from siteprofile.errors import ConfigError


class TestEnvironment(TestCase):
    def test_parse(self):
        self.assertIs(Environment.parse("development"), Environment.DEVELOPMENT)
        self.assertIs(Environment.parse("build"), Environment.BUILD)
        self.assertIs(Environment.parse(Environment.BUILD), Environment.BUILD)

    def test_unknown(self):
        with self.assertRaises(UnknownEnvironment) as e:
            Environment.parse("staging")
        self.assertEqual(e.exception.name, "staging")
        self.assertIn("staging", str(e.exception))
        # Unknown environments are configuration errors
        self.assertIsInstance(e.exception, ConfigError)

    def test_default_node_env(self):
        self.assertIs(Environment.BUILD.default_node_env, NodeEnv.PRODUCTION)
        self.assertIs(Environment.DEVELOPMENT.default_node_env, NodeEnv.DEVELOPMENT)


class TestNodeEnv(TestCase):
    def test_parse(self):
        self.assertIs(NodeEnv.parse("production"), NodeEnv.PRODUCTION)
        self.assertIs(NodeEnv.parse("development"), NodeEnv.DEVELOPMENT)
        # Only "production" enables production builds
        self.assertIs(NodeEnv.parse("test"), NodeEnv.DEVELOPMENT)
        self.assertIs(NodeEnv.parse(None), NodeEnv.DEVELOPMENT)

    def test_from_environ(self):
        self.assertIsNone(NodeEnv.from_environ({}))
        self.assertIsNone(NodeEnv.from_environ({"NODE_ENV": ""}))
        self.assertIs(NodeEnv.from_environ({"NODE_ENV": "production"}), NodeEnv.PRODUCTION)
        self.assertIs(NodeEnv.from_environ({"NODE_ENV": "development"}), NodeEnv.DEVELOPMENT)

from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Optional, Type

from ..environment import Environment, NodeEnv
from ..resolver import ResolvedConfig, resolve
from ..settings import Settings
from ..utils import timings

from . import cli

Fail = cli.Fail
Success = cli.Success

log = logging.getLogger("command")

COMMANDS: list[Type["Command"]] = []

# Settings files looked up in the project directory, in order
SETTINGS_FILES = ["settings.py", ".siteprofile.py", "siteprofile.toml", "siteprofile.yaml"]


def register(c: Type["Command"]) -> Type["Command"]:
    COMMANDS.append(c)
    return c


class Command(cli.Command):
    def __init__(self, args: argparse.Namespace):
        super().__init__(args)
        self.settings = Settings()


class ProjectCommand(Command):
    """
    Command working on the configuration of a site project
    """
    # Environment used when --env is not given
    DEFAULT_ENV = Environment.DEVELOPMENT.value

    def __init__(self, *args: Any, **kw: Any):
        super().__init__(*args, **kw)

        # Look for project settings
        settings_files = SETTINGS_FILES
        if self.args.project:
            if os.path.isfile(self.args.project):
                # If a project file is mentioned, take its directory as default
                # project root
                settings_file = os.path.abspath(self.args.project)
                settings_dir, settings_file = os.path.split(settings_file)
                settings_files = [settings_file]
            elif os.path.isdir(self.args.project):
                # If a project directory is mentioned, take it as default
                # project root
                settings_dir = os.path.abspath(self.args.project)
            else:
                raise Fail(f"{self.args.project}: project not found")
        else:
            settings_dir = os.getcwd()

        # Load the first settings file found (if any)
        for relpath in settings_files:
            abspath = os.path.join(settings_dir, relpath)
            if os.path.isfile(abspath):
                log.info("%s: loading settings", abspath)
                self.settings.load(abspath)
                break
        else:
            log.info("%s: no settings file found, using defaults", settings_dir)

        # Set default project root if undefined
        if self.settings.PROJECT_ROOT is None:
            self.settings.PROJECT_ROOT = settings_dir
        elif not os.path.isabs(self.settings.PROJECT_ROOT):
            self.settings.PROJECT_ROOT = os.path.join(settings_dir, self.settings.PROJECT_ROOT)

    def node_env(self) -> Optional[NodeEnv]:
        if self.args.node_env:
            return NodeEnv.parse(self.args.node_env)
        return NodeEnv.from_environ()

    def resolve(self) -> ResolvedConfig:
        with timings("Resolved configuration in %fs"):
            return resolve(self.args.env or self.DEFAULT_ENV, self.node_env(), self.settings)

    @classmethod
    def add_subparser(cls, subparsers: "argparse._SubParsersAction[Any]") -> argparse.ArgumentParser:
        parser = super().add_subparser(subparsers)

        parser.add_argument("project", nargs="?",
                            help="project directory or settings file (default: the current directory)")
        parser.add_argument("--env", action="store",
                            help=f"build environment: development or build (default: {cls.DEFAULT_ENV})")
        parser.add_argument("--node-env", action="store",
                            help="value of NODE_ENV (default: from the environment, or from --env)")

        return parser

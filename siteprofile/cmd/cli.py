from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence, Type

from ..bundler import ExternalPipelineError, MissingExternalTool
from ..errors import ConfigError

try:
    import coloredlogs

    HAS_COLOREDLOGS = True
except ModuleNotFoundError:
    HAS_COLOREDLOGS = False

log = logging.getLogger("siteprofile")

# Errors caused by the project configuration or by its environment, which are
# reported as a one line message instead of a stack trace. UnknownEnvironment
# is a ConfigError.
USER_ERRORS = (ConfigError, MissingExternalTool, ExternalPipelineError)

LOG_FORMAT = "%(asctime)-15s %(levelname)s %(name)s %(message)s"


class Fail(BaseException):
    """
    Failure that causes the program to exit with an error message.

    No stack trace is printed.
    """
    pass


class Success(BaseException):
    """
    Exception raised when a command has been successfully handled, and no
    further processing should happen
    """
    pass


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARN

    if HAS_COLOREDLOGS:
        coloredlogs.install(level=level, fmt=LOG_FORMAT)
    else:
        logging.basicConfig(level=level, stream=sys.stderr, format=LOG_FORMAT)


class Command:
    """
    Base class for sprofile subcommands.

    Subclasses set up their state in the constructor and do their work in
    run(). Use execute() to do both, with configuration errors turned into
    Fail.
    """

    NAME: Optional[str] = None

    def __init__(self, args: argparse.Namespace):
        self.args = args

    def run(self) -> Optional[int]:
        raise NotImplementedError(f"{self.__class__.__name__}.run not implemented")

    @classmethod
    def execute(cls, args: argparse.Namespace) -> Optional[int]:
        """
        Instantiate the command and run it
        """
        try:
            return cls(args).run()
        except USER_ERRORS as e:
            raise Fail(str(e)) from e

    @classmethod
    def command_name(cls) -> str:
        return cls.NAME or cls.__name__.lower()

    @classmethod
    def add_subparser(cls, subparsers: "argparse._SubParsersAction") -> argparse.ArgumentParser:
        doc = (cls.__doc__ or "").strip()
        parser: argparse.ArgumentParser = subparsers.add_parser(
            cls.command_name(), help=doc.splitlines()[0] if doc else None)
        parser.set_defaults(command=cls)
        parser.add_argument("-v", "--verbose", action="store_true", help="verbose output")
        parser.add_argument("--debug", action="store_true", help="debugging output")
        return parser


def make_parser(commands: Sequence[Type[Command]], description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    subparsers = parser.add_subparsers(help="sub-command help", dest="command_name", required=True)
    for cls in commands:
        cls.add_subparser(subparsers)
    return parser


def main(parser: argparse.ArgumentParser, argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse the command line and run the selected command, returning the exit
    code
    """
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, debug=args.debug)

    try:
        res = args.command.execute(args)
    except Success:
        return 0
    except Fail as e:
        log.error("%s", e)
        return 1
    except KeyboardInterrupt:
        return 130
    return res or 0

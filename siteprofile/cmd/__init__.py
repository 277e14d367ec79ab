from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from . import bundle, cli, dump, layout, postcss  # noqa: F401
from .command import COMMANDS


def make_parser() -> argparse.ArgumentParser:
    return cli.make_parser(COMMANDS, description="Resolve the configuration of a static site build.")


def main(argv: Optional[Sequence[str]] = None) -> int:
    return cli.main(make_parser(), argv)


if __name__ == "__main__":
    sys.exit(main())

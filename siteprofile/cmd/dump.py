from __future__ import annotations

import json
import logging
import sys

from ..utils import yaml_codec
from .command import Fail, ProjectCommand, register

log = logging.getLogger("dump")


@register
class Dump(ProjectCommand):
    "Dump the resolved configuration"

    @classmethod
    def add_subparser(cls, subparsers):
        parser = super().add_subparser(subparsers)
        parser.add_argument("-f", "--format", action="store", default="yaml",
                            choices=("yaml", "json", "toml"),
                            help="output format (default: %(default)s)")
        return parser

    def run(self) -> None:
        data = self.resolve().to_dict()
        if self.args.format == "yaml":
            yaml_codec.dump(data, sys.stdout)
        elif self.args.format == "json":
            json.dump(data, sys.stdout, indent=2)
            print()
        elif self.args.format == "toml":
            import toml
            print(toml.dumps(self.toml_data(data)), end="")
        else:
            raise Fail(f"unsupported output format {self.args.format!r}")

    def toml_data(self, data):
        """
        Adapt the dump to toml, which has no null: disabled layouts are written
        as false, as accepted by PAGE_RULES
        """
        for rule in data["page_rules"]["rules"]:
            if rule["layout"] is None:
                rule["layout"] = False
        return data

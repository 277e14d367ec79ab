from __future__ import annotations

import io
from typing import IO, Any

#
# ruamel.yaml is slow at loading, but settings files are small, and it can do
# unsorted dumping with no specific version requirements, which keeps dumps in
# the same order as the configuration they describe.
#

import ruamel.yaml
from ruamel.yaml.error import YAMLError

__all__ = ("YAMLError", "load", "loads", "dump", "dumps")

yaml_loader = ruamel.yaml.YAML(typ="safe", pure=True)

# Hack to do unsorted serialization with ruamel
yaml_dumper = ruamel.yaml.YAML(typ="rt", pure=True)
yaml_dumper.allow_unicode = True
yaml_dumper.default_flow_style = False
# TODO: yaml does not have explicit_start typed correctly
yaml_dumper.explicit_start = True  # type: ignore


def loads(string: str) -> Any:
    return yaml_loader.load(string)


def load(file: IO[str]) -> Any:
    return yaml_loader.load(file)


def dumps(data: Any) -> str:
    # YAML dump with unsorted keys
    with io.StringIO() as fd:
        yaml_dumper.dump(data, fd)
        return fd.getvalue()


def dump(data: Any, file: IO[str]) -> None:
    yaml_dumper.dump(data, file)

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Mapping
from typing import Any, Generator, Iterator

log = logging.getLogger("utils")


@contextlib.contextmanager
def timings(fmtstr: str, *args: Any, **kw: Any) -> Generator[None, None, None]:
    """
    Times the running of a command, and writes a log entry afterwards.

    The log entry is passed an extra command at the beginning with the elapsed
    time in floating point seconds.
    """
    start = time.perf_counter_ns()
    yield
    end = time.perf_counter_ns()
    log.info(fmtstr, (end - start) / 1_000_000_000, *args, extra=kw)


def dump_data(val: Any) -> Any:
    """
    Turn a value into plain data, for serializing configuration dumps
    """
    import enum

    if val is None:
        return None
    elif isinstance(val, enum.Enum):
        return val.value
    elif isinstance(val, (bool, int, float, str)):
        return val
    elif isinstance(val, Mapping):
        return {str(k): dump_data(v) for k, v in val.items()}
    elif isinstance(val, (list, tuple, set, frozenset)):
        return [dump_data(v) for v in val]
    elif hasattr(val, "to_dict"):
        return dump_data(val.to_dict())
    else:
        return str(val)


class FrozenMap(Mapping):
    """
    Read-only, hashable mapping, used for the parameters held by resolved
    configuration values
    """
    __slots__ = ("_data", "_hash")

    def __init__(self, *args: Any, **kw: Any):
        object.__setattr__(self, "_data", dict(*args, **kw))
        object.__setattr__(self, "_hash", None)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is read-only")

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        if self._hash is None:
            object.__setattr__(self, "_hash", hash(frozenset(self._data.items())))
        return self._hash

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"


def freeze(val: Any) -> Any:
    """
    Return a read-only copy of a value loaded from settings: mappings become
    FrozenMap, lists and tuples become tuples, sets become frozensets
    """
    if isinstance(val, Mapping):
        return FrozenMap((k, freeze(v)) for k, v in val.items())
    elif isinstance(val, (list, tuple)):
        return tuple(freeze(v) for v in val)
    elif isinstance(val, (set, frozenset)):
        return frozenset(freeze(v) for v in val)
    return val

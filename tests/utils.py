from __future__ import annotations

import contextlib
import os
import tempfile
from typing import Any, Generator, Optional, Union

from siteprofile.settings import Settings

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

MockFiles = dict[str, Union[str, bytes]]


class Args:
    """
    Mock argparser namespace initialized with options from constructor
    """
    def __init__(self, **kw):
        self._args = kw

    def __getattr__(self, k):
        return self._args.get(k, None)


@contextlib.contextmanager
def workdir(files: Optional[MockFiles] = None) -> Generator[str, None, None]:
    """
    Create a temporary directory populated with the given files
    """
    with tempfile.TemporaryDirectory() as root:
        for relpath, content in (files or {}).items():
            abspath = os.path.join(root, relpath)
            os.makedirs(os.path.dirname(abspath), exist_ok=True)
            if isinstance(content, str):
                with open(abspath, "wt", encoding="utf8") as fd:
                    fd.write(content)
            else:
                with open(abspath, "wb") as fd:
                    fd.write(content)
        yield root


def make_settings(**kw: Any) -> Settings:
    """
    Create Settings with the defaults, overridden by the keyword arguments
    """
    settings = Settings()
    for k, v in kw.items():
        setattr(settings, k, v)
    return settings

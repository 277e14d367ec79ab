from __future__ import annotations

import fnmatch
import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .errors import ConfigError

log = logging.getLogger("page_rules")


def compile_page_match(pattern: Union[str, re.Pattern]) -> re.Pattern:
    """
    Return a compiled re.Pattern from a glob or regular expression.

    :arg pattern:
      * if it's a re.Pattern instance, it is returned as is
      * if it starts with ``^`` or ends with ``$``, it is compiled as a regular
        expression
      * otherwise, it is considered a glob expression, and fnmatch.translate()
        is used to convert it to a regular expression, then compiled. ``*``
        also matches ``/``, so ``/*.json`` matches ``/posts/a.json``
    """
    if hasattr(pattern, "match"):
        return pattern
    if not isinstance(pattern, str) or not pattern:
        raise ConfigError(f"page pattern {pattern!r} should be a non-empty string")
    try:
        if pattern[0] == '^' or pattern[-1] == '$':
            return re.compile(pattern)
        return re.compile(fnmatch.translate(pattern))
    except re.error as e:
        raise ConfigError(f"page pattern {pattern!r} is invalid: {e}") from e


def normalize_path(path: str) -> str:
    """
    Site paths always start with /
    """
    if not path.startswith("/"):
        return "/" + path
    return path


@dataclass(frozen=True)
class PageRule:
    """
    Layout to use for pages matching a pattern.

    A layout of None (or False) means that the pages are rendered without a
    layout.
    """
    pattern: str
    layout: Optional[str]

    def __post_init__(self):
        # toml has no null: false also disables the layout
        if self.layout is False:
            object.__setattr__(self, "layout", None)
        if self.layout is not None and (not isinstance(self.layout, str) or not self.layout):
            raise ConfigError(f"page pattern {self.pattern!r}: layout should be a name or None")
        # Compile once to validate the pattern
        object.__setattr__(self, "_re", compile_page_match(self.pattern))

    def matches(self, path: str) -> bool:
        return self._re.match(normalize_path(path)) is not None

    def to_dict(self):
        return {"pattern": self.pattern, "layout": self.layout}


@dataclass(frozen=True)
class PageRules:
    """
    Ordered list of page rules, where the last matching rule wins
    """
    rules: Sequence[PageRule] = ()
    default_layout: str = "layout"

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))

    def __iter__(self):
        return iter(self.rules)

    def __len__(self):
        return len(self.rules)

    def find(self, path: str) -> Optional[PageRule]:
        """
        Return the rule that applies to path, or None if no rule matches
        """
        for rule in reversed(self.rules):
            if rule.matches(path):
                return rule
        return None

    def layout_for(self, path: str) -> Optional[str]:
        """
        Return the layout for the given site path, or None if the page is
        rendered without a layout
        """
        rule = self.find(path)
        if rule is None:
            return self.default_layout
        log.debug("%s: layout %r from rule %r", path, rule.layout, rule.pattern)
        return rule.layout

    @classmethod
    def from_settings(cls, settings) -> "PageRules":
        rules: list[PageRule] = []
        entries: Sequence = settings.PAGE_RULES
        for entry in entries:
            if isinstance(entry, dict):
                # toml and yaml settings can use {pattern=…, layout=…} tables
                entry = (entry.get("pattern"), entry.get("layout"))
            try:
                pattern, layout = entry
            except (TypeError, ValueError):
                raise ConfigError(f"page rule {entry!r} should be a (pattern, layout) pair") from None
            rules.append(PageRule(pattern, layout))
        if not settings.LAYOUT:
            raise ConfigError("LAYOUT cannot be empty")
        return cls(rules, default_layout=settings.LAYOUT)

    def to_dict(self):
        return {"default_layout": self.default_layout, "rules": [r.to_dict() for r in self.rules]}

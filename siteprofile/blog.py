from __future__ import annotations

import datetime
import logging
import re
import string
from dataclasses import asdict, dataclass, fields
from typing import Any, Optional, Union

import dateutil.parser
import pytz
from slugify import slugify

from .errors import ConfigError

log = logging.getLogger("blog")

DateLike = Union[str, datetime.date, datetime.datetime]

# Regular expressions used for template fields when matching source names
SOURCE_FIELD_RE = {
    "year": r"\d{4}",
    "month": r"\d{2}",
    "day": r"\d{2}",
}


@dataclass(frozen=True)
class BlogConfig:
    """
    Configuration of the blog: where posts come from, where they go, and how
    they are listed by tag and by date.

    Every field has the default of the blog engine and can be overridden
    individually from settings.BLOG.
    """
    # Prefix added to all links, template references and source paths
    prefix: str = ""
    permalink: str = "/{year}/{month}/{day}/{title}.html"
    # Matcher for blog source files
    sources: str = "{year}-{month}-{day}-{title}.html"
    taglink: str = "tags/{tag}.html"
    layout: str = "layout"
    tag_template: Optional[str] = None
    calendar_template: Optional[str] = None
    summary_separator: str = "READMORE"
    summary_length: int = 250
    year_link: str = "/{year}.html"
    month_link: str = "/{year}/{month}.html"
    day_link: str = "/{year}/{month}/{day}.html"
    default_extension: str = ".markdown"
    # Pagination is disabled unless paginate is set
    paginate: bool = False
    per_page: int = 10
    page_link: str = "page/{num}"
    # Time zone for naive post dates
    timezone: Optional[str] = None

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in ("tag_template", "calendar_template", "timezone"):
                if value is not None and not isinstance(value, str):
                    raise ConfigError(f"blog.{f.name} should be a string or None")
            elif f.name == "paginate":
                if not isinstance(value, bool):
                    raise ConfigError("blog.paginate should be true or false")
            elif f.name in ("summary_length", "per_page"):
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    raise ConfigError(f"blog.{f.name} should be a positive integer")
            elif not isinstance(value, str):
                raise ConfigError(f"blog.{f.name} should be a string")
        if self.timezone is not None:
            try:
                pytz.timezone(self.timezone)
            except pytz.UnknownTimeZoneError:
                raise ConfigError(f"unknown time zone {self.timezone!r}") from None

    @classmethod
    def from_settings(cls, settings) -> "BlogConfig":
        known = {f.name for f in fields(cls)}
        kw: dict[str, Any] = {}
        for name, value in (settings.BLOG or {}).items():
            if name not in known or name == "timezone":
                raise ConfigError(f"unknown blog option {name!r}")
            kw[name] = value
        kw["timezone"] = settings.TIMEZONE
        return cls(**kw)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def _link(self, path: str) -> str:
        """
        Add the prefix to a link
        """
        path = path.lstrip("/")
        if self.prefix:
            return "/" + self.prefix.strip("/") + "/" + path
        return "/" + path

    def _expand(self, template: str, **kw: Any) -> str:
        try:
            return template.format(**kw)
        except (KeyError, IndexError) as e:
            raise ConfigError(f"cannot expand {template!r}: missing field {e}") from None

    def _date(self, date: DateLike) -> datetime.datetime:
        if isinstance(date, str):
            try:
                date = dateutil.parser.parse(date)
            except (ValueError, OverflowError) as e:
                raise ValueError(f"cannot parse date {date!r}: {e}") from e
        if not isinstance(date, datetime.datetime):
            date = datetime.datetime(date.year, date.month, date.day)
        if date.tzinfo is None:
            tz = pytz.timezone(self.timezone) if self.timezone else pytz.utc
            date = tz.localize(date)
        return date

    def date_fields(self, date: DateLike) -> dict[str, str]:
        date = self._date(date)
        return {
            "year": f"{date.year:04d}",
            "month": f"{date.month:02d}",
            "day": f"{date.day:02d}",
        }

    def permalink_for(self, title: str, date: DateLike, **kw: Any) -> str:
        """
        Return the site path of a post
        """
        values = dict(kw)
        values.update(self.date_fields(date))
        values["title"] = slugify(title)
        return self._link(self._expand(self.permalink, **values))

    def tag_link(self, tag: str) -> str:
        return self._link(self._expand(self.taglink, tag=slugify(tag)))

    def calendar_link(self, year: int, month: Optional[int] = None, day: Optional[int] = None) -> str:
        """
        Return the link to the calendar page of a year, month or day
        """
        if day is not None and month is None:
            raise ValueError("calendar_link: day given without month")
        values = {"year": f"{year:04d}"}
        if month is None:
            template = self.year_link
        else:
            values["month"] = f"{month:02d}"
            if day is None:
                template = self.month_link
            else:
                values["day"] = f"{day:02d}"
                template = self.day_link
        return self._link(self._expand(template, **values))

    def page_link_for(self, base: str, num: int) -> str:
        """
        Return the link to page ``num`` of a paginated listing at ``base``.

        Page 1 is the listing itself.
        """
        if not self.paginate:
            raise ConfigError("pagination is not enabled for the blog")
        if num < 1:
            raise ValueError(f"page number {num} should be 1 or more")
        if num == 1:
            return base
        base_dir = base.rsplit("/", 1)[0] if base.endswith(".html") else base.rstrip("/")
        return base_dir + "/" + self._expand(self.page_link, num=num)

    def paginate_items(self, items: list[Any]) -> list[list[Any]]:
        """
        Split a listing into pages, or return it as a single page if
        pagination is disabled
        """
        if not self.paginate:
            return [items]
        return [items[i:i + self.per_page] for i in range(0, len(items), self.per_page)] or [[]]

    def _source_re(self) -> re.Pattern:
        parts = ["^"]
        seen = set()
        for literal, name, spec, conv in string.Formatter().parse(self.sources):
            parts.append(re.escape(literal))
            if name is None:
                continue
            if name in seen:
                parts.append(f"(?P={name})")
            else:
                seen.add(name)
                parts.append(f"(?P<{name}>{SOURCE_FIELD_RE.get(name, r'[^/]+?')})")
        # Allow template engine extensions after the matched name
        parts.append(r"(?:\.[^/]+)*$")
        return re.compile("".join(parts))

    def match_source(self, relpath: str) -> Optional[dict[str, str]]:
        """
        Match a source file path against the sources template.

        Returns the fields parsed from the path, or None if it is not a blog
        post source.
        """
        relpath = relpath.lstrip("/")
        if self.prefix:
            prefix = self.prefix.strip("/") + "/"
            if not relpath.startswith(prefix):
                return None
            relpath = relpath[len(prefix):]
        mo = self._source_re().match(relpath)
        if mo is None:
            return None
        return mo.groupdict()

    def summary(self, text: str) -> str:
        """
        Return the summary of a post: the text before the summary separator if
        there is one, else its beginning cut at a word boundary
        """
        if self.summary_separator:
            head, sep, tail = text.partition(self.summary_separator)
            if sep:
                return head.rstrip()
        if len(text) <= self.summary_length:
            return text
        cut = text[:self.summary_length]
        if not text[self.summary_length].isspace() and " " in cut:
            cut = cut.rsplit(" ", 1)[0]
        return cut.rstrip()

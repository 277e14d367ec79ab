from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .errors import ConfigError
from .utils import FrozenMap, dump_data, freeze

log = logging.getLogger("markup")

# Markdown engines we know how to configure
MARKDOWN_ENGINES = ("markdown",)

# Syntax highlighters we know how to configure
SYNTAX_ENGINES = ("pygments",)

# Options understood in settings.MARKDOWN, and the python-markdown extension
# that implements each
MARKDOWN_OPTIONS = {
    "fenced_code_blocks": "markdown.extensions.fenced_code",
    "smartypants": "markdown.extensions.smarty",
    "tables": "markdown.extensions.tables",
    "footnotes": "markdown.extensions.footnotes",
}


@dataclass(frozen=True)
class SyntaxConfig:
    """
    Syntax highlighting of code blocks
    """
    engine: str = "pygments"
    css_class: str = "highlight"
    line_numbers: bool = False
    guess_lang: bool = False

    def __post_init__(self):
        if self.engine not in SYNTAX_ENGINES:
            raise ConfigError(
                f"unknown syntax highlighter {self.engine!r}: use one of {', '.join(SYNTAX_ENGINES)}")

    @classmethod
    def from_settings(cls, settings) -> "SyntaxConfig":
        try:
            return cls(**(settings.SYNTAX or {}))
        except TypeError as e:
            raise ConfigError(f"invalid SYNTAX settings: {e}") from None

    def extension_config(self) -> dict[str, Any]:
        return {
            "css_class": self.css_class,
            "linenums": self.line_numbers,
            "guess_lang": self.guess_lang,
        }

    def stylesheet(self, style: str = "default") -> str:
        """
        Return the CSS for highlighted code, as generated by pygments
        """
        from pygments.formatters import HtmlFormatter
        from pygments.util import ClassNotFound
        try:
            formatter = HtmlFormatter(style=style)
        except ClassNotFound:
            raise ConfigError(f"unknown pygments style {style!r}") from None
        return formatter.get_style_defs("." + self.css_class)


@dataclass(frozen=True)
class MarkdownConfig:
    engine: str = "markdown"
    options: Mapping[str, bool] = field(default_factory=FrozenMap)

    def __post_init__(self):
        if self.engine not in MARKDOWN_ENGINES:
            raise ConfigError(
                f"unknown markdown engine {self.engine!r}: use one of {', '.join(MARKDOWN_ENGINES)}")
        for name, value in self.options.items():
            if name not in MARKDOWN_OPTIONS:
                raise ConfigError(f"unknown markdown option {name!r}")
            if not isinstance(value, bool):
                raise ConfigError(f"markdown option {name!r} should be true or false")
        object.__setattr__(self, "options", freeze(self.options))

    @classmethod
    def from_settings(cls, settings) -> "MarkdownConfig":
        return cls(engine=settings.MARKDOWN_ENGINE, options=dict(settings.MARKDOWN or {}))

    @property
    def fenced_code_blocks(self) -> bool:
        return self.options.get("fenced_code_blocks", False)

    @property
    def smartypants(self) -> bool:
        return self.options.get("smartypants", False)

    def extensions(self) -> list[str]:
        return [MARKDOWN_OPTIONS[name] for name, enabled in self.options.items() if enabled]


@dataclass(frozen=True)
class MarkupConfig:
    """
    Markup engines used to render site sources
    """
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    syntax: SyntaxConfig = field(default_factory=SyntaxConfig)
    org_engine: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "MarkupConfig":
        return cls(
            markdown=MarkdownConfig.from_settings(settings),
            syntax=SyntaxConfig.from_settings(settings),
            org_engine=settings.ORG_ENGINE,
        )

    def markdown_extensions(self) -> tuple[list[str], dict[str, dict[str, Any]]]:
        """
        Return the python-markdown extensions and their configuration
        """
        extensions = self.markdown.extensions()
        extensions.append("markdown.extensions.codehilite")
        configs = {
            "markdown.extensions.codehilite": self.syntax.extension_config(),
        }
        return extensions, configs

    def make_markdown(self):
        """
        Create a python-markdown renderer with this configuration
        """
        import markdown
        extensions, configs = self.markdown_extensions()
        log.debug("markdown extensions: %r", extensions)
        return markdown.Markdown(
            extensions=extensions,
            extension_configs=configs,
            output_format="html",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "markdown": {"engine": self.markdown.engine, "options": dump_data(self.markdown.options)},
            "syntax": {
                "engine": self.syntax.engine,
                "css_class": self.syntax.css_class,
                "line_numbers": self.syntax.line_numbers,
                "guess_lang": self.syntax.guess_lang,
            },
            "org_engine": self.org_engine,
        }

from __future__ import annotations

import logging
import os

from ..postcss import PostCSSPipeline, render_config_js, write_config
from .command import ProjectCommand, register

log = logging.getLogger("postcss")


@register
class Postcss(ProjectCommand):
    "Write postcss.config.js with the PostCSS plugins for each NODE_ENV"

    @classmethod
    def add_subparser(cls, subparsers):
        parser = super().add_subparser(subparsers)
        parser.add_argument("-o", "--output", action="store",
                            help="file to write (default: postcss.config.js in the project root;"
                                 " use - for standard output)")
        return parser

    def run(self) -> None:
        # Resolve first, to validate the whole configuration
        self.resolve()
        development = PostCSSPipeline.from_settings(self.settings, production=False)
        production = PostCSSPipeline.from_settings(self.settings, production=True)
        if self.args.output == "-":
            print(render_config_js(development, production), end="")
            return
        output = self.args.output or os.path.join(self.settings.PROJECT_ROOT, "postcss.config.js")
        write_config(output, development, production)

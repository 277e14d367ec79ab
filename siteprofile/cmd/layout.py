from __future__ import annotations

from .command import ProjectCommand, register


@register
class Layout(ProjectCommand):
    "Show the layout used to render the given site paths"

    @classmethod
    def add_subparser(cls, subparsers):
        parser = super().add_subparser(subparsers)
        parser.add_argument("--path", action="append", dest="paths", required=True,
                            help="site path to look up (can be given multiple times)")
        return parser

    def run(self) -> None:
        config = self.resolve()
        for path in self.args.paths:
            layout = config.layout_for(path)
            print(f"{path}\t{layout if layout is not None else '(none)'}")

from __future__ import annotations

import logging
import os

from ..bundler import ExternalPipeline
from ..plugins import Plugin
from .command import Fail, ProjectCommand, register

log = logging.getLogger("bundle")


@register
class Bundle(ProjectCommand):
    "Run the front-end asset bundler: once for build, in watch mode for development"

    def run(self) -> None:
        config = self.resolve()
        pipeline = ExternalPipeline(config.bundler, cwd=self.settings.PROJECT_ROOT)
        if config.bundler.production:
            pipeline.run()
            return

        livereload = config.profile.get(Plugin.LIVERELOAD)
        with pipeline:
            if livereload is None:
                pipeline.watch(lambda changed: log.info("rebuilt: %s", ", ".join(changed)))
            else:
                self.serve(pipeline, livereload.parameters)

    def serve(self, pipeline: ExternalPipeline, params) -> None:
        try:
            import livereload
        except ImportError:
            raise Fail("Please install the python3 livereload module to use this function.")

        class Server(livereload.Server):
            def _setup_logging(self):
                # Keep existing logging setup
                pass

        root = pipeline.source_dir
        os.makedirs(root, exist_ok=True)

        server = Server()
        log.info("watching changes on %s", root)
        server.watch(root, delay=pipeline.invocation.latency_ms / 1000, ignore=self._ignore(params))
        server.serve(root=root, host=params.get("host", "localhost"), port=params.get("port", 35729))

    def _ignore(self, params):
        patterns = params.get("ignore")
        if not patterns:
            return None

        import fnmatch

        def ignore(path: str) -> bool:
            return any(fnmatch.fnmatch(path, p) for p in patterns)
        return ignore

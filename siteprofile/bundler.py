from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .environment import NodeEnv
from .errors import ConfigError

log = logging.getLogger("bundler")

# env(1) options that take the following word as their value
ENV_OPTIONS_WITH_VALUE = ("-u", "--unset", "-C", "--chdir")


class MissingExternalTool(RuntimeError):
    """
    The bundler executable cannot be found
    """
    def __init__(self, name: str, command: str):
        super().__init__(f"{name}: not found in PATH (needed to run {command!r})")
        self.name = name
        self.command = command


class ExternalPipelineError(RuntimeError):
    """
    The bundler exited with an error
    """
    def __init__(self, command: str, returncode: int):
        super().__init__(f"{command!r} exited with status {returncode}")
        self.command = command
        self.returncode = returncode


@dataclass(frozen=True)
class BundlerInvocation:
    """
    How to run the external bundler for one build mode
    """
    name: str
    command: str
    source_dir: str
    latency_ms: int
    production: bool

    @property
    def node_env(self) -> NodeEnv:
        return NodeEnv.PRODUCTION if self.production else NodeEnv.DEVELOPMENT

    @classmethod
    def from_settings(cls, settings, production: bool) -> "BundlerInvocation":
        mode = "production" if production else "development"
        template = settings.BUNDLER_COMMANDS.get(mode)
        if not template:
            raise ConfigError(f"BUNDLER_COMMANDS has no {mode!r} command")
        latency = settings.BUNDLER_LATENCY_MS
        if not isinstance(latency, int) or isinstance(latency, bool) or latency <= 0:
            raise ConfigError("BUNDLER_LATENCY_MS should be a positive number of milliseconds")
        return cls(
            name=settings.BUNDLER_NAME,
            command=settings.expand(template),
            source_dir=settings.BUNDLER_SOURCE,
            latency_ms=latency,
            production=production,
        )

    def argv(self) -> list[str]:
        try:
            return shlex.split(self.command)
        except ValueError as e:
            raise ConfigError(f"{self.name}: cannot parse command {self.command!r}: {e}") from None

    def executable(self) -> str:
        """
        Return the program that runs the bundler, skipping env and variable
        assignments
        """
        args = iter(self.argv())
        arg = next(args, None)
        if arg == "env":
            for arg in args:
                if arg in ENV_OPTIONS_WITH_VALUE:
                    # Skip the option value
                    next(args, None)
                elif not arg.startswith("-") and "=" not in arg:
                    return arg
        elif arg is not None:
            for arg in [arg, *args]:
                if "=" not in arg:
                    return arg
        raise ConfigError(f"{self.name}: command {self.command!r} does not run any program")

    def to_dict(self):
        return {
            "name": self.name,
            "command": self.command,
            "source_dir": self.source_dir,
            "latency_ms": self.latency_ms,
            "production": self.production,
        }


class ExternalPipeline:
    """
    Run the bundler as a subprocess, and track the files it writes
    """
    def __init__(self, invocation: BundlerInvocation, cwd: str):
        self.invocation = invocation
        self.cwd = cwd
        self.proc: Optional[subprocess.Popen] = None
        # mtimes of the output files seen at the last poll
        self.seen: dict[str, int] = {}

    @property
    def source_dir(self) -> str:
        return os.path.join(self.cwd, self.invocation.source_dir)

    def env(self) -> dict[str, str]:
        env = dict(os.environ)
        env["NODE_ENV"] = self.invocation.node_env.value
        return env

    def check(self) -> str:
        """
        Make sure the bundler can be run, returning the path to its executable
        """
        name = self.invocation.executable()
        path = shutil.which(name)
        if path is None:
            raise MissingExternalTool(name, self.invocation.command)
        return path

    def run(self) -> None:
        """
        Run the bundler to completion
        """
        self.check()
        log.info("%s: running %s", self.invocation.name, self.invocation.command)
        res = subprocess.run(self.invocation.argv(), cwd=self.cwd, env=self.env())
        if res.returncode != 0:
            raise ExternalPipelineError(self.invocation.command, res.returncode)

    def start(self) -> subprocess.Popen:
        """
        Start the bundler in the background
        """
        if self.proc is not None:
            raise RuntimeError(f"{self.invocation.name} is already running")
        self.check()
        log.info("%s: starting %s", self.invocation.name, self.invocation.command)
        self.proc = subprocess.Popen(self.invocation.argv(), cwd=self.cwd, env=self.env())
        return self.proc

    def stop(self, timeout: float = 5) -> None:
        if self.proc is None:
            return
        if self.proc.poll() is None:
            log.info("%s: stopping", self.invocation.name)
            self.proc.terminate()
            try:
                self.proc.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                log.warning("%s: did not stop in %.1fs, killing it", self.invocation.name, timeout)
                self.proc.kill()
                self.proc.wait()
        self.proc = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def poll(self) -> list[str]:
        """
        Return the paths, relative to source_dir, of output files that are new
        or changed since the previous poll
        """
        root = self.source_dir
        current: dict[str, int] = {}
        if os.path.isdir(root):
            for dirpath, dirnames, filenames in os.walk(root):
                for fname in filenames:
                    abspath = os.path.join(dirpath, fname)
                    try:
                        current[os.path.relpath(abspath, root)] = os.stat(abspath).st_mtime_ns
                    except FileNotFoundError:
                        # Removed while we were scanning
                        continue

        changed = sorted(
                relpath for relpath, mtime in current.items()
                if self.seen.get(relpath) != mtime)
        self.seen = current
        return changed

    def watch(self, callback: Callable[[list[str]], None],
              should_stop: Callable[[], bool] = lambda: False) -> None:
        """
        Call callback with the list of changed output files, every time the
        bundler writes something, until should_stop returns True or the
        bundler exits
        """
        delay = self.invocation.latency_ms / 1000
        while not should_stop():
            changed = self.poll()
            if changed:
                log.debug("%s: %d changed files", self.invocation.name, len(changed))
                callback(changed)
            if self.proc is not None and self.proc.poll() is not None:
                log.warning("%s: exited with status %d", self.invocation.name, self.proc.returncode)
                break
            time.sleep(delay)

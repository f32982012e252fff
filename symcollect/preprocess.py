#!/usr/bin/env python3

import logging
import shlex
import subprocess
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from symcollect.errors import PreprocessorError


class Preprocessor:
    """Runs the C preprocessor on a source file and streams its output."""

    def __init__(
        self,
        compiler: str = "gcc",
        compiler_flags: str | None = None,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ):
        self.compiler = compiler
        self.compiler_flags = compiler_flags
        self.timeout = timeout
        self.log = logger or logging.getLogger(__name__)

    def command(self, path: Path | str) -> list[str]:
        """Shell command producing the macro-expanded text of ``path``.

        The flags are passed through the shell unquoted so they can carry
        several options.
        """
        parts = [self.compiler]
        if self.compiler_flags:
            parts.append(self.compiler_flags)
        parts += ["-E", shlex.quote(str(path))]
        return ["/bin/sh", "-c", " ".join(parts)]

    @contextmanager
    def open(self, path: Path | str) -> Iterator[IO[bytes]]:
        """Yield the preprocessor's stdout; wait for the process on exit.

        The exit status is only logged. With a timeout set, the process is
        killed once it has run that long, which ends its output stream.
        """
        command = self.command(path)
        self.log.debug(f"running {command[-1]!r}")
        try:
            process = subprocess.Popen(command, stdout=subprocess.PIPE)
        except OSError as e:
            raise PreprocessorError(f"failed to run preprocessor for {path}: {e}") from e

        timed_out = threading.Event()

        def expire():
            timed_out.set()
            process.kill()

        timer = None
        if self.timeout is not None:
            timer = threading.Timer(self.timeout, expire)
            timer.daemon = True
            timer.start()

        assert process.stdout is not None
        try:
            yield process.stdout
        finally:
            process.stdout.close()
            status = process.wait()
            if timer is not None:
                timer.cancel()
            if timed_out.is_set():
                self.log.warning(f"preprocessor for {path} killed after {self.timeout}s")
            self.log.debug(f"preprocessor for {path} exited with status {status}")

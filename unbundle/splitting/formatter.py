"""Formatting pass applied to every synthesized Go file.

Each output file gets the import block of the whole compilation unit, so the
formatter is what turns the raw output into valid Go: ``goimports`` removes the
imports a file does not use and ``gofmt`` normalizes layout.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Protocol

from unbundle.config import FormatterKind
from unbundle.exceptions import FormattingError

logger = logging.getLogger(__name__)


class SourceFormatter(Protocol):
    """Formats the raw content of one output file."""

    def format(self, filename: str, source: bytes) -> bytes:
        """Return the formatted ``source`` of ``filename``.

        Raises:
            FormattingError: If the source is not valid Go.
        """
        ...


class CommandFormatter:
    """Pipes source through an external formatter such as ``goimports``.

    Example:
        >>> formatter = CommandFormatter(['gofmt'])
        >>> formatter.format('widget.go', b'package w\\nfunc  F( ) {}\\n')
        b'package w\\n\\nfunc F() {}\\n'
    """

    def __init__(self, command: list[str], timeout: float | None = None):
        self.command = list(command)
        self.timeout = timeout

    def format(self, filename: str, source: bytes) -> bytes:
        executable = shutil.which(self.command[0])
        if executable is None:
            raise FormattingError(filename, f'{self.command[0]!r} not found in PATH')

        try:
            result = subprocess.run(
                [executable, *self.command[1:]],
                input=source,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise FormattingError(filename, cause=e) from e

        if result.returncode != 0:
            # Diagnostics name '<standard input>'; report the real file instead.
            stderr = result.stderr.decode('utf-8', errors='replace').strip()
            raise FormattingError(
                filename, stderr.replace('<standard input>', filename)
            )
        return result.stdout


class PassthroughFormatter:
    """Leaves the source untouched."""

    def format(self, filename: str, source: bytes) -> bytes:
        logger.debug(f'Skipping formatting for {filename}')
        return source


def get_formatter(kind: FormatterKind | str) -> SourceFormatter:
    """Return the formatter configured by ``kind``."""
    kind = FormatterKind(kind)
    if kind is FormatterKind.GOIMPORTS:
        return CommandFormatter(['goimports'])
    if kind is FormatterKind.GOFMT:
        return CommandFormatter(['gofmt'])
    return PassthroughFormatter()

"""Writing the buckets of an output bundle to the destination package folder.

This module prepares the destination folder (removing and recreating it),
turns bucket keys into snake case file names, runs the formatting pass over
every bucket and writes the result.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from upath import UPath

from unbundle.exceptions import OutputError
from unbundle.splitting.bundle import OutputBundle
from unbundle.splitting.formatter import SourceFormatter
from unbundle.utils import snake_case

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WrittenFile:
    """A bucket that was persisted.

    Attributes:
        key: The bucket key the file was produced from.
        path: The path of the written file.
    """

    key: str
    path: Path | UPath


def check_destination(destination: str | Path | UPath) -> None:
    """Ensure the destination root exists.

    Raises:
        OutputError: If it does not, naming the working directory it was
            looked up from.
    """
    if not UPath(destination).is_dir():
        raise OutputError(
            str(destination),
            f"looking for folder named '{destination}' in '{os.getcwd()}'",
        )


class OutputWriter:
    """Writes an ``OutputBundle`` as one Go file per bucket.

    Example:
        >>> writer = OutputWriter('unbundled', 'http', CommandFormatter(['goimports']))
        >>> writer.prepare()
        >>> writer.write(bundle)
        [WrittenFile(key='public_fns', path=UPath('unbundled/http/public_fns.go'))]
    """

    def __init__(
        self,
        destination: str | Path | UPath,
        package_dir: str,
        formatter: SourceFormatter,
        extension: str = '.go',
        clean_destination: bool = True,
        confirm_cleanup: Callable[[UPath], bool] | None = None,
    ):
        """Initialize the writer.

        Args:
            destination: Existing root directory of the output.
            package_dir: Folder created inside ``destination`` for the files.
            formatter: Formatting pass applied to every file before writing.
            extension: Extension of the written files.
            clean_destination: Whether an existing package folder may be removed.
            confirm_cleanup: Optional hook asked before removing an existing
                package folder; returning False aborts the run.
        """
        self.destination = UPath(destination)
        self.package_dir = package_dir
        self.formatter = formatter
        self.extension = extension
        self.clean_destination = clean_destination
        self.confirm_cleanup = confirm_cleanup

    @property
    def output_dir(self) -> UPath:
        return self.destination / self.package_dir

    def prepare(self) -> UPath:
        """Remove the package folder if present and create it empty.

        Returns:
            The package folder.

        Raises:
            OutputError: If the destination root is missing, removal was
                refused, or a filesystem operation failed.
        """
        check_destination(self.destination)
        output_dir = self.output_dir

        if output_dir.exists():
            if not self._cleanup_allowed(output_dir):
                raise OutputError(str(output_dir), 'destination already exists')
            logger.info(f'Removing existing {output_dir}')
            try:
                if output_dir.is_dir():
                    shutil.rmtree(output_dir)
                else:
                    output_dir.unlink()
            except OSError as e:
                raise OutputError(str(output_dir), e) from e

        try:
            output_dir.mkdir()
        except OSError as e:
            raise OutputError(str(output_dir), e) from e
        return output_dir

    def _cleanup_allowed(self, output_dir: UPath) -> bool:
        if not self.clean_destination:
            return False
        if self.confirm_cleanup is None:
            return True
        return self.confirm_cleanup(output_dir)

    def file_name(self, key: str) -> str:
        return snake_case(key) + self.extension

    def write(self, bundle: OutputBundle) -> list[WrittenFile]:
        """Format and write every bucket of ``bundle``.

        Raises:
            FormattingError: If the formatter rejects a bucket.
            OutputError: If a file cannot be written, or two buckets map to
                the same file name.
        """
        written: list[WrittenFile] = []
        owners: dict[str, str] = {}
        for bucket in bundle:
            file_name = self.file_name(bucket.key)
            if file_name in owners:
                raise OutputError(
                    str(self.output_dir / file_name),
                    f'buckets {owners[file_name]!r} and {bucket.key!r} '
                    f'share the file name',
                )
            owners[file_name] = bucket.key
            content = self.formatter.format(
                file_name, bucket.content.encode('utf-8')
            )
            path = self.output_dir / file_name
            logger.info(f'Writing {bucket.key!r} into {file_name!r}')
            try:
                path.write_bytes(content)
            except OSError as e:
                raise OutputError(str(path), e) from e
            written.append(WrittenFile(key=bucket.key, path=path))
        return written

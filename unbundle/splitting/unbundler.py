"""Orchestration of a complete unbundle run.

The ``Unbundler`` loads one compilation unit, classifies its imports and
declarations into an output bundle, resolves bucket collisions and writes one
Go file per bucket into the destination package folder.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from upath import UPath

from unbundle.config import UnbundleConfig
from unbundle.exceptions import ConfigurationError
from unbundle.splitting.bundle import OutputBundle, resolve_collisions
from unbundle.splitting.classifier import BucketNames, DeclarationClassifier
from unbundle.splitting.formatter import SourceFormatter, get_formatter
from unbundle.splitting.header import HeaderSynthesizer
from unbundle.splitting.imports import ImportClassifier
from unbundle.splitting.source import CompilationUnit, GoSourceLoader
from unbundle.splitting.writer import (
    OutputWriter,
    WrittenFile,
    check_destination,
)

logger = logging.getLogger(__name__)


class Unbundler:
    """Splits one Go file or package into several smaller files.

    Attributes:
        config: The run configuration; ``config.source`` must be set.
        loader: Parses the compilation unit.
        formatter: Formatting pass applied to every output file.

    Example:
        >>> from unbundle.config import UnbundleConfig
        >>> config = UnbundleConfig(source='./server', destination='unbundled')
        >>> written = Unbundler(config).run()
        >>> [file.path.name for file in written]
        ['public_fns.go', 'server.go', 'private_fns.go', 'defs.go']
    """

    def __init__(
        self,
        config: UnbundleConfig,
        loader: GoSourceLoader | None = None,
        formatter: SourceFormatter | None = None,
        confirm_cleanup: Callable[[UPath], bool] | None = None,
    ):
        """Initialize the unbundler.

        Args:
            config: Configuration of the run.
            loader: Optional custom source loader.
            formatter: Optional formatter overriding ``config.formatter``.
            confirm_cleanup: Optional hook asked before an existing destination
                package folder is removed.
        """
        if not config.source:
            raise ConfigurationError('No package or file to unbundle', field='source')
        self.config = config
        self.loader = loader or GoSourceLoader()
        self.formatter = formatter or get_formatter(config.formatter)
        self.confirm_cleanup = confirm_cleanup

    @property
    def bucket_names(self) -> BucketNames:
        return BucketNames(
            public_functions=self.config.public_functions_file,
            private_functions=self.config.private_functions_file,
            definitions=self.config.definitions_file,
        )

    def package_name(self, unit: CompilationUnit) -> str:
        return self.config.package_name or unit.package_name

    def load(self) -> CompilationUnit:
        return self.loader.load(self.config.source)

    def split(self, unit: CompilationUnit) -> OutputBundle:
        """Partition ``unit`` into a collision-free output bundle."""
        imports = ImportClassifier(
            import_map=self.config.import_map, sort=self.config.sort_imports
        ).classify(unit.imports())
        logger.debug(
            f'Found {len(imports.standard)} standard and '
            f'{len(imports.external)} external imports'
        )

        header = HeaderSynthesizer(self.package_name(unit)).render(imports)
        classifier = DeclarationClassifier.for_unit(unit, self.bucket_names, header)
        return resolve_collisions(classifier.classify(unit))

    def writer(self, package_dir: str) -> OutputWriter:
        return OutputWriter(
            destination=self.config.destination,
            package_dir=package_dir,
            formatter=self.formatter,
            extension=self.config.extension,
            clean_destination=self.config.clean_destination,
            confirm_cleanup=self.confirm_cleanup,
        )

    def run(self) -> list[WrittenFile]:
        """Load, split and write the configured unit.

        The destination root is checked before anything is parsed; the
        package folder is only replaced once the split succeeded.

        Returns:
            The written files in bundle order.
        """
        logger.info(
            f'Package/File: {self.config.source!r}, '
            f'target package: {self.config.package_name!r}, '
            f'destination: {self.config.destination!r}'
        )
        check_destination(self.config.destination)

        unit = self.load()
        if not unit.is_package:
            logger.info(f'Source file: {unit.base_name!r}')
        bundle = self.split(unit)

        writer = self.writer(self.package_name(unit))
        writer.prepare()
        return writer.write(bundle)

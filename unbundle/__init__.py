"""unbundle - Split large Go source files into smaller, coherent files.

unbundle reads a single Go file or a whole package and writes its
declarations back out as several files: exported functions, unexported
functions, one file per type together with its methods, and a file for
``const`` and ``var`` declarations.

Quick Start:
    >>> from unbundle import UnbundleConfig, Unbundler
    >>>
    >>> config = UnbundleConfig(source='./server', package_name='server')
    >>> Unbundler(config).run()

CLI Usage:
    $ unbundle --dst unbundled --newpkg server ./server
    $ unbundle --types types ./server/handlers.go
"""

from unbundle.config import FormatterKind, UnbundleConfig, get_config
from unbundle.exceptions import (
    CollisionWarning,
    ConfigurationError,
    FormattingError,
    LoadError,
    OutputError,
    StructuralInvariantError,
    UnbundleError,
)
from unbundle.splitting import GoSourceLoader, OutputBundle, Unbundler

__all__ = [
    # Main classes
    'Unbundler',
    'GoSourceLoader',
    'OutputBundle',
    # Configuration
    'FormatterKind',
    'UnbundleConfig',
    'get_config',
    # Exceptions
    'UnbundleError',
    'LoadError',
    'StructuralInvariantError',
    'FormattingError',
    'OutputError',
    'ConfigurationError',
    'CollisionWarning',
]

try:
    from importlib.metadata import PackageNotFoundError, version as _version

    __version__ = _version('unbundle')
except PackageNotFoundError:
    __version__ = 'unknown'

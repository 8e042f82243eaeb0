"""Declaration partitioning and file synthesis for Go compilation units.

This package splits a Go file or package into smaller files, grouping
declarations by role and by the type they belong to.

Classes:
    GoSourceLoader: Parses a file or package into a CompilationUnit.
    ImportClassifier: Splits imports into standard and external groups.
    DeclarationClassifier: Assigns declarations to output buckets.
    HeaderSynthesizer: Renders the package clause and import block.
    OutputWriter: Formats and writes buckets to the destination folder.
    Unbundler: Runs the whole pipeline for one configured unit.
"""

from unbundle.splitting.bundle import (
    Bucket,
    Collision,
    OutputBundle,
    resolve_collisions,
)
from unbundle.splitting.classifier import BucketNames, DeclarationClassifier
from unbundle.splitting.formatter import (
    CommandFormatter,
    PassthroughFormatter,
    SourceFormatter,
    get_formatter,
)
from unbundle.splitting.header import HeaderSynthesizer
from unbundle.splitting.imports import (
    ClassifiedImports,
    ImportClassifier,
    is_standard_import_path,
)
from unbundle.splitting.source import (
    CompilationUnit,
    Declaration,
    FunctionDecl,
    GoSourceLoader,
    ImportSpec,
    MalformedReceiver,
    OtherDecl,
    Receiver,
    SourceFile,
    TypeDecl,
)
from unbundle.splitting.unbundler import Unbundler
from unbundle.splitting.writer import OutputWriter, WrittenFile, check_destination

__all__ = [
    'Bucket',
    'BucketNames',
    'ClassifiedImports',
    'Collision',
    'CommandFormatter',
    'CompilationUnit',
    'Declaration',
    'DeclarationClassifier',
    'FunctionDecl',
    'GoSourceLoader',
    'HeaderSynthesizer',
    'ImportClassifier',
    'ImportSpec',
    'MalformedReceiver',
    'OtherDecl',
    'OutputBundle',
    'OutputWriter',
    'PassthroughFormatter',
    'Receiver',
    'SourceFile',
    'SourceFormatter',
    'TypeDecl',
    'Unbundler',
    'WrittenFile',
    'check_destination',
    'get_formatter',
    'is_standard_import_path',
    'resolve_collisions',
]

"""Declaration classification into output buckets.

This module decides which output file every top-level declaration of a
compilation unit goes to:

- free functions go to the public or private functions bucket,
- methods go to the bucket named after their receiver type,
- type declarations go to the bucket named after the type,
- everything else (``const``/``var``) goes to the definitions bucket.

For single-file units the three fixed role buckets are suffixed with the file's
base name, so splitting several files into one folder does not clash.
"""

from __future__ import annotations

from dataclasses import dataclass

from unbundle.exceptions import StructuralInvariantError
from unbundle.splitting.bundle import OutputBundle
from unbundle.splitting.source import (
    CompilationUnit,
    Declaration,
    FunctionDecl,
    MalformedReceiver,
    OtherDecl,
    Receiver,
    TypeDecl,
)

DECLARATION_SEPARATOR = '\n\n'


@dataclass(frozen=True)
class BucketNames:
    """Keys of the fixed role buckets."""

    public_functions: str = 'public_fns'
    private_functions: str = 'private_fns'
    definitions: str = 'defs'

    def with_suffix(self, suffix: str) -> BucketNames:
        return BucketNames(
            public_functions=f'{self.public_functions}_{suffix}',
            private_functions=f'{self.private_functions}_{suffix}',
            definitions=f'{self.definitions}_{suffix}',
        )


class DeclarationClassifier:
    """Assigns declarations to buckets and fills an ``OutputBundle``.

    Example:
        >>> classifier = DeclarationClassifier(BucketNames(), header)
        >>> bundle = classifier.classify(unit)
        >>> bundle.keys()
        ['public_fns', 'Widget', 'private_fns', 'defs']
    """

    def __init__(
        self,
        names: BucketNames,
        header: str,
        suffix: str | None = None,
    ):
        """Initialize the classifier.

        Args:
            names: Keys of the fixed role buckets.
            header: Preamble written once at the top of every bucket.
            suffix: Suffix appended to the role bucket keys, used when
                splitting a single file.
        """
        self.names = names.with_suffix(suffix) if suffix else names
        self.header = header

    @classmethod
    def for_unit(
        cls, unit: CompilationUnit, names: BucketNames, header: str
    ) -> DeclarationClassifier:
        """Create a classifier applying the single-file suffix rule to ``unit``."""
        suffix = None if unit.is_package else unit.base_name
        return cls(names, header, suffix=suffix)

    def bucket_key(self, decl: Declaration) -> str:
        """Return the key of the bucket ``decl`` belongs to.

        Raises:
            StructuralInvariantError: If a method's receiver clause is malformed.
        """
        if isinstance(decl, FunctionDecl):
            receiver = decl.receiver
            if receiver is None:
                if decl.is_exported:
                    return self.names.public_functions
                return self.names.private_functions
            if isinstance(receiver, Receiver):
                return receiver.type_name
            if isinstance(receiver, MalformedReceiver):
                raise StructuralInvariantError(decl.name, receiver.reason)
            raise TypeError(f'Unknown receiver {receiver!r}')
        if isinstance(decl, TypeDecl):
            return decl.name
        if isinstance(decl, OtherDecl):
            return self.names.definitions
        raise TypeError(f'Unknown declaration {decl!r}')

    def classify(self, unit: CompilationUnit) -> OutputBundle:
        """Distribute every declaration of ``unit`` into buckets, in source order."""
        bundle = OutputBundle()
        for decl in unit.declarations():
            bundle.add(
                self.bucket_key(decl), self.header, decl.text + DECLARATION_SEPARATOR
            )
        return bundle

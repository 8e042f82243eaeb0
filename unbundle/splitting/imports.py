"""Import classification for synthesized Go files.

Every output file receives the union of the imports found across the whole
compilation unit; the formatting pass prunes the ones a file does not use.
This module gathers those imports into a standard library group and an
external group, with deduplication and optional path rewriting.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from unbundle.splitting.source import ImportSpec


@dataclass
class ClassifiedImports:
    """Import specs split into standard library and external groups."""

    standard: list[ImportSpec] = field(default_factory=list)
    external: list[ImportSpec] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.standard) + len(self.external)


def is_standard_import_path(path: str) -> bool:
    """Report whether ``path`` names a standard library package.

    The first path element of a non-standard package is a domain name, so it
    always contains a dot.
    """
    return '.' not in path.split('/', 1)[0]


class ImportClassifier:
    """Classifies and deduplicates the import specs of a compilation unit.

    Specs are keyed by their rendered ``alias "path"`` form, so the same path
    imported under two different names is kept twice.

    Example:
        >>> classifier = ImportClassifier()
        >>> imports = classifier.classify([
        ...     ImportSpec('fmt'),
        ...     ImportSpec('github.com/pkg/errors'),
        ...     ImportSpec('fmt'),
        ... ])
        >>> [spec.path for spec in imports.standard]
        ['fmt']
        >>> [spec.path for spec in imports.external]
        ['github.com/pkg/errors']
    """

    def __init__(
        self, import_map: Mapping[str, str] | None = None, sort: bool = False
    ):
        """Initialize the classifier.

        Args:
            import_map: Import paths to replace, e.g. deprecated package paths
                mapped to their successors.
            sort: Order each group by rendered spec instead of first-seen order.
        """
        self.import_map = dict(import_map or {})
        self.sort = sort

    def rewrite(self, spec: ImportSpec) -> ImportSpec:
        replacement = self.import_map.get(spec.path)
        if replacement is None:
            return spec
        return ImportSpec(path=replacement, alias=spec.alias)

    def classify(self, specs: Iterable[ImportSpec]) -> ClassifiedImports:
        """Split ``specs`` into deduplicated standard and external groups."""
        standard: dict[str, ImportSpec] = {}
        external: dict[str, ImportSpec] = {}

        for spec in specs:
            spec = self.rewrite(spec)
            group = standard if is_standard_import_path(spec.path) else external
            group.setdefault(spec.render(), spec)

        if self.sort:
            return ClassifiedImports(
                standard=[standard[key] for key in sorted(standard)],
                external=[external[key] for key in sorted(external)],
            )
        return ClassifiedImports(
            standard=list(standard.values()), external=list(external.values())
        )

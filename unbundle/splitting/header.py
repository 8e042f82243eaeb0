"""Package clause and import block rendering for synthesized Go files."""

from __future__ import annotations

from unbundle.splitting.imports import ClassifiedImports

# Go rejects keywords as package names.
RESERVED_PACKAGE_NAMES = {'type': 'types'}


class HeaderSynthesizer:
    """Renders the preamble shared by every file of a run.

    Example:
        >>> header = HeaderSynthesizer('widgets').render(imports)
        >>> print(header)
        package widgets
        <BLANKLINE>
        import (
            "fmt"
        <BLANKLINE>
            "github.com/pkg/errors"
        )
    """

    def __init__(self, package_name: str):
        self.package_name = RESERVED_PACKAGE_NAMES.get(package_name, package_name)

    def render(self, imports: ClassifiedImports) -> str:
        lines = [f'package {self.package_name}', '', 'import (']
        lines.extend(f'\t{spec.render()}' for spec in imports.standard)
        if imports.external:
            lines.append('')
        lines.extend(f'\t{spec.render()}' for spec in imports.external)
        lines.append(')')
        return '\n'.join(lines) + '\n\n'

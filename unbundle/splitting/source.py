"""Go source loading built on the tree-sitter Go grammar.

This module turns a compilation unit (one ``.go`` file or a package directory)
into ``SourceFile`` objects holding the top-level declarations and import
specs of every file. Parsing is purely syntactic: unresolved identifiers are
never an error, syntax errors always are.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from unbundle.exceptions import LoadError
from unbundle.utils import is_exported, source_base_name

logger = logging.getLogger(__name__)

GO_EXTENSION = '.go'

GO_LANGUAGE = Language(tree_sitter_go.language())


@dataclass(frozen=True)
class ImportSpec:
    """A single import spec: an import path with an optional local name."""

    path: str
    alias: str | None = None

    def render(self) -> str:
        """Render the spec as it appears inside an import block."""
        if self.alias:
            return f'{self.alias} "{self.path}"'
        return f'"{self.path}"'


@dataclass(frozen=True)
class Receiver:
    """The named type a method is attached to."""

    type_name: str
    is_pointer: bool = False


@dataclass(frozen=True)
class MalformedReceiver:
    """A receiver clause the classifier cannot attach to a type."""

    reason: str


@dataclass
class FunctionDecl:
    """A ``func`` declaration, with or without a receiver."""

    name: str
    text: str
    receiver: Receiver | MalformedReceiver | None = None

    @property
    def has_receiver(self) -> bool:
        return self.receiver is not None

    @property
    def is_exported(self) -> bool:
        return is_exported(self.name)


@dataclass
class TypeDecl:
    """A single type spec, rendered as a standalone ``type`` declaration."""

    name: str
    text: str


@dataclass
class OtherDecl:
    """Any other top-level declaration (``const`` or ``var`` blocks)."""

    kind: str
    text: str


Declaration = FunctionDecl | TypeDecl | OtherDecl


@dataclass
class SourceFile:
    """The imports and declarations of one parsed Go file."""

    path: Path
    package_name: str
    imports: list[ImportSpec] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)


@dataclass
class CompilationUnit:
    """A single Go file or a whole package, ready to be partitioned.

    Attributes:
        source: The file path or package identifier the unit was loaded from.
        package_name: The Go package name declared by the files.
        files: Parsed files in load order.
        is_package: False when the unit is a single file.
    """

    source: str
    package_name: str
    files: list[SourceFile] = field(default_factory=list)
    is_package: bool = True

    @property
    def base_name(self) -> str:
        """File name of a single-file unit without its extension."""
        return source_base_name(self.source)

    def declarations(self) -> Iterator[Declaration]:
        for source_file in self.files:
            yield from source_file.declarations

    def imports(self) -> Iterator[ImportSpec]:
        for source_file in self.files:
            yield from source_file.imports


def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode('utf-8')


def _unquote(literal: str) -> str:
    # Import paths are plain; raw and interpreted literals only differ in quotes.
    return literal[1:-1]


class GoSourceLoader:
    """Loads Go compilation units into ``CompilationUnit`` objects.

    Example:
        >>> loader = GoSourceLoader()
        >>> unit = loader.load('./server.go')
        >>> [decl.name for decl in unit.declarations() if hasattr(decl, 'name')]
        ['Server', 'NewServer', 'Serve']
    """

    def __init__(self, gopath: str | None = None, goroot: str | None = None):
        """Initialize the loader.

        Args:
            gopath: Override for ``$GOPATH`` when resolving package import paths.
            goroot: Override for ``$GOROOT`` when resolving package import paths.
        """
        self.gopath = gopath
        self.goroot = goroot
        self._parser = Parser(GO_LANGUAGE)

    def load(self, source: str) -> CompilationUnit:
        """Load a single ``.go`` file or a package.

        Raises:
            LoadError: If the unit cannot be found, read or parsed.
        """
        if source.endswith(GO_EXTENSION):
            return self.load_file(source)
        return self.load_package(source)

    def load_file(self, source: str) -> CompilationUnit:
        path = Path(source)
        if not path.is_file():
            raise LoadError(source, 'no such file')
        parsed = self.parse_file(path)
        return CompilationUnit(
            source=source,
            package_name=parsed.package_name,
            files=[parsed],
            is_package=False,
        )

    def load_package(self, source: str) -> CompilationUnit:
        directory = self.resolve_package(source)
        paths = sorted(
            path
            for path in directory.iterdir()
            if path.is_file()
            and path.suffix == GO_EXTENSION
            and not path.name.endswith('_test.go')
            and not path.name.startswith(('_', '.'))
        )
        if not paths:
            raise LoadError(source, f"no Go files in '{directory}'")

        files = [self.parse_file(path) for path in paths]
        package_names = sorted({parsed.package_name for parsed in files})
        if len(package_names) > 1:
            raise LoadError(
                source, f'found multiple packages: {", ".join(package_names)}'
            )

        logger.debug(f'Loaded {len(files)} files from {directory}')
        return CompilationUnit(
            source=source,
            package_name=package_names[0],
            files=files,
            is_package=True,
        )

    def resolve_package(self, source: str) -> Path:
        """Find the directory of a package given as a path or an import path."""
        candidate = Path(source)
        if candidate.is_dir():
            return candidate

        for root in self._search_roots():
            candidate = root / 'src' / source
            if candidate.is_dir():
                return candidate

        raise LoadError(source, 'cannot find package')

    def _search_roots(self) -> list[Path]:
        gopath = self.gopath or os.environ.get('GOPATH') or str(Path.home() / 'go')
        roots = [Path(entry) for entry in gopath.split(os.pathsep) if entry]
        goroot = self.goroot or os.environ.get('GOROOT')
        if goroot:
            roots.append(Path(goroot))
        return roots

    def parse_file(self, path: Path) -> SourceFile:
        try:
            source = path.read_bytes()
        except OSError as e:
            raise LoadError(str(path), cause=e) from e
        return self.parse_source(source, path)

    def parse_source(self, source: bytes, path: Path) -> SourceFile:
        """Parse Go source bytes into a ``SourceFile``.

        Raises:
            LoadError: If the source is not UTF-8, has a syntax error or has
                no package clause.
        """
        try:
            source.decode('utf-8')
        except UnicodeDecodeError as e:
            raise LoadError(str(path), 'invalid UTF-8', cause=e) from e

        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            raise LoadError(str(path), self._describe_error(root))

        parsed = SourceFile(path=path, package_name='')
        children = root.named_children
        for index, node in enumerate(children):
            if node.type == 'package_clause':
                parsed.package_name = _text(node.named_children[0], source)
            elif node.type == 'import_declaration':
                parsed.imports.extend(self._import_specs(node, source))
            elif node.type == 'function_declaration':
                parsed.declarations.append(
                    FunctionDecl(
                        name=_text(node.child_by_field_name('name'), source),
                        text=_attached_text(children, index, source),
                    )
                )
            elif node.type == 'method_declaration':
                parsed.declarations.append(
                    FunctionDecl(
                        name=_text(node.child_by_field_name('name'), source),
                        text=_attached_text(children, index, source),
                        receiver=self._receiver(node, source),
                    )
                )
            elif node.type == 'type_declaration':
                parsed.declarations.extend(
                    self._type_decls(children, index, source)
                )
            elif node.type in ('const_declaration', 'var_declaration'):
                parsed.declarations.append(
                    OtherDecl(
                        kind=node.type.removesuffix('_declaration'),
                        text=_attached_text(children, index, source),
                    )
                )

        if not parsed.package_name:
            raise LoadError(str(path), 'missing package clause')
        return parsed

    @staticmethod
    def _describe_error(root: Node) -> str:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == 'ERROR' or node.is_missing:
                row, column = node.start_point
                return f'syntax error at line {row + 1}, column {column + 1}'
            stack.extend(
                reversed(
                    [
                        child
                        for child in node.children
                        if child.has_error or child.is_missing
                    ]
                )
            )
        return 'syntax error'

    @staticmethod
    def _import_specs(node: Node, source: bytes) -> Iterator[ImportSpec]:
        specs = [child for child in node.named_children if child.type == 'import_spec']
        for spec_list in node.named_children:
            if spec_list.type == 'import_spec_list':
                specs.extend(
                    child
                    for child in spec_list.named_children
                    if child.type == 'import_spec'
                )
        for spec in specs:
            name = spec.child_by_field_name('name')
            yield ImportSpec(
                path=_unquote(_text(spec.child_by_field_name('path'), source)),
                alias=_text(name, source) if name is not None else None,
            )

    def _receiver(self, node: Node, source: bytes) -> Receiver | MalformedReceiver:
        params = [
            child
            for child in node.child_by_field_name('receiver').named_children
            if child.type != 'comment'
        ]
        if len(params) != 1:
            return MalformedReceiver(f'expected one receiver, found {len(params)}')
        param = params[0]
        if param.type != 'parameter_declaration':
            return MalformedReceiver(f'unexpected receiver {_text(param, source)!r}')
        if len(param.children_by_field_name('name')) > 1:
            return MalformedReceiver(
                f'expected one receiver, found {_text(param, source)!r}'
            )
        return self._receiver_type(param.child_by_field_name('type'), source)

    def _receiver_type(
        self, node: Node, source: bytes, is_pointer: bool = False
    ) -> Receiver | MalformedReceiver:
        if node.type == 'type_identifier':
            return Receiver(type_name=_text(node, source), is_pointer=is_pointer)
        if node.type == 'generic_type':
            return self._receiver_type(
                node.child_by_field_name('type'), source, is_pointer
            )
        if node.type == 'parenthesized_type':
            return self._receiver_type(node.named_children[0], source, is_pointer)
        if node.type == 'pointer_type' and not is_pointer:
            return self._receiver_type(node.named_children[0], source, True)
        return MalformedReceiver(f'unsupported receiver type {_text(node, source)!r}')

    @staticmethod
    def _type_decls(
        siblings: list[Node], index: int, source: bytes
    ) -> Iterator[TypeDecl]:
        node = siblings[index]
        specs = [
            child
            for child in node.named_children
            if child.type in ('type_spec', 'type_alias')
        ]
        grouped = any(child.type == '(' for child in node.children)
        if not grouped:
            spec = specs[0]
            yield TypeDecl(
                name=_text(spec.child_by_field_name('name'), source),
                text=_attached_text(siblings, index, source),
            )
            return

        # Each spec of a grouped declaration becomes its own declaration; the
        # group's doc comment goes with the first one.
        group_doc = source[_doc_start(siblings, index) : node.start_byte]
        members = node.named_children
        positions = [
            position
            for position, child in enumerate(members)
            if child.type in ('type_spec', 'type_alias')
        ]
        if not positions:
            return
        spans = {position: _attached_span(members, position) for position in positions}

        # Comments not attached to a spec follow the closest spec above them.
        loose: dict[int, list[str]] = {position: [] for position in positions}
        for position, child in enumerate(members):
            if child.type != 'comment' or any(
                start <= child.start_byte and child.end_byte <= end
                for start, end in spans.values()
            ):
                continue
            owner = max(
                (spec for spec in positions if spec < position), default=positions[0]
            )
            loose[owner].append(_text(child, source).strip())
        group_end = _trailing_end(siblings, index)
        if group_end > node.end_byte:
            loose[positions[-1]].append(
                source[node.end_byte : group_end].decode('utf-8').strip()
            )

        for position in positions:
            spec = members[position]
            start, end = spans[position]
            doc = _dedent(group_doc + source[start : spec.start_byte])
            group_doc = b''
            text = doc + 'type ' + source[spec.start_byte : end].decode('utf-8')
            text += ''.join(f'\n{comment}' for comment in loose[position])
            yield TypeDecl(
                name=_text(spec.child_by_field_name('name'), source),
                text=text,
            )


def _dedent(doc: bytes) -> str:
    lines = [line.strip() for line in doc.decode('utf-8').splitlines()]
    lines = [line for line in lines if line]
    return ''.join(f'{line}\n' for line in lines)


def _doc_start(siblings: list[Node], index: int) -> int:
    """Start byte of the comment block directly above ``siblings[index]``."""
    node = siblings[index]
    start = node.start_byte
    row = node.start_point[0]
    position = index - 1
    while position >= 0:
        comment = siblings[position]
        if comment.type != 'comment' or comment.end_point[0] < row - 1:
            break
        # A comment sharing a line with the previous node trails that node.
        previous = siblings[position - 1] if position > 0 else None
        if previous is not None and previous.end_point[0] == comment.start_point[0]:
            break
        start = comment.start_byte
        row = comment.start_point[0]
        position -= 1
    return start


def _trailing_end(siblings: list[Node], index: int) -> int:
    """End byte of ``siblings[index]`` including a same-line trailing comment."""
    node = siblings[index]
    following = siblings[index + 1] if index + 1 < len(siblings) else None
    if (
        following is not None
        and following.type == 'comment'
        and following.start_point[0] == node.end_point[0]
    ):
        return following.end_byte
    return node.end_byte


def _attached_span(siblings: list[Node], index: int) -> tuple[int, int]:
    return _doc_start(siblings, index), _trailing_end(siblings, index)


def _attached_text(siblings: list[Node], index: int, source: bytes) -> str:
    start, end = _attached_span(siblings, index)
    return source[start:end].decode('utf-8')

"""Tree-sitter based import extraction for JavaScript and TypeScript."""

from __future__ import annotations

from pathlib import PurePath
from typing import TYPE_CHECKING, Literal

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from errors import ParseError
from models.imports import ImportBinding, ImportDeclaration

if TYPE_CHECKING:
    from pathlib import Path

Dialect = Literal["javascript", "typescript", "tsx"]

_DIALECT_BY_SUFFIX: dict[str, Dialect] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}

# Node kinds whose named children may hold import statements. Everything
# else is skipped without descending.
_PASS_THROUGH_TYPES = frozenset(
    {"program", "ambient_declaration", "expression_statement"}
)
_MODULE_BODY_TYPES = frozenset({"module", "internal_module"})

_PARSERS: dict[Dialect, Parser] = {}


def _load_language(dialect: Dialect) -> Language:
    if dialect == "typescript":
        return Language(tree_sitter_typescript.language_typescript())
    if dialect == "tsx":
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_javascript.language())


def _get_parser(dialect: Dialect) -> Parser:
    """Initialize and return the Tree-sitter parser for a dialect."""
    parser = _PARSERS.get(dialect)
    if parser is None:
        parser = Parser(_load_language(dialect))
        _PARSERS[dialect] = parser
    return parser


def select_dialect(filename: str) -> Dialect:
    """Pick the grammar for a file from its extension.

    ``.jsx`` shares the JavaScript grammar, which accepts JSX natively;
    ``.ts`` uses the plain TypeScript grammar so that ``<T>value`` casts
    are not mistaken for JSX.
    """
    suffix = PurePath(filename).suffix.lower()
    try:
        return _DIALECT_BY_SUFFIX[suffix]
    except KeyError:
        msg = f"Unsupported file extension {suffix!r}"
        raise ParseError(filename, msg) from None


def _text(node: Node) -> str:
    # Invalid UTF-8 in a literal must not abort the whole file.
    return node.text.decode("utf8", errors="replace") if node.text else ""


_SIMPLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
}


def _unescape(sequence: str) -> str:
    """Decode one JavaScript escape sequence such as ``\\n`` or ``\\u{1F600}``."""
    body = sequence[1:]
    if not body or body[0] in "\r\n\u2028\u2029":
        return ""
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    try:
        if body.startswith("u{") and body.endswith("}"):
            return chr(int(body[2:-1], 16))
        if body[0] in "ux" and len(body) > 1:
            return chr(int(body[1:], 16))
    except ValueError:
        return body
    return body


def _string_value(node: Node) -> str:
    """Return the value of a string literal node, escapes decoded."""
    if node.type != "string":
        return _text(node)
    parts: list[str] = []
    for child in node.children:
        if child.type == "string_fragment":
            parts.append(_text(child))
        elif child.type == "escape_sequence":
            parts.append(_unescape(_text(child)))
    return "".join(parts)


def _named_binding(specifier: Node) -> ImportBinding | None:
    name_node = specifier.child_by_field_name("name")
    if name_node is None:
        return None
    imported = _string_value(name_node)
    alias_node = specifier.child_by_field_name("alias")
    local = _text(alias_node) if alias_node is not None else imported
    kind = "named-renamed" if local != imported else "named"
    return ImportBinding(kind=kind, imported=imported, local=local)


def _collect_bindings(clause: Node) -> list[ImportBinding]:
    """Collect bindings as default, then named in source order, then namespace."""
    default: ImportBinding | None = None
    named: list[ImportBinding] = []
    namespace: ImportBinding | None = None

    for child in clause.named_children:
        if child.type == "identifier":
            default = ImportBinding(
                kind="default", imported="default", local=_text(child)
            )
        elif child.type == "named_imports":
            for specifier in child.named_children:
                if specifier.type != "import_specifier":
                    continue
                binding = _named_binding(specifier)
                if binding is not None:
                    named.append(binding)
        elif child.type == "namespace_import":
            for ident in child.named_children:
                if ident.type == "identifier":
                    namespace = ImportBinding(kind="namespace", local=_text(ident))
                    break

    bindings = [default] if default is not None else []
    bindings.extend(named)
    if namespace is not None:
        bindings.append(namespace)
    return bindings


def _find_source(node: Node) -> Node | None:
    source = node.child_by_field_name("source")
    if source is not None:
        return source
    # Some grammar versions expose the source through a visible from_clause.
    for child in node.named_children:
        if child.type == "from_clause":
            return child.child_by_field_name("source")
    return None


def _build_declaration(node: Node) -> ImportDeclaration | None:
    """Build a declaration from an import_statement node.

    Returns None for TypeScript ``import x = require("y")``, which carries
    its source inside an import_require_clause rather than on the statement.
    """
    source = _find_source(node)
    if source is None:
        return None

    bindings: list[ImportBinding] = []
    for child in node.named_children:
        if child.type == "import_clause":
            bindings = _collect_bindings(child)
            break

    return ImportDeclaration(
        specifier=_string_value(source),
        bindings=bindings,
        line=node.start_point[0] + 1,
    )


def _visit(node: Node, declarations: list[ImportDeclaration]) -> None:
    if node.type == "import_statement":
        declaration = _build_declaration(node)
        if declaration is not None:
            declarations.append(declaration)
        return

    if node.type in _MODULE_BODY_TYPES:
        body = node.child_by_field_name("body")
        if body is not None:
            for child in body.named_children:
                _visit(child, declarations)
        return

    if node.type in _PASS_THROUGH_TYPES:
        for child in node.named_children:
            _visit(child, declarations)


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _describe_error(root: Node) -> str:
    error_node = _first_error(root) or root
    row, column = error_node.start_point[0] + 1, error_node.start_point[1] + 1
    if error_node.is_missing:
        return f"Missing {error_node.type!r} at line {row}, column {column}"
    return f"Syntax error at line {row}, column {column}"


def extract_imports(source: bytes | str, filename: str) -> list[ImportDeclaration]:
    """Extract static import declarations from JavaScript/TypeScript source.

    Args:
        source: File contents
        filename: Name used only to select the dialect (and in error messages)

    Returns:
        ImportDeclaration objects in source order. ``require()`` calls,
        dynamic ``import()`` expressions and re-exports are not included.

    Raises:
        ParseError: If the extension is unsupported or the source contains
            a syntax error.
    """
    dialect = select_dialect(filename)
    source_bytes = source.encode("utf8") if isinstance(source, str) else source

    tree = _get_parser(dialect).parse(source_bytes)
    root_node = tree.root_node
    if root_node.has_error:
        raise ParseError(filename, _describe_error(root_node))

    declarations: list[ImportDeclaration] = []
    _visit(root_node, declarations)
    return declarations


def extract_file_imports(file_path: Path, display_path: str) -> list[ImportDeclaration]:
    """Read a file and extract its imports.

    Raises:
        ParseError: If the file cannot be read or parsed; the error names
            ``display_path``.
    """
    try:
        source_bytes = file_path.read_bytes()
    except OSError as exc:
        msg = f"Failed to read file: {exc}"
        raise ParseError(display_path, msg) from exc

    try:
        return extract_imports(source_bytes, file_path.name)
    except ParseError as exc:
        raise ParseError(display_path, exc.message) from exc

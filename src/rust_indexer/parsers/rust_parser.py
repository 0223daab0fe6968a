import re
from collections.abc import Iterator

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from rust_indexer.errors import ParseError
from rust_indexer.models import Declaration, DeclarationKind, Location
from rust_indexer.parsers.base import BaseParser

_ITEM_KINDS = {
    "mod_item": DeclarationKind.MOD,
    "struct_item": DeclarationKind.STRUCT,
    "enum_item": DeclarationKind.ENUM,
    "trait_item": DeclarationKind.TRAIT,
    "function_item": DeclarationKind.FN,
    "impl_item": DeclarationKind.IMPL,
    "const_item": DeclarationKind.CONST,
    "static_item": DeclarationKind.STATIC,
    "type_item": DeclarationKind.TYPE_ALIAS,
    "use_declaration": DeclarationKind.USE,
    "extern_crate_declaration": DeclarationKind.EXTERN_CRATE,
    "foreign_mod_item": DeclarationKind.EXTERN_BLOCK,
    "union_item": DeclarationKind.UNION,
    "macro_definition": DeclarationKind.MACRO_DEF,
    "macro_invocation": DeclarationKind.MACRO_CALL,
}

# Statements tree-sitter accepts at file level that are not items.
_NON_ITEM_STATEMENTS = ("let_declaration", "expression_statement")

_COMMENT_TYPES = ("line_comment", "block_comment")

# Kinds whose body may open with inner doc comments (//!, /*! */, #![doc]).
_INNER_DOC_KINDS = (
    DeclarationKind.MOD,
    DeclarationKind.FN,
    DeclarationKind.TRAIT,
    DeclarationKind.IMPL,
)

_ESCAPE_RE = re.compile(r"\\(?:u\{([0-9a-fA-F_]+)\}|x([0-9a-fA-F]{2})|(\r?\n\s*)|(.))", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "0": "\0", "'": "'", '"': '"'}
_RAW_STRING_RE = re.compile(r'r(#*)"(.*)"\1', re.DOTALL)


def _unescape(text: str) -> str:
    """Resolve the escape sequences of a Rust string literal body."""
    def replace(match: re.Match) -> str:
        unicode, byte, continuation, simple = match.groups()
        if unicode is not None:
            return chr(int(unicode.replace("_", ""), 16))
        if byte is not None:
            return chr(int(byte, 16))
        if continuation is not None:
            return ""
        return _SIMPLE_ESCAPES.get(simple, match.group(0))

    return _ESCAPE_RE.sub(replace, text)


def _is_ident_byte(char: bytes) -> bool:
    return char != b"" and (char.isalnum() or char == b"_" or char[0] >= 0x80)


def _comment_doc(text: str) -> tuple[str, str] | None:
    """Classify a comment as a doc comment.

    Returns:
        ("outer", content) or ("inner", content), or None for plain comments.
    """
    if text.startswith("//"):
        text = text.rstrip("\r\n")
        if text.startswith("///") and not text.startswith("////"):
            return "outer", text[3:]
        if text.startswith("//!"):
            return "inner", text[3:]
        return None

    if text.startswith("/**") and not text.startswith("/***") and text != "/**/":
        return "outer", text[3:-2]
    if text.startswith("/*!"):
        return "inner", text[3:-2]
    return None


class RustParser(BaseParser):
    """Parser for extracting top-level declarations from Rust using tree-sitter."""

    def __init__(self):
        self.language = Language(tree_sitter_rust.language())
        self.parser = Parser(self.language)

    def parse(self, source_code: str, file_path: str) -> list[Declaration]:
        """Parse Rust source code into its top-level declarations.

        Outer attributes and doc comments preceding an item are attached to
        it. Plain comments are skipped. File-level inner attributes and doc
        comments must open the file; they belong to no item and are dropped.

        Args:
            source_code: Rust source code to parse
            file_path: Relative path to the file, used in error messages

        Returns:
            List of Declaration objects in source order

        Raises:
            ParseError: If the source is not a valid sequence of items
        """
        source = source_code.encode("utf-8")
        tree = self.parser.parse(source)
        root = tree.root_node

        if root.has_error:
            raise self._error_at(self._first_error(root) or root, file_path)

        declarations = []
        pending: list[Node] = []

        for child in root.children:
            if not child.is_named:
                # Trailing `;` of item-level macro calls
                continue

            if child.type in _COMMENT_TYPES:
                doc = _comment_doc(self._text(child, source))
                if doc is None:
                    continue
                if doc[0] == "outer":
                    pending.append(child)
                elif declarations or pending:
                    # Inner attributes only open the file.
                    raise self._error_at(child, file_path)
                continue

            if child.type == "attribute_item":
                pending.append(child)
                continue

            if child.type == "inner_attribute_item":
                if declarations or pending:
                    raise self._error_at(child, file_path)
                continue

            declarations.append(self._build_declaration(child, pending, source, file_path))
            pending = []

        if pending:
            # Attributes must be followed by an item.
            raise self._error_at(pending[-1], file_path)

        return declarations

    def _build_declaration(
        self,
        node: Node,
        attributes: list[Node],
        source: bytes,
        file_path: str
    ) -> Declaration:
        """Build a Declaration from an item node and its outer attributes."""
        kind = self._declaration_kind(node, file_path)

        start_node = attributes[0] if attributes else node
        span = Location(start=start_node.start_point[0] + 1, end=node.end_point[0] + 1)

        doc_lines = [
            line
            for line in (self._outer_doc(attr, source) for attr in attributes)
            if line is not None
        ]

        body = node.child_by_field_name("body")
        if kind in _INNER_DOC_KINDS and body is not None:
            doc_lines.extend(self._inner_docs(body, source, file_path))

        name_node = node.child_by_field_name("name")
        name = self._text(name_node, source) if name_node else None

        generics = None
        type_params = node.child_by_field_name("type_parameters")
        if type_params is not None and type_params.named_child_count > 0:
            generics = self._collapse(type_params, source)

        trait_path = None
        target_type = None
        if kind is DeclarationKind.IMPL:
            trait_node = node.child_by_field_name("trait")
            if trait_node is not None:
                trait_path = self._collapse(trait_node, source)
                if any(child.type == "!" for child in node.children):
                    trait_path = f"!{trait_path}"
            type_node = node.child_by_field_name("type")
            if type_node is not None:
                target_type = self._collapse(type_node, source)

        header = None
        if kind is DeclarationKind.FN:
            end_byte = body.start_byte if body is not None else node.end_byte
            header = self._collapse(node, source, end_byte)

        return Declaration(
            kind=kind,
            span=span,
            name=name,
            generics=generics,
            trait_path=trait_path,
            target_type=target_type,
            header=header,
            has_body=body is not None,
            doc_lines=tuple(doc_lines),
        )

    def _declaration_kind(self, node: Node, file_path: str) -> DeclarationKind:
        """Determine the declaration class of a top-level node.

        Raises:
            ParseError: If the node is a statement that is not valid at item level
        """
        if node.type == "expression_statement":
            if node.named_child_count == 1 and node.named_children[0].type == "macro_invocation":
                return DeclarationKind.MACRO_CALL
            raise self._error_at(node, file_path)

        if node.type in _NON_ITEM_STATEMENTS:
            raise self._error_at(node, file_path)

        return _ITEM_KINDS.get(node.type, DeclarationKind.OTHER)

    def _outer_doc(self, node: Node, source: bytes) -> str | None:
        """Extract the doc line contributed by an outer attribute or doc comment."""
        if node.type in _COMMENT_TYPES:
            doc = _comment_doc(self._text(node, source))
            return doc[1] if doc is not None and doc[0] == "outer" else None
        return self._attribute_doc(node, source)

    def _inner_docs(self, body: Node, source: bytes, file_path: str) -> list[str]:
        """Extract inner doc lines from the start of an item body.

        Raises:
            ParseError: If an inner attribute or doc comment follows a statement
        """
        lines = []
        opened = False

        for child in body.children:
            if not child.is_named:
                # Braces
                continue

            if child.type in _COMMENT_TYPES:
                doc = _comment_doc(self._text(child, source))
                if doc is None:
                    continue
                if doc[0] == "outer":
                    opened = True
                elif opened:
                    raise self._error_at(child, file_path)
                else:
                    lines.append(doc[1])
            elif child.type == "inner_attribute_item":
                if opened:
                    raise self._error_at(child, file_path)
                line = self._attribute_doc(child, source)
                if line is not None:
                    lines.append(line)
            else:
                opened = True

        return lines

    def _attribute_doc(self, node: Node, source: bytes) -> str | None:
        """Extract the string value of a `doc = "..."` attribute.

        List-form doc attributes and non-literal values contribute nothing.
        """
        attribute = next((c for c in node.named_children if c.type == "attribute"), None)
        if attribute is None or attribute.named_child_count == 0:
            return None

        path = attribute.named_children[0]
        if path.type != "identifier" or self._text(path, source) != "doc":
            return None

        value = attribute.child_by_field_name("value")
        if value is None:
            return None

        text = self._text(value, source)
        if value.type == "string_literal" and text.startswith('"'):
            return _unescape(text[1:-1])
        if value.type == "raw_string_literal":
            match = _RAW_STRING_RE.fullmatch(text)
            if match:
                return match.group(2)
        return None

    def _text(self, node: Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode("utf-8")

    def _collapse(self, node: Node, source: bytes, end_byte: int | None = None) -> str:
        """Return a node's source text on one line, comments removed.

        Args:
            node: Node whose text to render
            source: Source bytes
            end_byte: Stop before this offset instead of the node's end

        Returns:
            Text with every whitespace run collapsed to a single space
        """
        end = node.end_byte if end_byte is None else end_byte
        text = b""
        cursor = node.start_byte

        for comment in self._comments_within(node, node.start_byte, end):
            text += source[cursor:comment.start_byte]
            cursor = comment.end_byte
            # Keep tokens on both sides of the comment apart.
            if _is_ident_byte(text[-1:]) and _is_ident_byte(source[cursor:cursor + 1]):
                text += b" "
        text += source[cursor:end]

        return " ".join(text.decode("utf-8").split())

    def _comments_within(self, node: Node, start: int, end: int) -> Iterator[Node]:
        for child in node.children:
            if child.end_byte <= start or child.start_byte >= end:
                continue
            if child.type in _COMMENT_TYPES:
                if child.start_byte >= start and child.end_byte <= end:
                    yield child
            else:
                yield from self._comments_within(child, start, end)

    def _first_error(self, node: Node) -> Node | None:
        """Find the first ERROR or MISSING node in document order."""
        if node.type == "ERROR" or node.is_missing:
            return node

        for child in node.children:
            if child.has_error or child.is_missing:
                found = self._first_error(child)
                if found is not None:
                    return found

        return None

    def _error_at(self, node: Node, file_path: str) -> ParseError:
        row, column = node.start_point[0], node.start_point[1]
        return ParseError(file_path, line=row + 1, column=column + 1)

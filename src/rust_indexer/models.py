from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    """Kind tag of an index entry. No other kind is ever emitted."""
    MODULE = "module"
    STRUCT = "struct"
    ENUM = "enum"
    TRAIT = "trait"
    FN = "fn"
    IMPL = "impl"


class DeclarationKind(str, Enum):
    """Declaration class of a top-level syntax node, as reported by a parser."""
    MOD = "mod"
    STRUCT = "struct"
    ENUM = "enum"
    TRAIT = "trait"
    FN = "fn"
    IMPL = "impl"
    CONST = "const"
    STATIC = "static"
    TYPE_ALIAS = "type_alias"
    USE = "use"
    EXTERN_CRATE = "extern_crate"
    EXTERN_BLOCK = "extern_block"
    UNION = "union"
    MACRO_DEF = "macro_def"
    MACRO_CALL = "macro_call"
    OTHER = "other"


@dataclass(frozen=True)
class Location:
    """Represents a line range in a source file (1-indexed, inclusive)."""
    start: int
    end: int


@dataclass(frozen=True)
class Declaration:
    """A top-level declaration as produced by a parser.

    Text fields hold source text as written, collapsed to a single line.
    """
    kind: DeclarationKind
    span: Location
    name: str | None = None
    generics: str | None = None  # None if no generic parameters
    trait_path: str | None = None  # Only set for trait impls
    target_type: str | None = None  # Only set for impls
    header: str | None = None  # Function header up to the body
    has_body: bool = False  # Inline module body
    doc_lines: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class IndexEntry:
    """One indexed top-level declaration."""
    kind: EntryKind
    name: str
    file: str
    line_start: int
    line_end: int
    signature: str
    doc_summary: str | None = None  # None if no non-blank doc line
    doc: str | None = None  # None if no doc comments at all

    def to_dict(self) -> dict:
        """Return the JSON-ready mapping, in output field order."""
        return {
            "kind": self.kind.value,
            "name": self.name,
            "file": self.file,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "signature": self.signature,
            "doc_summary": self.doc_summary,
            "doc": self.doc,
        }

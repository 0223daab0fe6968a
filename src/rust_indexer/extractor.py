"""Classification of top-level declarations into index entries."""

from collections.abc import Iterable

from rust_indexer.docs import extract_docs
from rust_indexer.models import Declaration, DeclarationKind, EntryKind, IndexEntry
from rust_indexer.signatures import build_signature
from rust_indexer.spans import line_range

# Every declaration class must appear here; None means "not indexed".
_ENTRY_KINDS: dict[DeclarationKind, EntryKind | None] = {
    DeclarationKind.MOD: EntryKind.MODULE,
    DeclarationKind.STRUCT: EntryKind.STRUCT,
    DeclarationKind.ENUM: EntryKind.ENUM,
    DeclarationKind.TRAIT: EntryKind.TRAIT,
    DeclarationKind.FN: EntryKind.FN,
    DeclarationKind.IMPL: EntryKind.IMPL,
    DeclarationKind.CONST: None,
    DeclarationKind.STATIC: None,
    DeclarationKind.TYPE_ALIAS: None,
    DeclarationKind.USE: None,
    DeclarationKind.EXTERN_CRATE: None,
    DeclarationKind.EXTERN_BLOCK: None,
    DeclarationKind.UNION: None,
    DeclarationKind.MACRO_DEF: None,
    DeclarationKind.MACRO_CALL: None,
    DeclarationKind.OTHER: None,
}


def classify(kind: DeclarationKind) -> EntryKind | None:
    """Map a declaration class to its entry kind, or None if not indexable."""
    return _ENTRY_KINDS[kind]


def impl_name(decl: Declaration) -> str:
    """Composite name of an impl block: "<Trait> for <Type>" or "<Type>"."""
    target = decl.target_type or ""
    if decl.trait_path:
        return f"{decl.trait_path} for {target}"
    return target


def build_entry(decl: Declaration, file: str) -> IndexEntry | None:
    """Build the index entry for one top-level declaration.

    Args:
        decl: Declaration produced by a parser
        file: Path of the source file relative to the project root

    Returns:
        IndexEntry, or None if the declaration kind is not indexed
    """
    kind = classify(decl.kind)
    if kind is None:
        return None

    if kind is EntryKind.IMPL:
        name = impl_name(decl)
    else:
        name = decl.name or ""

    doc_summary, doc = extract_docs(decl.doc_lines)
    line_start, line_end = line_range(decl.span)

    return IndexEntry(
        kind=kind,
        name=name,
        file=file,
        line_start=line_start,
        line_end=line_end,
        signature=build_signature(decl),
        doc_summary=doc_summary,
        doc=doc,
    )


def index_file(declarations: Iterable[Declaration], file: str) -> list[IndexEntry]:
    """Index a file's top-level declarations, keeping source order.

    Args:
        declarations: Parsed top-level declarations, in source order
        file: Path of the source file relative to the project root

    Returns:
        List of entries; non-indexable declarations are omitted
    """
    entries = []

    for decl in declarations:
        entry = build_entry(decl, file)
        if entry is not None:
            entries.append(entry)

    return entries

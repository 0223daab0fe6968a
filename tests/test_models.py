import json

import pytest

from rust_indexer.models import (
    Declaration,
    DeclarationKind,
    EntryKind,
    IndexEntry,
    Location,
)


def test_location_creation():
    location = Location(start=10, end=20)
    assert location.start == 10
    assert location.end == 20


def test_entry_kind_values():
    assert [kind.value for kind in EntryKind] == [
        "module", "struct", "enum", "trait", "fn", "impl"
    ]


def test_declaration_defaults():
    decl = Declaration(kind=DeclarationKind.STRUCT, span=Location(start=1, end=3), name="Point")

    assert decl.generics is None
    assert decl.trait_path is None
    assert decl.target_type is None
    assert decl.header is None
    assert decl.has_body is False
    assert decl.doc_lines == ()


def test_entry_is_immutable():
    entry = IndexEntry(
        kind=EntryKind.FN,
        name="run",
        file="src/main.rs",
        line_start=1,
        line_end=3,
        signature="fn run()",
    )

    with pytest.raises(AttributeError):
        entry.name = "other"


def test_entry_to_dict():
    entry = IndexEntry(
        kind=EntryKind.STRUCT,
        name="Greeter",
        file="src/lib.rs",
        line_start=6,
        line_end=9,
        signature="Greeter",
        doc_summary="Greeter struct.",
        doc=" Greeter struct.",
    )

    assert entry.to_dict() == {
        "kind": "struct",
        "name": "Greeter",
        "file": "src/lib.rs",
        "line_start": 6,
        "line_end": 9,
        "signature": "Greeter",
        "doc_summary": "Greeter struct.",
        "doc": " Greeter struct.",
    }


def test_entry_to_dict_keeps_field_order_and_nulls():
    entry = IndexEntry(
        kind=EntryKind.IMPL,
        name="Greeter",
        file="src/lib.rs",
        line_start=28,
        line_end=33,
        signature="impl Greeter",
    )

    data = entry.to_dict()

    assert list(data) == [
        "kind", "name", "file", "line_start", "line_end", "signature", "doc_summary", "doc"
    ]
    assert json.loads(json.dumps(data))["doc_summary"] is None
    assert data["doc"] is None

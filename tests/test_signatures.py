import pytest

from rust_indexer.models import Declaration, DeclarationKind, Location
from rust_indexer.signatures import build_signature

SPAN = Location(start=1, end=1)


def test_inline_module():
    decl = Declaration(kind=DeclarationKind.MOD, span=SPAN, name="tests", has_body=True)
    assert build_signature(decl) == "mod tests"


def test_module_declaration():
    decl = Declaration(kind=DeclarationKind.MOD, span=SPAN, name="utils", has_body=False)
    assert build_signature(decl) == "mod utils;"


def test_struct_without_generics():
    decl = Declaration(kind=DeclarationKind.STRUCT, span=SPAN, name="Greeter")
    assert build_signature(decl) == "Greeter"


def test_struct_with_generics():
    decl = Declaration(
        kind=DeclarationKind.STRUCT, span=SPAN, name="Wrapper", generics="<T: Display>"
    )
    assert build_signature(decl) == "Wrapper <T: Display>"


def test_enum_with_lifetime_generics():
    decl = Declaration(kind=DeclarationKind.ENUM, span=SPAN, name="Token", generics="<'a>")
    assert build_signature(decl) == "Token <'a>"


def test_trait_without_generics():
    decl = Declaration(kind=DeclarationKind.TRAIT, span=SPAN, name="Greet")
    assert build_signature(decl) == "trait Greet"


def test_trait_with_generics():
    decl = Declaration(kind=DeclarationKind.TRAIT, span=SPAN, name="Convert", generics="<T>")
    assert build_signature(decl) == "trait Convert <T>"


def test_fn_uses_header():
    decl = Declaration(
        kind=DeclarationKind.FN,
        span=SPAN,
        name="make_greeter",
        header="pub fn make_greeter() -> Greeter",
    )
    assert build_signature(decl) == "pub fn make_greeter() -> Greeter"


def test_inherent_impl():
    decl = Declaration(kind=DeclarationKind.IMPL, span=SPAN, target_type="Greeter")
    assert build_signature(decl) == "impl Greeter"


def test_trait_impl():
    decl = Declaration(
        kind=DeclarationKind.IMPL, span=SPAN, trait_path="Greet", target_type="Greeter"
    )
    assert build_signature(decl) == "impl Greet for Greeter"


def test_generic_trait_impl():
    decl = Declaration(
        kind=DeclarationKind.IMPL,
        span=SPAN,
        generics="<T>",
        trait_path="TraitPath",
        target_type="TargetType<T>",
    )
    assert build_signature(decl) == "impl <T> TraitPath for TargetType<T>"


def test_non_indexable_kind_has_no_signature():
    decl = Declaration(kind=DeclarationKind.CONST, span=SPAN, name="MAX")

    with pytest.raises(ValueError, match="const"):
        build_signature(decl)

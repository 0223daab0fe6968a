"""One-line signature reconstruction per declaration kind."""

from rust_indexer.models import Declaration, DeclarationKind


def module_signature(decl: Declaration) -> str:
    if decl.has_body:
        return f"mod {decl.name}"
    return f"mod {decl.name};"


def type_signature(decl: Declaration) -> str:
    """Signature for structs and enums: the name, then generics if any."""
    if not decl.generics:
        return decl.name or ""
    return f"{decl.name} {decl.generics}"


def trait_signature(decl: Declaration) -> str:
    if not decl.generics:
        return f"trait {decl.name}"
    return f"trait {decl.name} {decl.generics}"


def fn_signature(decl: Declaration) -> str:
    return decl.header or f"fn {decl.name}"


def impl_signature(decl: Declaration) -> str:
    """Join `impl`, generics, `<trait> for` and the target type."""
    parts = ["impl"]

    if decl.generics:
        parts.append(decl.generics)

    if decl.trait_path:
        parts.append(decl.trait_path)
        parts.append("for")

    parts.append(decl.target_type or "")

    return " ".join(parts)


_SIGNATURE_BUILDERS = {
    DeclarationKind.MOD: module_signature,
    DeclarationKind.STRUCT: type_signature,
    DeclarationKind.ENUM: type_signature,
    DeclarationKind.TRAIT: trait_signature,
    DeclarationKind.FN: fn_signature,
    DeclarationKind.IMPL: impl_signature,
}


def build_signature(decl: Declaration) -> str:
    """Build the signature of an indexable declaration.

    Args:
        decl: Declaration of one of the indexable kinds

    Returns:
        Signature text on a single line

    Raises:
        ValueError: If the declaration kind has no signature form
    """
    builder = _SIGNATURE_BUILDERS.get(decl.kind)
    if builder is None:
        raise ValueError(f"No signature form for declaration kind: {decl.kind.value}")
    return builder(decl)

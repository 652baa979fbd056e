"""Method variables and the names chosen for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mockweaver.gotypes import (
    Alias,
    Array,
    Basic,
    BasicInfo,
    Chan,
    GoType,
    Interface,
    Map,
    Named,
    Pointer,
    Signature,
    Slice,
    Struct,
    TypeParamType,
    TypesPackage,
    Variable,
    type_string,
)
from mockweaver.package import Package

_RESERVED = frozenset({
    "mock", "callInfo", "break", "default", "func", "interface", "select", "case", "defer", "go", "map", "struct",
    "chan", "else", "goto", "package", "switch", "const", "fallthrough", "if", "range", "type", "continue", "for",
    "import", "return", "var",
    # avoid shadowing basic types
    "string", "bool", "byte", "rune", "uintptr",
    "int", "int8", "int16", "int32", "int64",
    "uint", "uint8", "uint16", "uint32", "uint64",
    "float32", "float64", "complex64", "complex128",
})


@dataclass(eq=False)
class Var:
    """A method parameter or result as it appears in the generated code.

    ``typ`` may differ from the type of ``variable`` when the type was replaced.
    """

    name: str
    typ: Optional[GoType]
    variable: Optional[Variable] = None
    imports: dict[str, Package] = field(default_factory=dict)
    pkg_path: str = ""

    def is_slice(self) -> bool:
        """Whether the type, or its underlying type, is a slice."""
        return self.typ is not None and isinstance(self.typ.underlying(), Slice)

    def type_string(self) -> str:
        """Return the type with package qualifiers, e.g. ``pkg.Type``."""
        return type_string(self.typ, self._package_qualifier)

    def _package_qualifier(self, pkg: TypesPackage) -> str:
        if self.pkg_path and self.pkg_path == pkg.path:
            return ""
        imprt = self.imports.get(pkg.path)
        return imprt.qualifier() if imprt is not None else ""

    def nillable(self) -> bool:
        """Whether a value of this type can be nil."""
        return nillable(self.typ)


def nillable(typ: Optional[GoType]) -> bool:
    """Whether values of ``typ`` can be nil."""
    if isinstance(typ, (Pointer, Array, Map, Interface, Signature, Chan, Slice)):
        return True
    if isinstance(typ, (Named, Alias, TypeParamType)):
        return nillable(typ.underlying())
    return False


def var_name(variable: Variable, suffix: str = "") -> str:
    """Return the variable's own name, or one derived from its type if it has none."""
    if variable.name and variable.name != "_":
        return variable.name + suffix
    name = var_name_for_type(variable.type) + suffix
    if name in _RESERVED:
        name += "Param"
    return name


def _nested(typ: Optional[GoType]) -> str:
    if isinstance(typ, Basic):
        return decapitalise(type_string(typ))
    return var_name_for_type(typ)


def _basic_name(basic: Basic) -> str:
    return {
        BasicInfo.BOOLEAN: "b",
        BasicInfo.INTEGER: "n",
        BasicInfo.FLOAT: "f",
        BasicInfo.STRING: "s",
    }.get(basic.info, "v")


def var_name_for_type(typ: Optional[GoType]) -> str:
    """Derive a variable name from a type, e.g. ``map[string]int`` gives ``stringToInt``."""
    if isinstance(typ, Named):
        if typ.name == "error":
            return "err"
        name = decapitalise(typ.name)
        if name == typ.name:
            name += "MoqParam"
        return name
    if isinstance(typ, Basic):
        return _basic_name(typ)
    if isinstance(typ, (Array, Slice)):
        return _nested(typ.elem) + "s"
    if isinstance(typ, Struct):
        return "val"
    if isinstance(typ, Pointer):
        return var_name_for_type(typ.elem)
    if isinstance(typ, Signature):
        return "fn"
    if isinstance(typ, Interface):
        return "ifaceVal"
    if isinstance(typ, Map):
        return _nested(typ.key) + "To" + capitalise(_nested(typ.elem))
    if isinstance(typ, Chan):
        return _nested(typ.elem) + "Ch"
    return "v"


def capitalise(s: str) -> str:
    """Upper-case the first character."""
    return s[:1].upper() + s[1:]


def decapitalise(s: str) -> str:
    """Lower-case the first character."""
    return s[:1].lower() + s[1:]
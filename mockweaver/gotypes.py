"""A small model of Go's type system, enough to describe interfaces for mocking."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Mapping, Optional

Qualifier = Callable[["TypesPackage"], str]


@dataclass(frozen=True)
class TypesPackage:
    """A Go package known by its name and import path."""

    name: str
    path: str


@dataclass(frozen=True)
class SourcePackage(TypesPackage):
    """A loaded Go package: its top-level declarations and its files."""

    scope: Mapping[str, "GoType"] = field(default_factory=dict, compare=False, hash=False)
    go_files: tuple[str, ...] = field(default=(), compare=False, hash=False)

    def lookup(self, name: str) -> Optional["GoType"]:
        """Return the type declared under ``name`` at package level, if any."""
        return self.scope.get(name)


class GoType:
    """Base of all Go types."""

    def underlying(self) -> "GoType":
        """Return the underlying type; structural types are their own."""
        return self

    def __str__(self) -> str:
        return type_string(self)


class BasicInfo(enum.IntFlag):
    """Properties of a basic type."""

    NONE = 0
    BOOLEAN = 1
    INTEGER = 2
    UNSIGNED = 4
    FLOAT = 8
    COMPLEX = 16
    STRING = 32
    UNTYPED = 64


@dataclass(frozen=True)
class Basic(GoType):
    """A predeclared type such as ``int`` or ``string``."""

    name: str
    info: BasicInfo = BasicInfo.NONE

    @property
    def is_unsafe_pointer(self) -> bool:
        return self.name == "Pointer" and self.info == BasicInfo.NONE


@dataclass(frozen=True)
class Variable:
    """A named, typed value: a parameter, result, struct field or method."""

    name: str
    type: Optional[GoType]
    pkg: Optional[TypesPackage] = None
    embedded: bool = False

    def __str__(self) -> str:
        return f"var {self.name} {type_string(self.type)}".replace("var  ", "var ")


@dataclass(eq=False, repr=False)
class Named(GoType):
    """A defined type. The underlying type may be set after creation to allow cycles."""

    name: str
    pkg: Optional[TypesPackage] = None
    underlying_type: Optional[GoType] = None
    type_args: tuple[GoType, ...] = ()
    type_params: tuple["TypeParamType", ...] = ()

    def underlying(self) -> GoType:
        if self.underlying_type is None:
            raise ValueError(f"named type {self.name} has no underlying type")
        return self.underlying_type.underlying()

    def __repr__(self) -> str:
        return f"Named({self.name!r})"


@dataclass(eq=False, repr=False)
class Alias(GoType):
    """An alias declaration such as ``type A = B``."""

    name: str
    pkg: Optional[TypesPackage] = None
    aliased: Optional[GoType] = None
    type_args: tuple[GoType, ...] = ()

    def underlying(self) -> GoType:
        if self.aliased is None:
            raise ValueError(f"alias {self.name} has no aliased type")
        return self.aliased.underlying()

    def __repr__(self) -> str:
        return f"Alias({self.name!r})"


@dataclass(frozen=True)
class Pointer(GoType):
    elem: Optional[GoType]


@dataclass(frozen=True)
class Slice(GoType):
    elem: Optional[GoType]


@dataclass(frozen=True)
class Array(GoType):
    elem: Optional[GoType]
    length: int = 0


@dataclass(frozen=True)
class Map(GoType):
    key: Optional[GoType]
    elem: Optional[GoType]


@dataclass(frozen=True)
class Chan(GoType):
    BOTH: ClassVar[str] = "both"
    SEND: ClassVar[str] = "send"
    RECV: ClassVar[str] = "recv"

    elem: Optional[GoType]
    direction: str = "both"


@dataclass(frozen=True)
class Signature(GoType):
    """A function type. When variadic, the last parameter has a slice type."""

    params: tuple[Variable, ...] = ()
    results: tuple[Variable, ...] = ()
    variadic: bool = False


@dataclass(frozen=True)
class Struct(GoType):
    """An anonymous struct; ``tags`` runs parallel to ``fields`` when given."""

    fields: tuple[Variable, ...] = ()
    tags: tuple[str, ...] = ()


def _method_key(method: Variable) -> tuple[bool, str, str]:
    exported = method.name[:1].isupper()
    return (not exported, method.name, method.pkg.path if method.pkg else "")


@dataclass(frozen=True)
class Interface(GoType):
    """An interface type. Methods are Variables whose type is a Signature."""

    methods: tuple[Variable, ...] = ()
    embeddeds: tuple[GoType, ...] = ()
    implicit: bool = False

    def all_methods(self) -> list[Variable]:
        """Return the full method set, embedded interfaces included, in canonical order."""
        found: dict[str, Variable] = {}
        for method in self.methods:
            found.setdefault(method.name, method)
        for embedded in self.embeddeds:
            under = embedded.underlying()
            if isinstance(under, Interface):
                for method in under.all_methods():
                    found.setdefault(method.name, method)
        return sorted(found.values(), key=_method_key)


@dataclass(frozen=True)
class Union(GoType):
    """A union of terms; each term is a pair of (tilde, type)."""

    terms: tuple[tuple[bool, GoType], ...] = ()

    @property
    def types(self) -> list[GoType]:
        return [typ for _, typ in self.terms]


@dataclass(eq=False, repr=False)
class TypeParamType(GoType):
    """A type parameter of a generic declaration."""

    name: str
    constraint: Optional[GoType] = None
    index: int = 0

    def underlying(self) -> GoType:
        if self.constraint is None:
            return Interface()
        under = self.constraint.underlying()
        if isinstance(under, Interface):
            return under
        return Interface(embeddeds=(self.constraint,), implicit=True)

    def __repr__(self) -> str:
        return f"TypeParamType({self.name!r})"


UNSAFE = TypesPackage("unsafe", "unsafe")

BOOL = Basic("bool", BasicInfo.BOOLEAN)
STRING = Basic("string", BasicInfo.STRING)
INT = Basic("int", BasicInfo.INTEGER)
INT8 = Basic("int8", BasicInfo.INTEGER)
INT16 = Basic("int16", BasicInfo.INTEGER)
INT32 = Basic("int32", BasicInfo.INTEGER)
INT64 = Basic("int64", BasicInfo.INTEGER)
UINT = Basic("uint", BasicInfo.INTEGER | BasicInfo.UNSIGNED)
UINT8 = Basic("uint8", BasicInfo.INTEGER | BasicInfo.UNSIGNED)
UINT16 = Basic("uint16", BasicInfo.INTEGER | BasicInfo.UNSIGNED)
UINT32 = Basic("uint32", BasicInfo.INTEGER | BasicInfo.UNSIGNED)
UINT64 = Basic("uint64", BasicInfo.INTEGER | BasicInfo.UNSIGNED)
UINTPTR = Basic("uintptr", BasicInfo.INTEGER | BasicInfo.UNSIGNED)
BYTE = Basic("byte", BasicInfo.INTEGER | BasicInfo.UNSIGNED)
RUNE = Basic("rune", BasicInfo.INTEGER)
FLOAT32 = Basic("float32", BasicInfo.FLOAT)
FLOAT64 = Basic("float64", BasicInfo.FLOAT)
COMPLEX64 = Basic("complex64", BasicInfo.COMPLEX)
COMPLEX128 = Basic("complex128", BasicInfo.COMPLEX)
UNSAFE_POINTER = Basic("Pointer", BasicInfo.NONE)

ERROR = Named(
    "error",
    None,
    Interface((Variable("Error", Signature(results=(Variable("", STRING),))),)),
)
ANY = Alias("any", None, Interface())

PREDECLARED: dict[str, GoType] = {
    basic.name: basic
    for basic in (
        BOOL, STRING, INT, INT8, INT16, INT32, INT64, UINT, UINT8, UINT16, UINT32,
        UINT64, UINTPTR, BYTE, RUNE, FLOAT32, FLOAT64, COMPLEX64, COMPLEX128,
    )
}
PREDECLARED["error"] = ERROR
PREDECLARED["any"] = ANY


def _default_qualifier(pkg: TypesPackage) -> str:
    return pkg.path


def _qualified(pkg: Optional[TypesPackage], name: str, qualifier: Qualifier) -> str:
    prefix = qualifier(pkg) if pkg is not None else ""
    return f"{prefix}.{name}" if prefix else name


def _tuple(variables: tuple[Variable, ...], variadic: bool, qualifier: Qualifier) -> str:
    parts = []
    last = len(variables) - 1
    for i, variable in enumerate(variables):
        text = f"{variable.name} " if variable.name else ""
        if variadic and i == last and isinstance(variable.type, Slice):
            text += "..." + _write(variable.type.elem, qualifier)
        else:
            text += _write(variable.type, qualifier)
        parts.append(text)
    return ", ".join(parts)


def _signature(sig: Signature, qualifier: Qualifier) -> str:
    text = "(" + _tuple(sig.params, sig.variadic, qualifier) + ")"
    if not sig.results:
        return text
    if len(sig.results) == 1 and not sig.results[0].name:
        return text + " " + _write(sig.results[0].type, qualifier)
    return text + " (" + _tuple(sig.results, False, qualifier) + ")"


def _write(typ: Optional[GoType], qualifier: Qualifier) -> str:
    if typ is None:
        return "<nil>"
    if isinstance(typ, Basic):
        if typ.is_unsafe_pointer:
            return _qualified(UNSAFE, typ.name, qualifier)
        return typ.name
    if isinstance(typ, (Named, Alias)):
        text = _qualified(typ.pkg, typ.name, qualifier)
        if typ.type_args:
            text += "[" + ", ".join(_write(arg, qualifier) for arg in typ.type_args) + "]"
        return text
    if isinstance(typ, TypeParamType):
        return typ.name
    if isinstance(typ, Pointer):
        return "*" + _write(typ.elem, qualifier)
    if isinstance(typ, Slice):
        return "[]" + _write(typ.elem, qualifier)
    if isinstance(typ, Array):
        return f"[{typ.length}]" + _write(typ.elem, qualifier)
    if isinstance(typ, Map):
        return f"map[{_write(typ.key, qualifier)}]{_write(typ.elem, qualifier)}"
    if isinstance(typ, Chan):
        if typ.direction == Chan.SEND:
            return "chan<- " + _write(typ.elem, qualifier)
        if typ.direction == Chan.RECV:
            return "<-chan " + _write(typ.elem, qualifier)
        elem = _write(typ.elem, qualifier)
        if isinstance(typ.elem, Chan) and typ.elem.direction == Chan.RECV:
            elem = f"({elem})"
        return "chan " + elem
    if isinstance(typ, Signature):
        return "func" + _signature(typ, qualifier)
    if isinstance(typ, Struct):
        fields = []
        for i, variable in enumerate(typ.fields):
            text = "" if variable.embedded else f"{variable.name} "
            text += _write(variable.type, qualifier)
            tag = typ.tags[i] if i < len(typ.tags) else ""
            if tag:
                text += " " + json.dumps(tag, ensure_ascii=False)
            fields.append(text)
        return "struct{" + "; ".join(fields) + "}"
    if isinstance(typ, Interface):
        if typ.implicit and not typ.methods and len(typ.embeddeds) == 1:
            return _write(typ.embeddeds[0], qualifier)
        parts = []
        for method in sorted(typ.methods, key=_method_key):
            if isinstance(method.type, Signature):
                parts.append(method.name + _signature(method.type, qualifier))
            else:
                parts.append(method.name + _write(method.type, qualifier))
        parts.extend(_write(embedded, qualifier) for embedded in typ.embeddeds)
        return "interface{" + "; ".join(parts) + "}"
    if isinstance(typ, Union):
        return " | ".join(("~" if tilde else "") + _write(term, qualifier) for tilde, term in typ.terms)
    raise TypeError(f"unsupported type {typ!r}")


def type_string(typ: Optional[GoType], qualifier: Optional[Qualifier] = None) -> str:
    """Render ``typ`` as Go source; ``qualifier`` names the prefix for each package."""
    return _write(typ, qualifier or _default_qualifier)


def is_interface(typ: Optional[GoType]) -> bool:
    """Whether ``typ`` is, or has as its underlying type, an interface."""
    return typ is not None and isinstance(typ.underlying(), Interface)
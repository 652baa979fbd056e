"""Per-method name allocation and import discovery."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from mockweaver.gotypes import (
    UNSAFE,
    Alias,
    Array,
    Basic,
    Chan,
    GoType,
    Interface,
    Map,
    Named,
    Pointer,
    Signature,
    Slice,
    SourcePackage,
    Struct,
    TypesPackage,
    Union,
    Variable,
)
from mockweaver.package import Package
from mockweaver.stackerr import new_stack_err
from mockweaver.var import Var, var_name

if TYPE_CHECKING:
    from mockweaver.registry import Registry

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplaceType:
    """Replace a parameter's type with ``type_name`` from the package at ``pkg_path``.

    ``packages`` holds the packages loaded for ``pkg_path``; the first one that
    declares ``type_name`` supplies the replacement type.
    """

    pkg_path: str
    type_name: str
    packages: Sequence[SourcePackage] = ()


class MethodScope:
    """Tracks every name visible inside one method so new variables never collide."""

    def __init__(self, registry: "Registry") -> None:
        self.registry = registry
        self.pkg_path = ""
        self.vars: list[Var] = []
        self._visible_names: set[str] = set()
        for qualifier in registry.import_qualifiers:
            self.add_name(qualifier)

    def resolve_variable_name_collisions(self) -> None:
        """Rename variables whose names collide with names already visible."""
        for var in self.vars:
            new_name = self.suggest_name(var.name)
            if new_name != var.name:
                log.debug("variable %s conflicts with an allocated name; renamed to %s", var.name, new_name)
            var.name = new_name
            self.add_name(var.name)

    def suggest_name(self, prefix: str) -> str:
        """Return a name based on ``prefix`` that is not yet visible, without reserving it."""
        suggestion = prefix
        i = 1
        while self.name_exists(suggestion):
            suggestion = f"{prefix}{i}"
            i += 1
        return suggestion

    def allocate_name(self, prefix: str) -> str:
        """Return a collision-free name based on ``prefix`` and reserve it."""
        suggestion = self.suggest_name(prefix)
        self.add_name(suggestion)
        return suggestion

    def add_var(
        self,
        variable: Variable,
        prefix: str = "",
        replacement: Optional[ReplaceType] = None,
    ) -> Var:
        """Create a Var for ``variable``, registering the imports its type needs."""
        imports: dict[str, Package] = {}
        if replacement is not None:
            log.debug("replacing type with %s.%s", replacement.pkg_path, replacement.type_name)
            found: Optional[tuple[SourcePackage, GoType]] = None
            for pkg in replacement.packages:
                obj = pkg.lookup(replacement.type_name)
                if obj is not None:
                    found = (pkg, obj)
                    break
            if found is None:
                log.error("type-name was not found in the referenced package")
                raise new_stack_err(LookupError("type does not exist in referenced package"))
            obj_pkg, obj = found
            self._add_import(obj_pkg, imports)
            var = Var(name="", typ=obj, variable=variable, imports=imports, pkg_path=self.pkg_path)
        else:
            self._populate_imports(variable.type, imports)
            var = Var(name="", typ=variable.type, variable=variable, imports=imports, pkg_path=self.pkg_path)
            self.add_name(var.type_string())
        var.name = self.suggest_name(var_name(variable, prefix))
        self.vars.append(var)
        return var

    def add_name(self, name: str) -> None:
        """Mark ``name`` as visible, without any collision check."""
        self._visible_names.add(name)

    def name_exists(self, name: str) -> bool:
        """Whether ``name`` is visible in the scope."""
        return name in self._visible_names

    def _add_import(self, pkg: TypesPackage, imports: dict[str, Package]) -> None:
        imprt = self.registry.add_package_import(pkg)
        if imprt is not None:
            imports[pkg.path] = imprt
        self.add_name(imprt.qualifier() if imprt is not None else "")

    def _populate_imports(self, typ: Optional[GoType], imports: dict[str, Package]) -> None:
        if isinstance(typ, (Named, Alias)):
            if typ.pkg is not None:
                self._add_import(typ.pkg, imports)
            for arg in typ.type_args:
                self._populate_imports(arg, imports)
        elif isinstance(typ, (Array, Slice, Pointer, Chan)):
            self._populate_imports(typ.elem, imports)
        elif isinstance(typ, Signature):
            for variable in (*typ.params, *typ.results):
                self._populate_imports(variable.type, imports)
        elif isinstance(typ, Map):
            self._populate_imports(typ.key, imports)
            self._populate_imports(typ.elem, imports)
        elif isinstance(typ, Struct):
            for variable in typ.fields:
                self._populate_imports(variable.type, imports)
        elif isinstance(typ, Union):
            for term in typ.types:
                self._populate_imports(term, imports)
        elif isinstance(typ, Interface):
            for method in typ.methods:
                self._populate_imports(method.type, imports)
            for embedded in typ.embeddeds:
                self._populate_imports(embedded, imports)
        elif isinstance(typ, Basic):
            if typ.is_unsafe_pointer:
                self._add_import(UNSAFE, imports)
        else:
            log.debug("unable to determine type of object %r", typ)
"""Imports and type lookups shared by every method of a rendered file."""

from __future__ import annotations

import logging
from typing import Optional

from mockweaver.gotypes import (
    Interface,
    Named,
    SourcePackage,
    TypeParamType,
    TypesPackage,
    is_interface,
    type_string,
)
from mockweaver.method_scope import MethodScope
from mockweaver.package import Package, Packages
from mockweaver.stackerr import new_stack_err

log = logging.getLogger(__name__)


class Registry:
    """Knows the source package and the imports the destination file needs.

    Import qualifiers are kept unique by aliasing packages whose names clash.
    When ``in_package`` is true, imports of ``dst_pkg_path`` itself are ignored.
    """

    def __init__(self, src_pkg: Optional[SourcePackage], dst_pkg_path: str, in_package: bool) -> None:
        self.src_pkg = src_pkg
        self.dst_pkg_path = dst_pkg_path
        self.in_package = in_package
        self._imports: dict[str, Package] = {}
        self.import_qualifiers: dict[str, Package] = {}

    def src_pkg_name(self) -> str:
        """Return the name of the source package."""
        if self.src_pkg is None:
            raise ValueError("registry has no source package")
        return self.src_pkg.name

    def lookup_interface(self, name: str) -> tuple[Interface, tuple[TypeParamType, ...]]:
        """Return the interface declared as ``name`` and its type parameters (empty if none)."""
        obj = self.src_pkg.lookup(name) if self.src_pkg is not None else None
        if obj is None:
            raise new_stack_err(LookupError(f"interface not found: {name}"))
        if not is_interface(obj):
            raise TypeError(f"{name} ({type_string(obj)}) is not an interface")
        tparams = obj.type_params if isinstance(obj, Named) else ()
        return obj.underlying(), tuple(tparams)

    def method_scope(self) -> MethodScope:
        """Return a fresh scope for one method."""
        return MethodScope(self)

    def add_import(self, pkg_name: str, pkg_path: str) -> Optional[Package]:
        """Import the package named ``pkg_name`` at ``pkg_path``, aliasing it on conflict."""
        return self.add_package_import(TypesPackage(pkg_name, pkg_path))

    def add_package_import(self, pkg: TypesPackage) -> Optional[Package]:
        """Import ``pkg``; returns None when it is the package being written into."""
        path = pkg.path
        if path == self.dst_pkg_path and self.in_package:
            log.debug("%s is the destination package, not importing", path)
            return None
        existing = self._imports.get(path)
        if existing is not None:
            return existing

        imprt = Package(pkg)
        original = imprt.qualifier()
        suggestion = original
        i = 0
        while suggestion in self.import_qualifiers:
            suggestion = f"{original}{i}"
            i += 1
        if suggestion != original:
            imprt.alias = suggestion

        self._imports[path] = imprt
        self.import_qualifiers[imprt.qualifier()] = imprt
        return imprt

    def imports(self) -> Packages:
        """Return the imported packages sorted by path."""
        return Packages(sorted(self._imports.values(), key=lambda imprt: imprt.path()))
"""Imported packages of a rendered file."""

from __future__ import annotations

from dataclasses import dataclass

from mockweaver.gotypes import TypesPackage


@dataclass
class Package:
    """An imported package, optionally under an alias."""

    pkg: TypesPackage
    alias: str = ""

    def import_statement(self) -> str:
        """Return the import line body, e.g. ``"fmt"`` or ``f "fmt"``."""
        if not self.alias:
            return f'"{self.path()}"'
        return f'{self.alias} "{self.path()}"'

    def qualifier(self) -> str:
        """Return the name used to refer to types declared in the package."""
        return self.alias or self.pkg.name

    def path(self) -> str:
        """Return the full import path."""
        return self.pkg.path


class Packages(list):
    """A list of imported packages."""

    def pkg_qualifier(self, pkg_path: str) -> str:
        """Return the qualifier for ``pkg_path``; raises LookupError if it is not imported."""
        for imprt in self:
            if imprt.path() == pkg_path:
                return imprt.qualifier()
        raise LookupError(f"unknown import {pkg_path}")
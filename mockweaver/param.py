"""Parameters of methods and generic declarations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mockweaver.gotypes import GoType
from mockweaver.var import Var


@dataclass
class Param:
    """A parameter or result of an interface method."""

    var: Var
    variadic: bool = False

    @property
    def name(self) -> str:
        return self.var.name

    def _method_arg(self, include_name: bool) -> str:
        arg = f"{self.name} " if include_name else ""
        if self.variadic:
            return arg + "..." + self.type_string()[2:]
        return arg + self.type_string()

    def method_arg(self) -> str:
        """The parameter as written in a signature, e.g. ``name a.Type``."""
        return self._method_arg(True)

    def method_arg_no_name(self) -> str:
        """The parameter as written in a signature, without its name."""
        return self._method_arg(False)

    def call_name(self, ellipsis: bool) -> str:
        """The name used when calling; variadics get ``...`` if ``ellipsis``."""
        if ellipsis and self.variadic:
            return self.name + "..."
        return self.name

    def type_string(self) -> str:
        """The qualified type of the parameter."""
        return self.var.type_string()

    def type_string_ellipsis(self) -> str:
        """The type, with a variadic slice written as ``...T``."""
        text = self.type_string()
        if not self.variadic:
            return text
        return text.replace("[]", "...", 1)

    def type_string_variadic_underlying(self) -> str:
        """The element type of a variadic parameter, otherwise the type itself."""
        return self.type_string_ellipsis().replace("...", "", 1)


@dataclass
class TypeParam(Param):
    """A type parameter with the basic type its constraint pins down, if any."""

    constraint: Optional[GoType] = None
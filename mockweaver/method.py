"""Methods of an interface as seen by mock templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mockweaver.method_scope import MethodScope
from mockweaver.param import Param


@dataclass
class Method:
    """A method of an interface, with its parameters, results and naming scope."""

    name: str = ""
    params: list[Param] = field(default_factory=list)
    returns: list[Param] = field(default_factory=list)
    scope: Optional[MethodScope] = None

    def return_statement(self) -> str:
        """Return ``"return"`` if the method has results, otherwise an empty string."""
        return "return" if self.returns else ""

    def call(self) -> str:
        """Return the call expression, e.g. ``Foo(s)`` for ``func Foo(s string) error``."""
        return f"{self.name}({self.arg_call_list()})"

    def accepts_context(self) -> bool:
        """Whether the first parameter is a ``context.Context``."""
        return bool(self.params) and self.params[0].type_string() == "context.Context"

    def _signature(self, include_names: bool) -> str:
        return f"({self._arg_list(include_names)}) ({self._return_arg_list(include_names)})"

    def signature(self) -> str:
        """Return the parameter and result lists with their names."""
        return self._signature(True)

    def signature_no_name(self) -> str:
        """Return the parameter and result lists without names."""
        return self._signature(False)

    def declaration(self) -> str:
        """Return the method name followed by its signature."""
        return self.name + self.signature()

    def returns_error(self) -> bool:
        """Whether any of the results is an ``error``."""
        return any(ret.var.type_string() == "error" for ret in self.returns)

    def has_params(self) -> bool:
        """Whether the method takes parameters."""
        return bool(self.params)

    def has_returns(self) -> bool:
        """Whether the method has results."""
        return bool(self.returns)

    def _arg_list(self, include_names: bool) -> str:
        return ", ".join(
            param.method_arg() if include_names else param.method_arg_no_name() for param in self.params
        )

    def arg_list(self) -> str:
        """Return the parameters as declared, e.g. ``s string, n int, foo bar.Baz``."""
        return self._arg_list(True)

    def arg_list_no_name(self) -> str:
        """Return the parameter declarations without names."""
        return self._arg_list(False)

    def arg_type_list(self) -> str:
        """Return the parameter types, e.g. ``string, int, bar.Baz``."""
        return ", ".join(param.type_string() for param in self.params)

    def arg_type_list_ellipsis(self) -> str:
        """Return the parameter types, writing a variadic slice as ``...T``."""
        return ", ".join(param.type_string_ellipsis() for param in self.params)

    def arg_call_list(self) -> str:
        """Return the call arguments, e.g. ``s, n, foos...`` when the last is variadic."""
        return self._arg_call_list_slice(0, -1, True)

    def arg_call_list_no_ellipsis(self) -> str:
        """Return the call arguments without an ellipsis on a variadic parameter."""
        return self._arg_call_list_slice(0, -1, False)

    def arg_call_list_slice(self, start: int, end: int) -> str:
        """Return the call arguments of ``params[start:end]``; a negative end means all."""
        return self._arg_call_list_slice(start, end, True)

    def arg_call_list_slice_no_ellipsis(self, start: int, end: int) -> str:
        """Like ``arg_call_list_slice`` but without an ellipsis on a variadic parameter."""
        return self._arg_call_list_slice(start, end, False)

    def _arg_call_list_slice(self, start: int, end: int, ellipsis: bool) -> str:
        count = len(self.params)
        if end < 0:
            end = count
        if end == 1 and count == 0:
            end = 0
        if not 0 <= start <= end <= count:
            raise IndexError(f"slice bounds out of range [{start}:{end}] with length {count}")
        return ", ".join(param.call_name(ellipsis) for param in self.params[start:end])

    def return_arg_type_list(self) -> str:
        """Return the result types, parenthesised when there is more than one."""
        joined = ", ".join(ret.type_string() for ret in self.returns)
        return f"({joined})" if len(self.returns) > 1 else joined

    def return_arg_name_list(self) -> str:
        """Return the result names, e.g. ``s, err``."""
        return ", ".join(ret.name for ret in self.returns)

    def _return_arg_list(self, include_names: bool) -> str:
        return ", ".join(
            f"{ret.name} {ret.type_string()}" if include_names else ret.type_string() for ret in self.returns
        )

    def return_arg_list(self) -> str:
        """Return the result names and types, e.g. ``foo int, bar string, err error``."""
        return self._return_arg_list(True)

    def return_arg_list_no_name(self) -> str:
        """Return the result types without names."""
        return self._return_arg_list(False)

    def is_variadic(self) -> bool:
        """Whether the last parameter is variadic."""
        return bool(self.params) and self.params[-1].variadic
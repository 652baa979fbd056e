"""Rendering of mock templates."""

from __future__ import annotations

from typing import Any, TextIO

import jinja2

from mockweaver.data import Data
from mockweaver.funcs import FUNC_MAP, format_value


def _finalize(value: Any) -> str:
    return format_value(value)


class Template:
    """A parsed template, with the helper functions available as globals.

    The template sees the fields of Data by name (``pkg_name``, ``registry``,
    ``src_pkg_qualifier``, ``interfaces``, ``template_data``), the callable
    ``imports`` and the whole object as ``data``.
    """

    def __init__(self, template_string: str, name: str) -> None:
        self.name = name
        env = jinja2.Environment(
            loader=jinja2.DictLoader({name: template_string}),
            keep_trailing_newline=True,
            finalize=_finalize,
            autoescape=False,
        )
        env.globals.update(FUNC_MAP)
        self._template = env.get_template(name)

    @staticmethod
    def _context(data: Data) -> dict[str, Any]:
        return {
            "data": data,
            "pkg_name": data.pkg_name,
            "registry": data.registry,
            "src_pkg_qualifier": data.src_pkg_qualifier,
            "interfaces": data.interfaces,
            "template_data": data.template_data,
            "imports": data.imports,
        }

    def render(self, data: Data) -> str:
        """Render the template for ``data`` and return the text."""
        return self._template.render(self._context(data))

    def execute(self, stream: TextIO, data: Data) -> None:
        """Render the template for ``data`` into ``stream``."""
        for chunk in self._template.generate(self._context(data)):
            stream.write(chunk)
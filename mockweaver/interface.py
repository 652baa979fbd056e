"""Interfaces to be mocked and the comments attached to them."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from mockweaver.method import Method
from mockweaver.param import TypeParam

# A single comment exactly as it appears in source, markers included.
Comment = str

_DIRECTIVE = re.compile(r"[a-z0-9]+:[a-z0-9]")
_TRAILING_WS = " \t\n\r"


def _is_directive(text: str) -> bool:
    if text.startswith(("line ", "extern ", "export ")):
        return True
    return _DIRECTIVE.match(text) is not None


def _comment_text(comments: Sequence[Comment]) -> str:
    lines: list[str] = []
    for comment in comments:
        if comment[1:2] == "/":
            body = comment[2:]
            if not body:
                continue
            if body[0] == " ":
                body = body[1:]
            elif _is_directive(body):
                continue
        else:
            body = comment[2:-2]
        lines.extend(line.rstrip(_TRAILING_WS) for line in body.split("\n"))

    kept: list[str] = []
    for line in lines:
        if line or (kept and kept[-1]):
            kept.append(line)
    if kept and kept[-1]:
        kept.append("")
    return "\n".join(kept)


@dataclass
class CommentGroup:
    """A run of comments: each line as written, and the text without markers."""

    lines: list[Comment] = field(default_factory=list)
    text: str = ""

    @classmethod
    def from_comments(cls, comments: Optional[Sequence[Comment]]) -> "CommentGroup":
        """Build a group from raw comments such as ``// doc`` or ``/* doc */``."""
        if comments is None:
            return cls()
        return cls(lines=list(comments), text=_comment_text(comments))


@dataclass
class Comments:
    """Comments around an interface declaration.

    ``gen_decl_doc`` is the doc comment on the ``type`` declaration,
    ``type_spec_doc`` the doc comment on the spec inside a grouped ``type ( ... )``
    declaration, and ``type_spec_comment`` the comment at the end of the spec's line.
    """

    gen_decl_doc: CommentGroup = field(default_factory=CommentGroup)
    type_spec_comment: CommentGroup = field(default_factory=CommentGroup)
    type_spec_doc: CommentGroup = field(default_factory=CommentGroup)


@dataclass
class Interface:
    """The data needed to generate a mock for one interface."""

    name: str = ""
    struct_name: str = ""
    type_params: list[TypeParam] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)
    template_data: dict[str, Any] = field(default_factory=dict)
    comments: Comments = field(default_factory=Comments)

    def _constraint(self) -> str:
        if not self.type_params:
            return ""
        return "[" + ", ".join(f"{param.name} {param.type_string()}" for param in self.type_params) + "]"

    def type_constraint_test(self) -> str:
        """Return the type parameter list with constraints, e.g. ``[T any]``."""
        return self._constraint()

    def type_constraint(self) -> str:
        """Return the type parameter list with constraints, e.g. ``[T any]``."""
        return self._constraint()

    def type_instantiation(self) -> str:
        """Return the type parameter names, e.g. ``[T]``."""
        if not self.type_params:
            return ""
        return "[" + ", ".join(param.name for param in self.type_params) + "]"


class Interfaces(list):
    """The interfaces rendered in one file."""

    def implements_some_method(self) -> bool:
        """Whether any interface has at least one method."""
        return any(interface.methods for interface in self)
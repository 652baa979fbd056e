"""Interfaces found in source packages, and detection of generated files."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Union

from mockweaver.gotypes import SourcePackage
from mockweaver.interface import Comments
from mockweaver.method_scope import ReplaceType
from mockweaver.stackerr import new_stack_err

_AUTO_GENERATED = re.compile(r"// Code generated by .*; DO NOT EDIT\.? *")


@dataclass
class SourceInterface:
    """An interface declared in a source package, with its mock configuration.

    ``replacements`` maps a (package path, type name) pair to the type that
    replaces it in the generated mock.
    """

    name: str
    pkg: SourcePackage
    file_name: str = ""
    struct_name: str = ""
    template_data: dict[str, Any] = field(default_factory=dict)
    replacements: dict[tuple[str, str], ReplaceType] = field(default_factory=dict)
    comments: Comments = field(default_factory=Comments)


def is_auto_generated(path: Union[str, os.PathLike]) -> bool:
    """Whether the file carries a "Code generated ... DO NOT EDIT" line before its package clause."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            for line in handle:
                text = line.rstrip("\n")
                if text.endswith("\r"):
                    text = text[:-1]
                if _AUTO_GENERATED.fullmatch(text):
                    return True
                if text.startswith("package "):
                    break
    except OSError as exc:
        raise new_stack_err(exc) from exc
    return False
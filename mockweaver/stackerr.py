"""Errors that remember the call stack at the point they were created."""

from __future__ import annotations

import traceback


class StackError(Exception):
    """Wraps another exception and records the stack where it was wrapped."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause))
        self.cause = cause
        self.__cause__ = cause
        self.stack = "".join(traceback.format_stack()[:-1])

    def __str__(self) -> str:
        return str(self.cause)


def new_stack_err(cause: BaseException) -> StackError:
    """Return a StackError wrapping ``cause``."""
    return StackError(cause)


def new_stack_errf(cause: BaseException, fmt: str, *args: object) -> StackError:
    """Prefix ``cause`` with a formatted message and wrap it in a StackError."""
    template = fmt.replace("%v", "%s")
    message = template % args if args else template
    wrapped = Exception(f"{message}: {cause}")
    wrapped.__cause__ = cause
    return StackError(wrapped)


def get_stack(err: BaseException | None) -> str | None:
    """Return the recorded stack of the first StackError in the cause chain."""
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, StackError):
            return current.stack
        current = current.__cause__
    return None
"""Helper functions made available to mock templates."""

from __future__ import annotations

import math
import operator
import os
import posixpath
import random
import re
from functools import reduce
from pathlib import Path
from typing import Any, Callable

# Mixed-case spellings of these are flagged by Go linters, e.g. "Id" for "ID".
GOLINT_INITIALISMS = (
    "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML", "HTTP", "HTTPS", "ID", "IP", "JSON", "LHS",
    "QPS", "RAM", "RHS", "RPC", "SLA", "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI", "UID", "UUID", "URI",
    "URL", "UTF8", "VM", "XML", "XMPP", "XSRF", "XSS",
)

_CONNECTORS = re.compile(r"[\s_\-]+")
_ENV_REF = re.compile(r"\$(?:\{([^}]*)\}|([*#$@!?\-0-9])|([A-Za-z_][A-Za-z0-9_]*))")
_REGEX_SPECIALS = set("\\.+*?()|[]{}^$")


def exported(s: str) -> str:
    """Capitalise ``s``, spelling known initialisms in upper case."""
    if not s:
        return ""
    upper = s.upper()
    if upper in GOLINT_INITIALISMS:
        return upper
    return s[0].upper() + s[1:]


def read_file(path: str) -> str:
    """Return the contents of ``path``, or an empty string for an empty path."""
    if not path:
        return ""
    return Path(path).read_text(encoding="utf-8")


def _divide(a: Any, b: Any) -> Any:
    if isinstance(a, int) and isinstance(b, int):
        quotient = abs(a) // abs(b)
        return quotient if (a >= 0) == (b >= 0) else -quotient
    return a / b


def _remainder(a: Any, b: Any) -> Any:
    if isinstance(a, int) and isinstance(b, int):
        return a - b * _divide(a, b)
    return math.fmod(a, b)


def add(first: Any, *args: Any) -> Any:
    """Sum the given numbers."""
    return reduce(operator.add, args, first)


def incr(i: Any) -> Any:
    """Return ``i`` plus one."""
    return i + 1


def decr(i: Any) -> Any:
    """Return ``i`` minus one."""
    return i - 1


def sub(first: Any, *args: Any) -> Any:
    """Subtract each following number from the first."""
    return reduce(operator.sub, args, first)


def div(first: Any, *args: Any) -> Any:
    """Divide cumulatively; integers divide with truncation toward zero."""
    return reduce(_divide, args, first)


def mod(first: Any, *args: Any) -> Any:
    """Cumulative remainder, taking the sign of the dividend."""
    return reduce(_remainder, args, first)


def mul(first: Any, *args: Any) -> Any:
    """Multiply the given numbers."""
    return reduce(operator.mul, args, first)


def maximum(*args: Any) -> Any:
    """Return the largest argument; raises ValueError when given none."""
    return max(args)


def minimum(*args: Any) -> Any:
    """Return the smallest argument; raises ValueError when given none."""
    return min(args)


def first_is_lower(s: str) -> bool:
    """Whether the first character is a lower-case letter."""
    if not s:
        return False
    first = s[0]
    return first.isalpha() and not first.isupper()


def _split_words(s: str) -> list[str]:
    words: list[str] = []
    for chunk in _CONNECTORS.split(s):
        if not chunk:
            continue
        current = ""
        for i, ch in enumerate(chunk):
            if current and ch.isupper():
                prev = chunk[i - 1]
                following = chunk[i + 1] if i + 1 < len(chunk) else ""
                if prev.islower() or prev.isdigit() or (prev.isupper() and following.islower()):
                    words.append(current)
                    current = ""
            current += ch
        words.append(current)
    return words


def camel_case(s: str) -> str:
    """Convert words separated by case changes, spaces, underscores or hyphens to camelCase."""
    words = _split_words(s)
    if not words:
        return ""
    head, *rest = (word.lower() for word in words)
    return head + "".join(word[:1].upper() + word[1:] for word in rest)


def snake_case(s: str) -> str:
    """Convert ``s`` to snake_case."""
    return "_".join(word.lower() for word in _split_words(s))


def kebab_case(s: str) -> str:
    """Convert ``s`` to kebab-case."""
    return "-".join(word.lower() for word in _split_words(s))


def first_lower(s: str) -> str:
    """Lower-case the first character."""
    return s[:1].lower() + s[1:]


def first_upper(s: str) -> str:
    """Upper-case the first character."""
    return s[:1].upper() + s[1:]


def expand_env(s: str) -> str:
    """Replace ``$var`` and ``${var}`` with environment values; unset names become empty."""

    def replace(match: re.Match[str]) -> str:
        name = next((group for group in match.groups() if group is not None), "")
        return os.environ.get(name, "") if name else ""

    return _ENV_REF.sub(replace, s)


def clean_path(path: str) -> str:
    """Return the shortest equivalent slash-separated path."""
    if not path:
        return "."
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _dir(path: str) -> str:
    head, sep, _ = path.rpartition("/")
    return clean_path(head + sep)


def _quote_meta(s: str) -> str:
    return "".join("\\" + ch if ch in _REGEX_SPECIALS else ch for ch in s)


def _match_string(pattern: str, s: str) -> bool:
    return re.search(pattern, s) is not None


def _split(sep: str, s: str) -> list[str]:
    return list(s) if sep == "" else s.split(sep)


def _split_after(s: str, sep: str, n: int = -1) -> list[str]:
    if n == 0:
        return []
    if sep == "":
        chars = list(s)
        if 0 < n < len(chars):
            chars = chars[: n - 1] + ["".join(chars[n - 1 :])]
        return chars
    parts = s.split(sep, n - 1 if n > 0 else -1)
    return [part + sep for part in parts[:-1]] + [parts[-1]]


def _ceil(x: float) -> float:
    return float(math.ceil(x)) if math.isfinite(x) else x


def _floor(x: float) -> float:
    return float(math.floor(x)) if math.isfinite(x) else x


def _round(x: float) -> float:
    if not math.isfinite(x):
        return x
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e21:
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return repr(value)


def format_value(value: Any) -> str:
    """Render a value the way template output prints it."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(format_value(item) for item in value) + "]"
    if isinstance(value, dict):
        items = sorted(value.items(), key=lambda item: str(item[0]))
        return "map[" + " ".join(f"{format_value(k)}:{format_value(v)}" for k, v in items) + "]"
    return str(value)


# Where a function takes a subject string, it comes last so that it can be
# the piped value in a template pipeline.
FUNC_MAP: dict[str, Callable[..., Any]] = {
    "contains": lambda substr, s: substr in s,
    "hasPrefix": lambda prefix, s: s.startswith(prefix),
    "hasSuffix": lambda suffix, s: s.endswith(suffix),
    "join": lambda sep, elems: sep.join(elems),
    "replace": lambda old, new, n, s: s.replace(old, new, n),
    "replaceAll": lambda old, new, s: s.replace(old, new),
    "split": _split,
    "splitAfter": lambda sep, s: _split_after(s, sep),
    "splitAfterN": lambda sep, n, s: _split_after(s, sep, n),
    "trim": lambda cutset, s: s.strip(cutset),
    "trimLeft": lambda cutset, s: s.lstrip(cutset),
    "trimPrefix": lambda prefix, s: s.removeprefix(prefix),
    "trimRight": lambda cutset, s: s.rstrip(cutset),
    "trimSpace": str.strip,
    "trimSuffix": lambda suffix, s: s.removesuffix(suffix),
    "lower": str.lower,
    "upper": str.upper,
    "camelcase": camel_case,
    "snakecase": snake_case,
    "kebabcase": kebab_case,
    "firstIsLower": first_is_lower,
    "firstLower": first_lower,
    "firstUpper": first_upper,
    "exported": exported,
    "matchString": _match_string,
    "quoteMeta": _quote_meta,
    "base": _base,
    "clean": clean_path,
    "dir": _dir,
    "readFile": read_file,
    "expandEnv": expand_env,
    "getenv": lambda name: os.environ.get(name, ""),
    "add": add,
    "decr": decr,
    "div": div,
    "incr": incr,
    "min": minimum,
    "mod": mod,
    "mul": mul,
    "sub": sub,
    "ceil": _ceil,
    "floor": _floor,
    "round": _round,
    "randInt": lambda: random.getrandbits(63),
}
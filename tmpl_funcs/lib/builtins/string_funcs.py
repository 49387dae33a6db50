"""String builtins for templates.

Argument order follows the pipeline convention: the string being operated on
comes last, so `"$5.00" | trimAll "$"` reads naturally.

All slicing is by code point. On ASCII input that is the same as byte
offsets; on multi-byte input results are always whole characters.
"""

import base64
import binascii
import re
from typing import Dict

from tmpl_funcs.lib.runtime.binding import Unsigned, builtin
from tmpl_funcs.lib.runtime.rand import ALPHA, ALPHA_NUMERIC, ASCII, NUMERIC, get_random_source
from tmpl_funcs.lib.values import Kind, Value


# Unicode White_Space. str.isspace() also matches the \x1c-\x1f separators,
# which templates treat as ordinary characters.
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)
_WORD_SPLIT = re.compile(f"[{WHITESPACE}]+")


def _require_canonical(encoded: str, raw: bytes, encode) -> None:
    # The decoders drop non-zero trailing bits; re-encoding exposes them
    if encode(raw) != encoded.encode("utf-8"):
        raise ValueError("unable to decode non-canonical trailing bits")


def _decode_utf8(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"unable to decode: {e}")


# ============================================================================
# ENCODING
# ============================================================================

@builtin
def base64encode(s: str) -> str:
    """Base 64 encode a string."""
    return base64.b64encode(s.encode("utf-8")).decode("ascii")


@builtin
def base64decode(s: str) -> str:
    """
    Base 64 decode a string.

    Example: base64decode("SGVsbG8gV29ybGQh") => "Hello World!"
    """
    try:
        raw = base64.b64decode(s.encode("utf-8"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"unable to decode {e}")
    _require_canonical(s, raw, base64.b64encode)
    return _decode_utf8(raw)


@builtin
def base32encode(s: str) -> str:
    """Base 32 encode a string."""
    return base64.b32encode(s.encode("utf-8")).decode("ascii")


@builtin
def base32decode(s: str) -> str:
    """
    Base 32 decode a string.

    Example: base32decode("JBSWY3DPEBLW64TMMQQQ====") => "Hello World!"
    """
    try:
        raw = base64.b32decode(s.encode("utf-8"))
    except binascii.Error as e:
        raise ValueError(f"unable to decode {e}")
    _require_canonical(s, raw, base64.b32encode)
    return _decode_utf8(raw)


# ============================================================================
# TRUNCATION
# ============================================================================

@builtin
def abbrev(width: int, s: str) -> str:
    """
    Truncate a string with ellipses.

    Widths below 4 leave no room for text plus "...", so the string is
    returned unchanged.

    Example: abbrev(5, "hello world") => "he..."
    """
    if width < 4 or len(s) < width:
        return s
    return s[:width - 3] + "..."


@builtin
def abbrevboth(left: int, right: int, s: str) -> str:
    """
    Abbreviate from both sides.

    `left` is the offset the visible window starts at, `right` the maximum
    width of the result including ellipses.

    Example: abbrevboth(5, 7, "foobarfoobar") => "...r..."
    """
    offset = min(max(left, 0), len(s))
    max_width = min(right, len(s))

    if max_width < 4 or (offset > 0 and max_width < 7) or len(s) <= max_width:
        return s
    if offset <= 4:
        return s[:max_width - 3] + "..."
    if offset + max_width - 3 < len(s):
        end = offset + max_width - 6
        return "..." + s[offset:end] + "..."
    return "..." + s[len(s) - (max_width - 3):]


@builtin
def trunc(length: int, s: str) -> str:
    """
    Truncate a string (no suffix).

    Example: trunc(5, "Hello World") => "Hello"
    """
    if length < 0 or length > len(s):
        return s
    return s[:length]


@builtin
def substring(start: int, end: int, s: str) -> str:
    """
    Slice `s` from `start` up to the offset `end`.

    `end` is an absolute offset, not a length. A negative `end` means the end
    of the string. Out-of-range bounds return `s` unchanged.

    Example: substr(1, 5, "foobar") => "ooba"
    """
    start = max(start, 0)
    if end < 0:
        end = len(s)
    if start > end or start > len(s) or end > len(s):
        return s
    return s[start:end]


# ============================================================================
# CASE AND WORDS
# ============================================================================

@builtin
def initials(s: str) -> str:
    """
    Given a multi-word string, return the initials.

    Example: initials("Matt Butcher") => "MB"
    """
    return "".join(word[0] for word in _WORD_SPLIT.split(s) if word)


@builtin
def untitle(s: str) -> str:
    """
    Remove title casing: lower-case the first character of every word.

    Example: untitle("FOO BAR") => "fOO bAR"
    """
    out = []
    at_word_start = True
    for c in s:
        if c in WHITESPACE:
            at_word_start = True
            out.append(c)
        elif at_word_start:
            at_word_start = False
            out.append(c.lower())
        else:
            out.append(c)
    return "".join(out)


@builtin
def plural(one: str, many: str, count: int) -> str:
    """Example: plural("mouse", "mice", 10) => "mice" """
    return one if count == 1 else many


# ============================================================================
# RANDOM
# ============================================================================

@builtin
def rand_alpha_numeric(count: Unsigned) -> str:
    """Given a length, generate a random alphanumeric sequence."""
    return get_random_source().choose(ALPHA_NUMERIC, count)


@builtin
def rand_alpha(count: Unsigned) -> str:
    """Given a length, generate an alphabetic string."""
    return get_random_source().choose(ALPHA, count)


@builtin
def rand_ascii(count: Unsigned) -> str:
    """Given a length, generate a random ASCII string (symbols included)."""
    return get_random_source().choose(ASCII, count)


@builtin
def rand_numeric(count: Unsigned) -> str:
    """Given a length, generate a string of digits."""
    return get_random_source().choose(NUMERIC, count)


# ============================================================================
# SEARCH, REPLACE, SPLIT, JOIN
# ============================================================================

@builtin
def replace(old: str, new: str, s: str) -> str:
    return s.replace(old, new)


@builtin
def join(sep: str, items: Value) -> str:
    """
    Join the elements of an array with `sep`.

    Elements are rendered the way templates print them, so numbers and
    booleans can be joined too.

    Example: join("_", ["hello", "world"]) => "hello_world"
    """
    if items.kind is not Kind.ARRAY:
        raise ValueError("second argument must be of type Array")
    return sep.join(str(v) for v in items.data)


@builtin
def split(sep: str, s: str) -> Dict[str, str]:
    """
    Split `s` on `sep`. The pieces are returned as a map keyed _0, _1, ...

    Use it like this: `{{$v := "foo/bar/baz" | split "/"}}{{$v._0}}` (prints `foo`)
    """
    if sep:
        parts = s.split(sep)
    else:
        # An empty separator matches at every character boundary
        parts = ["", *s, ""]
    return {f"_{i}": part for i, part in enumerate(parts)}


@builtin
def contains(substr: str, s: str) -> bool:
    return substr in s


@builtin
def has_suffix(suffix: str, s: str) -> bool:
    return s.endswith(suffix)


@builtin
def has_prefix(prefix: str, s: str) -> bool:
    return s.startswith(prefix)


# ============================================================================
# TRIMMING
# ============================================================================

@builtin
def trim(s: str) -> str:
    """Remove leading and trailing whitespace."""
    return s.strip(WHITESPACE)


@builtin
def trim_all(chars: str, s: str) -> str:
    """
    Remove any of `chars` from both ends of `s`.

    Example: trimAll("$", "$5.00") => "5.00"
    """
    # str.strip(None) would strip whitespace instead of nothing
    if not chars:
        return s
    return s.strip(chars)


@builtin
def trim_suffix(suffix: str, s: str) -> str:
    """Example: trimSuffix("-", "ends-with-") => "ends-with" """
    if suffix and s.endswith(suffix):
        return s[:-len(suffix)]
    return s


@builtin
def trim_prefix(prefix: str, s: str) -> str:
    """Example: trimPrefix("$", "$5") => "5" """
    if prefix and s.startswith(prefix):
        return s[len(prefix):]
    return s


STRING_FUNCS = {
    "base64encode": (base64encode,       (1, 1)),
    "base64decode": (base64decode,       (1, 1)),
    "base32encode": (base32encode,       (1, 1)),
    "base32decode": (base32decode,       (1, 1)),
    "abbrev":       (abbrev,             (2, 2)),
    "abbrevboth":   (abbrevboth,         (3, 3)),
    "trunc":        (trunc,              (2, 2)),
    "substr":       (substring,          (3, 3)),
    "initials":     (initials,           (1, 1)),
    "untitle":      (untitle,            (1, 1)),
    "plural":       (plural,             (3, 3)),
    "randAlphaNum": (rand_alpha_numeric, (1, 1)),
    "randAlpha":    (rand_alpha,         (1, 1)),
    "randAscii":    (rand_ascii,         (1, 1)),
    "randNumeric":  (rand_numeric,       (1, 1)),
    "replace":      (replace,            (3, 3)),
    "join":         (join,               (2, 2)),
    "split":        (split,              (2, 2)),
    "contains":     (contains,           (2, 2)),
    "hasSuffix":    (has_suffix,         (2, 2)),
    "hasPrefix":    (has_prefix,         (2, 2)),
    "trim":         (trim,               (1, 1)),
    "trimAll":      (trim_all,           (2, 2)),
    "trimSuffix":   (trim_suffix,        (2, 2)),
    "trimPrefix":   (trim_prefix,        (2, 2)),
}

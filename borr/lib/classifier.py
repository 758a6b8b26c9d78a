r"""
Line classification for borr documents.

Decides, for one line and without any parsing state, whether it is empty or a
comment, a section header, a translation entry, or something the grammar does
not recognize, and extracts the relevant substrings.

Grammar:
    # comment
    [section_name]                  # trailing comments are allowed
    field = "value"
    multiline_field[] = "one line of the value"

Identifiers (sections and fields) start with a letter or underscore and
continue with letters, digits or underscores. Values may contain any character
except an unescaped double quote; `\"` is kept verbatim.

Example:
    line_translationMatch('greeting[] = "Hello"')
    -> Translation(field="greeting[]", value="Hello")
"""

import re
from typing import Final

from borr.models.dataModel import LineKind, Translation

IDENTIFIER: Final[str] = r"[A-Za-z_][A-Za-z0-9_]*"
MULTILINE_MARKER: Final[str] = "[]"
COMMENT_CHAR: Final[str] = "#"

_section_re: Final[re.Pattern[str]] = re.compile(rf"\[({IDENTIFIER})\]")
_translation_re: Final[re.Pattern[str]] = re.compile(
    rf'({IDENTIFIER}(?: ?\[\])?)\s*=\s*"((?:[^"\\]|\\.)*)"'
)
_multiline_re: Final[re.Pattern[str]] = re.compile(r" ?\[\]$")


def line_isEmptyOrComment(line: str) -> bool:
    """Check whether a line carries no data at all.

    A line such as `[section] # comment` is not a comment line; only lines
    whose first non-whitespace character is `#` are.

    Args:
        line: Raw line

    Returns:
        True if the trimmed line is empty or starts with `#`
    """
    trimmed: str = line.strip()
    return not trimmed or trimmed.startswith(COMMENT_CHAR)


def line_sectionMatch(line: str) -> str | None:
    """Match a section header.

    Args:
        line: Line with inline comments already removed

    Returns:
        The section name without brackets, or None if the line is not a header
    """
    match: re.Match[str] | None = _section_re.fullmatch(line.strip())
    return match.group(1) if match else None


def line_translationMatch(line: str) -> Translation | None:
    """Match a `field = "value"` entry.

    Args:
        line: Line with inline comments already removed

    Returns:
        Translation with the raw field name (marker included) and the unquoted
        value, both trimmed; None for any line outside the grammar
    """
    match: re.Match[str] | None = _translation_re.fullmatch(line.strip())
    if not match:
        return None
    return Translation(field=match.group(1).strip(), value=match.group(2).strip())


def field_isMultiline(fieldName: str) -> bool:
    """Check for the trailing `[]` marker, one preceding space tolerated."""
    return _multiline_re.search(fieldName) is not None


def field_keyGet(fieldName: str) -> str:
    """Return the key a field is stored under: its name without the marker."""
    return _multiline_re.sub("", fieldName)


def line_commentsStrip(line: str) -> str:
    """Remove a trailing comment that is not part of a quoted value.

    Scans the line once, tracking whether the cursor is inside a double-quoted
    string. The first `#` found outside quotes starts the comment.

    Args:
        line: Raw line

    Returns:
        The line up to the comment, trimmed

    Example:
        'translation = "a#b" # trailing' -> 'translation = "a#b"'
    """
    inQuotes: bool = False
    escaped: bool = False

    for i, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == "\\" and inQuotes:
            escaped = True
        elif char == '"':
            inQuotes = not inQuotes
        elif char == COMMENT_CHAR and not inQuotes:
            return line[:i].strip()

    return line.strip()


def line_classify(line: str) -> LineKind:
    """Classify a raw line without extracting anything."""
    if line_isEmptyOrComment(line):
        return LineKind.EMPTY

    stripped: str = line_commentsStrip(line)
    if line_sectionMatch(stripped) is not None:
        return LineKind.SECTION
    if line_translationMatch(stripped) is not None:
        return LineKind.TRANSLATION
    return LineKind.UNRECOGNIZED

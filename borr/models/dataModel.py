"""
dataModel.py

This module defines the data models and schemas used throughout borr.
Pydantic is used where validation matters; the small immutable value types
returned by the classifier are plain named tuples.

Features:
- Enum for line classification.
- Named tuples for language versions and classified translations.
- Strict-mode parse warnings.

Usage:
Import these models to validate and structure data used in the library.
"""

from pydantic import BaseModel, Field
from typing import NamedTuple, Self
from enum import Enum
import re

from borr.lib.errors import MalformedVersion

_version_re: re.Pattern[str] = re.compile(r"^([0-9]+)\.([0-9]+)\.([0-9]+)$")


class LineKind(Enum):
    """
    Enum for the kind of a single document line.
    """

    EMPTY = 1
    SECTION = 2
    TRANSLATION = 3
    UNRECOGNIZED = 4


class LangVersion(NamedTuple):
    """Version of a language file.

    Attributes:
        major: Major version component
        minor: Minor version component
        revision: Revision component

    Example:
        * The field `lang_ver = "1.0.2"` yields
          LangVersion(major=1, minor=0, revision=2), printed as "v1.0.2"
    """

    major: int
    minor: int
    revision: int

    @classmethod
    def fromString(cls, value: str) -> Self:
        """Parse a strict `major.minor.revision` token.

        Args:
            value: The raw version string

        Returns:
            LangVersion with the three components

        Raises:
            MalformedVersion: If the value is not exactly three dot-separated
                non-negative integers
        """
        match: re.Match[str] | None = _version_re.match(value.strip())
        if not match:
            raise MalformedVersion(value)
        return cls(*(int(part) for part in match.groups()))

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.revision}"


class Translation(NamedTuple):
    """A classified translation line.

    Attributes:
        field: Raw field name, including any trailing `[]` marker
        value: Unquoted value
    """

    field: str
    value: str


class ParseWarning(BaseModel):
    """A line ignored by the permissive grammar, reported in strict mode.

    Attributes:
        lineNumber: 1-based line number in the source text
        line: The offending line, as written
        reason: Why the line produced no data
    """

    lineNumber: int = Field(..., ge=1, description="1-based line number.")
    line: str = Field(..., description="The line as written in the document.")
    reason: str = Field(..., description="Why the line was ignored.")

    def __str__(self) -> str:
        return f"line {self.lineNumber}: {self.reason}: {self.line.strip()}"

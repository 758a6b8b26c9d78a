"""
Error types raised by borr.

Only two conditions are errors: a malformed `lang_ver` field, which aborts the
whole parse, and a variable expansion that never settles, which aborts the
single lookup. Malformed lines and unknown names are not errors.
"""


class BorrError(Exception):
    """Base class for all borr errors."""

    pass


class MalformedVersion(BorrError, ValueError):
    """Raised when `lang_ver` is not three dot-separated non-negative integers."""

    def __init__(self, value: str) -> None:
        self.value: str = value
        super().__init__(
            f"Malformed language version '{value}': expected 'major.minor.revision'"
        )


class CyclicExpansion(BorrError, RuntimeError):
    """Raised when expanding a value does not terminate within its bounds."""

    def __init__(self, variable: str, rounds: int) -> None:
        self.variable: str = variable
        self.rounds: int = rounds
        super().__init__(
            f"Cyclic expansion of variable '{variable}' after {rounds} rounds"
        )

r"""
Variable expansion engine for borr.

Resolves `${name}` placeholders in stored translation values using a chain
of resolvers. The first resolver that recognizes a name supplies its
replacement; names nobody recognizes expand to an empty string.

The engine:
- Finds the first placeholder, replaces it, then rescans the whole string
- Lets replacement text introduce new placeholders (nested expansion)
- Bounds the rounds that introduce new placeholders, raising CyclicExpansion
  when the bound is exceeded

Example:
    expander = VariableExpander(resolvers=[RegistryResolver(registry)])
    expander.expand("Served by ${site}")
"""

import re
from typing import Final, Protocol, Self, Sequence, runtime_checkable

from borr.config.settings import appsettings
from borr.lib.errors import CyclicExpansion
from borr.lib.log import LOG

_variable_re: Final[re.Pattern[str]] = re.compile(
    r"\$\{([A-Za-z_][A-Za-z0-9_]*(?::[A-Za-z_][A-Za-z0-9_]*)?)\}"
)


@runtime_checkable
class VariableResolver(Protocol):
    """Protocol defining the resolver interface for variable expansion.

    Resolvers return the replacement text for names they handle and None for
    names they do not, so the next resolver in the chain gets its turn.
    """

    def resolve(self: Self, name: str) -> str | None:
        """Resolve a variable name to its replacement.

        Args:
            name: Variable name without `${` and `}`

        Returns:
            Replacement text, or None if this resolver does not handle the name
        """
        ...


def variable_find(value: str) -> str | None:
    """Return the name of the first `${...}` placeholder in value, if any."""
    match: re.Match[str] | None = _variable_re.search(value)
    return match.group(1) if match else None


class VariableExpander:
    """Fixed-point placeholder substitution over a resolver chain.

    Attributes:
        resolvers: Resolvers consulted in order for every variable
        max_rounds: Maximum number of substitutions whose replacement itself
            contains a placeholder
    """

    def __init__(
        self: Self,
        resolvers: Sequence[VariableResolver],
        max_rounds: int | None = None,
    ) -> None:
        """Initialize the expander.

        Args:
            resolvers: Resolver chain, highest precedence first
            max_rounds: Bound on nested rounds, defaults to
                `appsettings.expansion_maxRounds`

        Raises:
            ValueError: If max_rounds is smaller than 1
        """
        if max_rounds is None:
            max_rounds = appsettings.expansion_maxRounds
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")

        self.resolvers: list[VariableResolver] = list(resolvers)
        self.max_rounds: int = max_rounds

    def variable_resolve(self: Self, name: str) -> str:
        """Resolve one variable through the chain; unknown names give ""."""
        for resolver in self.resolvers:
            value: str | None = resolver.resolve(name)
            if value is not None:
                return value
        return ""

    def expand(self: Self, value: str) -> str:
        """Replace every placeholder in value until none remains.

        Each round substitutes only the first placeholder and rescans. A
        replacement without placeholders always reduces their number, so only
        rounds that bring new placeholders in count towards `max_rounds`.

        Args:
            value: Raw stored value

        Returns:
            Fully literal string

        Raises:
            CyclicExpansion: If more than `max_rounds` rounds introduce new
                placeholders
        """
        rounds: int = 0

        while match := _variable_re.search(value):
            name: str = match.group(1)
            replacement: str = self.variable_resolve(name)

            if variable_find(replacement) is not None:
                rounds += 1
                if rounds > self.max_rounds:
                    LOG(f"Expansion of '{name}' did not settle after {self.max_rounds} rounds")
                    raise CyclicExpansion(name, rounds)

            value = value[: match.start()] + replacement + value[match.end() :]

        return value

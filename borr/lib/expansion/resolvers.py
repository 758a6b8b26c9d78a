"""
Variable resolvers for borr.

Implements the resolution layers, in the order a document chains them:
- Registry: custom expanders registered by the host application
- Defaults: built-in expanders (date, time, lib, os, liburl)
- References: `${section:field}` and same-section `${field}` lookups into the
  document being expanded, with recursion handling
"""

from typing import Protocol, Self, Set

from borr.config.settings import appsettings
from borr.lib.errors import CyclicExpansion
from borr.lib.expansion.base import VariableExpander
from borr.lib.log import LOG
from borr.lib.registry import ExpanderRegistry, Expander


class FieldSource(Protocol):
    """Anything cross-references can be looked up in."""

    def field_get(self, section: str, field: str, expand: bool = True) -> str | None:
        ...


class RegistryResolver:
    """Resolver for custom expanders of an ExpanderRegistry."""

    def __init__(self: Self, registry: ExpanderRegistry) -> None:
        self.registry: ExpanderRegistry = registry

    def resolve(self: Self, name: str) -> str | None:
        """Call the custom expander for name; its result is used verbatim."""
        expander: Expander | None = self.registry.expander_get(name)
        return expander(name) if expander else None


class DefaultResolver:
    """Resolver for the built-in expanders of an ExpanderRegistry."""

    def __init__(self: Self, registry: ExpanderRegistry) -> None:
        self.registry: ExpanderRegistry = registry

    def resolve(self: Self, name: str) -> str | None:
        """Evaluate the built-in expander for name, fresh on every call."""
        expander: Expander | None = self.registry.default_get(name)
        return expander(name) if expander else None


class CrossReferenceResolver:
    """Resolver for field references into a document.

    Two forms are handled:
    - `${section:field}` refers to a field of any section
    - `${field}` refers to a field of the section currently being expanded,
      checked last so custom and built-in expanders take precedence

    The referenced field is itself fully expanded before it is returned.
    Re-entering a field that is still being expanded, or nesting deeper than
    max_depth, raises CyclicExpansion.

    Attributes:
        source: Document the references point into
        expander: Engine used to expand referenced values; when unset the raw
            value is returned
        max_depth: Maximum number of nested references
        section_stack: Sections of the fields being expanded, innermost last
    """

    def __init__(
        self: Self,
        source: FieldSource,
        expander: VariableExpander | None = None,
        max_depth: int | None = None,
        origin: tuple[str, str] | None = None,
    ) -> None:
        """Initialize resolver with recursion limit.

        Args:
            source: Document the references point into
            expander: Engine used to expand referenced values
            max_depth: Nesting bound, defaults to `appsettings.expansion_maxDepth`
            origin: (section, field) of the top-level lookup, if any
        """
        self.source: FieldSource = source
        self.expander: VariableExpander | None = expander
        self.max_depth: int = (
            max_depth if max_depth is not None else appsettings.expansion_maxDepth
        )
        self.current_depth: int = 0
        self.seen_vars: Set[str] = set()
        self.section_stack: list[str] = []

        if origin is not None:
            self.section_stack.append(origin[0])
            self.seen_vars.add(":".join(origin))

    def _reference_split(self: Self, name: str) -> tuple[str, str] | None:
        """Turn a variable name into (section, field), None if not a reference."""
        colons: int = name.count(":")
        if colons == 1:
            section, field = name.split(":")
            return section, field
        if colons == 0 and self.section_stack:
            return self.section_stack[-1], name
        return None

    def resolve(self: Self, name: str) -> str | None:
        """Resolve a field reference.

        Args:
            name: Variable name

        Returns:
            The referenced field's expanded value; "" for a missing
            `section:field`; None for a missing same-section field or a name
            that is not a reference

        Raises:
            CyclicExpansion: On a circular reference or excessive nesting
        """
        reference: tuple[str, str] | None = self._reference_split(name)
        if reference is None:
            return None

        section, field = reference
        value: str | None = self.source.field_get(section, field, expand=False)
        if value is None:
            return "" if ":" in name else None

        key: str = f"{section}:{field}"
        if self.current_depth >= self.max_depth or key in self.seen_vars:
            LOG(f"Max depth exceeded or circular reference: {key}")
            raise CyclicExpansion(name, self.current_depth)

        if self.expander is None:
            return value

        try:
            self.seen_vars.add(key)
            self.section_stack.append(section)
            self.current_depth += 1
            return self.expander.expand(value)
        finally:
            self.current_depth -= 1
            self.section_stack.pop()
            self.seen_vars.remove(key)

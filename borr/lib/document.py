"""
Translation document model for borr.

A TranslationDocument is the result of parsing one language file: root
metadata plus a dictionary of sections, each mapping field names to raw
values. Documents are read-only; DocumentBuilder is the only code that
populates them.

Lookups:
- section_get(): raw copy of a section, variables are NOT expanded
- field_get(): one value, variables expanded unless expand=False
"""

from types import MappingProxyType
from typing import Mapping, Self

from borr.lib.expansion import (
    CrossReferenceResolver,
    DefaultResolver,
    RegistryResolver,
    VariableExpander,
)
from borr.lib.registry import ExpanderRegistry, registry as default_registry
from borr.models.dataModel import LangVersion, ParseWarning


class TranslationDocument:
    """Parsed language file.

    Attributes:
        langId: Language identifier (e.g. "en_GB"), "" if not declared
        langDescription: Human readable description, "" if not declared
        langVersion: Declared version, None if not declared
        registry: Expander registry consulted during expansion
        warnings: Lines ignored while parsing, only collected in strict mode
    """

    def __init__(
        self: Self,
        langId: str = "",
        langDescription: str = "",
        langVersion: LangVersion | None = None,
        sections: dict[str, dict[str, str]] | None = None,
        registry: ExpanderRegistry | None = None,
        warnings: list[ParseWarning] | None = None,
    ) -> None:
        self.langId: str = langId
        self.langDescription: str = langDescription
        self.langVersion: LangVersion | None = langVersion
        self.registry: ExpanderRegistry = (
            registry if registry is not None else default_registry
        )
        self.warnings: list[ParseWarning] = list(warnings or [])
        self._sections: dict[str, dict[str, str]] = {
            name: dict(fields) for name, fields in (sections or {}).items()
        }

    @property
    def sections(self: Self) -> Mapping[str, Mapping[str, str]]:
        """Read-only view of all sections, in declaration order."""
        return MappingProxyType(
            {name: MappingProxyType(fields) for name, fields in self._sections.items()}
        )

    def section_get(self: Self, name: str) -> dict[str, str] | None:
        """Get a complete section. Variables are not expanded.

        Args:
            name: Section name

        Returns:
            A copy of the section's fields, or None if there is no such section
        """
        fields: dict[str, str] | None = self._sections.get(name)
        return dict(fields) if fields is not None else None

    def field_get(
        self: Self, section: str, field: str, expand: bool = True
    ) -> str | None:
        """Get a single translation.

        Args:
            section: Section name
            field: Field name, without any multi-line marker
            expand: Whether to expand `${...}` variables

        Returns:
            The (expanded) value, or None if the section or field is missing

        Raises:
            CyclicExpansion: If expansion does not terminate; the stored value
                is left untouched
        """
        fields: dict[str, str] | None = self._sections.get(section)
        if fields is None or field not in fields:
            return None

        value: str = fields[field]
        if not expand:
            return value
        return self.expander_build(origin=(section, field)).expand(value)

    def expander_build(
        self: Self, origin: tuple[str, str] | None = None
    ) -> VariableExpander:
        """Build a fresh expansion engine over this document.

        The resolver chain is: custom registry, built-in expanders, then
        field references into this document. A new engine is built per lookup
        so concurrent lookups share no state.

        Args:
            origin: (section, field) being looked up; gives unqualified
                variables their section and marks the field as in progress
        """
        crossref: CrossReferenceResolver = CrossReferenceResolver(self, origin=origin)
        expander: VariableExpander = VariableExpander(
            resolvers=[
                RegistryResolver(self.registry),
                DefaultResolver(self.registry),
                crossref,
            ]
        )
        crossref.expander = expander
        return expander

    def __repr__(self: Self) -> str:
        return (
            f"TranslationDocument(langId={self.langId!r}, "
            f"langVersion={self.langVersion}, sections={list(self._sections)})"
        )

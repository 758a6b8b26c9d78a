"""
Expansion package for borr variable substitution.

Provides the `${name}` substitution engine and the resolvers it chains.
"""

from .base import VariableExpander, VariableResolver, variable_find
from .resolvers import CrossReferenceResolver, DefaultResolver, RegistryResolver

__all__ = [
    "VariableExpander",
    "VariableResolver",
    "variable_find",
    "CrossReferenceResolver",
    "DefaultResolver",
    "RegistryResolver",
]

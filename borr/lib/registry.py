"""
Expander registry for borr.

An expander maps a variable name to its literal replacement text. The registry
has two layers:

- a custom layer, mutable, filled by the host application;
- the built-in layer (`DEFAULT_EXPANDERS`), immutable, checked after it.

Adding a custom entry for a built-in name shadows the built-in until the custom
entry is removed again; the built-in itself is never touched.

Features:
- Thread-safe add/remove/lookup through a re-entrant lock
- A process-wide default instance (`registry`) shared by every document that
  does not receive its own
- Fresh evaluation of built-ins on every call (nothing is cached)

Usage:
    from borr.lib.registry import registry
    registry.expander_add("site", lambda name: "example.com")
"""

import platform
import threading
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Final, Mapping

from borr.config.settings import __version__, appsettings, LIB_DESCRIPTION, LIB_URL
from borr.lib.log import LOG

Expander = Callable[[str], str]


def _date_expand(name: str) -> str:
    return datetime.now().strftime(appsettings.date_format)


def _time_expand(name: str) -> str:
    return datetime.now().strftime(appsettings.time_format)


def _lib_expand(name: str) -> str:
    return f"{LIB_DESCRIPTION} v{__version__}"


def _os_expand(name: str) -> str:
    return platform.system()


def _liburl_expand(name: str) -> str:
    return LIB_URL


DEFAULT_EXPANDERS: Final[Mapping[str, Expander]] = MappingProxyType(
    {
        "date": _date_expand,
        "time": _time_expand,
        "lib": _lib_expand,
        "os": _os_expand,
        "liburl": _liburl_expand,
    }
)


class ExpanderRegistry:
    """Table of custom expanders, layered over the built-in defaults.

    Attributes:
        defaults: Immutable built-in layer consulted after custom entries
    """

    def __init__(self, defaults: Mapping[str, Expander] = DEFAULT_EXPANDERS) -> None:
        self.defaults: Mapping[str, Expander] = defaults
        self._custom: dict[str, Expander] = {}
        self._lock: threading.RLock = threading.RLock()

    def expander_add(self, name: str, expander: Expander) -> bool:
        """Register a custom expander.

        The first registration for a name wins: an existing custom entry is
        never overwritten, callers must remove it before adding again.

        Args:
            name: Variable name, as written between `${` and `}`
            expander: Callable receiving the variable name

        Returns:
            bool: True if the expander was inserted
        """
        with self._lock:
            if name in self._custom:
                LOG(f"Expander '{name}' already registered, not replacing it")
                return False
            self._custom[name] = expander
        LOG(f"Registered expander '{name}'")
        return True

    def expander_remove(self, name: str) -> None:
        """Remove a custom expander; unknown names are ignored."""
        with self._lock:
            if self._custom.pop(name, None) is not None:
                LOG(f"Removed expander '{name}'")

    def expander_get(self, name: str) -> Expander | None:
        """Look up a custom expander only."""
        with self._lock:
            return self._custom.get(name)

    def default_get(self, name: str) -> Expander | None:
        """Look up a built-in expander only."""
        return self.defaults.get(name)

    def clear(self) -> None:
        """Drop every custom expander. Built-ins are unaffected."""
        with self._lock:
            self._custom.clear()

    @property
    def names(self) -> list[str]:
        """Names of all custom expanders, in registration order."""
        with self._lock:
            return list(self._custom)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._custom

    def __len__(self) -> int:
        with self._lock:
            return len(self._custom)


# Process-wide registry used when a document is not given its own
registry: Final[ExpanderRegistry] = ExpanderRegistry()


def expander_add(name: str, expander: Expander) -> bool:
    """Register a custom expander on the process-wide registry."""
    return registry.expander_add(name, expander)


def expander_remove(name: str) -> None:
    """Remove a custom expander from the process-wide registry."""
    registry.expander_remove(name)

"""Component registry and parse hooks.

Parsing turns component names back into components through ParseHooks:
plain callables ``name -> component`` supplied by the caller. A
ComponentRegistry is the usual source of such callables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from sortedcontainers import SortedDict

from ..core.errors import UnknownComponentError
from ..interfaces.components import Named

logger = logging.getLogger(__name__)

Hook = Callable[[str], Any]


class ComponentRegistry:
    """Name-keyed collection of pluggable components of one kind.

    Args:
        kind: Component kind, used in error messages (e.g. "comparer")
        components: Optional initial components

    Invariants:
        - Names are unique; registering a taken name raises ValueError
        - names() is always in sorted order
    """

    def __init__(self, kind: str, components: Iterable[Any] = ()):
        self.kind = kind
        self._components: SortedDict = SortedDict()
        for component in components:
            self.register(component)

    def register(self, component: Any) -> None:
        """Register component under its ``name``."""
        if not isinstance(component, Named):
            raise TypeError(f"{self.kind} must have a name: {component!r}")
        name = component.name
        if not name:
            raise ValueError(f"{self.kind} must have a non-empty name")
        if name in self._components:
            raise ValueError(f"{self.kind} {name!r} already registered")
        self._components[name] = component
        logger.debug(f"Registered {self.kind} {name!r}")

    def resolve(self, name: str) -> Any:
        """Return the component registered under name."""
        try:
            return self._components[name]
        except KeyError:
            raise UnknownComponentError(f"unknown {self.kind}: {name!r}") from None

    def names(self) -> list[str]:
        return list(self._components.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __len__(self) -> int:
        return len(self._components)


@dataclass
class ParseHooks:
    """Name resolution callables used while parsing options text.

    Each hook receives a component name and returns the component, raising
    if the name is unknown. A missing hook leaves the parsed reference
    unresolved (name only).
    """

    new_cleaner: Hook | None = None
    new_comparer: Hook | None = None
    new_merger: Hook | None = None
    new_filter_policy: Hook | None = None
    new_table_property_collector: Hook | None = None

    @classmethod
    def from_registries(
        cls,
        cleaners: ComponentRegistry | None = None,
        comparers: ComponentRegistry | None = None,
        mergers: ComponentRegistry | None = None,
        filter_policies: ComponentRegistry | None = None,
        table_property_collectors: ComponentRegistry | None = None,
    ) -> ParseHooks:
        """Build hooks that resolve names through the given registries."""

        def hook(registry: ComponentRegistry | None) -> Hook | None:
            return registry.resolve if registry is not None else None

        return cls(
            new_cleaner=hook(cleaners),
            new_comparer=hook(comparers),
            new_merger=hook(mergers),
            new_filter_policy=hook(filter_policies),
            new_table_property_collector=hook(table_property_collectors),
        )

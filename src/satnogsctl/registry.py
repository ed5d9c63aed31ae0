"""Named lookup of pluggable implementations.

Authenticators, progress reporters and storage layouts are picked by name from
the command line or the configuration file, each family keeps its own
registry:

    >>> from satnogsctl.registry import Registry
    >>> from satnogsctl.storage import Layout, NoradLayout
    >>>
    >>> layouts = Registry[Layout]("layout")
    >>> layouts.register("norad", NoradLayout)
    >>> layout = layouts.create("norad")
"""

from typing import Generic, TypeVar

from satnogsctl.errors import ConfigurationError

T = TypeVar("T")


class Registry(Generic[T]):
    """Maps configuration names to implementation classes."""

    def __init__(self, name: str):
        self.registry_name = name
        self._items: dict[str, type[T]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def get(self, name: str) -> type[T] | None:
        return self._items.get(name)

    def register(self, name: str, item_class: type[T]) -> None:
        self._items[name] = item_class

    def create(self, name: str, **kwargs) -> T:
        item_class = self._items.get(name)
        if item_class is None:
            raise ConfigurationError(
                f"{self.registry_name.capitalize()} '{name}' not found, expected one of: {', '.join(self.list())}"
            )
        return item_class(**kwargs)

    def list(self) -> list[str]:
        return list(self._items)

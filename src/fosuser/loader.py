"""
Service resources: modules of decorated service and parameter entries.

A resource is a module under a resource package. Only module attributes
explicitly created with :func:`service`, :func:`parameter` or :func:`alias`
are registered; helper functions and imports are ignored.

## Example

```python
from fosuser.container import Definition, Reference
from fosuser.loader import parameter, service

@parameter("fos_user.resetting.token_ttl")
def token_ttl() -> int:
    return 86400

@service("fos_user.listener.resetting")
def resetting_listener() -> Definition:
    return Definition(
        class_name="fos_user.event_listener.ResettingListener",
        arguments=[Reference("router"), "%fos_user.resetting.token_ttl%"],
    )
```

Loading the module with ``ResourceLoader(container=...).load("resetting")``
registers ``fos_user.listener.resetting`` and the parameter in the container.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import pkgutil
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Final, Generic, TypeVar, final

from typing_extensions import override

from fosuser.container import Alias, ContainerBuilder, Definition

_logger: Final[logging.Logger] = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceNotFoundError(LookupError):
    def __init__(self, name: str, package: str) -> None:
        super().__init__(f"Resource {name!r} does not exist in package {package!r}.")
        self.name = name
        self.package = package


class Entry(ABC):
    """An item of a resource module that knows how to register itself."""

    @abstractmethod
    def register(self, container: ContainerBuilder, /) -> None: ...


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class ServiceEntry(Entry):
    service_id: str
    function: Callable[[], Definition]

    @override
    def register(self, container: ContainerBuilder, /) -> None:
        container.set_definition(self.service_id, self.function())


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class ParameterEntry(Entry):
    name: str
    function: Callable[[], Any]

    @override
    def register(self, container: ContainerBuilder, /) -> None:
        container.set_parameter(self.name, self.function())


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class AliasEntry(Entry):
    alias: str
    target: Alias

    @override
    def register(self, container: ContainerBuilder, /) -> None:
        container.set_alias(self.alias, self.target)


def service(service_id: str) -> Callable[[Callable[[], Definition]], Entry]:
    """
    A decorator that turns a function returning a :class:`Definition` into a service entry.

    The function is called once per load, so every container gets its own
    mutable definition.
    """

    def decorator(function: Callable[[], Definition]) -> Entry:
        return ServiceEntry(service_id=service_id, function=function)

    return decorator


def parameter(name: str) -> Callable[[Callable[[], Any]], Entry]:
    """A decorator that turns a function into a parameter entry."""

    def decorator(function: Callable[[], Any]) -> Entry:
        return ParameterEntry(name=name, function=function)

    return decorator


def alias(alias: str, target: str, *, public: bool = False) -> Entry:
    return AliasEntry(alias=alias, target=Alias(target=target, public=public))


@dataclass(frozen=True, kw_only=True)
class ObjectMapping(Mapping[str, Entry], Generic[T]):
    """
    A lazy mapping of the entries found in an object's attributes.
    Implements call-by-name semantics using dir() and getattr().
    """

    underlying: T

    def __getitem__(self, key: str) -> Entry:
        try:
            val = getattr(self.underlying, key)
        except AttributeError as e:
            raise KeyError(key) from e

        if isinstance(val, Entry):
            return val
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        for name in dir(self.underlying):
            try:
                val = getattr(self.underlying, name)
            except AttributeError:
                continue
            if isinstance(val, Entry):
                yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)


def parse_module(module: ModuleType) -> Mapping[str, Entry]:
    """
    Parses a resource module into its entries.

    Only module-level attributes explicitly created with @service, @parameter or alias() are included.
    """
    return ObjectMapping(underlying=module)


@dataclass(frozen=True, kw_only=True)
class ResourceLoader:
    """Imports resource modules on demand and registers their entries into ``container``."""

    container: ContainerBuilder
    package: str = "fosuser.resources"

    def load(self, name: str) -> None:
        full_name = f"{self.package}.{name}"
        try:
            spec = importlib.util.find_spec(full_name)
        except ImportError as e:
            raise ResourceNotFoundError(name, self.package) from e
        if spec is None:
            raise ResourceNotFoundError(name, self.package)

        module = importlib.import_module(full_name)
        entries = parse_module(module)
        for entry in entries.values():
            entry.register(self.container)
        _logger.debug("Loaded resource %s (%d entries)", full_name, len(entries))

    def __iter__(self) -> Iterator[str]:
        """Yield the names of the resources available in the package."""
        package = importlib.import_module(self.package)
        for mod_info in pkgutil.iter_modules(package.__path__):
            if not mod_info.name.startswith("_"):
                yield mod_info.name

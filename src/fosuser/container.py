"""
A minimal container builder: named definitions, aliases and parameters.

The builder does not instantiate anything. It only records the service graph
so that it can be inspected, merged and handed to a runtime container.

## Parameter placeholders

String values of the form ``"%name%"`` are resolved against the parameter bag
by :meth:`ContainerBuilder.resolve_value`. A placeholder embedded in a longer
string is substituted textually, and ``"%%"`` stands for a literal percent sign.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Final, final

_logger: Final[logging.Logger] = logging.getLogger(__name__)

_PLACEHOLDER: Final = re.compile(r"%%|%([^%\s]+)%")


class ContainerError(Exception):
    """Base class of container builder errors."""


class ServiceNotFoundError(ContainerError, KeyError):
    def __init__(self, service_id: str) -> None:
        super().__init__(service_id)
        self.service_id = service_id

    def __str__(self) -> str:
        return f"You have requested a non-existent service {self.service_id!r}."


class ParameterNotFoundError(ContainerError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"You have requested a non-existent parameter {self.name!r}."


class FrozenParameterError(ContainerError):
    """Raised when a parameter is written after the container was frozen."""


@final
@dataclass(frozen=True, slots=True)
class Reference:
    """A pointer to another service by id."""

    service_id: str

    def __str__(self) -> str:
        return self.service_id


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class Alias:
    """An indirection from one service id to another."""

    target: str
    public: bool = False

    def __str__(self) -> str:
        return self.target


@dataclass(kw_only=True, slots=True, eq=False)
class Definition:
    """
    Blueprint of one service.

    Definitions are mutable while the container is being built: the wiring
    code sets factories, swaps classes and adds tags after a resource has
    registered the definition.
    """

    class_name: str | None = None
    arguments: list[Any] = field(default_factory=list)
    factory: tuple[Reference | str, str] | None = None
    tags: dict[str, list[Mapping[str, Any]]] = field(default_factory=dict)
    public: bool = False

    def get_argument(self, index: int) -> Any:
        try:
            return self.arguments[index]
        except IndexError as e:
            raise IndexError(
                f"The argument {index} doesn't exist in a definition with "
                f"{len(self.arguments)} arguments."
            ) from e

    def set_factory(self, service: Reference | str, method: str) -> None:
        self.factory = (service, method)

    def add_tag(self, name: str, **attributes: Any) -> None:
        self.tags.setdefault(name, []).append(attributes)

    def has_tag(self, name: str) -> bool:
        return name in self.tags


@dataclass(kw_only=True, slots=True, eq=False)
class ContainerBuilder:
    """
    Registry of :class:`Definition`, :class:`Alias` and parameters.

    A definition and an alias never share an id: registering one replaces
    the other, so a service override simply turns a definition into an alias.
    """

    definitions: MutableMapping[str, Definition] = field(default_factory=dict)
    aliases: MutableMapping[str, Alias] = field(default_factory=dict)
    parameters: MutableMapping[str, Any] = field(default_factory=dict)
    frozen: bool = False

    def set_definition(self, service_id: str, definition: Definition) -> Definition:
        self.aliases.pop(service_id, None)
        self.definitions[service_id] = definition
        return definition

    def register(self, service_id: str, class_name: str | None = None) -> Definition:
        return self.set_definition(service_id, Definition(class_name=class_name))

    def has_definition(self, service_id: str) -> bool:
        return service_id in self.definitions

    def get_definition(self, service_id: str) -> Definition:
        try:
            return self.definitions[service_id]
        except KeyError:
            raise ServiceNotFoundError(service_id) from None

    def remove_definition(self, service_id: str) -> None:
        self.definitions.pop(service_id, None)

    def set_alias(self, alias: str, target: Alias | str) -> Alias:
        if isinstance(target, str):
            target = Alias(target=target)
        if alias == target.target:
            raise ContainerError(f"An alias can not reference itself, got a circular reference on {alias!r}.")
        self.definitions.pop(alias, None)
        self.aliases[alias] = target
        return target

    def has_alias(self, alias: str) -> bool:
        return alias in self.aliases

    def get_alias(self, alias: str) -> Alias:
        try:
            return self.aliases[alias]
        except KeyError:
            raise ServiceNotFoundError(alias) from None

    def has(self, service_id: str) -> bool:
        return self.has_definition(service_id) or self.has_alias(service_id)

    def set_parameter(self, name: str, value: Any) -> None:
        if self.frozen:
            raise FrozenParameterError(f"Impossible to set parameter {name!r} on a frozen container.")
        self.parameters[name] = value

    def has_parameter(self, name: str) -> bool:
        return name in self.parameters

    def get_parameter(self, name: str) -> Any:
        try:
            return self.parameters[name]
        except KeyError:
            raise ParameterNotFoundError(name) from None

    def resolve_value(self, value: Any) -> Any:
        """Replace ``%name%`` placeholders in ``value``, recursing into collections."""
        return self._resolve(value, ())

    def _resolve(self, value: Any, resolving: tuple[str, ...]) -> Any:
        if isinstance(value, Mapping):
            return {
                self._resolve(key, resolving): self._resolve(item, resolving)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self._resolve(item, resolving) for item in value]
        if not isinstance(value, str):
            return value

        whole = _PLACEHOLDER.fullmatch(value)
        if whole is not None and whole.group(1) is not None:
            # a lone placeholder keeps the type of the parameter
            return self._resolve_parameter(whole.group(1), resolving)

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name is None:
                return "%"
            resolved = self._resolve_parameter(name, resolving)
            if not isinstance(resolved, (str, int, float)) or isinstance(resolved, bool):
                raise ContainerError(
                    f"A string value must be composed of strings and/or numbers, "
                    f"but found parameter {name!r} of type {type(resolved).__name__} "
                    f"inside string value {value!r}."
                )
            return str(resolved)

        return _PLACEHOLDER.sub(substitute, value)

    def _resolve_parameter(self, name: str, resolving: tuple[str, ...]) -> Any:
        if name in resolving:
            raise ContainerError(
                f"Circular reference detected for parameter {name!r} "
                f"({' > '.join((*resolving, name))})."
            )
        return self._resolve(self.get_parameter(name), (*resolving, name))

    def merge(self, other: ContainerBuilder) -> None:
        """Copy the definitions, aliases and parameters of ``other`` into this builder."""
        for name, value in other.parameters.items():
            self.set_parameter(name, value)
        for service_id, definition in other.definitions.items():
            self.set_definition(service_id, definition)
        for alias, target in other.aliases.items():
            self.set_alias(alias, target)
        _logger.debug(
            "Merged %d definitions, %d aliases and %d parameters",
            len(other.definitions),
            len(other.aliases),
            len(other.parameters),
        )

    def freeze(self) -> None:
        self.frozen = True

    def __iter__(self) -> Iterator[str]:
        yield from self.definitions
        yield from self.aliases

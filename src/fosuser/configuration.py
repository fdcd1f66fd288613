"""
Configuration schema of the ``fos_user`` extension.

The schema is a tree of :class:`Node` objects. Processing a list of raw
configuration documents happens in three passes, all driven by the tree:

1. ``normalize`` checks the shape of every document on its own;
2. ``merge`` folds the documents together, later documents winning;
3. ``finalize`` fills defaults, enforces required keys and runs validation
   rules.

Any violation raises :class:`InvalidConfigurationError` carrying the dotted
path of the offending option. Nothing is returned on failure, so callers never
see a partially processed configuration.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import IO, Any, Final, final

import yaml
from typing_extensions import override

_logger: Final[logging.Logger] = logging.getLogger(__name__)

SUPPORTED_DRIVERS: Final = ("orm", "mongodb", "couchdb", "custom")


class InvalidConfigurationError(ValueError):
    """A configuration document does not match the schema."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class DefaultSentinel(Enum):
    NO_DEFAULT = auto()


def _type_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, (list, tuple)):
        return "list"
    return type(value).__name__


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class Rule:
    """A validation rule run on the finalized value of a node."""

    is_invalid: Callable[[Any], bool]
    message: str
    subpath: str | None = None
    """Dotted path, relative to the node, reported when the rule fails."""

    def check(self, value: Any, path: str) -> None:
        if self.is_invalid(value):
            error_path = path if self.subpath is None else f"{path}.{self.subpath}"
            raise InvalidConfigurationError(
                error_path,
                f'Invalid configuration for path "{error_path}": {self.message.format(value=value)}',
            )


@dataclass(frozen=True, kw_only=True, slots=True)
class Node(ABC):
    name: str
    required: bool = False
    default: Any = DefaultSentinel.NO_DEFAULT
    rules: Sequence[Rule] = ()
    can_be_overwritten: bool = True

    @property
    def has_default(self) -> bool:
        return self.default is not DefaultSentinel.NO_DEFAULT

    def default_value(self, path: str) -> Any:
        return self.default

    @abstractmethod
    def normalize(self, value: Any, path: str) -> Any:
        """Check the shape of a raw value from one document."""

    def merge(self, left: Any, right: Any, path: str) -> Any:
        if not self.can_be_overwritten and left != right:
            raise InvalidConfigurationError(
                path,
                f'Configuration path "{path}" cannot be overwritten. You have to '
                f"define all options for this path, and any of its sub-paths in "
                f"one configuration section.",
            )
        return right

    def finalize(self, value: Any, path: str) -> Any:
        value = self.finalize_value(value, path)
        for rule in self.rules:
            rule.check(value, path)
        return value

    def finalize_value(self, value: Any, path: str) -> Any:
        return value

    def _invalid_type(self, value: Any, path: str, expected: str) -> InvalidConfigurationError:
        return InvalidConfigurationError(
            path,
            f'Invalid type for path "{path}". Expected "{expected}", but got "{_type_name(value)}".',
        )


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class ScalarNode(Node):
    cannot_be_empty: bool = False

    @override
    def normalize(self, value: Any, path: str) -> Any:
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise self._invalid_type(value, path, "scalar")
        return value

    @override
    def finalize_value(self, value: Any, path: str) -> Any:
        if self.cannot_be_empty and value in ("", None):
            raise InvalidConfigurationError(
                path, f'The path "{path}" cannot contain an empty value, but got {value!r}.'
            )
        return value


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class StringNode(Node):
    """A non-empty string, such as a service id."""

    @override
    def normalize(self, value: Any, path: str) -> Any:
        if not isinstance(value, str):
            raise self._invalid_type(value, path, "string")
        return value

    @override
    def finalize_value(self, value: Any, path: str) -> Any:
        if not value:
            raise InvalidConfigurationError(
                path, f'The path "{path}" cannot contain an empty value, but got {value!r}.'
            )
        return value


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class BooleanNode(Node):
    @override
    def normalize(self, value: Any, path: str) -> Any:
        if not isinstance(value, bool):
            raise self._invalid_type(value, path, "bool")
        return value


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class IntegerNode(Node):
    @override
    def normalize(self, value: Any, path: str) -> Any:
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._invalid_type(value, path, "int")
        return value


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class EnumNode(Node):
    values: Sequence[str]

    @override
    def normalize(self, value: Any, path: str) -> Any:
        if value is not None and not isinstance(value, str):
            raise self._invalid_type(value, path, "string")
        return value

    @override
    def finalize_value(self, value: Any, path: str) -> Any:
        if value not in self.values:
            permissible = ", ".join(f'"{allowed}"' for allowed in self.values)
            raise InvalidConfigurationError(
                path,
                f'The value {value!r} is not allowed for path "{path}". '
                f"Permissible values: {permissible}",
            )
        return value


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class ScalarListNode(Node):
    """A list of scalars; a later document replaces the whole list."""

    @override
    def normalize(self, value: Any, path: str) -> Any:
        if not isinstance(value, (list, tuple)):
            raise self._invalid_type(value, path, "list")
        for index, item in enumerate(value):
            if not isinstance(item, (str, int, float, bool)):
                raise self._invalid_type(item, f"{path}.{index}", "scalar")
        return list(value)

    @override
    def default_value(self, path: str) -> Any:
        return list(self.default)


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class ArrayNode(Node):
    """
    A mapping of named children.

    ``add_defaults`` makes an absent node behave as if an empty mapping had been
    given, so that the defaults of its children apply. ``can_be_disabled``
    lets ``false`` switch the whole section off; the finalized value is then
    ``False`` instead of a mapping, while ``true`` or ``null`` select the
    defaults.

    Disabling is not a layer over the earlier documents: once a section has
    been merged with ``false``, whatever came before is gone, and a later
    ``true`` or mapping starts again from the defaults.
    """

    children: Sequence[Node] = ()
    add_defaults: bool = False
    can_be_disabled: bool = False

    @property
    def _children_by_name(self) -> Mapping[str, Node]:
        return {child.name: child for child in self.children}

    @property
    @override
    def has_default(self) -> bool:
        return self.add_defaults

    @override
    def default_value(self, path: str) -> Any:
        return self.finalize({}, path)

    @override
    def normalize(self, value: Any, path: str) -> Any:
        if value is None:
            return {}
        if self.can_be_disabled and isinstance(value, bool):
            return {} if value else False
        if not isinstance(value, Mapping):
            raise self._invalid_type(value, path, "mapping")

        children = self._children_by_name
        normalized: dict[str, Any] = {}
        for key, item in value.items():
            child = children.get(key)
            if child is None:
                raise InvalidConfigurationError(
                    f"{path}.{key}",
                    f'Unrecognized option "{key}" under "{path}". '
                    f'Available options are {", ".join(f"{name!r}" for name in sorted(children))}.',
                )
            normalized[key] = child.normalize(item, f"{path}.{key}")
        return normalized

    @override
    def merge(self, left: Any, right: Any, path: str) -> Any:
        if right is False or left is False:
            return right
        merged = dict(left)
        children = self._children_by_name
        for key, item in right.items():
            if key in merged:
                merged[key] = children[key].merge(merged[key], item, f"{path}.{key}")
            else:
                merged[key] = item
        return merged

    @override
    def finalize_value(self, value: Any, path: str) -> Any:
        if value is False:
            return False
        finalized: dict[str, Any] = {}
        for child in self.children:
            child_path = f"{path}.{child.name}"
            if child.name in value:
                finalized[child.name] = child.finalize(value[child.name], child_path)
            elif child.required:
                raise InvalidConfigurationError(
                    child_path,
                    f'The child config "{child.name}" under "{path}" must be configured.',
                )
            elif child.has_default:
                finalized[child.name] = child.default_value(child_path)
        return finalized


def _form_section(type_: str, name: str, validation_groups: Sequence[str]) -> ArrayNode:
    return ArrayNode(
        name="form",
        add_defaults=True,
        children=(
            ScalarNode(name="type", default=type_),
            ScalarNode(name="name", default=name),
            ScalarListNode(name="validation_groups", default=tuple(validation_groups)),
        ),
    )


def _from_email_section(required: bool) -> ArrayNode:
    return ArrayNode(
        name="from_email",
        required=required,
        children=(
            ScalarNode(name="address", required=True, cannot_be_empty=True),
            ScalarNode(name="sender_name", required=True, cannot_be_empty=True),
        ),
    )


def _not_self_alias(alias: str, key: str) -> Rule:
    return Rule(
        is_invalid=lambda section: bool(section) and section[key] == alias,
        message=f'The service "{alias}" can not be overridden with itself.',
        subpath=key,
    )


def _feature_section(name: str, *children: Node) -> ArrayNode:
    return ArrayNode(name=name, add_defaults=True, can_be_disabled=True, children=children)


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class Configuration:
    """The ``fos_user`` schema."""

    root_name: str = "fos_user"

    def get_config_tree(self) -> ArrayNode:
        return ArrayNode(
            name=self.root_name,
            children=(
                EnumNode(
                    name="db_driver",
                    required=True,
                    values=SUPPORTED_DRIVERS,
                    can_be_overwritten=False,
                ),
                ScalarNode(name="user_class", required=True, cannot_be_empty=True),
                ScalarNode(name="firewall_name", required=True, cannot_be_empty=True),
                ScalarNode(name="model_manager_name", default=None),
                BooleanNode(name="use_authentication_listener", default=True),
                BooleanNode(name="use_listener", default=True),
                BooleanNode(name="use_flash_notifications", default=True),
                BooleanNode(name="use_username_form_type", default=True),
                _from_email_section(required=True),
                _feature_section(
                    "profile",
                    _form_section(
                        "fos_user.form.type.ProfileFormType",
                        "fos_user_profile_form",
                        ("Profile", "Default"),
                    ),
                ),
                _feature_section(
                    "change_password",
                    _form_section(
                        "fos_user.form.type.ChangePasswordFormType",
                        "fos_user_change_password_form",
                        ("ChangePassword", "Default"),
                    ),
                ),
                _feature_section(
                    "registration",
                    ArrayNode(
                        name="confirmation",
                        add_defaults=True,
                        children=(
                            BooleanNode(name="enabled", default=False),
                            ScalarNode(
                                name="template",
                                default="@FOSUser/Registration/email.txt.twig",
                            ),
                            _from_email_section(required=False),
                        ),
                    ),
                    _form_section(
                        "fos_user.form.type.RegistrationFormType",
                        "fos_user_registration_form",
                        ("Registration", "Default"),
                    ),
                ),
                _feature_section(
                    "resetting",
                    IntegerNode(name="retry_ttl", default=7200),
                    IntegerNode(name="token_ttl", default=86400),
                    ArrayNode(
                        name="email",
                        add_defaults=True,
                        children=(
                            ScalarNode(
                                name="template",
                                default="@FOSUser/Resetting/email.txt.twig",
                            ),
                            _from_email_section(required=False),
                        ),
                    ),
                    _form_section(
                        "fos_user.form.type.ResettingFormType",
                        "fos_user_resetting_form",
                        ("ResetPassword", "Default"),
                    ),
                ),
                ArrayNode(
                    name="group",
                    can_be_disabled=True,
                    children=(
                        ScalarNode(name="group_class", required=True, cannot_be_empty=True),
                        StringNode(
                            name="group_manager", default="fos_user.group_manager.default"
                        ),
                        _form_section(
                            "fos_user.form.type.GroupFormType",
                            "fos_user_group_form",
                            ("Registration", "Default"),
                        ),
                    ),
                    rules=(_not_self_alias("fos_user.group_manager", "group_manager"),),
                ),
                ArrayNode(
                    name="service",
                    add_defaults=True,
                    children=(
                        StringNode(name="mailer", default="fos_user.mailer.default"),
                        StringNode(
                            name="email_canonicalizer",
                            default="fos_user.util.canonicalizer.default",
                        ),
                        StringNode(
                            name="token_generator",
                            default="fos_user.util.token_generator.default",
                        ),
                        StringNode(
                            name="username_canonicalizer",
                            default="fos_user.util.canonicalizer.default",
                        ),
                        StringNode(
                            name="user_manager", default="fos_user.user_manager.default"
                        ),
                    ),
                    rules=(
                        _not_self_alias("fos_user.mailer", "mailer"),
                        _not_self_alias("fos_user.util.email_canonicalizer", "email_canonicalizer"),
                        _not_self_alias("fos_user.util.token_generator", "token_generator"),
                        _not_self_alias(
                            "fos_user.util.username_canonicalizer", "username_canonicalizer"
                        ),
                        _not_self_alias("fos_user.user_manager", "user_manager"),
                    ),
                ),
            ),
            rules=(
                Rule(
                    is_invalid=lambda config: config["db_driver"] == "custom"
                    and config["service"]["user_manager"] == "fos_user.user_manager.default",
                    message='You need to specify your own user manager service when using the "custom" driver.',
                    subpath="service.user_manager",
                ),
                Rule(
                    is_invalid=lambda config: config["db_driver"] == "custom"
                    and bool(config.get("group"))
                    and config["group"]["group_manager"] == "fos_user.group_manager.default",
                    message='You need to specify your own group manager service when using the "custom" driver.',
                    subpath="group.group_manager",
                ),
            ),
        )


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class Processor:
    """Runs the normalize, merge and finalize passes over configuration documents."""

    def process_configuration(
        self, configuration: Configuration, configs: Iterable[Mapping[str, Any]]
    ) -> dict[str, Any]:
        tree = configuration.get_config_tree()
        path = tree.name
        merged: Any = {}
        for config in configs:
            merged = tree.merge(merged, tree.normalize(config, path), path)
        processed = tree.finalize(merged, path)
        _logger.debug("Processed %s configuration: %r", path, processed)
        return processed


def load_yaml(source: str | IO[str]) -> dict[str, Any]:
    """
    Parse a YAML configuration document.

    :param source: YAML text or a text stream.
    :return: The top-level mapping; an empty document yields an empty mapping.
    :raises InvalidConfigurationError: If the document is not a mapping.
    """
    loaded = yaml.safe_load(source)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise InvalidConfigurationError(
            "", f"A configuration document must be a mapping, got {_type_name(loaded)!r}."
        )
    return loaded

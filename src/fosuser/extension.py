"""
The ``fos_user`` container extension.

:meth:`UserExtension.load` processes the configuration documents and wires
the resulting service graph into a container builder. All wiring happens on a
staging builder which is merged into the target only once every resource has
loaded, so a failing load leaves the target untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final, final

from fosuser.configuration import Configuration, Processor
from fosuser.container import Alias, ContainerBuilder, Reference
from fosuser.loader import ResourceLoader

_logger: Final[logging.Logger] = logging.getLogger(__name__)


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class DoctrineDriver:
    registry: str
    """Service id of the persistence registry."""

    tag: str
    """Tag subscribing the user listener to the driver's events."""

    listener_class: str | None = None


DOCTRINE_DRIVERS: Final[Mapping[str, DoctrineDriver]] = {
    "orm": DoctrineDriver(registry="doctrine", tag="doctrine.event_subscriber"),
    "mongodb": DoctrineDriver(
        registry="doctrine_mongodb", tag="doctrine_mongodb.odm.event_subscriber"
    ),
    "couchdb": DoctrineDriver(
        registry="doctrine_couchdb",
        tag="doctrine_couchdb.event_subscriber",
        listener_class="fos_user.doctrine.couchdb.UserListener",
    ),
}

ParameterMap = Mapping[str, str]
"""Maps configuration keys to parameter names."""


def remap_parameters(
    config: Mapping[str, Any], container: ContainerBuilder, mapping: ParameterMap
) -> None:
    for key, parameter in mapping.items():
        if key in config:
            container.set_parameter(parameter, config[key])


def remap_parameters_namespaces(
    config: Mapping[str, Any],
    container: ContainerBuilder,
    namespaces: Mapping[str, ParameterMap | str],
) -> None:
    """
    Copy configuration values into parameters, section by section.

    An empty namespace refers to ``config`` itself. A string pattern maps
    every key of the section through ``pattern % key``; a mapping only copies
    the keys it names.
    """
    for namespace, mapping in namespaces.items():
        if namespace:
            if namespace not in config:
                continue
            namespace_config = config[namespace]
        else:
            namespace_config = config

        if isinstance(mapping, str):
            for key, value in namespace_config.items():
                container.set_parameter(mapping % key, value)
        else:
            remap_parameters(namespace_config, container, mapping)


def _sender(from_email: Mapping[str, str]) -> dict[str, str]:
    return {from_email["address"]: from_email["sender_name"]}


@dataclass(kw_only=True, slots=True, eq=False)
class _Wiring:
    """State of a single load."""

    config: Mapping[str, Any]
    container: ContainerBuilder
    loader: ResourceLoader
    mailer_needed: bool = False
    session_needed: bool = False
    loaded: list[str] = field(default_factory=list)

    def load(self, name: str) -> None:
        self.loader.load(name)
        self.loaded.append(name)

    def wire(self) -> None:
        config = self.config
        container = self.container
        db_driver = config["db_driver"]
        doctrine_driver = DOCTRINE_DRIVERS.get(db_driver)

        if doctrine_driver is not None:
            _logger.debug("Using %s registry %r", db_driver, doctrine_driver.registry)
            self.load("doctrine")
            container.set_alias(
                "fos_user.doctrine_registry", Alias(target=doctrine_driver.registry)
            )
            container.set_parameter(f"fos_user.backend_type_{db_driver}", True)
            container.get_definition("fos_user.object_manager").set_factory(
                Reference("fos_user.doctrine_registry"), "getManager"
            )
        else:
            _logger.debug("Using custom user manager %r", config["service"]["user_manager"])

        for name in ("validator", "security", "util", "mailer", "listeners", "commands"):
            self.load(name)

        if not config["use_authentication_listener"]:
            container.remove_definition("fos_user.listener.authentication")

        if config["use_flash_notifications"]:
            self.session_needed = True
            self.load("flash_notifications")

        service = config["service"]
        container.set_alias("fos_user.util.email_canonicalizer", service["email_canonicalizer"])
        container.set_alias(
            "fos_user.util.username_canonicalizer", service["username_canonicalizer"]
        )
        container.set_alias("fos_user.util.token_generator", service["token_generator"])
        container.set_alias(
            "fos_user.user_manager", Alias(target=service["user_manager"], public=True)
        )

        if config["use_listener"] and doctrine_driver is not None:
            listener = container.get_definition("fos_user.user_listener")
            listener.add_tag(doctrine_driver.tag)
            if doctrine_driver.listener_class is not None:
                listener.class_name = doctrine_driver.listener_class

        if config["use_username_form_type"]:
            self.load("username_form_type")

        remap_parameters_namespaces(
            config,
            container,
            {
                "": {
                    "db_driver": "fos_user.storage",
                    "firewall_name": "fos_user.firewall_name",
                    "model_manager_name": "fos_user.model_manager_name",
                    "user_class": "fos_user.model.user.class",
                },
            },
        )

        if config["profile"]:
            self.wire_profile(config["profile"])
        if config["registration"]:
            self.wire_registration(config["registration"], config["from_email"])
        if config["change_password"]:
            self.wire_change_password(config["change_password"])
        if config["resetting"]:
            self.wire_resetting(config["resetting"], config["from_email"])
        if config.get("group"):
            self.wire_group(config["group"], db_driver)

        if self.mailer_needed:
            container.set_alias("fos_user.mailer", service["mailer"])
        if self.session_needed:
            container.set_alias("fos_user.session", Alias(target="session"))

    def wire_profile(self, config: Mapping[str, Any]) -> None:
        self.load("profile")
        remap_parameters_namespaces(
            config, self.container, {"form": "fos_user.profile.form.%s"}
        )

    def wire_registration(
        self, config: Mapping[str, Any], from_email: Mapping[str, str]
    ) -> None:
        self.load("registration")
        self.session_needed = True

        confirmation = dict(config["confirmation"])
        if confirmation["enabled"]:
            self.mailer_needed = True
            self.load("email_confirmation")

        # a section level sender replaces the global one
        from_email = confirmation.pop("from_email", from_email)
        self.container.set_parameter(
            "fos_user.registration.confirmation.from_email", _sender(from_email)
        )

        remap_parameters_namespaces(
            {**config, "confirmation": confirmation},
            self.container,
            {
                "confirmation": "fos_user.registration.confirmation.%s",
                "form": "fos_user.registration.form.%s",
            },
        )

    def wire_change_password(self, config: Mapping[str, Any]) -> None:
        self.load("change_password")
        remap_parameters_namespaces(
            config, self.container, {"form": "fos_user.change_password.form.%s"}
        )

    def wire_resetting(
        self, config: Mapping[str, Any], from_email: Mapping[str, str]
    ) -> None:
        self.mailer_needed = True
        self.load("resetting")

        email = dict(config["email"])
        from_email = email.pop("from_email", from_email)
        self.container.set_parameter("fos_user.resetting.email.from_email", _sender(from_email))

        remap_parameters_namespaces(
            {**config, "email": email},
            self.container,
            {
                "": {
                    "retry_ttl": "fos_user.resetting.retry_ttl",
                    "token_ttl": "fos_user.resetting.token_ttl",
                },
                "email": "fos_user.resetting.email.%s",
                "form": "fos_user.resetting.form.%s",
            },
        )

    def wire_group(self, config: Mapping[str, Any], db_driver: str) -> None:
        self.load("group")
        if db_driver != "custom":
            self.load("doctrine_group")

        self.container.set_alias(
            "fos_user.group_manager", Alias(target=config["group_manager"], public=True)
        )
        remap_parameters_namespaces(
            config,
            self.container,
            {
                "": {"group_class": "fos_user.model.group.class"},
                "form": "fos_user.group.form.%s",
            },
        )


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class UserExtension:
    """Wires the user-management services from ``fos_user`` configuration documents."""

    alias: str = "fos_user"
    resource_package: str = "fosuser.resources"

    def get_configuration(self) -> Configuration:
        return Configuration(root_name=self.alias)

    def load(
        self, configs: Iterable[Mapping[str, Any]], container: ContainerBuilder
    ) -> None:
        """
        Process ``configs`` and register the resulting services in ``container``.

        :param configs: Configuration documents, later ones overriding earlier ones.
        :param container: The builder receiving definitions, aliases and parameters.
        :raises InvalidConfigurationError: If the merged configuration is invalid.
            The container is not modified in that case.
        """
        config = Processor().process_configuration(self.get_configuration(), configs)

        staging = ContainerBuilder()
        wiring = _Wiring(
            config=config,
            container=staging,
            loader=ResourceLoader(container=staging, package=self.resource_package),
        )
        wiring.wire()
        container.merge(staging)
        _logger.debug("Loaded %s resources: %s", self.alias, ", ".join(wiring.loaded))

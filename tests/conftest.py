"""Shared configuration documents and helpers for the extension tests."""

from collections.abc import Callable, Mapping
from typing import Any

import pytest

from fosuser import ContainerBuilder, UserExtension, load_yaml

EMPTY_CONFIG = """\
db_driver: mongodb
firewall_name: fos_user
user_class: acme.my_bundle.document.User
from_email:
    address: admin@acme.org
    sender_name: Acme Corp
service:
    mailer: fos_user.mailer.noop
"""

FULL_CONFIG = """\
db_driver: orm
firewall_name: fos_user
use_listener: true
use_flash_notifications: false
user_class: acme.my_bundle.entity.User
model_manager_name: custom
from_email:
    address: admin@acme.org
    sender_name: Acme Corp
profile:
    form:
        type: acme_my_profile
        name: acme_profile_form
        validation_groups: [acme_profile]
change_password:
    form:
        type: acme_my_change_password
        name: acme_change_password_form
        validation_groups: [acme_change_password]
registration:
    confirmation:
        from_email:
            address: register@acme.org
            sender_name: Acme Corp
        enabled: true
        template: acme_my/registration/mail.txt.twig
    form:
        type: acme_my_registration
        name: acme_registration_form
        validation_groups: [acme_registration]
resetting:
    retry_ttl: 7200
    token_ttl: 86400
    email:
        from_email:
            address: reset@acme.org
            sender_name: Acme Corp
        template: acme_my/resetting/mail.txt.twig
    form:
        type: acme_my_resetting
        name: acme_resetting_form
        validation_groups: [acme_resetting]
service:
    mailer: acme_my.mailer
    email_canonicalizer: acme_my.email_canonicalizer
    username_canonicalizer: acme_my.username_canonicalizer
    user_manager: acme_my.user_manager
"""


@pytest.fixture
def empty_config() -> dict[str, Any]:
    return load_yaml(EMPTY_CONFIG)


@pytest.fixture
def full_config() -> dict[str, Any]:
    return load_yaml(FULL_CONFIG)


@pytest.fixture
def load() -> Callable[[Mapping[str, Any]], ContainerBuilder]:
    """Load a single configuration document into a fresh container."""

    def load_config(config: Mapping[str, Any]) -> ContainerBuilder:
        container = ContainerBuilder()
        UserExtension().load([config], container)
        return container

    return load_config

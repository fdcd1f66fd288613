"""
fosuser: container wiring for the ``fos_user`` user-management module.

The extension turns configuration documents into service definitions,
aliases and parameters:

```python
from fosuser import ContainerBuilder, UserExtension, load_yaml

container = ContainerBuilder()
UserExtension().load(
    [
        load_yaml(
            '''
            db_driver: orm
            firewall_name: main
            user_class: acme.entity.User
            from_email: {address: admin@acme.org, sender_name: Acme Corp}
            '''
        )
    ],
    container,
)
container.get_alias("fos_user.doctrine_registry").target  # "doctrine"
container.has_definition("fos_user.registration.form.factory")  # True
```
"""

from fosuser.configuration import (
    Configuration,
    InvalidConfigurationError,
    Processor,
    load_yaml,
)
from fosuser.container import (
    Alias,
    ContainerBuilder,
    ContainerError,
    Definition,
    FrozenParameterError,
    ParameterNotFoundError,
    Reference,
    ServiceNotFoundError,
)
from fosuser.extension import DOCTRINE_DRIVERS, UserExtension
from fosuser.loader import ResourceLoader, ResourceNotFoundError

__all__ = [
    "Alias",
    "Configuration",
    "ContainerBuilder",
    "ContainerError",
    "DOCTRINE_DRIVERS",
    "Definition",
    "FrozenParameterError",
    "InvalidConfigurationError",
    "ParameterNotFoundError",
    "Processor",
    "Reference",
    "ResourceLoader",
    "ResourceNotFoundError",
    "ServiceNotFoundError",
    "UserExtension",
    "load_yaml",
]

"""Persistence services shared by the doctrine backed drivers."""

from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.user_manager.default")
def user_manager() -> Definition:
    return Definition(
        class_name="fos_user.doctrine.UserManager",
        arguments=[
            Reference("fos_user.util.password_updater"),
            Reference("fos_user.util.canonical_fields_updater"),
            Reference("fos_user.object_manager"),
            "%fos_user.model.user.class%",
        ],
    )


@service("fos_user.object_manager")
def object_manager() -> Definition:
    # the factory depends on the driver and is set by the extension
    return Definition(
        class_name="doctrine.persistence.ObjectManager",
        arguments=["%fos_user.model_manager_name%"],
    )


@service("fos_user.user_listener")
def user_listener() -> Definition:
    return Definition(
        class_name="fos_user.doctrine.UserListener",
        arguments=[
            Reference("fos_user.util.password_updater"),
            Reference("fos_user.util.canonical_fields_updater"),
        ],
    )

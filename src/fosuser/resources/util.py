from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.util.canonicalizer.default")
def canonicalizer() -> Definition:
    return Definition(class_name="fos_user.util.Canonicalizer")


@service("fos_user.util.token_generator.default")
def token_generator() -> Definition:
    return Definition(class_name="fos_user.util.TokenGenerator")


@service("fos_user.util.user_manipulator")
def user_manipulator() -> Definition:
    return Definition(
        class_name="fos_user.util.UserManipulator",
        arguments=[
            Reference("fos_user.user_manager"),
            Reference("event_dispatcher"),
            Reference("request_stack"),
        ],
    )


@service("fos_user.util.password_updater")
def password_updater() -> Definition:
    return Definition(
        class_name="fos_user.util.PasswordUpdater",
        arguments=[Reference("security.encoder_factory")],
    )


@service("fos_user.util.canonical_fields_updater")
def canonical_fields_updater() -> Definition:
    return Definition(
        class_name="fos_user.util.CanonicalFieldsUpdater",
        arguments=[
            Reference("fos_user.util.email_canonicalizer"),
            Reference("fos_user.util.username_canonicalizer"),
        ],
    )

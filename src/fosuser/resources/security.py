"""Login, user providers and last-login tracking."""

from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.security.interactive_login_listener")
def interactive_login_listener() -> Definition:
    definition = Definition(
        class_name="fos_user.event_listener.LastLoginListener",
        arguments=[Reference("fos_user.user_manager")],
    )
    definition.add_tag("kernel.event_subscriber")
    return definition


@service("fos_user.security.login_manager")
def login_manager() -> Definition:
    return Definition(
        class_name="fos_user.security.LoginManager",
        arguments=[
            Reference("security.token_storage"),
            Reference("security.user_checker"),
            Reference("security.authentication.session_strategy"),
            Reference("request_stack"),
            None,
        ],
    )


@service("fos_user.user_provider.username")
def username_provider() -> Definition:
    return Definition(
        class_name="fos_user.security.UserProvider",
        arguments=[Reference("fos_user.user_manager")],
    )


@service("fos_user.user_provider.username_email")
def username_email_provider() -> Definition:
    return Definition(
        class_name="fos_user.security.EmailUserProvider",
        arguments=[Reference("fos_user.user_manager")],
    )

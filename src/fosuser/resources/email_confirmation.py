from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.listener.email_confirmation")
def email_confirmation_listener() -> Definition:
    definition = Definition(
        class_name="fos_user.event_listener.EmailConfirmationListener",
        arguments=[
            Reference("fos_user.mailer"),
            Reference("fos_user.util.token_generator"),
            Reference("router"),
            Reference("fos_user.session"),
        ],
    )
    definition.add_tag("kernel.event_subscriber")
    return definition

from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.listener.authentication")
def authentication() -> Definition:
    definition = Definition(
        class_name="fos_user.event_listener.AuthenticationListener",
        arguments=[Reference("fos_user.security.login_manager"), "%fos_user.firewall_name%"],
    )
    definition.add_tag("kernel.event_subscriber")
    return definition

from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.listener.flash")
def flash_listener() -> Definition:
    definition = Definition(
        class_name="fos_user.event_listener.FlashListener",
        arguments=[Reference("fos_user.session"), Reference("translator")],
    )
    definition.add_tag("kernel.event_subscriber")
    return definition

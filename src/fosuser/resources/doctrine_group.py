from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.group_manager.default")
def group_manager() -> Definition:
    return Definition(
        class_name="fos_user.doctrine.GroupManager",
        arguments=[Reference("fos_user.object_manager"), "%fos_user.model.group.class%"],
    )

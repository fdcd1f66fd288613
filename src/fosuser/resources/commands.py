"""Console commands operating on users through the user manipulator."""

from fosuser.container import Definition, Reference
from fosuser.loader import service


def _command(class_name: str, command: str) -> Definition:
    definition = Definition(
        class_name=f"fos_user.command.{class_name}",
        arguments=[Reference("fos_user.util.user_manipulator")],
    )
    definition.add_tag("console.command", command=command)
    return definition


@service("fos_user.command.activate_user")
def activate_user() -> Definition:
    return _command("ActivateUserCommand", "fos:user:activate")


@service("fos_user.command.change_password")
def change_password() -> Definition:
    return _command("ChangePasswordCommand", "fos:user:change-password")


@service("fos_user.command.create_user")
def create_user() -> Definition:
    return _command("CreateUserCommand", "fos:user:create")


@service("fos_user.command.deactivate_user")
def deactivate_user() -> Definition:
    return _command("DeactivateUserCommand", "fos:user:deactivate")


@service("fos_user.command.demote_user")
def demote_user() -> Definition:
    return _command("DemoteUserCommand", "fos:user:demote")


@service("fos_user.command.promote_user")
def promote_user() -> Definition:
    return _command("PromoteUserCommand", "fos:user:promote")

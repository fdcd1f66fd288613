from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.validator.initializer")
def initializer() -> Definition:
    definition = Definition(
        class_name="fos_user.validator.Initializer",
        arguments=[Reference("fos_user.util.canonical_fields_updater")],
    )
    definition.add_tag("validator.initializer")
    return definition

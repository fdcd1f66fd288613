from fosuser.container import Definition, Reference
from fosuser.loader import service


@service("fos_user.user_to_username_transformer")
def user_to_username_transformer() -> Definition:
    return Definition(
        class_name="fos_user.form.data_transformer.UserToUsernameTransformer",
        arguments=[Reference("fos_user.user_manager")],
    )


@service("fos_user.username_form_type")
def username_form_type() -> Definition:
    definition = Definition(
        class_name="fos_user.form.type.UsernameFormType",
        arguments=[Reference("fos_user.user_to_username_transformer")],
    )
    definition.add_tag("form.type", alias="fos_user_username")
    return definition

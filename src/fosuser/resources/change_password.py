from fosuser.container import Definition, Reference
from fosuser.loader import service
from fosuser.resources import form_factory, form_type


@service("fos_user.change_password.form.factory")
def change_password_form_factory() -> Definition:
    return form_factory("change_password")


@service("fos_user.change_password.form.type")
def change_password_form_type() -> Definition:
    return form_type(
        "fos_user.form.type.ChangePasswordFormType",
        "fos_user.model.user.class",
        "fos_user_change_password",
    )


@service("fos_user.change_password.controller")
def change_password_controller() -> Definition:
    return Definition(
        class_name="fos_user.controller.ChangePasswordController",
        arguments=[
            Reference("event_dispatcher"),
            Reference("fos_user.change_password.form.factory"),
            Reference("fos_user.user_manager"),
        ],
        public=True,
    )

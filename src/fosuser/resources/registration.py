from fosuser.container import Definition, Reference
from fosuser.loader import service
from fosuser.resources import form_factory, form_type


@service("fos_user.registration.form.factory")
def registration_form_factory() -> Definition:
    return form_factory("registration")


@service("fos_user.registration.form.type")
def registration_form_type() -> Definition:
    return form_type(
        "fos_user.form.type.RegistrationFormType",
        "fos_user.model.user.class",
        "fos_user_registration",
    )


@service("fos_user.registration.controller")
def registration_controller() -> Definition:
    return Definition(
        class_name="fos_user.controller.RegistrationController",
        arguments=[
            Reference("event_dispatcher"),
            Reference("fos_user.registration.form.factory"),
            Reference("fos_user.user_manager"),
            Reference("security.token_storage"),
        ],
        public=True,
    )

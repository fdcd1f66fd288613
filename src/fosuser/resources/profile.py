from fosuser.container import Definition, Reference
from fosuser.loader import service
from fosuser.resources import form_factory, form_type


@service("fos_user.profile.form.factory")
def profile_form_factory() -> Definition:
    return form_factory("profile")


@service("fos_user.profile.form.type")
def profile_form_type() -> Definition:
    return form_type(
        "fos_user.form.type.ProfileFormType", "fos_user.model.user.class", "fos_user_profile"
    )


@service("fos_user.profile.controller")
def profile_controller() -> Definition:
    return Definition(
        class_name="fos_user.controller.ProfileController",
        arguments=[
            Reference("event_dispatcher"),
            Reference("fos_user.profile.form.factory"),
            Reference("fos_user.user_manager"),
        ],
        public=True,
    )

from fosuser.container import Definition, Reference
from fosuser.loader import service
from fosuser.resources import form_factory, form_type


@service("fos_user.group.form.factory")
def group_form_factory() -> Definition:
    return form_factory("group")


@service("fos_user.group.form.type")
def group_form_type() -> Definition:
    return form_type(
        "fos_user.form.type.GroupFormType", "fos_user.model.group.class", "fos_user_group"
    )


@service("fos_user.group.controller")
def group_controller() -> Definition:
    return Definition(
        class_name="fos_user.controller.GroupController",
        arguments=[
            Reference("event_dispatcher"),
            Reference("fos_user.group.form.factory"),
            Reference("fos_user.group_manager"),
        ],
        public=True,
    )

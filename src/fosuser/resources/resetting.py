from fosuser.container import Definition, Reference
from fosuser.loader import service
from fosuser.resources import form_factory, form_type


@service("fos_user.resetting.form.factory")
def resetting_form_factory() -> Definition:
    return form_factory("resetting")


@service("fos_user.resetting.form.type")
def resetting_form_type() -> Definition:
    return form_type(
        "fos_user.form.type.ResettingFormType",
        "fos_user.model.user.class",
        "fos_user_resetting",
    )


@service("fos_user.listener.resetting")
def resetting_listener() -> Definition:
    definition = Definition(
        class_name="fos_user.event_listener.ResettingListener",
        arguments=[Reference("router"), "%fos_user.resetting.token_ttl%"],
    )
    definition.add_tag("kernel.event_subscriber")
    return definition


@service("fos_user.resetting.controller")
def resetting_controller() -> Definition:
    return Definition(
        class_name="fos_user.controller.ResettingController",
        arguments=[
            Reference("event_dispatcher"),
            Reference("fos_user.resetting.form.factory"),
            Reference("fos_user.user_manager"),
            Reference("fos_user.util.token_generator"),
            Reference("fos_user.mailer"),
            "%fos_user.resetting.retry_ttl%",
        ],
        public=True,
    )

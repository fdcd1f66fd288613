"""
Service definitions of the ``fos_user`` extension, one module per resource.

The extension decides which resources to load; each module only declares
what it registers.
"""

from fosuser.container import Definition, Reference


def form_factory(section: str) -> Definition:
    """The form factory of a feature section, configured from its ``form`` parameters."""
    return Definition(
        class_name="fos_user.form.factory.FormFactory",
        arguments=[
            Reference("form.factory"),
            f"%fos_user.{section}.form.name%",
            f"%fos_user.{section}.form.type%",
            f"%fos_user.{section}.form.validation_groups%",
        ],
    )


def form_type(class_name: str, model_class_parameter: str, alias: str) -> Definition:
    definition = Definition(class_name=class_name, arguments=[f"%{model_class_parameter}%"])
    definition.add_tag("form.type", alias=alias)
    return definition

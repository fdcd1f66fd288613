"""
Mailers and the email parameters they read.

The ``from_email`` parameters registered here are fallbacks: the extension
replaces them when registration or resetting is enabled, so they only reach a
mailer when the corresponding feature is switched off.
"""

from fosuser.container import Definition, Reference
from fosuser.loader import parameter, service


@parameter("fos_user.registration.confirmation.template")
def confirmation_template() -> str:
    return "@FOSUser/Registration/email.txt.twig"


@parameter("fos_user.resetting.email.template")
def resetting_template() -> str:
    return "@FOSUser/Resetting/email.txt.twig"


@parameter("fos_user.registration.confirmation.from_email")
def confirmation_from_email() -> dict[str, str]:
    return {"no-registration@acme.com": "Acme Ltd"}


@parameter("fos_user.resetting.email.from_email")
def resetting_from_email() -> dict[str, str]:
    return {"no-resetting@acme.com": "Acme Ltd"}


@service("fos_user.mailer.default")
def default_mailer() -> Definition:
    return Definition(
        class_name="fos_user.mailer.Mailer",
        arguments=[
            Reference("mailer"),
            Reference("router"),
            Reference("templating"),
            {
                "confirmation.template": "%fos_user.registration.confirmation.template%",
                "resetting.template": "%fos_user.resetting.email.template%",
                "from_email": {
                    "confirmation": "%fos_user.registration.confirmation.from_email%",
                    "resetting": "%fos_user.resetting.email.from_email%",
                },
            },
        ],
    )


@service("fos_user.mailer.twig_swift")
def twig_swift_mailer() -> Definition:
    return Definition(
        class_name="fos_user.mailer.TwigSwiftMailer",
        arguments=[
            Reference("mailer"),
            Reference("router"),
            Reference("twig"),
            {
                "template": {
                    "confirmation": "%fos_user.registration.confirmation.template%",
                    "resetting": "%fos_user.resetting.email.template%",
                },
                "from_email": {
                    "confirmation": "%fos_user.registration.confirmation.from_email%",
                    "resetting": "%fos_user.resetting.email.from_email%",
                },
            },
        ],
    )


@service("fos_user.mailer.noop")
def noop_mailer() -> Definition:
    return Definition(class_name="fos_user.mailer.NoopMailer")

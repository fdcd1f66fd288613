from fosuser.container import Definition
from fosuser.loader import service


@service("acme.private")
def private() -> Definition:
    return Definition(class_name="acme.Private")
